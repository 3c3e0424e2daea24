"""Schema contract for the admin users table."""

from __future__ import annotations

from typing import Any

from tableadmin.dialects import resolve_table
from tableadmin.errors import ConfigurationError

REQUIRED_ADMIN_COLUMNS = ("id", "email", "password_hash", "created_at", "updated_at")


def validate_admin_users_table(table: Any) -> None:
    """
    Ensure the admin users table can back login and seeding.

    Raises:
        ConfigurationError: naming the first missing column and listing the
            columns that were found.
    """
    sa_table = resolve_table(table)
    column_names = [column.key for column in sa_table.columns]

    for required in REQUIRED_ADMIN_COLUMNS:
        if required not in column_names:
            raise ConfigurationError(
                f'admin_users table must have a "{required}" column. '
                f"Found columns: {', '.join(column_names)}"
            )
