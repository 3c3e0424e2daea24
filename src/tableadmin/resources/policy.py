"""
Column visibility and auto-managed field policy.

Pure functions shared by the index/show/form views and by form parsing,
so that every surface agrees on which columns are shown and written.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from tableadmin.specs.column import ColumnMeta
from tableadmin.specs.resource import ColumnConfig

CREATED_AT_COLUMNS = frozenset({"createdAt", "created_at"})
UPDATED_AT_COLUMNS = frozenset({"updatedAt", "updated_at"})
AUTO_TIMESTAMP_COLUMNS = CREATED_AT_COLUMNS | UPDATED_AT_COLUMNS


def is_password_column(column: ColumnMeta) -> bool:
    return "password" in column.name.lower()


def is_auto_managed(column: ColumnMeta) -> bool:
    """Primary keys, and creation/update timestamps filled by the database."""
    if column.is_primary_key:
        return True
    if column.name in AUTO_TIMESTAMP_COLUMNS:
        return column.has_default
    return False


def _apply_config(columns: Iterable[ColumnMeta], config: ColumnConfig | None) -> list[ColumnMeta]:
    result = list(columns)
    if config is None:
        return result
    if config.columns is not None:
        wanted = set(config.columns)
        return [col for col in result if col.name in wanted]
    if config.exclude is not None:
        unwanted = set(config.exclude)
        return [col for col in result if col.name not in unwanted]
    return result


def visible_columns(
    columns: Sequence[ColumnMeta], config: ColumnConfig | None = None
) -> list[ColumnMeta]:
    """Columns displayed by the index and show views, in table order.

    Password columns are dropped before the whitelist/blacklist is applied,
    so no configuration can expose them.
    """
    return _apply_config((col for col in columns if not is_password_column(col)), config)


def form_columns(
    columns: Sequence[ColumnMeta], config: ColumnConfig | None = None
) -> list[ColumnMeta]:
    """Columns rendered as inputs on the create/edit forms."""
    return _apply_config((col for col in columns if not is_auto_managed(col)), config)


def writable_columns(
    columns: Sequence[ColumnMeta],
    permit_params: Sequence[str] | None = None,
    form_config: ColumnConfig | None = None,
) -> list[ColumnMeta]:
    """Columns whose values are read from a submitted form.

    Only columns the form renders qualify, so a column hidden by
    ``form_config`` keeps its stored value on update.
    """
    permitted = set(permit_params) if permit_params is not None else None
    result = []
    for col in form_columns(columns, form_config):
        if col.name in CREATED_AT_COLUMNS:
            continue
        if permitted is not None and col.name not in permitted:
            continue
        result.append(col)
    return result


def updated_at_column(columns: Sequence[ColumnMeta]) -> ColumnMeta | None:
    """The column stamped by the server on every update, if the table has one."""
    for col in columns:
        if col.name in UPDATED_AT_COLUMNS:
            return col
    return None
