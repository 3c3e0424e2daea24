"""Dialect adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import sqlalchemy as sa

from tableadmin.errors import ConfigurationError
from tableadmin.specs.column import ColumnMeta


def resolve_table(table: Any) -> sa.Table:
    """Return the SQLAlchemy ``Table`` behind a table handle.

    Declarative model classes are unwrapped through ``__table__``. A handle
    that exposes no column catalog is a configuration error.
    """
    candidate = getattr(table, "__table__", table)
    if isinstance(candidate, sa.Table):
        return candidate
    raise ConfigurationError(
        f"{table!r} does not expose a column catalog. "
        "Pass a SQLAlchemy Table or a declarative model class."
    )


def get_table_sql_name(table: Any) -> str:
    """SQL name of a table handle."""
    return resolve_table(table).name


class DialectAdapter(ABC):
    """Translates a dialect-specific table definition into ``ColumnMeta``."""

    name: str

    @abstractmethod
    def extract_columns(self, table: Any) -> list[ColumnMeta]:
        """Return one ``ColumnMeta`` per column, in declaration order."""
