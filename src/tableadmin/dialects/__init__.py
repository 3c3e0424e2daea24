"""
Dialect adapters.

Adapters are looked up by dialect name. Only the PostgreSQL adapter ships;
additional adapters register themselves with :func:`register_adapter`.
"""

from __future__ import annotations

from tableadmin.errors import ConfigurationError

from .base import DialectAdapter, get_table_sql_name, resolve_table
from .postgresql import PostgresqlAdapter, map_column_type, postgresql_adapter

_ADAPTERS: dict[str, DialectAdapter] = {postgresql_adapter.name: postgresql_adapter}


def register_adapter(adapter: DialectAdapter) -> None:
    """Make ``adapter`` available under ``adapter.name``."""
    _ADAPTERS[adapter.name] = adapter


def get_adapter(dialect: str) -> DialectAdapter:
    """Return the adapter registered for ``dialect``."""
    try:
        return _ADAPTERS[dialect]
    except KeyError:
        raise ConfigurationError(f'Dialect "{dialect}" is not yet supported') from None


__all__ = [
    "DialectAdapter",
    "PostgresqlAdapter",
    "get_adapter",
    "get_table_sql_name",
    "map_column_type",
    "postgresql_adapter",
    "register_adapter",
    "resolve_table",
]
