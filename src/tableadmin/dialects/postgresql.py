"""
PostgreSQL dialect adapter.

Reads column metadata from SQLAlchemy ``Table`` objects declared with
generic or ``sqlalchemy.dialects.postgresql`` types.
"""

from __future__ import annotations

import logging
from typing import Any

import sqlalchemy as sa

from tableadmin.specs.column import ColumnMeta, DataType

from .base import DialectAdapter, resolve_table

logger = logging.getLogger(__name__)

# Keys are lower-cased SQLAlchemy visit names.
_TYPE_MAP: dict[str, DataType] = {
    "string": DataType.TEXT,
    "text": DataType.TEXT,
    "varchar": DataType.TEXT,
    "char": DataType.TEXT,
    "nvarchar": DataType.TEXT,
    "nchar": DataType.TEXT,
    "unicode": DataType.TEXT,
    "unicode_text": DataType.TEXT,
    "citext": DataType.TEXT,
    "uuid": DataType.TEXT,
    "integer": DataType.INTEGER,
    "big_integer": DataType.INTEGER,
    "bigint": DataType.INTEGER,
    "small_integer": DataType.INTEGER,
    "smallint": DataType.INTEGER,
    "serial": DataType.INTEGER,
    "bigserial": DataType.INTEGER,
    "boolean": DataType.BOOLEAN,
    "date": DataType.TIMESTAMP,
    "datetime": DataType.TIMESTAMP,
    "timestamp": DataType.TIMESTAMP,
    "json": DataType.JSON,
    "jsonb": DataType.JSON,
}


def _unwrap(type_: Any) -> Any:
    while isinstance(type_, sa.types.TypeDecorator):
        type_ = type_.impl
    return type_


def map_column_type(type_: Any) -> DataType:
    """Map a SQLAlchemy type instance to a normalized ``DataType``."""
    type_ = _unwrap(type_)
    if getattr(type_, "enums", None):
        return DataType.ENUM
    for cls in type(type_).__mro__:
        visit_name = cls.__dict__.get("__visit_name__")
        if isinstance(visit_name, str) and visit_name.lower() in _TYPE_MAP:
            return _TYPE_MAP[visit_name.lower()]
    logger.debug("Unmapped column type %r, falling back to text", type_)
    return DataType.TEXT


def _has_default(column: sa.Column[Any], table: sa.Table) -> bool:
    if column.default is not None or column.server_default is not None:
        return True
    if column.onupdate is not None or column.server_onupdate is not None:
        return True
    return table.autoincrement_column is column


class PostgresqlAdapter(DialectAdapter):
    """Reference adapter for PostgreSQL table definitions."""

    name = "postgresql"

    def extract_columns(self, table: Any) -> list[ColumnMeta]:
        sa_table = resolve_table(table)
        columns: list[ColumnMeta] = []
        for column in sa_table.columns:
            data_type = map_column_type(column.type)
            enum_values = None
            if data_type == DataType.ENUM:
                enum_values = tuple(str(v) for v in _unwrap(column.type).enums)
            columns.append(
                ColumnMeta(
                    name=column.key,
                    sql_name=column.name,
                    data_type=data_type,
                    is_nullable=bool(column.nullable),
                    is_primary_key=bool(column.primary_key),
                    has_default=_has_default(column, sa_table),
                    enum_values=enum_values,
                )
            )
        return columns


postgresql_adapter = PostgresqlAdapter()
