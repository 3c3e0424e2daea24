"""
Database capability.

Route handlers and custom actions only see the ``Database`` protocol; any
storage engine implementing these five operations can back the admin
panel. ``SQLAlchemyDatabase`` is the implementation that ships, built on
SQLAlchemy Core (no ORM, no Session).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from tableadmin.dialects import resolve_table
from tableadmin.errors import ConfigurationError, DatabaseOperationError

logger = logging.getLogger(__name__)

Record = dict[str, Any]


@runtime_checkable
class Database(Protocol):
    """Minimal storage capability consumed by TableAdmin."""

    def select(
        self,
        table: Any,
        *,
        where: Mapping[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Record]: ...

    def count(self, table: Any) -> int: ...

    def insert(self, table: Any, values: Mapping[str, Any]) -> Record: ...

    def update(
        self, table: Any, key: str, record_id: Any, values: Mapping[str, Any]
    ) -> int: ...

    def delete(self, table: Any, key: str, record_id: Any) -> int: ...


def _error_message(exc: SQLAlchemyError) -> str:
    """Prefer the driver's message over SQLAlchemy's wrapped text."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc)


class SQLAlchemyDatabase:
    """``Database`` implementation over a SQLAlchemy ``Engine``.

    Every write runs in its own transaction. ``SQLAlchemyError`` is re-raised
    as ``DatabaseOperationError`` carrying the driver message.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, **engine_kwargs: Any) -> SQLAlchemyDatabase:
        return cls(sa.create_engine(url, **engine_kwargs))

    @staticmethod
    def _to_record(table: sa.Table, row: sa.Row[Any]) -> Record:
        mapping = row._mapping
        return {column.key: mapping[column] for column in table.columns}

    def select(
        self,
        table: Any,
        *,
        where: Mapping[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Record]:
        sa_table = resolve_table(table)
        stmt = sa.select(sa_table)
        for key, value in (where or {}).items():
            stmt = stmt.where(sa_table.c[key] == value)
        stmt = stmt.order_by(*sa_table.primary_key.columns)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise DatabaseOperationError(_error_message(exc)) from exc
        return [self._to_record(sa_table, row) for row in rows]

    def count(self, table: Any) -> int:
        sa_table = resolve_table(table)
        stmt = sa.select(sa.func.count()).select_from(sa_table)
        try:
            with self.engine.connect() as conn:
                return int(conn.execute(stmt).scalar_one())
        except SQLAlchemyError as exc:
            raise DatabaseOperationError(_error_message(exc)) from exc

    def insert(self, table: Any, values: Mapping[str, Any]) -> Record:
        sa_table = resolve_table(table)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(sa_table.insert().values(**values))
                key_values = result.inserted_primary_key
                condition = sa.and_(
                    *(
                        column == value
                        for column, value in zip(sa_table.primary_key.columns, key_values)
                    )
                )
                row = conn.execute(sa.select(sa_table).where(condition)).one()
        except SQLAlchemyError as exc:
            raise DatabaseOperationError(_error_message(exc)) from exc
        logger.debug("Inserted into %s: %s", sa_table.name, tuple(key_values))
        return self._to_record(sa_table, row)

    def update(self, table: Any, key: str, record_id: Any, values: Mapping[str, Any]) -> int:
        sa_table = resolve_table(table)
        if not values:
            return 0
        stmt = sa_table.update().where(sa_table.c[key] == record_id).values(**values)
        try:
            with self.engine.begin() as conn:
                return conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            raise DatabaseOperationError(_error_message(exc)) from exc

    def delete(self, table: Any, key: str, record_id: Any) -> int:
        sa_table = resolve_table(table)
        stmt = sa_table.delete().where(sa_table.c[key] == record_id)
        try:
            with self.engine.begin() as conn:
                return conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            raise DatabaseOperationError(_error_message(exc)) from exc


def as_database(value: Any) -> Database:
    """Resolve a configured database value into a ``Database``.

    Accepts a SQLAlchemy ``Engine``, a database URL, or any object already
    implementing the protocol.
    """
    if isinstance(value, Engine):
        return SQLAlchemyDatabase(value)
    if isinstance(value, str):
        return SQLAlchemyDatabase.from_url(value)
    if isinstance(value, Database):
        return value
    raise ConfigurationError(
        f"database must be a Database, a SQLAlchemy Engine or a URL, got {type(value).__name__}"
    )
