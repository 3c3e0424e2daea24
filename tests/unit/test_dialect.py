"""Tests for the dialect adapters."""

from __future__ import annotations

import pytest
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

import tableadmin.dialects as dialects
from tableadmin.dialects import (
    DialectAdapter,
    get_adapter,
    get_table_sql_name,
    map_column_type,
    postgresql_adapter,
    register_adapter,
    resolve_table,
)
from tableadmin.errors import ConfigurationError
from tableadmin.specs.column import DataType

# =============================================================================
# Type mapping
# =============================================================================


class TestMapColumnType:
    @pytest.mark.parametrize(
        ("type_", "expected"),
        [
            (sa.String(50), DataType.TEXT),
            (sa.Text(), DataType.TEXT),
            (sa.Uuid(), DataType.TEXT),
            (postgresql.CITEXT(), DataType.TEXT),
            (sa.Integer(), DataType.INTEGER),
            (sa.BigInteger(), DataType.INTEGER),
            (sa.SmallInteger(), DataType.INTEGER),
            (sa.Boolean(), DataType.BOOLEAN),
            (sa.DateTime(), DataType.TIMESTAMP),
            (sa.Date(), DataType.TIMESTAMP),
            (postgresql.TIMESTAMP(timezone=True), DataType.TIMESTAMP),
            (sa.JSON(), DataType.JSON),
            (postgresql.JSONB(), DataType.JSON),
            (sa.Enum("a", "b", name="ab"), DataType.ENUM),
        ],
    )
    def test_known_types(self, type_, expected):
        assert map_column_type(type_) == expected

    def test_unknown_type_falls_back_to_text(self):
        assert map_column_type(sa.Numeric(10, 2)) == DataType.TEXT

    def test_type_decorator_is_unwrapped(self):
        class Lowercase(sa.types.TypeDecorator):
            impl = sa.Integer
            cache_ok = True

        assert map_column_type(Lowercase()) == DataType.INTEGER


# =============================================================================
# Column extraction
# =============================================================================


class TestExtractColumns:
    def test_cards_table(self, cards_table):
        columns = {c.name: c for c in postgresql_adapter.extract_columns(cards_table)}

        assert list(columns) == [
            "id",
            "title",
            "body",
            "status",
            "is_pinned",
            "extra",
            "secret_password",
            "created_at",
            "updated_at",
        ]
        assert columns["id"].is_primary_key
        assert columns["id"].has_default
        assert not columns["title"].is_nullable
        assert not columns["title"].has_default
        assert columns["body"].is_nullable
        assert columns["status"].data_type == DataType.ENUM
        assert columns["status"].enum_values == ("draft", "published", "archived")
        assert columns["is_pinned"].data_type == DataType.BOOLEAN
        assert columns["extra"].data_type == DataType.JSON
        assert columns["created_at"].has_default

    def test_key_and_sql_name_can_differ(self):
        table = sa.Table(
            "people",
            sa.MetaData(),
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("full_name", sa.String, key="fullName"),
        )
        column = postgresql_adapter.extract_columns(table)[1]
        assert column.name == "fullName"
        assert column.sql_name == "full_name"

    def test_declarative_model(self):
        class Base(DeclarativeBase):
            pass

        class Tag(Base):
            __tablename__ = "tags"

            id: Mapped[int] = mapped_column(primary_key=True)
            label: Mapped[str]

        assert [c.name for c in postgresql_adapter.extract_columns(Tag)] == ["id", "label"]
        assert get_table_sql_name(Tag) == "tags"


class TestResolveTable:
    def test_rejects_objects_without_columns(self):
        with pytest.raises(ConfigurationError, match="does not expose a column catalog"):
            resolve_table(object())


# =============================================================================
# Registry
# =============================================================================


class TestAdapterRegistry:
    def test_postgresql_is_registered(self):
        assert get_adapter("postgresql") is postgresql_adapter

    @pytest.mark.parametrize("dialect", ["mysql", "sqlite"])
    def test_other_dialects_are_not_supported(self, dialect):
        with pytest.raises(ConfigurationError, match=f'Dialect "{dialect}" is not yet supported'):
            get_adapter(dialect)

    def test_register_adapter(self, monkeypatch):
        monkeypatch.setattr(dialects, "_ADAPTERS", dict(dialects._ADAPTERS))

        class SqliteAdapter(DialectAdapter):
            name = "sqlite"

            def extract_columns(self, table):
                return postgresql_adapter.extract_columns(table)

        adapter = SqliteAdapter()
        register_adapter(adapter)
        assert get_adapter("sqlite") is adapter
