"""Form submission parsing driven by ``ColumnMeta`` type tags."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from tableadmin.specs.column import ColumnMeta, DataType
from tableadmin.specs.resource import ColumnConfig

from .policy import is_password_column, writable_columns

logger = logging.getLogger(__name__)


def _parse_integer(column: ColumnMeta, raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Discarding non-numeric value for integer column %s", column.name)
        return None


def _parse_json(column: ColumnMeta, raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding malformed JSON for column %s", column.name)
        return None


def _parse_timestamp(column: ColumnMeta, raw: str) -> datetime | None:
    try:
        return datetime.fromisoformat(raw.strip())
    except ValueError:
        logger.warning("Discarding unparseable timestamp for column %s", column.name)
        return None


def parse_form_values(
    raw_fields: Mapping[str, Any],
    columns: Sequence[ColumnMeta],
    permit_params: Sequence[str] | None = None,
    form_config: ColumnConfig | None = None,
) -> dict[str, Any]:
    """
    Convert submitted form fields into a record for insert/update.

    Only writable columns are read (see ``writable_columns``); the result
    never holds a key for a primary key, a creation timestamp, an
    auto-managed timestamp, a column left off the form by ``form_config``,
    or a column outside ``permit_params``.

    An absent boolean field means an unchecked checkbox and parses as
    ``False``. Malformed integer, JSON or timestamp input parses as ``None``.
    """
    values: dict[str, Any] = {}

    for column in writable_columns(columns, permit_params, form_config):
        raw = raw_fields.get(column.name)

        if column.data_type == DataType.BOOLEAN:
            values[column.name] = raw is True or raw == "true"
            continue

        if raw is not None and not isinstance(raw, str):
            raw = str(raw)
        if column.data_type == DataType.INTEGER:
            values[column.name] = _parse_integer(column, raw) if raw else None
        elif column.data_type == DataType.JSON:
            values[column.name] = _parse_json(column, raw) if raw else None
        elif column.data_type == DataType.TIMESTAMP:
            values[column.name] = _parse_timestamp(column, raw) if raw else None
        elif column.data_type == DataType.ENUM:
            # The blank "Select..." option means no value.
            values[column.name] = raw or None
        else:
            values[column.name] = raw

    return values


def coerce_record_id(column: ColumnMeta, raw_id: str) -> Any:
    """Convert a record id from the URL to the primary key's type.

    Raises:
        ValueError: if ``raw_id`` cannot be represented in the key's type.
    """
    if column.data_type == DataType.INTEGER:
        return int(raw_id)
    return raw_id


REQUIRED_MESSAGE = "This field is required."


def missing_required_fields(
    values: Mapping[str, Any], columns: Sequence[ColumnMeta]
) -> dict[str, str]:
    """Field errors for parsed values left empty in NOT NULL columns without a default.

    Booleans are never missing: an unchecked box parses as ``False``.
    """
    errors: dict[str, str] = {}
    for column in columns:
        if column.name not in values or column.data_type == DataType.BOOLEAN:
            continue
        if column.is_nullable or column.has_default:
            continue
        if values[column.name] is None or values[column.name] == "":
            errors[column.name] = REQUIRED_MESSAGE
    return errors


def drop_blank_passwords(
    values: Mapping[str, Any], columns: Sequence[ColumnMeta]
) -> dict[str, Any]:
    """Leave password columns unchanged when an edit form submits them empty."""
    passwords = {column.name for column in columns if is_password_column(column)}
    return {
        name: value
        for name, value in values.items()
        if not (name in passwords and value in (None, ""))
    }


def drop_blank_defaults(
    values: Mapping[str, Any], columns: Sequence[ColumnMeta]
) -> dict[str, Any]:
    """Leave out empty values for columns with a default so an insert picks the default."""
    defaulted = {column.name for column in columns if column.has_default}
    return {
        name: value
        for name, value in values.items()
        if not (name in defaulted and value is None)
    }
