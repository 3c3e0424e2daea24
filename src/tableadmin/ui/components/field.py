"""Form field component, chosen by the column's type tag."""

from __future__ import annotations

from typing import Any

from markupsafe import Markup

from tableadmin.resources.policy import is_auto_managed, is_password_column
from tableadmin.specs.column import ColumnMeta, DataType
from tableadmin.ui.template_renderer import render_fragment
from tableadmin.ui.theme import DEFAULT_THEME, Theme

_INPUT_KINDS = {
    DataType.BOOLEAN: "checkbox",
    DataType.JSON: "textarea",
    DataType.TIMESTAMP: "datetime",
    DataType.INTEGER: "number",
}


def input_kind(column: ColumnMeta) -> str:
    """Name of the control that renders ``column`` (``password``, ``select``, ``text``...)."""
    if is_password_column(column):
        return "password"
    if column.data_type == DataType.ENUM and column.enum_values:
        return "select"
    return _INPUT_KINDS.get(column.data_type, "text")


def render_field(
    column: ColumnMeta,
    value: Any = None,
    error: str | None = None,
    theme: Theme = DEFAULT_THEME,
    editing: bool = False,
) -> Markup:
    """
    Labelled input for one column.

    Auto-managed columns render nothing. Password columns never echo the
    stored value, and on an edit form (``editing``) they are optional: a
    blank submission keeps the stored password. Checkboxes submit the
    literal ``"true"`` when checked.
    """
    if is_auto_managed(column):
        return Markup("")
    required = not column.is_nullable and not column.has_default
    if editing and is_password_column(column):
        required = False
    return render_fragment(
        "components/field.html",
        column=column,
        kind=input_kind(column),
        value=value,
        error=error,
        required=required,
        theme=theme,
    )
