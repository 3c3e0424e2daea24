"""
Jinja2 template renderer for the admin pages.

Sets up the Jinja2 environment with custom filters and template loading
from the package's templates/ directory.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from tableadmin.resources.naming import column_label
from tableadmin.specs.column import ColumnMeta, DataType

from .theme import DEFAULT_THEME, Theme

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"

JSON_PREVIEW_LENGTH = 50


def _json_text(value: Any, indent: int | None = None) -> str:
    return json.dumps(value, indent=indent, default=str)


def _timestamp_text(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _missing(theme: Theme) -> Markup:
    return Markup('<span class="{}">&mdash;</span>').format(theme.text_muted)


def _cell_filter(value: Any, column: ColumnMeta, theme: Theme = DEFAULT_THEME) -> Markup:
    """Format a value for an index table cell."""
    if value is None:
        return _missing(theme)
    if column.data_type == DataType.BOOLEAN:
        return Markup("&#10003;" if value else "&#10007;")
    if column.data_type == DataType.TIMESTAMP:
        return Markup.escape(_timestamp_text(value))
    if column.data_type == DataType.JSON:
        text = _json_text(value)
        if len(text) > JSON_PREVIEW_LENGTH:
            text = text[:JSON_PREVIEW_LENGTH] + "..."
        return Markup('<code class="text-xs">{}</code>').format(text)
    return Markup.escape(str(value))


def _detail_filter(value: Any, column: ColumnMeta, theme: Theme = DEFAULT_THEME) -> Markup:
    """Format a value for the show page."""
    if value is None:
        return _missing(theme)
    if column.data_type == DataType.BOOLEAN:
        if value:
            return Markup('<span class="text-emerald-400">Yes</span>')
        return Markup('<span class="text-zinc-500">No</span>')
    if column.data_type == DataType.TIMESTAMP:
        return Markup.escape(_timestamp_text(value))
    if column.data_type == DataType.JSON:
        return Markup(
            '<pre class="text-sm bg-zinc-800 p-3 rounded-lg overflow-auto max-h-48">{}</pre>'
        ).format(_json_text(value, indent=2))
    return Markup.escape(str(value))


def _datetime_local_filter(value: Any) -> str:
    """Format a timestamp for an ``<input type="datetime-local">``."""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%dT%H:%M")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%dT00:00")
    if isinstance(value, str):
        return value[:16]
    return ""


def _json_input_filter(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return _json_text(value, indent=2)


def create_jinja_env() -> Environment:
    """Create and configure the Jinja2 environment over the packaged templates."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.filters["label"] = column_label
    env.filters["cell"] = _cell_filter
    env.filters["detail"] = _detail_filter
    env.filters["datetime_local"] = _datetime_local_filter
    env.filters["json_input"] = _json_input_filter

    return env


# Module-level singleton
_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get the shared Jinja2 environment (lazy singleton)."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def render_fragment(template_name: str, **kwargs: Any) -> Markup:
    """
    Render an HTML fragment (component) as safe markup.

    Args:
        template_name: Template path relative to templates/.
        **kwargs: Template variables.

    Returns:
        Rendered fragment, safe to embed in other templates.
    """
    env = get_jinja_env()
    template = env.get_template(template_name)
    return Markup(template.render(**kwargs))


def render_page(template_name: str, **kwargs: Any) -> str:
    """Render a full HTML document."""
    env = get_jinja_env()
    return env.get_template(template_name).render(**kwargs)
