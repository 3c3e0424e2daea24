"""
Server-rendered HTML for the admin panel.

Jinja2 templates styled with Tailwind, composed from small components and
an immutable ``Theme``.
"""

from .theme import DEFAULT_THEME, Theme
from .views import (
    LayoutContext,
    render_form_page,
    render_index_page,
    render_login_page,
    render_message_page,
    render_not_found_page,
    render_show_page,
)

__all__ = [
    "DEFAULT_THEME",
    "LayoutContext",
    "Theme",
    "render_form_page",
    "render_index_page",
    "render_login_page",
    "render_message_page",
    "render_not_found_page",
    "render_show_page",
]
