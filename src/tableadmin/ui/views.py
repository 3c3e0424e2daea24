"""
Page renderers.

Each function returns a complete HTML document. Pages other than login are
wrapped in the admin layout described by a ``LayoutContext``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tableadmin.resources.policy import form_columns, visible_columns
from tableadmin.runtime.auth.csrf import csrf_input
from tableadmin.runtime.flash import FlashMessage
from tableadmin.specs.resource import ResourceDefinition

from .components import (
    Pagination,
    button,
    confirm_modal,
    link_button,
    make_modal_id,
    modal_trigger,
    render_collection_actions,
    render_field,
    render_flash,
    render_member_actions,
    render_pagination,
)
from .template_renderer import render_page
from .theme import DEFAULT_THEME, Theme

DEFAULT_APP_TITLE = "TableAdmin"

Record = Mapping[str, Any]


@dataclass(frozen=True)
class LayoutContext:
    """Everything the admin layout needs besides the page body."""

    title: str
    admin_email: str
    resources: Sequence[ResourceDefinition]
    current_path: str
    flash: FlashMessage | None = None
    app_title: str = DEFAULT_APP_TITLE
    theme: Theme = DEFAULT_THEME

    def is_active(self, resource: ResourceDefinition) -> bool:
        return self.current_path == resource.base_url or self.current_path.startswith(
            resource.base_url + "/"
        )


def _render_in_layout(template_name: str, layout: LayoutContext, **kwargs: Any) -> str:
    return render_page(
        template_name,
        layout=layout,
        theme=layout.theme,
        app_title=layout.app_title,
        flash=render_flash(layout.flash),
        **kwargs,
    )


def render_login_page(
    csrf_token: str,
    error: str | None = None,
    *,
    app_title: str = DEFAULT_APP_TITLE,
    theme: Theme = DEFAULT_THEME,
) -> str:
    return render_page(
        "login.html",
        app_title=app_title,
        theme=theme,
        error=error,
        csrf_field=csrf_input(csrf_token),
    )


def render_index_page(
    layout: LayoutContext,
    resource: ResourceDefinition,
    records: Sequence[Record],
    pagination: Pagination,
    csrf_token: str,
) -> str:
    """Paginated table of ``records`` with the collection actions."""
    theme = layout.theme
    return _render_in_layout(
        "index.html",
        layout,
        resource=resource,
        columns=visible_columns(resource.columns, resource.options.index),
        records=records,
        pagination=pagination,
        pagination_controls=render_pagination(pagination),
        create_button=link_button(
            "Create New", f"{resource.base_url}/new", variant="primary", theme=theme
        ),
        collection_actions=render_collection_actions(resource, csrf_token, theme),
    )


def render_show_page(
    layout: LayoutContext,
    resource: ResourceDefinition,
    record: Record,
    csrf_token: str,
) -> str:
    """Detail view of one record, with member actions and a delete confirmation."""
    theme = layout.theme
    record_id = record[resource.primary_key.name]
    delete_modal_id = make_modal_id("delete", record_id)

    return _render_in_layout(
        "show.html",
        layout,
        resource=resource,
        columns=visible_columns(resource.columns, resource.options.show),
        record=record,
        actions=render_member_actions(resource, record_id, csrf_token, theme),
        edit_button=link_button(
            "Edit", resource.record_url(record_id, "edit"), variant="secondary", theme=theme
        ),
        delete_trigger=modal_trigger(delete_modal_id, "Delete", "danger", theme),
        delete_modal=confirm_modal(
            delete_modal_id,
            title=f"Delete {resource.display_name}",
            message=(
                f"Are you sure you want to delete this {resource.display_name.lower()}? "
                "This action cannot be undone."
            ),
            form_action=resource.record_url(record_id) + "?_method=DELETE",
            csrf_token=csrf_token,
            confirm_label="Delete",
            confirm_variant="danger",
            theme=theme,
        ),
        back_button=link_button("Back to list", resource.base_url, variant="ghost", theme=theme),
    )


def render_form_page(
    layout: LayoutContext,
    resource: ResourceDefinition,
    csrf_token: str,
    record: Record | None = None,
    errors: Mapping[str, str] | None = None,
) -> str:
    """Create form, or edit form pre-filled from ``record``.

    A ``record`` without a primary key value (a rejected create submission)
    re-renders the create form with the submitted values.
    """
    theme = layout.theme
    errors = errors or {}
    back = link_button("Back to list", resource.base_url, variant="ghost", theme=theme)
    record_id = record.get(resource.primary_key.name) if record is not None else None

    if record_id is None:
        action_url = resource.base_url
        nav_links = [back]
    else:
        action_url = resource.record_url(record_id) + "?_method=PUT"
        nav_links = [
            link_button("View", resource.record_url(record_id), variant="ghost", theme=theme),
            back,
        ]

    fields = [
        render_field(
            column,
            value=record.get(column.name) if record is not None else None,
            error=errors.get(column.name),
            theme=theme,
            editing=record_id is not None,
        )
        for column in form_columns(resource.columns, resource.options.form)
    ]

    return _render_in_layout(
        "form.html",
        layout,
        resource=resource,
        action_url=action_url,
        nav_links=nav_links,
        fields=fields,
        csrf_field=csrf_input(csrf_token),
        submit=button(
            "Create" if record_id is None else "Update",
            type="submit",
            variant="primary",
            theme=theme,
        ),
        cancel=link_button("Cancel", resource.base_url, variant="ghost", theme=theme),
    )


def render_not_found_page(layout: LayoutContext, resource: ResourceDefinition) -> str:
    return _render_in_layout("not_found.html", layout, resource=resource)


def render_message_page(layout: LayoutContext, message: str) -> str:
    """Plain notice inside the layout (e.g. when no resources are configured)."""
    return _render_in_layout("message.html", layout, message=message)
