"""Member and collection action controls."""

from __future__ import annotations

from typing import Any, NamedTuple

from markupsafe import Markup

from tableadmin.resources.naming import slugify
from tableadmin.specs.resource import CollectionAction, MemberAction, ResourceDefinition
from tableadmin.ui.template_renderer import render_fragment
from tableadmin.ui.theme import DEFAULT_THEME, Theme

from .modal import confirm_modal, make_modal_id, modal_trigger


class MemberActionMarkup(NamedTuple):
    """Buttons for the action bar plus the modals they open."""

    buttons: Markup
    modals: Markup


def member_action_url(resource: ResourceDefinition, record_id: Any, action: MemberAction) -> str:
    return resource.record_url(record_id, "actions", slugify(action.name))


def collection_action_url(resource: ResourceDefinition, action: CollectionAction) -> str:
    return f"{resource.base_url}/actions/{slugify(action.name)}"


def _action_form(action_url: str, label: str, csrf_token: str, theme: Theme) -> Markup:
    return render_fragment(
        "components/action_form.html",
        action_url=action_url,
        label=label,
        csrf_token=csrf_token,
        theme=theme,
    )


def render_member_actions(
    resource: ResourceDefinition,
    record_id: Any,
    csrf_token: str,
    theme: Theme = DEFAULT_THEME,
) -> MemberActionMarkup:
    """
    Controls for the resource's member actions on one record.

    Destructive actions open a confirmation modal; the others submit
    directly.
    """
    buttons: list[Markup] = []
    modals: list[Markup] = []

    for action in resource.options.member_actions:
        action_url = member_action_url(resource, record_id, action)

        if not action.destructive:
            buttons.append(_action_form(action_url, action.name, csrf_token, theme))
            continue

        modal_id = make_modal_id("modal", slugify(action.name), record_id)
        buttons.append(modal_trigger(modal_id, action.name, "danger", theme))
        modals.append(
            confirm_modal(
                modal_id,
                title=action.name,
                message=(
                    f"Are you sure you want to {action.name.lower()} "
                    f"this {resource.display_name.lower()}?"
                ),
                form_action=action_url,
                csrf_token=csrf_token,
                confirm_label=action.name,
                confirm_variant="danger",
                theme=theme,
            )
        )

    return MemberActionMarkup(Markup("").join(buttons), Markup("").join(modals))


def render_collection_actions(
    resource: ResourceDefinition,
    csrf_token: str,
    theme: Theme = DEFAULT_THEME,
) -> Markup:
    return Markup("").join(
        _action_form(collection_action_url(resource, action), action.name, csrf_token, theme)
        for action in resource.options.collection_actions
    )
