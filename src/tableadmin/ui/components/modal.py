"""
Confirmation modal and its trigger button.

Modal ids are supplied by the caller and derived from the resource, the
record and the action, so the same page always renders the same ids.
"""

from __future__ import annotations

import re
from typing import Literal

from markupsafe import Markup

from tableadmin.ui.template_renderer import render_fragment
from tableadmin.ui.theme import DEFAULT_THEME, Theme

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def make_modal_id(*parts: object) -> str:
    """``make_modal_id("delete", 7)`` -> ``delete-7``; unsafe characters become hyphens."""
    return "-".join(_UNSAFE_ID_CHARS.sub("-", str(part)) for part in parts)


def confirm_modal(
    modal_id: str,
    *,
    title: str,
    message: str,
    form_action: str,
    csrf_token: str,
    confirm_label: str = "Confirm",
    confirm_variant: Literal["danger", "primary"] = "danger",
    theme: Theme = DEFAULT_THEME,
) -> Markup:
    """Hidden dialog that POSTs ``form_action`` when confirmed."""
    return render_fragment(
        "components/modal.html",
        modal_id=modal_id,
        title=title,
        message=message,
        form_action=form_action,
        csrf_token=csrf_token,
        confirm_label=confirm_label,
        confirm_class=theme.button(confirm_variant),
        theme=theme,
    )


def modal_trigger(
    modal_id: str,
    label: str,
    variant: Literal["danger", "secondary"] = "secondary",
    theme: Theme = DEFAULT_THEME,
) -> Markup:
    return render_fragment(
        "components/modal_trigger.html",
        modal_id=modal_id,
        label=label,
        button_class=theme.button(variant),
    )
