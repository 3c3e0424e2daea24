"""Button and link-button components."""

from __future__ import annotations

from typing import Literal

from markupsafe import Markup

from tableadmin.ui.template_renderer import render_fragment
from tableadmin.ui.theme import DEFAULT_THEME, ButtonVariant, Theme

ButtonSize = Literal["sm", "md"]


def button(
    label: str,
    *,
    type: Literal["button", "submit"] = "button",
    variant: ButtonVariant = "primary",
    size: ButtonSize = "md",
    disabled: bool = False,
    theme: Theme = DEFAULT_THEME,
) -> Markup:
    return render_fragment(
        "components/button.html",
        label=label,
        type=type,
        variant=variant,
        size=size,
        disabled=disabled,
        theme=theme,
    )


def link_button(
    label: str,
    href: str,
    *,
    variant: ButtonVariant = "secondary",
    size: ButtonSize = "md",
    theme: Theme = DEFAULT_THEME,
) -> Markup:
    """An anchor styled as a button."""
    return render_fragment(
        "components/link_button.html",
        label=label,
        href=href,
        variant=variant,
        size=size,
        theme=theme,
    )
