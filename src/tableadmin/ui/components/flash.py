"""Flash message banner."""

from __future__ import annotations

from markupsafe import Markup

from tableadmin.runtime.flash import FlashMessage
from tableadmin.ui.template_renderer import render_fragment

FLASH_CLASSES = {
    "success": "bg-emerald-900/50 border-emerald-700 text-emerald-200",
    "error": "bg-red-900/50 border-red-700 text-red-200",
    "info": "bg-blue-900/50 border-blue-700 text-blue-200",
}


def render_flash(flash: FlashMessage | None) -> Markup:
    """Dismissible banner for ``flash``; empty markup when there is none."""
    if flash is None:
        return Markup("")
    return render_fragment(
        "components/flash.html",
        flash=flash,
        color_classes=FLASH_CLASSES[flash.type],
    )
