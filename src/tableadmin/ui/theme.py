"""
Visual theme for rendered pages.

A ``Theme`` is an immutable table of Tailwind class strings. It is passed
explicitly into every rendering call; pages never consult module state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ButtonVariant = Literal["primary", "secondary", "danger", "ghost"]


@dataclass(frozen=True)
class Theme:
    """Tailwind class strings used by the views and components."""

    bg: str = "bg-zinc-950"
    bg_card: str = "bg-zinc-900"
    bg_hover: str = "hover:bg-zinc-800"
    border: str = "border border-zinc-800"
    text: str = "text-zinc-100"
    text_muted: str = "text-zinc-400"
    text_error: str = "text-red-400"
    text_success: str = "text-emerald-400"
    btn_primary: str = (
        "bg-zinc-100 text-zinc-900 hover:bg-zinc-200 font-medium px-4 py-2 "
        "rounded-lg transition-colors"
    )
    btn_secondary: str = (
        "bg-zinc-800 text-zinc-100 hover:bg-zinc-700 font-medium px-4 py-2 "
        "rounded-lg border border-zinc-700 transition-colors"
    )
    btn_danger: str = (
        "bg-red-600 text-white hover:bg-red-700 font-medium px-4 py-2 rounded-lg transition-colors"
    )
    btn_ghost: str = (
        "text-zinc-400 hover:text-zinc-100 hover:bg-zinc-800 px-4 py-2 rounded-lg transition-colors"
    )
    input: str = (
        "w-full bg-zinc-900 border border-zinc-700 rounded-lg px-3 py-2 text-zinc-100 "
        "placeholder-zinc-500 focus:outline-none focus:ring-2 focus:ring-zinc-600 "
        "focus:border-transparent"
    )
    label: str = "block text-sm font-medium text-zinc-300 mb-1"
    checkbox: str = "w-4 h-4 rounded border-zinc-600 bg-zinc-800 text-zinc-100 focus:ring-zinc-600"
    card: str = "bg-zinc-900 border border-zinc-800 rounded-lg shadow-sm"
    card_padded: str = "bg-zinc-900 border border-zinc-800 rounded-lg shadow-sm p-6"
    table: str = "w-full"
    table_header: str = "text-left text-sm font-medium text-zinc-400 uppercase tracking-wider"
    table_row: str = "border-b border-zinc-800 hover:bg-zinc-800/50"
    table_cell: str = "px-4 py-3 text-sm text-zinc-300"
    link: str = "text-zinc-100 hover:text-white underline underline-offset-4"
    nav_link: str = (
        "flex items-center gap-2 px-3 py-2 text-zinc-400 hover:text-zinc-100 "
        "hover:bg-zinc-800 rounded-lg transition-colors"
    )
    nav_link_active: str = "flex items-center gap-2 px-3 py-2 text-zinc-100 bg-zinc-800 rounded-lg"

    def button(self, variant: ButtonVariant) -> str:
        return {
            "primary": self.btn_primary,
            "secondary": self.btn_secondary,
            "danger": self.btn_danger,
            "ghost": self.btn_ghost,
        }[variant]


DEFAULT_THEME = Theme()
