"""Reusable HTML components."""

from .actions import MemberActionMarkup, render_collection_actions, render_member_actions
from .button import button, link_button
from .field import input_kind, render_field
from .flash import render_flash
from .modal import confirm_modal, make_modal_id, modal_trigger
from .pagination import Pagination, render_pagination

__all__ = [
    "MemberActionMarkup",
    "Pagination",
    "button",
    "confirm_modal",
    "input_kind",
    "link_button",
    "make_modal_id",
    "modal_trigger",
    "render_collection_actions",
    "render_field",
    "render_flash",
    "render_member_actions",
    "render_pagination",
]
