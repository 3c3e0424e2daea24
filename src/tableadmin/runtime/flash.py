"""
One-shot flash messages.

A flash message is stored as percent-encoded JSON in the short-lived ``_flash`` cookie when
a handler redirects, and read-and-cleared by the next page render, so it is
displayed at most once.
"""

from __future__ import annotations

import logging
from typing import Literal
from urllib.parse import quote, unquote

from pydantic import BaseModel, ConfigDict, ValidationError
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

FLASH_COOKIE_NAME = "_flash"
FLASH_COOKIE_MAX_AGE = 60

FlashType = Literal["success", "error", "info"]


class FlashMessage(BaseModel):
    """A transient notice shown on the next rendered page."""

    model_config = ConfigDict(frozen=True)

    type: FlashType
    message: str


def set_flash(response: Response, type: FlashType, message: str) -> None:
    """Store a flash message on ``response``."""
    flash = FlashMessage(type=type, message=message)
    response.set_cookie(
        key=FLASH_COOKIE_NAME,
        value=quote(flash.model_dump_json(), safe=""),
        max_age=FLASH_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
    )


def read_flash(request: Request) -> FlashMessage | None:
    """The pending flash message, or ``None``; malformed cookies are ignored."""
    raw = request.cookies.get(FLASH_COOKIE_NAME)
    if not raw:
        return None
    try:
        return FlashMessage.model_validate_json(unquote(raw))
    except ValidationError:
        logger.debug("Ignoring malformed flash cookie")
        return None


def clear_flash(response: Response) -> None:
    response.delete_cookie(FLASH_COOKIE_NAME, path="/", httponly=True)


def has_flash_cookie(request: Request) -> bool:
    return FLASH_COOKIE_NAME in request.cookies
