"""
CSRF protection for admin forms.

Implements a signed double-submit token:
- Every form-bearing page mints a CSRF token, stores it in the ``_csrf``
  cookie (httponly, SameSite=Strict, 1 hour) and embeds it in a hidden
  ``_csrf`` form field.
- Every state-changing POST requires the cookie and the field to be equal
  AND the token to be a validly-signed, unexpired CSRF token.
"""

from __future__ import annotations

import hmac
import logging
from collections.abc import Mapping
from typing import Any

from markupsafe import Markup
from starlette.requests import Request
from starlette.responses import Response

from tableadmin.errors import CsrfValidationError

from .tokens import CSRF_TOKEN_TTL, TokenPurpose, TokenService

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "_csrf"
CSRF_FIELD_NAME = "_csrf"
CSRF_COOKIE_MAX_AGE = int(CSRF_TOKEN_TTL.total_seconds())


def set_csrf_cookie(response: Response, token: str, *, secure: bool = False) -> None:
    """Attach a freshly minted CSRF token to ``response``."""
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        max_age=CSRF_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="strict",
        secure=secure,
    )


def validate_csrf(request: Request, form: Mapping[str, Any], tokens: TokenService) -> None:
    """
    Check the CSRF cookie against the submitted form field.

    Args:
        request: Incoming request carrying the ``_csrf`` cookie.
        form: Parsed form body carrying the ``_csrf`` field.
        tokens: Token service holding the signing secret.

    Raises:
        CsrfValidationError: if either half is missing, they differ, or the
            token fails signature, expiry or purpose verification.
    """
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    form_token = form.get(CSRF_FIELD_NAME)

    if not cookie_token or not isinstance(form_token, str) or not form_token:
        logger.info("CSRF rejected for %s: token missing", request.url.path)
        raise CsrfValidationError()

    if not hmac.compare_digest(cookie_token, form_token):
        logger.info("CSRF rejected for %s: cookie/field mismatch", request.url.path)
        raise CsrfValidationError()

    if tokens.decode(cookie_token, TokenPurpose.CSRF) is None:
        logger.info("CSRF rejected for %s: invalid token", request.url.path)
        raise CsrfValidationError()


def csrf_input(token: str) -> Markup:
    """Hidden form field carrying ``token``."""
    return Markup('<input type="hidden" name="{}" value="{}">').format(
        CSRF_FIELD_NAME, token
    )
