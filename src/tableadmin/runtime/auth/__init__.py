"""
Authentication for the admin panel.

Stateless: a signed session token in the ``admin_session`` cookie
identifies the admin, and signed CSRF tokens protect every form. Nothing
is stored server-side, so rotating the session secret signs everyone out.
"""

from .contract import REQUIRED_ADMIN_COLUMNS, validate_admin_users_table
from .crypto import cookie_secure, hash_password, verify_password
from .csrf import CSRF_COOKIE_NAME, CSRF_FIELD_NAME, csrf_input, set_csrf_cookie, validate_csrf
from .middleware import (
    AUTH_COOKIE_NAME,
    SessionAuthMiddleware,
    clear_auth_cookie,
    get_admin,
    set_auth_cookie,
)
from .tokens import TokenClaims, TokenError, TokenPurpose, TokenService

__all__ = [
    "AUTH_COOKIE_NAME",
    "CSRF_COOKIE_NAME",
    "CSRF_FIELD_NAME",
    "REQUIRED_ADMIN_COLUMNS",
    "SessionAuthMiddleware",
    "TokenClaims",
    "TokenError",
    "TokenPurpose",
    "TokenService",
    "clear_auth_cookie",
    "cookie_secure",
    "csrf_input",
    "get_admin",
    "hash_password",
    "set_auth_cookie",
    "set_csrf_cookie",
    "validate_admin_users_table",
    "validate_csrf",
    "verify_password",
]
