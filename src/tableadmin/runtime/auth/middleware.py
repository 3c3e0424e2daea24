"""
Session middleware for the admin panel.

Every path except the login and logout endpoints requires a valid session
token in the ``admin_session`` cookie. Requests without one are redirected
to ``/login`` and any stale cookie is cleared. Verified claims are placed
on ``request.state.admin``.
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from .tokens import SESSION_TOKEN_TTL, TokenClaims, TokenPurpose, TokenService

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "admin_session"
AUTH_COOKIE_MAX_AGE = int(SESSION_TOKEN_TTL.total_seconds())
LOGIN_PATH = "/login"
LOGOUT_PATH = "/logout"


def set_auth_cookie(response: Response, token: str, *, secure: bool = False) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=AUTH_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="strict",
        secure=secure,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE_NAME, path="/", httponly=True, samesite="strict")


def get_admin(request: Request) -> TokenClaims | None:
    """Claims of the signed-in admin, set by :class:`SessionAuthMiddleware`."""
    return getattr(request.state, "admin", None)


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """
    Require a signed-in admin on every non-excluded path.

    Sets ``request.state.admin`` to the verified ``TokenClaims``.
    """

    def __init__(
        self,
        app: ASGIApp,
        tokens: TokenService,
        exclude_paths: list[str] | None = None,
    ):
        """
        Initialize the session middleware.

        Args:
            app: Wrapped ASGI application
            tokens: Token service used to verify session cookies
            exclude_paths: Paths served without a session
        """
        super().__init__(app)
        self.tokens = tokens
        self.exclude_paths = exclude_paths or [LOGIN_PATH, LOGOUT_PATH]

    def is_excluded_path(self, path: str) -> bool:
        """Check if path is excluded from auth."""
        for excluded in self.exclude_paths:
            if path == excluded or path.startswith(excluded + "/"):
                return True
        return False

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.is_excluded_path(request.url.path):
            return await call_next(request)

        token = request.cookies.get(AUTH_COOKIE_NAME)
        claims = self.tokens.decode(token, TokenPurpose.SESSION)

        if claims is None:
            response = RedirectResponse(LOGIN_PATH, status_code=303)
            if token:
                logger.info("Invalid session cookie on %s, signing out", request.url.path)
                clear_auth_cookie(response)
            return response

        request.state.admin = claims
        return await call_next(request)
