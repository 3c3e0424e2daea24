"""
Shared request-handling context.

One ``AdminContext`` is built when the app is assembled and handed to every
router. It holds only immutable startup state.
"""

from __future__ import annotations

from dataclasses import dataclass

from starlette.requests import Request
from starlette.responses import HTMLResponse, RedirectResponse

from tableadmin.config import AdminConfig
from tableadmin.database import Database
from tableadmin.specs.resource import ResourceDefinition
from tableadmin.ui.views import LayoutContext

from .auth.crypto import cookie_secure
from .auth.csrf import set_csrf_cookie
from .auth.middleware import get_admin
from .auth.tokens import TokenService
from .flash import FlashType, clear_flash, has_flash_cookie, read_flash, set_flash


@dataclass(frozen=True)
class AdminContext:
    """Configuration, storage and resources shared by the route handlers."""

    config: AdminConfig
    database: Database
    tokens: TokenService
    resources: tuple[ResourceDefinition, ...]

    def is_secure(self, request: Request) -> bool:
        return cookie_secure(request, self.config.secure_cookies)

    def layout(self, request: Request, title: str, current_path: str) -> LayoutContext:
        """Layout for a page, consuming any pending flash message."""
        admin = get_admin(request)
        return LayoutContext(
            title=title,
            admin_email=admin.email if admin else "",
            resources=self.resources,
            current_path=current_path,
            flash=read_flash(request),
            app_title=self.config.title,
            theme=self.config.theme,
        )

    def html(
        self,
        request: Request,
        content: str,
        *,
        status_code: int = 200,
        csrf_token: str | None = None,
    ) -> HTMLResponse:
        """HTML response that stores ``csrf_token`` and clears a displayed flash."""
        response = HTMLResponse(content, status_code=status_code)
        if csrf_token is not None:
            set_csrf_cookie(response, csrf_token, secure=self.is_secure(request))
        if has_flash_cookie(request):
            clear_flash(response)
        return response

    def redirect(
        self, url: str, flash_type: FlashType | None = None, message: str | None = None
    ) -> RedirectResponse:
        """303 redirect, optionally carrying a flash message."""
        response = RedirectResponse(url, status_code=303)
        if flash_type is not None and message is not None:
            set_flash(response, flash_type, message)
        return response
