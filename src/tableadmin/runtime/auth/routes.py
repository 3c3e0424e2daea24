"""Login and logout routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from starlette.datastructures import FormData
from starlette.responses import RedirectResponse, Response

from tableadmin.errors import CsrfValidationError, DatabaseOperationError
from tableadmin.runtime.context import AdminContext
from tableadmin.ui.views import render_login_page

from .crypto import verify_password
from .csrf import validate_csrf
from .middleware import LOGIN_PATH, clear_auth_cookie, set_auth_cookie

logger = logging.getLogger(__name__)

LOGIN_ERROR = "Invalid email or password."


def create_auth_router(ctx: AdminContext, admin_users: object) -> APIRouter:
    """
    Create the login/logout routes.

    Every login failure, whatever its cause, re-renders the form with the
    same generic message.

    Args:
        ctx: Shared admin context.
        admin_users: Table holding ``email`` and ``password_hash``.
    """
    router = APIRouter(include_in_schema=False)
    config = ctx.config

    def login_page(request: Request, error: str | None = None) -> Response:
        csrf_token = ctx.tokens.create_csrf_token()
        html = render_login_page(csrf_token, error, app_title=config.title, theme=config.theme)
        return ctx.html(request, html, csrf_token=csrf_token)

    def authenticate(form: FormData) -> tuple[object, str] | None:
        """The admin's id and email when the credentials match, else None."""
        email = form.get("email")
        password = form.get("password")
        if not isinstance(email, str) or not isinstance(password, str):
            return None
        if not email or not password:
            return None

        try:
            rows = ctx.database.select(admin_users, where={"email": email}, limit=1)
        except DatabaseOperationError as e:
            logger.error("Admin lookup failed: %s", e)
            return None
        if not rows:
            return None

        admin = rows[0]
        if not verify_password(password, admin["password_hash"] or ""):
            return None
        return admin["id"], admin["email"]

    @router.get(LOGIN_PATH)
    async def login_form(request: Request) -> Response:
        return login_page(request)

    @router.post(LOGIN_PATH)
    async def login(request: Request) -> Response:
        form = await request.form()
        try:
            validate_csrf(request, form, ctx.tokens)
        except CsrfValidationError:
            return login_page(request, LOGIN_ERROR)

        admin = authenticate(form)
        if admin is None:
            logger.info("Failed sign-in attempt")
            return login_page(request, LOGIN_ERROR)

        admin_id, email = admin
        token = ctx.tokens.create_session_token(admin_id, email)
        response = RedirectResponse("/", status_code=303)
        set_auth_cookie(response, token, secure=ctx.is_secure(request))
        logger.info("Admin %s signed in", email)
        return response

    @router.api_route("/logout", methods=["GET", "POST"])
    async def logout(request: Request) -> Response:
        response = RedirectResponse(LOGIN_PATH, status_code=303)
        clear_auth_cookie(response)
        return response

    return router
