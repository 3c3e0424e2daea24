"""
Custom action routes.

Member actions run against one record (``POST /{r}/{id}/actions/{slug}``)
and always redirect back to the record. Collection actions run against the
resource (``POST /{r}/actions/{slug}``) and redirect to the index unless
the handler returns its own response, such as a file download.

Handlers may be plain functions or coroutine functions.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from fastapi import APIRouter, Request
from starlette.responses import Response

from tableadmin.errors import ActionError, CsrfValidationError
from tableadmin.resources.forms import coerce_record_id
from tableadmin.resources.naming import slugify
from tableadmin.specs.resource import CollectionAction, MemberAction, ResourceDefinition

from .auth.csrf import validate_csrf
from .context import AdminContext

logger = logging.getLogger(__name__)

ActionT = TypeVar("ActionT", MemberAction, CollectionAction)


def find_action(actions: Sequence[ActionT], slug: str) -> ActionT | None:
    """The action whose slugified name equals ``slug``."""
    for action in actions:
        if slugify(action.name) == slug:
            return action
    return None


async def invoke_action(action: MemberAction | CollectionAction, *args: Any) -> Any:
    """Call a sync or async action handler and return its result.

    Raises:
        ActionError: wrapping any exception raised by the handler; its
            message reads ``"<name> failed: <reason>"``.
    """
    try:
        result = action.handler(*args)
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        raise ActionError(action.name, str(e)) from e
    return result


def create_action_router(resource: ResourceDefinition, ctx: AdminContext) -> APIRouter:
    """
    Create the member and collection action routes for one resource.

    Args:
        resource: Resource whose ``member_actions``/``collection_actions`` are served.
        ctx: Shared admin context.

    Returns:
        Router mounted under ``/{route_path}``.
    """
    router = APIRouter(prefix=resource.base_url, include_in_schema=False)
    options = resource.options

    @router.post("/actions/{slug}")
    async def run_collection_action(request: Request, slug: str) -> Response:
        form = await request.form()
        try:
            validate_csrf(request, form, ctx.tokens)
        except CsrfValidationError as e:
            return ctx.redirect(resource.base_url, "error", str(e))

        action = find_action(options.collection_actions, slug)
        if action is None:
            return ctx.redirect(resource.base_url, "error", f'Action "{slug}" not found.')

        try:
            result = await invoke_action(action, request, ctx.database)
        except ActionError as e:
            logger.exception("Collection action %r failed on %s", action.name, resource.table_name)
            return ctx.redirect(resource.base_url, "error", str(e))

        if isinstance(result, Response):
            return result

        logger.info("Ran collection action %r on %s", action.name, resource.table_name)
        return ctx.redirect(
            resource.base_url, "success", f"{action.name} completed successfully."
        )

    @router.post("/{record_id}/actions/{slug}")
    async def run_member_action(request: Request, record_id: str, slug: str) -> Response:
        show_url = resource.record_url(record_id)
        form = await request.form()
        try:
            validate_csrf(request, form, ctx.tokens)
        except CsrfValidationError as e:
            return ctx.redirect(show_url, "error", str(e))

        action = find_action(options.member_actions, slug)
        if action is None:
            return ctx.redirect(show_url, "error", f'Action "{slug}" not found.')

        try:
            key = coerce_record_id(resource.primary_key, record_id)
        except ValueError:
            return ctx.redirect(resource.base_url, "error", f"{resource.display_name} not found.")

        try:
            await invoke_action(action, key, ctx.database)
        except ActionError as e:
            logger.exception(
                "Member action %r failed on %s %s", action.name, resource.table_name, record_id
            )
            return ctx.redirect(show_url, "error", str(e))

        logger.info("Ran member action %r on %s %s", action.name, resource.table_name, record_id)
        return ctx.redirect(show_url, "success", f"{action.name} completed successfully.")

    return router
