"""
CRUD route generation.

Builds one APIRouter per resource with the seven server-rendered
operations. PUT and DELETE arrive as POST with a ``_method`` query
parameter, because HTML forms only submit GET and POST.

Recoverable failures never escape a handler: CSRF and database errors
become a flash message plus a 303 redirect, and unknown records render the
resource's 404 page.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import Response

from tableadmin.database import Record
from tableadmin.errors import CsrfValidationError, DatabaseOperationError, RecordNotFoundError
from tableadmin.resources.forms import (
    coerce_record_id,
    drop_blank_defaults,
    drop_blank_passwords,
    missing_required_fields,
    parse_form_values,
)
from tableadmin.resources.policy import updated_at_column
from tableadmin.specs.resource import ResourceDefinition
from tableadmin.ui.components import Pagination
from tableadmin.ui.views import (
    render_form_page,
    render_index_page,
    render_not_found_page,
    render_show_page,
)

from .auth.csrf import validate_csrf
from .context import AdminContext

logger = logging.getLogger(__name__)


def parse_page(raw: str | None) -> int:
    """1-based page number from the query string; missing, invalid or < 1 means 1."""
    if raw is None:
        return 1
    try:
        page = int(raw)
    except ValueError:
        return 1
    return max(page, 1)


def create_crud_router(resource: ResourceDefinition, ctx: AdminContext) -> APIRouter:
    """
    Create the CRUD routes for one resource.

    Args:
        resource: The resource to serve under ``/{route_path}``.
        ctx: Shared admin context.

    Returns:
        Router with index, new, create, show, edit, update and destroy.
    """
    router = APIRouter(prefix=resource.base_url, include_in_schema=False)
    database = ctx.database
    primary_key = resource.primary_key
    display_name = resource.display_name
    new_url = f"{resource.base_url}/new"

    def load_record(raw_id: str) -> Record:
        """Fetch a record by the id from the URL.

        Raises:
            RecordNotFoundError: if the id does not fit the key type or no row matches.
        """
        try:
            record_id = coerce_record_id(primary_key, raw_id)
        except ValueError:
            raise RecordNotFoundError(resource.table_name, raw_id) from None
        rows = database.select(resource.table, where={primary_key.name: record_id}, limit=1)
        if not rows:
            raise RecordNotFoundError(resource.table_name, raw_id)
        return rows[0]

    def not_found(request: Request) -> Response:
        layout = ctx.layout(request, "Not Found", resource.base_url)
        return ctx.html(request, render_not_found_page(layout, resource), status_code=404)

    def form_page(
        request: Request,
        title: str,
        record: Record | None = None,
        errors: dict[str, str] | None = None,
        status_code: int = 200,
    ) -> Response:
        csrf_token = ctx.tokens.create_csrf_token()
        layout = ctx.layout(request, title, resource.base_url)
        html = render_form_page(layout, resource, csrf_token, record=record, errors=errors)
        return ctx.html(request, html, status_code=status_code, csrf_token=csrf_token)

    # =========================================================================
    # Read
    # =========================================================================

    @router.get("")
    async def index(request: Request) -> Response:
        page = parse_page(request.query_params.get("page"))
        per_page = resource.options.per_page

        total_count = database.count(resource.table)
        records = database.select(resource.table, limit=per_page, offset=(page - 1) * per_page)

        pagination = Pagination.for_count(total_count, per_page, page, resource.base_url)
        csrf_token = ctx.tokens.create_csrf_token()
        layout = ctx.layout(request, f"{display_name}s", resource.base_url)
        html = render_index_page(layout, resource, records, pagination, csrf_token)
        return ctx.html(request, html, csrf_token=csrf_token)

    @router.get("/new")
    async def new(request: Request) -> Response:
        return form_page(request, f"Create {display_name}")

    @router.get("/{record_id}")
    async def show(request: Request, record_id: str) -> Response:
        try:
            record = load_record(record_id)
        except RecordNotFoundError:
            return not_found(request)

        csrf_token = ctx.tokens.create_csrf_token()
        layout = ctx.layout(request, f"{display_name} #{record_id}", resource.base_url)
        html = render_show_page(layout, resource, record, csrf_token)
        return ctx.html(request, html, csrf_token=csrf_token)

    @router.get("/{record_id}/edit")
    async def edit(request: Request, record_id: str) -> Response:
        try:
            record = load_record(record_id)
        except RecordNotFoundError:
            return not_found(request)
        return form_page(request, f"Edit {display_name} #{record_id}", record)

    # =========================================================================
    # Write
    # =========================================================================

    @router.post("")
    async def create(request: Request) -> Response:
        form = await request.form()
        try:
            validate_csrf(request, form, ctx.tokens)
        except CsrfValidationError as e:
            return ctx.redirect(new_url, "error", str(e))

        values = parse_form_values(
            form, resource.columns, resource.options.permit_params, resource.options.form
        )
        values = drop_blank_defaults(values, resource.columns)
        errors = missing_required_fields(values, resource.columns)
        if errors:
            return form_page(
                request, f"Create {display_name}", values, errors=errors, status_code=422
            )

        try:
            created = database.insert(resource.table, values)
        except DatabaseOperationError as e:
            logger.warning("Create failed for %s: %s", resource.table_name, e)
            return ctx.redirect(new_url, "error", f"Failed to create: {e}")

        record_id = created[primary_key.name]
        logger.info("Created %s %s", resource.table_name, record_id)
        return ctx.redirect(
            resource.record_url(record_id), "success", f"{display_name} created successfully."
        )

    @router.post("/{record_id}")
    async def update_or_destroy(request: Request, record_id: str) -> Response:
        method = request.query_params.get("_method", "PUT").upper()
        form = await request.form()
        if method == "DELETE":
            return destroy(request, form, record_id)
        return update(request, form, record_id)

    def update(request: Request, form: Any, raw_id: str) -> Response:
        edit_url = resource.record_url(raw_id, "edit")
        try:
            validate_csrf(request, form, ctx.tokens)
        except CsrfValidationError as e:
            return ctx.redirect(edit_url, "error", str(e))

        try:
            record = load_record(raw_id)
        except RecordNotFoundError:
            return not_found(request)
        record_id = record[primary_key.name]

        values = parse_form_values(
            form, resource.columns, resource.options.permit_params, resource.options.form
        )
        values = drop_blank_passwords(values, resource.columns)
        errors = missing_required_fields(values, resource.columns)
        if errors:
            return form_page(
                request,
                f"Edit {display_name} #{raw_id}",
                {**record, **values},
                errors=errors,
                status_code=422,
            )

        stamp = updated_at_column(resource.columns)
        if stamp is not None:
            values[stamp.name] = datetime.now(UTC)

        try:
            database.update(resource.table, primary_key.name, record_id, values)
        except DatabaseOperationError as e:
            logger.warning("Update failed for %s %s: %s", resource.table_name, raw_id, e)
            return ctx.redirect(edit_url, "error", f"Failed to update: {e}")

        logger.info("Updated %s %s", resource.table_name, raw_id)
        return ctx.redirect(
            resource.record_url(record_id), "success", f"{display_name} updated successfully."
        )

    def destroy(request: Request, form: Any, raw_id: str) -> Response:
        show_url = resource.record_url(raw_id)
        try:
            validate_csrf(request, form, ctx.tokens)
        except CsrfValidationError as e:
            return ctx.redirect(show_url, "error", str(e))

        try:
            record_id = coerce_record_id(primary_key, raw_id)
        except ValueError:
            record_id = None

        try:
            deleted = (
                database.delete(resource.table, primary_key.name, record_id)
                if record_id is not None
                else 0
            )
        except DatabaseOperationError as e:
            logger.warning("Delete failed for %s %s: %s", resource.table_name, raw_id, e)
            return ctx.redirect(show_url, "error", f"Failed to delete: {e}")

        if not deleted:
            logger.info("Delete of missing %s %s ignored", resource.table_name, raw_id)
            return ctx.redirect(
                resource.base_url, "info", f"{display_name} was already deleted."
            )

        logger.info("Deleted %s %s", resource.table_name, raw_id)
        return ctx.redirect(resource.base_url, "success", f"{display_name} deleted successfully.")

    return router
