"""
TableAdmin application assembly.

``TableAdmin`` validates the configuration, loads and validates resources,
builds the FastAPI application and serves it with uvicorn. Any
configuration problem raises ``ConfigurationError`` before a single
request is served.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from starlette.responses import Response

from tableadmin.config import AdminConfig
from tableadmin.database import as_database
from tableadmin.dialects import get_adapter
from tableadmin.errors import ConfigurationError
from tableadmin.resources.loader import (
    LoadResult,
    build_resources,
    load_resources,
    validate_resources,
)
from tableadmin.specs.resource import ResourceDefinition
from tableadmin.ui.views import render_message_page

from .action_routes import create_action_router
from .auth.contract import validate_admin_users_table
from .auth.crypto import hash_password
from .auth.middleware import SessionAuthMiddleware
from .auth.routes import create_auth_router
from .auth.tokens import TokenService
from .context import AdminContext
from .crud_routes import create_crud_router

logger = logging.getLogger(__name__)

NO_RESOURCES_MESSAGE = "No resources configured"


class TableAdmin:
    """
    Generated admin panel for a set of database tables.

    Example::

        admin = TableAdmin(define_config(
            database=engine,
            admin_users=admin_users,
            session_secret=os.environ["SESSION_SECRET"],
            resources_dir="admin/resources",
        ))
        admin.run()
    """

    def __init__(self, config: AdminConfig):
        """
        Validate the parts of the configuration that need no resources.

        Raises:
            ConfigurationError: for a malformed admin users table, an
                unsupported dialect, a short session secret or an unusable
                database value.
        """
        self.config = config
        validate_admin_users_table(config.admin_users)
        self.adapter = get_adapter(config.dialect)
        self.tokens = TokenService(config.session_secret)
        self.database = as_database(config.database)
        self._resources: tuple[ResourceDefinition, ...] | None = None
        self._app: FastAPI | None = None

    # =========================================================================
    # Resources
    # =========================================================================

    def _load(self) -> LoadResult:
        result = LoadResult()
        if self.config.resources:
            explicit = build_resources(self.config.resources, self.adapter)
            result.resources.extend(explicit.resources)
            result.errors.extend(explicit.errors)
        if self.config.resources_dir is not None:
            discovered = load_resources(self.config.resources_dir, self.adapter)
            result.resources.extend(discovered.resources)
            result.errors.extend(discovered.errors)
        return result

    def initialize(self) -> tuple[ResourceDefinition, ...]:
        """
        Load and validate every configured resource.

        Raises:
            ConfigurationError: listing every load or validation error.
        """
        result = self._load()
        if result.errors:
            for error in result.errors:
                logger.error(error)
            raise ConfigurationError(
                f"Failed to load resources. {len(result.errors)} error(s) found.",
                errors=result.errors,
            )

        validation_errors = validate_resources(result.resources)
        if validation_errors:
            for error in validation_errors:
                logger.error(error)
            raise ConfigurationError(
                f"Invalid resource configuration. {len(validation_errors)} error(s) found.",
                errors=validation_errors,
            )

        self._resources = tuple(result.resources)
        logger.info("Loaded %d resource(s)", len(self._resources))
        return self._resources

    @property
    def resources(self) -> tuple[ResourceDefinition, ...]:
        if self._resources is None:
            return self.initialize()
        return self._resources

    # =========================================================================
    # Application
    # =========================================================================

    def create_app(self) -> FastAPI:
        """Build the FastAPI application serving the admin panel."""
        resources = self.resources
        ctx = AdminContext(
            config=self.config,
            database=self.database,
            tokens=self.tokens,
            resources=resources,
        )

        app = FastAPI(title=self.config.title, docs_url=None, redoc_url=None, openapi_url=None)
        app.add_middleware(SessionAuthMiddleware, tokens=self.tokens)
        app.include_router(create_auth_router(ctx, self.config.admin_users))

        @app.get("/", include_in_schema=False)
        async def home(request: Request) -> Response:
            if resources:
                return ctx.redirect(resources[0].base_url)
            layout = ctx.layout(request, self.config.title, "/")
            return ctx.html(request, render_message_page(layout, NO_RESOURCES_MESSAGE))

        for resource in resources:
            app.include_router(create_action_router(resource, ctx))
            app.include_router(create_crud_router(resource, ctx))
            logger.debug("Mounted %s at %s", resource.table_name, resource.base_url)

        return app

    @property
    def app(self) -> FastAPI:
        """The ASGI application, built on first access."""
        if self._app is None:
            self._app = self.create_app()
        return self._app

    # =========================================================================
    # Admin users
    # =========================================================================

    def seed(self, email: str, password: str, **extra: Any) -> bool:
        """
        Create an admin user unless one with ``email`` already exists.

        Args:
            email: Login email.
            password: Plain-text password; stored as a PBKDF2 hash.
            **extra: Values for any additional columns of the admin users table.

        Returns:
            True if a user was created.
        """
        admin_users = self.config.admin_users
        if self.database.select(admin_users, where={"email": email}, limit=1):
            logger.info('Admin user "%s" already exists, skipping seed.', email)
            return False

        now = datetime.now(UTC)
        self.database.insert(
            admin_users,
            {
                "email": email,
                "password_hash": hash_password(password),
                "created_at": now,
                "updated_at": now,
                **extra,
            },
        )
        logger.info("Created admin user: %s", email)
        return True

    def run(self, host: str | None = None, port: int | None = None, **uvicorn_options: Any) -> None:
        """Serve the admin panel with uvicorn (blocking)."""
        import uvicorn

        host = host or self.config.host
        port = port or self.config.port
        app = self.app
        logger.info("TableAdmin running on http://%s:%d", host, port)
        uvicorn.run(app, host=host, port=port, **uvicorn_options)
