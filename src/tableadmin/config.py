"""
Admin panel configuration.

An ``AdminConfig`` is built once (usually with :func:`define_config`) and
handed to ``TableAdmin``. It is immutable after construction.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from tableadmin.ui.theme import DEFAULT_THEME, Theme

Dialect = Literal["postgresql", "mysql", "sqlite"]

DEFAULT_PORT = 3001


class AdminConfig(BaseModel):
    """Configuration for a TableAdmin instance."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    database: Any = Field(
        description="A Database implementation, a SQLAlchemy Engine, or a database URL"
    )
    dialect: Dialect = Field(default="postgresql", description="Dialect adapter to use")
    admin_users: Any = Field(description="Admin users table (SQLAlchemy Table or model)")
    session_secret: str = Field(description="Secret for signing session and CSRF tokens")
    resources_dir: Path | None = Field(
        default=None, description="Directory of resource modules to discover"
    )
    resources: tuple[Any, ...] = Field(
        default=(), description="Explicitly registered resources (from define_resource)"
    )
    title: str = Field(default="TableAdmin", description="Title shown in the layout")
    secure_cookies: bool = Field(
        default=False, description="Always set the Secure flag on cookies"
    )
    host: str = Field(default="127.0.0.1", description="Bind address for run()")
    port: int = Field(default=DEFAULT_PORT, description="Port for run()")
    theme: Theme = Field(default=DEFAULT_THEME, description="Tailwind class table")


def define_config(**kwargs: Any) -> AdminConfig:
    """Build an ``AdminConfig``; keyword arguments are its fields."""
    return AdminConfig(**kwargs)
