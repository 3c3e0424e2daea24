"""Shared pytest fixtures for TableAdmin tests."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest
import sqlalchemy as sa
from sqlalchemy.pool import StaticPool
from starlette.testclient import TestClient

from tableadmin import (
    AdminConfig,
    CollectionAction,
    MemberAction,
    TableAdmin,
    create_csv_export_action,
    define_config,
    define_resource,
)

SESSION_SECRET = "test-session-secret-with-at-least-32-chars"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse battery staple"

CSRF_FIELD_RE = re.compile(r'name="_csrf" value="([^"]+)"')


def _now() -> datetime:
    return datetime.now(UTC)


metadata = sa.MetaData()

admin_users = sa.Table(
    "admin_users",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True),
    sa.Column("email", sa.String(255), nullable=False, unique=True),
    sa.Column("password_hash", sa.String(255), nullable=False),
    sa.Column("created_at", sa.DateTime, nullable=False, default=_now),
    sa.Column("updated_at", sa.DateTime, nullable=False, default=_now),
)

cards = sa.Table(
    "cards",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True),
    sa.Column("title", sa.String(200), nullable=False),
    sa.Column("body", sa.Text),
    sa.Column(
        "status",
        sa.Enum("draft", "published", "archived", name="card_status"),
        nullable=False,
        default="draft",
    ),
    sa.Column("is_pinned", sa.Boolean, nullable=False, default=False),
    sa.Column("extra", sa.JSON),
    sa.Column("secret_password", sa.String(100)),
    sa.Column("created_at", sa.DateTime, nullable=False, default=_now),
    sa.Column("updated_at", sa.DateTime, nullable=False, default=_now),
)


# =============================================================================
# Card actions
# =============================================================================


def publish_card(record_id: Any, database: Any) -> None:
    database.update(cards, "id", record_id, {"status": "published"})


def explode(record_id: Any, database: Any) -> None:
    raise RuntimeError("boom")


async def unpin_all(request: Any, database: Any) -> None:
    for record in database.select(cards):
        database.update(cards, "id", record["id"], {"is_pinned": False})


CARD_RESOURCE = define_resource(
    cards,
    member_actions=[
        MemberAction(name="Publish", handler=publish_card, destructive=False),
        MemberAction(name="Explode", handler=explode),
    ],
    collection_actions=[
        create_csv_export_action(cards),
        CollectionAction(name="Unpin All", handler=unpin_all),
    ],
)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine() -> Iterator[sa.Engine]:
    """In-memory SQLite shared across threads (TestClient runs the app in its own)."""
    engine = sa.create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


# =============================================================================
# Admin application
# =============================================================================


@pytest.fixture
def make_config(engine: sa.Engine) -> Callable[..., AdminConfig]:
    """Factory for configs pointing at the test engine; keyword arguments override."""

    def factory(**overrides: Any) -> AdminConfig:
        options: dict[str, Any] = {
            "database": engine,
            "admin_users": admin_users,
            "session_secret": SESSION_SECRET,
            "resources": (CARD_RESOURCE,),
        }
        options.update(overrides)
        return define_config(**options)

    return factory


@pytest.fixture
def admin(make_config: Callable[..., AdminConfig]) -> TableAdmin:
    admin = TableAdmin(make_config())
    admin.seed(ADMIN_EMAIL, ADMIN_PASSWORD)
    return admin


@pytest.fixture
def client(admin: TableAdmin) -> Iterator[TestClient]:
    with TestClient(admin.app) as client:
        yield client


@pytest.fixture
def csrf_token() -> Callable[[TestClient, str], str]:
    """GET a form-bearing page and return the CSRF token it minted."""

    def fetch(client: TestClient, path: str) -> str:
        response = client.get(path)
        match = CSRF_FIELD_RE.search(response.text)
        assert match is not None, f"no CSRF field on {path}"
        return match.group(1)

    return fetch


@pytest.fixture
def login(
    csrf_token: Callable[[TestClient, str], str],
) -> Callable[..., httpx.Response]:
    """Submit the login form; returns the unfollowed response."""

    def submit(
        client: TestClient, email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD
    ) -> httpx.Response:
        token = csrf_token(client, "/login")
        return client.post(
            "/login",
            data={"_csrf": token, "email": email, "password": password},
            follow_redirects=False,
        )

    return submit


@pytest.fixture
def auth_client(client: TestClient, login: Callable[..., httpx.Response]) -> TestClient:
    """A client holding a valid admin session."""
    response = login(client)
    assert response.status_code == 303
    return client


@pytest.fixture
def insert_card(admin: TableAdmin) -> Callable[..., dict[str, Any]]:
    def insert(**values: Any) -> dict[str, Any]:
        values.setdefault("title", "Card")
        return admin.database.insert(cards, values)

    return insert


@pytest.fixture
def cards_table() -> sa.Table:
    return cards


@pytest.fixture
def admin_users_table() -> sa.Table:
    return admin_users


@pytest.fixture
def admin_credentials() -> tuple[str, str]:
    return ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def card_resource() -> Any:
    return CARD_RESOURCE
