"""CRUD pages and form submissions for a resource."""

from __future__ import annotations

import re

import pytest
from starlette.testclient import TestClient

from tableadmin import DEFAULT_THEME, DatabaseOperationError, SQLAlchemyDatabase, TableAdmin

ROW_MARKER = f'<tr class="{DEFAULT_THEME.table_row}">'
FLASH_MARKER = 'role="alert"'


class InsertFailingDatabase(SQLAlchemyDatabase):
    def insert(self, table, values):
        raise DatabaseOperationError("disk full")


def disabled_link(page: int) -> re.Pattern[str]:
    return re.compile(rf'href="/cards\?page={page}"\s+class="[^"]*" aria-disabled="true"')


@pytest.fixture
def card_count(admin, cards_table):
    return lambda: admin.database.count(cards_table)


@pytest.fixture
def fetch_card(admin, cards_table):
    def fetch(card_id):
        rows = admin.database.select(cards_table, where={"id": card_id}, limit=1)
        return rows[0] if rows else None

    return fetch


# =============================================================================
# Index
# =============================================================================


class TestIndex:
    def test_empty_list(self, auth_client):
        response = auth_client.get("/cards")
        assert response.status_code == 200
        assert "No cards found." in response.text
        assert 'href="/cards/new"' in response.text

    def test_lists_records_without_passwords(self, auth_client, insert_card):
        insert_card(title="Visible", secret_password="hunter2")
        response = auth_client.get("/cards")
        assert "Visible" in response.text
        assert "hunter2" not in response.text
        assert "Secret password" not in response.text

    def test_paginates_twenty_per_page(self, auth_client, insert_card):
        for n in range(25):
            insert_card(title=f"Card {n}")

        first = auth_client.get("/cards")
        assert first.text.count(ROW_MARKER) == 20
        assert disabled_link(0).search(first.text)
        assert not disabled_link(2).search(first.text)

        second = auth_client.get("/cards?page=2")
        assert second.text.count(ROW_MARKER) == 5
        assert disabled_link(3).search(second.text)
        assert 'aria-current="page">2</a>' in second.text

    def test_single_page_has_no_pagination(self, auth_client, insert_card):
        insert_card()
        response = auth_client.get("/cards")
        assert 'aria-label="Pagination"' not in response.text

    def test_page_out_of_range(self, auth_client, insert_card):
        insert_card()
        response = auth_client.get("/cards?page=5")
        assert response.status_code == 200
        assert "Page 5 does not exist." in response.text
        assert 'href="/cards?page=1"' in response.text

    @pytest.mark.parametrize("page", ["abc", "0", "-3"])
    def test_invalid_page_falls_back_to_first(self, auth_client, insert_card, page):
        insert_card(title="Only")
        response = auth_client.get(f"/cards?page={page}")
        assert response.status_code == 200
        assert response.text.count(ROW_MARKER) == 1

    def test_sidebar_marks_current_resource(self, auth_client):
        response = auth_client.get("/cards")
        assert f'href="/cards" class="{DEFAULT_THEME.nav_link_active}"' in response.text


# =============================================================================
# Show
# =============================================================================


class TestShow:
    def test_shows_record(self, auth_client, insert_card):
        card = insert_card(title="Details", body="Some body", secret_password="hunter2")
        response = auth_client.get(f"/cards/{card['id']}")
        assert response.status_code == 200
        assert "Details" in response.text
        assert "Some body" in response.text
        assert "hunter2" not in response.text
        assert f"openModal('delete-{card['id']}')" in response.text
        assert f'action="/cards/{card["id"]}?_method=DELETE"' in response.text

    @pytest.mark.parametrize("path", ["/cards/999", "/cards/abc", "/cards/999/edit"])
    def test_not_found(self, auth_client, path):
        response = auth_client.get(path)
        assert response.status_code == 404
        assert "Card not found." in response.text
        assert 'href="/cards"' in response.text


# =============================================================================
# Create
# =============================================================================


class TestCreate:
    def test_form_renders_inputs(self, auth_client):
        response = auth_client.get("/cards/new")
        assert response.status_code == 200
        assert 'action="/cards"' in response.text
        assert 'name="title"' in response.text
        assert 'type="password" id="secret_password"' in response.text
        assert '<option value="published">' in response.text
        assert 'name="id"' not in response.text
        assert 'name="created_at"' not in response.text

    def test_creates_record(self, auth_client, csrf_token, fetch_card):
        token = csrf_token(auth_client, "/cards/new")
        response = auth_client.post(
            "/cards",
            data={
                "_csrf": token,
                "title": "Hello",
                "body": "World",
                "status": "",
                "extra": '{"tags": ["a", "b"]}',
                "secret_password": "hunter2",
            },
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/cards/1"

        card = fetch_card(1)
        assert card["title"] == "Hello"
        assert card["body"] == "World"
        assert card["status"] == "draft"
        assert card["is_pinned"] is False
        assert card["extra"] == {"tags": ["a", "b"]}
        assert card["secret_password"] == "hunter2"

        shown = auth_client.get("/cards/1")
        assert "Card created successfully." in shown.text
        assert shown.text.count(FLASH_MARKER) == 1

        again = auth_client.get("/cards/1")
        assert FLASH_MARKER not in again.text

    def test_checked_checkbox(self, auth_client, csrf_token, fetch_card):
        token = csrf_token(auth_client, "/cards/new")
        auth_client.post(
            "/cards",
            data={"_csrf": token, "title": "Pinned", "is_pinned": "true", "status": "archived"},
        )
        card = fetch_card(1)
        assert card["is_pinned"] is True
        assert card["status"] == "archived"

    def test_missing_required_field(self, auth_client, csrf_token, card_count):
        token = csrf_token(auth_client, "/cards/new")
        response = auth_client.post(
            "/cards", data={"_csrf": token, "title": "", "body": "Keep me"}
        )
        assert response.status_code == 422
        assert "This field is required." in response.text
        assert 'value="Keep me"' in response.text
        assert card_count() == 0

    def test_rejects_bad_csrf(self, auth_client, csrf_token, card_count):
        csrf_token(auth_client, "/cards/new")
        response = auth_client.post(
            "/cards", data={"_csrf": "forged", "title": "Nope"}, follow_redirects=False
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/cards/new"
        assert card_count() == 0

        form = auth_client.get("/cards/new")
        assert "Invalid request. Please try again." in form.text

    def test_database_failure(self, admin, engine, make_config, login, csrf_token, card_count):
        failing = TableAdmin(make_config(database=InsertFailingDatabase(engine)))
        with TestClient(failing.app) as client:
            login(client)
            token = csrf_token(client, "/cards/new")
            response = client.post(
                "/cards", data={"_csrf": token, "title": "Lost"}, follow_redirects=False
            )
            assert response.status_code == 303
            assert response.headers["location"] == "/cards/new"
            assert "Failed to create: disk full" in client.get("/cards/new").text
        assert card_count() == 0


# =============================================================================
# Update
# =============================================================================


class TestUpdate:
    def test_edit_form_prefills_values(self, auth_client, insert_card):
        card = insert_card(title="Before", status="published", secret_password="hunter2")
        response = auth_client.get(f"/cards/{card['id']}/edit")
        assert response.status_code == 200
        assert 'value="Before"' in response.text
        assert '<option value="published" selected>' in response.text
        assert f'action="/cards/{card["id"]}?_method=PUT"' in response.text
        assert "hunter2" not in response.text

    def test_updates_record(self, auth_client, insert_card, csrf_token, fetch_card):
        card = insert_card(title="Before", secret_password="hunter2", is_pinned=True)
        token = csrf_token(auth_client, f"/cards/{card['id']}/edit")
        response = auth_client.post(
            f"/cards/{card['id']}?_method=PUT",
            data={"_csrf": token, "title": "After", "status": "published", "secret_password": ""},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == f"/cards/{card['id']}"

        updated = fetch_card(card["id"])
        assert updated["title"] == "After"
        assert updated["status"] == "published"
        assert updated["is_pinned"] is False
        assert updated["secret_password"] == "hunter2"
        assert updated["updated_at"] >= card["updated_at"]

        shown = auth_client.get(f"/cards/{card['id']}")
        assert "Card updated successfully." in shown.text

    def test_new_password_replaces_old(self, auth_client, insert_card, csrf_token, fetch_card):
        card = insert_card(secret_password="hunter2")
        token = csrf_token(auth_client, f"/cards/{card['id']}/edit")
        auth_client.post(
            f"/cards/{card['id']}?_method=PUT",
            data={"_csrf": token, "title": "Card", "status": "draft", "secret_password": "new"},
        )
        assert fetch_card(card["id"])["secret_password"] == "new"

    def test_missing_required_field(self, auth_client, insert_card, csrf_token, fetch_card):
        card = insert_card(title="Keep")
        token = csrf_token(auth_client, f"/cards/{card['id']}/edit")
        response = auth_client.post(
            f"/cards/{card['id']}?_method=PUT",
            data={"_csrf": token, "title": "", "status": "draft"},
        )
        assert response.status_code == 422
        assert "This field is required." in response.text
        assert fetch_card(card["id"])["title"] == "Keep"

    def test_missing_record(self, auth_client, csrf_token):
        token = csrf_token(auth_client, "/cards/new")
        response = auth_client.post(
            "/cards/999?_method=PUT", data={"_csrf": token, "title": "x", "status": "draft"}
        )
        assert response.status_code == 404
        assert "Card not found." in response.text

    def test_rejects_bad_csrf(self, auth_client, insert_card, fetch_card):
        card = insert_card(title="Keep")
        response = auth_client.post(
            f"/cards/{card['id']}?_method=PUT",
            data={"_csrf": "forged", "title": "Changed", "status": "draft"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == f"/cards/{card['id']}/edit"
        assert fetch_card(card["id"])["title"] == "Keep"


# =============================================================================
# Destroy
# =============================================================================


class TestDestroy:
    def test_deletes_record(self, auth_client, insert_card, csrf_token, card_count):
        card = insert_card()
        token = csrf_token(auth_client, f"/cards/{card['id']}")
        response = auth_client.post(
            f"/cards/{card['id']}?_method=DELETE",
            data={"_csrf": token},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/cards"
        assert card_count() == 0

        index = auth_client.get("/cards")
        assert "Card deleted successfully." in index.text

    def test_already_deleted(self, auth_client, insert_card, csrf_token):
        card = insert_card()
        for _ in range(2):
            token = csrf_token(auth_client, "/cards/new")
            response = auth_client.post(
                f"/cards/{card['id']}?_method=DELETE",
                data={"_csrf": token},
                follow_redirects=False,
            )
            assert response.status_code == 303
            assert response.headers["location"] == "/cards"

        index = auth_client.get("/cards")
        assert "Card was already deleted." in index.text

    def test_method_override_is_case_insensitive(
        self, auth_client, insert_card, csrf_token, card_count
    ):
        card = insert_card()
        token = csrf_token(auth_client, "/cards/new")
        auth_client.post(f"/cards/{card['id']}?_method=delete", data={"_csrf": token})
        assert card_count() == 0

    def test_rejects_bad_csrf(self, auth_client, insert_card, card_count):
        card = insert_card()
        response = auth_client.post(
            f"/cards/{card['id']}?_method=DELETE",
            data={"_csrf": "forged"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == f"/cards/{card['id']}"
        assert card_count() == 1
