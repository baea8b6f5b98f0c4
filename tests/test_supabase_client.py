# =============================================================================
# tests/test_supabase_client.py - Store Wrapper Tests
# =============================================================================
# Tests for lib/supabase_client.py against the in-memory fake, plus a few
# MagicMock-based checks of error translation.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest
from postgrest.exceptions import APIError

from lib.supabase_client import (
    DuplicateRowError,
    StoreError,
    SupabaseClient,
    is_unique_violation,
)
from tests.fakes import BrokenSupabase


class TestReads:
    """fetch_* and count helpers."""

    def test_fetch_one_missing(self, store):
        assert store.fetch_one("users", id="nope") is None

    def test_insert_then_fetch(self, store):
        row = store.insert("users", {"username": "alex", "email": "a@x.com"})

        fetched = store.fetch_one("users", id=row["id"])

        assert fetched["username"] == "alex"
        assert fetched["created_at"]

    def test_fetch_in_empty_values(self, store):
        """No ids means no query and no rows."""
        assert store.fetch_in("users", "id", []) == []

    def test_fetch_page_newest_first(self, store):
        for n in range(5):
            store.insert("artworks", {"title": f"art {n}", "image_url": "/uploads/x.png", "artist_id": "a"})

        rows, total = store.fetch_page("artworks", offset=0, limit=2)

        assert total == 5
        assert [row["title"] for row in rows] == ["art 4", "art 3"]

    def test_fetch_page_second_page(self, store):
        for n in range(5):
            store.insert("artworks", {"title": f"art {n}", "image_url": "/uploads/x.png", "artist_id": "a"})

        rows, total = store.fetch_page("artworks", offset=4, limit=2)

        assert total == 5
        assert [row["title"] for row in rows] == ["art 0"]

    def test_count_and_count_in(self, store):
        store.insert("likes", {"user_id": "u1", "artwork_id": "a1"})
        store.insert("likes", {"user_id": "u2", "artwork_id": "a1"})
        store.insert("likes", {"user_id": "u1", "artwork_id": "a2"})

        assert store.count("likes", artwork_id="a1") == 2
        assert store.count_in("likes", "artwork_id", ["a1", "a2"]) == 3
        assert store.count_in("likes", "artwork_id", []) == 0


class TestWrites:
    """insert / update / delete."""

    def test_duplicate_insert(self, store):
        store.insert("likes", {"user_id": "u1", "artwork_id": "a1"})

        with pytest.raises(DuplicateRowError) as exc_info:
            store.insert("likes", {"user_id": "u1", "artwork_id": "a1"})

        assert exc_info.value.code == "DUPLICATE_ROW"
        assert exc_info.value.table == "likes"

    def test_update_returns_rows(self, store):
        row = store.insert("users", {"username": "alex", "email": "a@x.com"})

        updated = store.update("users", {"bio": "hi"}, id=row["id"])

        assert updated[0]["bio"] == "hi"

    def test_delete_requires_filters(self, store):
        with pytest.raises(StoreError) as exc_info:
            store.delete("likes")

        assert exc_info.value.code == "UNFILTERED_DELETE"

    def test_delete_returns_removed_rows(self, store):
        store.insert("likes", {"user_id": "u1", "artwork_id": "a1"})

        removed = store.delete("likes", artwork_id="a1")

        assert len(removed) == 1
        assert store.count("likes", artwork_id="a1") == 0


class TestErrors:
    """Failures are translated into StoreError."""

    def test_query_failure_wrapped(self):
        store = SupabaseClient("https://x.supabase.co", "key", client=BrokenSupabase())

        with pytest.raises(StoreError) as exc_info:
            store.fetch_one("users", id="x")

        assert exc_info.value.code == "FETCH_FAILED"
        assert "connection refused" in exc_info.value.message

    def test_ping_failure(self):
        store = SupabaseClient("https://x.supabase.co", "key", client=BrokenSupabase())

        with pytest.raises(StoreError) as exc_info:
            store.ping()

        assert exc_info.value.code == "PING_FAILED"

    def test_insert_with_no_data(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[])
        store = SupabaseClient("https://x.supabase.co", "key", client=client)

        with pytest.raises(StoreError) as exc_info:
            store.insert("users", {"username": "alex"})

        assert exc_info.value.code == "INSERT_NO_DATA"

    def test_is_unique_violation(self):
        assert is_unique_violation(APIError({"code": "23505", "message": "dup"})) is True
        assert is_unique_violation(APIError({"code": "23514", "message": "check"})) is False
        assert is_unique_violation(ValueError("23505")) is False

    def test_str_includes_suggestion(self):
        error = StoreError("Boom", code="X", suggestion="Try again")

        assert str(error) == "[X] Boom Suggestion: Try again"


class TestLifecycle:
    """Client creation and close."""

    @patch("lib.supabase_client.create_client")
    def test_client_created_lazily(self, mock_create):
        store = SupabaseClient("https://x.supabase.co", "key")

        mock_create.assert_not_called()
        _ = store.client
        _ = store.client

        mock_create.assert_called_once_with("https://x.supabase.co", "key")

    @patch("lib.supabase_client.create_client", side_effect=Exception("bad url"))
    def test_client_init_failure(self, mock_create):
        store = SupabaseClient("nonsense", "key")

        with pytest.raises(StoreError) as exc_info:
            _ = store.client

        assert exc_info.value.code == "CLIENT_INIT_FAILED"

    @patch("lib.supabase_client.create_client")
    def test_close_drops_client(self, mock_create):
        store = SupabaseClient("https://x.supabase.co", "key")
        _ = store.client

        store.close()
        _ = store.client

        assert mock_create.call_count == 2
