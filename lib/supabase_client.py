# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase table operations.
# One instance is built when the application starts (see app/main.py lifespan),
# stored on app.state and handed to services through FastAPI dependencies.
#
# The wrapper keeps PostgREST specifics in one place:
# - Row helpers (fetch_one, fetch_all, fetch_in, fetch_page)
# - Exact counts for derived values (likes, followers, ...)
# - Unique-constraint violations surfaced as DuplicateRowError
#
# Usage:
#   store = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
#   user = store.fetch_one("users", id=user_id)
#   store.close()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client, create_client

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class StoreError(Exception):
    """
    Error during data store operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "STORE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DuplicateRowError(StoreError):
    """Raised when an insert violates a unique constraint."""

    def __init__(self, table: str, error: str):
        super().__init__(
            message=f"Duplicate row in {table}: {error}",
            code="DUPLICATE_ROW",
            details={"table": table},
        )
        self.table = table


def is_unique_violation(exc: Exception) -> bool:
    """Check whether a PostgREST error is a unique-constraint violation."""
    return isinstance(exc, APIError) and exc.code == UNIQUE_VIOLATION


class SupabaseClient:
    """
    Wrapper around a Supabase client with an explicit lifecycle.

    The underlying client is created on first use, so constructing the
    wrapper never touches the network. Call close() at shutdown.

    Example:
        store = SupabaseClient(url, key)
        rows, total = store.fetch_page("artworks", offset=0, limit=20)
        store.close()
    """

    def __init__(self, url: str, key: str, client: Client | None = None):
        self._url = url
        self._key = key
        self._client = client

    @property
    def client(self) -> Client:
        """
        Get or create the underlying Supabase client.

        Uses the service_role key, which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            StoreError: If client creation fails
        """
        if self._client is None:
            try:
                self._client = create_client(self._url, self._key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise StoreError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                )
        return self._client

    def table(self, name: str):
        """Start a query on a table."""
        return self.client.table(name)

    def close(self) -> None:
        """Release the client. A later call to `client` builds a new one."""
        if self._client is not None:
            logger.info("Closing Supabase client")
        self._client = None

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def fetch_one(
        self,
        table: str,
        columns: str = "*",
        **filters: Any,
    ) -> dict[str, Any] | None:
        """
        Fetch the first row matching all equality filters.

        Args:
            table: Table name
            columns: PostgREST column list (default: all)
            **filters: column=value equality filters

        Returns:
            Row dict, or None if nothing matches

        Raises:
            StoreError: If the query fails
        """
        query = self.table(table).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            response = query.limit(1).execute()
        except Exception as e:
            raise StoreError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": _printable(filters)},
            )

        rows = response.data or []
        return rows[0] if rows else None

    def fetch_all(
        self,
        table: str,
        columns: str = "*",
        order_by: str | None = None,
        desc: bool = False,
        **filters: Any,
    ) -> list[dict[str, Any]]:
        """
        Fetch every row matching all equality filters.

        Raises:
            StoreError: If the query fails
        """
        query = self.table(table).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=desc)

        try:
            response = query.execute()
        except Exception as e:
            raise StoreError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": _printable(filters)},
            )

        return response.data or []

    def fetch_in(
        self,
        table: str,
        column: str,
        values: list[Any],
        columns: str = "*",
        **filters: Any,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows whose `column` is one of `values`.

        Returns an empty list without querying when `values` is empty.

        Raises:
            StoreError: If the query fails
        """
        if not values:
            return []

        query = self.table(table).select(columns).in_(column, list(values))
        for key, value in filters.items():
            query = query.eq(key, value)

        try:
            response = query.execute()
        except Exception as e:
            raise StoreError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "column": column},
            )

        return response.data or []

    def fetch_page(
        self,
        table: str,
        offset: int,
        limit: int,
        columns: str = "*",
        order_by: str = "created_at",
        desc: bool = True,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Fetch one page of rows plus the total row count.

        Args:
            table: Table name
            offset: Rows to skip
            limit: Page size
            columns: PostgREST column list
            order_by: Sort column
            desc: Sort descending

        Returns:
            Tuple of (rows, total count)

        Raises:
            StoreError: If the query fails
        """
        query = (
            self.table(table)
            .select(columns, count="exact")
            .order(order_by, desc=desc)
            .range(offset, offset + limit - 1)
        )

        try:
            response = query.execute()
        except Exception as e:
            raise StoreError(
                message=f"Failed to list {table}: {e}",
                code="LIST_FAILED",
                details={"table": table, "offset": offset, "limit": limit},
            )

        return response.data or [], response.count or 0

    def count(self, table: str, **filters: Any) -> int:
        """
        Exact number of rows matching all equality filters.

        Raises:
            StoreError: If the query fails
        """
        query = self.table(table).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            response = query.execute()
        except Exception as e:
            raise StoreError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                details={"table": table, "filters": _printable(filters)},
            )

        return response.count or 0

    def count_in(self, table: str, column: str, values: list[Any]) -> int:
        """
        Exact number of rows whose `column` is one of `values`.

        Raises:
            StoreError: If the query fails
        """
        if not values:
            return 0

        try:
            response = (
                self.table(table)
                .select("id", count="exact")
                .in_(column, list(values))
                .execute()
            )
        except Exception as e:
            raise StoreError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                details={"table": table, "column": column},
            )

        return response.count or 0

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated columns.

        Raises:
            DuplicateRowError: If a unique constraint rejects the row
            StoreError: If the insert fails for another reason
        """
        try:
            response = self.table(table).insert(data).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise DuplicateRowError(table, str(e))
            raise StoreError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
            )

        if response.data:
            return response.data[0]
        raise StoreError(
            message=f"Insert into {table} returned no data",
            code="INSERT_NO_DATA",
        )

    def update(
        self,
        table: str,
        data: dict[str, Any],
        **filters: Any,
    ) -> list[dict[str, Any]]:
        """
        Update rows matching all equality filters.

        Returns:
            The updated rows

        Raises:
            DuplicateRowError: If the update violates a unique constraint
            StoreError: If the update fails for another reason
        """
        query = self.table(table).update(data)
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            response = query.execute()
        except Exception as e:
            if is_unique_violation(e):
                raise DuplicateRowError(table, str(e))
            raise StoreError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "filters": _printable(filters)},
            )

        return response.data or []

    def delete(self, table: str, **filters: Any) -> list[dict[str, Any]]:
        """
        Delete rows matching all equality filters.

        Filters are required so a bare call can never empty a table.

        Returns:
            The deleted rows

        Raises:
            StoreError: If the delete fails
        """
        if not filters:
            raise StoreError(
                message=f"Refusing to delete from {table} without filters",
                code="UNFILTERED_DELETE",
            )

        query = self.table(table).delete()
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            response = query.execute()
        except Exception as e:
            raise StoreError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": _printable(filters)},
            )

        return response.data or []

    def ping(self) -> None:
        """
        Run a trivial query to check connectivity.

        Raises:
            StoreError: If the store is unreachable
        """
        try:
            self.table("users").select("id").limit(1).execute()
        except Exception as e:
            raise StoreError(
                message=f"Store is unreachable: {e}",
                code="PING_FAILED",
            )


def _printable(filters: dict[str, Any]) -> dict[str, str]:
    return {key: str(value) for key, value in filters.items()}
