# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a thin wrapper around the Supabase (PostgREST) client
# for the handful of table operations the service needs:
# - Fetch one row by column value (user lookup by email)
# - Insert a row and return it (registration, reel metadata)
# - Fetch all rows ordered by a column (reel listing)
#
# One wrapper instance is created at startup and owned by the AppContext;
# the underlying client is created lazily on first use.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient(url, service_key)
#   row = client.fetch_one("users", "email", "a@x.com")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: the code says WHAT failed,
    the suggestion says HOW to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        pg_code: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        self.pg_code = pg_code

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    @property
    def is_unique_violation(self) -> bool:
        """True when the store rejected an insert on a unique constraint."""
        return self.pg_code == UNIQUE_VIOLATION


def _pg_code(error: Exception) -> str | None:
    """Extract the Postgres/PostgREST error code from a client exception."""
    code = getattr(error, "code", None)
    if code:
        return str(code)
    if UNIQUE_VIOLATION in str(error):
        return UNIQUE_VIOLATION
    return None


class SupabaseClient:
    """
    Wrapper for Supabase table operations.

    Example:
        client = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        reels = client.fetch_all("reels", order_by="created", desc=True)
    """

    def __init__(self, url: str, service_key: str):
        self._url = url
        self._service_key = service_key
        self._instance: Client | None = None

    def get_client(self) -> Client:
        """
        Get or create the Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if self._instance is None:
            try:
                self._instance = create_client(self._url, self._service_key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return self._instance

    def close(self) -> None:
        """Drop the client so the next call reconnects."""
        self._instance = None

    # -------------------------------------------------------------------------
    # Row Operations
    # -------------------------------------------------------------------------

    def fetch_one(self, table: str, column: str, value: Any) -> dict[str, Any] | None:
        """
        Fetch the first row where `column` equals `value`.

        Returns:
            Row dict, or None if no row matches

        Raises:
            SupabaseClientError: If query fails
        """
        client = self.get_client()

        try:
            response = (
                client.table(table)
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table, "column": column},
                pg_code=_pg_code(e),
            )

        rows = response.data or []
        return rows[0] if rows else None

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it as stored (with generated columns).

        Raises:
            SupabaseClientError: If the insert fails; `is_unique_violation`
                is set when a unique constraint rejected the row
        """
        client = self.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
                pg_code=_pg_code(e),
            )

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_FAILED",
                suggestion="Check that the service key can read back inserted rows",
                details={"table": table},
            )

        logger.debug(f"Inserted row into {table}")
        return response.data[0]

    def fetch_all(
        self,
        table: str,
        order_by: str,
        desc: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Fetch every row of a table ordered by one column.

        Raises:
            SupabaseClientError: If query fails
        """
        client = self.get_client()

        try:
            response = (
                client.table(table)
                .select("*")
                .order(order_by, desc=desc)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list {table}: {e}",
                code="FETCH_ALL_FAILED",
                details={"table": table, "order_by": order_by},
                pg_code=_pg_code(e),
            )

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows

    def ping(self, table: str) -> None:
        """Run a one-row query to check connectivity."""
        client = self.get_client()
        client.table(table).select("id").limit(1).execute()
