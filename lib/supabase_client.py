# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the row-level helpers every service relies on:
# - fetch_one: single row by key, None when missing
# - insert_one / update_rows / delete_rows: writes that report failures
# - public_url: object store URLs for uploaded images
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   vendor = SupabaseClient.fetch_one("vendors", vendor_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for ".single()" matching no rows
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
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


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        client = SupabaseClient.get_client()
        rows = client.table("vendors").select("*").eq("status", "published").execute().data

        vendor = SupabaseClient.fetch_one("vendors", "550e8400-...")
        if vendor is None:
            ...
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID | int) -> str | int:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Row Helpers
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_one(
        cls,
        table: str,
        row_id: str | UUID | int,
        columns: str = "*",
        id_column: str = "id",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by key.

        Args:
            table: Table or view name
            row_id: Value of the key column
            columns: PostgREST select expression (embeds allowed)
            id_column: Key column to match on (default: "id")

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails for any other reason
        """
        client = cls.get_client()
        key = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq(id_column, key)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_FAILED",
                suggestion=f"Check that the {table} table is reachable",
                details={"table": table, id_column: str(key)}
            )

    @classmethod
    def insert_one(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored.

        Raises:
            SupabaseClientError: If the insert fails or returns no row
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                suggestion="Check required columns and unique constraints",
                details={"table": table}
            )

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_EMPTY",
                details={"table": table}
            )

        logger.debug(f"Inserted row into {table}: {response.data[0].get('id')}")
        return response.data[0]

    @classmethod
    def update_rows(
        cls,
        table: str,
        data: dict[str, Any],
        value: str | UUID | int,
        column: str = "id",
    ) -> list[dict[str, Any]]:
        """
        Update rows where column = value.

        Returns:
            Updated rows (empty when nothing matched)
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .update(data)
                .eq(column, cls._normalize_uuid(value))
                .execute()
            )
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, column: str(value)}
            )

    @classmethod
    def delete_rows(
        cls,
        table: str,
        value: str | UUID | int,
        column: str = "id",
    ) -> list[dict[str, Any]]:
        """
        Delete rows where column = value.

        Returns:
            Deleted rows
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .delete()
                .eq(column, cls._normalize_uuid(value))
                .execute()
            )
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, column: str(value)}
            )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    @classmethod
    def public_url(cls, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        client = cls.get_client()
        url = client.storage.from_(bucket).get_public_url(path)
        # Some client versions append an empty query string
        return url.rstrip("?")
