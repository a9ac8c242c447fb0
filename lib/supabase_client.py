# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the Supabase reads the print
# pipeline needs. It implements the singleton pattern to reuse a single
# client connection and provides specialized methods for:
# - Seller records (identity printed on cards and sheets)
# - Products and services (QR assets, profile sheet listings)
# - View counter RPCs
#
# The pipeline never writes marketplace records; the only mutation is the
# view counter increment, done through database functions.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_seller(seller_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for "no rows" on .single()
_NO_ROWS = "PGRST116"

LISTING_TABLES = ("products", "services")


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Carries an actionable suggestion like every ApplicationError.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        seller = SupabaseClient.fetch_seller("550e8400-...")
        products = SupabaseClient.fetch_listings("products", seller["id"])
        SupabaseClient.call_rpc("increment_seller_views", {"seller_uuid": seller["id"]})
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

    # -------------------------------------------------------------------------
    # Sellers
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_seller(
        cls,
        seller_id: str | UUID,
        active_only: bool = True,
    ) -> dict[str, Any] | None:
        """
        Fetch a seller row by ID.

        Args:
            seller_id: The seller UUID
            active_only: Only return sellers with is_active = true (public
                surfaces never show inactive shops)

        Returns:
            Seller dict with all columns, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        seller_id_str = normalize_uuid(seller_id)

        try:
            query = client.table("sellers").select("*").eq("id", seller_id_str)
            if active_only:
                query = query.eq("is_active", True)
            response = query.single().execute()
            return response.data

        except Exception as e:
            if _NO_ROWS in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch seller: {e}",
                code="FETCH_SELLER_FAILED",
                suggestion="Check that the seller_id exists and the sellers table is accessible",
                details={"seller_id": seller_id_str}
            )

    # -------------------------------------------------------------------------
    # Products & Services
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_listings(
        cls,
        table: str,
        seller_id: str | UUID,
    ) -> list[dict[str, Any]]:
        """
        Fetch the available products or services of a seller, newest first.

        Args:
            table: "products" or "services"
            seller_id: Owning seller UUID

        Returns:
            List of row dicts (id, seller_id, name, description, view_count)

        Raises:
            SupabaseClientError: If query fails
        """
        if table not in LISTING_TABLES:
            raise ValueError(f"Unknown listing table: {table}")

        client = cls.get_client()
        seller_id_str = normalize_uuid(seller_id)

        try:
            response = (
                client.table(table)
                .select("id, seller_id, name, description, view_count")
                .eq("seller_id", seller_id_str)
                .eq("is_available", True)
                .order("created_at", desc=True)
                .execute()
            )
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} {table} for seller {seller_id_str}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table}: {e}",
                code="FETCH_LISTINGS_FAILED",
                details={"table": table, "seller_id": seller_id_str}
            )

    @classmethod
    def fetch_listing(cls, table: str, listing_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch one available product or service by ID.

        Returns:
            Row dict, or None if not found or unavailable

        Raises:
            SupabaseClientError: If query fails
        """
        if table not in LISTING_TABLES:
            raise ValueError(f"Unknown listing table: {table}")

        client = cls.get_client()
        listing_id_str = normalize_uuid(listing_id)

        try:
            response = (
                client.table(table)
                .select("id, seller_id, name, description, view_count")
                .eq("id", listing_id_str)
                .eq("is_available", True)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if _NO_ROWS in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_LISTING_FAILED",
                details={"table": table, "id": listing_id_str}
            )

    # -------------------------------------------------------------------------
    # RPC
    # -------------------------------------------------------------------------

    @classmethod
    def call_rpc(cls, function: str, params: dict[str, Any]) -> Any:
        """
        Call a database function.

        Args:
            function: Function name, e.g. "increment_seller_views"
            params: Named arguments, e.g. {"seller_uuid": "..."}

        Returns:
            The function's result data

        Raises:
            SupabaseClientError: If the call fails
        """
        client = cls.get_client()

        try:
            response = client.rpc(function, params).execute()
            return response.data

        except Exception as e:
            raise SupabaseClientError(
                message=f"RPC {function} failed: {e}",
                code="RPC_FAILED",
                suggestion=f"Check that the {function} function exists in the database",
                details={"function": function, "params": params}
            )
