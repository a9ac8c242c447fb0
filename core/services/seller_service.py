# =============================================================================
# core/services/seller_service.py - Seller Lookup
# =============================================================================
# Reads sellers, products and services from Supabase and turns them into
# the read-only models the pipeline works with.
# =============================================================================

import logging
from uuid import UUID

from app.exceptions import AssetNotFoundError, SellerNotFoundError
from core.models.asset import AssetKind
from core.models.seller import ListingSummary, SellerIdentity
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

_LISTING_TABLES = {
    AssetKind.PRODUCT: "products",
    AssetKind.SERVICE: "services",
}


class SellerService:
    """
    Service for seller identity lookups.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def get_seller(seller_id: str | UUID) -> SellerIdentity:
        """
        Get an active seller by ID.

        Raises:
            SellerNotFoundError: If the seller doesn't exist or is inactive
        """
        row = SupabaseClient.fetch_seller(seller_id)
        if not row:
            raise SellerNotFoundError(str(seller_id))
        return SellerIdentity.from_db_row(row)

    @staticmethod
    def get_listings(
        seller_id: str | UUID,
    ) -> tuple[list[ListingSummary], list[ListingSummary]]:
        """
        Available products and services of a seller, newest first.

        Returns:
            (products, services)
        """
        products = [
            ListingSummary.from_db_row(row)
            for row in SupabaseClient.fetch_listings("products", seller_id)
        ]
        services = [
            ListingSummary.from_db_row(row)
            for row in SupabaseClient.fetch_listings("services", seller_id)
        ]
        logger.debug(f"Seller {seller_id}: {len(products)} products, {len(services)} services")
        return products, services

    @staticmethod
    def get_listing(kind: AssetKind, listing_id: str | UUID) -> ListingSummary:
        """
        Get one available product or service.

        Raises:
            AssetNotFoundError: If it doesn't exist or is unavailable
        """
        table = _LISTING_TABLES[kind]
        row = SupabaseClient.fetch_listing(table, listing_id)
        if not row:
            raise AssetNotFoundError(kind.value, str(listing_id))
        return ListingSummary.from_db_row(row)
