# =============================================================================
# lib/asset_registry.py - Shareable Asset Registry
# =============================================================================
# Single source of truth for the public URL of every shareable surface and
# for the Supabase function that counts its views.
#
#   kind      path                   view counter
#   shop      /shop/{sellerId}       increment_seller_views(seller_uuid)
#   card      /card/{sellerId}       increment_seller_views(seller_uuid)
#   product   /product/{productId}   increment_product_views(product_uuid)
#   service   /service/{serviceId}   increment_service_views(service_uuid)
#
# The paths must stay in sync with the public front end. Every symbol
# payload in the system is produced by canonical_url(), so a printed card
# always points at a page that exists.
#
# View recording is best effort: a failed RPC is logged and dropped so it
# can never break the page that triggered it.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable

from core.models.asset import AssetKind, ShareableAsset, ViewCounter
from core.models.seller import ListingSummary, SellerIdentity
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

RpcCaller = Callable[[str, dict[str, Any]], Any]

DESCRIPTION_SNIPPET_LENGTH = 50


class ShareableAssetRegistry:
    """
    Maps (kind, id) to canonical URLs and view counters.

    Example:
        registry = ShareableAssetRegistry("https://sellcard.app", SupabaseClient.call_rpc)
        registry.canonical_url(AssetKind.SHOP, seller_id)
        # "https://sellcard.app/shop/7d0c3c1e-..."
        registry.record_view(AssetKind.CARD, seller_id)
    """

    ROUTES: dict[AssetKind, str] = {
        AssetKind.SHOP: "/shop/{id}",
        AssetKind.CARD: "/card/{id}",
        AssetKind.PRODUCT: "/product/{id}",
        AssetKind.SERVICE: "/service/{id}",
    }

    VIEW_COUNTERS: dict[AssetKind, ViewCounter] = {
        AssetKind.SHOP: ViewCounter(function="increment_seller_views", id_param="seller_uuid"),
        AssetKind.CARD: ViewCounter(function="increment_seller_views", id_param="seller_uuid"),
        AssetKind.PRODUCT: ViewCounter(function="increment_product_views", id_param="product_uuid"),
        AssetKind.SERVICE: ViewCounter(function="increment_service_views", id_param="service_uuid"),
    }

    # Where QR landings with an unknown kind go
    FALLBACK_PATH = "/marketplace"

    def __init__(self, public_origin: str, rpc: RpcCaller):
        self.public_origin = public_origin.rstrip("/")
        self._rpc = rpc

    @staticmethod
    def parse_kind(kind: AssetKind | str) -> AssetKind | None:
        """AssetKind for a path segment, or None if it names no kind."""
        try:
            return AssetKind(kind)
        except ValueError:
            return None

    def canonical_path(self, kind: AssetKind, asset_id: str) -> str:
        return self.ROUTES[AssetKind(kind)].format(id=normalize_uuid(asset_id))

    def canonical_url(self, kind: AssetKind, asset_id: str) -> str:
        """
        Absolute public URL of an asset.

        Deterministic: the same (kind, id) always gives the same URL.
        """
        return f"{self.public_origin}{self.canonical_path(kind, asset_id)}"

    def describe(
        self,
        kind: AssetKind,
        asset_id: str,
        name: str = "",
        description: str = "",
        view_count: int = 0,
    ) -> ShareableAsset:
        kind = AssetKind(kind)
        return ShareableAsset(
            kind=kind,
            id=normalize_uuid(asset_id),
            name=name,
            description=description,
            url=self.canonical_url(kind, asset_id),
            view_counter=self.VIEW_COUNTERS[kind],
            view_count=view_count,
        )

    # -------------------------------------------------------------------------
    # View Recording
    # -------------------------------------------------------------------------

    def record_view(self, kind: AssetKind, asset_id: str) -> None:
        """
        Increment the view counter of an asset. Never raises.

        Callers schedule this outside the render path (FastAPI
        BackgroundTasks); delivery is at-least-once per call.
        """
        counter = self.VIEW_COUNTERS[AssetKind(kind)]
        asset_id = normalize_uuid(asset_id)
        try:
            self._rpc(counter.function, {counter.id_param: asset_id})
            logger.debug(f"Recorded view: {counter.function}({asset_id})")
        except Exception as e:
            logger.warning(f"Failed to record view for {kind} {asset_id}: {e}")

    def resolve_qr_landing(self, kind: str, asset_id: str) -> tuple[str, AssetKind | None]:
        """
        Resolve a scanned /qr/{kind}/{id} link.

        Returns:
            (path to redirect to, kind whose view should be recorded or None)
            Unknown kinds go to the marketplace and record nothing.
        """
        parsed = self.parse_kind(kind)
        if parsed is None:
            logger.info(f"QR landing with unknown kind '{kind}', sending to {self.FALLBACK_PATH}")
            return self.FALLBACK_PATH, None
        return self.canonical_path(parsed, asset_id), parsed

    # -------------------------------------------------------------------------
    # Asset Listing
    # -------------------------------------------------------------------------

    def list_assets(
        self,
        seller: SellerIdentity,
        products: list[ListingSummary],
        services: list[ListingSummary],
    ) -> list[ShareableAsset]:
        """
        Every shareable surface of a seller: shop, card, then each product
        and service.
        """
        assets = [
            self.describe(
                AssetKind.SHOP,
                seller.id,
                name="Shop Page",
                description="Main shop page with all products and services",
                view_count=seller.view_count,
            ),
            self.describe(
                AssetKind.CARD,
                seller.id,
                name="Business Card",
                description="Mobile-optimized digital business card",
                view_count=seller.view_count,
            ),
        ]
        for kind, label, listings in (
            (AssetKind.PRODUCT, "Product", products),
            (AssetKind.SERVICE, "Service", services),
        ):
            for listing in listings:
                assets.append(self.describe(
                    kind,
                    listing.id,
                    name=listing.name,
                    description=f"{label}: {description_snippet(listing.description)}",
                    view_count=listing.view_count,
                ))
        return assets


def description_snippet(text: str, length: int = DESCRIPTION_SNIPPET_LENGTH) -> str:
    """First `length` characters followed by "..."."""
    return f"{(text or '')[:length]}..."
