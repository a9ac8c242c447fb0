# =============================================================================
# core/services/qr_service.py - QR Assets
# =============================================================================
# Everything a seller can share by QR code:
# - listing shareable assets (shop, card, products, services) with URLs
# - standalone QR PNG downloads
# - labelled QR posters
# - public surface lookups and scanned-link landings
#
# The asset registry is built once from settings; its view recorder calls
# the Supabase RPCs.
# =============================================================================

import logging
from functools import lru_cache
from uuid import UUID

from app.config import settings
from app.exceptions import UnknownAssetKindError
from core.models.asset import AssetKind, ShareableAsset
from core.models.seller import SellerIdentity
from core.services.seller_service import SellerService
from lib.asset_registry import ShareableAssetRegistry
from lib.compositor import compose_poster, paint
from lib.contact import whatsapp_link
from lib.exporter import ExportedFile, export_raster
from lib.rasterizer import PrintArtifact
from lib.supabase_client import SupabaseClient
from lib.symbol_encoder import (
    STANDALONE_PRESET,
    SymbolBitmap,
    encode_preset,
    encode_to_width,
)
from lib.utils import export_filename, safe_filename_stem

logger = logging.getLogger(__name__)

# Posters are screen images; physical size metadata uses CSS px
POSTER_DPI = 96


@lru_cache
def get_asset_registry() -> ShareableAssetRegistry:
    """Shared registry for the configured public origin."""
    return ShareableAssetRegistry(settings.PUBLIC_ORIGIN, SupabaseClient.call_rpc)


class QRService:
    """Service for QR codes and the public surfaces they point at."""

    @staticmethod
    def parse_kind(kind: str) -> AssetKind:
        """
        Raises:
            UnknownAssetKindError: If `kind` is not shop, card, product or service
        """
        parsed = ShareableAssetRegistry.parse_kind(kind)
        if parsed is None:
            raise UnknownAssetKindError(kind, [k.value for k in AssetKind])
        return parsed

    @staticmethod
    def resolve(kind: str, asset_id: str | UUID) -> tuple[SellerIdentity, ShareableAsset]:
        """
        Look up an asset and the seller that owns it.

        Raises:
            UnknownAssetKindError: Unknown kind
            SellerNotFoundError: Shop/card of a missing or inactive seller
            AssetNotFoundError: Missing or unavailable product/service
        """
        parsed = QRService.parse_kind(kind)
        registry = get_asset_registry()

        if parsed in (AssetKind.SHOP, AssetKind.CARD):
            seller = SellerService.get_seller(asset_id)
            name = "Shop Page" if parsed == AssetKind.SHOP else "Business Card"
            asset = registry.describe(
                parsed,
                seller.id,
                name=name,
                description=seller.description,
                view_count=seller.view_count,
            )
            return seller, asset

        listing = SellerService.get_listing(parsed, asset_id)
        seller = SellerService.get_seller(listing.seller_id)
        asset = registry.describe(
            parsed,
            listing.id,
            name=listing.name,
            description=listing.description,
            view_count=listing.view_count,
        )
        return seller, asset

    @staticmethod
    def list_assets(seller_id: str | UUID) -> list[ShareableAsset]:
        """Shop, card, then every available product and service."""
        seller = SellerService.get_seller(seller_id)
        products, services = SellerService.get_listings(seller.id)
        return get_asset_registry().list_assets(seller, products, services)

    @staticmethod
    def standalone_qr(kind: str, asset_id: str | UUID, size_px: int | None = None) -> ExportedFile:
        """
        PNG of an asset's symbol.

        The default size and quiet zone come from the standalone preset;
        `size_px` overrides the size. Filename: "<name>-qr-code.png".
        """
        seller, asset = QRService.resolve(kind, asset_id)
        if size_px is None:
            symbol = encode_preset(asset.url, STANDALONE_PRESET)
        else:
            symbol = encode_to_width(asset.url, size_px, margin_modules=STANDALONE_PRESET.margin_modules)

        display_name = seller.business_name if asset.kind in (AssetKind.SHOP, AssetKind.CARD) else asset.name
        filename = export_filename(display_name, "qr-code", "png")
        logger.info(f"Standalone QR for {asset.kind.value} {asset.id}: {symbol.size_px}px")
        return ExportedFile(filename=filename, media_type="image/png", content=symbol.to_png_bytes())

    @staticmethod
    def poster(kind: str, asset_id: str | UUID) -> ExportedFile:
        """
        Labelled 400 x 500 poster PNG.

        Filename: "<seller>-<asset>-QR.png".
        """
        seller, asset = QRService.resolve(kind, asset_id)
        symbol: SymbolBitmap = encode_preset(asset.url, STANDALONE_PRESET)
        composition = compose_poster(seller, asset, symbol)
        image = paint(composition)

        artifact = PrintArtifact(
            image=image,
            logical_width=composition.width,
            logical_height=composition.height,
            density=1.0,
            dpi=POSTER_DPI,
        )
        filename = (
            f"{safe_filename_stem(seller.business_name)}-"
            f"{safe_filename_stem(asset.name)}-QR.png"
        )
        return export_raster(artifact, filename)

    @staticmethod
    def public_surface(kind: str, asset_id: str | UUID) -> dict:
        """
        Data a public page renders for an asset.

        Recording the view is left to the caller, which schedules it after
        the response is sent.
        """
        seller, asset = QRService.resolve(kind, asset_id)
        return {
            "asset": asset,
            "seller": seller,
            "whatsapp_url": whatsapp_link(seller.whatsapp_number),
        }
