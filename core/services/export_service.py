# =============================================================================
# core/services/export_service.py - Export Pipeline
# =============================================================================
# Orchestrates the print pipeline for one seller:
#
#   seller -> encode shop URL -> compose card -> rasterize -> PNG / PDF
#
# Only one export per seller runs at a time; a second request while one is
# in flight gets ExportInProgressError (HTTP 409) instead of queueing.
# Every step is synchronous and fails as a whole: either a complete file is
# returned or an error is raised, never a partial file.
# =============================================================================

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Literal
from uuid import UUID

from app.config import settings
from app.exceptions import ExportInProgressError
from core.models.asset import AssetKind
from core.models.card import (
    CARD_PAGE_HEIGHT_MM,
    CARD_PAGE_WIDTH_MM,
    PRINT_HEIGHT_PX,
    PRINT_WIDTH_PX,
    CardConfig,
    CardVariant,
    ColorTheme,
)
from core.models.seller import SellerIdentity
from core.services.qr_service import get_asset_registry
from core.services.seller_service import SellerService
from lib.compositor import CardComposition, compose, compose_card, compose_profile_sheet, paint
from lib.contact import VCARD_MEDIA_TYPE, build_vcard, vcard_filename
from lib.exporter import A4_PAGE_MM, ExportedFile, export_document, export_raster
from lib.rasterizer import PrintArtifact, rasterize
from lib.symbol_encoder import CARD_EDITOR_PRESET, SymbolBitmap, encode_preset
from lib.utils import export_filename, normalize_uuid

logger = logging.getLogger(__name__)

ExportFormat = Literal["png", "pdf"]

# Profile sheets are designed in CSS px; 96 px per inch
SHEET_DPI = 96


class ExportService:
    """
    Service for card previews, print exports and contact downloads.

    Provides a clean interface between API routes and the lib/ pipeline.
    """

    _in_flight: set[str] = set()
    _lock = threading.Lock()

    @classmethod
    @contextmanager
    def exclusive(cls, seller_id: str) -> Iterator[None]:
        """
        Hold the export slot of a seller.

        Raises:
            ExportInProgressError: If another export for the seller is running
        """
        with cls._lock:
            if seller_id in cls._in_flight:
                raise ExportInProgressError(seller_id)
            cls._in_flight.add(seller_id)
        try:
            yield
        finally:
            with cls._lock:
                cls._in_flight.discard(seller_id)

    # -------------------------------------------------------------------------
    # Card
    # -------------------------------------------------------------------------

    @staticmethod
    def card_symbol(seller: SellerIdentity) -> SymbolBitmap:
        """Symbol printed on cards: the shop URL at the card editor preset."""
        url = get_asset_registry().canonical_url(AssetKind.SHOP, seller.id)
        return encode_preset(url, CARD_EDITOR_PRESET)

    @staticmethod
    def compose_card_for(
        seller: SellerIdentity,
        variant: CardVariant,
        theme: ColorTheme,
    ) -> CardComposition:
        """Card composition at print logical size."""
        return compose(
            seller,
            variant,
            theme,
            ExportService.card_symbol(seller),
            width=PRINT_WIDTH_PX,
            height=PRINT_HEIGHT_PX,
            brand_name=settings.BRAND_NAME,
        )

    @staticmethod
    def preview_card(seller_id: str | UUID, config: CardConfig) -> ExportedFile:
        """
        PNG of the card at the selected preview size.

        Every call composes from scratch, so a changed selection can never
        show a stale preview.
        """
        seller = SellerService.get_seller(seller_id)
        composition = compose_card(
            seller, config, ExportService.card_symbol(seller), brand_name=settings.BRAND_NAME
        )
        image = paint(composition)
        artifact = PrintArtifact(
            image=image,
            logical_width=composition.width,
            logical_height=composition.height,
            density=1.0,
        )
        return export_raster(artifact, export_filename(seller.business_name, "business-card-preview", "png"))

    @classmethod
    def export_card(
        cls,
        seller_id: str | UUID,
        variant: CardVariant = CardVariant.PRIMARY_BANDED,
        theme: ColorTheme = ColorTheme.BLUE,
        fmt: ExportFormat = "png",
        density: float | None = None,
    ) -> ExportedFile:
        """
        Print export of a business card.

        Args:
            seller_id: Seller whose card to export
            variant: Card layout
            theme: Colour theme
            fmt: "png" (raster at 1050x600 x density) or "pdf" (88.9 x 50.8 mm page)
            density: Pixel density multiplier (default PRINT_DENSITY_MULTIPLIER)

        Returns:
            ExportedFile named "<stem>-business-card.<fmt>"

        Raises:
            SellerNotFoundError, ExportInProgressError, ValueError (density < 3),
            EncodingError, RasterizationError, ExportIOError
        """
        seller = SellerService.get_seller(seller_id)
        density = density if density is not None else settings.PRINT_DENSITY_MULTIPLIER
        filename = export_filename(seller.business_name, "business-card", fmt)

        with cls.exclusive(normalize_uuid(seller.id)):
            logger.info(
                f"Exporting {variant.value}/{theme.value} card for {seller.id} as {fmt} (x{density:g})"
            )
            composition = cls.compose_card_for(seller, variant, theme)
            artifact = rasterize(
                composition,
                PRINT_WIDTH_PX,
                PRINT_HEIGHT_PX,
                density_multiplier=density,
                dpi=settings.PRINT_DPI,
            )
            if fmt == "pdf":
                return export_document(artifact, CARD_PAGE_WIDTH_MM, CARD_PAGE_HEIGHT_MM, filename)
            return export_raster(artifact, filename)

    # -------------------------------------------------------------------------
    # Profile Sheet
    # -------------------------------------------------------------------------

    @classmethod
    def export_profile(
        cls,
        seller_id: str | UUID,
        fmt: ExportFormat = "pdf",
        theme: ColorTheme = ColorTheme.BLUE,
        density: float | None = None,
    ) -> ExportedFile:
        """
        Profile sheet as PNG or as a PDF of A4 pages.

        Returns:
            ExportedFile named "<stem>-profile.<fmt>"
        """
        seller = SellerService.get_seller(seller_id)
        products, services = SellerService.get_listings(seller.id)
        density = density if density is not None else settings.PRINT_DENSITY_MULTIPLIER
        filename = export_filename(seller.business_name, "profile", fmt)
        shop_url = get_asset_registry().canonical_url(AssetKind.SHOP, seller.id)

        with cls.exclusive(normalize_uuid(seller.id)):
            logger.info(
                f"Exporting profile sheet for {seller.id} as {fmt}: "
                f"{len(products)} products, {len(services)} services"
            )
            sheet = compose_profile_sheet(
                seller,
                encode_preset(shop_url, CARD_EDITOR_PRESET),
                shop_url,
                products,
                services,
                theme,
            )
            artifact = rasterize(
                sheet,
                sheet.width,
                None,
                density_multiplier=density,
                dpi=SHEET_DPI,
            )
            if fmt == "pdf":
                return export_document(artifact, A4_PAGE_MM[0], A4_PAGE_MM[1], filename)
            return export_raster(artifact, filename)

    # -------------------------------------------------------------------------
    # Contact
    # -------------------------------------------------------------------------

    @staticmethod
    def export_vcard(seller_id: str | UUID) -> ExportedFile:
        seller = SellerService.get_seller(seller_id)
        return ExportedFile(
            filename=vcard_filename(seller),
            media_type=VCARD_MEDIA_TYPE,
            content=build_vcard(seller).encode("utf-8"),
        )
