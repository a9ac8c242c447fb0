# =============================================================================
# app/routers/cards.py - Seller Card & Export Endpoints
# =============================================================================
# Provides endpoints for card previews, print exports, profile sheets,
# vCards and the list of a seller's shareable assets.
#
# Rendering is CPU-bound, so exports run in the threadpool; the per-seller
# export lock in ExportService keeps concurrent exports from overlapping.
# =============================================================================

import logging
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Path, Query
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.dependencies import CardConfigDep
from app.responses import file_response
from core.models.asset import ShareableAsset
from core.models.card import CardOptions, CardVariant, ColorTheme
from core.services.export_service import ExportService
from core.services.qr_service import QRService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class AssetListResponse(BaseModel):
    """Shareable assets of a seller."""
    seller_id: str
    count: int
    assets: list[ShareableAsset]


# =============================================================================
# Card Endpoints
# =============================================================================

@router.get("/{seller_id}/card/options", response_model=CardOptions)
async def get_card_options(
    seller_id: Annotated[UUID, Path(description="Seller UUID")],
):
    """
    Variants, themes and preview sizes the card editor offers.
    """
    return CardOptions.all()


@router.get("/{seller_id}/card/preview")
async def get_card_preview(
    seller_id: Annotated[UUID, Path(description="Seller UUID")],
    config: CardConfigDep,
):
    """
    PNG preview of the card at the selected preview size.

    Each request composes the card from the given variant, theme and size.
    """
    exported = await run_in_threadpool(ExportService.preview_card, str(seller_id), config)
    return file_response(exported, inline=True)


@router.get("/{seller_id}/card/export")
async def export_card(
    seller_id: Annotated[UUID, Path(description="Seller UUID")],
    format: Annotated[Literal["png", "pdf"], Query(description="Output format")] = "png",
    variant: Annotated[CardVariant, Query(description="Card layout")] = CardVariant.PRIMARY_BANDED,
    theme: Annotated[ColorTheme, Query(description="Colour theme")] = ColorTheme.BLUE,
    density: Annotated[
        float | None,
        Query(ge=3.0, le=8.0, description="Pixel density multiplier (default from settings)"),
    ] = None,
):
    """
    Download a print-ready business card.

    - png: 1050x600 logical px times the density (3150x1800 at the default 3)
    - pdf: one 88.9 x 50.8 mm page
    """
    exported = await run_in_threadpool(
        ExportService.export_card, str(seller_id), variant, theme, format, density
    )
    return file_response(exported)


# =============================================================================
# Profile & Contact Endpoints
# =============================================================================

@router.get("/{seller_id}/profile/export")
async def export_profile(
    seller_id: Annotated[UUID, Path(description="Seller UUID")],
    format: Annotated[Literal["png", "pdf"], Query(description="Output format")] = "pdf",
    theme: Annotated[ColorTheme, Query(description="Colour theme")] = ColorTheme.BLUE,
):
    """
    Download the seller's profile sheet.

    The PDF uses A4 pages and spans as many pages as the content needs.
    """
    exported = await run_in_threadpool(
        ExportService.export_profile, str(seller_id), format, theme
    )
    return file_response(exported)


@router.get("/{seller_id}/vcard")
async def get_vcard(
    seller_id: Annotated[UUID, Path(description="Seller UUID")],
):
    """
    Download the seller's contact as a vCard 3.0 file.
    """
    return file_response(ExportService.export_vcard(str(seller_id)))


@router.get("/{seller_id}/assets", response_model=AssetListResponse)
async def list_assets(
    seller_id: Annotated[UUID, Path(description="Seller UUID")],
):
    """
    List every shareable surface of a seller with its URL and view count.

    Order: shop, business card, products (newest first), services.
    """
    assets = QRService.list_assets(str(seller_id))
    return AssetListResponse(seller_id=str(seller_id), count=len(assets), assets=assets)
