# =============================================================================
# app/routers/qr.py - QR Code Endpoints
# =============================================================================
# Standalone QR downloads and labelled posters for any shareable asset.
# Kinds: shop, card (seller id), product, service (listing id).
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Query
from fastapi.concurrency import run_in_threadpool

from app.responses import file_response
from core.services.qr_service import QRService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{kind}/{asset_id}")
async def get_qr_code(
    kind: Annotated[str, Path(description="shop, card, product or service")],
    asset_id: Annotated[str, Path(description="Seller, product or service UUID")],
    size: Annotated[int | None, Query(ge=64, le=2048, description="Symbol width in px")] = None,
):
    """
    Download the QR code of an asset as PNG.

    The code encodes the asset's canonical public URL.
    """
    exported = await run_in_threadpool(QRService.standalone_qr, kind, asset_id, size)
    return file_response(exported)


@router.get("/{kind}/{asset_id}/poster")
async def get_qr_poster(
    kind: Annotated[str, Path(description="shop, card, product or service")],
    asset_id: Annotated[str, Path(description="Seller, product or service UUID")],
):
    """
    Download a 400x500 poster: asset name, description, QR code and URL.
    """
    exported = await run_in_threadpool(QRService.poster, kind, asset_id)
    return file_response(exported)
