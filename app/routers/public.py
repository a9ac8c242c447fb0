# =============================================================================
# app/routers/public.py - Public Surface Endpoints
# =============================================================================
# Endpoints hit by buyers: the data behind a public page, and the landing
# for scanned QR links. Both count a view, scheduled as a background task
# so the response never waits on (or fails because of) the counter.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Path
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from app.dependencies import RegistryDep
from core.models.asset import ShareableAsset
from core.models.seller import SellerIdentity
from core.services.qr_service import QRService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class PublicSurfaceResponse(BaseModel):
    """What a public shop, card, product or service page shows."""
    asset: ShareableAsset
    seller: SellerIdentity
    whatsapp_url: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/qr/{kind}/{asset_id}")
async def qr_landing(
    kind: Annotated[str, Path(description="Asset kind from the scanned link")],
    asset_id: Annotated[str, Path(description="Asset id from the scanned link")],
    registry: RegistryDep,
    background_tasks: BackgroundTasks,
):
    """
    Landing for scanned /qr/{kind}/{id} links.

    Known kinds record a view and redirect to the canonical page; anything
    else redirects to the marketplace without recording.
    """
    path, view_kind = registry.resolve_qr_landing(kind, asset_id)
    if view_kind is not None:
        background_tasks.add_task(registry.record_view, view_kind, asset_id)
    return RedirectResponse(url=f"{registry.public_origin}{path}", status_code=307)


@router.get("/{kind}/{asset_id}", response_model=PublicSurfaceResponse)
async def get_public_surface(
    kind: Annotated[str, Path(description="shop, card, product or service")],
    asset_id: Annotated[str, Path(description="Seller, product or service UUID")],
    registry: RegistryDep,
    background_tasks: BackgroundTasks,
):
    """
    Data for a public page. The view is recorded after the response is sent.
    """
    surface = QRService.public_surface(kind, asset_id)
    asset: ShareableAsset = surface["asset"]
    background_tasks.add_task(registry.record_view, asset.kind, asset.id)
    return PublicSurfaceResponse(**surface)
