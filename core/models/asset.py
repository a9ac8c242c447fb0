# =============================================================================
# core/models/asset.py - Shareable Asset Schemas
# =============================================================================
# A shareable asset is any public surface with its own URL and view counter:
# a shop page, a business card, a product page or a service page.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AssetKind(str, Enum):
    """Kinds of public surfaces."""
    SHOP = "shop"
    CARD = "card"
    PRODUCT = "product"
    SERVICE = "service"


class ViewCounter(BaseModel):
    """Remote procedure that increments the view count of one asset kind."""

    model_config = ConfigDict(frozen=True)

    function: str = Field(..., description="Supabase RPC name")
    id_param: str = Field(..., description="Name of the id argument")


class ShareableAsset(BaseModel):
    """
    One public surface of a seller.

    Example:
        {
            "kind": "shop",
            "id": "7d0c3c1e-...",
            "name": "Shop Page",
            "url": "https://sellcard.app/shop/7d0c3c1e-...",
            "view_counter": {"function": "increment_seller_views", "id_param": "seller_uuid"},
            "view_count": 42
        }
    """

    model_config = ConfigDict(frozen=True)

    kind: AssetKind
    id: str
    name: str = ""
    description: str = ""
    url: str
    view_counter: ViewCounter
    view_count: int = 0
