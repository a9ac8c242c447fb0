# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - card.py: Card variants, colour themes, preview sizes, CardConfig
# - seller.py: SellerIdentity and ListingSummary (read from Supabase)
# - asset.py: Shareable assets and their view counters
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Card Models - Business card options
# -----------------------------------------------------------------------------
from .card import (
    CARD_ASPECT_RATIO,
    CARD_PAGE_HEIGHT_MM,
    CARD_PAGE_WIDTH_MM,
    PRINT_DPI,
    PRINT_HEIGHT_PX,
    PRINT_WIDTH_PX,
    CardConfig,
    CardOptions,
    CardVariant,
    ColorTheme,
    PreviewSize,
    ThemePalette,
)

# -----------------------------------------------------------------------------
# Seller Models - Identity source records
# -----------------------------------------------------------------------------
from .seller import (
    ListingSummary,
    SellerIdentity,
)

# -----------------------------------------------------------------------------
# Asset Models - Shareable surfaces
# -----------------------------------------------------------------------------
from .asset import (
    AssetKind,
    ShareableAsset,
    ViewCounter,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Card
    "CARD_ASPECT_RATIO",
    "CARD_PAGE_HEIGHT_MM",
    "CARD_PAGE_WIDTH_MM",
    "PRINT_DPI",
    "PRINT_HEIGHT_PX",
    "PRINT_WIDTH_PX",
    "CardConfig",
    "CardOptions",
    "CardVariant",
    "ColorTheme",
    "PreviewSize",
    "ThemePalette",
    # Seller
    "ListingSummary",
    "SellerIdentity",
    # Asset
    "AssetKind",
    "ShareableAsset",
    "ViewCounter",
]
