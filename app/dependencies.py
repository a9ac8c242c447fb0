# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Query

from core.models.card import CardConfig, CardVariant, ColorTheme, PreviewSize
from core.services.qr_service import get_asset_registry
from lib.asset_registry import ShareableAssetRegistry
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client instance.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


def get_registry() -> ShareableAssetRegistry:
    """Shared asset registry (URLs and view counters)."""
    return get_asset_registry()


def get_card_config(
    variant: Annotated[CardVariant, Query(description="Card layout")] = CardVariant.PRIMARY_BANDED,
    theme: Annotated[ColorTheme, Query(description="Colour theme")] = ColorTheme.BLUE,
    size: Annotated[PreviewSize, Query(description="Preview size")] = PreviewSize.SMALL,
) -> CardConfig:
    """Build the immutable card selection from query parameters."""
    return CardConfig(variant=variant, theme=theme, preview_size=size)


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
RegistryDep = Annotated[ShareableAssetRegistry, Depends(get_registry)]
CardConfigDep = Annotated[CardConfig, Depends(get_card_config)]
