# =============================================================================
# lib/compositor/compositor.py - Card Compositor
# =============================================================================
# Entry point for building business card compositions.
#
#   compose(identity, variant, theme, symbol, width=..., height=None)
#       -> CardComposition
#
# The result is immutable and remembers its inputs, so the rasterizer can
# re-run the same layout at print size (`composition.relayout(1050, 600)`)
# instead of scaling the preview.
# =============================================================================

from __future__ import annotations

import logging
from functools import partial

from core.models.card import (
    CARD_ASPECT_RATIO,
    PRINT_WIDTH_PX,
    CardConfig,
    CardVariant,
    ColorTheme,
)
from core.models.seller import SellerIdentity
from lib.compositor.layout import CardComposition
from lib.compositor.registry import LayoutContext, get_variant_layout
from lib.symbol_encoder import SymbolBitmap

# Importing variants registers the layout functions
from lib.compositor import variants  # noqa: F401

logger = logging.getLogger(__name__)

DEFAULT_BRAND_NAME = "SellCard"


def compose(
    identity: SellerIdentity,
    variant: CardVariant | str,
    theme: ColorTheme | str,
    symbol: SymbolBitmap,
    *,
    width: float = PRINT_WIDTH_PX,
    height: float | None = None,
    brand_name: str = DEFAULT_BRAND_NAME,
) -> CardComposition:
    """
    Lay out one business card.

    Args:
        identity: Seller fields printed on the card
        variant: Card layout
        theme: Colour theme; changes colours only, never geometry
        symbol: QR symbol for the card's canonical URL
        width: Canvas width in px
        height: Canvas height in px (default: width / 1.75)
        brand_name: Platform name shown by layouts that carry a brand line

    Returns:
        CardComposition

    Raises:
        UnknownVariantError: If the variant has no registered layout
        ValueError: Unknown theme or non-positive canvas size
    """
    layout = get_variant_layout(variant)
    variant = CardVariant(variant)
    theme = ColorTheme(theme)

    if height is None:
        height = round(width / CARD_ASPECT_RATIO)
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas size must be positive, got {width}x{height}")

    ctx = LayoutContext(
        identity=identity,
        palette=theme.palette,
        width=float(width),
        height=float(height),
        brand_name=brand_name,
    )
    elements = tuple(layout(ctx))
    logger.debug(
        f"Composed {variant.value}/{theme.value} card for {identity.id} "
        f"at {width}x{height} ({len(elements)} elements)"
    )

    return CardComposition(
        identity=identity,
        symbol=symbol,
        width=float(width),
        height=float(height),
        elements=elements,
        relayout_fn=partial(_relayout, identity, variant, theme, symbol, brand_name),
        variant=variant,
        theme=theme,
    )


def _relayout(
    identity: SellerIdentity,
    variant: CardVariant,
    theme: ColorTheme,
    symbol: SymbolBitmap,
    brand_name: str,
    width: float,
    height: float,
) -> CardComposition:
    return compose(
        identity, variant, theme, symbol, width=width, height=height, brand_name=brand_name
    )


def compose_card(
    identity: SellerIdentity,
    config: CardConfig,
    symbol: SymbolBitmap,
    brand_name: str = DEFAULT_BRAND_NAME,
) -> CardComposition:
    """Compose at the preview size selected in `config`."""
    width, height = config.preview_dimensions
    return compose(
        identity,
        config.variant,
        config.theme,
        symbol,
        width=width,
        height=height,
        brand_name=brand_name,
    )
