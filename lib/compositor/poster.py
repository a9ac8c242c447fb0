# =============================================================================
# lib/compositor/poster.py - QR Poster Layout
# =============================================================================
# A small labelled poster for one shareable asset: title, wrapped
# description, the asset's symbol and its URL along the bottom edge.
# Designed at 400 x 500 px; geometry scales with u = width / 400.
# =============================================================================

from __future__ import annotations

from functools import partial

from core.models.asset import ShareableAsset
from core.models.seller import SellerIdentity
from lib.compositor import fonts
from lib.compositor.layout import (
    Box,
    Composition,
    Element,
    FillElement,
    SymbolElement,
    TextColumn,
    TextRole,
)
from lib.symbol_encoder import SymbolBitmap

POSTER_WIDTH = 400
POSTER_HEIGHT = 500
POSTER_SYMBOL_MAX = 250.0


def compose_poster(
    identity: SellerIdentity,
    asset: ShareableAsset,
    symbol: SymbolBitmap,
    *,
    width: float = POSTER_WIDTH,
    height: float = POSTER_HEIGHT,
) -> Composition:
    """Lay out the poster of `asset` (owned by `identity`)."""
    u = width / POSTER_WIDTH
    margin = 25 * u

    header = TextColumn(margin, 18 * u, width - 2 * margin, height / 2, align="center")
    title = asset.name or identity.business_name
    size = fonts.fit_text_single_line(title, "sans-bold", header.width, 24 * u, 14 * u, step=0.5 * u)
    header.add_line(title, TextRole.NAME, "sans-bold", size, "#1f2937", 10 * u)
    header.add_wrapped(
        asset.description, TextRole.DESCRIPTION, "sans", 16 * u, "#6b7280",
        max_lines=3, line_gap=6 * u,
    )

    footer = TextColumn(margin, height - 44 * u, width - 2 * margin, height - 16 * u, align="center")
    url_size = fonts.fit_text_single_line(asset.url, "sans", footer.width, 12 * u, 8 * u, step=0.5 * u)
    footer.add_line(asset.url, TextRole.URL, "sans", url_size, "#9ca3af")
    footer_elements = footer.anchored_bottom()
    footer_top = min(e.box.y for e in footer_elements) if footer_elements else footer.bottom

    # Symbol fills the space between header and footer, up to 250 u
    top = header.content_bottom + 16 * u
    bottom = footer_top - 16 * u
    side = max(0.0, min(POSTER_SYMBOL_MAX * u, bottom - top, width - 2 * margin))
    symbol_box = Box(
        (width - side) / 2,
        top + (bottom - top - side) / 2,
        side,
        side,
    )

    elements: list[Element] = [FillElement(Box(0, 0, width, height), fill="#ffffff")]
    elements.extend(header.elements)
    elements.append(SymbolElement(symbol_box))
    elements.extend(footer_elements)

    return Composition(
        identity=identity,
        symbol=symbol,
        width=float(width),
        height=float(height),
        elements=tuple(elements),
        relayout_fn=partial(_relayout, identity, asset, symbol),
    )


def _relayout(
    identity: SellerIdentity,
    asset: ShareableAsset,
    symbol: SymbolBitmap,
    width: float,
    height: float,
) -> Composition:
    return compose_poster(identity, asset, symbol, width=width, height=height)
