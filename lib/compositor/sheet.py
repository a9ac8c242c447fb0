# =============================================================================
# lib/compositor/sheet.py - Profile Sheet Layout
# =============================================================================
# A one-column printable profile of a seller: name, description, shop
# symbol, contact block, product and service listings, and the shop URL.
#
# Width is fixed by the caller; height follows the content, so a seller with
# many listings gets a tall sheet that the exporter splits across A4 pages.
# Geometry uses u = width / 448 (the sheet is designed 448 px wide).
# =============================================================================

from __future__ import annotations

import logging
from functools import partial

from core.models.card import ColorTheme
from core.models.seller import ListingSummary, SellerIdentity
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

logger = logging.getLogger(__name__)

SHEET_DESIGN_WIDTH = 448
SHEET_PADDING = 32.0
SHEET_SYMBOL_SIZE = 160.0


def _listing_section(
    column: TextColumn,
    title: str,
    listings: list[ListingSummary],
    u: float,
    heading_color: str,
) -> None:
    if not listings:
        return
    column.add_line(title, TextRole.CAPTION, "sans-bold", 16 * u, heading_color, 10 * u)
    for listing in listings:
        column.add_line(listing.name, TextRole.NAME, "sans-bold", 14 * u, "#111827", 2 * u)
        added = column.add_wrapped(
            listing.description, TextRole.DESCRIPTION, "sans", 12 * u, "#6b7280",
            max_lines=2, line_gap=2 * u, gap_after=10 * u,
        )
        if not added:
            column.add_gap(8 * u)
    column.add_gap(12 * u)


def compose_profile_sheet(
    identity: SellerIdentity,
    symbol: SymbolBitmap,
    shop_url: str,
    products: list[ListingSummary] | None = None,
    services: list[ListingSummary] | None = None,
    theme: ColorTheme | str = ColorTheme.BLUE,
    *,
    width: float = SHEET_DESIGN_WIDTH,
) -> Composition:
    """
    Lay out a profile sheet.

    Args:
        identity: Seller shown on the sheet
        symbol: QR symbol for the shop page
        shop_url: Canonical shop URL printed in the footer
        products: Available products to list
        services: Available services to list
        theme: Accent colours for headings
        width: Sheet width in px; height is derived from the content

    Returns:
        Composition whose height fits all content
    """
    theme = ColorTheme(theme)
    palette = theme.palette
    products = list(products or [])
    services = list(services or [])
    u = width / SHEET_DESIGN_WIDTH
    pad = SHEET_PADDING * u

    column = TextColumn(pad, pad, width - 2 * pad, float("inf"), align="center")

    name_size = fonts.fit_text_single_line(
        identity.business_name, "sans-bold", column.width, 24 * u, 14 * u, step=0.5 * u
    )
    column.add_line(identity.business_name, TextRole.NAME, "sans-bold", name_size, "#111827", 8 * u)
    column.add_wrapped(
        identity.description, TextRole.DESCRIPTION, "sans", 16 * u, "#4b5563",
        max_lines=None, line_gap=4 * u, gap_after=4 * u,
    )
    column.add_gap(20 * u)

    slot = column.reserve(SHEET_SYMBOL_SIZE * u, gap_after=6 * u)
    plate = Box(slot.center_x - slot.height / 2, slot.y, slot.height, slot.height)
    column.add_line("Scan to visit shop", TextRole.CAPTION, "sans", 12 * u, "#6b7280", 24 * u)

    column.add_line(
        "Contact us on WhatsApp:", TextRole.CAPTION, "sans", 14 * u, "#4b5563", 8 * u
    )
    column.add_line(identity.whatsapp_number, TextRole.CONTACT, "sans-bold", 16 * u, "#111827", 6 * u)
    for field, text in identity.contact_lines():
        if field == "whatsapp_number":
            continue
        column.add_line(text, TextRole.CONTACT, "sans", 13 * u, "#374151", 4 * u)
    column.add_gap(20 * u)

    _listing_section(column, "Products", products, u, palette.primary)
    _listing_section(column, "Services", services, u, palette.primary)

    column.add_rule(width - 2 * pad, max(1.0, u), "#e5e7eb", gap_after=16 * u)
    footer = f"Visit: {shop_url}"
    footer_size = fonts.fit_text_single_line(footer, "sans", column.width, 12 * u, 8 * u, step=0.5 * u)
    column.add_line(footer, TextRole.URL, "sans", footer_size, "#6b7280")

    height = column.content_bottom + pad
    elements: list[Element] = [
        FillElement(Box(0, 0, width, height), fill="#ffffff"),
        FillElement(Box(0, 0, width, 6 * u), fill=palette.primary, gradient_to=palette.secondary),
        FillElement(plate, fill="#ffffff", shape="rounded", radius=8 * u, outline="#e5e7eb", stroke_width=u),
        SymbolElement(plate.inset(8 * u)),
    ]
    elements.extend(column.elements)

    logger.debug(
        f"Composed profile sheet for {identity.id}: {len(products)} products, "
        f"{len(services)} services, {width:.0f}x{height:.0f}"
    )

    return Composition(
        identity=identity,
        symbol=symbol,
        width=float(width),
        height=float(height),
        elements=tuple(elements),
        relayout_fn=partial(
            _relayout, identity, symbol, shop_url, tuple(products), tuple(services), theme
        ),
    )


def _relayout(
    identity: SellerIdentity,
    symbol: SymbolBitmap,
    shop_url: str,
    products: tuple[ListingSummary, ...],
    services: tuple[ListingSummary, ...],
    theme: ColorTheme,
    width: float,
    height: float | None = None,
) -> Composition:
    # Height always follows the content at the new width
    return compose_profile_sheet(
        identity, symbol, shop_url, list(products), list(services), theme, width=width
    )
