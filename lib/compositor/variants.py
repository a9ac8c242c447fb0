# =============================================================================
# lib/compositor/variants.py - Business Card Layouts
# =============================================================================
# One pure layout function per CardVariant. Each takes a LayoutContext and
# returns the ordered element list of the card.
#
# All geometry is expressed in the unit u = height / 200, so the same layout
# works at preview size (384 px wide) and print size (1050 px wide). Colours
# come only from the palette and a few fixed neutrals, never from geometry,
# so swapping the theme of a variant changes no box.
#
# Text never overlaps: every block of lines is stacked in a TextColumn that
# drops what doesn't fit, and columns are kept clear of the symbol area.
# =============================================================================

from __future__ import annotations

from core.models.card import CardVariant
from lib.compositor import fonts
from lib.compositor.layout import (
    Box,
    Element,
    FillElement,
    SymbolElement,
    TextColumn,
    TextRole,
)
from lib.compositor.registry import LayoutContext, register_variant

WHITE = "#ffffff"

# Shared proportions (in u)
PAD = 16.0
CONTACT_SIZE = 8.5
CONTACT_GAP = 2.0
DESCRIPTION_SIZE = 9.0
CAPTION_SIZE = 6.5

MINIMAL_SYMBOL_DARK = "#1f2937"


def _name_line(
    column: TextColumn,
    ctx: LayoutContext,
    face: str,
    max_size: float,
    min_size: float,
    color: str,
    gap_after: float,
) -> None:
    """Business name, shrunk to fit the column width."""
    u = ctx.unit
    size = fonts.fit_text_single_line(
        ctx.identity.business_name, face, column.width, max_size * u, min_size * u, step=0.5 * u
    )
    column.add_line(ctx.identity.business_name, TextRole.NAME, face, size, color, gap_after * u)


def _contact_lines(
    column: TextColumn,
    ctx: LayoutContext,
    face: str,
    color: str,
    marker: str | None = None,
    marker_outline: str | None = None,
) -> None:
    """Contact lines in priority order; optional disc markers before each."""
    u = ctx.unit
    size = CONTACT_SIZE * u
    indent = 8 * u if marker else 0.0
    for _, text in ctx.identity.contact_lines():
        element = column.add_line(
            text, TextRole.CONTACT, face, size, color, CONTACT_GAP * u, indent=indent
        )
        if element is None:
            break
        if marker:
            diameter = 3.5 * u
            column.elements.append(FillElement(
                Box(column.x, element.box.center_y - diameter / 2, diameter, diameter),
                fill=marker,
                shape="ellipse",
                outline=marker_outline,
                stroke_width=0.5 * u if marker_outline else 0.0,
            ))


def _symbol_block(
    ctx: LayoutContext,
    area: Box,
    plate_size: float,
    symbol_size: float,
    plate_fill: str,
    captions: list[tuple[str, TextRole, str, float, str]],
    plate_outline: str | None = None,
    plate_stroke: float = 0.0,
    symbol_dark: str | None = None,
) -> list[Element]:
    """
    Plate + symbol + caption lines, centred as one block inside `area`.

    captions: (text, role, face, size_u, color) per line.
    """
    u = ctx.unit
    gap = 5 * u

    column = TextColumn(area.x, 0.0, area.width, area.height, align="center")
    for text, role, face, size, color in captions:
        column.add_line(text, role, face, size * u, color, 1.5 * u)

    block_height = plate_size * u + gap + column.used_height
    top = area.y + max(0.0, (area.height - block_height) / 2)

    plate = Box(area.center_x - plate_size * u / 2, top, plate_size * u, plate_size * u)
    symbol_box = Box(
        plate.center_x - symbol_size * u / 2,
        plate.center_y - symbol_size * u / 2,
        symbol_size * u,
        symbol_size * u,
    )

    elements: list[Element] = [
        FillElement(
            plate,
            fill=plate_fill,
            shape="rounded",
            radius=4 * u,
            outline=plate_outline,
            stroke_width=plate_stroke,
        ),
        SymbolElement(symbol_box, dark=symbol_dark),
    ]
    elements.extend(column.shifted(plate.bottom + gap))
    return elements


# =============================================================================
# Executive: gradient card, white text, light symbol panel
# =============================================================================

@register_variant(CardVariant.PRIMARY_BANDED)
def primary_banded(ctx: LayoutContext) -> list[Element]:
    u = ctx.unit
    w, h = ctx.width, ctx.height
    palette = ctx.palette
    panel_x = w * 2 / 3

    elements: list[Element] = [
        FillElement(Box(0, 0, w, h), fill=palette.primary, gradient_to=palette.secondary),
    ]

    header = TextColumn(PAD * u, PAD * u, panel_x - 2 * PAD * u, h - PAD * u)
    _name_line(header, ctx, "sans-bold", 22, 12, WHITE, gap_after=4)
    header.add_wrapped(
        ctx.identity.description, TextRole.DESCRIPTION, "sans", 10 * u, WHITE,
        max_lines=2, gap_after=6 * u, opacity=0.9,
    )
    elements.extend(header.elements)

    contacts = TextColumn(header.x, header.cursor, header.width, h - PAD * u)
    _contact_lines(contacts, ctx, "sans", WHITE)
    elements.extend(contacts.anchored_bottom())

    panel = Box(panel_x, 0, w - panel_x, h)
    elements.append(FillElement(panel, fill=WHITE, opacity=0.95))
    elements.extend(_symbol_block(
        ctx,
        panel.inset(6 * u),
        plate_size=76,
        symbol_size=64,
        plate_fill=WHITE,
        captions=[
            ("Scan to Visit Shop", TextRole.CAPTION, "sans-bold", CAPTION_SIZE, palette.text),
            ("Powered by", TextRole.BRAND, "sans", 5.5, "#6b7280"),
            (ctx.brand_name, TextRole.BRAND, "sans-bold", 8, palette.primary),
        ],
    ))
    return elements


# =============================================================================
# Modern: white card under a coloured header strip
# =============================================================================

@register_variant(CardVariant.HEADER_STRIP)
def header_strip(ctx: LayoutContext) -> list[Element]:
    u = ctx.unit
    w, h = ctx.width, ctx.height
    palette = ctx.palette
    strip = 28 * u
    content_top = strip + 12 * u
    symbol_area_width = 84 * u

    elements: list[Element] = [
        FillElement(Box(0, 0, w, h), fill=WHITE, outline="#e5e7eb", stroke_width=1 * u),
        FillElement(Box(0, 0, w, strip), fill=palette.primary),
    ]

    column = TextColumn(
        PAD * u,
        content_top,
        w - 2 * PAD * u - symbol_area_width - 12 * u,
        h - PAD * u,
    )
    _name_line(column, ctx, "sans-bold", 18, 11, "#111827", gap_after=3)
    column.add_wrapped(
        ctx.identity.description, TextRole.DESCRIPTION, "sans", DESCRIPTION_SIZE * u, "#4b5563",
        max_lines=2, gap_after=8 * u,
    )
    _contact_lines(
        column, ctx, "sans", "#374151", marker=palette.accent, marker_outline=palette.primary,
    )
    elements.extend(column.elements)

    area = Box(w - PAD * u - symbol_area_width, content_top, symbol_area_width, h - PAD * u - content_top)
    elements.extend(_symbol_block(
        ctx,
        area,
        plate_size=72,
        symbol_size=60,
        plate_fill="#f9fafb",
        captions=[("Scan to Visit", TextRole.CAPTION, "sans", CAPTION_SIZE, "#6b7280")],
    ))
    return elements


# =============================================================================
# Minimal: white card, light typography, hairline border
# =============================================================================

@register_variant(CardVariant.BORDERLESS_MINIMAL)
def borderless_minimal(ctx: LayoutContext) -> list[Element]:
    u = ctx.unit
    w, h = ctx.width, ctx.height
    palette = ctx.palette
    symbol_area_width = 80 * u

    elements: list[Element] = [
        FillElement(Box(0, 0, w, h), fill=WHITE, outline="#e5e7eb", stroke_width=0.5 * u),
    ]

    column = TextColumn(
        PAD * u,
        PAD * u,
        w - 2 * PAD * u - symbol_area_width - 14 * u,
        h - PAD * u,
    )
    _name_line(column, ctx, "sans-light", 20, 11, palette.text, gap_after=3)
    column.add_wrapped(
        ctx.identity.description, TextRole.DESCRIPTION, "sans", DESCRIPTION_SIZE * u, "#6b7280",
        max_lines=2, gap_after=5 * u,
    )
    column.add_rule(24 * u, 0.75 * u, palette.secondary, gap_after=6 * u)
    _contact_lines(column, ctx, "sans", "#4b5563")
    elements.extend(column.centered_in(PAD * u, h - PAD * u))

    area = Box(w - PAD * u - symbol_area_width, PAD * u, symbol_area_width, h - 2 * PAD * u)
    elements.extend(_symbol_block(
        ctx,
        area,
        plate_size=72,
        symbol_size=60,
        plate_fill=WHITE,
        plate_outline="#e5e7eb",
        plate_stroke=0.75 * u,
        symbol_dark=MINIMAL_SYMBOL_DARK,
        captions=[("Visit Shop", TextRole.CAPTION, "sans-light", CAPTION_SIZE, "#9ca3af")],
    ))
    return elements


# =============================================================================
# Elegant: inset ornamental border, centred serif typography
# =============================================================================

@register_variant(CardVariant.BORDERED_ORNAMENTAL)
def bordered_ornamental(ctx: LayoutContext) -> list[Element]:
    u = ctx.unit
    w, h = ctx.width, ctx.height
    palette = ctx.palette
    inset = 8 * u
    inner = inset + 14 * u
    symbol_area_width = 80 * u

    elements: list[Element] = [
        FillElement(Box(0, 0, w, h), fill=WHITE),
        FillElement(
            Box(0, 0, w, h).inset(inset),
            shape="rounded",
            radius=6 * u,
            outline=palette.primary,
            stroke_width=2 * u,
        ),
    ]

    column = TextColumn(
        inner,
        inner,
        w - 2 * inner - symbol_area_width - 10 * u,
        h - inner,
        align="center",
    )
    _name_line(column, ctx, "serif-bold", 20, 11, palette.primary, gap_after=4)
    column.add_rule(32 * u, 1 * u, palette.secondary, gap_after=5 * u)
    column.add_wrapped(
        ctx.identity.description, TextRole.DESCRIPTION, "serif-italic", DESCRIPTION_SIZE * u,
        "#4b5563", max_lines=2, gap_after=6 * u,
    )
    _contact_lines(column, ctx, "sans", "#374151")
    elements.extend(column.centered_in(inner, h - inner))

    area = Box(w - inner - symbol_area_width, inner, symbol_area_width, h - 2 * inner)
    elements.extend(_symbol_block(
        ctx,
        area,
        plate_size=72,
        symbol_size=60,
        plate_fill=WHITE,
        plate_outline=palette.primary,
        plate_stroke=1 * u,
        captions=[("Scan to Visit", TextRole.CAPTION, "serif-italic", CAPTION_SIZE, palette.primary)],
    ))
    return elements
