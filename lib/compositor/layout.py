# =============================================================================
# lib/compositor/layout.py - Composition Display List
# =============================================================================
# A composition is an ordered list of drawable elements positioned in canvas
# pixels. Layout functions build it; the painter turns it into pixels at any
# scale. Nothing here touches Pillow images.
#
# Elements:
# - FillElement: rectangle / rounded rectangle / ellipse, optional gradient
# - TextElement: one line of text with a role (name, description, contact...)
# - SymbolElement: the square box the QR symbol is painted into
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

from lib.compositor import fonts

if TYPE_CHECKING:
    from core.models.card import CardVariant, ColorTheme
    from core.models.seller import SellerIdentity
    from lib.symbol_encoder import SymbolBitmap


# =============================================================================
# Geometry
# =============================================================================

@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in canvas px."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def intersects(self, other: Box) -> bool:
        """True when the boxes share a region of positive area."""
        return (
            self.x < other.right and other.x < self.right
            and self.y < other.bottom and other.y < self.bottom
        )

    def contains(self, other: Box, tolerance: float = 1e-6) -> bool:
        return (
            other.x >= self.x - tolerance
            and other.y >= self.y - tolerance
            and other.right <= self.right + tolerance
            and other.bottom <= self.bottom + tolerance
        )

    def shifted(self, dx: float = 0.0, dy: float = 0.0) -> Box:
        return Box(self.x + dx, self.y + dy, self.width, self.height)

    def inset(self, amount: float) -> Box:
        return Box(
            self.x + amount,
            self.y + amount,
            self.width - 2 * amount,
            self.height - 2 * amount,
        )


# =============================================================================
# Elements
# =============================================================================

class TextRole(str, Enum):
    """What a text line shows. Used by tests and by the completeness checks."""
    NAME = "name"
    DESCRIPTION = "description"
    CONTACT = "contact"
    CAPTION = "caption"
    BRAND = "brand"
    URL = "url"


@dataclass(frozen=True)
class FillElement:
    """A filled and/or stroked shape."""
    box: Box
    fill: str | None = None
    shape: str = "rect"  # rect | rounded | ellipse
    radius: float = 0.0
    outline: str | None = None
    stroke_width: float = 0.0
    opacity: float = 1.0
    # 135 degree linear gradient from `fill` to `gradient_to`
    gradient_to: str | None = None


@dataclass(frozen=True)
class TextElement:
    """One line of text; box is the measured line box at layout size."""
    box: Box
    text: str
    role: TextRole
    face: str
    size: float
    color: str
    opacity: float = 1.0
    align: str = "left"  # left | center


@dataclass(frozen=True)
class SymbolElement:
    """Square box the symbol is painted into, centred and never stretched."""
    box: Box
    dark: str | None = None


Element = Union[FillElement, TextElement, SymbolElement]


def _geometry(element: Element) -> tuple:
    """Colour-free description of an element."""
    if isinstance(element, TextElement):
        return ("text", element.box, element.role, element.text, element.face, element.size)
    if isinstance(element, SymbolElement):
        return ("symbol", element.box)
    return ("fill", element.box, element.shape, element.radius, element.stroke_width)


# =============================================================================
# Composition
# =============================================================================

@dataclass(frozen=True)
class Composition:
    """
    A laid-out visual at one canvas size.

    `relayout` re-runs the layout that produced this composition with the
    same inputs at another size; the rasterizer uses it instead of stretching
    pixels.
    """
    identity: SellerIdentity
    symbol: SymbolBitmap
    width: float
    height: float
    elements: tuple[Element, ...]
    relayout_fn: Callable[[float, float], Composition] = field(repr=False, compare=False)

    def relayout(self, width: float, height: float) -> Composition:
        return self.relayout_fn(width, height)

    @property
    def bounds(self) -> Box:
        return Box(0.0, 0.0, self.width, self.height)

    def text_elements(self, role: TextRole | None = None) -> list[TextElement]:
        return [
            e for e in self.elements
            if isinstance(e, TextElement) and (role is None or e.role == role)
        ]

    def texts(self, role: TextRole | None = None) -> list[str]:
        return [e.text for e in self.text_elements(role)]

    @property
    def symbol_element(self) -> SymbolElement:
        return next(e for e in self.elements if isinstance(e, SymbolElement))

    def geometry(self) -> list[tuple]:
        """Element geometry without colours, for comparing layouts."""
        return [_geometry(e) for e in self.elements]

    def overlapping_text(self) -> list[tuple[TextElement, TextElement]]:
        """Pairs of text lines whose boxes overlap (empty for a valid layout)."""
        texts = self.text_elements()
        return [
            (a, b)
            for i, a in enumerate(texts)
            for b in texts[i + 1:]
            if a.box.intersects(b.box)
        ]


@dataclass(frozen=True)
class CardComposition(Composition):
    """A business card: a composition of one variant under one theme."""
    variant: CardVariant | None = None
    theme: ColorTheme | None = None


# =============================================================================
# Text Column Builder
# =============================================================================

class TextColumn:
    """
    Stacks text lines top-down inside a column.

    A line that would cross `bottom` is dropped instead of overlapping what
    follows, so absent or overlong optional lines collapse cleanly.
    """

    def __init__(
        self,
        x: float,
        top: float,
        width: float,
        bottom: float,
        align: str = "left",
    ):
        self.x = x
        self.top = top
        self.width = width
        self.bottom = bottom
        self.align = align
        self.cursor = top
        self.content_bottom = top
        self.elements: list[Element] = []

    @property
    def used_height(self) -> float:
        """Height from the column top to the bottom of the last element."""
        return self.content_bottom - self.top

    def _line_box(self, text: str, face: str, size: float, indent: float) -> Box:
        ascent, descent = fonts.line_metrics(face, size)
        width = min(fonts.text_width(text, face, size), self.width - indent)
        if self.align == "center":
            x = self.x + (self.width - width) / 2
        else:
            x = self.x + indent
        return Box(x, self.cursor, width, ascent + descent)

    def add_line(
        self,
        text: str,
        role: TextRole,
        face: str,
        size: float,
        color: str,
        gap_after: float = 0.0,
        opacity: float = 1.0,
        indent: float = 0.0,
    ) -> TextElement | None:
        """Add one line (truncated to the column width). None if it doesn't fit."""
        text = fonts.truncate_to_width(text, face, size, self.width - indent)
        if not text:
            return None
        box = self._line_box(text, face, size, indent)
        if box.bottom > self.bottom:
            return None
        element = TextElement(box, text, role, face, size, color, opacity, self.align)
        self.elements.append(element)
        self.content_bottom = box.bottom
        self.cursor = box.bottom + gap_after
        return element

    def add_wrapped(
        self,
        text: str,
        role: TextRole,
        face: str,
        size: float,
        color: str,
        max_lines: int | None = 2,
        line_gap: float = 0.0,
        gap_after: float = 0.0,
        opacity: float = 1.0,
    ) -> list[TextElement]:
        lines = fonts.wrap_text_to_width(text, face, size, self.width, max_lines)
        added = []
        for line in lines:
            element = self.add_line(line, role, face, size, color, line_gap, opacity)
            if element is None:
                break
            added.append(element)
        if added:
            self.cursor += gap_after - line_gap
        return added

    def add_rule(self, width: float, thickness: float, color: str, gap_after: float = 0.0) -> None:
        """A centred (or left-aligned) horizontal rule, e.g. a divider under a name."""
        if self.cursor + thickness > self.bottom:
            return
        x = self.x + (self.width - width) / 2 if self.align == "center" else self.x
        self.elements.append(FillElement(Box(x, self.cursor, width, thickness), fill=color))
        self.content_bottom = self.cursor + thickness
        self.cursor += thickness + gap_after

    def add_gap(self, amount: float) -> None:
        self.cursor += amount

    def shifted(self, dy: float) -> list[Element]:
        """Elements moved vertically by dy."""
        return [replace(e, box=e.box.shifted(dy=dy)) for e in self.elements]

    def centered_in(self, top: float, bottom: float) -> list[Element]:
        """Elements moved so the stacked block is vertically centred in [top, bottom]."""
        height = self.used_height
        return self.shifted(top + (bottom - top - height) / 2 - self.top)

    def anchored_bottom(self) -> list[Element]:
        """Elements moved down so the last one ends at the column bottom."""
        return self.shifted(self.bottom - self.content_bottom)

    def reserve(self, height: float, gap_after: float = 0.0) -> Box:
        """Claim a full-width block (e.g. for a symbol) at the cursor."""
        box = Box(self.x, self.cursor, self.width, height)
        self.content_bottom = box.bottom
        self.cursor = box.bottom + gap_after
        return box
