# =============================================================================
# core/models/card.py - Business Card Options
# =============================================================================
# These models define the closed sets a seller picks from when designing a
# printable business card:
# - CardVariant: the four layouts
# - ColorTheme: the five colour palettes
# - PreviewSize: on-screen preview widths
# - CardConfig: one immutable selection of all three
#
# CardConfig is passed into the compositor on every call. Nothing about the
# current selection is stored anywhere else, so a changed selection always
# produces a fresh composition.
# =============================================================================

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


# Physical card constants (3.5" x 2" at 300 DPI)
CARD_ASPECT_RATIO = 1.75
PRINT_WIDTH_PX = 1050
PRINT_HEIGHT_PX = 600
PRINT_DPI = 300
CARD_PAGE_WIDTH_MM = 88.9
CARD_PAGE_HEIGHT_MM = 50.8


class CardVariant(str, Enum):
    """
    Business card layouts.

    - primary-banded: gradient background, symbol on a light side panel
    - header-strip: white card under a coloured header strip
    - borderless-minimal: white card, light typography, hairline border
    - bordered-ornamental: inset border, centred serif typography
    """
    PRIMARY_BANDED = "primary-banded"
    HEADER_STRIP = "header-strip"
    BORDERLESS_MINIMAL = "borderless-minimal"
    BORDERED_ORNAMENTAL = "bordered-ornamental"

    @property
    def label(self) -> str:
        """Name shown in the template picker."""
        return _VARIANT_LABELS[self]


_VARIANT_LABELS = {
    CardVariant.PRIMARY_BANDED: "Executive",
    CardVariant.HEADER_STRIP: "Modern",
    CardVariant.BORDERLESS_MINIMAL: "Minimal",
    CardVariant.BORDERED_ORNAMENTAL: "Elegant",
}


class ThemePalette(NamedTuple):
    """Colours of one theme: (primary, secondary, accent, text)."""
    primary: str
    secondary: str
    accent: str
    text: str


class ColorTheme(str, Enum):
    """Named colour themes."""
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    GOLD = "gold"
    BLACK = "black"

    @property
    def palette(self) -> ThemePalette:
        return THEME_PALETTES[self]


THEME_PALETTES: dict[ColorTheme, ThemePalette] = {
    ColorTheme.BLUE: ThemePalette("#1e40af", "#3b82f6", "#dbeafe", "#1e40af"),
    ColorTheme.GREEN: ThemePalette("#166534", "#22c55e", "#dcfce7", "#166534"),
    ColorTheme.PURPLE: ThemePalette("#7c3aed", "#a855f7", "#ede9fe", "#7c3aed"),
    ColorTheme.GOLD: ThemePalette("#d97706", "#f59e0b", "#fef3c7", "#d97706"),
    ColorTheme.BLACK: ThemePalette("#000000", "#374151", "#f3f4f6", "#000000"),
}


class PreviewSize(str, Enum):
    """On-screen preview sizes (Small / Medium / Large in the editor)."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def width_px(self) -> int:
        return _PREVIEW_WIDTHS[self]


_PREVIEW_WIDTHS = {
    PreviewSize.SMALL: 384,
    PreviewSize.MEDIUM: 512,
    PreviewSize.LARGE: 672,
}


class CardConfig(BaseModel):
    """
    One immutable card selection.

    Example:
        {
            "variant": "primary-banded",
            "theme": "blue",
            "preview_size": "small"
        }
    """

    model_config = ConfigDict(frozen=True)

    variant: CardVariant = Field(
        default=CardVariant.PRIMARY_BANDED,
        description="Card layout"
    )

    theme: ColorTheme = Field(
        default=ColorTheme.BLUE,
        description="Colour theme"
    )

    preview_size: PreviewSize = Field(
        default=PreviewSize.SMALL,
        description="Width of the on-screen preview"
    )

    @property
    def preview_dimensions(self) -> tuple[int, int]:
        """Preview canvas (width, height) in px at the card aspect ratio."""
        width = self.preview_size.width_px
        return width, round(width / CARD_ASPECT_RATIO)


class CardOptions(BaseModel):
    """Everything the card editor can offer, for GET /card/options."""
    variants: list[dict[str, str]]
    themes: list[dict[str, str]]
    preview_sizes: list[dict[str, str | int]]

    @classmethod
    def all(cls) -> "CardOptions":
        return cls(
            variants=[{"id": v.value, "name": v.label} for v in CardVariant],
            themes=[{"id": t.value, **t.palette._asdict()} for t in ColorTheme],
            preview_sizes=[{"id": s.value, "width_px": s.width_px} for s in PreviewSize],
        )
