# =============================================================================
# lib/compositor/ - Template Compositor
# =============================================================================
# Builds immutable display lists (compositions) for printable visuals:
# - compositor.py: business cards (four variants x five themes)
# - variants.py: the card layout functions, registered per CardVariant
# - sheet.py: multi-page profile sheet
# - poster.py: labelled QR poster
# - painter.py: paints any composition with Pillow at any scale
# =============================================================================

from lib.compositor.compositor import compose, compose_card
from lib.compositor.layout import (
    Box,
    CardComposition,
    Composition,
    FillElement,
    SymbolElement,
    TextElement,
    TextRole,
)
from lib.compositor.painter import paint
from lib.compositor.poster import compose_poster
from lib.compositor.registry import (
    UnknownVariantError,
    get_variant_layout,
    list_variants,
)
from lib.compositor.sheet import compose_profile_sheet

__all__ = [
    # Compose
    "compose",
    "compose_card",
    "compose_poster",
    "compose_profile_sheet",
    # Display list
    "Box",
    "CardComposition",
    "Composition",
    "FillElement",
    "SymbolElement",
    "TextElement",
    "TextRole",
    # Paint
    "paint",
    # Registry
    "UnknownVariantError",
    "get_variant_layout",
    "list_variants",
]
