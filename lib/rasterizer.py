# =============================================================================
# lib/rasterizer.py - Print Rasterizer
# =============================================================================
# Turns a composition into a print-resolution bitmap.
#
# The composition the user sees is laid out at preview size. For print, the
# same layout is re-run at the physical logical size (1050 x 600 for a card)
# and painted into an in-memory framebuffer `density` times larger. The
# caller's composition is left untouched, and the symbol is re-encoded at
# the final resolution rather than scaled up.
#
# Usage:
#   artifact = rasterize(composition)              # 3150 x 1800 for a card
#   artifact.width_mm, artifact.height_mm          # 88.9, 50.8
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image

from core.models.card import PRINT_DPI, PRINT_HEIGHT_PX, PRINT_WIDTH_PX
from lib.compositor.layout import Composition
from lib.compositor.painter import paint
from lib.symbol_encoder import EncodingError
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

MIN_DENSITY = 3.0
MM_PER_INCH = 25.4


class RasterizationError(ApplicationError):
    """Raised when the print framebuffer cannot be produced."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message,
            code="RASTERIZATION_ERROR",
            suggestion="Check FONT_DIR and available memory, then retry the export",
            details=details,
        )


@dataclass(frozen=True)
class PrintArtifact:
    """
    A rasterized composition.

    `logical_width`/`logical_height` are the layout size in px; the image is
    that size times `density`. Physical size assumes `dpi` logical px per
    inch, so a 1050 x 600 card at 300 DPI is 88.9 x 50.8 mm.
    """
    image: Image.Image
    logical_width: float
    logical_height: float
    density: float
    dpi: int = PRINT_DPI

    @property
    def pixel_width(self) -> int:
        return self.image.width

    @property
    def pixel_height(self) -> int:
        return self.image.height

    @property
    def width_mm(self) -> float:
        return self.logical_width / self.dpi * MM_PER_INCH

    @property
    def height_mm(self) -> float:
        return self.logical_height / self.dpi * MM_PER_INCH


def rasterize(
    composition: Composition,
    physical_width_px: float = PRINT_WIDTH_PX,
    physical_height_px: float | None = PRINT_HEIGHT_PX,
    density_multiplier: float = MIN_DENSITY,
    dpi: int = PRINT_DPI,
    background: str = "#ffffff",
) -> PrintArtifact:
    """
    Render a composition at print resolution.

    Args:
        composition: Layout to print (not modified)
        physical_width_px: Logical print width
        physical_height_px: Logical print height; None keeps the height the
            layout produces at that width (used by content-sized sheets)
        density_multiplier: Output pixels per logical pixel, at least 3
        dpi: Logical px per inch, for physical size
        background: Framebuffer background colour

    Returns:
        PrintArtifact of round(physical * density) pixels

    Raises:
        ValueError: density_multiplier below 3
        EncodingError: Symbol cannot be re-encoded at the target size
        RasterizationError: Any other failure while laying out or painting
    """
    if density_multiplier < MIN_DENSITY:
        raise ValueError(
            f"density_multiplier must be at least {MIN_DENSITY}, got {density_multiplier}"
        )

    try:
        clone = composition.relayout(physical_width_px, physical_height_px)
        image = paint(clone, scale=density_multiplier, background=background)
    except EncodingError:
        raise
    except Exception as e:
        logger.exception("Rasterization failed")
        raise RasterizationError(
            f"Failed to rasterize composition: {e}",
            details={
                "width": physical_width_px,
                "height": physical_height_px,
                "density": density_multiplier,
            },
        ) from e

    artifact = PrintArtifact(
        image=image,
        logical_width=clone.width,
        logical_height=clone.height,
        density=density_multiplier,
        dpi=dpi,
    )
    logger.info(
        f"Rasterized {clone.width:.0f}x{clone.height:.0f} at x{density_multiplier:g} "
        f"-> {artifact.pixel_width}x{artifact.pixel_height}px"
    )
    return artifact
