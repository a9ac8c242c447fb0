# =============================================================================
# lib/exporter.py - Document Exporter
# =============================================================================
# Serializes a PrintArtifact to a downloadable file:
# - export_raster: lossless PNG at full artifact resolution
# - export_document: PDF with the artifact drawn full page width and
#   paginated vertically
#
# Pagination: the image is placed at vertical offset 0 on page 1, -p on
# page 2, -2p on page 3 and so on, until the remaining height is used up.
# A card (50.8 mm high on a 50.8 mm page) is one page; a 2.5-page sheet is
# three pages.
#
# PDFs are written with reportlab's invariant mode, so exporting the same
# artifact twice gives identical bytes.
# =============================================================================

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from lib.rasterizer import PrintArtifact
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Page sizes in mm (width, height)
CARD_PAGE_MM = (88.9, 50.8)
A4_PAGE_MM = (210.0, 297.0)

# Heights are paginated in whole micrometres
UM_PER_MM = 1000

PNG_MEDIA_TYPE = "image/png"
PDF_MEDIA_TYPE = "application/pdf"


class ExportIOError(ApplicationError):
    """Raised when an artifact cannot be serialized."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message,
            code="EXPORT_IO_ERROR",
            suggestion="Retry the export; if it keeps failing, try the PNG format",
            details=details,
        )


@dataclass(frozen=True)
class ExportedFile:
    """Bytes ready for download."""
    filename: str
    media_type: str
    content: bytes
    page_count: int = 1


def plan_pages(content_height_mm: float, page_height_mm: float) -> list[float]:
    """
    Vertical offsets (mm, page top = 0) of the image on each page.

    Both heights are first rounded to whole micrometres. Then remaining =
    content height; each page draws at -(k * page height) and subtracts one
    page height; pages stop once nothing remains. The number of pages is
    exactly ceil(content / page) for the rounded heights.

    Raises:
        ValueError: Non-positive heights
    """
    content_um = round(content_height_mm * UM_PER_MM)
    page_um = round(page_height_mm * UM_PER_MM)
    if content_um <= 0 or page_um <= 0:
        raise ValueError(
            f"Heights must be positive, got content={content_height_mm}, page={page_height_mm}"
        )

    offsets: list[float] = []
    remaining = content_um
    while True:
        offsets.append(-len(offsets) * page_height_mm)
        remaining -= page_um
        if remaining <= 0:
            return offsets


def export_raster(artifact: PrintArtifact, filename: str) -> ExportedFile:
    """
    Encode the artifact as PNG without resampling.

    Raises:
        ExportIOError: If encoding fails
    """
    buffer = io.BytesIO()
    pixel_dpi = round(artifact.dpi * artifact.density)
    try:
        artifact.image.save(buffer, format="PNG", dpi=(pixel_dpi, pixel_dpi))
    except (OSError, ValueError) as e:
        raise ExportIOError(f"Failed to encode PNG: {e}", details={"filename": filename}) from e

    content = buffer.getvalue()
    logger.info(f"Exported {filename}: {artifact.pixel_width}x{artifact.pixel_height}px, {len(content)} bytes")
    return ExportedFile(filename=filename, media_type=PNG_MEDIA_TYPE, content=content)


def export_document(
    artifact: PrintArtifact,
    page_width_mm: float,
    page_height_mm: float,
    filename: str,
) -> ExportedFile:
    """
    Write the artifact into a PDF of fixed-size pages.

    The image spans the page width; its height keeps the artifact's aspect
    ratio and is split over as many pages as plan_pages gives.

    Raises:
        ValueError: Non-positive page size
        ExportIOError: If the PDF cannot be written
    """
    if page_width_mm <= 0 or page_height_mm <= 0:
        raise ValueError(f"Page size must be positive, got {page_width_mm}x{page_height_mm}mm")

    image_width_mm = page_width_mm
    image_height_mm = artifact.height_mm * page_width_mm / artifact.width_mm
    offsets = plan_pages(image_height_mm, page_height_mm)

    buffer = io.BytesIO()
    try:
        pdf = canvas.Canvas(
            buffer,
            pagesize=(page_width_mm * mm, page_height_mm * mm),
            invariant=1,
        )
        pdf.setTitle(filename)
        image = ImageReader(artifact.image)

        for offset in offsets:
            # reportlab's origin is bottom-left; offset is measured from the page top
            y = page_height_mm - offset - image_height_mm
            pdf.drawImage(
                image,
                0,
                y * mm,
                width=image_width_mm * mm,
                height=image_height_mm * mm,
            )
            pdf.showPage()

        pdf.save()
    except Exception as e:
        raise ExportIOError(
            f"Failed to write PDF: {e}",
            details={"filename": filename, "pages": len(offsets)},
        ) from e

    content = buffer.getvalue()
    logger.info(
        f"Exported {filename}: {len(offsets)} page(s) of "
        f"{page_width_mm}x{page_height_mm}mm, {len(content)} bytes"
    )
    return ExportedFile(
        filename=filename,
        media_type=PDF_MEDIA_TYPE,
        content=content,
        page_count=len(offsets),
    )
