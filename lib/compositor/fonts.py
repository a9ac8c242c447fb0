# =============================================================================
# lib/compositor/fonts.py - Font Faces
# =============================================================================
# Layouts ask for a face ("sans-bold", "serif-italic", ...) and a pixel size.
# When a font directory is configured, the matching TrueType file is used;
# otherwise every face falls back to Pillow's bundled scalable font.
#
# The same lookup serves layout (text measurement) and painting, so measured
# boxes and painted glyphs always come from the same font.
# =============================================================================

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from PIL import ImageFont

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

FACE_FILES: dict[str, str] = {
    "sans": "Inter-Regular.ttf",
    "sans-bold": "Inter-Bold.ttf",
    "sans-light": "Inter-Light.ttf",
    "serif-bold": "Lora-Bold.ttf",
    "serif-italic": "Lora-Italic.ttf",
}

_font_dir: Path | None = None


class FontLoadError(ApplicationError):
    """Raised when a configured font file exists but cannot be loaded."""

    def __init__(self, path: str, error: str):
        super().__init__(
            f"Failed to load font {path}: {error}",
            code="FONT_LOAD_ERROR",
            suggestion="Check FONT_DIR or remove it to use the bundled font",
            details={"path": path},
        )


def configure_fonts(font_dir: str | Path | None) -> None:
    """Point face lookups at a directory of TrueType files (None = bundled font)."""
    global _font_dir
    _font_dir = Path(font_dir) if font_dir else None
    get_font.cache_clear()
    logger.info(f"Card fonts: {_font_dir or 'Pillow default'}")


@lru_cache(maxsize=512)
def get_font(face: str, size_px: int) -> ImageFont.FreeTypeFont:
    """
    Load a face at an integer pixel size.

    Raises:
        KeyError: Unknown face name
        FontLoadError: Configured file is present but unreadable
    """
    filename = FACE_FILES[face]
    size_px = max(1, int(size_px))

    if _font_dir is not None:
        path = _font_dir / filename
        if path.is_file():
            try:
                return ImageFont.truetype(str(path), size_px)
            except OSError as e:
                raise FontLoadError(str(path), str(e)) from e
        logger.debug(f"Font file {path} not found, using bundled font")

    return ImageFont.load_default(size=size_px)


def line_metrics(face: str, size: float) -> tuple[float, float]:
    """(ascent, descent) in px for a face at a (possibly fractional) size."""
    ascent, descent = get_font(face, round(size)).getmetrics()
    return float(ascent), float(descent)


def text_width(text: str, face: str, size: float) -> float:
    return float(get_font(face, round(size)).getlength(text))


# =============================================================================
# Text Fitting
# =============================================================================

def fit_text_single_line(
    text: str,
    face: str,
    max_width: float,
    max_size: float,
    min_size: float,
    step: float = 0.5,
) -> float:
    """
    Find the largest size (down to min_size) at which text fits max_width.

    Returns min_size if the text is too long even at the minimum; callers
    truncate in that case.
    """
    size = max_size
    while size >= min_size:
        if text_width(text, face, size) <= max_width:
            return size
        size -= step
    return min_size


def ellipsize(text: str, face: str, size: float, max_width: float) -> str:
    """Cut text until text + "..." fits max_width."""
    cut = text.rstrip()
    while cut and text_width(cut + "...", face, size) > max_width:
        cut = cut[:-1].rstrip()
    return cut + "..." if cut else ""


def truncate_to_width(text: str, face: str, size: float, max_width: float) -> str:
    """Return text unchanged if it fits, else an ellipsized prefix."""
    if text_width(text, face, size) <= max_width:
        return text
    return ellipsize(text, face, size, max_width)


def wrap_text_to_width(
    text: str,
    face: str,
    size: float,
    max_width: float,
    max_lines: int | None = 2,
) -> list[str]:
    """
    Wrap text into lines no wider than max_width.

    When words remain after max_lines, the last line ends with "...". A single
    word wider than a line is truncated rather than overflowing.
    """
    words = text.split()
    if not words:
        return []

    lines: list[str] = []
    current: list[str] = []

    for word in words:
        candidate = " ".join(current + [word])
        if text_width(candidate, face, size) <= max_width:
            current.append(word)
            continue

        if current:
            lines.append(" ".join(current))
        current = [word]

        if max_lines is not None and len(lines) == max_lines:
            lines[-1] = ellipsize(lines[-1], face, size, max_width)
            return [truncate_to_width(line, face, size, max_width) for line in lines]

    lines.append(" ".join(current))
    return [
        line for line in (truncate_to_width(l, face, size, max_width) for l in lines) if line
    ]
