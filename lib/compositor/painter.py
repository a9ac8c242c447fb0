# =============================================================================
# lib/compositor/painter.py - Composition Painter
# =============================================================================
# Paints a composition's display list into a Pillow RGB image.
#
#   image = paint(composition, scale=3.0)
#
# The image is (width * scale) x (height * scale). Fills with opacity or a
# gradient are pasted through an "L" mask; strokes and text are drawn with
# an RGBA draw context so partial opacity blends onto the canvas.
#
# The symbol is re-encoded at the largest integer module size that fits its
# scaled box and centred there; it is never resampled.
# =============================================================================

from __future__ import annotations

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from lib.compositor import fonts
from lib.compositor.layout import (
    Box,
    Composition,
    FillElement,
    SymbolElement,
    TextElement,
)
from lib.symbol_encoder import SymbolBitmap


def _rgba(color: str, opacity: float = 1.0) -> tuple[int, int, int, int]:
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b, round(255 * opacity)


def _scaled(box: Box, scale: float) -> tuple[int, int, int, int]:
    """Box corners in output pixels (x0, y0, x1, y1), x1/y1 exclusive."""
    return (
        round(box.x * scale),
        round(box.y * scale),
        round(box.right * scale),
        round(box.bottom * scale),
    )


def _gradient(width: int, height: int, start: str, end: str) -> Image.Image:
    """135 degree linear gradient: `start` at the top-left, `end` at the bottom-right."""
    xs = np.arange(width, dtype=np.float64)[None, :]
    ys = np.arange(height, dtype=np.float64)[:, None]
    t = (xs + ys) / max(width + height - 2, 1)

    a = np.array(ImageColor.getrgb(start)[:3], dtype=np.float64)
    b = np.array(ImageColor.getrgb(end)[:3], dtype=np.float64)
    rgb = a + (b - a) * t[..., None]
    return Image.fromarray(np.rint(rgb).astype(np.uint8))


def _draw_shape(draw: ImageDraw.ImageDraw, element: FillElement, xy, scale: float, **kwargs) -> None:
    if element.shape == "ellipse":
        draw.ellipse(xy, **kwargs)
    elif element.shape == "rounded":
        draw.rounded_rectangle(xy, radius=round(element.radius * scale), **kwargs)
    else:
        draw.rectangle(xy, **kwargs)


def _paint_fill(canvas: Image.Image, element: FillElement, scale: float) -> None:
    x0, y0, x1, y1 = _scaled(element.box, scale)
    w, h = x1 - x0, y1 - y0
    if w <= 0 or h <= 0:
        return

    if element.fill is not None:
        mask = Image.new("L", (w, h), 0)
        _draw_shape(
            ImageDraw.Draw(mask), element, (0, 0, w - 1, h - 1), scale,
            fill=round(255 * element.opacity),
        )
        if element.gradient_to:
            source = _gradient(w, h, element.fill, element.gradient_to)
        else:
            source = Image.new("RGB", (w, h), element.fill)
        canvas.paste(source, (x0, y0), mask)

    if element.outline and element.stroke_width > 0:
        stroke = max(1, round(element.stroke_width * scale))
        _draw_shape(
            ImageDraw.Draw(canvas, "RGBA"), element, (x0, y0, x1 - 1, y1 - 1), scale,
            outline=_rgba(element.outline, element.opacity),
            width=stroke,
        )


def _paint_text(canvas: Image.Image, element: TextElement, scale: float) -> None:
    font = fonts.get_font(element.face, round(element.size * scale))
    box = element.box
    if element.align == "center":
        xy, anchor = (box.center_x * scale, box.y * scale), "ma"
    else:
        xy, anchor = (box.x * scale, box.y * scale), "la"
    ImageDraw.Draw(canvas, "RGBA").text(
        xy, element.text, font=font, fill=_rgba(element.color, element.opacity), anchor=anchor,
    )


def _paint_symbol(
    canvas: Image.Image,
    element: SymbolElement,
    symbol: SymbolBitmap,
    scale: float,
) -> None:
    x0, y0, x1, y1 = _scaled(element.box, scale)
    box_px = min(x1 - x0, y1 - y0)

    if element.dark is not None:
        symbol = symbol.recolored(element.dark)
    fitted = symbol.fitted(box_px)

    offset_x = x0 + (x1 - x0 - fitted.size_px) // 2
    offset_y = y0 + (y1 - y0 - fitted.size_px) // 2
    canvas.paste(fitted.to_image(), (offset_x, offset_y))


def paint(composition: Composition, scale: float = 1.0, background: str = "#ffffff") -> Image.Image:
    """
    Paint a composition.

    Args:
        composition: Display list to paint
        scale: Output pixels per canvas pixel
        background: Colour under the first element

    Returns:
        RGB image of round(width * scale) x round(height * scale)

    Raises:
        EncodingError: Symbol box too small for the symbol at this scale
    """
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")

    size = (round(composition.width * scale), round(composition.height * scale))
    canvas = Image.new("RGB", size, background)

    for element in composition.elements:
        if isinstance(element, FillElement):
            _paint_fill(canvas, element, scale)
        elif isinstance(element, TextElement):
            _paint_text(canvas, element, scale)
        elif isinstance(element, SymbolElement):
            _paint_symbol(canvas, element, composition.symbol, scale)

    return canvas
