# =============================================================================
# lib/symbol_encoder.py - QR Symbol Encoder
# =============================================================================
# Encodes a URL into a QR symbol bitmap.
#
# Business cards are printed, folded and scanned in poor lighting, so every
# symbol in the system uses correction level H (~30% codeword recovery).
# The payload is always written in byte mode, which makes the capacity limit
# exact: a payload one byte past the limit raises EncodingError rather than
# being truncated or split across modes.
#
# Usage:
#   from lib.symbol_encoder import encode
#   symbol = encode("https://sellcard.app/shop/123", module_size_px=8)
#   png = symbol.to_png_bytes()
# =============================================================================

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Union

import numpy as np
import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.util import MODE_8BIT_BYTE, QRData
from PIL import Image, ImageColor

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

Color = Union[str, tuple[int, int, int]]

CORRECTION_LEVELS: dict[str, int] = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

# Byte-mode capacity of a version 40 symbol per correction level
MAX_PAYLOAD_BYTES: dict[str, int] = {
    "L": 2953,
    "M": 2331,
    "Q": 1663,
    "H": 1273,
}

DEFAULT_CORRECTION_LEVEL = "H"
DEFAULT_DARK = "#000000"
DEFAULT_LIGHT = "#ffffff"


class EncodingError(ApplicationError):
    """Raised when a payload cannot be encoded into a complete symbol."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message,
            code="ENCODING_ERROR",
            suggestion="Use a non-empty URL that fits the symbol capacity",
            details=details,
        )


# =============================================================================
# Symbol Presets
# =============================================================================

@dataclass(frozen=True)
class SymbolPreset:
    """Size and quiet-zone settings for one place a symbol is shown."""
    width_px: int
    margin_modules: int
    dark: str = DEFAULT_DARK
    light: str = DEFAULT_LIGHT


# Printed cards and sheets, and the standalone QR download
CARD_EDITOR_PRESET = SymbolPreset(width_px=300, margin_modules=1)
STANDALONE_PRESET = SymbolPreset(width_px=200, margin_modules=2)


# =============================================================================
# SymbolBitmap
# =============================================================================

@dataclass(frozen=True, eq=False)
class SymbolBitmap:
    """
    A square QR bitmap for one payload.

    `modules` is the read-only module matrix without the quiet zone
    (True = dark). Pixel size is (modules + 2 * margin) * module_size_px.
    """
    payload: str
    modules: np.ndarray
    module_size_px: int
    margin_modules: int
    dark: tuple[int, int, int]
    light: tuple[int, int, int]
    correction_level: str
    version: int

    @property
    def module_count(self) -> int:
        return int(self.modules.shape[0])

    @property
    def size_px(self) -> int:
        return (self.module_count + 2 * self.margin_modules) * self.module_size_px

    def to_array(self) -> np.ndarray:
        """Render to an (H, W, 3) uint8 RGB array."""
        padded = np.pad(self.modules, self.margin_modules, constant_values=False)
        scaled = np.kron(padded, np.ones((self.module_size_px, self.module_size_px), dtype=bool))
        rgb = np.empty(scaled.shape + (3,), dtype=np.uint8)
        rgb[scaled] = self.dark
        rgb[~scaled] = self.light
        return rgb

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.to_array())

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.to_image().save(buffer, format="PNG")
        return buffer.getvalue()

    def reencode(self, module_size_px: int) -> SymbolBitmap:
        """Same payload and colours at a different module size."""
        return encode(
            self.payload,
            module_size_px=module_size_px,
            margin_modules=self.margin_modules,
            dark_color=self.dark,
            light_color=self.light,
            correction_level=self.correction_level,
        )

    def recolored(self, dark: Color) -> SymbolBitmap:
        """Same modules with a different dark colour."""
        rgb = _to_rgb(dark)
        if rgb == self.dark:
            return self
        return replace(self, dark=rgb)

    def fitted(self, box_px: int) -> SymbolBitmap:
        """
        Re-encode at the largest integer module size that fits `box_px`.

        Symbols are never stretched: scaling a sharp-edged bitmap blurs module
        edges and hurts scan reliability.
        """
        module_size = module_size_for(box_px, self.module_count, self.margin_modules)
        if module_size == self.module_size_px:
            return self
        return self.reencode(module_size)


# =============================================================================
# Encoding
# =============================================================================

def _to_rgb(color: Color) -> tuple[int, int, int]:
    if isinstance(color, tuple):
        return tuple(int(c) for c in color[:3])
    return ImageColor.getrgb(color)[:3]


@lru_cache(maxsize=256)
def _build_matrix(payload: str, correction_level: str) -> tuple[np.ndarray, int]:
    """Build the module matrix for a payload. Cached; the array is read-only."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=CORRECTION_LEVELS[correction_level],
        box_size=1,
        border=0,
    )
    qr.add_data(QRData(payload.encode("utf-8"), mode=MODE_8BIT_BYTE))
    try:
        qr.make(fit=True)
    except DataOverflowError as e:
        raise EncodingError(
            f"Payload exceeds symbol capacity at level {correction_level}",
            details={
                "payload_bytes": len(payload.encode("utf-8")),
                "max_bytes": MAX_PAYLOAD_BYTES[correction_level],
            },
        ) from e

    matrix = np.array(qr.modules, dtype=bool)
    matrix.setflags(write=False)
    return matrix, qr.version


def _validate(payload: str, correction_level: str) -> None:
    if correction_level not in CORRECTION_LEVELS:
        raise EncodingError(
            f"Unknown correction level: {correction_level!r}",
            details={"allowed": sorted(CORRECTION_LEVELS)},
        )
    if not payload:
        raise EncodingError("Cannot encode an empty payload")

    size = len(payload.encode("utf-8"))
    limit = MAX_PAYLOAD_BYTES[correction_level]
    if size > limit:
        raise EncodingError(
            f"Payload is {size} bytes, limit at level {correction_level} is {limit}",
            details={"payload_bytes": size, "max_bytes": limit},
        )


def module_size_for(box_px: int, module_count: int, margin_modules: int) -> int:
    """Largest integer module size whose symbol fits a square box."""
    module_size = int(box_px) // (module_count + 2 * margin_modules)
    if module_size < 1:
        raise EncodingError(
            f"A {box_px}px box is too small for a {module_count}-module symbol",
            details={"box_px": box_px, "module_count": module_count},
        )
    return module_size


def encode(
    payload: str,
    module_size_px: int = 10,
    margin_modules: int = 4,
    dark_color: Color = DEFAULT_DARK,
    light_color: Color = DEFAULT_LIGHT,
    correction_level: str = DEFAULT_CORRECTION_LEVEL,
) -> SymbolBitmap:
    """
    Encode a payload into a SymbolBitmap.

    Args:
        payload: URL (or any text) to encode, written as UTF-8 bytes
        module_size_px: Pixel size of one module
        margin_modules: Quiet zone width in modules
        dark_color: Colour of dark modules (hex string or RGB tuple)
        light_color: Colour of light modules and quiet zone
        correction_level: One of L, M, Q, H

    Returns:
        SymbolBitmap; identical inputs always give identical bitmaps

    Raises:
        EncodingError: Empty payload, payload past capacity, bad parameters
    """
    _validate(payload, correction_level)
    if module_size_px < 1:
        raise EncodingError(
            f"Module size must be at least 1px, got {module_size_px}",
            details={"module_size_px": module_size_px},
        )
    if margin_modules < 0:
        raise EncodingError(
            f"Margin cannot be negative, got {margin_modules}",
            details={"margin_modules": margin_modules},
        )

    matrix, version = _build_matrix(payload, correction_level)
    symbol = SymbolBitmap(
        payload=payload,
        modules=matrix,
        module_size_px=int(module_size_px),
        margin_modules=int(margin_modules),
        dark=_to_rgb(dark_color),
        light=_to_rgb(light_color),
        correction_level=correction_level,
        version=version,
    )
    logger.debug(
        f"Encoded {len(payload)} chars as version {version}-{correction_level}, "
        f"{symbol.size_px}px"
    )
    return symbol


def encode_to_width(
    payload: str,
    width_px: int,
    margin_modules: int = 1,
    dark_color: Color = DEFAULT_DARK,
    light_color: Color = DEFAULT_LIGHT,
    correction_level: str = DEFAULT_CORRECTION_LEVEL,
) -> SymbolBitmap:
    """Encode with the largest module size that keeps the symbol within `width_px`."""
    _validate(payload, correction_level)
    matrix, _ = _build_matrix(payload, correction_level)
    module_size = module_size_for(width_px, matrix.shape[0], margin_modules)
    return encode(payload, module_size, margin_modules, dark_color, light_color, correction_level)


def encode_preset(payload: str, preset: SymbolPreset) -> SymbolBitmap:
    """Encode using one of the named presets."""
    return encode_to_width(
        payload,
        width_px=preset.width_px,
        margin_modules=preset.margin_modules,
        dark_color=preset.dark,
        light_color=preset.light,
    )
