# =============================================================================
# lib/compositor/registry.py - Card Variant Registry
# =============================================================================
# Maps CardVariant values to layout functions.
#
# Each layout function has the same signature and is pure:
#   (identity, palette, symbol_dark, width, height) -> list[Element]
# Functions are registered using the @register_variant decorator.
#
# Example:
#   @register_variant(CardVariant.HEADER_STRIP)
#   def header_strip(ctx: LayoutContext) -> list[Element]:
#       ...
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.models.card import CardVariant, ThemePalette
from core.models.seller import SellerIdentity
from lib.compositor.layout import Element
from lib.utils import ApplicationError


@dataclass(frozen=True)
class LayoutContext:
    """Inputs of one layout call."""
    identity: SellerIdentity
    palette: ThemePalette
    width: float
    height: float
    brand_name: str = "SellCard"

    @property
    def unit(self) -> float:
        """Layout unit: 1/200 of the card height."""
        return self.height / 200.0


LayoutFunc = Callable[[LayoutContext], list[Element]]

# Global registry mapping CardVariant -> layout function
VARIANT_REGISTRY: dict[CardVariant, LayoutFunc] = {}


class UnknownVariantError(ApplicationError):
    """Raised when no layout is registered for a variant."""

    def __init__(self, variant: str):
        super().__init__(
            f"Unknown card variant: {variant}",
            code="UNKNOWN_VARIANT",
            suggestion=f"Use one of: {', '.join(v.value for v in CardVariant)}",
            details={"variant": str(variant)},
        )


def register_variant(variant: CardVariant):
    """
    Decorator to register a layout function for a variant.

    Usage:
        @register_variant(CardVariant.PRIMARY_BANDED)
        def primary_banded(ctx):
            ...
            return elements
    """
    def decorator(func: LayoutFunc) -> LayoutFunc:
        if variant in VARIANT_REGISTRY:
            raise ValueError(f"Variant '{variant.value}' is already registered")
        VARIANT_REGISTRY[variant] = func
        return func
    return decorator


def get_variant_layout(variant: CardVariant | str) -> LayoutFunc:
    """
    Get the layout function for a variant.

    Raises:
        UnknownVariantError: If the variant has no registered layout
    """
    try:
        key = CardVariant(variant)
    except ValueError:
        raise UnknownVariantError(str(variant))
    func = VARIANT_REGISTRY.get(key)
    if func is None:
        raise UnknownVariantError(key.value)
    return func


def list_variants() -> list[CardVariant]:
    """All variants with a registered layout."""
    return list(VARIANT_REGISTRY.keys())
