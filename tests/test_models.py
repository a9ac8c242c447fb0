# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the card, seller and asset models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Closed option sets have the expected members
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    AssetKind,
    CardConfig,
    CardOptions,
    CardVariant,
    ColorTheme,
    ListingSummary,
    PreviewSize,
    SellerIdentity,
)

from tests.conftest import SELLER_ID


# =============================================================================
# Card Models
# =============================================================================

class TestCardConfig:
    """Tests for CardConfig model."""

    def test_defaults(self):
        config = CardConfig()

        assert config.variant == CardVariant.PRIMARY_BANDED
        assert config.theme == ColorTheme.BLUE
        assert config.preview_size == PreviewSize.SMALL

    def test_parse_values(self):
        config = CardConfig(variant="header-strip", theme="gold", preview_size="large")

        assert config.variant == CardVariant.HEADER_STRIP
        assert config.preview_dimensions == (672, 384)

    def test_is_immutable(self):
        config = CardConfig()

        with pytest.raises(ValidationError):
            config.theme = ColorTheme.GREEN

    def test_unknown_variant_rejected(self):
        with pytest.raises(ValidationError):
            CardConfig(variant="holographic")


class TestThemes:
    """Tests for the colour theme table."""

    def test_palettes(self):
        assert ColorTheme.BLUE.palette == ("#1e40af", "#3b82f6", "#dbeafe", "#1e40af")
        assert ColorTheme.BLACK.palette.primary == "#000000"
        assert ColorTheme.GOLD.palette.accent == "#fef3c7"

    def test_every_theme_has_a_palette(self):
        for theme in ColorTheme:
            assert len(theme.palette) == 4

    def test_variant_labels(self):
        assert [v.label for v in CardVariant] == ["Executive", "Modern", "Minimal", "Elegant"]

    def test_card_options(self):
        options = CardOptions.all()

        assert [v["id"] for v in options.variants] == [v.value for v in CardVariant]
        assert options.themes[0] == {
            "id": "blue",
            "primary": "#1e40af",
            "secondary": "#3b82f6",
            "accent": "#dbeafe",
            "text": "#1e40af",
        }
        assert [s["width_px"] for s in options.preview_sizes] == [384, 512, 672]


# =============================================================================
# Seller Models
# =============================================================================

class TestSellerIdentity:
    """Tests for SellerIdentity model."""

    def test_from_db_row(self, seller_row):
        seller = SellerIdentity.from_db_row(seller_row)

        assert seller.id == SELLER_ID
        assert seller.business_name == "Acme Bakery"
        assert seller.view_count == 42
        # Empty strings become None
        assert seller.tiktok is None

    def test_from_db_row_null_description_and_views(self, seller_row):
        seller_row.update({"description": None, "view_count": None})

        seller = SellerIdentity.from_db_row(seller_row)

        assert seller.description == ""
        assert seller.view_count == 0

    def test_business_name_required(self):
        with pytest.raises(ValidationError):
            SellerIdentity(id=SELLER_ID, business_name="", whatsapp_number="+1555")

    def test_whatsapp_required(self):
        with pytest.raises(ValidationError):
            SellerIdentity(id=SELLER_ID, business_name="Acme Bakery")

    def test_contact_lines_order(self, seller):
        assert seller.contact_lines() == [
            ("whatsapp_number", "+1 (555) 000-1111"),
            ("phone_number", "+15550002222"),
            ("email", "hello@acmebakery.com"),
            ("location", "12 Market Street, Lagos"),
            ("website", "acmebakery.com"),
            ("instagram", "Instagram @acmebakery"),
        ]

    def test_contact_lines_minimal(self, minimal_seller):
        assert minimal_seller.contact_lines() == [("whatsapp_number", "+15550001111")]


class TestListingSummary:
    """Tests for ListingSummary model."""

    def test_from_db_row(self, product_rows):
        listing = ListingSummary.from_db_row(product_rows[0])

        assert listing.name == "Sourdough Loaf"
        assert listing.view_count == 7

    def test_from_db_row_missing_fields(self):
        listing = ListingSummary.from_db_row({"id": "abc", "name": None})

        assert listing.name == ""
        assert listing.description == ""
        assert listing.view_count == 0


class TestAssetKind:
    def test_values(self):
        assert [k.value for k in AssetKind] == ["shop", "card", "product", "service"]
