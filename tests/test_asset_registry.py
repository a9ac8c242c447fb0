# =============================================================================
# tests/test_asset_registry.py - Shareable Asset Registry Tests
# =============================================================================
# Tests for lib/asset_registry.py:
# - Canonical paths and URLs per kind
# - View counter RPCs (failures never propagate)
# - QR landing resolution
# - Asset listing order and descriptions
#
# Run with: pytest tests/test_asset_registry.py -v
# =============================================================================

from unittest.mock import MagicMock
from uuid import UUID

import pytest

from core.models.asset import AssetKind
from lib.asset_registry import ShareableAssetRegistry, description_snippet

from tests.conftest import PRODUCT_ID, SELLER_ID, SERVICE_ID


@pytest.fixture
def rpc():
    return MagicMock()


@pytest.fixture
def registry(rpc):
    return ShareableAssetRegistry("https://sellcard.app/", rpc)


# =============================================================================
# URLs
# =============================================================================

class TestCanonicalUrls:
    """Tests for canonical_path() and canonical_url()."""

    @pytest.mark.parametrize("kind,path", [
        (AssetKind.SHOP, f"/shop/{SELLER_ID}"),
        (AssetKind.CARD, f"/card/{SELLER_ID}"),
        (AssetKind.PRODUCT, f"/product/{SELLER_ID}"),
        (AssetKind.SERVICE, f"/service/{SELLER_ID}"),
    ])
    def test_paths(self, registry, kind, path):
        assert registry.canonical_path(kind, SELLER_ID) == path

    def test_url_joins_origin_without_double_slash(self, registry):
        assert registry.canonical_url(AssetKind.SHOP, SELLER_ID) == (
            f"https://sellcard.app/shop/{SELLER_ID}"
        )

    def test_uuid_objects_are_normalized(self, registry):
        assert registry.canonical_url("card", UUID(SELLER_ID)) == (
            f"https://sellcard.app/card/{SELLER_ID}"
        )

    def test_parse_kind(self):
        assert ShareableAssetRegistry.parse_kind("product") == AssetKind.PRODUCT
        assert ShareableAssetRegistry.parse_kind("coupon") is None

    def test_describe(self, registry):
        asset = registry.describe(AssetKind.PRODUCT, PRODUCT_ID, name="Sourdough Loaf", view_count=7)

        assert asset.url == f"https://sellcard.app/product/{PRODUCT_ID}"
        assert asset.view_counter.function == "increment_product_views"
        assert asset.view_counter.id_param == "product_uuid"
        assert asset.view_count == 7


# =============================================================================
# View Recording
# =============================================================================

class TestRecordView:
    """Tests for record_view()."""

    @pytest.mark.parametrize("kind,function,param", [
        (AssetKind.SHOP, "increment_seller_views", "seller_uuid"),
        (AssetKind.CARD, "increment_seller_views", "seller_uuid"),
        (AssetKind.PRODUCT, "increment_product_views", "product_uuid"),
        (AssetKind.SERVICE, "increment_service_views", "service_uuid"),
    ])
    def test_calls_counter_rpc(self, registry, rpc, kind, function, param):
        registry.record_view(kind, SELLER_ID)

        rpc.assert_called_once_with(function, {param: SELLER_ID})

    def test_each_call_records_once(self, registry, rpc):
        registry.record_view(AssetKind.SHOP, SELLER_ID)
        registry.record_view(AssetKind.SHOP, SELLER_ID)

        assert rpc.call_count == 2

    def test_rpc_failure_is_swallowed(self, registry, rpc, caplog):
        rpc.side_effect = ConnectionError("supabase unreachable")

        registry.record_view(AssetKind.SERVICE, SERVICE_ID)

        assert "Failed to record view" in caplog.text


# =============================================================================
# QR Landing
# =============================================================================

class TestResolveQrLanding:
    """Tests for resolve_qr_landing()."""

    def test_known_kind(self, registry):
        path, kind = registry.resolve_qr_landing("service", SERVICE_ID)

        assert path == f"/service/{SERVICE_ID}"
        assert kind == AssetKind.SERVICE

    def test_unknown_kind_goes_to_marketplace(self, registry):
        path, kind = registry.resolve_qr_landing("coupon", SERVICE_ID)

        assert path == "/marketplace"
        assert kind is None


# =============================================================================
# Asset Listing
# =============================================================================

class TestListAssets:
    """Tests for list_assets()."""

    def test_order_and_fields(self, registry, seller, products, services):
        assets = registry.list_assets(seller, products, services)

        assert [a.kind for a in assets] == [
            AssetKind.SHOP, AssetKind.CARD, AssetKind.PRODUCT, AssetKind.SERVICE,
        ]
        shop, card, product, service = assets
        assert shop.description == "Main shop page with all products and services"
        assert card.description == "Mobile-optimized digital business card"
        assert shop.view_count == card.view_count == 42
        assert product.id == PRODUCT_ID
        assert product.view_count == 7
        assert product.description == (
            "Product: Naturally leavened bread with a crisp crust and op..."
        )
        assert service.description == "Service: Custom tiered cakes..."

    def test_seller_without_listings(self, registry, minimal_seller):
        assets = registry.list_assets(minimal_seller, [], [])

        assert [a.kind for a in assets] == [AssetKind.SHOP, AssetKind.CARD]

    def test_every_url_is_canonical(self, registry, seller, products, services):
        for asset in registry.list_assets(seller, products, services):
            assert asset.url == registry.canonical_url(asset.kind, asset.id)


class TestDescriptionSnippet:
    def test_cuts_at_fifty_characters(self):
        assert description_snippet("x" * 80) == "x" * 50 + "..."

    def test_short_and_empty(self):
        assert description_snippet("Custom") == "Custom..."
        assert description_snippet("") == "..."
