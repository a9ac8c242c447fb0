# =============================================================================
# tests/test_api.py - API Endpoint Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient. Supabase is replaced by
# patching SupabaseClient, so the full pipeline (encode, compose, rasterize,
# export) runs for real against fixture rows.
#
# Run with: pytest tests/test_api.py -v
# =============================================================================

import io
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from pypdf import PdfReader

from app.dependencies import get_registry
from app.main import app
from core.services.export_service import ExportService
from core.services.qr_service import get_asset_registry
from lib.asset_registry import ShareableAssetRegistry
from lib.supabase_client import SupabaseClient, SupabaseClientError

from tests.conftest import PRODUCT_ID, SELLER_ID, SERVICE_ID

MISSING_ID = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
def supabase(seller_row, product_rows, service_rows):
    """Patch every SupabaseClient read with fixture rows."""
    listings = {"products": product_rows, "services": service_rows}
    rows_by_id = {row["id"]: row for row in product_rows + service_rows}

    def fetch_seller(seller_id, active_only=True):
        return seller_row if str(seller_id) == SELLER_ID else None

    def fetch_listings(table, seller_id):
        return listings[table] if str(seller_id) == SELLER_ID else []

    def fetch_listing(table, listing_id):
        row = rows_by_id.get(str(listing_id))
        return row if row in listings[table] else None

    with patch.object(SupabaseClient, "fetch_seller", side_effect=fetch_seller) as seller_mock, \
         patch.object(SupabaseClient, "fetch_listings", side_effect=fetch_listings), \
         patch.object(SupabaseClient, "fetch_listing", side_effect=fetch_listing):
        yield seller_mock


@pytest.fixture
def rpc():
    """View counter RPC used by the public endpoints."""
    rpc = MagicMock()
    registry = ShareableAssetRegistry(get_asset_registry().public_origin, rpc)
    app.dependency_overrides[get_registry] = lambda: registry
    yield rpc
    app.dependency_overrides.pop(get_registry, None)


@pytest.fixture
def client(supabase):
    return TestClient(app)


def _image(response) -> Image.Image:
    return Image.open(io.BytesIO(response.content))


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Tests for health endpoints."""

    def test_health(self):
        response = TestClient(app).get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness(self):
        with patch.object(SupabaseClient, "get_client", return_value=MagicMock()):
            response = TestClient(app).get("/api/v1/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"] == {"database": "healthy", "renderer": "healthy"}

    def test_readiness_degraded(self):
        with patch.object(SupabaseClient, "get_client", side_effect=RuntimeError("down")):
            response = TestClient(app).get("/api/v1/health/ready")

        assert response.json()["status"] == "degraded"


# =============================================================================
# Cards
# =============================================================================

class TestCardEndpoints:
    """Tests for /api/v1/sellers/{id}/card/*."""

    def test_options(self, client):
        response = client.get(f"/api/v1/sellers/{SELLER_ID}/card/options")

        assert response.status_code == 200
        body = response.json()
        assert len(body["variants"]) == 4
        assert len(body["themes"]) == 5

    def test_preview(self, client):
        response = client.get(
            f"/api/v1/sellers/{SELLER_ID}/card/preview",
            params={"variant": "bordered-ornamental", "theme": "gold", "size": "medium"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["content-disposition"] == (
            'inline; filename="Acme-Bakery-business-card-preview.png"'
        )
        assert _image(response).size == (512, 293)

    def test_export_png(self, client):
        response = client.get(f"/api/v1/sellers/{SELLER_ID}/card/export")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="Acme-Bakery-business-card.png"'
        )
        assert _image(response).size == (3150, 1800)

    def test_export_pdf(self, client):
        response = client.get(
            f"/api/v1/sellers/{SELLER_ID}/card/export",
            params={"format": "pdf", "variant": "header-strip", "theme": "black"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["x-page-count"] == "1"
        assert len(PdfReader(io.BytesIO(response.content)).pages) == 1

    def test_export_releases_seller_slot(self, client):
        client.get(f"/api/v1/sellers/{SELLER_ID}/card/export")

        assert SELLER_ID not in ExportService._in_flight

    def test_concurrent_export_is_rejected(self, client):
        with patch.object(ExportService, "_in_flight", {SELLER_ID}):
            response = client.get(f"/api/v1/sellers/{SELLER_ID}/card/export")

        assert response.status_code == 409
        assert response.json()["code"] == "EXPORT_IN_PROGRESS"

    @pytest.mark.parametrize("params", [
        {"density": "2"},
        {"variant": "holographic"},
        {"theme": "rainbow"},
        {"format": "jpg"},
    ])
    def test_invalid_parameters(self, client, params):
        response = client.get(f"/api/v1/sellers/{SELLER_ID}/card/export", params=params)

        assert response.status_code == 422

    def test_unknown_seller(self, client):
        response = client.get(f"/api/v1/sellers/{MISSING_ID}/card/export")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "SELLER_NOT_FOUND"
        assert "suggestion" in body

    def test_malformed_seller_id(self, client):
        response = client.get("/api/v1/sellers/not-a-uuid/card/export")

        assert response.status_code == 422

    def test_supabase_failure_is_bad_gateway(self, client, supabase):
        supabase.side_effect = SupabaseClientError("timeout", code="FETCH_SELLER_FAILED")

        response = client.get(f"/api/v1/sellers/{SELLER_ID}/card/export")

        assert response.status_code == 502
        assert response.json()["code"] == "FETCH_SELLER_FAILED"


class TestBakeryCardExport:
    """The card export for a seller with only name, description, WhatsApp and location."""

    @pytest.fixture
    def bakery_client(self, bakery_row):
        def fetch_seller(seller_id, active_only=True):
            return bakery_row if str(seller_id) == SELLER_ID else None

        with patch.object(SupabaseClient, "fetch_seller", side_effect=fetch_seller), \
             patch.object(SupabaseClient, "fetch_listings", return_value=[]):
            yield TestClient(app)

    def test_png(self, bakery_client):
        response = bakery_client.get(
            f"/api/v1/sellers/{SELLER_ID}/card/export",
            params={"format": "png", "variant": "primary-banded", "theme": "blue", "density": "3"},
        )

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="Acme-Bakery-business-card.png"'
        )
        assert _image(response).size == (3150, 1800)

    def test_pdf(self, bakery_client):
        response = bakery_client.get(
            f"/api/v1/sellers/{SELLER_ID}/card/export",
            params={"format": "pdf", "variant": "primary-banded", "theme": "blue"},
        )

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="Acme-Bakery-business-card.pdf"'
        )
        reader = PdfReader(io.BytesIO(response.content))
        assert len(reader.pages) == 1
        box = reader.pages[0].mediabox
        assert float(box.width) == pytest.approx(88.9 * 72 / 25.4, abs=0.01)
        assert float(box.height) == pytest.approx(50.8 * 72 / 25.4, abs=0.01)


# =============================================================================
# Profile, vCard, Assets
# =============================================================================

class TestSellerDownloads:
    """Tests for profile sheets, vCards and asset lists."""

    def test_profile_pdf(self, client):
        response = client.get(f"/api/v1/sellers/{SELLER_ID}/profile/export")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="Acme-Bakery-profile.pdf"'
        )
        reader = PdfReader(io.BytesIO(response.content))
        assert len(reader.pages) == int(response.headers["x-page-count"])
        assert float(reader.pages[0].mediabox.width) == pytest.approx(210 * 72 / 25.4, abs=0.01)

    def test_profile_png(self, client):
        response = client.get(f"/api/v1/sellers/{SELLER_ID}/profile/export", params={"format": "png"})

        assert response.status_code == 200
        assert _image(response).width == 448 * 3

    def test_vcard(self, client):
        response = client.get(f"/api/v1/sellers/{SELLER_ID}/vcard")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/vcard")
        assert 'filename="Acme-Bakery.vcf"' in response.headers["content-disposition"]
        assert response.text.startswith("BEGIN:VCARD\r\nVERSION:3.0\r\n")

    def test_assets(self, client):
        response = client.get(f"/api/v1/sellers/{SELLER_ID}/assets")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 4
        assert [a["kind"] for a in body["assets"]] == ["shop", "card", "product", "service"]
        assert body["assets"][0]["url"] == f"https://sellcard.app/shop/{SELLER_ID}"


# =============================================================================
# QR Codes
# =============================================================================

class TestQrEndpoints:
    """Tests for /api/v1/qr."""

    def test_product_qr(self, client):
        response = client.get(f"/api/v1/qr/product/{PRODUCT_ID}", params={"size": 300})

        assert response.status_code == 200
        assert 'filename="Sourdough-Loaf-qr-code.png"' in response.headers["content-disposition"]
        image = _image(response)
        assert image.width == image.height <= 300

    def test_shop_qr_uses_business_name(self, client):
        response = client.get(f"/api/v1/qr/shop/{SELLER_ID}")

        assert 'filename="Acme-Bakery-qr-code.png"' in response.headers["content-disposition"]
        assert _image(response).width <= 200

    def test_poster(self, client):
        response = client.get(f"/api/v1/qr/service/{SERVICE_ID}/poster")

        assert response.status_code == 200
        assert 'filename="Acme-Bakery-Wedding-Cakes-QR.png"' in response.headers["content-disposition"]
        assert _image(response).size == (400, 500)

    def test_unknown_kind(self, client):
        response = client.get(f"/api/v1/qr/coupon/{PRODUCT_ID}")

        assert response.status_code == 400
        assert response.json()["code"] == "UNKNOWN_ASSET_KIND"

    def test_missing_product(self, client):
        response = client.get(f"/api/v1/qr/product/{MISSING_ID}")

        assert response.status_code == 404
        assert response.json()["code"] == "ASSET_NOT_FOUND"

    def test_service_id_is_not_a_product(self, client):
        response = client.get(f"/api/v1/qr/product/{SERVICE_ID}")

        assert response.status_code == 404


# =============================================================================
# Public Surfaces
# =============================================================================

class TestPublicEndpoints:
    """Tests for /api/v1/public."""

    def test_qr_landing_redirects_and_records(self, client, rpc):
        response = client.get(f"/api/v1/public/qr/product/{PRODUCT_ID}", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == f"https://sellcard.app/product/{PRODUCT_ID}"
        rpc.assert_called_once_with("increment_product_views", {"product_uuid": PRODUCT_ID})

    def test_qr_landing_unknown_kind(self, client, rpc):
        response = client.get(f"/api/v1/public/qr/coupon/{PRODUCT_ID}", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "https://sellcard.app/marketplace"
        rpc.assert_not_called()

    def test_card_surface(self, client, rpc):
        response = client.get(f"/api/v1/public/card/{SELLER_ID}")

        assert response.status_code == 200
        body = response.json()
        assert body["seller"]["business_name"] == "Acme Bakery"
        assert body["asset"]["url"] == f"https://sellcard.app/card/{SELLER_ID}"
        assert body["whatsapp_url"].startswith("https://wa.me/15550001111?text=")
        rpc.assert_called_once_with("increment_seller_views", {"seller_uuid": SELLER_ID})

    def test_counter_failure_does_not_break_page(self, client, rpc):
        rpc.side_effect = RuntimeError("rpc down")

        response = client.get(f"/api/v1/public/shop/{SELLER_ID}")

        assert response.status_code == 200

    def test_missing_seller(self, client, rpc):
        response = client.get(f"/api/v1/public/shop/{MISSING_ID}")

        assert response.status_code == 404
        rpc.assert_not_called()
