# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sellers, listings and symbols shared by the test modules
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("PUBLIC_ORIGIN", "https://sellcard.app")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest

from core.models.seller import ListingSummary, SellerIdentity
from lib.symbol_encoder import CARD_EDITOR_PRESET, encode_preset


SELLER_ID = "7d0c3c1e-5b7a-4c1e-9a43-2f1d8f0b6a11"
PRODUCT_ID = "0b7e4f2a-1c3d-4e5f-8a9b-0c1d2e3f4a5b"
SERVICE_ID = "9f8e7d6c-5b4a-4938-8271-6a5b4c3d2e1f"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def seller_row():
    """A `sellers` row as Supabase returns it."""
    return {
        "id": SELLER_ID,
        "business_name": "Acme Bakery",
        "description": "Fresh sourdough, pastries and celebration cakes baked every morning.",
        "whatsapp_number": "+1 (555) 000-1111",
        "phone_number": "+15550002222",
        "email": "hello@acmebakery.com",
        "website": "acmebakery.com",
        "location": "12 Market Street, Lagos",
        "instagram": "acmebakery",
        "tiktok": "",
        "is_active": True,
        "view_count": 42,
        "created_at": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def seller(seller_row):
    """Acme Bakery with every optional contact filled in except TikTok."""
    return SellerIdentity.from_db_row(seller_row)


@pytest.fixture
def minimal_seller():
    """A seller with only the required fields."""
    return SellerIdentity(
        id=SELLER_ID,
        business_name="Acme Bakery",
        whatsapp_number="+15550001111",
    )


@pytest.fixture
def product_rows():
    return [
        {
            "id": PRODUCT_ID,
            "seller_id": SELLER_ID,
            "name": "Sourdough Loaf",
            "description": "Naturally leavened bread with a crisp crust and open crumb, 800g.",
            "view_count": 7,
        },
    ]


@pytest.fixture
def service_rows():
    return [
        {
            "id": SERVICE_ID,
            "seller_id": SELLER_ID,
            "name": "Wedding Cakes",
            "description": "Custom tiered cakes",
            "view_count": 3,
        },
    ]


@pytest.fixture
def products(product_rows):
    return [ListingSummary.from_db_row(row) for row in product_rows]


@pytest.fixture
def services(service_rows):
    return [ListingSummary.from_db_row(row) for row in service_rows]


@pytest.fixture
def shop_url():
    return f"https://sellcard.app/shop/{SELLER_ID}"


@pytest.fixture
def symbol(shop_url):
    """Shop symbol at the card editor preset."""
    return encode_preset(shop_url, CARD_EDITOR_PRESET)


@pytest.fixture
def bakery_row():
    """The smallest Acme Bakery record: name, description, WhatsApp, location."""
    return {
        "id": SELLER_ID,
        "business_name": "Acme Bakery",
        "description": "Fresh bread daily",
        "whatsapp_number": "+15550001111",
        "location": "Lagos",
        "is_active": True,
    }


@pytest.fixture
def bakery_seller(bakery_row):
    return SellerIdentity.from_db_row(bakery_row)
