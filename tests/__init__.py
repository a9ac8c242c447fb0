# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the SellCard print API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_symbol_encoder.py, test_compositor.py, test_rasterizer.py,
#   test_exporter.py: the export pipeline, leaf to root
# - test_asset_registry.py, test_contact.py: URLs, view counters, vCards
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: pytest
# =============================================================================
