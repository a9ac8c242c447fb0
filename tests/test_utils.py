# =============================================================================
# tests/test_utils.py - Shared Utility Tests
# =============================================================================
# Tests for lib/utils.py (ids, filenames, ApplicationError).
#
# Run with: pytest tests/test_utils.py -v
# =============================================================================

from uuid import UUID

import pytest

from lib.utils import ApplicationError, export_filename, normalize_uuid, safe_filename_stem

from tests.conftest import SELLER_ID


class TestNormalizeUuid:

    def test_uuid_object(self):
        assert normalize_uuid(UUID(SELLER_ID)) == SELLER_ID

    def test_string_passes_through(self):
        assert normalize_uuid(SELLER_ID) == SELLER_ID


class TestFilenames:

    @pytest.mark.parametrize("name, stem", [
        ("Acme Bakery", "Acme-Bakery"),
        ("Mama's Kitchen!", "Mama-s-Kitchen-"),
        ("Café 24", "Caf--24"),
        ("", ""),
    ])
    def test_stem_replaces_each_unsafe_character(self, name, stem):
        assert safe_filename_stem(name) == stem

    def test_export_filename(self):
        assert export_filename("Acme Bakery", "business-card", "png") == "Acme-Bakery-business-card.png"

    def test_export_filename_without_suffix(self):
        assert export_filename("Acme Bakery", "", ".vcf") == "Acme-Bakery.vcf"


class TestApplicationError:

    def test_to_dict_minimal(self):
        error = ApplicationError("boom", code="EXPORT_IO_ERROR")

        assert error.to_dict() == {"detail": "boom", "code": "EXPORT_IO_ERROR"}

    def test_to_dict_with_suggestion_and_details(self):
        error = ApplicationError(
            "Payload too long",
            code="ENCODING_ERROR",
            suggestion="Shorten the URL",
            details={"payload_bytes": 1274},
        )

        assert error.to_dict() == {
            "detail": "Payload too long",
            "code": "ENCODING_ERROR",
            "suggestion": "Shorten the URL",
            "details": {"payload_bytes": 1274},
        }
        assert str(error) == "[ENCODING_ERROR] Payload too long (Shorten the URL)"
