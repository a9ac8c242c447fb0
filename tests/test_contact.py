# =============================================================================
# tests/test_contact.py - Contact Export Tests
# =============================================================================
# Tests for lib/contact.py (vCard and WhatsApp links).
#
# Run with: pytest tests/test_contact.py -v
# =============================================================================

import pytest

from lib.contact import build_vcard, vcard_filename, whatsapp_link


class TestBuildVcard:
    """Tests for build_vcard()."""

    def test_full_seller(self, seller):
        vcard = build_vcard(seller)

        assert vcard.split("\r\n") == [
            "BEGIN:VCARD",
            "VERSION:3.0",
            "FN:Acme Bakery",
            "ORG:Acme Bakery",
            "TEL:+1 (555) 000-1111",
            "TEL;TYPE=WORK:+15550002222",
            "EMAIL:hello@acmebakery.com",
            "URL:acmebakery.com",
            "ADR:;;12 Market Street\\, Lagos;;;",
            "NOTE:Fresh sourdough\\, pastries and celebration cakes baked every morning.",
            "END:VCARD",
            "",
        ]

    def test_optional_fields_are_omitted(self, minimal_seller):
        lines = build_vcard(minimal_seller).split("\r\n")

        assert "TEL:+15550001111" in lines
        assert not any(line.startswith(("EMAIL", "URL", "ADR", "TEL;TYPE=WORK")) for line in lines)
        assert "NOTE:" in lines

    def test_filename(self, seller):
        assert vcard_filename(seller) == "Acme-Bakery.vcf"


class TestWhatsappLink:
    """Tests for whatsapp_link()."""

    def test_strips_formatting_from_number(self):
        link = whatsapp_link("+1 (555) 000-1111", "Hi")

        assert link == "https://wa.me/15550001111?text=Hi"

    def test_default_message_is_uri_encoded(self):
        link = whatsapp_link("+15550001111")

        assert link == (
            "https://wa.me/15550001111?text=Hi!%20I%20found%20your%20business%20card"
            "%20and%20I'm%20interested%20in%20your%20products%2Fservices."
        )

    def test_number_without_digits_raises(self):
        with pytest.raises(ValueError):
            whatsapp_link("call me")
