# =============================================================================
# lib/contact.py - Contact Export Helpers
# =============================================================================
# - build_vcard: vCard 3.0 for "save contact" from a business card
# - whatsapp_link: wa.me deep link with a prefilled enquiry message
# =============================================================================

import re
from urllib.parse import quote

from core.models.seller import SellerIdentity
from lib.utils import safe_filename_stem

VCARD_MEDIA_TYPE = "text/vcard"

_NON_DIGITS = re.compile(r"[^0-9]")

# Characters encodeURIComponent leaves as-is besides letters, digits and -._~
_URI_COMPONENT_SAFE = "!'()*"

DEFAULT_ENQUIRY_MESSAGE = (
    "Hi! I found your business card and I'm interested in your products/services."
)


def _escape(value: str) -> str:
    """Escape vCard text values (RFC 2426 section 4)."""
    return (
        value.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace(",", "\\,")
        .replace(";", "\\;")
    )


def build_vcard(seller: SellerIdentity) -> str:
    """
    vCard 3.0 text for a seller. Optional properties are omitted when the
    field is empty; lines end with CRLF.
    """
    name = _escape(seller.business_name)
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"FN:{name}",
        f"ORG:{name}",
        f"TEL:{seller.whatsapp_number}",
    ]
    if seller.phone_number:
        lines.append(f"TEL;TYPE=WORK:{seller.phone_number}")
    if seller.email:
        lines.append(f"EMAIL:{seller.email}")
    if seller.website:
        lines.append(f"URL:{seller.website}")
    if seller.location:
        lines.append(f"ADR:;;{_escape(seller.location)};;;")
    lines.append(f"NOTE:{_escape(seller.description)}")
    lines.append("END:VCARD")
    return "\r\n".join(lines) + "\r\n"


def vcard_filename(seller: SellerIdentity) -> str:
    return f"{safe_filename_stem(seller.business_name)}.vcf"


def whatsapp_link(number: str, message: str = DEFAULT_ENQUIRY_MESSAGE) -> str:
    """
    wa.me link for a number in any notation ("+1 (555) 000-1111" works).

    Raises:
        ValueError: If the number has no digits
    """
    digits = _NON_DIGITS.sub("", number)
    if not digits:
        raise ValueError(f"WhatsApp number has no digits: {number!r}")
    return f"https://wa.me/{digits}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
