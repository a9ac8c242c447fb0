# =============================================================================
# core/models/seller.py - Seller Identity Schemas
# =============================================================================
# Read-only views of marketplace records used by the card pipeline:
# - SellerIdentity: the fields printed on a card or encoded in a vCard
# - ListingSummary: a product or service shown in QR lists and profile sheets
#
# The records live in Supabase (`sellers`, `products`, `services`); these
# models only read them.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SellerIdentity(BaseModel):
    """
    Identity fields of one seller.

    Optional fields that are empty strings in the database are normalized to
    None so every layout can treat "missing" the same way.

    Example:
        {
            "id": "7d0c3c1e-...",
            "business_name": "Acme Bakery",
            "description": "Fresh bread daily",
            "whatsapp_number": "+15550001111",
            "location": "Lagos"
        }
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str = Field(..., min_length=1, description="Seller UUID")

    business_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name printed on cards"
    )

    description: str = Field(default="", description="Short shop description")

    # WhatsApp is the one contact every seller has
    whatsapp_number: str = Field(..., min_length=1, description="WhatsApp number")

    phone_number: str | None = None
    email: str | None = None
    website: str | None = None
    location: str | None = None
    instagram: str | None = None
    tiktok: str | None = None

    view_count: int = Field(default=0, ge=0)

    @field_validator(
        "phone_number", "email", "website", "location", "instagram", "tiktok",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "SellerIdentity":
        """Build from a `sellers` row, ignoring columns the pipeline doesn't use."""
        fields = {name: row.get(name) for name in cls.model_fields if name in row}
        fields["id"] = str(row["id"])
        if fields.get("view_count") is None:
            fields.pop("view_count", None)
        return cls(**fields)

    def contact_lines(self) -> list[tuple[str, str]]:
        """
        Contact lines in print priority order, absent fields skipped.

        Returns:
            List of (field_name, display_text)
        """
        candidates = [
            ("whatsapp_number", self.whatsapp_number),
            ("phone_number", self.phone_number),
            ("email", self.email),
            ("location", self.location),
            ("website", self.website),
            ("instagram", _handle("Instagram", self.instagram)),
            ("tiktok", _handle("TikTok", self.tiktok)),
        ]
        return [(name, text) for name, text in candidates if text]


def _handle(network: str, value: str | None) -> str | None:
    if not value:
        return None
    handle = value if value.startswith("@") else f"@{value}"
    return f"{network} {handle}"


class ListingSummary(BaseModel):
    """A product or service as shown next to its QR code."""

    model_config = ConfigDict(frozen=True)

    id: str
    seller_id: str
    name: str
    description: str = ""
    view_count: int = 0

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "ListingSummary":
        return cls(
            id=str(row["id"]),
            seller_id=str(row.get("seller_id", "")),
            name=row.get("name") or "",
            description=row.get("description") or "",
            view_count=row.get("view_count") or 0,
        )
