# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID normalization for Supabase queries
# - Filename stems for downloadable artifacts
# - ApplicationError, the base class for pipeline errors
# =============================================================================

import re
from typing import Any
from uuid import UUID


# Anything outside ASCII letters and digits becomes a dash, one for one,
# so "Acme Bakery" -> "Acme-Bakery" and exports stay recognizable per seller.
_FILENAME_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


# =============================================================================
# IDs
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Seller, product and service ids as plain strings.

    Path parameters arrive as UUID objects, database rows carry strings;
    URLs, queries and lock keys must all use the same form.
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Filename Utilities
# =============================================================================

def safe_filename_stem(name: str) -> str:
    """
    Derive a filename stem from a display name.

    Every character that is not an ASCII letter or digit is replaced by "-".
    The mapping is deterministic, so repeated exports for the same seller
    get the same name.

    Example:
        safe_filename_stem("Acme Bakery")  # "Acme-Bakery"
        safe_filename_stem("Mama's Kitchen!")  # "Mama-s-Kitchen-"
    """
    return _FILENAME_UNSAFE.sub("-", name or "")


def export_filename(name: str, suffix: str, extension: str) -> str:
    """
    Build a download filename like "Acme-Bakery-business-card.png".

    Args:
        name: Display name the stem is derived from
        suffix: Artifact kind, e.g. "business-card" or "qr-code"
        extension: File extension without the dot
    """
    stem = safe_filename_stem(name)
    if suffix:
        stem = f"{stem}-{suffix}"
    return f"{stem}.{extension.lstrip('.')}"


# =============================================================================
# Errors
# =============================================================================

class ApplicationError(Exception):
    """
    Base class for failures inside the pipeline (lib/ and Supabase).

    Each error names what went wrong and what to do about it:
        code: stable machine-readable identifier, e.g. "ENCODING_ERROR"
        message: what failed
        suggestion: how to recover, shown to the API caller
        details: structured context (sizes, ids, limits)

    The HTTP layer maps `code` to a status; nothing here knows about HTTP.
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        if self.suggestion:
            return f"[{self.code}] {self.message} ({self.suggestion})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Error body in the API's shape: detail, code, then optional extras."""
        body: dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.suggestion:
            body["suggestion"] = self.suggestion
        if self.details:
            body["details"] = self.details
        return body
