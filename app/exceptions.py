# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
#
# Two families reach the handlers:
# - SellCardException: HTTP-facing errors raised by services (404, 409...)
# - ApplicationError: pipeline errors from lib/ (encoding, rasterization,
#   export I/O, Supabase), mapped to a status code by their code
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class SellCardException(Exception):
    """
    Base exception for the SellCard print API.

    All custom HTTP exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SELLCARD_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Lookup Exceptions
# =============================================================================

class SellerNotFoundError(SellCardException):
    """Raised when a seller ID doesn't exist or the shop is inactive."""

    def __init__(self, seller_id: str):
        super().__init__(
            message=f"Seller not found: {seller_id}",
            code="SELLER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the seller_id is correct and the shop is active",
            details={"seller_id": seller_id}
        )


class AssetNotFoundError(SellCardException):
    """Raised when a product or service doesn't exist or is unavailable."""

    def __init__(self, kind: str, asset_id: str):
        super().__init__(
            message=f"{kind.capitalize()} not found: {asset_id}",
            code="ASSET_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {kind} exists and is marked available",
            details={"kind": kind, "id": asset_id}
        )


class UnknownAssetKindError(SellCardException):
    """Raised when a path names an asset kind that doesn't exist."""

    def __init__(self, kind: str, allowed: list[str]):
        super().__init__(
            message=f"Unknown asset kind: {kind}",
            code="UNKNOWN_ASSET_KIND",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"kind": kind, "allowed": allowed}
        )


# =============================================================================
# Export Exceptions
# =============================================================================

class ExportInProgressError(SellCardException):
    """Raised when an export for the same seller is already running."""

    def __init__(self, seller_id: str):
        super().__init__(
            message=f"An export is already in progress for seller: {seller_id}",
            code="EXPORT_IN_PROGRESS",
            status_code=409,
            suggestion="Wait for the current export to finish, then try again",
            details={"seller_id": seller_id}
        )


# Status codes for pipeline errors, by ApplicationError.code
APPLICATION_ERROR_STATUS: dict[str, int] = {
    "ENCODING_ERROR": 422,
    "UNKNOWN_VARIANT": 422,
    "RASTERIZATION_ERROR": 500,
    "EXPORT_IO_ERROR": 500,
    "FONT_LOAD_ERROR": 500,
}


# =============================================================================
# Exception Handlers
# =============================================================================

async def sellcard_exception_handler(
    request: Request,
    exc: SellCardException
) -> JSONResponse:
    """
    Convert SellCardException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """
    Convert pipeline errors (lib/) to the same JSON shape.

    Unknown codes (e.g. Supabase failures) are reported as 502 since the
    failure is in an upstream service.
    """
    status_code = APPLICATION_ERROR_STATUS.get(exc.code, 502)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")

    return JSONResponse(status_code=status_code, content=exc.to_dict())
