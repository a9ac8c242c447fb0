# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .seller_service import SellerService
from .qr_service import QRService, get_asset_registry
from .export_service import ExportService

__all__ = [
    "SellerService",
    "QRService",
    "get_asset_registry",
    "ExportService",
]
