# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains the visual identity export pipeline:
# - symbol_encoder.py: URL -> QR SymbolBitmap
# - compositor/: card, profile sheet and poster layouts + Pillow painter
# - rasterizer.py: composition -> print-resolution PrintArtifact
# - exporter.py: artifact -> PNG / paginated PDF
# - asset_registry.py: canonical URLs and view counters of public surfaces
# - contact.py: vCard and WhatsApp link helpers
# - supabase_client.py: Typed Supabase wrapper for database operations
# - utils.py: Shared utilities (error handling, UUID and filename helpers)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import (
    ApplicationError,
    export_filename,
    normalize_uuid,
    safe_filename_stem,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "ApplicationError",
    "export_filename",
    "normalize_uuid",
    "safe_filename_stem",
]
