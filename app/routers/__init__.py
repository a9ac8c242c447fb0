# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - cards.py: Card preview/export, profile sheet, vCard, asset list
# - qr.py: Standalone QR codes and posters
# - public.py: Public surface data and QR landing redirects
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import cards
from . import qr
from . import public

__all__ = [
    "health",
    "cards",
    "qr",
    "public",
]
