# =============================================================================
# app/routers/health.py - Probes
# =============================================================================
# Liveness and readiness probes for the container platform.
#
#   /health        process is up, reports environment and version
#   /health/ready  Supabase answers and the renderer can encode and load fonts
#   /health/live   bare heartbeat
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import SupabaseDep
from lib.compositor import fonts
from lib.symbol_encoder import encode

router = APIRouter()

API_VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Result per dependency: "healthy" or "unhealthy: <reason>"."""
    database: str = "unknown"
    renderer: str = "unknown"


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _probe(check) -> str:
    try:
        check()
    except Exception as e:
        return f"unhealthy: {str(e)[:50]}"
    return "healthy"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Process is up."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(supabase: SupabaseDep):
    """
    Ready to serve exports.

    "degraded" when the sellers table can't be queried or a test symbol
    can't be encoded and measured with the configured fonts.
    """
    def query_sellers():
        supabase.get_client().table("sellers").select("id").limit(1).execute()

    def render_sample():
        encode(settings.PUBLIC_ORIGIN, module_size_px=1)
        fonts.get_font("sans", 12)

    checks = ChecksResponse(database=_probe(query_sellers), renderer=_probe(render_sample))
    ready = checks.database == "healthy" and checks.renderer == "healthy"

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Heartbeat for restart decisions."""
    return LivenessResponse(status="alive", timestamp=_now())
