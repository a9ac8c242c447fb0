# =============================================================================
# app/ - HTTP Surface
# =============================================================================
# FastAPI wiring for the print service:
# - main.py: application factory, CORS, error handlers, router mounts
# - config.py: pydantic-settings Settings
# - dependencies.py: per-request Supabase client and asset registry
# - routers/: cards, qr, public surfaces and health probes
#
# Rendering lives in lib/, orchestration in core/services/.
# =============================================================================
