# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the SellCard print API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    SellCardException,
    application_error_handler,
    sellcard_exception_handler,
)
from app.routers import cards, health, public, qr
from lib.compositor import fonts
from lib.utils import ApplicationError

# One root configuration; modules log through getLogger(__name__)
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Point the renderer at the configured fonts before serving."""
    # Startup
    logger.info(f"Starting SellCard API in {settings.ENVIRONMENT} mode")
    logger.info(f"Public origin: {settings.PUBLIC_ORIGIN}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    fonts.configure_fonts(settings.FONT_DIR)

    yield

    # Shutdown
    logger.info("Shutting down SellCard API")


app = FastAPI(
    title="SellCard API",
    description="""
## Visual Identity Export API

Turns a seller's shop profile into things buyers can scan and print.

### How It Works

1. **QR Symbol** - The shop URL is encoded at error correction level H
2. **Compose** - Identity + symbol are laid out in one of four card templates
3. **Rasterize** - The card is re-laid out at print size (1050x600) and painted at 3x density
4. **Export** - PNG, or PDF on an 88.9 x 50.8 mm page

### Card Templates

| Variant | Name |
|---------|------|
| `primary-banded` | Executive |
| `header-strip` | Modern |
| `borderless-minimal` | Minimal |
| `bordered-ornamental` | Elegant |

Themes: `blue`, `green`, `purple`, `gold`, `black`.

### Quick Start

```bash
# Preview
curl "http://localhost:8000/api/v1/sellers/{id}/card/preview?variant=header-strip&theme=green" -o preview.png

# Print export
curl -OJ "http://localhost:8000/api/v1/sellers/{id}/card/export?format=pdf"

# QR code of a product
curl -OJ "http://localhost:8000/api/v1/qr/product/{product_id}"
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Cards",
            "description": "Business card previews and print exports, profile sheets, vCards",
        },
        {
            "name": "QR",
            "description": "QR codes and posters for shops, cards, products and services",
        },
        {
            "name": "Public",
            "description": "Public page data and QR landing redirects (record views)",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# The seller dashboard downloads exports cross-origin and reads the filename
# and page count from the response headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Page-Count"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SellCardException)
async def handle_sellcard_exception(request: Request, exc: SellCardException):
    """Handle custom SellCard exceptions."""
    return await sellcard_exception_handler(request, exc)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    """Handle pipeline errors (encoding, rasterization, export, Supabase)."""
    return await application_error_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Card, profile and contact endpoints
app.include_router(
    cards.router,
    prefix="/api/v1/sellers",
    tags=["Cards"]
)

# QR code endpoints
app.include_router(
    qr.router,
    prefix="/api/v1/qr",
    tags=["QR"]
)

# Public surface endpoints
app.include_router(
    public.router,
    prefix="/api/v1/public",
    tags=["Public"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Service name and where to look next."""
    return {
        "name": "SellCard API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
