# =============================================================================
# app/config.py - Settings
# =============================================================================
# Every tunable of the print service, read once from the environment (or a
# .env file next to the process) by pydantic-settings.
#
# Usage:
#   from app.config import settings
#   settings.PUBLIC_ORIGIN        # "https://sellcard.app"
#
# Validation happens at import time, so a bad value stops the process on
# startup instead of failing the first export.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Environment-driven configuration.

    Groups:
    - Supabase: where sellers, listings and view counters live
    - Runtime: environment name, debug logging, CORS
    - Public URLs: origin every QR symbol points at
    - Print: density, DPI, fonts and the brand line on cards
    """

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------
    # Required; there is nothing to render without seller records

    SUPABASE_URL: str = Field(
        ...,
        description="Project URL, e.g. https://<ref>.supabase.co"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="service_role key; reads inactive rows and calls the view RPCs"
    )

    # -------------------------------------------------------------------------
    # Runtime
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment stage; production restricts CORS to CORS_ORIGINS"
    )

    DEBUG: bool = Field(
        default=False,
        description="Log at DEBUG instead of INFO"
    )

    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Comma-separated front-end origins allowed in production"
    )

    # -------------------------------------------------------------------------
    # Public URLs
    # -------------------------------------------------------------------------
    # Every QR symbol encodes a URL under this origin, so it must match the
    # public front end that serves /shop, /card, /product and /service

    PUBLIC_ORIGIN: str = Field(
        default="http://localhost:5173",
        description="Origin of the public marketplace front end"
    )

    # -------------------------------------------------------------------------
    # Print
    # -------------------------------------------------------------------------

    PRINT_DENSITY_MULTIPLIER: float = Field(
        default=3.0,
        ge=3.0,
        le=8.0,
        description="Pixels per logical pixel for print exports (at least 3)"
    )

    PRINT_DPI: int = Field(
        default=300,
        ge=72,
        description="Logical pixels per inch of a printed card (1050px = 3.5in)"
    )

    FONT_DIR: str | None = Field(
        default=None,
        description="Directory with Inter/Lora TrueType files (default: Pillow's bundled font)"
    )

    BRAND_NAME: str = Field(
        default="SellCard",
        min_length=1,
        description="Platform name printed on branded card layouts"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Empty variables count as unset, so defaults still apply
        env_ignore_empty=True,
        case_sensitive=True,
    )

    @field_validator("PUBLIC_ORIGIN")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS_ORIGINS split on commas, blanks dropped."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Parse and validate the environment once per process."""
    return Settings()


settings = get_settings()
