# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 secret used to verify Supabase access tokens"
    )

    # -------------------------------------------------------------------------
    # OpenAI / Embeddings
    # -------------------------------------------------------------------------
    # Optional: the embedding endpoint answers 503 when no key is set

    OPENAI_API_KEY: str = Field(
        default="",
        description="OpenAI API key used for vendor search embeddings"
    )

    OPENAI_EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small",
        description="Embedding model for vendor descriptions"
    )

    # -------------------------------------------------------------------------
    # SMS Gateway (Solapi)
    # -------------------------------------------------------------------------

    SOLAPI_API_KEY: str = Field(
        default="",
        description="Solapi API key for partner outreach messages"
    )

    SOLAPI_API_SECRET: str = Field(
        default="",
        description="Solapi API secret (HMAC signing key)"
    )

    SOLAPI_BASE_URL: str = Field(
        default="https://api.solapi.com",
        description="Solapi REST endpoint"
    )

    SMS_FROM_NUMBER: str = Field(
        default="",
        description="Registered sender number for outbound SMS"
    )

    PARTNER_DETAIL_BASE_URL: str = Field(
        default="https://docsupport.kr/partners",
        description="Public vendor detail page, linked from outreach messages"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    MANAGER_ALLOWED_ROLES: str = Field(
        default="",
        description="Roles allowed into /manager-api (comma-separated, empty = any signed-in user)"
    )

    # -------------------------------------------------------------------------
    # Image Upload Settings
    # -------------------------------------------------------------------------

    VENDOR_IMAGE_MAX_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum vendor image size in MB"
    )

    PRODUCT_IMAGE_MAX_MB: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Maximum beauty product image size in MB"
    )

    ALLOWED_IMAGE_EXTENSIONS: str = Field(
        default="jpg,jpeg,png,gif,webp",
        description="Allowed image extensions (comma-separated)"
    )

    VENDOR_IMAGE_BUCKET: str = Field(default="vendor_images")

    PRODUCT_IMAGE_BUCKET: str = Field(default="product_imgs")

    # -------------------------------------------------------------------------
    # Directory Rules
    # -------------------------------------------------------------------------

    JOB_POST_TTL_DAYS: int = Field(
        default=7,
        ge=1,
        description="Days a job post stays listed after creation"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://docsupport.kr" -> ["http://localhost:3000", "https://docsupport.kr"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def manager_roles_list(self) -> list[str]:
        """Parse MANAGER_ALLOWED_ROLES, dropping blanks."""
        return [role.strip() for role in self.MANAGER_ALLOWED_ROLES.split(",") if role.strip()]

    @property
    def allowed_image_extensions_list(self) -> list[str]:
        """
        Parse ALLOWED_IMAGE_EXTENSIONS string into a list.

        Example: "jpg, png" -> ["jpg", "png"]
        """
        return [ext.strip().lower().lstrip(".") for ext in self.ALLOWED_IMAGE_EXTENSIONS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def sms_configured(self) -> bool:
        return bool(self.SOLAPI_API_KEY and self.SOLAPI_API_SECRET and self.SMS_FROM_NUMBER)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
