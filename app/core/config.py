# =============================================================================================
# APP/CORE/CONFIG.PY - CENTRALIZED CONFIGURATION WITH PYDANTIC SETTINGS
# =============================================================================================
# This module provides a type-safe, environment-driven configuration system using Pydantic.
#
# FLOW:
# 1. The process environment (or a local .env file) supplies the values
# 2. This Settings class reads and validates them once at startup
# 3. get_settings() caches the instance (@lru_cache), so it is effectively immutable
# 4. Routes receive it through Depends(get_settings); tests override that dependency
#
# The signing secret lives here and nowhere else. The token codec never reads it on its
# own: callers pass settings.JWT_SECRET explicitly into every issue/verify call.
# =============================================================================================

from functools import lru_cache  # Cache settings instance (load once, reuse everywhere)
from pydantic_settings import BaseSettings, SettingsConfigDict


# -------------------------
# Settings class - Defines all configuration with types and defaults
# -------------------------
class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    USAGE EXAMPLE:
        from app.core.config import get_settings
        settings = get_settings()
        print(settings.PLATFORM)  # "dev" or "prod"
    """

    # -------------------------
    # DATABASE CONFIGURATION
    # -------------------------
    # SQLAlchemy connection string
    # Format: sqlite:///./dev.db (relative path, creates file in project root)
    DATABASE_URL: str = "sqlite:///./dev.db"

    # Upper bound for a single driver call waiting on a locked/unresponsive database.
    # A store call that exceeds it fails with StoreUnavailableError (HTTP 503).
    DATABASE_TIMEOUT_SECONDS: float = 5.0

    # -------------------------
    # ENVIRONMENT MODE
    # -------------------------
    # "dev" unlocks POST /admin/reset (deletes every user). Anything else refuses it.
    PLATFORM: str = "prod"

    # -------------------------
    # JWT (JSON WEB TOKEN) SETTINGS
    # -------------------------
    # Secret key for signing/verifying access tokens (HMAC-SHA256)
    # Generate: openssl rand -base64 64
    JWT_SECRET: str

    # Access tokens live one hour
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 3600

    # Refresh tokens live 60 days from creation
    REFRESH_TOKEN_EXPIRE_DAYS: int = 60

    # -------------------------
    # CHIRPS
    # -------------------------
    # Maximum chirp body length, measured in UTF-8 bytes
    CHIRP_MAX_LENGTH: int = 140

    # -------------------------
    # LOGGING
    # -------------------------
    LOG_LEVEL: str = "INFO"

    # -------------------------
    # Pydantic configuration
    # -------------------------
    model_config = SettingsConfigDict(
        # Read from .env file if present (useful for local dev)
        env_file=".env",
        env_file_encoding="utf-8",
        # Allow extra fields in .env without validation errors
        extra="ignore",
        # Settings are never mutated after startup
        frozen=True,
    )


# -------------------------
# Cached settings instance - Load once, reuse everywhere
# -------------------------
@lru_cache
def get_settings() -> Settings:
    """
    Returns a singleton Settings instance (cached after first call).

    USAGE:
        @router.post("/login")
        def login(settings: Settings = Depends(get_settings)):
            secret = settings.JWT_SECRET

    TESTING:
    Either override the dependency:
        app.dependency_overrides[get_settings] = lambda: Settings(JWT_SECRET="...", PLATFORM="dev")
    or clear the cache and set env vars:
        get_settings.cache_clear()
        monkeypatch.setenv("PLATFORM", "dev")
    """
    return Settings()
