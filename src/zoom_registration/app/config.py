"""Application configuration using Pydantic Settings."""

import os
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

from ..auth.token_provider import DEFAULT_OAUTH_URL
from ..core.base_client import DEFAULT_TIMEOUT_SECONDS
from ..registration.client import DEFAULT_API_BASE_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "zoom-registration"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Static config (server.{APP_ENV}.yaml)
    CONFIG_DIR: Optional[str] = None
    APP_ENV: str = "dev"

    # Zoom upstream
    ZOOM_API_BASE_URL: str = DEFAULT_API_BASE_URL
    ZOOM_OAUTH_URL: str = DEFAULT_OAUTH_URL
    HTTP_TIMEOUT_SECONDS: float = DEFAULT_TIMEOUT_SECONDS

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        case_sensitive = True
        env_file = None  # Use system env only


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
