"""
Application configuration using Pydantic Settings.
All config is loaded from environment variables / .env file.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "livenotes"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── GraphQL API ──────────────────────────────────────
    GRAPHQL_URL: str = "http://localhost:20002/graphql"
    GRAPHQL_API_KEY: str = ""  # sent as x-api-key when set
    GRAPHQL_TIMEOUT: int = 30  # HTTP timeout in seconds

    # ── Notes client ─────────────────────────────────────
    CONTROLLER_VERSION: str = "live"  # round_trip | optimistic | live
    CLIENT_ID: str = ""  # empty = new UUID per session

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (singleton)."""
    return Settings()
