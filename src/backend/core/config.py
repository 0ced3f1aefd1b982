"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "StreakForge"
    APP_ENV: str = "development"
    DEBUG: bool = False
    SECRET_KEY: str = ""  # Required - loaded from environment

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_required_secrets(cls, v: str, info: Any) -> str:
        """Validate that required secrets are set."""
        if not v:
            raise ValueError(f"{info.field_name} must be set in environment")
        return v

    # Authentication (session tokens are issued by the identity frontend)
    JWT_ALGORITHM: str = "HS256"
    TOKEN_ISSUER: str = "streakforge-auth"
    TOKEN_AUDIENCE: str = "streakforge-api"

    # Azure Cosmos DB (profile store, party store and streak cache)
    AZURE_COSMOS_ENDPOINT: str | None = None
    AZURE_COSMOS_CONNECTION_STRING: str | None = None  # For local emulator only
    AZURE_COSMOS_DATABASE: str = "streakforge"
    AZURE_COSMOS_DISABLE_SSL: bool = False

    # Submission feed (LeetCode GraphQL)
    SUBMISSION_FEED_URL: str = "https://leetcode.com/graphql"
    SUBMISSION_FEED_TIMEOUT_SECONDS: float = 10.0
    SUBMISSION_FEED_LIMIT: int = 1000
    SUBMISSION_FEED_USER_AGENT: str = "Mozilla/5.0 (compatible; StreakForge/1.0)"

    # Streak cache
    STREAK_CACHE_TTL_SECONDS: int = 3600  # 1 hour

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        import json

        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
