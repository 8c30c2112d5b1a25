"""Configuration settings for the Arena progression backend."""

from __future__ import annotations

import os
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import List, Optional

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    postgres_db: str = Field(default="arena_db")
    postgres_user: str = Field(default="arena_user")
    postgres_password: str = Field(default="dev_password")
    postgres_host: str = Field(default="postgres")
    postgres_port: int = Field(default=5432)
    database_url_override: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy async URL, takes precedence over postgres_* parts",
    )

    @property
    def database_url(self) -> str:
        """Construct async database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    @property
    def environment(self) -> str:
        """Get current environment from ENVIRONMENT variable."""
        env = os.getenv("ENVIRONMENT", "").lower()
        return env if env in ["dev", "production"] else "dev"

    # JWT session resolution
    jwt_secret_key: str = Field(
        default="dev_secret_key_please_change_in_production",
        description="Secret key used to verify session tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_access_token_expire_minutes: int = Field(
        default=10080,  # 7 days
        description="Lifetime of tokens minted by create_access_token",
    )

    # Presence
    max_checkin_distance_km: float = Field(
        default=0.5,
        gt=0,
        description="Server-side geofence radius for venue check-in",
    )
    stale_presence_threshold_hours: float = Field(
        default=2.0,
        gt=0,
        description="Presence rows older than this are evicted by the sweep",
    )
    presence_sweep_interval_seconds: int = Field(default=900, ge=1)

    # Matches
    match_require_both_ready: bool = Field(
        default=True,
        description="Start a match only once both participants marked ready",
    )

    # Rankings
    ranking_default_limit: int = Field(default=10, ge=1)
    ranking_max_limit: int = Field(default=100, ge=1)

    # Background jobs
    job_scheduler_enabled: bool = Field(default=True)

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Reject weak or placeholder secrets when running in production.

        :raises ValueError: If secret is weak and environment is production
        """
        if os.getenv("ENVIRONMENT", "").lower() != "production":
            return v

        weak_indicators = ["dev_secret", "please_change", "changeme", "secret_key"]
        if any(indicator in v.lower() for indicator in weak_indicators):
            raise ValueError(
                "Production deployment detected with default/weak JWT secret! "
                "Set a strong secret via JWT_SECRET_KEY environment variable."
            )
        if len(v) < 32:
            raise ValueError(
                f"JWT secret must be at least 32 characters (256 bits). "
                f"Current length: {len(v)} characters."
            )
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="forbid",  # Forbid extra fields for better type safety
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
