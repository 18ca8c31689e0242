"""Web server configuration using Pydantic Settings"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from linkhub.shared.logging import normalize_log_level

PROJECT_DIR = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Server settings with environment variable support.

    Twitch credentials are optional: when any of them is missing the
    live-status endpoint reports itself as not configured.
    """

    model_config = SettingsConfigDict(
        env_file=PROJECT_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitch app credentials
    twitch_client_id: str = Field(default="", description="Twitch OAuth Client ID")
    twitch_client_secret: str = Field(default="", description="Twitch OAuth Client Secret")
    twitch_user_id: str = Field(default="", description="Broadcaster user ID to watch")

    # Environment
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    public_dir: Path = Field(
        default=PROJECT_DIR / "public", description="Directory of the static site"
    )

    # Live status
    upstream_timeout: float = Field(
        default=5.0, gt=0, description="Timeout in seconds for Twitch calls"
    )
    token_ttl_seconds: float = Field(
        default=3600.0, gt=0, description="Lifetime assumed for a cached app token"
    )
    live_cache_seconds: int = Field(
        default=60, ge=0, description="Client cache max-age for live status"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level"""
        return normalize_log_level(v)

    @property
    def twitch_configured(self) -> bool:
        """Check if every value needed for the live-status query is set"""
        return bool(self.twitch_client_id and self.twitch_client_secret and self.twitch_user_id)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
