"""Refresh job configuration"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from linkhub.shared.logging import normalize_log_level

PROJECT_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_DIR / "public" / "data"

STATS_FILENAME = "social.stats.json"
MEDIA_KIT_FILENAME = "media.kit.json"


class RefreshSettings(BaseSettings):
    """Stats refresh job settings.

    Every platform credential is optional; a platform without a full
    credential set is skipped for the run.
    """

    model_config = SettingsConfigDict(
        env_file=PROJECT_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitch
    twitch_client_id: str = Field(default="", description="Twitch OAuth Client ID")
    twitch_client_secret: str = Field(default="", description="Twitch OAuth Client Secret")
    twitch_user_id: str = Field(default="", description="Broadcaster user ID")

    # YouTube
    youtube_api_key: str = Field(default="", description="YouTube Data API key")
    youtube_channel_id: str = Field(default="", description="YouTube channel ID")

    # Output
    data_dir: Path = Field(default=DATA_DIR, description="Directory holding the JSON artifacts")

    request_timeout: float = Field(
        default=15.0, gt=0, description="Timeout in seconds for each upstream call"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return normalize_log_level(v)

    @property
    def stats_path(self) -> Path:
        return self.data_dir / STATS_FILENAME

    @property
    def media_kit_path(self) -> Path:
        return self.data_dir / MEDIA_KIT_FILENAME


@lru_cache
def get_refresh_settings() -> RefreshSettings:
    """Get cached settings instance"""
    return RefreshSettings()
