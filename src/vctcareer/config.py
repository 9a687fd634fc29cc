"""
VCTCareer - Configuration and settings.

Loaded from environment variables and an optional .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings for the onboarding flow."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    vct_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Career service
    gateway_url: str = "http://127.0.0.1:8080"
    gateway_timeout_seconds: float = 15.0

    # Durable client-side storage (placement record)
    storage_path: str = "~/.vctcareer/storage.json"

    # Landing roadmap
    scroll_throttle_ms: int = 250

    # Where to go once the placement is confirmed
    post_onboarding_route: str = "/career"

    @property
    def is_development(self) -> bool:
        return self.vct_env == "development"

    @property
    def scroll_throttle_seconds(self) -> float:
        return self.scroll_throttle_ms / 1000.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
