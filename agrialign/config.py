"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Redis ───────────────────────────────────────────────────────────────
    # Empty string runs the API without cache and rate limiting.
    redis_url: str = ""
    cache_ttl_seconds: int = Field(default=300, ge=1)

    # ── Rate limiting ─────────────────────────────────────────────────────
    rate_limit_per_minute: int = Field(default=1000, ge=1)

    # ── Coordination defaults ──────────────────────────────────────────────
    default_region_id: str = "DIST001"
    default_crop_id: str = "TOMATO"

    # ── HTTP ────────────────────────────────────────────────────────────────
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
