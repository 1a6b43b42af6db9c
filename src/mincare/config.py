"""Centralised application settings loaded from environment / .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_DEFAULT_DB_URL = f"sqlite+aiosqlite:///{_PROJECT_ROOT / 'data' / 'mincare.db'}"
DEFAULT_SECRET_KEY = "change-me-to-a-random-secret"


class Settings(BaseSettings):
    """All runtime configuration for the MinCare wellness tracker.

    Values are read from environment variables first, then from a *.env*
    file at the project root.  Every variable lives in the flat
    ``MINCARE_`` namespace, e.g. ``MINCARE_DATABASE_URL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MINCARE_",
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────────
    database_url: str = _DEFAULT_DB_URL
    seed_catalog_on_startup: bool = True

    # ── API server ────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_secret_key: str = DEFAULT_SECRET_KEY
    cors_origins: str = "*"  # comma-separated origins, or "*" for all

    # ── Logging ───────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ── Signal windows ────────────────────────────────────────
    sleep_window_sessions: int = Field(7, ge=1)  # nights averaged by SleepPal
    stress_window_readings: int = Field(7, ge=1)
    history_limit: int = Field(10, ge=1)  # mood entries / stress readings listed
    sleep_tip_limit: int = Field(3, ge=1)
    community_post_limit: int = Field(20, ge=1)

    # ── Insights ──────────────────────────────────────────────
    insight_seed: int | None = None  # fix to make insight selection repeatable

    @property
    def api_key_required(self) -> bool:
        """False while the secret is unset or still the shipped placeholder."""
        return self.api_secret_key not in ("", DEFAULT_SECRET_KEY)

    @property
    def cors_origin_list(self) -> list[str]:
        raw = self.cors_origins.strip()
        if raw == "*":
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return a cached :class:`Settings` singleton."""
    return Settings()
