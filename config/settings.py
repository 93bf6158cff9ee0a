"""Centralised configuration handling for ReceiptSpend."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UNCATEGORIZED_ID = "uncategorized"
DEFAULT_LOG_LEVEL = "INFO"


class Settings(BaseSettings):
    """Engine settings sourced from ``RECEIPT_SPEND_*`` environment variables."""

    uncategorized_id: str = DEFAULT_UNCATEGORIZED_ID
    month_locale: Literal["en", "pt"] = "en"
    log_level: str = DEFAULT_LOG_LEVEL
    timezone: str | None = None

    model_config = SettingsConfigDict(env_prefix="RECEIPT_SPEND_", extra="ignore")

    @field_validator("uncategorized_id")
    @classmethod
    def _uncategorized_non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("uncategorized_id must be non-empty")
        return v.strip()

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v!r}") from None
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, v: str) -> str:
        return v.strip().upper() or DEFAULT_LOG_LEVEL


@lru_cache
def get_settings() -> Settings:
    """Load and cache engine settings."""

    return Settings()
