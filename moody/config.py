"""
Moody Configuration
===================
All environment variables in one place. Pydantic Settings validates
types at startup so a bad timezone name or window size fails fast.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Loaded from environment variables or a .env file."""

    # --- Calendar ---
    # Every "which day is this?" question is answered in this zone.
    reference_timezone: str = "UTC"

    # --- Insights ---
    insights_window_days: int = 30
    summary_window_days: int = 7

    # --- Anthropic / Claude API ---
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    # Summary is one observation plus one recommendation
    anthropic_max_tokens: int = 200

    # --- Feature flags ---
    # Kill switch: if False, summaries are built locally without Claude.
    enable_ai_summary: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("reference_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value!r}") from exc
        return value

    @field_validator("insights_window_days", "summary_window_days")
    @classmethod
    def _positive_window(cls, value: int) -> int:
        if value < 1:
            raise ValueError("window must be at least one day")
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.reference_timezone)


@lru_cache
def get_settings() -> Settings:
    return Settings()
