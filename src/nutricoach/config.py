"""Application configuration."""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "high"
    openai_store: bool = False
    default_timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("default_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if not is_valid_timezone(value):
            raise ValueError(f"Unknown timezone: {value}")
        return value


def is_valid_timezone(value: str) -> bool:
    """Return True when ``value`` is a known IANA timezone name."""
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
