"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    acting_user_header: str = "X-User-Id"
    expiry_warning_days: int = 3
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_user_id(raw: str | None) -> int | None:
    """Parse an acting user id from a header value."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned.isdigit():
        return None
    return int(cleaned)
