"""Configuration via pydantic-settings — 12-factor app style."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """logdecode configuration — loaded from env vars / .env file."""

    model_config = SettingsConfigDict(env_prefix="LOGDECODE_", env_file=".env", extra="ignore")

    default_format: str = Field(default="syslog", description="Format used when --format is omitted")
    skip_invalid: bool = Field(default=True, description="Keep going past lines that fail to decode")
    max_errors_shown: int = Field(default=20, ge=0, description="Cap on per-line failure reports")


settings = Settings()
