"""
Configuration and settings for the functions service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings. Field names match the env var names."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/functions/v1")
    log_level: str = Field(default="INFO")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Backend store (Postgres expected, any SQLAlchemy URL works)
    database_url: Optional[str] = Field(default=None)
    use_in_memory_backends: bool = Field(default=False)

    # AI providers
    openai_api_key: Optional[str] = Field(default=None)
    openai_model: str = Field(default="gpt-4o-mini")
    claude_api_key: Optional[str] = Field(default=None)
    claude_model: str = Field(default="claude-haiku-4-5")
    grok_api_key: Optional[str] = Field(default=None)
    grok_model: str = Field(default="grok-3-mini")
    grok_base_url: str = Field(default="https://api.x.ai/v1")

    # OCR / PDF / video providers
    google_vision_api_key: Optional[str] = Field(default=None)
    pdf_co_api_key: Optional[str] = Field(default=None)
    youtube_api_key: Optional[str] = Field(default=None)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
