"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from xcfetch.errors import ConfigurationError


class Settings(BaseSettings):
    """Centralized configuration loaded from environment or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    xc_api_key: Optional[str] = Field(default=None, validation_alias="XC_API_KEY")
    xc_output_dir: Optional[Path] = Field(default=None, validation_alias="XC_OUTPUT_DIR")
    xc_index_path: Optional[Path] = Field(default=None, validation_alias="XC_INDEX_PATH")
    xc_timeout: float = Field(default=30.0, validation_alias="XC_TIMEOUT")
    xc_anchor_marker: str = Field(default=".git", validation_alias="XC_ANCHOR_MARKER")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


def resolve_api_key(flag_value: Optional[str], settings: Optional[Settings] = None) -> str:
    """Pick the API key from the command line flag, then the environment, then .env."""
    if flag_value and flag_value.strip():
        return flag_value.strip()
    settings = settings or get_settings()
    if settings.xc_api_key and settings.xc_api_key.strip():
        return settings.xc_api_key.strip()
    raise ConfigurationError("API key required: pass --key or set XC_API_KEY (environment or .env)")
