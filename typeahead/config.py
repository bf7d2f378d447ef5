"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseModel):
    min_term_length: int = Field(default=3, ge=1, description="Shorter terms clear the results.")
    max_results: int = Field(default=5, ge=1, le=200)
    debounce_ms: int = Field(default=250, ge=0, le=10_000)
    primary_field: str = Field(default="artistName", min_length=1)
    secondary_field: str = Field(default="trackName", min_length=1)


class ProviderSettings(BaseModel):
    base_url: AnyHttpUrl = Field(default="https://itunes.apple.com")
    media: str = Field(default="music", min_length=1)
    entity: str = Field(default="musicTrack", min_length=1)
    request_timeout_seconds: float = Field(default=10, gt=0, le=60)
    max_attempts: int = Field(default=2, ge=1, le=5)
    retry_base_delay: float = Field(default=0.5, ge=0)


class TypeaheadSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TYPEAHEAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"

    search: SearchSettings = Field(default_factory=SearchSettings)
    provider: ProviderSettings = Field(default_factory=ProviderSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value


@lru_cache
def get_settings() -> TypeaheadSettings:
    """Return cached settings instance."""

    return TypeaheadSettings()


__all__ = [
    "ProviderSettings",
    "SearchSettings",
    "TypeaheadSettings",
    "get_settings",
]
