from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    env: str = Field(default="dev", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")

    # Each character is a trailing directory marker
    directory_markers: str = Field(default="/\\", alias="REVERTER_DIRECTORY_MARKERS")
    keep_partial_conversions: bool = Field(default=False, alias="REVERTER_KEEP_PARTIAL")

    # Virtual "Collections" folder marker, never transliterated
    collections_symbol: str = Field(default="✪", alias="COLLECTIONS_SYMBOL")

    max_batch_size: int = Field(default=500, alias="MAX_BATCH_SIZE")

    @property
    def directory_marker_set(self) -> Tuple[str, ...]:
        return tuple(self.directory_markers)

    @property
    def collections_segment(self) -> str:
        return f"{self.collections_symbol} "


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
