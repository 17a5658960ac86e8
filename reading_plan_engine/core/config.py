"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DEFAULT_BIBLE_VERSION: str = Field(default="nvi")

    # Provider chain
    PROVIDER_ORDER: list[str] = Field(
        default_factory=lambda: ["abibliadigital", "apibible", "bolls", "bibleapi"]
    )
    PROVIDER_TIMEOUT_SECONDS: float = Field(default=10.0)
    ABIBLIADIGITAL_BASE_URL: str = Field(default="https://www.abibliadigital.com.br/api")
    ABIBLIADIGITAL_TOKEN: str | None = Field(default=None)
    API_BIBLE_BASE_URL: str = Field(default="https://api.scripture.api.bible/v1")
    API_BIBLE_KEY: str | None = Field(default=None)
    # Maps normalized version codes to API.Bible bible ids.
    API_BIBLE_IDS: dict[str, str] = Field(default_factory=dict)
    BOLLS_BASE_URL: str = Field(default="https://bolls.life")
    BIBLE_API_BASE_URL: str = Field(default="https://bible-api.com")
    BIBLE_API_TRANSLATION: str = Field(default="almeida")

    # Cache configuration
    VERSE_CACHE_PERSISTENT_ENABLED: bool = Field(default=True)
    DATA_DIR: Path = Field(default=Path("data"))

    # Reading plan
    READING_PLAN_PATH: Path | None = Field(default=None)
    READING_PLAN_TOTAL_DAYS: int = Field(default=365)

    READING_PLAN_LOG_LEVEL: str = Field(default="info")
    READING_PLAN_LOG_DIR: Path | None = Field(default=None)
    ADMIN_API_TOKEN: str | None = Field(default=None)
    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ENABLE_ADMIN_AUTH: bool = Field(default=True)


settings = Settings()
config = settings  # Alias for backward compatibility


__all__ = ["Settings", "settings", "config"]
