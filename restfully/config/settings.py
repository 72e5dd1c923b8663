"""Service configuration models and utilities."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, HttpUrl, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service defaults loaded from environment variables."""

    base_url: HttpUrl = Field(
        default="http://localhost:8000", alias="RESTFULLY_BASE_URL"
    )
    content_type: str = Field(default="text/json", alias="RESTFULLY_CONTENT_TYPE")
    timeout: Optional[PositiveFloat] = Field(default=None, alias="RESTFULLY_TIMEOUT")
    allow_auto_redirect: bool = Field(
        default=False, alias="RESTFULLY_ALLOW_AUTO_REDIRECT"
    )
    proxy: Optional[str] = Field(default=None, alias="RESTFULLY_PROXY")

    model_config = SettingsConfigDict(
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
