"""
SDK configuration models and helpers.

Centralizes settings management so the client, its storage layer and the
helper scripts share a consistent configuration surface.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORAGE_PATH = Path.home() / ".svrf" / "credentials.db"


class SvrfSettings(BaseSettings):
    """Root settings object for the SVRF SDK."""

    model_config = SettingsConfigDict(
        env_prefix="SVRF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: Optional[str] = Field(
        None,
        description="API key bundled with the application; used when none is passed explicitly.",
    )
    base_url: AnyHttpUrl = Field("https://api.svrf.com/v1")
    token_header: str = Field(
        "x-app-token",
        description="Header carrying the app token on media requests.",
    )
    request_timeout: float = Field(10.0, gt=0)
    token_freshness_seconds: int = Field(
        172800,
        description="Window, in seconds past the recorded expiry, during which a cached token is reused.",
    )
    storage_path: Path = Field(DEFAULT_STORAGE_PATH)
    token_encryption_secret: Optional[str] = Field(
        None,
        description="Secret used to derive the symmetric key for encrypting stored tokens.",
    )
    log_level: str = Field("INFO")
    analytics_enabled: bool = Field(True)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def api_base_url(self) -> str:
        return str(self.base_url).rstrip("/")


class SettingsConfigSource:
    """Read bundled configuration values by their environment variable name."""

    def __init__(self, settings: SvrfSettings) -> None:
        self._settings = settings

    def read(self, key: str) -> str | None:
        prefix = self._settings.model_config.get("env_prefix", "")
        name = key.lower()
        if prefix and name.startswith(prefix.lower()):
            name = name[len(prefix):]
        if name not in SvrfSettings.model_fields:
            return None
        value = getattr(self._settings, name)
        if value is None:
            return None
        value = str(value)
        return value or None


@lru_cache()
def get_settings() -> SvrfSettings:
    """Return a cached settings object."""
    return SvrfSettings()


__all__ = [
    "DEFAULT_STORAGE_PATH",
    "SettingsConfigSource",
    "SvrfSettings",
    "get_settings",
]
