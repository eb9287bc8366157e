"""Application configuration for faceclaimer.

Settings are read from ``FACECLAIMER_*`` environment variables and may be
overridden by command line flags (see :mod:`faceclaimer.cli`). The images
directory must already exist: the service never creates its storage root.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validators import is_valid_url

DEFAULT_MAX_DOWNLOAD_BYTES = 100 * 1024 * 1024


class AppConfig(BaseSettings):
    """Pydantic settings container for the HTTP service."""

    model_config = SettingsConfigDict(env_prefix="FACECLAIMER_")

    images_dir: Path = Field(
        default=Path("images"),
        description="Storage root for character images; must exist.",
    )
    base_url: str = Field(
        description="Public base URL used to build image links, e.g. https://example.com",
    )
    host: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to.")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP port.")
    quality: int = Field(default=90, ge=1, le=100, description="WebP quality (1-100).")
    fetch_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout covering the whole outbound image download.",
    )
    max_download_bytes: int = Field(
        default=DEFAULT_MAX_DOWNLOAD_BYTES,
        ge=1,
        description="Response bytes beyond this cap are discarded.",
    )
    log_level: str = Field(default="INFO", description="Root logging level.")

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        if not is_valid_url(value):
            raise ValueError("base_url must be a valid URL (e.g., https://example.com)")
        return value

    @field_validator("images_dir")
    @classmethod
    def _check_images_dir(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"images_dir does not exist: {value}")
        return Path(os.path.abspath(value))

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        return value.upper()


__all__ = ["AppConfig", "DEFAULT_MAX_DOWNLOAD_BYTES"]
