# src/config/settings.py — v1
"""Typed configuration loaded from the environment via pydantic-settings.

Host signals (GITHUB_*) come from the automation runner; backend, state and
logging options may also be set in a .env file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from actcache.constants import DEFAULT_UPLOAD_CHUNK_SIZE


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Host environment ===
    github_event_name: str = ""
    github_ref: str = ""
    github_server_url: str = "https://github.com"
    github_run_id: str = "local"
    github_workspace: Path = Field(default_factory=Path.cwd)
    github_output: Path | None = None

    # === Cache backend ===
    cache_backend: Literal["local", "s3"] = "local"
    cache_root: Path = Path("~/.actcache/cache")
    cache_s3_bucket: str = ""
    cache_s3_prefix: str = "actcache/"
    cache_s3_region: str = ""
    cache_s3_endpoint_url: str = ""
    upload_chunk_size_default: int = DEFAULT_UPLOAD_CHUNK_SIZE

    # === Run state ===
    state_root: Path = Path("~/.actcache/state")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("upload_chunk_size_default")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("upload_chunk_size_default must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field consistency rules."""
        if self.cache_backend == "s3" and not self.cache_s3_bucket:
            raise ConfigurationError(
                "CACHE_S3_BUCKET must be set when CACHE_BACKEND=s3"
            )
        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment and .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
