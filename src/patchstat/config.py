"""Configuration management for patchstat."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Uses PATCHSTAT_ prefix for all environment variables.
    Supports loading from .env file.

    Examples:
        PATCHSTAT_DEBUG=true
        PATCHSTAT_PORT=8080
        PATCHSTAT_STRICT=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PATCHSTAT_",
        case_sensitive=False,
    )

    # Server configuration
    host: str = Field(
        default="127.0.0.1",
        description="Server host address",
    )
    port: Optional[int] = Field(
        default=None,
        description="Server port (auto-assigned if not specified)",
        ge=1,
        le=65535,
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    # Parsing configuration
    strict: bool = Field(
        default=False,
        description="Reject diffs whose hunk headers do not match their content",
    )
    max_diff_size: int = Field(
        default=1000000,
        description="Maximum diff size in bytes accepted over HTTP",
        ge=1,
    )

    # Git configuration
    repo_path: Optional[Path] = Field(
        default=None,
        description="Repository to read diffs from (defaults to the working directory)",
    )

    @field_validator("repo_path", mode="before")
    @classmethod
    def validate_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Convert string paths to Path objects."""
        if v is None or isinstance(v, Path):
            return v
        return Path(v)


def configure_logging(debug: bool = False) -> None:
    """Set up root logging, verbose when debug is enabled."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
