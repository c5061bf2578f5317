"""Environment-driven settings for the HTTP surface and logging.

Environment:
- ENVIRONMENT: deployment name reported by /healthz (default "dev")
- LOG_LEVEL: root logging level (default "INFO")
- CORS_ALLOW_ORIGINS: comma-separated allowed origins (default "*")
- DOCS_URL: path of the OpenAPI UI (default "/docs")
- HOST / PORT: bind address for the ``serve`` command
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Service configuration."""

    environment: str = Field(default="dev")
    log_level: str = Field(default="INFO")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    docs_url: str = Field(default="/docs")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        if isinstance(value, str):
            origins = [o.strip() for o in value.split(",") if o.strip()]
            return origins or ["*"]
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the process environment."""

        env_map = {
            "environment": "ENVIRONMENT",
            "log_level": "LOG_LEVEL",
            "cors_allow_origins": "CORS_ALLOW_ORIGINS",
            "docs_url": "DOCS_URL",
            "host": "HOST",
            "port": "PORT",
        }
        values = {
            field: os.environ[var]
            for field, var in env_map.items()
            if os.environ.get(var, "").strip()
        }
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings loaded from the environment."""
    return Settings.from_env()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for CLI and server entry points."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
