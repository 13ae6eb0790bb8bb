# =============================================================================
# core/settings.py  -  Runtime Configuration
# =============================================================================
#
# All knobs come from environment variables (main.py loads a .env file
# first, so they can live there too):
#
#   RANDOMUSER_BASE_URL   upstream endpoint       (https://randomuser.me/api)
#   RANDOMUSER_TIMEOUT    outbound timeout, secs  (10)
#   MCP_TRANSPORT         "stdio" or "http"       (stdio)
#   MCP_HOST / MCP_PORT   bind address for http   (127.0.0.1 / 8000)
#   LOG_LEVEL             root log level          (INFO)
#
# Parsing and range checks are pydantic-settings' job.  load_settings()
# turns its ValidationError into SettingsError so startup fails with one
# exception type.
# =============================================================================

import logging
from typing import Literal

from pydantic import Field, PositiveFloat, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://randomuser.me/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


class SettingsError(ValueError):
    """An environment variable holds an unusable value."""


class Settings(BaseSettings):
    """Server settings, read from the environment."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias="RANDOMUSER_BASE_URL",
        description="randomuser.me endpoint, without a trailing slash",
    )
    timeout: PositiveFloat = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        validation_alias="RANDOMUSER_TIMEOUT",
        description="Seconds allowed for one upstream request",
    )
    transport: Literal["stdio", "http"] = Field(
        default="stdio",
        validation_alias="MCP_TRANSPORT",
    )
    host: str = Field(default="127.0.0.1", validation_alias="MCP_HOST")
    port: int = Field(default=8000, gt=0, lt=65536, validation_alias="MCP_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"must be an http(s) URL, got {v!r}")
        return v

    @field_validator("transport", mode="before")
    @classmethod
    def normalize_transport(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("host")
    @classmethod
    def strip_host(cls, v: str) -> str:
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v!r}")
        return v


def load_settings() -> Settings:
    """Read Settings from the environment.

    Raises:
        SettingsError: If any variable is set to an invalid value.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise SettingsError(str(e)) from e
