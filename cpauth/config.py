"""Process configuration loaded from ``CPAUTH_*`` environment variables.

Group parameters are fixed constants and are not configurable.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for the verifier server and the command line client."""

    model_config = {"env_prefix": "CPAUTH_", "case_sensitive": False}

    # Server
    host: str = Field(default="127.0.0.1", description="Server bind host")
    port: int = Field(default=50051, ge=1, le=65535, description="Server bind port")

    # Client
    server_url: str = Field(
        default="http://127.0.0.1:50051", description="Verifier base URL used by the CLI"
    )
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    # Logging
    log_level: str = Field(default="INFO", description="Python log level")
    log_format: str = Field(default="text", description="Log format: text or json")

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {value!r}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
