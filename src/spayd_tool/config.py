"""Library and command-line configuration."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import SpaydVersion

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Central configuration with sane defaults."""

    model_config = SettingsConfigDict(env_prefix="SPAYD_TOOL_", case_sensitive=False)

    default_version: str = Field(
        "1.0",
        description="SPAYD version written by the builder when none is given.",
    )
    checksum_uppercase: bool = Field(
        True,
        description="Render computed CRC32 digests with uppercase hex digits.",
    )
    require_checksum: bool = Field(
        False,
        description="Default for the CLI verify command: fail when no CRC32 field is present.",
    )
    qr_error: str = Field(
        "M",
        description="QR error correction level (L, M, Q or H).",
    )
    qr_scale: int = Field(
        5,
        ge=1,
        description="Module size in pixels for PNG output.",
    )
    log_level: str = Field(
        "WARNING",
        description="Log level used by the command-line shell.",
    )

    @field_validator("default_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        return str(SpaydVersion.parse(value))

    @field_validator("qr_error", "log_level", mode="before")
    @classmethod
    def _upper(cls, value):  # type: ignore[override]
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("qr_error")
    @classmethod
    def _check_qr_error(cls, value: str) -> str:
        if value not in {"L", "M", "Q", "H"}:
            raise ValueError("qr_error must be one of L, M, Q, H")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
