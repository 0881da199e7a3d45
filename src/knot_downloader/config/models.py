from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from knot_downloader.config.durations import parse_duration

LogLevel = Literal["error", "warn", "info", "debug", "trace"]


def _coerce_duration(value: Any) -> Any:
    if isinstance(value, str):
        return parse_duration(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    return value


class FileEntry(BaseModel):
    """One mirrored resource. The url doubles as the ETag cache key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(min_length=1)
    path: str = Field(min_length=1)


class AppConfig(BaseModel):
    """
    Effective runtime configuration after applying env overrides.

    Loaded once at startup and read-only afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    interval: timedelta
    create_directories: bool = False
    log_level: LogLevel = "info"
    color: bool = True
    request_timeout: timedelta = timedelta(seconds=30)
    files: Sequence[FileEntry]

    @field_validator("interval", "request_timeout", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> Any:
        return _coerce_duration(value)

    @field_validator("interval", "request_timeout")
    @classmethod
    def _require_positive(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("Duration must be greater than zero")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "warning":
                return "warn"
            return lowered
        return value


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Optional inputs for the configuration loader.

    yaml_path=None defers to the CONFIG_PATH environment variable, then "config.yml".
    """

    yaml_path: Optional[str] = None
    env_prefix: str = "KNOT__"
    dotenv_path: Optional[str] = ".env"
