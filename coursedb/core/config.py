"""
Typed configuration for course checks.

A config file is optional; every field has a default so the CLI works with
just a course directory argument.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_ENV_VAR = "COURSEDB_CONFIG"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SyncConfig(BaseModel):
    """Settings shared by the loader front ends."""

    model_config = ConfigDict(extra="forbid")

    course_dir: Optional[Path] = Field(default=None, description="Course root to scan when none is given on the command line.")
    log_level: LogLevel = "INFO"
    fail_on_warning: bool = Field(default=False, description="Treat warnings as failures.")
    show_warnings: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("course_dir", mode="before")
    @classmethod
    def coerce_path(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return Path(value).expanduser()


def read_yaml_file(path: Path) -> Dict[str, Any]:
    """Load a YAML file and return a dictionary."""
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at root of {path}, received {type(data)}")
    return data


def load_sync_config(path: Path) -> SyncConfig:
    """Load a config file, resolving ``course_dir`` against the file's directory."""
    path = path.expanduser().resolve()
    data = read_yaml_file(path)
    course_dir = data.get("course_dir")
    if course_dir:
        candidate = Path(course_dir).expanduser()
        if not candidate.is_absolute():
            candidate = path.parent / candidate
        data["course_dir"] = str(candidate.resolve())
    try:
        return SyncConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid coursedb config in {path}") from exc


def resolve_sync_config(path: Path | None = None) -> SyncConfig:
    """Return the config at ``path``, else ``$COURSEDB_CONFIG``, else defaults."""
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
    if path is None:
        return SyncConfig()
    return load_sync_config(path)


__all__ = [
    "CONFIG_ENV_VAR",
    "SyncConfig",
    "load_sync_config",
    "read_yaml_file",
    "resolve_sync_config",
]
