"""Configuration helpers for wired-library."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .paths import normalise_path, user_config_dir

APP_DIR_NAME = "wired"
CONFIG_FILE_NAME = "config.yaml"


class AppConfig(BaseModel):
    """Application level configuration."""

    music_library_path: Optional[Path] = None
    cache_path: Optional[Path] = None
    workers_per_core: int = Field(default=4, ge=1)
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @field_validator("music_library_path", "cache_path", "log_file", mode="before")
    @classmethod
    def _expand(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        return normalise_path(Path(value))

    @field_validator("log_level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


def default_config_path() -> Path:
    return user_config_dir() / APP_DIR_NAME / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from a YAML file; a missing file yields defaults."""

    path = path or default_config_path()
    data: Dict[str, Any] = {}
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return AppConfig(**data)

