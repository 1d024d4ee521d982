"""Utility helpers shared across the wired-library codebase."""

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .paths import normalise_path, user_cache_dir, user_config_dir
from .parallel import run_in_executor

__all__ = [
    "AppConfig",
    "load_config",
    "configure_logging",
    "get_logger",
    "normalise_path",
    "user_cache_dir",
    "user_config_dir",
    "run_in_executor",
]
