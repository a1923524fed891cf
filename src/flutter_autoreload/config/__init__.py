"""Reloader configuration."""

from .reloader_config import (
    BuildMode,
    ReloaderConfig,
    load_config,
    load_settings,
    resolve_build_mode,
    validate_project,
    get_config_paths,
)

__all__ = [
    "BuildMode",
    "ReloaderConfig",
    "load_config",
    "load_settings",
    "resolve_build_mode",
    "validate_project",
    "get_config_paths",
]
