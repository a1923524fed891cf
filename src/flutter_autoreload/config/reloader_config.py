"""Reloader configuration management."""

import os
import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, Tuple

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, Field

from ..exceptions import ProjectNotFoundError

logger = logging.getLogger(__name__)

CONFIG_DIR = ".flutter-autoreload"
CONFIG_FILE = "config.yaml"
CONFIG_SECTION = "reloader"
ENV_PREFIX = "FLUTTER_AUTORELOAD_"
MANIFEST_FILE = "pubspec.yaml"


class BuildMode(str, Enum):
    """Flutter build modes."""

    DEBUG = "debug"
    PROFILE = "profile"
    RELEASE = "release"


class ReloaderConfig(BaseModel):
    """
    Reloader configuration model.

    CRITICAL: Built once at startup, never mutated afterwards.
    """

    project_path: Path = Field(default=Path("."), description="Flutter project directory")
    device_id: Optional[str] = Field(default=None, description="Device to run on")
    flavor: Optional[str] = Field(default=None, description="Build flavor")
    build_mode: BuildMode = Field(default=BuildMode.DEBUG, description="Build mode")
    debounce_ms: int = Field(
        default=1000,
        ge=0,
        description="Minimum milliseconds between two hot reloads",
    )
    flutter_args: Tuple[str, ...] = Field(
        default=(),
        description="Extra arguments passed to `flutter run`",
    )

    # Terminal and display
    raw_terminal: bool = Field(default=True, description="Forward single keystrokes")
    theme: str = Field(default="monokai", description="Color theme")

    class Config:
        """Pydantic configuration."""

        frozen = True
        extra = "ignore"  # Unknown keys in config files are ignored

    @property
    def debounce_seconds(self) -> float:
        """Debounce interval in seconds."""
        return self.debounce_ms / 1000

    @property
    def manifest_path(self) -> Path:
        """Path of the project's pubspec.yaml."""
        return self.project_path / MANIFEST_FILE


def resolve_build_mode(release: bool = False, profile: bool = False) -> BuildMode:
    """
    Pick the build mode from the release/profile flags.

    Release wins when both are set.
    """
    if release:
        return BuildMode.RELEASE
    if profile:
        return BuildMode.PROFILE
    return BuildMode.DEBUG


def validate_project(project_path: Path) -> Path:
    """
    Check that the directory looks like a Flutter project.

    Args:
        project_path: Project directory

    Returns:
        Path to the manifest

    Raises:
        ProjectNotFoundError: If pubspec.yaml is missing
    """
    manifest = Path(project_path) / MANIFEST_FILE
    if not manifest.exists():
        raise ProjectNotFoundError(
            f"Not a valid Flutter project directory: {manifest} not found"
        )
    return manifest


def get_config_paths(project_path: Path) -> list[Path]:
    """
    Get configuration file paths in priority order.

    Returns:
        List of paths, highest priority last
    """
    return [
        Path.home() / CONFIG_DIR / CONFIG_FILE,
        Path(project_path) / CONFIG_DIR / CONFIG_FILE,
    ]


def _load_yaml_settings(path: Path) -> Dict[str, Any]:
    """Read one YAML config file, returning {} when it cannot be used."""
    try:
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")
        return {}

    if not isinstance(file_config, dict):
        logger.warning(f"Ignoring config {path}: expected a mapping")
        return {}

    # Only merge the 'reloader' section if present, otherwise use whole file
    if CONFIG_SECTION in file_config:
        section = file_config[CONFIG_SECTION] or {}
        return dict(section) if isinstance(section, dict) else {}
    return file_config


def _as_flag(value: Any) -> bool:
    """Read a boolean flag from YAML (bool) or the environment (str)."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _get_env_overrides(environ: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """
    Get configuration overrides from environment-style variables.

    Variables are prefixed with FLUTTER_AUTORELOAD_, e.g.
    FLUTTER_AUTORELOAD_DEBOUNCE_MS=500 -> debounce_ms="500". Values stay
    strings; the model parses numbers and booleans.

    Returns:
        Dictionary of overrides
    """
    overrides: Dict[str, Any] = {}

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX) or value is None:
            continue
        config_key = key[len(ENV_PREFIX) :].lower()
        overrides[config_key] = value

    return overrides


def _normalize_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Fold release/profile flags into build_mode and tuple-ize args."""
    settings = dict(settings)

    release = _as_flag(settings.pop("release", False))
    profile = _as_flag(settings.pop("profile", False))
    if release or profile:
        settings["build_mode"] = resolve_build_mode(release, profile)

    # Device ids and flavors may look numeric in YAML
    for key in ("device_id", "flavor"):
        if settings.get(key) is not None:
            settings[key] = str(settings[key])

    args = settings.get("flutter_args")
    if isinstance(args, str):
        settings["flutter_args"] = tuple(args.split())
    elif args is not None:
        settings["flutter_args"] = tuple(str(a) for a in args)

    return settings


def load_settings(
    project_path: Path,
    config_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load raw settings from files and the environment.

    Settings are merged in this order (later overrides earlier):
    1. Global config (~/.flutter-autoreload/config.yaml)
    2. Project config (<project>/.flutter-autoreload/config.yaml)
    3. Explicit config_path if provided
    4. <project>/.env (FLUTTER_AUTORELOAD_* keys only)
    5. Process environment (FLUTTER_AUTORELOAD_* keys only)

    Args:
        project_path: Flutter project directory
        config_path: Optional explicit config file path

    Returns:
        Merged settings dictionary
    """
    merged: Dict[str, Any] = {}

    config_paths = get_config_paths(project_path)
    if config_path:
        config_paths.append(Path(config_path))

    for path in config_paths:
        if path.exists():
            merged.update(_normalize_settings(_load_yaml_settings(path)))
            logger.debug(f"Loaded config from {path}")

    # .env values are read, never exported into the child's environment
    env_file = Path(project_path) / ".env"
    if env_file.exists():
        merged.update(_normalize_settings(_get_env_overrides(dotenv_values(env_file))))

    merged.update(_normalize_settings(_get_env_overrides(dict(os.environ))))

    return merged


def load_config(
    project_path: Path = Path("."),
    config_path: Optional[str] = None,
    **overrides: Any,
) -> ReloaderConfig:
    """
    Build the immutable configuration for one run.

    Keyword overrides (command-line options) win over every file and
    environment source; None values and False flags count as "not given".

    Args:
        project_path: Flutter project directory
        config_path: Optional explicit config file path
        **overrides: device_id, flavor, release, profile, debounce_ms,
            flutter_args, raw_terminal, theme

    Returns:
        ReloaderConfig instance
    """
    settings = load_settings(project_path, config_path)

    given = {
        key: value
        for key, value in overrides.items()
        if value is not None and value is not False and value != ()
    }
    # An explicit --no-raw still has to reach the model
    if overrides.get("raw_terminal") is False:
        given["raw_terminal"] = False

    settings.update(_normalize_settings(given))
    settings["project_path"] = Path(project_path)

    return ReloaderConfig(**settings)
