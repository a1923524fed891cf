"""
Flutter Auto-Reload CLI - command-line entry point.

This package provides the `flutter-autoreload` command with:
- Option parsing and pass-through of arguments after `--`
- Layered configuration (YAML files, .env, environment, options)
- Rich startup banner and reload notices
"""

from .app import main, run_reloader
from .output import OutputRenderer

__all__ = [
    # Entry points
    "main",
    "run_reloader",
    # Output
    "OutputRenderer",
]
