"""Flutter child process supervision."""

from .runner import FlutterSupervisor, build_command, FLUTTER_EXECUTABLE, RELOAD_SEQUENCE
from .debouncer import ReloadDebouncer

__all__ = [
    "FlutterSupervisor",
    "build_command",
    "FLUTTER_EXECUTABLE",
    "RELOAD_SEQUENCE",
    "ReloadDebouncer",
]
