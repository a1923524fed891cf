"""File watcher turning Dart source changes into reload requests."""

from .file_watcher import FlutterProjectWatcher, ReloadEventHandler, is_source_change

__all__ = [
    "FlutterProjectWatcher",
    "ReloadEventHandler",
    "is_source_change",
]
