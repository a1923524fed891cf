"""Background file system watcher for a Flutter project."""

import logging
import os
import queue
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver
from watchdog.observers.polling import PollingObserver

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = "dart"

# Fallback polling period when native notifications are unavailable
POLL_INTERVAL_SECONDS = 1.0

# Event types that mean the file changed; opened / closed_no_write are reads
CHANGE_EVENT_TYPES = frozenset({"created", "modified", "moved", "deleted", "closed"})


def is_source_change(event: FileSystemEvent, extension: str = SOURCE_EXTENSION) -> bool:
    """
    Decide whether an event should trigger a reload.

    Only the event's first path (src_path) is inspected; one reload per
    event is enough however many files it covers.

    Args:
        event: watchdog event
        extension: Source extension without the dot

    Returns:
        True if the first path has exactly the given extension
    """
    if event.event_type not in CHANGE_EVENT_TYPES:
        return False

    src_path = event.src_path
    if not src_path:
        return False

    suffix = Path(os.fsdecode(src_path)).suffix
    return suffix == f".{extension}"


class ReloadEventHandler(FileSystemEventHandler):
    """
    watchdog handler that enqueues reload requests.

    CRITICAL: Runs on the observer's thread - only enqueue, never touch
    the supervisor.
    """

    def __init__(self, sink: queue.Queue, extension: str = SOURCE_EXTENSION):
        super().__init__()
        self.sink = sink
        self.extension = extension

    def on_any_event(self, event: FileSystemEvent) -> None:
        if not is_source_change(event, self.extension):
            logger.debug(f"Ignored {event.event_type} event: {event.src_path!r}")
            return

        path = os.fsdecode(event.src_path)
        logger.debug(f"Source change: {path}")
        self.sink.put(path)


class FlutterProjectWatcher:
    """
    Recursive watcher over a Flutter project directory.

    PATTERN: Native notifications first, polling observer as fallback
    GOTCHA: A watcher that fails to start is not fatal - typing `r`
    still reloads.
    """

    def __init__(
        self,
        root_path: str | Path,
        sink: queue.Queue,
        extension: str = SOURCE_EXTENSION,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ):
        """
        Initialize watcher.

        Args:
            root_path: Directory to watch recursively
            sink: Queue receiving changed source paths
            extension: Source extension without the dot
            poll_interval: Period of the polling fallback, in seconds
        """
        self.root_path = Path(root_path).resolve()
        self.sink = sink
        self.extension = extension
        self.poll_interval = poll_interval

        self._handler = ReloadEventHandler(sink, extension)
        self._observer: Optional[BaseObserver] = None
        self._polling = False

    @property
    def is_running(self) -> bool:
        """Check if watcher is running."""
        return self._observer is not None

    @property
    def is_polling(self) -> bool:
        """Check if the polling fallback is in use."""
        return self._polling

    def start(self) -> bool:
        """
        Start watching for file changes.

        Returns:
            True if started successfully
        """
        if self._observer is not None:
            logger.warning("Watcher already running")
            return True

        try:
            self._observer = self._start_observer(Observer(timeout=self.poll_interval))
            self._polling = False
        except OSError as e:
            logger.info(f"Native file watching unavailable ({e}), falling back to polling")
            try:
                self._observer = self._start_observer(
                    PollingObserver(timeout=self.poll_interval)
                )
                self._polling = True
            except OSError as e:
                logger.warning(f"Failed to start watcher: {e}. Type 'r' to reload manually.")
                return False

        logger.info(f"Started watching: {self.root_path}")
        return True

    def _start_observer(self, observer: BaseObserver) -> BaseObserver:
        observer.schedule(self._handler, str(self.root_path), recursive=True)
        try:
            observer.start()
        except OSError:
            observer.unschedule_all()
            raise
        return observer

    def stop(self) -> None:
        """Stop watching."""
        if self._observer is None:
            return

        observer = self._observer
        self._observer = None
        observer.stop()
        observer.join(timeout=5)

        logger.info("Stopped watching")

    def get_status(self) -> dict:
        """Get watcher status."""
        return {
            "running": self.is_running,
            "polling": self._polling,
            "root_path": str(self.root_path),
            "extension": self.extension,
            "pending_changes": self.sink.qsize(),
        }

    def __enter__(self) -> "FlutterProjectWatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
