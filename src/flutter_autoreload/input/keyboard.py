"""Terminal keyboard forwarding."""

import logging
import queue
import sys
import threading
import time
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from ..core.commands import KeyInput

logger = logging.getLogger(__name__)

# Pause after a failed read so a dead terminal does not spin the thread
READ_ERROR_BACKOFF_SECONDS = 0.05

# Platform-specific imports
if sys.platform != "win32":
    import termios
    import tty


class KeyboardReader:
    """
    Reads the terminal one byte at a time and enqueues KeyInput commands.

    PATTERN: Blocking reads on a dedicated daemon thread
    CRITICAL: Bytes are forwarded uninterpreted - flutter owns the key
    bindings (r, R, h, q, ...).
    """

    def __init__(self, sink: queue.Queue, stream: Optional[BinaryIO] = None):
        """
        Initialize reader.

        Args:
            sink: Queue receiving KeyInput commands
            stream: Binary stream to read (defaults to stdin)
        """
        self.sink = sink
        self.stream = stream
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        """Check if the reader thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the reader thread. It lives until the process exits."""
        if self.is_running:
            return

        self._thread = threading.Thread(
            target=self._read_loop,
            name="keyboard-reader",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the reader to hit end of input."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _read_loop(self) -> None:
        stream = self.stream if self.stream is not None else sys.stdin.buffer

        while True:
            try:
                data = stream.read(1)
            except OSError as e:
                logger.debug(f"Skipping unreadable key input: {e}")
                time.sleep(READ_ERROR_BACKOFF_SECONDS)
                continue
            except ValueError:
                logger.debug("Input stream closed, keyboard reader stopping")
                return

            if not data:
                logger.debug("End of input, keyboard reader stopping")
                return

            self.sink.put(KeyInput(data[0]))


@contextmanager
def terminal_mode(enabled: bool = True, stream=None) -> Iterator[bool]:
    """
    Put the terminal in cbreak mode for the duration of the block.

    Keystrokes are delivered one at a time without echo; Ctrl+C still
    raises SIGINT. The previous settings are restored on exit.

    Args:
        enabled: Switch modes at all
        stream: Terminal stream (defaults to stdin)

    Yields:
        True if the terminal mode was changed
    """
    stream = stream if stream is not None else sys.stdin

    if not enabled or sys.platform == "win32" or not _isatty(stream):
        yield False
        return

    fd = stream.fileno()
    try:
        saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)
    except termios.error as e:
        logger.debug(f"Could not switch terminal to cbreak mode: {e}")
        yield False
        return

    try:
        yield True
    finally:
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        except termios.error as e:
            logger.warning(f"Could not restore terminal settings: {e}")


def _isatty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False
