"""Event loop fanning watcher and keyboard events into the supervisor."""

import logging
import queue
import time
from typing import Optional, TYPE_CHECKING

from .commands import RELOAD

if TYPE_CHECKING:
    from ..supervisor.runner import FlutterSupervisor

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.01


class EventLoop:
    """
    Multiplexes the watcher and keyboard queues onto the supervisor.

    PATTERN: Non-blocking poll of both queues, then a short sleep
    CRITICAL: Watcher first, keyboard second in every iteration. At most
    one event is taken from each queue per iteration.
    """

    def __init__(
        self,
        supervisor: "FlutterSupervisor",
        file_events: queue.Queue,
        key_events: queue.Queue,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ):
        """
        Initialize loop.

        Args:
            supervisor: Owner of the flutter child
            file_events: Changed source paths from the watcher
            key_events: KeyInput commands from the keyboard reader
            poll_interval: Sleep between iterations, in seconds
        """
        self.supervisor = supervisor
        self.file_events = file_events
        self.key_events = key_events
        self.poll_interval = poll_interval

    def run_once(self) -> bool:
        """
        Run one iteration without sleeping.

        Returns:
            True if any event was taken from a queue

        Raises:
            ChildInputError: If writing to the child fails
        """
        handled = False

        try:
            path = self.file_events.get_nowait()
        except queue.Empty:
            pass
        else:
            handled = True
            if self.supervisor.dispatch(RELOAD):
                logger.info(f"Hot reload triggered by {path}")

        try:
            command = self.key_events.get_nowait()
        except queue.Empty:
            pass
        else:
            handled = True
            self.supervisor.dispatch(command)

        return handled

    def run(self, max_iterations: Optional[int] = None) -> Optional[int]:
        """
        Loop until the child exits.

        Args:
            max_iterations: Stop after this many iterations (for tests)

        Returns:
            The child's exit status, or None if max_iterations was reached

        Raises:
            ChildInputError: If writing to the child fails
        """
        iterations = 0

        while max_iterations is None or iterations < max_iterations:
            returncode = self.supervisor.poll()
            if returncode is not None:
                logger.info(f"flutter exited with status {returncode}")
                return returncode

            self.run_once()
            iterations += 1
            time.sleep(self.poll_interval)

        return None
