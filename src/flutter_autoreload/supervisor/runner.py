"""Flutter child process supervisor."""

import logging
import subprocess
import threading
import time
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING

from .debouncer import ReloadDebouncer
from ..config.reloader_config import BuildMode, ReloaderConfig
from ..core.commands import Command, KeyInput, Reload
from ..exceptions import ChildInputError, SpawnError

if TYPE_CHECKING:
    from ..cli.output.renderer import OutputRenderer

logger = logging.getLogger(__name__)

FLUTTER_EXECUTABLE = "flutter"
RELOAD_SEQUENCE = b"r\n"

# How long close() waits for the killed child to be reaped
REAP_TIMEOUT_SECONDS = 5.0


def build_command(
    config: ReloaderConfig,
    executable: str = FLUTTER_EXECUTABLE,
) -> List[str]:
    """
    Assemble the `flutter run` argument vector.

    Order: run, --device-id, --flavor, --release xor --profile,
    then the pass-through arguments.

    Args:
        config: Reloader configuration
        executable: Flutter CLI name or path

    Returns:
        Argument list for subprocess
    """
    command = [executable, "run"]

    if config.device_id:
        command.extend(["--device-id", config.device_id])

    if config.flavor:
        command.extend(["--flavor", config.flavor])

    if config.build_mode == BuildMode.RELEASE:
        command.append("--release")
    elif config.build_mode == BuildMode.PROFILE:
        command.append("--profile")

    command.extend(config.flutter_args)
    return command


class FlutterSupervisor:
    """
    Owns the flutter child process and the only handle to its stdin.

    PATTERN: Scoped acquisition - use as a context manager so the child
    is killed on every exit path.
    CRITICAL: All writes to the child go through dispatch().
    """

    def __init__(
        self,
        process: subprocess.Popen,
        debounce_seconds: float = 1.0,
        renderer: Optional["OutputRenderer"] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Wrap an already running child.

        Args:
            process: Child started with stdin=PIPE
            debounce_seconds: Minimum time between two hot reloads
            renderer: Output renderer for the reload notice
            clock: Monotonic clock returning seconds
        """
        if process.stdin is None:
            raise ValueError("Child process must be started with stdin=PIPE")

        self.process = process
        self.renderer = renderer
        self._stdin = process.stdin
        self._debouncer = ReloadDebouncer(debounce_seconds, clock=clock)
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def spawn(
        cls,
        config: ReloaderConfig,
        renderer: Optional["OutputRenderer"] = None,
        command: Optional[Sequence[str]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "FlutterSupervisor":
        """
        Start `flutter run` in the project directory.

        stdout and stderr are inherited so the child's UI reaches the
        terminal unchanged; stdin is a pipe owned by the supervisor.

        Args:
            config: Reloader configuration
            renderer: Output renderer for the reload notice
            command: Argument vector override (defaults to build_command)
            clock: Monotonic clock returning seconds

        Returns:
            Running supervisor

        Raises:
            SpawnError: If the child cannot be launched
        """
        argv = list(command) if command is not None else build_command(config)

        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=None,
                stderr=None,
                cwd=str(config.project_path),
            )
        except OSError as e:
            raise SpawnError(f"Failed to start {argv[0]!r}: {e}") from e

        logger.info(f"Spawned {' '.join(argv)} (pid {process.pid})")
        return cls(
            process,
            debounce_seconds=config.debounce_seconds,
            renderer=renderer,
            clock=clock,
        )

    @property
    def pid(self) -> int:
        """Child process id."""
        return self.process.pid

    @property
    def last_reload(self) -> float:
        """Clock reading of the last dispatched reload (or of spawn)."""
        return self._debouncer.last_reload

    @property
    def returncode(self) -> Optional[int]:
        """Child exit status, None while it is running."""
        return self.process.returncode

    def poll(self) -> Optional[int]:
        """Check whether the child has exited."""
        return self.process.poll()

    def dispatch(self, command: Command) -> bool:
        """
        Send a command to the child.

        Reload writes `r\\n` unless suppressed by the debounce window;
        KeyInput writes its byte verbatim and is never debounced.

        Args:
            command: Reload or KeyInput

        Returns:
            True if bytes were written, False if a reload was suppressed

        Raises:
            ChildInputError: If writing to the child fails
        """
        with self._lock:
            if isinstance(command, Reload):
                return self._dispatch_reload()
            if isinstance(command, KeyInput):
                self._write(command.to_bytes())
                return True
            raise TypeError(f"Unknown command: {command!r}")

    def _dispatch_reload(self) -> bool:
        now = self._debouncer.check()
        if now is None:
            return False

        if self.renderer:
            self.renderer.render_reload_notice()
        self._write(RELOAD_SEQUENCE)
        self._debouncer.record(now)
        logger.debug("Hot reload dispatched")
        return True

    def _write(self, data: bytes) -> None:
        """Write and flush; the child reads stdin as a control channel."""
        try:
            self._stdin.write(data)
            self._stdin.flush()
        except (OSError, ValueError) as e:
            # ValueError: the pipe was already closed on our side
            raise ChildInputError(f"Failed to write to flutter process: {e}") from e

    def close(self) -> None:
        """
        Kill the child and release the pipe.

        Best effort: errors are logged and swallowed. Safe to call twice.
        """
        if self._closed:
            return
        self._closed = True

        try:
            self.process.kill()
        except OSError as e:
            logger.debug(f"Kill failed for pid {self.process.pid}: {e}")

        try:
            self._stdin.close()
        except OSError as e:
            logger.debug(f"Closing child stdin failed: {e}")

        try:
            self.process.wait(timeout=REAP_TIMEOUT_SECONDS)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"Reaping pid {self.process.pid} failed: {e}")

    def __enter__(self) -> "FlutterSupervisor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self):
        # Last resort when the supervisor was not used as a context manager
        if not getattr(self, "_closed", True):
            self.close()
