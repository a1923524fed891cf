"""Main CLI application entry point."""

import logging
import queue
import signal
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError

from .. import __version__
from ..config.reloader_config import ReloaderConfig, load_config, validate_project
from ..core.event_loop import EventLoop
from ..exceptions import AutoReloadError, ChildInputError, ProjectNotFoundError, SpawnError
from ..input.keyboard import KeyboardReader, terminal_mode
from ..supervisor.runner import FlutterSupervisor
from ..watcher.file_watcher import FlutterProjectWatcher
from .output.renderer import OutputRenderer

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
EXIT_TERMINATED = 143

PASSTHROUGH_KEY = "flutter_args"


class PassthroughCommand(click.Command):
    """Command that keeps everything after `--` away from click's parser."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if "--" in args:
            index = args.index("--")
            ctx.meta[PASSTHROUGH_KEY] = tuple(args[index + 1 :])
            args = args[:index]
        return super().parse_args(ctx, args)


def _handle_sigterm(signum, frame) -> None:
    # Unwind through the supervisor's with-block so the child is killed
    raise SystemExit(EXIT_TERMINATED)


def run_reloader(
    config: ReloaderConfig,
    renderer: Optional[OutputRenderer] = None,
) -> int:
    """
    Run flutter with auto-reload until it exits.

    Args:
        config: Reloader configuration
        renderer: Output renderer (creates new if not provided)

    Returns:
        Exit code for the tool

    Raises:
        ProjectNotFoundError: If the project has no pubspec.yaml
        SpawnError: If flutter cannot be launched
        ChildInputError: If writing to flutter fails
    """
    renderer = renderer or OutputRenderer(config)

    validate_project(config.project_path)
    renderer.render_banner(config)

    file_events: queue.Queue = queue.Queue()
    key_events: queue.Queue = queue.Queue()

    previous_handler = _install_sigterm_handler()
    try:
        with FlutterSupervisor.spawn(config, renderer=renderer) as supervisor:
            watcher = FlutterProjectWatcher(config.project_path, file_events)
            if not watcher.start():
                renderer.render_warning(
                    "⚠️  File watching unavailable, type 'r' to hot reload manually"
                )

            renderer.render_watch_notice()

            try:
                with terminal_mode(config.raw_terminal):
                    KeyboardReader(key_events).start()
                    loop = EventLoop(supervisor, file_events, key_events)
                    returncode = loop.run()
            finally:
                watcher.stop()
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)

    if returncode is None:
        return 0
    if returncode < 0:
        # Killed by a signal: report it the way a shell would
        return 128 - returncode
    return returncode


def _describe_validation_error(error: ValidationError) -> str:
    """Condense a pydantic error to a single line."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "config"
    return f"{field}: {first['msg']}"


def _install_sigterm_handler():
    """Route SIGTERM through SystemExit; returns the handler it replaced."""
    if sys.platform == "win32":
        return None
    try:
        return signal.signal(signal.SIGTERM, _handle_sigterm)
    except ValueError:
        # Not on the main thread
        return None


@click.command(cls=PassthroughCommand)
@click.argument(
    "project_path",
    required=False,
    default=".",
    type=click.Path(path_type=Path),
)
@click.option(
    "--debounce", "debounce_ms",
    type=click.IntRange(min=0),
    help="Debounce duration in milliseconds  [default: 1000]",
)
@click.option(
    "-d", "--device-id",
    help="Device ID to run on",
)
@click.option(
    "-f", "--flavor",
    help="Flutter flavor to use",
)
@click.option(
    "-r", "--release",
    is_flag=True,
    help="Release mode",
)
@click.option(
    "--profile",
    is_flag=True,
    help="Profile mode",
)
@click.option(
    "--no-raw", "no_raw",
    is_flag=True,
    help="Leave the terminal in line mode (keys are sent after Enter)",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    help="Config file path",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.version_option(__version__, prog_name="flutter-autoreload")
@click.pass_context
def main(
    ctx: click.Context,
    project_path: Path,
    debounce_ms: Optional[int],
    device_id: Optional[str],
    flavor: Optional[str],
    release: bool,
    profile: bool,
    no_raw: bool,
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """
    Auto-reload Flutter on file changes.

    Runs `flutter run` in PROJECT_PATH and sends a hot reload whenever a
    .dart file changes. Keys typed in the terminal go straight to flutter.

    Start in the current directory:
        flutter-autoreload

    Pick a device and flavor:
        flutter-autoreload ./app -d emulator-5554 -f dev

    Pass extra arguments to flutter run:
        flutter-autoreload -- --dart-define=API=staging
    """
    # Configure logging
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Suppress noisy loggers in non-verbose mode
    if not verbose:
        logging.getLogger("watchdog").setLevel(logging.WARNING)

    flutter_args: Tuple[str, ...] = ctx.meta.get(PASSTHROUGH_KEY, ())

    try:
        config = load_config(
            project_path,
            config_path,
            device_id=device_id,
            flavor=flavor,
            release=release,
            profile=profile,
            debounce_ms=debounce_ms,
            flutter_args=flutter_args,
            raw_terminal=False if no_raw else None,
        )
    except ValidationError as e:
        click.echo(f"Error: invalid configuration: {_describe_validation_error(e)}", err=True)
        sys.exit(EXIT_FAILURE)
    except ValueError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(EXIT_FAILURE)

    try:
        exit_code = run_reloader(config)
    except ProjectNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILURE)
    except (SpawnError, ChildInputError) as e:
        if verbose:
            logger.exception("Reloader error")
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        sys.exit(EXIT_INTERRUPTED)
    except AutoReloadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILURE)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
