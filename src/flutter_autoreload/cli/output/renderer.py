"""Rich output rendering for the reloader."""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.traceback import Traceback

from .themes import get_theme
from ...config.reloader_config import BuildMode, ReloaderConfig

logger = logging.getLogger(__name__)


class OutputRenderer:
    """
    Rich output renderer for the reloader.

    Handles the startup banner, watch notices, reload notices and errors.
    The child's own output goes straight to the terminal, never through here.
    """

    def __init__(
        self,
        config: Optional[ReloaderConfig] = None,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        """
        Initialize output renderer.

        Args:
            config: Reloader configuration
            console: Rich console for stdout (creates new if not provided)
            error_console: Rich console for stderr (creates new if not provided)
        """
        self.config = config or ReloaderConfig()
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self.theme = get_theme(self.config.theme)

    def _print(self, message: str, style: str) -> None:
        self.console.print(f"[{style}]{message}[/{style}]")

    def render_banner(self, config: Optional[ReloaderConfig] = None) -> None:
        """
        Render the startup banner.

        Args:
            config: Configuration to describe (defaults to the renderer's)
        """
        config = config or self.config

        self._print("🚀 Starting Flutter run with auto-reload...", self.theme.banner_color)
        self.render_info(f"📁 Project path: {escape(str(config.project_path))}")

        if config.device_id:
            self.render_info(f"📱 Device ID: {escape(config.device_id)}")
        if config.flavor:
            self.render_info(f"🔧 Flavor: {escape(config.flavor)}")
        if config.build_mode != BuildMode.DEBUG:
            self.render_info(f"🏗  Build mode: {config.build_mode.value}")
        if config.flutter_args:
            self.render_info(f"⚙️  Additional args: {escape(' '.join(config.flutter_args))}")

    def render_watch_notice(self) -> None:
        """Render the lines announcing that watch mode is active."""
        self.render_success("✨ Auto-reload is now active. Watching for changes...")
        self.render_dim(
            "💡 You can use all Flutter commands (r = reload, R = restart, h = help)"
        )

    def render_reload_notice(self) -> None:
        """Render the notice printed for each dispatched hot reload."""
        self.console.print()
        self._print("🔄 Change detected, triggering hot reload...", self.theme.reload_color)

    def render_error(self, error: Exception | str) -> None:
        """
        Render an error message on stderr.

        Args:
            error: Exception or error message
        """
        color = self.theme.error_color
        self.error_console.print(f"[{color}]Error: {escape(str(error))}[/{color}]")

        # Show traceback in debug mode
        if isinstance(error, Exception) and logger.isEnabledFor(logging.DEBUG):
            if error.__traceback__ is not None:
                self.error_console.print(
                    Traceback.from_exception(type(error), error, error.__traceback__)
                )

    def render_warning(self, message: str) -> None:
        """Render a warning message."""
        self._print(message, self.theme.warning_color)

    def render_success(self, message: str) -> None:
        """Render a success message."""
        self._print(message, self.theme.success_color)

    def render_info(self, message: str) -> None:
        """Render an info message."""
        self._print(message, self.theme.info_color)

    def render_dim(self, message: str) -> None:
        """Render a dimmed message."""
        self._print(message, self.theme.dim_color)
