"""Tests for reloader output rendering."""

import pytest
from rich.console import Console

from flutter_autoreload.cli.output.renderer import OutputRenderer
from flutter_autoreload.cli.output.themes import get_theme, list_themes
from flutter_autoreload.config.reloader_config import BuildMode, ReloaderConfig


@pytest.fixture
def console():
    """Create recording console."""
    return Console(record=True, width=120, force_terminal=False)


@pytest.fixture
def error_console():
    """Create recording stderr console."""
    return Console(record=True, width=120, force_terminal=False)


def make_renderer(config, console, error_console) -> OutputRenderer:
    return OutputRenderer(config, console=console, error_console=error_console)


class TestThemes:
    """Tests for theme lookup."""

    def test_known_theme(self):
        assert get_theme("light").name == "light"

    def test_unknown_theme_falls_back(self):
        assert get_theme("does-not-exist").name == "monokai"

    def test_list_themes(self):
        assert {"monokai", "light", "plain"} <= set(list_themes())


class TestBanner:
    """Tests for the startup banner."""

    def test_minimal_banner(self, console, error_console):
        """Test banner for a plain debug run."""
        config = ReloaderConfig(project_path="/work/app")
        make_renderer(config, console, error_console).render_banner()

        text = console.export_text()
        assert "Starting Flutter run with auto-reload" in text
        assert "Project path: /work/app" in text
        assert "Device ID" not in text
        assert "Flavor" not in text
        assert "Additional args" not in text

    def test_full_banner(self, console, error_console):
        """Test device, flavor, mode and pass-through args are listed."""
        config = ReloaderConfig(
            project_path="/work/app",
            device_id="emulator-5554",
            flavor="dev",
            build_mode=BuildMode.PROFILE,
            flutter_args=("--dart-define=A=1", "--verbose"),
        )
        make_renderer(config, console, error_console).render_banner()

        text = console.export_text()
        assert "Device ID: emulator-5554" in text
        assert "Flavor: dev" in text
        assert "Build mode: profile" in text
        assert "Additional args: --dart-define=A=1 --verbose" in text

    def test_user_text_is_not_markup(self, console, error_console):
        """Test brackets in user values are printed literally."""
        config = ReloaderConfig(project_path="/work/[bold]app", flavor="[red]x")
        make_renderer(config, console, error_console).render_banner()

        text = console.export_text()
        assert "/work/[bold]app" in text
        assert "Flavor: [red]x" in text


class TestNotices:
    """Tests for watch, reload and error notices."""

    def test_watch_notice(self, console, error_console):
        make_renderer(ReloaderConfig(), console, error_console).render_watch_notice()

        text = console.export_text()
        assert "Auto-reload is now active" in text
        assert "r = reload, R = restart, h = help" in text

    def test_reload_notice(self, console, error_console):
        make_renderer(ReloaderConfig(), console, error_console).render_reload_notice()

        assert "Change detected, triggering hot reload..." in console.export_text()

    def test_error_goes_to_error_console(self, console, error_console):
        make_renderer(ReloaderConfig(), console, error_console).render_error(
            RuntimeError("pipe closed")
        )

        assert "Error: pipe closed" in error_console.export_text()
        assert console.export_text() == ""
