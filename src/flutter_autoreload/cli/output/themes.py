"""Color themes for reloader output."""

from dataclasses import dataclass
from typing import Dict


@dataclass
class Theme:
    """Color theme definition."""

    name: str

    # Banner and notices
    banner_color: str
    info_color: str
    success_color: str
    reload_color: str
    warning_color: str
    error_color: str

    # Status
    dim_color: str
    highlight_color: str


# Available themes
THEMES: Dict[str, Theme] = {
    "monokai": Theme(
        name="monokai",
        banner_color="bold cyan",
        info_color="cyan",
        success_color="green",
        reload_color="bold magenta",
        warning_color="yellow",
        error_color="red",
        dim_color="dim",
        highlight_color="bold white",
    ),
    "light": Theme(
        name="light",
        banner_color="bold dark_blue",
        info_color="blue",
        success_color="green",
        reload_color="dark_magenta",
        warning_color="dark_orange",
        error_color="red",
        dim_color="grey50",
        highlight_color="black",
    ),
    # No colors at all, for terminals that mangle escape codes
    "plain": Theme(
        name="plain",
        banner_color="none",
        info_color="none",
        success_color="none",
        reload_color="none",
        warning_color="none",
        error_color="none",
        dim_color="none",
        highlight_color="none",
    ),
}


def get_theme(name: str) -> Theme:
    """
    Get a theme by name.

    Args:
        name: Theme name

    Returns:
        Theme instance (falls back to monokai if not found)
    """
    return THEMES.get(name.lower(), THEMES["monokai"])


def list_themes() -> list[str]:
    """List available theme names."""
    return list(THEMES.keys())
