"""Terminal output rendering."""

from .renderer import OutputRenderer
from .themes import Theme, get_theme, list_themes

__all__ = [
    "OutputRenderer",
    "Theme",
    "get_theme",
    "list_themes",
]
