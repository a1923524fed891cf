"""Terminal input handling."""

from .keyboard import KeyboardReader, terminal_mode

__all__ = [
    "KeyboardReader",
    "terminal_mode",
]
