"""Command types and the event loop that dispatches them."""

from .commands import Command, KeyInput, Reload, RELOAD
from .event_loop import EventLoop

__all__ = [
    "Command",
    "KeyInput",
    "Reload",
    "RELOAD",
    "EventLoop",
]
