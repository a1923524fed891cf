"""Commands dispatched to the flutter child process."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Reload:
    """Request a hot reload (debounced)."""


@dataclass(frozen=True)
class KeyInput:
    """One raw byte typed on the terminal, forwarded verbatim."""

    byte: int

    def __post_init__(self) -> None:
        if not 0 <= self.byte <= 0xFF:
            raise ValueError(f"Not a byte value: {self.byte}")

    def to_bytes(self) -> bytes:
        return bytes((self.byte,))


Command = Union[Reload, KeyInput]

# Reload carries no payload, a single instance is enough
RELOAD = Reload()
