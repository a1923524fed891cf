"""Tests for reloader commands."""

import pytest

from flutter_autoreload.core.commands import KeyInput, Reload, RELOAD


class TestCommands:
    """Tests for Reload and KeyInput."""

    def test_reload_instances_are_equal(self):
        """Test Reload carries no payload."""
        assert Reload() == RELOAD

    def test_key_input_bytes(self):
        """Test KeyInput renders its single byte."""
        assert KeyInput(ord("R")).to_bytes() == b"R"
        assert KeyInput(0).to_bytes() == b"\x00"
        assert KeyInput(255).to_bytes() == b"\xff"

    def test_key_input_rejects_non_bytes(self):
        """Test out-of-range values are rejected."""
        with pytest.raises(ValueError):
            KeyInput(256)
        with pytest.raises(ValueError):
            KeyInput(-1)

    def test_commands_are_frozen(self):
        """Test commands cannot be mutated."""
        key = KeyInput(ord("h"))
        with pytest.raises(AttributeError):
            key.byte = ord("q")
