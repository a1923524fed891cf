"""Tests for reload debouncing."""

import pytest

from flutter_autoreload.supervisor.debouncer import ReloadDebouncer


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    """Create fake clock."""
    return FakeClock()


class TestReloadDebouncer:
    """Tests for ReloadDebouncer."""

    def test_last_reload_starts_at_construction(self, clock):
        """Test the window counts from startup."""
        debouncer = ReloadDebouncer(debounce_seconds=1.0, clock=clock)
        assert debouncer.last_reload == 100.0

    def test_request_within_startup_window_is_suppressed(self, clock):
        """Test the first request right after startup is dropped."""
        debouncer = ReloadDebouncer(debounce_seconds=1.0, clock=clock)

        clock.now = 100.5
        assert debouncer.check() is None

    def test_request_exactly_at_boundary_passes(self, clock):
        """Test a request at last_reload + interval goes through."""
        debouncer = ReloadDebouncer(debounce_seconds=1.0, clock=clock)

        clock.now = 101.0
        assert debouncer.check() == 101.0

    def test_check_does_not_move_last_reload(self, clock):
        """Test only record() moves last_reload."""
        debouncer = ReloadDebouncer(debounce_seconds=1.0, clock=clock)

        clock.now = 105.0
        assert debouncer.check() == 105.0
        assert debouncer.last_reload == 100.0

        # Not recorded, so still due
        clock.now = 105.1
        assert debouncer.check() == 105.1

    def test_record_opens_new_window(self, clock):
        """Test a recorded reload suppresses the next interval."""
        debouncer = ReloadDebouncer(debounce_seconds=1.0, clock=clock)

        clock.now = 102.0
        debouncer.record(debouncer.check())

        clock.now = 102.9
        assert debouncer.check() is None

        clock.now = 103.0
        assert debouncer.check() == 103.0

    def test_record_never_moves_backwards(self, clock):
        """Test last_reload is monotonic."""
        debouncer = ReloadDebouncer(debounce_seconds=1.0, clock=clock)

        debouncer.record(110.0)
        debouncer.record(105.0)

        assert debouncer.last_reload == 110.0

    def test_zero_interval_never_suppresses(self, clock):
        """Test debounce of zero lets every request through."""
        debouncer = ReloadDebouncer(debounce_seconds=0.0, clock=clock)

        assert debouncer.check() == 100.0
        debouncer.record(100.0)
        assert debouncer.check() == 100.0
