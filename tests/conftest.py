"""Shared fixtures for byterate tests."""

import pytest


class FakeClock:
    """Fake monotonic clock for deterministic time advancement in tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.value = start

    def advance(self, delta: float) -> float:
        """Advance the clock by delta seconds and return the new value."""
        self.value += delta
        return self.value

    def __call__(self) -> float:
        """Return the current clock value."""
        return self.value


@pytest.fixture
def clock():
    """Provide a fake monotonic clock starting at 100.0 seconds."""
    return FakeClock(100.0)
