"""Shared fixtures."""

import pytest

from engine.scheduler import TickScheduler


class FakeClock:
    """Clock the tests move by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return TickScheduler(clock=clock)
