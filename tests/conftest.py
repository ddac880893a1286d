"""Shared fixtures: a Qt core application and deterministic clocks."""

import sys

import pytest
from PySide6.QtCore import QCoreApplication


class CountingClock:
    """Returns 0, 1, 2, ... (times *step*) on successive calls."""

    def __init__(self, step: float = 1.0) -> None:
        self.step = step
        self.calls = 0

    def __call__(self) -> float:
        value = self.calls * self.step
        self.calls += 1
        return value


class ManualClock:
    """Only moves when the test calls :meth:`advance`."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def advance(self, ms: float) -> None:
        self.now += ms

    def __call__(self) -> float:
        return self.now


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def counting_clock():
    return CountingClock()


@pytest.fixture
def manual_clock():
    return ManualClock(now=1000.0)
