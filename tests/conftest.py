from __future__ import annotations

import threading
import time

import matplotlib
import pytest

matplotlib.use("Agg")


class WorkTracker:
    """Instrumented unit of work: counts calls and concurrent executions."""

    def __init__(self, delay_s: float = 0.0, fail_on: int | None = None) -> None:
        self.delay_s = delay_s
        self.fail_on = fail_on
        self.calls = 0
        self.completed = 0
        self.active = 0
        self.high_water = 0
        self.events: list[tuple[str, int]] = []
        self._lock = threading.Lock()

    def __call__(self) -> dict:
        with self._lock:
            self.calls += 1
            call_no = self.calls
            self.active += 1
            self.high_water = max(self.high_water, self.active)
            self.events.append(("start", call_no))
        try:
            if self.delay_s:
                time.sleep(self.delay_s)
            if self.fail_on is not None and call_no == self.fail_on:
                raise RuntimeError(f"unit {call_no} failed")
            return {"title": f"Page {call_no}"}
        finally:
            with self._lock:
                self.active -= 1
                self.completed += 1
                self.events.append(("end", call_no))


@pytest.fixture
def tracker() -> WorkTracker:
    return WorkTracker()


@pytest.fixture
def slow_tracker() -> WorkTracker:
    return WorkTracker(delay_s=0.01)


@pytest.fixture
def make_tracker():
    return WorkTracker
