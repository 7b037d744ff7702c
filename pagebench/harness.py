"""
Concurrency strategies for issuing repeated units of work.

Each strategy fans a fixed number of units out and blocks on a
:class:`CountDownLatch` until every unit has signalled completion. Timing and
statistics are left to the caller.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable

from .pages import PageFetcher, fetch_random_page

LOGGER = logging.getLogger("pagebench.harness")

DEFAULT_POOL_SIZE = 100


class LatchError(Exception):
    """Raised when a latch is counted down past zero or built with a negative count."""


class CountDownLatch:
    """Counter that releases waiters once it has been counted down to zero."""

    def __init__(self, count: int) -> None:
        if count < 0:
            raise LatchError(f"latch count must be >= 0, got {count}")
        self._count = count
        self._condition = threading.Condition()
        self._failures: list[BaseException] = []

    @property
    def count(self) -> int:
        with self._condition:
            return self._count

    def count_down(self) -> None:
        with self._condition:
            if self._count == 0:
                raise LatchError("count_down called on a released latch")
            self._count -= 1
            if self._count == 0:
                self._condition.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the count reaches zero; False if ``timeout`` expired first."""
        with self._condition:
            return self._condition.wait_for(lambda: self._count == 0, timeout=timeout)

    def record_failure(self, exc: BaseException) -> None:
        with self._condition:
            self._failures.append(exc)

    @property
    def failures(self) -> list[BaseException]:
        with self._condition:
            return list(self._failures)

    def raise_first_failure(self) -> None:
        failures = self.failures
        if failures:
            raise failures[0]


@dataclass
class UnitResult:
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WorkUnit:
    """One fetch-and-parse bound to the latch it must count down."""

    def __init__(self, work: PageFetcher, latch: CountDownLatch) -> None:
        self._work = work
        self._latch = latch

    def execute(self) -> UnitResult:
        try:
            return UnitResult(value=self._work())
        except BaseException as exc:
            self._latch.record_failure(exc)
            return UnitResult(error=exc)
        finally:
            self._latch.count_down()


class Strategy:
    """Base class: ``run(n)`` executes ``n`` units and returns once all completed."""

    name = ""

    def __init__(self, work: PageFetcher = fetch_random_page) -> None:
        self._work = work

    def run(self, repetitions: int) -> None:
        _check_repetitions(repetitions)
        latch = CountDownLatch(repetitions)
        LOGGER.debug("%s: dispatching %d unit(s)", self.name, repetitions)
        self._dispatch(latch, repetitions)
        latch.wait()
        latch.raise_first_failure()

    def _dispatch(self, latch: CountDownLatch, repetitions: int) -> None:
        raise NotImplementedError

    def _unit(self, latch: CountDownLatch) -> WorkUnit:
        return WorkUnit(self._work, latch)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class SequentialStrategy(Strategy):
    """Runs units one after another on the calling thread."""

    name = "sequential"

    def _dispatch(self, latch: CountDownLatch, repetitions: int) -> None:
        for _ in range(repetitions):
            result = self._unit(latch).execute()
            if result.error is not None:
                raise result.error


class UnboundedStrategy(Strategy):
    """Starts one thread per unit, all at once."""

    name = "future"

    def _dispatch(self, latch: CountDownLatch, repetitions: int) -> None:
        for index in range(repetitions):
            thread = threading.Thread(
                target=self._unit(latch).execute,
                name=f"pagebench-future-{index}",
                daemon=True,
            )
            thread.start()


class BoundedPoolStrategy(Strategy):
    """Queues every unit on a fixed pool of ``pool_size`` workers."""

    name = "future_fixpool"

    def __init__(
        self,
        work: PageFetcher = fetch_random_page,
        pool_size: int = DEFAULT_POOL_SIZE,
    ) -> None:
        super().__init__(work)
        if isinstance(pool_size, bool) or not isinstance(pool_size, int) or pool_size < 1:
            raise ValueError(f"pool_size must be a positive int, got {pool_size!r}")
        self.pool_size = pool_size

    def _dispatch(self, latch: CountDownLatch, repetitions: int) -> None:
        pool = ThreadPoolExecutor(
            max_workers=self.pool_size,
            thread_name_prefix="pagebench-pool",
        )
        try:
            for _ in range(repetitions):
                pool.submit(self._unit(latch).execute)
            latch.wait()
        finally:
            pool.shutdown(wait=True)


STRATEGIES: dict[str, Callable[..., Strategy]] = {
    SequentialStrategy.name: SequentialStrategy,
    UnboundedStrategy.name: UnboundedStrategy,
    BoundedPoolStrategy.name: BoundedPoolStrategy,
}


def build_strategies(
    work: PageFetcher = fetch_random_page,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> list[Strategy]:
    """Return the three strategies in reference order."""
    return [
        SequentialStrategy(work),
        UnboundedStrategy(work),
        BoundedPoolStrategy(work, pool_size=pool_size),
    ]


def _check_repetitions(repetitions: int) -> None:
    if isinstance(repetitions, bool) or not isinstance(repetitions, int) or repetitions < 1:
        raise ValueError(f"repetitions must be a positive int, got {repetitions!r}")


__all__ = [
    "DEFAULT_POOL_SIZE",
    "LatchError",
    "CountDownLatch",
    "UnitResult",
    "WorkUnit",
    "Strategy",
    "SequentialStrategy",
    "UnboundedStrategy",
    "BoundedPoolStrategy",
    "STRATEGIES",
    "build_strategies",
]
