from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, TextIO

import numpy as np

LOGGER = logging.getLogger("pagebench.benchmark.ips")

Block = Callable[[], object]
Clock = Callable[[], float]

CYCLE_WINDOW_S = 0.1
LABEL_WIDTH = 20
SECTION_RULE = "-" * 38


@dataclass
class EntryReport:
    """Measurement of one labelled block: per-batch ips samples and totals."""

    label: str
    cycles: int
    samples: list[float] = field(default_factory=list)
    iterations: int = 0
    elapsed_s: float = 0.0

    @property
    def ips(self) -> float:
        if not self.samples:
            return 0.0
        return float(np.mean(self.samples))

    @property
    def stddev(self) -> float:
        if len(self.samples) < 2:
            return 0.0
        return float(np.std(self.samples))

    @property
    def error_pct(self) -> float:
        ips = self.ips
        if ips == 0:
            return 0.0
        return self.stddev / ips * 100.0

    def format_line(self) -> str:
        return (
            f"{self.label:>{LABEL_WIDTH}} {self.ips:10.3f}  (± {self.error_pct:4.1f}%) i/s - "
            f"{float(self.iterations):10.3f}  in {self.elapsed_s:10.6f}s"
        )


class IpsBenchmark:
    """Iterations-per-second estimator with a warmup and a measurement phase.

    Warmup calls each block until ``warmup_seconds`` have passed and derives how
    many calls fit into 100 ms (``cycles``, at least one). Measurement then runs
    batches of ``cycles`` calls until ``time_seconds`` have passed, turning each
    batch into one ips sample. Every block is run at least once per phase.
    """

    def __init__(
        self,
        warmup_seconds: float,
        time_seconds: float,
        clock: Clock = time.perf_counter,
        out: TextIO | None = None,
    ) -> None:
        if warmup_seconds < 0:
            raise ValueError("warmup_seconds must be >= 0")
        if time_seconds <= 0:
            raise ValueError("time_seconds must be > 0")
        self._warmup_seconds = warmup_seconds
        self._time_seconds = time_seconds
        self._clock = clock
        self._out = out
        self._jobs: list[tuple[str, Block]] = []

    def report(self, label: str, block: Block) -> None:
        if any(existing == label for existing, _ in self._jobs):
            raise ValueError(f"duplicate benchmark label {label!r}")
        self._jobs.append((label, block))

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self._jobs]

    def run(self) -> list[EntryReport]:
        self._print("Warming up " + SECTION_RULE)
        cycles: dict[str, int] = {}
        for label, block in self._jobs:
            LOGGER.info("Warming up %s for %.2fs", label, self._warmup_seconds)
            cycles[label] = self._warmup(block)
            self._print(f"{label:>{LABEL_WIDTH}} {float(cycles[label]):10.3f}  i/100ms")

        self._print("Calculating " + "-" * (len(SECTION_RULE) - 1))
        entries: list[EntryReport] = []
        for label, block in self._jobs:
            LOGGER.info("Measuring %s for %.2fs", label, self._time_seconds)
            entry = self._measure(label, block, cycles[label])
            entries.append(entry)
            self._print(entry.format_line())
        return entries

    def _warmup(self, block: Block) -> int:
        if self._warmup_seconds == 0:
            return 1
        iterations = 0
        started_at = self._clock()
        deadline = started_at + self._warmup_seconds
        while True:
            block()
            iterations += 1
            if self._clock() >= deadline:
                break
        elapsed = max(self._clock() - started_at, 0.0)
        if elapsed == 0:
            return 1
        return max(int(iterations / elapsed * CYCLE_WINDOW_S), 1)

    def _measure(self, label: str, block: Block, cycles: int) -> EntryReport:
        entry = EntryReport(label=label, cycles=cycles)
        started_at = self._clock()
        deadline = started_at + self._time_seconds
        while True:
            batch_started = self._clock()
            for _ in range(cycles):
                block()
            batch_finished = self._clock()
            entry.iterations += cycles
            batch_s = batch_finished - batch_started
            if batch_s > 0:
                entry.samples.append(cycles / batch_s)
            if batch_finished >= deadline:
                break
        entry.elapsed_s = max(self._clock() - started_at, 0.0)
        return entry

    def _print(self, line: str) -> None:
        print(line, file=self._out or sys.stdout)


__all__ = ["EntryReport", "IpsBenchmark"]
