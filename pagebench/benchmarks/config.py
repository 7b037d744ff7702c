from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..harness import DEFAULT_POOL_SIZE, STRATEGIES

DEFAULT_WARMUP_SECONDS = 2.0
DEFAULT_TIME_SECONDS = 5.0
DEFAULT_STRATEGIES: tuple[str, ...] = ("sequential", "future", "future_fixpool")


@dataclass(frozen=True)
class BenchmarkCase:
    """Single comparison of every strategy at one repetition count."""

    name: str
    repetitions: int
    warmup_seconds: float = DEFAULT_WARMUP_SECONDS
    time_seconds: float = DEFAULT_TIME_SECONDS
    pool_size: int = DEFAULT_POOL_SIZE
    strategies: Sequence[str] = DEFAULT_STRATEGIES

    def __post_init__(self) -> None:
        if self.repetitions < 1:
            raise ValueError("BenchmarkCase repetitions must be >= 1")
        if self.warmup_seconds < 0 or self.time_seconds <= 0:
            raise ValueError("BenchmarkCase needs warmup >= 0 and time > 0")
        unknown = [name for name in self.strategies if name not in STRATEGIES]
        if unknown:
            raise ValueError(f"Unknown strategies: {', '.join(unknown)}")

    def slug(self) -> str:
        return self.name.lower().replace(" ", "-")


@dataclass
class BenchmarkPlan:
    """Ordered set of cases the suite will execute."""

    cases: list[BenchmarkCase] = field(default_factory=list)

    def __iter__(self) -> Iterable[BenchmarkCase]:
        return iter(self.cases)

    def __len__(self) -> int:
        return len(self.cases)

    def with_timing(
        self,
        warmup_seconds: float | None = None,
        time_seconds: float | None = None,
    ) -> "BenchmarkPlan":
        changes = {}
        if warmup_seconds is not None:
            changes["warmup_seconds"] = warmup_seconds
        if time_seconds is not None:
            changes["time_seconds"] = time_seconds
        if not changes:
            return self
        return BenchmarkPlan(cases=[dataclasses.replace(case, **changes) for case in self.cases])


def default_benchmark_plan() -> BenchmarkPlan:
    """Return the reference configurations: ten, fifty and a hundred pages."""

    return BenchmarkPlan(
        cases=[
            BenchmarkCase(name="TEN", repetitions=10),
            BenchmarkCase(name="FIDDY", repetitions=50),
            BenchmarkCase(name="ONE HUNNID", repetitions=100),
        ]
    )
