"""
pagebench: sequential vs. unbounded vs. fixed-pool concurrency for repeated
HTTP fetches of random MediaWiki page summaries.
"""

from .harness import (
    BoundedPoolStrategy,
    CountDownLatch,
    LatchError,
    SequentialStrategy,
    UnboundedStrategy,
    WorkUnit,
    build_strategies,
)

__all__ = [
    "BoundedPoolStrategy",
    "CountDownLatch",
    "LatchError",
    "SequentialStrategy",
    "UnboundedStrategy",
    "WorkUnit",
    "build_strategies",
]
