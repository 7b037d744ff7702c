from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .benchmarks.config import BenchmarkPlan, default_benchmark_plan
from .benchmarks.suite import run_plan
from .pages import PageFetcher, fetch_random_page

LOGGER = logging.getLogger("pagebench")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare sequential, unbounded and fixed-pool concurrency for random page fetches"
    )
    parser.add_argument(
        "--warmup",
        type=float,
        default=os.environ.get("PAGEBENCH_WARMUP_SECONDS"),
        help="Warmup seconds per strategy (default 2)",
    )
    parser.add_argument(
        "--time",
        type=float,
        default=os.environ.get("PAGEBENCH_TIME_SECONDS"),
        help="Measurement seconds per strategy (default 5)",
    )
    parser.add_argument(
        "--output-dir",
        default=os.environ.get("PAGEBENCH_OUTPUT_DIR"),
        help="Directory to store CSV results and charts; nothing is written when unset",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the planned benchmark cases without executing them",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("PAGEBENCH_LOG_LEVEL", "WARNING"),
        help="Logging level",
    )
    args = parser.parse_args(argv)
    if args.warmup is not None and args.warmup < 0:
        parser.error(f"--warmup must be >= 0, got {args.warmup}")
    if args.time is not None and args.time <= 0:
        parser.error(f"--time must be > 0, got {args.time}")
    return args


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run(argv: list[str] | None = None, work: PageFetcher = fetch_random_page) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    plan = default_benchmark_plan().with_timing(
        warmup_seconds=args.warmup,
        time_seconds=args.time,
    )

    if args.dry_run:
        _print_plan(plan)
        return 0

    output_dir = Path(args.output_dir) if args.output_dir else None
    if output_dir is not None:
        LOGGER.info("Benchmark output directory: %s", output_dir)

    run_plan(plan, work=work, output_dir=output_dir)
    return 0


def _print_plan(plan: BenchmarkPlan) -> None:
    for case in plan:
        print(
            f"  - {case.name}: repetitions={case.repetitions}, pool={case.pool_size}, "
            f"warmup={case.warmup_seconds}s time={case.time_seconds}s "
            f"strategies={','.join(case.strategies)}"
        )


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
