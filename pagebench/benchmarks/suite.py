from __future__ import annotations

import functools
import json
import logging
import sys
import time
from pathlib import Path
from typing import TextIO

from ..harness import STRATEGIES, BoundedPoolStrategy, Strategy
from ..pages import PageFetcher, fetch_random_page
from .charts import render_case_chart, render_suite_chart
from .config import BenchmarkCase, BenchmarkPlan
from .ips import Clock, IpsBenchmark
from .report import CaseReport, suite_dataframe, write_case_csv

LOGGER = logging.getLogger("pagebench.benchmark")

BANNER_RULE = "~" * 71


def format_banner(case: BenchmarkCase) -> str:
    return "\n".join(["", BANNER_RULE, f"Benchmark with {case.name}", BANNER_RULE, ""])


def build_case_strategies(case: BenchmarkCase, work: PageFetcher) -> list[Strategy]:
    strategies = []
    for name in case.strategies:
        if name == BoundedPoolStrategy.name:
            strategies.append(BoundedPoolStrategy(work, pool_size=case.pool_size))
        else:
            strategies.append(STRATEGIES[name](work))
    return strategies


def run_case(
    case: BenchmarkCase,
    work: PageFetcher = fetch_random_page,
    out: TextIO | None = None,
    clock: Clock = time.perf_counter,
) -> CaseReport:
    """Benchmark every strategy of ``case`` and print the ips table and comparison."""
    out = out or sys.stdout
    bench = IpsBenchmark(
        warmup_seconds=case.warmup_seconds,
        time_seconds=case.time_seconds,
        clock=clock,
        out=out,
    )
    for strategy in build_case_strategies(case, work):
        bench.report(strategy.name, functools.partial(strategy.run, case.repetitions))

    LOGGER.info(
        "Running case %s (repetitions=%d, pool=%d, warmup=%.1fs, time=%.1fs)",
        case.name,
        case.repetitions,
        case.pool_size,
        case.warmup_seconds,
        case.time_seconds,
    )
    report = CaseReport(case=case, entries=bench.run())
    print("", file=out)
    print(report.format_comparison(), file=out)
    return report


def run_plan(
    plan: BenchmarkPlan,
    work: PageFetcher = fetch_random_page,
    out: TextIO | None = None,
    clock: Clock = time.perf_counter,
    output_dir: Path | None = None,
) -> list[CaseReport]:
    out = out or sys.stdout
    reports: list[CaseReport] = []
    for case in plan:
        print(format_banner(case), file=out)
        reports.append(run_case(case, work=work, out=out, clock=clock))

    if output_dir is not None:
        write_artefacts(reports, output_dir)
    return reports


def write_artefacts(reports: list[CaseReport], output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest: dict[str, object] = {"cases": {}}
    for report in reports:
        csv_path = write_case_csv(report, output_dir)
        chart_path = render_case_chart(report, output_dir)
        fastest = report.fastest()
        manifest["cases"][report.case.name] = {
            "repetitions": report.case.repetitions,
            "csv": str(csv_path),
            "chart": str(chart_path),
            "fastest": fastest.label if fastest else None,
            "ips": {entry.label: entry.ips for entry in report.entries},
        }

    suite_chart = render_suite_chart(suite_dataframe(reports), output_dir)
    manifest["chart"] = str(suite_chart) if suite_chart else None

    manifest_path = output_dir / "benchmark_manifest.json"
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    LOGGER.info("Benchmark manifest written to %s", manifest_path)
    return manifest_path


__all__ = [
    "BANNER_RULE",
    "format_banner",
    "build_case_strategies",
    "run_case",
    "run_plan",
    "write_artefacts",
]
