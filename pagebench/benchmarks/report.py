from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from .config import BenchmarkCase
from .ips import LABEL_WIDTH, EntryReport

LOGGER = logging.getLogger("pagebench.benchmark.report")

RESULT_COLUMNS = [
    "case",
    "repetitions",
    "strategy",
    "ips",
    "stddev",
    "error_pct",
    "iterations",
    "elapsed_s",
    "slowdown",
]


@dataclass
class CaseReport:
    """Everything measured for one case; returned instead of kept globally."""

    case: BenchmarkCase
    entries: list[EntryReport] = field(default_factory=list)

    def ranked(self) -> list[tuple[EntryReport, float]]:
        """Entries fastest first, each paired with its slowdown vs the fastest."""
        ordered = sorted(self.entries, key=lambda entry: entry.ips, reverse=True)
        if not ordered:
            return []
        best = ordered[0].ips
        ranked = []
        for entry in ordered:
            slowdown = best / entry.ips if entry.ips > 0 else float("inf")
            ranked.append((entry, slowdown))
        return ranked

    def fastest(self) -> EntryReport | None:
        ranked = self.ranked()
        return ranked[0][0] if ranked else None

    def format_comparison(self) -> str:
        lines = ["Comparison:"]
        for index, (entry, slowdown) in enumerate(self.ranked()):
            line = f"{entry.label:>{LABEL_WIDTH}}: {entry.ips:10.1f} i/s"
            if index > 0:
                line += f" - {slowdown:.2f}x  slower"
            lines.append(line)
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {
                "case": self.case.name,
                "repetitions": self.case.repetitions,
                "strategy": entry.label,
                "ips": entry.ips,
                "stddev": entry.stddev,
                "error_pct": entry.error_pct,
                "iterations": entry.iterations,
                "elapsed_s": entry.elapsed_s,
                "slowdown": slowdown,
            }
            for entry, slowdown in self.ranked()
        ]
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def suite_dataframe(reports: list[CaseReport]) -> pd.DataFrame:
    frames = [report.to_dataframe() for report in reports]
    if not frames:
        return pd.DataFrame(columns=RESULT_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def write_case_csv(report: CaseReport, output_dir: Path) -> Path:
    path = output_dir / f"{report.case.slug()}__results.csv"
    df = report.to_dataframe()
    df.to_csv(path, index=False)
    LOGGER.info("Saved %s results to %s (%d rows)", report.case.name, path, len(df))
    return path


__all__ = ["RESULT_COLUMNS", "CaseReport", "suite_dataframe", "write_case_csv"]
