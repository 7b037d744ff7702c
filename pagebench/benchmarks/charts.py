from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .report import CaseReport

LOGGER = logging.getLogger("pagebench.benchmark.charts")

sns.set_style("whitegrid")
plt.rcParams["figure.dpi"] = 100
plt.rcParams["savefig.dpi"] = 150
plt.rcParams["font.size"] = 10
plt.rcParams["axes.labelsize"] = 11
plt.rcParams["axes.titlesize"] = 13
plt.rcParams["legend.fontsize"] = 9

STRATEGY_COLORS = {
    "sequential": "#C73E1D",  # Red
    "future": "#2E86AB",  # Blue
    "future_fixpool": "#6A994E",  # Green
}

STRATEGY_NAMES = {
    "sequential": "Sequential",
    "future": "Unbounded threads",
    "future_fixpool": "Fixed pool",
}


def render_case_chart(report: CaseReport, output_dir: Path) -> Path:
    """Bar chart of iterations per second for every strategy in one case."""
    chart_path = output_dir / f"{report.case.slug()}__ips.png"
    fig, ax = plt.subplots(figsize=(10, 6))

    labels = [entry.label for entry in report.entries]
    values = [entry.ips for entry in report.entries]
    errors = [entry.stddev for entry in report.entries]

    bars = ax.bar(
        [STRATEGY_NAMES.get(label, label) for label in labels],
        values,
        yerr=errors,
        capsize=6,
        color=[STRATEGY_COLORS.get(label, "#808080") for label in labels],
        alpha=0.8,
        edgecolor="white",
        linewidth=2,
    )
    ax.set_ylabel("Iterations per second", fontweight="semibold")
    ax.set_title(
        f"{report.case.name}: {report.case.repetitions} pages per iteration",
        fontweight="bold",
        pad=15,
    )
    ax.grid(True, alpha=0.3, axis="y", linestyle="--")

    for bar in bars:
        height = bar.get_height()
        ax.text(
            bar.get_x() + bar.get_width() / 2.0,
            height,
            f"{height:.3f}",
            ha="center",
            va="bottom",
            fontweight="semibold",
        )

    plt.tight_layout()
    fig.savefig(chart_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    LOGGER.info("Rendering chart %s", chart_path)
    return chart_path


def render_suite_chart(df: pd.DataFrame, output_dir: Path) -> Path | None:
    """Line chart of ips against repetition count, one line per strategy."""
    chart_path = output_dir / "ips_by_repetitions.png"
    if df.empty:
        LOGGER.warning("No results available for suite chart")
        return None

    fig, ax = plt.subplots(figsize=(10, 6))
    sns.lineplot(
        data=df,
        x="repetitions",
        y="ips",
        hue="strategy",
        palette=STRATEGY_COLORS,
        marker="o",
        linewidth=2.5,
        markersize=8,
        ax=ax,
    )
    ax.set_xlabel("Pages per iteration", fontweight="semibold")
    ax.set_ylabel("Iterations per second", fontweight="semibold")
    ax.set_title("Throughput by Strategy and Repetition Count", fontweight="bold", pad=15)
    ax.set_xticks(sorted(df["repetitions"].unique()))
    ax.grid(True, alpha=0.3, linestyle="--")

    plt.tight_layout()
    fig.savefig(chart_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    LOGGER.info("Rendering chart %s", chart_path)
    return chart_path
