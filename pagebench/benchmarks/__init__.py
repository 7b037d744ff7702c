"""
Benchmarking collaborator for the concurrency strategies.

This package estimates iterations per second for each strategy at the fixed
repetition counts, prints the comparison table, and optionally writes CSV
results and charts summarising the run.
"""

from .config import BenchmarkCase, BenchmarkPlan, default_benchmark_plan
from .suite import run_case, run_plan

__all__ = [
    "BenchmarkCase",
    "BenchmarkPlan",
    "default_benchmark_plan",
    "run_case",
    "run_plan",
]
