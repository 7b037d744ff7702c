from __future__ import annotations

import pytest

from pagebench.main import parse_args, run


def test_parse_args_defaults(monkeypatch):
    for name in ("PAGEBENCH_WARMUP_SECONDS", "PAGEBENCH_TIME_SECONDS", "PAGEBENCH_OUTPUT_DIR", "PAGEBENCH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    args = parse_args([])
    assert args.warmup is None
    assert args.time is None
    assert args.output_dir is None
    assert args.log_level == "WARNING"
    assert not args.dry_run


def test_parse_args_reads_environment(monkeypatch):
    monkeypatch.setenv("PAGEBENCH_TIME_SECONDS", "0.5")
    monkeypatch.setenv("PAGEBENCH_WARMUP_SECONDS", "0")
    args = parse_args([])
    assert args.time == 0.5
    assert args.warmup == 0.0


def test_dry_run_prints_plan(capsys):
    assert run(["--dry-run"]) == 0
    out = capsys.readouterr().out
    assert "TEN: repetitions=10" in out
    assert "FIDDY: repetitions=50" in out
    assert "ONE HUNNID: repetitions=100" in out


def test_run_executes_three_configurations(capsys, tracker):
    assert run(["--warmup", "0", "--time", "0.01"], work=tracker) == 0
    out = capsys.readouterr().out
    assert out.index("Benchmark with TEN") < out.index("Benchmark with FIDDY") < out.index("Benchmark with ONE HUNNID")
    assert out.count("Comparison:") == 3
    assert tracker.calls > 0


def test_run_propagates_failures(make_tracker):
    with pytest.raises(RuntimeError):
        run(["--warmup", "0", "--time", "0.01"], work=make_tracker(fail_on=1))


@pytest.mark.parametrize("argv", [["--warmup", "-1", "--dry-run"], ["--time", "0", "--dry-run"]])
def test_invalid_timing_is_a_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run(argv)
    assert excinfo.value.code == 2
    assert "must be" in capsys.readouterr().err


def test_invalid_timing_from_environment_is_a_usage_error(monkeypatch):
    monkeypatch.setenv("PAGEBENCH_TIME_SECONDS", "-2")
    with pytest.raises(SystemExit) as excinfo:
        parse_args([])
    assert excinfo.value.code == 2
