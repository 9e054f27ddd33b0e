from __future__ import annotations

import asyncio

import pytest

from runner.cli import parse_args
from runner.models import ProbeResult
from runner.probe import default_targets, run_probe
from runner.types import Target
from runner.utils import MISSING_PATH, percentile, plan_checks, summarize
from twinserve.domain.listeners import Listener, Route


def _result(**overrides) -> ProbeResult:
    fields = dict(
        listener="first",
        method="GET",
        url="http://127.0.0.1:8080/f",
        expected_status=200,
        status_code=200,
        expected_body="first",
        body="first",
        elapsed_ms=1.5,
    )
    fields.update(overrides)
    return ProbeResult(**fields)


def test_default_targets_use_fixed_ports() -> None:
    urls = [t.base_url for t in default_targets("localhost")]
    assert urls == ["http://localhost:8080", "http://localhost:8081"]


def test_plan_checks_covers_route_and_missing_path() -> None:
    checks = plan_checks(default_targets("h"))
    assert [(c.target.listener.name, c.path, c.expected_status) for c in checks] == [
        ("first", "/f", 200),
        ("first", MISSING_PATH, 404),
        ("second", "/s", 200),
        ("second", MISSING_PATH, 404),
    ]
    assert checks[0].expected_body == b"first"
    assert checks[1].expected_body is None
    assert checks[2].url == "http://h:8081/s"


def test_result_ok_rules() -> None:
    assert _result().ok
    assert not _result(body="second").ok
    assert not _result(status_code=404).ok
    assert not _result(status_code=None, body=None, error="refused").ok
    assert _result(expected_status=404, status_code=404, expected_body=None, body="{}").ok


def test_summarize_counts_and_exit_code() -> None:
    summary, code = summarize([_result(), _result(listener="second", body="nope")])
    assert code == 1
    assert summary["ok_count"] == 1
    assert summary["failed_count"] == 1
    assert summary["per_listener"] == {"first": {"ok": 1, "failed": 0}, "second": {"ok": 0, "failed": 1}}
    assert summary["failures"][0]["body"] == "nope"


def test_summarize_empty_is_failure() -> None:
    _, code = summarize([])
    assert code == 1


def test_percentile() -> None:
    assert percentile([], 0.95) == 0.0
    assert percentile([1.0, 2.0, 3.0], 0.5) == 2.0
    assert percentile([5.0], 0.95) == 5.0


def test_parse_args(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROBE_HOST", "10.0.0.5")
    args = parse_args(["--timeout", "3", "--concurrency", "4"])
    assert (args.host, args.timeout, args.rounds) == ("10.0.0.5", 3.0, 4)
    with pytest.raises(SystemExit):
        parse_args(["--concurrency", "0"])


def test_probe_passes_against_live_listeners(live_targets: list[Target]) -> None:
    assert asyncio.run(run_probe(live_targets, timeout_s=5.0, rounds=5)) == 0


def test_probe_fails_on_body_mismatch(live_targets: list[Target]) -> None:
    first = live_targets[0]
    wrong = Listener(name="first", port=first.listener.port, route=Route("/f", b"not-first"))
    targets = [Target(listener=wrong, base_url=first.base_url), live_targets[1]]
    assert asyncio.run(run_probe(targets, timeout_s=5.0)) == 1


def test_probe_fails_when_listener_never_ready(live_targets: list[Target]) -> None:
    first, second = live_targets
    swapped = [Target(listener=first.listener, base_url=second.base_url)]
    assert asyncio.run(run_probe(swapped, timeout_s=0.5)) == 1
