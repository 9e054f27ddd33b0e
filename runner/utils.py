from __future__ import annotations

from collections.abc import Iterable

from runner.models import ProbeResult
from runner.types import Check, Target

MISSING_PATH = "/__probe_missing__"


def percentile(values: list[float], p: float) -> float:
    """Compute the p-th percentile using linear interpolation."""
    if not values:
        return 0.0
    s = sorted(values)
    k = (len(s) - 1) * p
    f = int(k)
    c = min(f + 1, len(s) - 1)
    if f == c:
        return s[f]
    return s[f] * (c - k) + s[c] * (k - f)


def plan_checks(targets: Iterable[Target]) -> list[Check]:
    """Per target: its route must answer 200 with the literal body, a missing path 404."""
    checks: list[Check] = []
    for t in targets:
        route = t.listener.route
        checks.append(Check(t, "GET", route.path, 200, route.body))
        checks.append(Check(t, "GET", MISSING_PATH, 404))
    return checks


def summarize(results: list[ProbeResult]) -> tuple[dict, int]:
    """Compute a summary dict and an exit code from check outcomes."""
    per_listener: dict[str, dict[str, int]] = {}
    failures: list[dict] = []
    durations = [r.elapsed_ms for r in results]

    for r in results:
        counts = per_listener.setdefault(r.listener, {"ok": 0, "failed": 0})
        if r.ok:
            counts["ok"] += 1
            continue
        counts["failed"] += 1
        failures.append(
            {
                "listener": r.listener,
                "method": r.method,
                "url": r.url,
                "expected_status": r.expected_status,
                "status_code": r.status_code,
                "expected_body": r.expected_body,
                "body": r.body,
                "error": r.error,
            }
        )

    summary = {
        "component": "runner",
        "event": "summary",
        "checks": len(results),
        "ok_count": len(results) - len(failures),
        "failed_count": len(failures),
        "timings": {
            "avg_ms": round(sum(durations) / len(durations), 2) if durations else 0.0,
            "p95_ms": round(percentile(durations, 0.95), 2),
            "max_ms": round(max(durations), 2) if durations else 0.0,
        },
        "per_listener": per_listener,
        "failures": failures,
    }
    exit_code = 0 if (results and not failures) else 1
    return summary, exit_code
