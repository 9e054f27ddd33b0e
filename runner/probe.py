#!/usr/bin/env python3
"""Probe both listeners at once and report whether they answer as fixed.

Steps:
- wait until every listener answers its route
- issue every planned check (route hit + missing path) concurrently
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence

import httpx

from runner.cli import parse_args
from runner.client import run_check, wait_for_ready
from runner.types import NotReadyError, Target
from runner.utils import plan_checks, summarize
from twinserve.domain.listeners import LISTENERS
from twinserve.logging_conf import get_logger, setup_logging

logger = get_logger("runner")


def default_targets(host: str) -> list[Target]:
    return [Target(listener=lst, base_url=f"http://{host}:{lst.port}") for lst in LISTENERS]


async def run_probe(targets: Sequence[Target], *, timeout_s: float = 10.0, rounds: int = 1) -> int:
    try:
        await asyncio.gather(*(wait_for_ready(t, timeout_s) for t in targets))
    except NotReadyError as e:
        logger.error("runner.not_ready", extra={"event": "not_ready", "error": str(e)})
        return 1

    checks = plan_checks(targets) * rounds
    async with httpx.AsyncClient(timeout=timeout_s) as client:
        results = await asyncio.gather(*(run_check(client, c) for c in checks))

    summary, exit_code = summarize(list(results))
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    setup_logging()
    args = parse_args(sys.argv[1:] if argv is None else argv)
    code = asyncio.run(
        run_probe(default_targets(args.host), timeout_s=args.timeout, rounds=args.rounds)
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
