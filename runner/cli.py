from __future__ import annotations

import argparse

from twinserve.config import load_settings


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the listener probe."""
    parser = argparse.ArgumentParser(description="Check both twinserve listeners concurrently")
    parser.add_argument("--host", default=load_settings().probe_host)
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument(
        "--concurrency",
        type=int,
        default=1,
        dest="rounds",
        help="how many copies of every check to issue at once",
    )
    args = parser.parse_args(argv)
    if args.rounds < 1:
        parser.error("--concurrency must be at least 1")
    return args
