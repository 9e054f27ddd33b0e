from __future__ import annotations

import asyncio
import time

import httpx

from runner.models import ProbeResult
from runner.types import Check, NotReadyError, Target
from twinserve.logging_conf import get_logger

logger = get_logger("runner.client")


async def wait_for_ready(target: Target, timeout_s: float = 10.0) -> None:
    """Request the listener's route until it answers 200 or raise after a timeout.

    - Connection errors count as "not yet up" and are retried
    - Logs once the listener is confirmed
    """
    url = f"{target.base_url.rstrip('/')}{target.listener.route.path}"
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(timeout=2.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get(url)
                if r.status_code == 200:
                    logger.info(
                        "listener.ready",
                        extra={"event": "listener_ready", "listener": target.listener.name, "url": url},
                    )
                    return
            except httpx.TransportError:
                pass
            await asyncio.sleep(0.1)
    raise NotReadyError(f"listener {target.listener.name!r} not ready at {url} within {timeout_s}s")


async def run_check(client: httpx.AsyncClient, check: Check) -> ProbeResult:
    """Issue one planned request and record what came back.

    Transport failures are captured on the result rather than raised.
    """
    expected_body = check.expected_body.decode() if check.expected_body is not None else None
    result = ProbeResult(
        listener=check.target.listener.name,
        method=check.method,
        url=check.url,
        expected_status=check.expected_status,
        expected_body=expected_body,
    )
    start = time.perf_counter()
    try:
        r = await client.request(check.method, check.url)
    except httpx.HTTPError as e:
        result.error = str(e) or type(e).__name__
        logger.warning(
            "check.error",
            extra={"event": "check_error", "listener": result.listener, "url": result.url, "error": result.error},
        )
    else:
        result.status_code = r.status_code
        result.body = r.text
    result.elapsed_ms = round((time.perf_counter() - start) * 1000.0, 2)
    return result
