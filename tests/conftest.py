from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Iterator

import pytest

from runner.types import Target
from twinserve.domain.listeners import LISTENERS
from twinserve.main import create_app
from twinserve.server import bind_all, build_server, serve_all

HOST = "127.0.0.1"


@pytest.fixture
def live_targets() -> Iterator[list[Target]]:
    """Serve both listeners on ephemeral ports from a background event loop."""
    bound = bind_all([lst.with_port(0) for lst in LISTENERS], HOST)
    servers = [(build_server(b, create_app(b.listener)), b) for b in bound]
    targets = [
        Target(listener=b.listener.with_port(b.port), base_url=f"http://{HOST}:{b.port}")
        for b in bound
    ]

    thread = threading.Thread(target=asyncio.run, args=(serve_all(servers),), daemon=True)
    thread.start()
    deadline = time.monotonic() + 10.0
    while not all(server.started for server, _ in servers):
        if not thread.is_alive() or time.monotonic() > deadline:
            raise RuntimeError("listeners did not start")
        time.sleep(0.02)

    yield targets

    for server, _ in servers:
        server.should_exit = True
    thread.join(timeout=10.0)
