"""Socket binding and concurrent serving for a set of independent listeners.

Every listener's socket is bound and put into listening state up front so
a port conflict stops the process before any listener starts serving. With
SO_REUSEADDR, two sockets that are only bound may share a port on Linux;
the conflict shows at listen(). Each bound listener then gets
its own uvicorn server; all of them run as sibling tasks on one event loop.
"""
from __future__ import annotations

import asyncio
import socket
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import uvicorn
from fastapi import FastAPI

from .domain.listeners import Listener
from .logging_conf import get_logger

__all__ = [
    "BoundListener",
    "ListenerBindError",
    "bind_listener",
    "bind_all",
    "build_server",
    "serve_all",
]

logger = get_logger("twinserve.server")


class ListenerBindError(RuntimeError):
    """Raised when a listener cannot bind its port."""

    def __init__(self, listener: Listener, host: str, reason: OSError) -> None:
        super().__init__(
            f"listener {listener.name!r} cannot bind {host}:{listener.port}: {reason.strerror or reason}"
        )
        self.listener = listener
        self.host = host
        self.port = listener.port
        self.errno = reason.errno


@dataclass
class BoundListener:
    """A listener together with the socket it exclusively owns."""

    listener: Listener
    host: str
    sock: socket.socket
    port: int

    def close(self) -> None:
        self.sock.close()


def bind_listener(listener: Listener, host: str) -> BoundListener:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, listener.port))
        sock.listen(128)
    except OSError as exc:
        sock.close()
        raise ListenerBindError(listener, host, exc) from exc
    bound = BoundListener(listener=listener, host=host, sock=sock, port=sock.getsockname()[1])
    logger.info(
        "listener.bound",
        extra={
            "event": "listener_bound",
            "listener": listener.name,
            "host": host,
            "port": bound.port,
            "path": listener.route.path,
        },
    )
    return bound


def bind_all(listeners: Iterable[Listener], host: str) -> list[BoundListener]:
    """Bind every listener in order; release what was bound if one fails."""
    bound: list[BoundListener] = []
    try:
        for listener in listeners:
            bound.append(bind_listener(listener, host))
    except ListenerBindError:
        for b in bound:
            b.close()
        raise
    return bound


def build_server(bound: BoundListener, app: FastAPI) -> uvicorn.Server:
    config = uvicorn.Config(
        app,
        host=bound.host,
        port=bound.port,
        log_config=None,
    )
    return uvicorn.Server(config)


async def serve_all(servers: Sequence[tuple[uvicorn.Server, BoundListener]]) -> None:
    """Run every server's accept loop concurrently until they all exit."""
    await asyncio.gather(*(server.serve(sockets=[bound.sock]) for server, bound in servers))
