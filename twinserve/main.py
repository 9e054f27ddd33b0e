"""Per-listener FastAPI app factory and the process entry point.

`python -m twinserve.main` prints the greeting, binds both listeners and
serves them concurrently until the process is terminated.
"""
from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, Response

from .api.routes import build_route
from .config import load_settings
from .domain.listeners import GREETING, LISTENERS, Listener
from .logging_conf import get_logger, setup_logging
from .server import ListenerBindError, bind_all, build_server, serve_all

logger = get_logger("twinserve")


def create_app(listener: Listener) -> FastAPI:
    settings = load_settings()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("startup", extra={"event": "startup", "listener": listener.name})
        yield
        logger.info("shutdown", extra={"event": "shutdown", "listener": listener.name})

    app = FastAPI(
        title=f"twinserve ({listener.name})",
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """Log start/end of each request and echo an X-Request-ID back."""
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "listener": listener.name,
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "listener": listener.name,
                    "method": request.method,
                    "path": request.url.path,
                    "request_id": request_id,
                },
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "listener": listener.name,
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    app.router.routes.append(build_route(listener.route))
    return app


def run(listeners: Sequence[Listener] = LISTENERS, host: str | None = None) -> int:
    """Greet, bind every listener, then serve them all. Returns the exit status."""
    host = host if host is not None else load_settings().host
    print(GREETING, flush=True)

    try:
        bound = bind_all(listeners, host)
    except ListenerBindError as exc:
        logger.error(
            "listener.bind_failed",
            extra={
                "event": "listener_bind_failed",
                "listener": exc.listener.name,
                "host": exc.host,
                "port": exc.port,
                "error": str(exc),
            },
        )
        return 1

    servers = [(build_server(b, create_app(b.listener)), b) for b in bound]
    try:
        asyncio.run(serve_all(servers))
    except KeyboardInterrupt:
        pass
    finally:
        for b in bound:
            b.close()
    return 0


def main() -> None:
    setup_logging(load_settings().log_level)
    raise SystemExit(run())


if __name__ == "__main__":
    main()
