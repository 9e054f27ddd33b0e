from __future__ import annotations

from fastapi.responses import PlainTextResponse
from starlette.routing import Route as StarletteRoute
from starlette.types import Receive, Scope, Send

from ..domain.listeners import Route

__all__ = ["LiteralBody", "build_route"]


class LiteralBody:
    """ASGI endpoint that answers every request with the same text body."""

    def __init__(self, body: bytes) -> None:
        self.body = body

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = PlainTextResponse(content=self.body, status_code=200)
        await response(scope, receive, send)


def build_route(route: Route) -> StarletteRoute:
    """Route ``route.path`` to its literal body, whatever the request method.

    A plain ASGI endpoint with ``methods=None`` has no method filter, so
    extension methods (PROPFIND, ...) get the body too instead of a 405.
    """
    return StarletteRoute(
        route.path,
        LiteralBody(route.body),
        methods=None,
        name=f"literal{route.path.replace('/', '_')}",
        include_in_schema=False,
    )
