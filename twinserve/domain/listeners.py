from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Route",
    "Listener",
    "FIRST",
    "SECOND",
    "LISTENERS",
    "GREETING",
]

GREETING = "Hakuna Matata!"
_MAX_PORT = 65535


@dataclass(frozen=True)
class Route:
    """A fixed path and the literal body served on it."""

    path: str
    body: bytes

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise ValueError(f"route path must start with '/': {self.path!r}")


@dataclass(frozen=True)
class Listener:
    """One listener's static registration: a port and its single route.

    Port 0 asks the OS for an ephemeral port.
    """

    name: str
    port: int
    route: Route

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("listener name must not be empty")
        if not (0 <= self.port <= _MAX_PORT):
            raise ValueError(f"port must be in [0,{_MAX_PORT}], got {self.port}")

    def with_port(self, port: int) -> Listener:
        """Return a copy bound to a different port (same route)."""
        return Listener(name=self.name, port=port, route=self.route)


FIRST = Listener(name="first", port=8080, route=Route(path="/f", body=b"first"))
SECOND = Listener(name="second", port=8081, route=Route(path="/s", body=b"second"))

# Startup order.
LISTENERS: tuple[Listener, ...] = (FIRST, SECOND)
