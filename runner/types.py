from __future__ import annotations

from dataclasses import dataclass

from twinserve.domain.listeners import Listener


@dataclass(frozen=True)
class Target:
    """A running listener and the base URL it answers on."""

    listener: Listener
    base_url: str


@dataclass(frozen=True)
class Check:
    """One planned request and the response it must produce."""

    target: Target
    method: str
    path: str
    expected_status: int
    expected_body: bytes | None = None

    @property
    def url(self) -> str:
        return f"{self.target.base_url.rstrip('/')}{self.path}"


class ProbeError(RuntimeError):
    """Raised when the probe cannot proceed at all."""


class NotReadyError(ProbeError):
    """Raised when a listener does not answer its route before the timeout."""
