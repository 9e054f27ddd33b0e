from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ProbeResult(BaseModel):
    """Outcome of a single check against one listener."""
    listener: str
    method: str
    url: str
    expected_status: int
    status_code: Optional[int] = None
    expected_body: Optional[str] = None
    body: Optional[str] = None
    elapsed_ms: float = 0.0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        if self.error is not None or self.status_code != self.expected_status:
            return False
        return self.expected_body is None or self.body == self.expected_body
