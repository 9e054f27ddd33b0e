"""Environment-driven settings.

Ports and paths are fixed in :mod:`twinserve.domain.listeners`; only the
ambient knobs live here.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from . import __version__


@dataclass(frozen=True)
class Settings:
    host: str
    log_level: str
    app_version: str
    probe_host: str


def load_settings() -> Settings:
    return Settings(
        host=os.getenv("TWINSERVE_HOST", "0.0.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        app_version=os.getenv("APP_VERSION", __version__),
        probe_host=os.getenv("PROBE_HOST", "127.0.0.1"),
    )
