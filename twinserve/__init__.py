"""Two independent static-text HTTP listeners.

The package version resolves from installed metadata when available.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("twinserve")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
