"""stdout2prom: turn a program's line output into Prometheus metrics."""
from __future__ import annotations

from .version import __version__, get_version

__all__ = ["__version__", "get_version"]
