"""Version of the running stdout2prom.

Installed distributions report their packaged version; a source checkout run
through scripts/run_stdout2prom.py falls back to the in-tree constant.
"""
from __future__ import annotations

from importlib import metadata

__version__ = "0.3.0"


def get_version() -> str:
    try:
        return metadata.version("stdout2prom")
    except metadata.PackageNotFoundError:
        return __version__

__all__ = ["__version__", "get_version"]
