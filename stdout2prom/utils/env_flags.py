"""STDOUT2PROM_* environment settings.

Flags are on when set to one of {"1","true","yes","on"} (case-insensitive);
string settings fall back to their default when unset or blank.
"""
from __future__ import annotations

import os

ENV_PREFIX = "STDOUT2PROM_"
TRUTHY_SET = frozenset({"1", "true", "yes", "on"})


def _lookup(name: str) -> str:
    key = name if name.startswith(ENV_PREFIX) else ENV_PREFIX + name
    return (os.environ.get(key) or '').strip()


def is_truthy_env(name: str) -> bool:
    """``is_truthy_env('JSON_LOGS')`` reads STDOUT2PROM_JSON_LOGS."""
    return _lookup(name).lower() in TRUTHY_SET


def env_str(name: str, default: str) -> str:
    return _lookup(name) or default

__all__ = ['ENV_PREFIX', 'TRUTHY_SET', 'is_truthy_env', 'env_str']
