"""Pytest configuration for stdout2prom.

1. Ensure project root on sys.path.
2. Provide an isolated CollectorRegistry per test so collectors never leak
   between tests through the global default registry.
"""
import sys
import textwrap
from pathlib import Path

import pytest
from prometheus_client import CollectorRegistry

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture()
def write_config(tmp_path):
    """Write a YAML config (dedented) to tmp_path and return its path."""
    def _write(text: str, name: str = "metrics.yml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path
    return _write
