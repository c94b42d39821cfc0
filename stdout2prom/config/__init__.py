"""Configuration loading for stdout2prom.

Public API:
  load_config(path) -> ExporterConfig
  load_config_text(text) -> ExporterConfig
"""
from __future__ import annotations

from .loader import load_config, load_config_text, parse_config
from .model import DEFAULT_LISTEN, DEFAULT_PATH, ExporterConfig, MetricDefinition

__all__ = [
    "load_config",
    "load_config_text",
    "parse_config",
    "ExporterConfig",
    "MetricDefinition",
    "DEFAULT_LISTEN",
    "DEFAULT_PATH",
]
