"""Config loading & normalization entrypoint.

Responsibilities:
  * Read the YAML file (PyYAML safe_load).
  * Validate against the schema via the validation module.
  * Normalize camelCase keys and null values into an ExporterConfig.

Public API:
  load_config(path) -> ExporterConfig
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..utils.exceptions import ConfigError
from .model import DEFAULT_LISTEN, DEFAULT_PATH, ExporterConfig, MetricDefinition
from .validation import validate_config

logger = logging.getLogger(__name__)


def _metric_from_raw(entry: dict[str, Any]) -> MetricDefinition:
    return MetricDefinition(
        name=entry["name"],
        regex=entry["regex"],
        description=entry.get("description") or "",
        value=entry.get("value") or None,
        labels=tuple(entry.get("labels") or ()),
    )


def parse_config(raw: Any) -> ExporterConfig:
    """Validate an already-parsed mapping and build the typed config."""
    data = validate_config(raw)
    metrics = tuple(_metric_from_raw(m) for m in (data.get("metrics") or []))
    return ExporterConfig(
        basename=data.get("basename") or "",
        eat_matches=bool(data.get("eatMatches") or False),
        eat_all=bool(data.get("eatAll") or False),
        listen=data.get("listen") or DEFAULT_LISTEN,
        path=data.get("path") or DEFAULT_PATH,
        metrics=metrics,
    )


def load_config_text(text: str) -> ExporterConfig:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}") from e
    return parse_config(raw)


def load_config(path: str | Path) -> ExporterConfig:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to open config file {p}: {e}") from e
    cfg = load_config_text(text)
    logger.info("Loaded %d metric definition(s) from %s", len(cfg.metrics), p)
    return cfg

__all__ = ["load_config", "load_config_text", "parse_config"]
