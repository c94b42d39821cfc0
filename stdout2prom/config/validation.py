"""Structural validation of the exporter configuration.

We apply jsonschema draft-07 validation to the raw mapping produced by the YAML
parser. Anything the schema rejects is a ConfigError; semantic checks that need
the compiled patterns (group names, duplicate full names) happen later in
stdout2prom.engine.compiler.
"""
from __future__ import annotations

import logging
from typing import Any

import jsonschema

from ..utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

_IDENT = r"^[A-Za-z_][A-Za-z0-9_]*$"

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "basename": {"type": ["string", "null"], "pattern": r"^([A-Za-z_:][A-Za-z0-9_:]*)?$"},
        "eatMatches": {"type": ["boolean", "null"]},
        "eatAll": {"type": ["boolean", "null"]},
        "listen": {"type": ["string", "null"], "minLength": 1},
        "path": {"type": ["string", "null"], "pattern": "^/"},
        "metrics": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "pattern": r"^[A-Za-z_:][A-Za-z0-9_:]*$"},
                    "description": {"type": ["string", "null"]},
                    "regex": {"type": "string", "minLength": 1},
                    "value": {"type": ["string", "null"], "pattern": _IDENT},
                    "labels": {
                        "type": ["array", "null"],
                        "items": {"type": "string", "pattern": _IDENT},
                        "uniqueItems": True,
                    },
                },
                "required": ["name", "regex"],
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}


def _format_path(path) -> str:
    parts = [str(p) for p in path]
    return '/'.join(parts) if parts else '<root>'


def validate_config(raw: Any) -> dict[str, Any]:
    """Validate a loaded config mapping and return it unchanged.

    Raises ConfigError on the first schema violation, naming the offending path.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(raw).__name__}")
    try:
        jsonschema.validate(instance=raw, schema=CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigError(f"Config schema validation error: {e.message} (path: {_format_path(e.path)})") from e
    logger.debug("config schema validation passed (metrics=%d)", len(raw.get("metrics") or []))
    return raw

__all__ = ["CONFIG_SCHEMA", "validate_config"]
