"""Counters describing the exporter's own work.

Names are fixed and not affected by the configured basename.
"""
from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter

from ..utils.exceptions import ConfigError

LINES_PARSED = "stdout2prom_lines_parsed_total"
BYTES_READ = "stdout2prom_bytes_read_total"
MATCHED_LINES = "stdout2prom_matched_lines_total"
BAD_FLOATS = "stdout2prom_bad_floats_total"


@dataclass(frozen=True)
class SelfMetrics:
    lines_parsed: Counter
    bytes_read: Counter
    matched_lines: Counter
    bad_floats: Counter

    @classmethod
    def register(cls, registry: CollectorRegistry) -> SelfMetrics:
        try:
            return cls(
                lines_parsed=Counter(LINES_PARSED, "Total lines read from stdin", registry=registry),
                bytes_read=Counter(BYTES_READ, "Total number of bytes read from stdin", registry=registry),
                matched_lines=Counter(MATCHED_LINES, "Total lines that matched one of the regexes", registry=registry),
                bad_floats=Counter(BAD_FLOATS, "Total lines that failed to convert correctly", registry=registry),
            )
        except ValueError as e:
            raise ConfigError(f"self metrics: {e}") from e


__all__ = ["SelfMetrics", "LINES_PARSED", "BYTES_READ", "MATCHED_LINES", "BAD_FLOATS"]
