"""Typed view of the YAML configuration."""
from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_LISTEN = ":9000"
DEFAULT_PATH = "/metrics"


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    regex: str
    description: str = ""
    value: str | None = None          # named group supplying the gauge value
    labels: tuple[str, ...] = ()      # named groups supplying label values

    def full_name(self, basename: str) -> str:
        """Registered metric name: ``basename_name`` or the bare name without a basename."""
        if basename:
            return f"{basename}_{self.name}"
        return self.name


@dataclass(frozen=True)
class ExporterConfig:
    basename: str = ""
    eat_matches: bool = False
    eat_all: bool = False
    listen: str = DEFAULT_LISTEN
    path: str = DEFAULT_PATH
    metrics: tuple[MetricDefinition, ...] = field(default_factory=tuple)

__all__ = ["MetricDefinition", "ExporterConfig", "DEFAULT_LISTEN", "DEFAULT_PATH"]
