"""Metric collectors: user-defined shapes, self metrics, and the HTTP endpoint."""
from __future__ import annotations

from .self_metrics import SelfMetrics
from .server import parse_listen, setup_metrics_server
from .spec import MetricKind, build_collector, classify

__all__ = [
    "MetricKind",
    "classify",
    "build_collector",
    "SelfMetrics",
    "parse_listen",
    "setup_metrics_server",
]
