"""Line-classification and metric-update engine."""
from __future__ import annotations

from .compiler import CompiledMetric, compile_metric, compile_metrics, compile_pattern, group_names
from .extract import extract_labels, extract_value, parse_value
from .processor import LineProcessor, apply_update
from .stream import StreamStats, run_stream

__all__ = [
    "CompiledMetric",
    "compile_pattern",
    "compile_metric",
    "compile_metrics",
    "group_names",
    "parse_value",
    "extract_value",
    "extract_labels",
    "LineProcessor",
    "apply_update",
    "run_stream",
    "StreamStats",
]
