"""Value and label extraction from a single regex match."""
from __future__ import annotations

import re

from ..utils.exceptions import ExtractionError, LabelLookupError
from .compiler import CompiledMetric


def parse_value(text: str | None) -> float:
    """Parse a submatch as a float.

    Stricter than float(): surrounding whitespace, digit-grouping underscores
    and non-ASCII digits are rejected, so a value is accepted only when the
    captured text is itself a number ("15", "-2.5", "1e3", "NaN", "+Inf").
    """
    if text is None:
        raise ValueError("group did not participate in the match")
    if not text or not text.isascii() or text != text.strip() or '_' in text:
        raise ValueError(f"could not convert {text!r} to float")
    return float(text)


def extract_value(metric: CompiledMetric, match: re.Match[str]) -> float:
    idx = metric.group_index.get(metric.value_group or '')
    if idx is None:
        raise ExtractionError(metric.name, f"value group {metric.value_group!r} not in regex")
    try:
        return parse_value(match.group(idx))
    except ValueError as e:
        raise ExtractionError(metric.name, str(e)) from e


def extract_labels(metric: CompiledMetric, match: re.Match[str]) -> dict[str, str]:
    labels: dict[str, str] = {}
    for name in metric.label_groups:
        idx = metric.group_index.get(name)
        if idx is None:
            raise LabelLookupError(metric.name, f"couldn't find label {name!r} in results")
        text = match.group(idx)
        if text is None:
            raise LabelLookupError(metric.name, f"label group {name!r} did not participate in the match")
        labels[name] = text
    return labels


__all__ = ["parse_value", "extract_value", "extract_labels"]
