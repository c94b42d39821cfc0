"""Collector shape classification and construction.

Every configured metric is classified exactly once, at startup, from two
booleans: does it name a value group, and does it name label groups. The
resulting MetricKind fixes which prometheus_client collector is built and
which update the engine applies for the life of the process.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

from prometheus_client import CollectorRegistry, Counter, Gauge

from ..utils.exceptions import ConfigError


class MetricKind(Enum):
    COUNTER = "counter"
    COUNTER_VEC = "counter_vec"
    GAUGE = "gauge"
    GAUGE_VEC = "gauge_vec"

    @property
    def is_gauge(self) -> bool:
        return self in (MetricKind.GAUGE, MetricKind.GAUGE_VEC)

    @property
    def is_vector(self) -> bool:
        return self in (MetricKind.COUNTER_VEC, MetricKind.GAUGE_VEC)


def classify(has_value: bool, has_labels: bool) -> MetricKind:
    if has_value:
        return MetricKind.GAUGE_VEC if has_labels else MetricKind.GAUGE
    return MetricKind.COUNTER_VEC if has_labels else MetricKind.COUNTER


def _normalize_labels(labels: Iterable[str] | None) -> Sequence[str]:
    if not labels:
        return ()
    return tuple(str(l) for l in labels)


def build_collector(kind: MetricKind, name: str, doc: str, labels: Iterable[str] | None,
                    registry: CollectorRegistry) -> Counter | Gauge:
    """Construct and register the collector for ``kind``.

    Vector kinds need their full label set up front; an empty set is rejected
    here rather than on first use. Name or label problems reported by
    prometheus_client (invalid names, duplicate registration) surface as
    ConfigError.
    """
    label_names = _normalize_labels(labels)
    if kind.is_vector and not label_names:
        raise ConfigError(f"metric {name!r}: {kind.value} requires at least one label name")
    if not kind.is_vector and label_names:
        raise ConfigError(f"metric {name!r}: {kind.value} cannot carry labels {list(label_names)}")
    ctor = Gauge if kind.is_gauge else Counter
    # prometheus_client wants a non-empty help string
    help_text = doc or name
    try:
        return ctor(name, help_text, label_names, registry=registry)
    except ValueError as e:
        raise ConfigError(f"metric {name!r}: {e}") from e


__all__ = ["MetricKind", "classify", "build_collector"]
