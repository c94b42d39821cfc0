"""Match-and-update engine.

LineProcessor.process_line is the per-line hot path:

  1. count the line and its bytes
  2. test every compiled metric in declaration order (no short-circuit);
     each match extracts its value/labels and updates its own collector
  3. count the line once as matched if any metric matched
  4. return the pass-through decision

Extraction failures never escape: they skip that metric for that line, bump
stdout2prom_bad_floats_total and processing moves on. Collectors are
prometheus_client primitives, which are safe to scrape while being updated,
so no locking happens here.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from prometheus_client import CollectorRegistry

from ..config.model import ExporterConfig
from ..filters.passthrough import PassThroughPolicy
from ..metrics.self_metrics import SelfMetrics
from ..metrics.spec import MetricKind
from ..utils.exceptions import ExtractionError, LabelLookupError
from .compiler import CompiledMetric, compile_metrics
from .extract import extract_labels, extract_value

logger = logging.getLogger(__name__)


def line_size(line: str) -> int:
    """Bytes the line occupied on the input stream (terminator excluded)."""
    return len(line.encode('utf-8', 'surrogateescape'))


def apply_update(metric: CompiledMetric, value: float | None, labels: dict[str, str] | None) -> None:
    kind = metric.kind
    if kind is MetricKind.COUNTER:
        metric.collector.inc()
    elif kind is MetricKind.COUNTER_VEC:
        metric.collector.labels(**labels).inc()
    elif kind is MetricKind.GAUGE:
        metric.collector.set(value)
    elif kind is MetricKind.GAUGE_VEC:
        metric.collector.labels(**labels).set(value)
    else:  # pragma: no cover - closed enum
        raise AssertionError(f"unhandled metric kind {kind!r}")


class LineProcessor:
    def __init__(self, metrics: Sequence[CompiledMetric], policy: PassThroughPolicy, self_metrics: SelfMetrics):
        self.metrics = tuple(metrics)
        self.policy = policy
        self._self = self_metrics
        self._debug = logger.isEnabledFor(logging.DEBUG)

    @classmethod
    def from_config(cls, config: ExporterConfig, registry: CollectorRegistry) -> LineProcessor:
        """Compile and register every configured metric plus the self metrics.

        Raises ConfigError on any inconsistency; nothing is processed until
        the whole configuration has been accepted.
        """
        self_metrics = SelfMetrics.register(registry)
        metrics = compile_metrics(config.metrics, config.basename, registry)
        policy = PassThroughPolicy(eat_all=config.eat_all, eat_matches=config.eat_matches)
        logger.info("Watching for %d metric(s); %s", len(metrics), policy.describe())
        return cls(metrics, policy, self_metrics)

    def process_line(self, line: str) -> bool:
        """Update metrics for one line; True when the line should be forwarded."""
        self._self.lines_parsed.inc()
        self._self.bytes_read.inc(line_size(line))
        matched = False
        for metric in self.metrics:
            if self._evaluate(metric, line):
                matched = True
        if matched:
            self._self.matched_lines.inc()
        return self.policy.should_forward(matched)

    def _evaluate(self, metric: CompiledMetric, line: str) -> bool:
        if self._debug:
            logger.debug("Testing against metric [%s]", metric.name)
        match = metric.pattern.search(line)
        if match is None:
            return False
        if self._debug:
            logger.debug(" ** Match ** [%s]", metric.name)
        value = None
        labels = None
        try:
            if metric.value_group:
                value = extract_value(metric, match)
            if metric.label_groups:
                labels = extract_labels(metric, match)
        except LabelLookupError as e:
            self._self.bad_floats.inc()
            logger.warning("problems finding labels: %s", e, extra={'metric': metric.name})
            return True
        except ExtractionError as e:
            self._self.bad_floats.inc()
            if self._debug:
                logger.debug("value extraction failed: %s", e, extra={'metric': metric.name})
            return True
        apply_update(metric, value, labels)
        if self._debug:
            logger.debug("%s update applied value=%s labels=%s", metric.kind.value, value, labels)
        return True


__all__ = ["LineProcessor", "apply_update", "line_size"]
