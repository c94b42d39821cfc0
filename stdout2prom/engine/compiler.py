"""Startup-time compilation of metric definitions.

Each MetricDefinition becomes a CompiledMetric: pattern compiled once, group
names listed positionally, collector shape classified and its collector built
and registered. All consistency problems (bad pattern, value or label group
missing from the pattern, duplicate names) are raised here as ConfigError so
nothing of the sort can first appear while lines are flowing.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, Gauge

from ..config.model import MetricDefinition
from ..metrics.spec import MetricKind, build_collector, classify
from ..utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

# RE2 also spells named groups as (?<name>...); Python only knows (?P<name>...).
# The lookahead keeps lookbehinds (?<= and (?<! untouched; an even run of
# backslashes before the paren is carried over, an odd run escapes it.
_RE2_NAMED_GROUP = re.compile(r"(?<!\\)((?:\\\\)*)\(\?<(?=[A-Za-z_])")


@dataclass(frozen=True)
class CompiledMetric:
    name: str
    kind: MetricKind
    pattern: re.Pattern[str]
    group_names: tuple[str, ...]
    value_group: str | None
    label_groups: tuple[str, ...]
    group_index: Mapping[str, int]
    collector: Counter | Gauge


def compile_pattern(source: str) -> re.Pattern[str]:
    """Compile with RE2 class semantics: \\d, \\w, \\s and \\b are ASCII-only."""
    try:
        return re.compile(_RE2_NAMED_GROUP.sub(r'\1(?P<', source), re.ASCII)
    except re.error as e:
        raise ConfigError(f"invalid regex {source!r}: {e}") from e


def group_names(pattern: re.Pattern[str]) -> tuple[str, ...]:
    """Group names by submatch position; index 0 and unnamed groups are ''."""
    names = [''] * (pattern.groups + 1)
    for name, idx in pattern.groupindex.items():
        names[idx] = name
    return tuple(names)


def _resolve_groups(full_name: str, pattern: re.Pattern[str], wanted: Iterable[str]) -> dict[str, int]:
    index: dict[str, int] = {}
    for group in wanted:
        idx = pattern.groupindex.get(group)
        if idx is None:
            raise ConfigError(
                f"metric {full_name!r}: group {group!r} not found in regex "
                f"(named groups: {sorted(pattern.groupindex) or 'none'})"
            )
        index[group] = idx
    return index


def compile_metric(defn: MetricDefinition, basename: str, registry: CollectorRegistry) -> CompiledMetric:
    full_name = defn.full_name(basename)
    pattern = compile_pattern(defn.regex)
    wanted = ([defn.value] if defn.value else []) + list(defn.labels)
    group_index = _resolve_groups(full_name, pattern, wanted)
    kind = classify(bool(defn.value), bool(defn.labels))
    collector = build_collector(kind, full_name, defn.description, defn.labels, registry)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Added metric for %s", full_name)
        logger.debug("   Type %s", kind.value)
        logger.debug("   Value group name is %s", defn.value or '-')
        logger.debug("   Labels are %s", list(defn.labels))
    return CompiledMetric(
        name=full_name,
        kind=kind,
        pattern=pattern,
        group_names=group_names(pattern),
        value_group=defn.value,
        label_groups=tuple(defn.labels),
        group_index=group_index,
        collector=collector,
    )


def compile_metrics(definitions: Iterable[MetricDefinition], basename: str,
                    registry: CollectorRegistry) -> tuple[CompiledMetric, ...]:
    """Compile definitions in declaration order, rejecting duplicate full names."""
    compiled: list[CompiledMetric] = []
    seen: set[str] = set()
    for defn in definitions:
        full_name = defn.full_name(basename)
        if full_name in seen:
            raise ConfigError(f"duplicate metric name {full_name!r}")
        seen.add(full_name)
        compiled.append(compile_metric(defn, basename, registry))
    return tuple(compiled)


__all__ = ["CompiledMetric", "compile_pattern", "group_names", "compile_metric", "compile_metrics"]
