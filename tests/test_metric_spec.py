import pytest
from prometheus_client import Counter, Gauge

from stdout2prom.metrics.spec import MetricKind, build_collector, classify
from stdout2prom.utils.exceptions import ConfigError


@pytest.mark.parametrize("has_value,has_labels,expected", [
    (False, False, MetricKind.COUNTER),
    (False, True, MetricKind.COUNTER_VEC),
    (True, False, MetricKind.GAUGE),
    (True, True, MetricKind.GAUGE_VEC),
])
def test_classify_matrix(has_value, has_labels, expected):
    kind = classify(has_value, has_labels)
    assert kind is expected
    assert kind.is_gauge == has_value
    assert kind.is_vector == has_labels


def test_build_collector_types(registry):
    c = build_collector(MetricKind.COUNTER, "lines_seen", "Lines", None, registry)
    g = build_collector(MetricKind.GAUGE_VEC, "latency", "Latency", ["code"], registry)
    assert isinstance(c, Counter)
    assert isinstance(g, Gauge)
    g.labels(code="200").set(3)
    assert registry.get_sample_value("latency", {"code": "200"}) == 3.0


def test_vector_without_labels_rejected(registry):
    with pytest.raises(ConfigError, match="requires at least one label"):
        build_collector(MetricKind.COUNTER_VEC, "hits", "Hits", [], registry)
    with pytest.raises(ConfigError):
        build_collector(MetricKind.GAUGE_VEC, "depth", "Depth", None, registry)


def test_plain_kind_with_labels_rejected(registry):
    with pytest.raises(ConfigError, match="cannot carry labels"):
        build_collector(MetricKind.GAUGE, "depth", "Depth", ["queue"], registry)


def test_duplicate_registration_is_config_error(registry):
    build_collector(MetricKind.GAUGE, "depth", "Depth", None, registry)
    with pytest.raises(ConfigError):
        build_collector(MetricKind.GAUGE, "depth", "Depth again", None, registry)


def test_empty_description_falls_back_to_name(registry):
    build_collector(MetricKind.COUNTER, "quiet", "", None, registry)
    assert registry.get_sample_value("quiet_total") == 0.0
