import math

import pytest

from stdout2prom.config.model import MetricDefinition
from stdout2prom.engine.compiler import compile_metric
from stdout2prom.engine.extract import extract_labels, extract_value, parse_value
from stdout2prom.utils.exceptions import ExtractionError, LabelLookupError


@pytest.mark.parametrize("text,expected", [
    ("15", 15.0),
    ("-2.5", -2.5),
    ("1e3", 1000.0),
    ("+Inf", math.inf),
    (".5", 0.5),
])
def test_parse_value_accepts_numbers(text, expected):
    assert parse_value(text) == expected


def test_parse_value_nan():
    assert math.isnan(parse_value("NaN"))


@pytest.mark.parametrize("text", ["", "abc", " 1", "1 ", "1_000", "12ms", "\uff11\uff15", "\u0663\u0665", None])
def test_parse_value_rejects(text):
    with pytest.raises(ValueError):
        parse_value(text)


def _metric(registry, regex, value=None, labels=()):
    return compile_metric(MetricDefinition(name="m", regex=regex, value=value, labels=labels), "", registry)


def test_extract_value_and_labels(registry):
    metric = _metric(registry, r"(?P<code>\d{3}) (?P<ms>\S+)ms", value="ms", labels=("code",))
    match = metric.pattern.search("GET / 200 15ms")
    assert extract_value(metric, match) == 15.0
    assert extract_labels(metric, match) == {"code": "200"}


def test_extract_value_failure_names_metric(registry):
    metric = _metric(registry, r"took (?P<ms>\S+)ms", value="ms")
    match = metric.pattern.search("took abcms")
    with pytest.raises(ExtractionError) as ei:
        extract_value(metric, match)
    assert ei.value.metric == "m"
    assert not isinstance(ei.value, LabelLookupError)


def test_optional_label_group_not_participating(registry):
    metric = _metric(registry, r"hit(?: user=(?P<user>\w+))?", labels=("user",))
    match = metric.pattern.search("hit")
    with pytest.raises(LabelLookupError, match="did not participate"):
        extract_labels(metric, match)


def test_label_missing_from_index_at_runtime(registry):
    import dataclasses
    metric = _metric(registry, r"(?P<user>\w+)", labels=("user",))
    broken = dataclasses.replace(metric, group_index={})
    with pytest.raises(LabelLookupError, match="couldn't find label"):
        extract_labels(broken, broken.pattern.search("bob"))
