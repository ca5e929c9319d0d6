import json
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from phalanx.aggregations import (
    AggregationError,
    AggregationType,
    DateRangeAggregation,
    MetricAggregation,
    NamedRange,
    Pair,
    RangeAggregation,
    TermsAggregation,
    avg_from_options,
    date_range_from_options,
    max_from_options,
    min_from_options,
    new_aggregations,
    range_from_options,
    sort_by_count,
    sum_from_options,
    terms_from_options,
)


@dataclass
class Request:
    type: str
    options: bytes


def test_aggregation_type_names():
    assert AggregationType("date_range") is AggregationType.DATE_RANGE
    assert AggregationType.TERMS.value == "terms"


def test_terms_defaults():
    agg = terms_from_options({"field": "tags"})
    assert agg == TermsAggregation(field="tags", min_length=-1, max_length=-1, size=10)


def test_terms_options_and_filter():
    agg = terms_from_options({"field": "tags", "min_length": 2, "max_length": 10, "size": 5})
    assert agg.size == 5
    assert agg.accepts("ab")
    assert not agg.accepts("a")
    assert not agg.accepts("a" * 11)
    assert agg.accepts(b"a" * 10)


def test_terms_without_limits_accepts_everything():
    agg = terms_from_options({"field": "tags"})
    assert agg.accepts("")
    assert agg.accepts("x" * 1000)


@pytest.mark.parametrize("opts", [{}, {"field": 3}, {"field": ""}])
def test_bad_field_option(opts):
    for builder in (terms_from_options, range_from_options, sum_from_options, avg_from_options):
        with pytest.raises(AggregationError):
            builder(opts)


@pytest.mark.parametrize("key", ["min_length", "max_length", "size"])
def test_terms_non_numeric_option(key):
    with pytest.raises(AggregationError, match=key):
        terms_from_options({"field": "tags", key: "many"})


def test_range_from_options():
    agg = range_from_options(
        {
            "field": "id",
            "ranges": {
                "low": {"low": 0, "high": 500},
                "medium": {"low": 500, "high": 1000},
            },
        }
    )
    assert isinstance(agg, RangeAggregation)
    assert agg.field == "id"
    assert {r.name for r in agg.ranges} == {"low", "medium"}
    low = next(r for r in agg.ranges if r.name == "low")
    assert low.contains(0)
    assert not low.contains(500)


def test_named_range_boundaries():
    bucket = NamedRange("b", 1.0, 2.0)
    assert bucket.contains(1.0)
    assert not bucket.contains(2.0)


def test_range_errors():
    with pytest.raises(AggregationError, match="ranges option does not exist"):
        range_from_options({"field": "id"})
    with pytest.raises(AggregationError):
        range_from_options({"field": "id", "ranges": {"x": 1}})
    with pytest.raises(AggregationError, match="low"):
        range_from_options({"field": "id", "ranges": {"x": {"high": 1}}})
    with pytest.raises(AggregationError, match="high"):
        range_from_options({"field": "id", "ranges": {"x": {"low": 1, "high": "2"}}})


def test_date_range_from_options():
    agg = date_range_from_options(
        {
            "field": "timestamp",
            "ranges": {
                "last_year": {"start": "2021-01-01T00:00:00Z", "end": "2022-01-01T00:00:00Z"}
            },
        }
    )
    assert isinstance(agg, DateRangeAggregation)
    (bucket,) = agg.ranges
    assert bucket.start == datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert bucket.contains(datetime(2021, 6, 1, tzinfo=timezone.utc))
    assert not bucket.contains(bucket.end)


def test_date_range_offset_equals_utc():
    agg = date_range_from_options(
        {
            "field": "timestamp",
            "ranges": {
                "r": {"start": "2021-01-01T09:00:00+09:00", "end": "2022-01-01T00:00:00.5Z"}
            },
        }
    )
    (bucket,) = agg.ranges
    assert bucket.start == datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert bucket.end > datetime(2022, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "spec",
    [
        {"start": "2021-01-01", "end": "2022-01-01T00:00:00Z"},
        {"start": "2021-01-01T00:00:00Z", "end": "not a date"},
        {"start": 5, "end": "2022-01-01T00:00:00Z"},
        {"start": "2021-01-01T00:00:00Z"},
    ],
)
def test_date_range_errors(spec):
    with pytest.raises(AggregationError):
        date_range_from_options({"field": "timestamp", "ranges": {"r": spec}})


def test_metric_builders():
    assert sum_from_options({"field": "price"}) == MetricAggregation(AggregationType.SUM, "price")
    assert min_from_options({"field": "price"}).kind is AggregationType.MIN
    assert max_from_options({"field": "price"}).kind is AggregationType.MAX
    assert avg_from_options({"field": "price"}).kind is AggregationType.AVG


def test_new_aggregations_from_json_requests():
    requests = {
        "tags": Request("terms", json.dumps({"field": "tags", "size": 3}).encode()),
        "price": Request("avg", b'{"field": "price"}'),
        "ignored": Request("histogram", b"{}"),
    }
    aggs = new_aggregations(requests)
    assert set(aggs) == {"tags", "price"}
    assert aggs["tags"].size == 3
    assert aggs["price"] == MetricAggregation(AggregationType.AVG, "price")


def test_new_aggregations_accepts_mappings():
    aggs = new_aggregations({"m": {"type": "max", "options": {"field": "price"}}})
    assert aggs["m"].kind is AggregationType.MAX


def test_new_aggregations_bad_json():
    with pytest.raises(AggregationError):
        new_aggregations({"x": Request("sum", b"{not json")})


def test_new_aggregations_missing_field():
    with pytest.raises(AggregationError, match="field option does not exist"):
        new_aggregations({"x": Request("min", b"{}")})


def test_sort_by_count_descending():
    values = {"a": 1.0, "b": 5.0, "c": 3.0}
    pairs = sort_by_count(values)
    counts = [pair.count for pair in pairs]
    assert counts == sorted(values.values(), reverse=True)
    assert pairs[0] == Pair("b", 5.0)
    assert {pair.name for pair in pairs} == set(values)


def test_sort_by_count_empty():
    assert sort_by_count({}) == []