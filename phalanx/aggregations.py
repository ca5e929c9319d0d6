"""Search aggregation definitions built from JSON option objects."""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

__all__ = [
    "AggregationError",
    "AggregationType",
    "TermsAggregation",
    "NamedRange",
    "RangeAggregation",
    "NamedDateRange",
    "DateRangeAggregation",
    "MetricAggregation",
    "Pair",
    "terms_from_options",
    "range_from_options",
    "date_range_from_options",
    "sum_from_options",
    "min_from_options",
    "max_from_options",
    "avg_from_options",
    "new_aggregations",
    "sort_by_count",
]

DEFAULT_TERMS_SIZE = 10

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)


class AggregationError(ValueError):
    """Raised when aggregation options are missing or malformed."""


class AggregationType(enum.Enum):
    UNKNOWN = "unknown"
    TERMS = "terms"
    RANGE = "range"
    DATE_RANGE = "date_range"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    AVG = "avg"


@dataclass(frozen=True)
class TermsAggregation:
    """Counts documents per term of a text field, keeping the top *size*."""

    field: str
    min_length: int = -1
    max_length: int = -1
    size: int = DEFAULT_TERMS_SIZE

    def accepts(self, term: str | bytes) -> bool:
        """Return whether *term* passes the length filter (lengths in bytes)."""
        length = len(term.encode("utf-8") if isinstance(term, str) else term)
        if self.min_length > 0 and length < self.min_length:
            return False
        if self.max_length > 0 and length > self.max_length:
            return False
        return True


@dataclass(frozen=True)
class NamedRange:
    """A numeric bucket covering ``low <= value < high``."""

    name: str
    low: float
    high: float

    def contains(self, value: float) -> bool:
        return self.low <= value < self.high


@dataclass(frozen=True)
class RangeAggregation:
    field: str
    ranges: tuple[NamedRange, ...] = ()


@dataclass(frozen=True)
class NamedDateRange:
    """A date bucket covering ``start <= moment < end``."""

    name: str
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end


@dataclass(frozen=True)
class DateRangeAggregation:
    field: str
    ranges: tuple[NamedDateRange, ...] = ()


@dataclass(frozen=True)
class MetricAggregation:
    """A single-value metric (sum, min, max or avg) over a numeric field."""

    kind: AggregationType
    field: str


@dataclass(frozen=True, order=False)
class Pair:
    name: str
    count: float = field(default=0.0)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_mapping(opts: Any) -> Mapping[str, Any]:
    if opts is None:
        return {}
    if not isinstance(opts, Mapping):
        raise AggregationError(f"options must be an object: {opts!r}")
    return opts


def _field_option(opts: Any) -> str:
    opts = _require_mapping(opts)
    if "field" not in opts:
        raise AggregationError("field option does not exist")
    value = opts["field"]
    if not isinstance(value, str):
        raise AggregationError(f"field option is unexpected: {value!r}")
    if not value:
        raise AggregationError("field option is empty")
    return value


def _int_option(opts: Mapping[str, Any], name: str, default: int) -> int:
    if name not in opts:
        return default
    value = opts[name]
    if not _is_number(value):
        raise AggregationError(f"{name} option is unexpected: {value!r}")
    return int(value)


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = (
        match.groups()
    )
    if zulu:
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        tz = timezone(-offset if sign == "-" else offset)
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second), microsecond, tzinfo=tz,
    )


def _ranges_option(opts: Mapping[str, Any]) -> Mapping[str, Any]:
    ranges = opts.get("ranges")
    if not isinstance(ranges, Mapping):
        raise AggregationError("ranges option does not exist")
    return ranges


def terms_from_options(opts: Mapping[str, Any]) -> TermsAggregation:
    """Build a terms aggregation from ``field``, ``min_length``, ``max_length``, ``size``."""
    field_name = _field_option(opts)
    opts = _require_mapping(opts)
    return TermsAggregation(
        field=field_name,
        min_length=_int_option(opts, "min_length", -1),
        max_length=_int_option(opts, "max_length", -1),
        size=_int_option(opts, "size", DEFAULT_TERMS_SIZE),
    )


def range_from_options(opts: Mapping[str, Any]) -> RangeAggregation:
    """Build a numeric range aggregation from ``field`` and named ``ranges``."""
    field_name = _field_option(opts)
    ranges = []
    for name, spec in _ranges_option(opts).items():
        if not isinstance(spec, Mapping):
            raise AggregationError(f"range {name} option is unexpected: {spec!r}")
        low = spec.get("low")
        if not _is_number(low):
            raise AggregationError(f"range {name} low option is unexpected: {low!r}")
        high = spec.get("high")
        if not _is_number(high):
            raise AggregationError(f"range {name} high option is unexpected: {high!r}")
        ranges.append(NamedRange(name, float(low), float(high)))
    return RangeAggregation(field=field_name, ranges=tuple(ranges))


def date_range_from_options(opts: Mapping[str, Any]) -> DateRangeAggregation:
    """Build a date range aggregation from ``field`` and RFC 3339 ``ranges``."""
    field_name = _field_option(opts)
    ranges = []
    for name, spec in _ranges_option(opts).items():
        if not isinstance(spec, Mapping):
            raise AggregationError(f"range {name} option is unexpected: {spec!r}")
        bounds = []
        for key in ("start", "end"):
            text = spec.get(key)
            if not isinstance(text, str):
                raise AggregationError(f"range {name} {key} option is unexpected: {text!r}")
            try:
                bounds.append(_parse_rfc3339(text))
            except ValueError:
                raise AggregationError(
                    f"range {name} {key} option is unexpected: {text}"
                ) from None
        ranges.append(NamedDateRange(name, bounds[0], bounds[1]))
    return DateRangeAggregation(field=field_name, ranges=tuple(ranges))


def sum_from_options(opts: Mapping[str, Any]) -> MetricAggregation:
    return MetricAggregation(AggregationType.SUM, _field_option(opts))


def min_from_options(opts: Mapping[str, Any]) -> MetricAggregation:
    return MetricAggregation(AggregationType.MIN, _field_option(opts))


def max_from_options(opts: Mapping[str, Any]) -> MetricAggregation:
    return MetricAggregation(AggregationType.MAX, _field_option(opts))


def avg_from_options(opts: Mapping[str, Any]) -> MetricAggregation:
    return MetricAggregation(AggregationType.AVG, _field_option(opts))


_BUILDERS = {
    AggregationType.TERMS.value: terms_from_options,
    AggregationType.RANGE.value: range_from_options,
    AggregationType.DATE_RANGE.value: date_range_from_options,
    AggregationType.SUM.value: sum_from_options,
    AggregationType.MIN.value: min_from_options,
    AggregationType.MAX.value: max_from_options,
    AggregationType.AVG.value: avg_from_options,
}


def _request_parts(request: Any) -> tuple[Any, Any]:
    if isinstance(request, Mapping):
        return request.get("type"), request.get("options")
    return getattr(request, "type", None), getattr(request, "options", None)


def _decode_options(options: Any) -> Any:
    if isinstance(options, (bytes, bytearray, str)):
        try:
            return json.loads(options)
        except ValueError as exc:
            raise AggregationError(f"invalid aggregation options: {exc}") from exc
    return options


def new_aggregations(requests: Mapping[str, Any]) -> dict[str, Any]:
    """Build aggregations from requests carrying ``type`` and JSON ``options``.

    Requests of an unknown type are skipped.
    """
    aggregations: dict[str, Any] = {}
    for name, request in requests.items():
        agg_type, options = _request_parts(request)
        if isinstance(agg_type, AggregationType):
            agg_type = agg_type.value
        builder = _BUILDERS.get(agg_type)
        if builder is None:
            continue
        aggregations[name] = builder(_decode_options(options))
    return aggregations


def sort_by_count(values: Mapping[str, float]) -> list[Pair]:
    """Return the entries of *values* as pairs, largest count first."""
    pairs = [Pair(name, count) for name, count in values.items()]
    return sorted(pairs, key=lambda pair: pair.count, reverse=True)