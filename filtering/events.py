"""Coercion of raw selector payloads into FilterUpdate events.

Widgets written against the callback style hand back one of:
- None                              clear the dimension
- (low, high)                       unlabeled range, bound to the default metric
- {"metric": name, "range": [lo, hi]}  named-metric range
plus an int for the year selector and an iterable of ints for seeds.
"""

from collections.abc import Iterable, Mapping

import config
from models.filter_spec import (
    FilterUpdate,
    Range,
    SeedSet,
    SingleValue,
    range_dimension,
)


def coerce_range_payload(payload, default_metric: str = config.WIN_PCT_METRIC,
                         dimension: str | None = None) -> FilterUpdate:
    """Turn a range selector payload into an update. Never raises.

    Args:
        payload: None, a two-element pair, or a {"metric", "range"} mapping
        default_metric: Metric an unlabeled pair refers to
        dimension: Dimension to clear when payload is None (defaults to the
            default metric's range dimension)

    Malformed pairs are normalized: a single bound leaves the other side
    unbounded, extra elements are ignored, and a payload with no numeric
    bound at all clears the metric's dimension.
    """
    if payload is None:
        return FilterUpdate(dimension or range_dimension(default_metric))

    metric = default_metric
    bounds = payload
    if isinstance(payload, Mapping):
        metric = payload.get("metric") or default_metric
        bounds = payload.get("range")

    pair = _pair(bounds)
    if pair is None:
        return FilterUpdate(range_dimension(metric))
    return FilterUpdate(range_dimension(metric), Range(metric, *pair))


def coerce_year_payload(payload) -> FilterUpdate:
    if payload is None:
        return FilterUpdate(config.YEAR_DIMENSION)
    return FilterUpdate(config.YEAR_DIMENSION, SingleValue(int(payload)))


def coerce_seed_payload(payload) -> FilterUpdate:
    if payload is None:
        return FilterUpdate(config.SEED_DIMENSION)
    seeds = SeedSet(payload)
    if not seeds.values:
        return FilterUpdate(config.SEED_DIMENSION)
    return FilterUpdate(config.SEED_DIMENSION, seeds)


def _pair(bounds) -> tuple | None:
    """(low, high) from a raw pair, or None when it carries no numeric bound."""
    if bounds is None or isinstance(bounds, (str, bytes)) or not isinstance(bounds, Iterable):
        return None
    values = list(bounds)[:2]
    values += [None] * (2 - len(values))
    if not any(_is_number(v) for v in values):
        return None
    return values[0], values[1]


def _is_number(value) -> bool:
    try:
        number = float(value)
    except (ValueError, TypeError):
        return False
    return number == number  # NaN
