"""Filter specifications and the update event selectors emit.

A FilterSpec is one dimension's constraint:

- None             no constraint (also what an absent dimension means)
- SingleValue(v)   year selector, record.year == v
- SeedSet(values)  seed selector, record.seed in values
- Range(m, lo, hi) win % or any named metric, lo <= value <= hi

Every Range metric owns its own dimension ("range:<metric>"), so several
ranges can be active at once. FilterState maps dimension -> spec.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import config


@dataclass(frozen=True)
class SingleValue:
    value: int


@dataclass(frozen=True)
class SeedSet:
    values: frozenset[int]

    def __post_init__(self):
        object.__setattr__(self, "values", frozenset(int(v) for v in self.values))


@dataclass(frozen=True)
class Range:
    """Closed numeric interval on one metric.

    Bounds are normalized on construction: a bound that is not a number
    becomes unbounded on its side, and a reversed pair is swapped.
    """
    metric: str
    low: float
    high: float

    def __post_init__(self):
        low = _coerce_bound(self.low, -math.inf)
        high = _coerce_bound(self.high, math.inf)
        if low > high:
            low, high = high, low
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    @property
    def dimension(self) -> str:
        return range_dimension(self.metric)

    def contains(self, value: float | None) -> bool:
        if value is None:
            return False
        return self.low <= value <= self.high


FilterSpec = SingleValue | SeedSet | Range | None
FilterState = dict[str, "SingleValue | SeedSet | Range"]


@dataclass(frozen=True)
class FilterUpdate:
    """One selector emission. spec=None clears the dimension."""
    dimension: str
    spec: SingleValue | SeedSet | Range | None = None

    @property
    def is_clear(self) -> bool:
        return self.spec is None


def range_dimension(metric: str) -> str:
    """Dimension name owned by a metric's Range spec."""
    return f"{config.RANGE_DIMENSION_PREFIX}{metric}"


def metric_for_dimension(dimension: str) -> str | None:
    """Inverse of range_dimension(); None for the year and seed dimensions."""
    if dimension.startswith(config.RANGE_DIMENSION_PREFIX):
        return dimension[len(config.RANGE_DIMENSION_PREFIX):]
    return None


def _coerce_bound(value, fallback: float) -> float:
    try:
        bound = float(value)
    except (ValueError, TypeError):
        return fallback
    if math.isnan(bound):
        return fallback
    return bound
