"""Filter State Reducer.

Owns the composite FilterState. Selectors never touch it directly: they
emit FilterUpdate events and the reducer is the only writer. A record
passes the effective predicate iff it passes every active dimension.
"""

from __future__ import annotations

from collections.abc import Iterable

import config
from models.filter_spec import (
    FilterState,
    FilterUpdate,
    Range,
    SeedSet,
    SingleValue,
    metric_for_dimension,
)
from models.record import Record


class FilterReducer:
    """Single owner of the active filters for one dataset."""

    def __init__(self, records: Iterable[Record] = ()):
        self.records: list[Record] = list(records)
        self.state: FilterState = {}

    def apply(self, dimension: str, spec) -> FilterState:
        """Set one dimension's spec and return the new state.

        spec=None (or an empty SeedSet) removes the dimension. The previous
        state mapping is left untouched.
        """
        if spec is None or (isinstance(spec, SeedSet) and not spec.values):
            return self.clear(dimension)

        _check_dimension(dimension, spec)
        new_state = dict(self.state)
        new_state[dimension] = spec
        self.state = new_state
        return self.state

    def clear(self, dimension: str) -> FilterState:
        new_state = dict(self.state)
        new_state.pop(dimension, None)
        self.state = new_state
        return self.state

    def clear_all(self) -> FilterState:
        self.state = {}
        return self.state

    def dispatch(self, update: FilterUpdate) -> list[Record]:
        """Apply one selector event and re-evaluate the bound records."""
        self.apply(update.dimension, update.spec)
        return self.filtered()

    def filtered(self) -> list[Record]:
        return evaluate(self.records, self.state)

    def replace_records(self, records: Iterable[Record]):
        """Swap the underlying dataset. Filters are reset."""
        self.records = list(records)
        self.clear_all()


def evaluate(records: Iterable[Record], state: FilterState) -> list[Record]:
    """Records passing every active spec, in input order."""
    active = [spec for spec in state.values() if spec is not None]
    return [r for r in records if all(passes(r, spec) for spec in active)]


def passes(record: Record, spec) -> bool:
    """Whether one record satisfies one spec. None is no constraint."""
    if spec is None:
        return True
    if isinstance(spec, Range):
        return spec.contains(record.value(spec.metric))
    if isinstance(spec, SeedSet):
        # An empty set never reaches here through apply(); treat it as inactive anyway
        if not spec.values:
            return True
        return record.seed is not None and record.seed in spec.values
    if isinstance(spec, SingleValue):
        return record.year is not None and record.year == spec.value
    raise TypeError(f"Unknown filter spec: {spec!r}")


def _check_dimension(dimension: str, spec):
    if isinstance(spec, Range):
        if metric_for_dimension(dimension) != spec.metric:
            raise ValueError(f"Range on {spec.metric!r} cannot be applied to dimension {dimension!r}")
    elif isinstance(spec, SeedSet):
        if dimension != config.SEED_DIMENSION:
            raise ValueError(f"Seed set cannot be applied to dimension {dimension!r}")
    elif isinstance(spec, SingleValue):
        if dimension != config.YEAR_DIMENSION:
            raise ValueError(f"Single value cannot be applied to dimension {dimension!r}")
    else:
        raise TypeError(f"Unknown filter spec: {spec!r}")
