"""Year Single-Select.

One year at a time from the observed range. Seasons with no tournament keep
their slot on the scale but cannot be picked.
"""

from __future__ import annotations

import config
from models.filter_spec import FilterUpdate, SingleValue
from models.record import Record


def build_year_scale(start: int, end: int, step: int = 1) -> list[int]:
    """Every `step`th year from start to end inclusive (either order)."""
    lo, hi = min(start, end), max(start, end)
    return list(range(lo, hi + 1, max(1, step)))


class YearSingleSelect:

    def __init__(self, years, unavailable=None, step: int = 1):
        observed = sorted({y for y in years if y is not None})
        self.years = build_year_scale(observed[0], observed[-1], step) if observed else []
        self.unavailable = set(config.UNAVAILABLE_YEARS if unavailable is None else unavailable)
        self.selected: int | None = None

    @classmethod
    def from_records(cls, records: list[Record], **kwargs) -> YearSingleSelect:
        return cls([r.year for r in records], **kwargs)

    def is_selectable(self, year: int) -> bool:
        return year in self.years and year not in self.unavailable

    def click(self, year: int) -> FilterUpdate | None:
        """Select a year, or clear it if it is already selected.

        Clicks on unavailable or off-scale years are ignored: no event, no state change.
        """
        if not self.is_selectable(year):
            return None
        if self.selected == year:
            self.selected = None
            return FilterUpdate(config.YEAR_DIMENSION)
        self.selected = year
        return FilterUpdate(config.YEAR_DIMENSION, SingleValue(year))

    def clear(self) -> FilterUpdate:
        self.selected = None
        return FilterUpdate(config.YEAR_DIMENSION)
