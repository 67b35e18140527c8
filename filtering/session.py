"""Explorer session: selectors -> reducer -> layout.

One user gesture reaches one selector, the selector returns a FilterUpdate,
and handle() applies it, re-evaluates the dataset and feeds the result to the
bubble layout as a continuation. Every update is fully applied before the
next one is accepted; layout ticks are driven separately so input can be
interleaved with them.
"""

from __future__ import annotations

import config
from filtering.reducer import FilterReducer
from layout.bubbles import Bubble, BubbleLayout
from models.filter_spec import FilterUpdate
from models.record import Record
from selection.angular_range import AngularRangeSelector
from selection.linear_range import LinearRangeSelector
from selection.seed_select import SeedMultiSelect
from selection.year_select import YearSingleSelect


class ExplorerSession:

    def __init__(self, records: list[Record], layout: BubbleLayout | None = None,
                 selector_width: float = config.DEFAULT_SELECTOR_WIDTH):
        self.selector_width = selector_width
        self.reducer = FilterReducer(records)
        self.layout = layout if layout is not None else BubbleLayout()
        self.filtered: list[Record] = []
        self._build_selectors()
        self._refresh(restart=True)

    @property
    def records(self) -> list[Record]:
        return self.reducer.records

    @property
    def state(self):
        return self.reducer.state

    def handle(self, update: FilterUpdate | None) -> list[Record]:
        """Apply one selector event. None (an ignored gesture) changes nothing."""
        if update is None:
            return self.filtered
        self.reducer.dispatch(update)
        self._refresh()
        return self.filtered

    def clear_all(self) -> list[Record]:
        self.reducer.clear_all()
        self.seed_select.clear()
        self.year_select.clear()
        for selector in list(self.linear_selectors.values()) + list(self.angular_selectors.values()):
            selector.reset()
        self._refresh()
        return self.filtered

    def replace_dataset(self, records: list[Record]) -> list[Record]:
        """Swap in a new dataset: filters reset, selectors rebuilt, layout restarted."""
        self.reducer.replace_records(records)
        self._build_selectors()
        self._refresh(restart=True)
        return self.filtered

    def bubbles(self) -> list[Bubble]:
        return self.layout.bubbles()

    def _refresh(self, restart: bool = False):
        self.filtered = self.reducer.filtered()
        if restart:
            self.layout.replace(self.filtered)
        else:
            self.layout.update(self.filtered)

    def _build_selectors(self):
        records = self.reducer.records
        self.year_select = YearSingleSelect.from_records(records)
        self.seed_select = SeedMultiSelect()
        self.win_pct_select = LinearRangeSelector.for_win_pct(records, width=self.selector_width)

        self.linear_selectors: dict[str, LinearRangeSelector] = {}
        self.angular_selectors: dict[str, AngularRangeSelector] = {}
        present = {m for r in records for m, v in r.metrics.items() if v is not None}
        for metric in config.LINEAR_METRICS:
            if metric in present:
                self.linear_selectors[metric] = LinearRangeSelector.for_metric(
                    records, metric, width=self.selector_width,
                )
        for metric, orientation in config.ANGULAR_METRICS.items():
            if metric in present:
                self.angular_selectors[metric] = AngularRangeSelector.for_metric(
                    records, metric, orientation=orientation,
                )
        self.linear_selectors[config.WIN_PCT_METRIC] = self.win_pct_select
