"""Linear Range Selector.

A distribution strip for one numeric field. The user drags across it and
the selector emits the dragged interval, in domain units, on every move so
the filtered view updates live.

Pixel coordinates run along [range_start, range_end]; pointer positions are
clamped into that band before inversion, the way a brush clamps to its extent.
"""

from __future__ import annotations

import math

import config
from models.filter_spec import FilterUpdate, Range, range_dimension
from models.record import Record
from models.scale import LinearScale
from selection.histogram import Histogram, build_histogram


class LinearRangeSelector:
    """Drag-to-select range over one metric."""

    def __init__(self, metric: str, values, domain: tuple[float, float] | None = None,
                 width: float = config.DEFAULT_SELECTOR_WIDTH,
                 range_start: float = 0.0, range_end: float | None = None,
                 bin_count: int = config.METRIC_HISTOGRAM_BINS,
                 nice_bins: bool = False, pad_bins: bool = False):
        self.metric = metric
        self.dimension = range_dimension(metric)
        observed = [v for v in values if v is not None and not math.isnan(v)]

        if domain is None:
            domain = (min(observed), max(observed)) if observed else (0.0, 0.0)
        self.scale = LinearScale(domain, (range_start, width if range_end is None else range_end))
        self.histogram: Histogram = build_histogram(
            observed, self.scale.domain, bin_count, nice=nice_bins, pad=pad_bins,
        )

        self._start: float | None = None
        self.selection: tuple[float, float] | None = None  # pixel extent being shown

    @classmethod
    def for_metric(cls, records: list[Record], metric: str, **kwargs) -> LinearRangeSelector:
        return cls(metric, [r.value(metric) for r in records], **kwargs)

    @classmethod
    def for_win_pct(cls, records: list[Record], width: float = config.DEFAULT_SELECTOR_WIDTH,
                    **kwargs) -> LinearRangeSelector:
        """Win % strip: domain [floor(lowest win %), 100], nice thresholds, padded ends."""
        values = [r.value(config.WIN_PCT_METRIC) for r in records]
        observed = [v for v in values if v is not None]
        low = math.floor(min(observed)) if observed else 0.0
        kwargs.setdefault("bin_count", config.WIN_PCT_TICK_COUNT)
        kwargs.setdefault("nice_bins", True)
        kwargs.setdefault("pad_bins", True)
        return cls(config.WIN_PCT_METRIC, values, domain=(low, config.WIN_PCT_MAX),
                   width=width, **kwargs)

    @property
    def active(self) -> bool:
        return self._start is not None

    def drag_start(self, px: float):
        """Begin a gesture. Any selection not yet finalized is superseded."""
        self._start = self.scale.clamp_to_range(px)
        self.selection = None

    def drag_move(self, px: float) -> FilterUpdate | None:
        """Emit the current interval. None if no gesture is in progress."""
        if self._start is None:
            return None
        current = self.scale.clamp_to_range(px)
        lo_px, hi_px = sorted((self._start, current))
        self.selection = (lo_px, hi_px)
        return self._emit(lo_px, hi_px)

    def drag_end(self, px: float) -> FilterUpdate | None:
        """Finish the gesture and emit the final interval.

        A click without movement leaves an empty selection, which clears the dimension.
        """
        if self._start is None:
            return None
        update = self.drag_move(px)
        self._start = None
        if self.selection is not None and self.selection[0] == self.selection[1]:
            return self.reset()
        return update

    def reset(self) -> FilterUpdate:
        """External reset (e.g. click elsewhere): drop the selection and clear."""
        self._start = None
        self.selection = None
        return FilterUpdate(self.dimension)

    def _emit(self, lo_px: float, hi_px: float) -> FilterUpdate:
        low = self.scale.invert(lo_px)
        high = self.scale.invert(hi_px)
        return FilterUpdate(self.dimension, Range(self.metric, low, high))
