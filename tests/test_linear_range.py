"""Tests for scales, histograms and the linear range selector."""

import pytest

import config
from filtering.reducer import FilterReducer
from models.filter_spec import FilterUpdate, Range
from models.scale import LinearScale, nice_ticks, tick_step
from selection.histogram import build_histogram
from selection.linear_range import LinearRangeSelector


# =============================================================================
# LinearScale
# =============================================================================

class TestLinearScale:

    def test_maps_and_inverts(self):
        scale = LinearScale((50, 100), (0, 500))
        assert scale(75) == pytest.approx(250)
        assert scale.invert(250) == pytest.approx(75)

    def test_offset_range(self):
        scale = LinearScale((0, 10), (15, 115))
        assert scale(0) == pytest.approx(15)
        assert scale.invert(115) == pytest.approx(10)

    def test_degenerate_domain_is_widened(self):
        scale = LinearScale((60, 60), (0, 300))
        assert scale.domain[1] > scale.domain[0]
        assert scale.invert(0) == pytest.approx(60)
        assert scale.invert(300) == 60
        assert scale.invert(150) == 60

    def test_zero_width_range_inverts_to_domain_start(self):
        scale = LinearScale((10, 20), (5, 5))
        assert scale.invert(5) == 10

    def test_clamp_to_range(self):
        scale = LinearScale((0, 1), (10, 110))
        assert scale.clamp_to_range(-5) == 10
        assert scale.clamp_to_range(500) == 110
        assert scale.clamp_to_range(42) == 42


class TestNiceTicks:

    def test_tick_step_is_round(self):
        assert tick_step(0, 100, 10) == 10
        assert tick_step(38, 100, 15) == 5
        assert tick_step(0, 1, 5) == pytest.approx(0.2)

    def test_ticks_within_bounds(self):
        ticks = nice_ticks(38, 100, 15)
        assert ticks[0] == 40
        assert ticks[-1] == 100
        assert all(b - a == pytest.approx(5) for a, b in zip(ticks, ticks[1:]))

    def test_degenerate_range(self):
        assert nice_ticks(5, 5, 10) == [5]


# =============================================================================
# Histogram
# =============================================================================

class TestHistogram:

    def test_equal_width_bins(self):
        hist = build_histogram([0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10], (0, 10), 5)
        assert [b.count for b in hist.bins] == [2, 2, 2, 2, 3]  # last bin includes the top edge
        assert hist.total == 11
        assert hist.max_count == 3

    def test_ignores_missing_and_out_of_domain(self):
        hist = build_histogram([None, float("nan"), -1, 5, 11], (0, 10), 2)
        assert hist.total == 1

    def test_nice_bins_use_round_thresholds(self):
        hist = build_histogram([41, 44, 52, 99], (38, 100), 15, nice=True)
        assert hist.bins[0].x0 == 38
        assert hist.bins[0].x1 == 40
        assert hist.bins[1].x0 == 40
        assert hist.bins[-1].x1 == 100
        assert hist.total == 4

    def test_padding_adds_empty_end_bins(self):
        hist = build_histogram([1, 2, 3], (0, 10), 4, pad=True)
        assert len(hist.bins) == 6
        assert hist.bins[0].count == 0 and hist.bins[0].x0 == hist.bins[0].x1 == 0
        assert hist.bins[-1].count == 0 and hist.bins[-1].x0 == hist.bins[-1].x1 == 10

    def test_bad_bin_count(self):
        with pytest.raises(ValueError):
            build_histogram([1], (0, 1), 0)


# =============================================================================
# LinearRangeSelector
# =============================================================================

class TestLinearRangeSelector:

    def test_emits_on_every_move(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        selector.drag_start(50)
        first = selector.drag_move(100)
        second = selector.drag_move(150)

        assert first.dimension == "range:EFG_O"
        assert isinstance(first.spec, Range)
        assert (first.spec.low, first.spec.high) == (pytest.approx(45), pytest.approx(50))
        assert second.spec.high == pytest.approx(55)
        assert selector.selection == (50, 150)

    def test_backwards_drag_is_ordered(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        selector.drag_start(150)
        update = selector.drag_move(50)
        assert update.spec.low == pytest.approx(45)
        assert update.spec.high == pytest.approx(55)

    def test_pointer_outside_strip_is_clamped(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        selector.drag_start(-40)
        update = selector.drag_move(900)
        assert update.spec.low == pytest.approx(40)
        assert update.spec.high == pytest.approx(60)

    def test_move_without_gesture_is_ignored(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        assert selector.drag_move(10) is None
        assert selector.drag_end(10) is None

    def test_drag_end_emits_final_range(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        selector.drag_start(0)
        update = selector.drag_end(100)
        assert update.spec.high == pytest.approx(50)
        assert not selector.active
        assert selector.selection == (0, 100)

    def test_click_without_drag_clears(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        selector.drag_start(80)
        update = selector.drag_end(80)
        assert update == FilterUpdate("range:EFG_O")
        assert selector.selection is None

    def test_new_gesture_supersedes_selection(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        selector.drag_start(0)
        selector.drag_move(100)
        selector.drag_start(150)
        assert selector.selection is None
        update = selector.drag_move(200)
        assert update.spec.low == pytest.approx(55)

    def test_reset_clears(self):
        selector = LinearRangeSelector("EFG_O", [40, 60], width=200)
        selector.drag_start(0)
        selector.drag_move(100)
        update = selector.reset()
        assert update.is_clear
        assert update.dimension == "range:EFG_O"
        assert selector.selection is None

    def test_degenerate_domain_does_not_crash(self):
        selector = LinearRangeSelector("EFG_O", [50.0, 50.0, 50.0], width=200)
        selector.drag_start(0)
        update = selector.drag_move(200)
        assert update.spec.contains(50.0)
        assert selector.histogram.total == 3

    def test_degenerate_domain_partial_drag_keeps_value(self):
        selector = LinearRangeSelector("EFG_O", [50.0, 50.0], width=200)
        selector.drag_start(100)
        update = selector.drag_move(200)
        assert update.spec == Range("EFG_O", 50.0, 50.0)

    def test_no_values_does_not_crash(self):
        selector = LinearRangeSelector("EFG_O", [], width=200)
        selector.drag_start(0)
        assert selector.drag_move(100) is not None

    def test_win_pct_domain(self, records):
        selector = LinearRangeSelector.for_win_pct(records, width=300)
        assert selector.scale.domain == (60.0, 100.0)
        assert selector.metric == config.WIN_PCT_METRIC
        # padded empty bins at both ends
        assert selector.histogram.bins[0].count == 0
        assert selector.histogram.bins[-1].count == 0
        assert selector.histogram.total == len(records)

    def test_for_metric_uses_observed_domain(self, records):
        selector = LinearRangeSelector.for_metric(records, "EFG_O", bin_count=10)
        assert selector.scale.domain == (51.5, 61.0)
        assert len(selector.histogram.bins) == 10


class TestWinPctDragEndToEnd:

    def test_drag_selects_middle_three(self, win_pct_records):
        selector = LinearRangeSelector(
            config.WIN_PCT_METRIC, [r.win_pct for r in win_pct_records], domain=(50, 100), width=500,
        )
        reducer = FilterReducer(win_pct_records)

        selector.drag_start(220)
        update = selector.drag_move(80)
        assert update.spec.low == pytest.approx(58)
        assert update.spec.high == pytest.approx(72)

        result = reducer.dispatch(update)
        assert [r.win_pct for r in result] == [60, 65, 70]
