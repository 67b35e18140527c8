"""Tests for filter specs and raw payload coercion."""

import math

import pytest

import config
from filtering.events import coerce_range_payload, coerce_seed_payload, coerce_year_payload
from models.filter_spec import (
    FilterUpdate,
    Range,
    SeedSet,
    SingleValue,
    metric_for_dimension,
    range_dimension,
)


class TestRange:

    def test_reversed_bounds_are_swapped(self):
        spec = Range("EFG_O", 60, 50)
        assert (spec.low, spec.high) == (50.0, 60.0)

    def test_non_numeric_bounds_become_unbounded(self):
        spec = Range("EFG_O", "abc", None)
        assert spec.low == -math.inf
        assert spec.high == math.inf

    def test_numeric_strings_are_coerced(self):
        spec = Range("EFG_O", "52.5", "48")
        assert (spec.low, spec.high) == (48.0, 52.5)

    def test_equal_after_normalization(self):
        assert Range("3P_O", 40, 30) == Range("3P_O", 30, 40)

    def test_dimension_round_trip(self):
        spec = Range("3P_D", 0, 1)
        assert spec.dimension == "range:3P_D"
        assert metric_for_dimension(spec.dimension) == "3P_D"
        assert metric_for_dimension(config.YEAR_DIMENSION) is None


class TestRangePayload:

    def test_none_clears_default_metric(self):
        update = coerce_range_payload(None)
        assert update == FilterUpdate(range_dimension(config.WIN_PCT_METRIC))
        assert update.is_clear

    def test_none_clears_given_dimension(self):
        update = coerce_range_payload(None, dimension=range_dimension("EFG_D"))
        assert update.dimension == "range:EFG_D"
        assert update.spec is None

    def test_bare_pair_binds_to_default_metric(self):
        update = coerce_range_payload([72.0, 58.0])
        assert update == FilterUpdate(
            range_dimension(config.WIN_PCT_METRIC), Range(config.WIN_PCT_METRIC, 58.0, 72.0),
        )

    def test_named_metric_payload(self):
        update = coerce_range_payload({"metric": "3P_O", "range": [33, 38]})
        assert update.dimension == "range:3P_O"
        assert update.spec == Range("3P_O", 33, 38)

    def test_named_metric_without_range_clears(self):
        update = coerce_range_payload({"metric": "3P_O", "range": None})
        assert update == FilterUpdate("range:3P_O")

    def test_pair_and_object_produce_same_spec(self):
        pair = coerce_range_payload((60, 80))
        named = coerce_range_payload({"metric": config.WIN_PCT_METRIC, "range": (60, 80)})
        assert pair == named

    def test_single_bound_is_open_ended(self):
        update = coerce_range_payload([60])
        assert update.spec == Range(config.WIN_PCT_METRIC, 60, math.inf)

    def test_extra_elements_are_ignored(self):
        update = coerce_range_payload([60, 70, 80])
        assert update.spec == Range(config.WIN_PCT_METRIC, 60, 70)

    def test_one_numeric_bound_in_pair(self):
        update = coerce_range_payload({"metric": "EFG_O", "range": ["x", 52]})
        assert update.spec == Range("EFG_O", -math.inf, 52)

    @pytest.mark.parametrize("payload", [
        "60-80",
        42,
        [],
        ["low", "high"],
        [float("nan"), None],
        {"metric": "EFG_O", "range": "60-70"},
    ])
    def test_unusable_payload_clears(self, payload):
        update = coerce_range_payload(payload)
        assert update.is_clear

    def test_unusable_named_payload_clears_its_metric(self):
        update = coerce_range_payload({"metric": "EFG_O", "range": "60-70"})
        assert update == FilterUpdate("range:EFG_O")


class TestYearAndSeedPayloads:

    def test_year_payload(self):
        assert coerce_year_payload(2019) == FilterUpdate(config.YEAR_DIMENSION, SingleValue(2019))
        assert coerce_year_payload(None) == FilterUpdate(config.YEAR_DIMENSION)

    def test_seed_payload(self):
        update = coerce_seed_payload([2, 1, 2])
        assert update.spec == SeedSet({1, 2})

    def test_empty_seed_payload_clears(self):
        assert coerce_seed_payload([]) == FilterUpdate(config.SEED_DIMENSION)
        assert coerce_seed_payload(None) == FilterUpdate(config.SEED_DIMENSION)
