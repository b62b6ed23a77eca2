"""Tests for level reordering."""
import numpy as np
import pandas as pd
import pytest

from levelwise.aggregates import AGGREGATES, aggregate, resolve_aggregate
from levelwise.config import FactorConfig
from levelwise.errors import EmptyGroup, UnknownLevel
from levelwise.factor import from_labels
from levelwise.reorder import (
    manual_relevel, reorder_by_appearance, reorder_by_frequency,
    reorder_by_statistic, reorder_by_statistic_pair, reverse,
)


# ============================================================================
# Tests: reorder_by_statistic
# ============================================================================

class TestReorderByStatistic:
    def test_median_ascending(self):
        seq = from_labels(["a", "a", "b", "b", "c"])
        out = reorder_by_statistic(seq, [5, 7, 1, 3, 4])
        # medians: a=6, b=2, c=4
        assert out.catalog == ["b", "c", "a"]
        assert out.labels == seq.labels

    def test_mean_descending(self):
        seq = from_labels(["a", "b", "b", "c"])
        out = reorder_by_statistic(seq, [1.0, 2.0, 10.0, 3.0], aggregate="mean", descending=True)
        # means: a=1, b=6, c=3
        assert out.catalog == ["b", "c", "a"]

    def test_ties_keep_catalog_order(self):
        seq = from_labels(["x", "y", "z"], levels=["z", "y", "x"])
        out = reorder_by_statistic(seq, [1, 1, 1], aggregate="sum")
        assert out.catalog == ["z", "y", "x"]

    def test_nan_values_skipped(self):
        seq = from_labels(["a", "a", "b"])
        out = reorder_by_statistic(seq, [np.nan, 9, 1], aggregate="mean")
        assert out.catalog == ["b", "a"]

    def test_missing_category_ignored(self):
        seq = from_labels(["a", None, "b"])
        out = reorder_by_statistic(seq, [5, -100, 1], aggregate="mean")
        assert out.catalog == ["b", "a"]

    def test_count_aggregate(self):
        seq = from_labels(["a", "b", "b", "b", "c", "c"])
        out = reorder_by_statistic(seq, [0] * 6, aggregate="count", descending=True)
        assert out.catalog == ["b", "c", "a"]

    def test_callable_aggregate(self):
        seq = from_labels(["a", "b", "b"])
        out = reorder_by_statistic(seq, [5, 1, 2], aggregate=lambda s: s.max())
        assert out.catalog == ["b", "a"]

    def test_pandas_values_with_index(self):
        seq = from_labels(["a", "b"])
        values = pd.Series([9, 1], index=[10, 20])
        assert reorder_by_statistic(seq, values).catalog == ["b", "a"]

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            reorder_by_statistic(from_labels(["a", "b"]), [1])

    def test_unknown_aggregate(self):
        with pytest.raises(ValueError):
            reorder_by_statistic(from_labels(["a"]), [1], aggregate="mode")


class TestEmptyGroupPolicy:
    def _seq(self):
        # "b" has no observations, "d" only has NaN values
        return from_labels(["c", "a", "d"], levels=["a", "b", "c", "d"])

    def test_last_is_default(self):
        out = reorder_by_statistic(self._seq(), [1, 5, np.nan])
        assert out.catalog == ["c", "a", "b", "d"]

    def test_keep_prior_position(self):
        out = reorder_by_statistic(self._seq(), [1, 5, np.nan], empty="keep")
        # b and d stay at positions 1 and 3, c and a fill 0 and 2
        assert out.catalog == ["c", "b", "a", "d"]

    def test_error(self):
        with pytest.raises(EmptyGroup) as exc:
            reorder_by_statistic(self._seq(), [1, 5, np.nan], empty="error")
        assert exc.value.labels == ("b", "d")

    def test_policy_from_config(self):
        with pytest.raises(EmptyGroup):
            reorder_by_statistic(self._seq(), [1, 5, np.nan],
                                 config=FactorConfig(empty_groups="error"))

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            reorder_by_statistic(self._seq(), [1, 5, 3], empty="first")


# ============================================================================
# Tests: reorder_by_statistic_pair
# ============================================================================

class TestReorderByStatisticPair:
    def test_orders_by_value_at_last_x(self):
        seq = from_labels(["a", "a", "b", "b", "c", "c"])
        x = [2000, 2010, 2000, 2010, 2000, 2010]
        y = [0.9, 0.1, 0.1, 0.5, 0.5, 0.3]
        out = reorder_by_statistic_pair(seq, x, y)
        # values at 2010: a=0.1, b=0.5, c=0.3, largest first
        assert out.catalog == ["b", "c", "a"]

    def test_last_x_is_per_level(self):
        seq = from_labels(["a", "a", "b"])
        out = reorder_by_statistic_pair(seq, [1, 2, 1], [10, 1, 5])
        # a ends at x=2 with 1, b ends at x=1 with 5
        assert out.catalog == ["b", "a"]

    def test_aggregates_within_pair(self):
        seq = from_labels(["a", "a", "b"])
        out = reorder_by_statistic_pair(seq, [1, 1, 1], [2, 8, 4], aggregate="mean")
        assert out.catalog == ["a", "b"]

    def test_ascending(self):
        seq = from_labels(["a", "b"])
        out = reorder_by_statistic_pair(seq, [1, 1], [9, 1], descending=False)
        assert out.catalog == ["b", "a"]

    def test_empty_level_last(self):
        seq = from_labels(["a", "b"], levels=["z", "a", "b"])
        out = reorder_by_statistic_pair(seq, [1, 1], [1, 2])
        assert out.catalog == ["b", "a", "z"]

    def test_empty_level_keeps_position(self):
        seq = from_labels(["a", "b"], levels=["z", "a", "b"])
        out = reorder_by_statistic_pair(seq, [1, 1], [1, 2], empty="keep")
        assert out.catalog == ["z", "b", "a"]

    def test_empty_level_error(self):
        seq = from_labels(["a", "b"], levels=["z", "a", "b"])
        with pytest.raises(EmptyGroup) as exc:
            reorder_by_statistic_pair(seq, [1, 1], [1, 2], empty="error")
        assert exc.value.labels == ("z",)

    def test_empty_policy_from_config(self):
        seq = from_labels(["a", "b"], levels=["z", "a", "b"])
        with pytest.raises(EmptyGroup):
            reorder_by_statistic_pair(seq, [1, 1], [1, 2],
                                      config=FactorConfig(empty_groups="error"))


# ============================================================================
# Tests: manual / reverse / frequency / appearance
# ============================================================================

class TestManualRelevel:
    def test_scenario(self):
        seq = from_labels(["y", "x", "z"], levels=["x", "y", "z"])
        out = manual_relevel(seq, front=["z"])
        assert out.catalog == ["z", "x", "y"]
        assert out.labels == ["y", "x", "z"]

    def test_single_string(self):
        seq = from_labels(["a", "b", "c"])
        assert manual_relevel(seq, "c").catalog == ["c", "a", "b"]

    def test_after(self):
        seq = from_labels(["a", "b", "c", "d"])
        assert manual_relevel(seq, ["d"], after=2).catalog == ["a", "b", "d", "c"]

    def test_unknown(self):
        with pytest.raises(UnknownLevel):
            manual_relevel(from_labels(["a"]), ["b"])

    def test_input_untouched(self):
        seq = from_labels(["a", "b"])
        manual_relevel(seq, ["b"])
        assert seq.catalog == ["a", "b"]


class TestReverse:
    def test_reverse(self):
        seq = from_labels(["a", "b", "c", "a"])
        out = reverse(seq)
        assert out.catalog == ["c", "b", "a"]
        assert out.labels == ["a", "b", "c", "a"]

    def test_double_reverse_is_identity(self):
        seq = from_labels(["q", "w", "e", None, "q"])
        assert reverse(reverse(seq)) == seq


class TestReorderByFrequency:
    def test_most_frequent_first(self):
        seq = from_labels(["a", "b", "b", "c", "c", "c"])
        assert reorder_by_frequency(seq).catalog == ["c", "b", "a"]

    def test_ties_and_empty_levels(self):
        seq = from_labels(["b", "a"], levels=["z", "a", "b"])
        assert reorder_by_frequency(seq).catalog == ["a", "b", "z"]


class TestReorderByAppearance:
    def test_appearance(self):
        seq = from_labels(["c", "a", "c"], levels=["a", "b", "c"])
        assert reorder_by_appearance(seq).catalog == ["c", "a", "b"]


# ============================================================================
# Tests: aggregate registry
# ============================================================================

class TestAggregates:
    def test_builtins_registered(self):
        for name in ("mean", "median", "sum", "count", "min", "max", "last"):
            assert name in AGGREGATES

    def test_empty_group_is_nan(self):
        assert np.isnan(AGGREGATES["mean"](pd.Series([np.nan])))

    def test_register_custom(self):
        @aggregate("range_for_test")
        def value_range(values):
            return values.max() - values.min()

        try:
            agg = resolve_aggregate("range_for_test")
            assert agg(pd.Series([1.0, 4.0])) == 3.0
            assert resolve_aggregate(value_range) is agg
        finally:
            AGGREGATES.pop("range_for_test")

    def test_bad_aggregate(self):
        with pytest.raises(TypeError):
            resolve_aggregate(42)
