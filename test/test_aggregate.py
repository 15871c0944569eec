# test/test_aggregate.py
import math

import numpy as np
import pytest

from sviftstats.analysis import Aggregate, Outliers
from sviftstats.analysis import aggregate as stats
from sviftstats.core import (
    Dataset,
    Series,
    EmptyReductionError,
    MalformedDatasetError,
    ShapeMismatchError,
)


def _ds(labels, **series) -> Dataset:
    return Dataset(
        labels=labels,
        series=tuple(Series(identifier=k, values=v) for k, v in series.items()),
    )


@pytest.fixture
def example():
    return _ds(["2020-01-01", "2020-01-02", "2020-01-03"], A=[1, 2, 3], B=[4, 5, 6])


class TestAggregate:
    def test_three_granularities(self, example):
        result = stats.aggregate(example, np.mean)

        assert isinstance(result, Aggregate)
        overall, per_series, per_label = result
        assert overall == 3.5
        assert per_series == (2.0, 5.0)
        assert per_label == (2.5, 3.5, 4.5)
        assert result[0] == result.overall

    def test_reducer_params_are_forwarded(self, example):
        result = stats.aggregate(example, lambda v, k: float(v.max()) * k, 10)
        assert result == Aggregate(60.0, (30.0, 60.0), (40.0, 50.0, 60.0))

    def test_overall_is_series_then_value_order(self, example):
        seen = []

        def record(values):
            seen.append(list(values))
            return 0.0

        stats.aggregate(example, record)
        assert seen[0] == [1, 2, 3, 4, 5, 6]
        assert seen[1:3] == [[1, 2, 3], [4, 5, 6]]
        assert seen[3:] == [[1, 4], [2, 5], [3, 6]]

    def test_sum_consistent_across_granularities(self):
        ds = _ds(["a", "b", "c", "d"], A=[1.5, 2, -3, 4], B=[0, 7, 1, 1], C=[2, 2, 2, 2])
        result = stats.sum(ds)
        assert result.overall == pytest.approx(sum(result.per_series))
        assert result.overall == pytest.approx(sum(result.per_label))

    def test_no_series(self):
        with pytest.raises(MalformedDatasetError):
            stats.mean(Dataset(labels=["a"], series=()))

    def test_series_lengths_differ(self):
        with pytest.raises(ShapeMismatchError):
            stats.mean(_ds(["a", "b"], A=[1, 2], B=[1]))

    def test_series_not_aligned_with_labels(self):
        with pytest.raises(ShapeMismatchError):
            stats.mean(_ds(["a", "b", "c"], A=[1, 2], B=[3, 4]))

    def test_empty_values(self):
        with pytest.raises(EmptyReductionError):
            stats.mean(_ds([], A=[], B=[]))

    def test_idempotent(self, example):
        assert stats.quartiles(example) == stats.quartiles(example)
        assert stats.mean(example) == stats.mean(example)


class TestNamedWrappers:
    def test_basic(self, example):
        assert stats.mean(example) == Aggregate(3.5, (2.0, 5.0), (2.5, 3.5, 4.5))
        assert stats.median(example) == Aggregate(3.5, (2.0, 5.0), (2.5, 3.5, 4.5))
        assert stats.sum(example) == Aggregate(21.0, (6.0, 15.0), (5.0, 7.0, 9.0))
        assert stats.min(example) == Aggregate(1.0, (1.0, 4.0), (1.0, 2.0, 3.0))
        assert stats.max(example) == Aggregate(6.0, (3.0, 6.0), (4.0, 5.0, 6.0))

    def test_sample_variance_and_deviation(self, example):
        var = stats.variance(example)
        assert var.overall == pytest.approx(3.5)
        assert var.per_series == pytest.approx((1.0, 1.0))
        assert var.per_label == pytest.approx((4.5, 4.5, 4.5))

        dev = stats.deviation(example)
        assert dev.overall == pytest.approx(math.sqrt(3.5))
        assert dev.per_series == pytest.approx((1.0, 1.0))

    def test_variance_of_single_value_is_nan(self):
        ds = _ds(["a"], A=[1], B=[3])
        var = stats.variance(ds)
        assert var.overall == pytest.approx(2.0)
        assert all(math.isnan(v) for v in var.per_series)
        assert var.per_label == pytest.approx((2.0,))

    def test_quantile_linear(self, example):
        q = stats.quantile(example, 0.25)
        assert q.overall == pytest.approx(2.25)
        assert q.per_series == pytest.approx((1.5, 4.5))
        assert q.per_label == pytest.approx((1.75, 2.75, 3.75))

    def test_quantile_rejects_bad_p(self, example):
        with pytest.raises(ValueError):
            stats.quantile(example, 1.5)

    def test_quartiles(self, example):
        q1, q2, q3 = stats.quartiles(example)

        assert q1 == stats.quantile(example, 0.25)
        assert q2 == stats.median(example)
        assert q3.overall == pytest.approx(4.75)
        assert q3.per_series == pytest.approx((2.5, 5.5))
        assert q3.per_label == pytest.approx((3.25, 4.25, 5.25))

    def test_skipna(self):
        ds = _ds(["a", "b", "c"], A=[1, None, 3], B=[4, 5, 6])

        skipped = stats.mean(ds)
        assert skipped.overall == pytest.approx(3.8)
        assert skipped.per_series == pytest.approx((2.0, 5.0))
        assert skipped.per_label == pytest.approx((2.5, 5.0, 4.5))

        kept = stats.mean(ds, skipna=False)
        assert math.isnan(kept.overall)
        assert math.isnan(kept.per_series[0])
        assert kept.per_series[1] == 5.0

    def test_label_with_only_missing_values_is_empty(self):
        ds = _ds(["a", "b"], A=[1, None], B=[2, None])

        with pytest.raises(EmptyReductionError):
            stats.mean(ds)
        with pytest.raises(EmptyReductionError):
            stats.quartiles(ds)

        kept = stats.mean(ds, skipna=False)
        assert math.isnan(kept.per_label[1])

    def test_generic_aggregate_skipna(self):
        ds = _ds(["a", "b"], A=[1, None], B=[3, 5])

        seen = []
        stats.aggregate(ds, lambda v: seen.append(v.size) or 0.0, skipna=True)
        assert seen == [3, 1, 2, 2, 1]

    def test_summary(self, example):
        out = stats.summary(example)
        assert list(out) == ["min", "max", "mean", "median", "deviation"]
        assert out["mean"] == stats.mean(example)


class TestOutliers:
    def test_per_granularity_fences(self):
        ds = _ds(["a", "b", "c", "d", "e"], A=[1, 2, 3, 4, 100], B=[2, 3, 4, 5, 6])
        result = stats.outliers(ds)

        assert isinstance(result, Outliers)
        assert result.overall == ((4, 100.0),)
        assert result.per_series == (((4, 100.0),), ())
        # two values per label position can never fall outside their own fences
        assert result.per_label == ((), (), (), (), ())

    def test_column_dataset(self):
        ds = Dataset(
            labels=["x"],
            series=tuple(Series(identifier=f"s{i}", values=[v]) for i, v in enumerate([1, 2, 3, 4, 50])),
        )
        result = stats.outliers(ds)

        assert result.overall == ((4, 50.0),)
        assert result.per_series == ((),) * 5
        assert result.per_label == (((4, 50.0),),)

    def test_low_outlier_and_factor(self):
        ds = _ds(["a", "b", "c", "d", "e"], A=[-40, 10, 11, 12, 13])

        assert stats.outliers(ds).per_series == (((0, -40.0),),)
        assert stats.outliers(ds, factor=100).per_series == ((),)

    def test_no_outliers(self, example):
        result = stats.outliers(example)
        assert result.overall == ()
        assert result.per_series == ((), ())
        assert result.per_label == ((), (), ())

    def test_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            stats.outliers(_ds(["a", "b"], A=[1, 2], B=[1]))
