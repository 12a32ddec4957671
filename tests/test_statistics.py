from __future__ import annotations

import math

import numpy as np
import pytest

from materialsanalysis.analysis.statistics import (
    StatsSummary, bin_count, describe, histogram, median_ranks, parse_sample, weibull_shape
)

STRENGTHS = "450, 460, 445, 455, 470, 440, 465, 452, 458, 448, 520"


def test_known_sample() -> None:
    summary = describe([5, 3, 1, 4, 2])

    assert summary.n == 5
    assert summary.mean == pytest.approx(3.0)
    assert summary.median == pytest.approx(3.0)
    assert summary.variance == pytest.approx(2.5)
    assert summary.std_dev == pytest.approx(1.5811, abs=1e-4)
    assert summary.min == 1
    assert summary.max == 5
    assert summary.range == 4
    # nearest rank: sorted[floor(1.25)], sorted[floor(3.75)]
    assert summary.q1 == 2
    assert summary.q3 == 4


def test_even_count_median() -> None:
    assert describe([4, 1, 3, 2]).median == pytest.approx(2.5)


def test_single_value_has_zero_variance() -> None:
    summary = describe([7.0])

    assert summary.std_dev == 0.0
    assert summary.cov == 0.0
    assert summary.weibull_shape == 0.0
    assert summary.outliers == ()


def test_empty_sample_gives_no_data_summary() -> None:
    summary = describe(parse_sample("abc, , x"))

    assert summary == StatsSummary.empty()
    assert not summary.has_data
    assert summary.mean is None
    assert summary.weibull_shape is None
    assert summary.histogram == ()


def test_parse_sample_skips_non_numeric() -> None:
    assert parse_sample("1, 2.5, foo, 3e2, ") == [1.0, 2.5, 300.0]


def test_coefficient_of_variation_undefined_for_zero_mean() -> None:
    assert describe([-1.0, 1.0]).cov is None


@pytest.mark.parametrize("n, expected", [(1, 5), (25, 5), (36, 6), (100, 10), (400, 15)])
def test_bin_count_is_clamped(n: int, expected: int) -> None:
    assert bin_count(n) == expected


def test_histogram_covers_every_value() -> None:
    values = parse_sample(STRENGTHS)

    bins = histogram(values)

    assert len(bins) == 5
    assert sum(b.count for b in bins) == len(values)
    assert bins[0].x0 == pytest.approx(440.0)
    assert bins[-1].x1 == pytest.approx(520.0)
    # the maximum folds into the last bin
    assert bins[-1].count >= 1
    for b in bins:
        assert b.x0 < b.mid < b.x1
        assert b.normal >= 0


def test_histogram_with_zero_range() -> None:
    bins = histogram([3.0, 3.0, 3.0])

    assert bins[0].count == 3
    assert bins[0].x1 - bins[0].x0 == pytest.approx(1.0)
    assert all(b.normal == 0.0 for b in bins)


def test_median_ranks_bernard() -> None:
    np.testing.assert_allclose(median_ranks(3), [0.7 / 3.4, 1.7 / 3.4, 2.7 / 3.4])


def test_weibull_shape_matches_manual_regression() -> None:
    values = sorted(parse_sample(STRENGTHS))
    n = len(values)
    x = np.log(values)
    y = np.log(-np.log(1 - (np.arange(n) + 0.7) / (n + 0.4)))
    expected = np.sum((x - x.mean()) * (y - y.mean())) / np.sum((x - x.mean()) ** 2)

    assert weibull_shape(values) == pytest.approx(expected)
    assert describe(values).weibull_shape == pytest.approx(expected)
    assert expected > 10


@pytest.mark.parametrize("values", [[1.0, 2.0], [0.0, 1.0, 2.0], [-1.0, 2.0, 3.0], [4.0, 4.0, 4.0]])
def test_weibull_shape_defaults_to_zero(values) -> None:
    assert weibull_shape(values) == 0.0


def test_outliers_beyond_two_sigma() -> None:
    summary = describe(parse_sample(STRENGTHS))

    assert summary.outliers == (520.0,)
    assert math.isfinite(summary.cov)
