"""Time grids and incremental statistics."""

import numpy as np
import pytest

from curvelib.errors import ValidationError
from curvelib.math import IncrementalStatistics, TimeGrid


# ---------------------------------------------------------------------------
# TimeGrid
# ---------------------------------------------------------------------------
def test_regular_grid():
    grid = TimeGrid(2.0, 4)
    assert list(grid) == pytest.approx([0.0, 0.5, 1.0, 1.5, 2.0])
    assert grid.dt(1) == pytest.approx(0.5)


def test_grid_with_mandatory_times():
    grid = TimeGrid.from_mandatory_times([1.0, 2.0, 4.0], 8)
    assert list(grid) == pytest.approx([0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0])
    assert grid.mandatory_times == [1.0, 2.0, 4.0]
    assert grid.index(2.0) == 4


def test_grid_without_steps_keeps_mandatory_times_only():
    grid = TimeGrid.from_mandatory_times([2.0, 1.0, 1.0])
    assert list(grid) == [0.0, 1.0, 2.0]


def test_grid_lookup():
    grid = TimeGrid.from_mandatory_times([1.0, 2.0, 4.0], 8)
    assert grid.closest_index(1.2) == 2
    assert grid.closest_time(3.8) == pytest.approx(4.0)
    with pytest.raises(ValidationError):
        grid.index(1.2)


def test_grid_rejects_negative_times():
    with pytest.raises(ValidationError):
        TimeGrid.from_mandatory_times([-1.0, 1.0], 4)
    with pytest.raises(ValidationError):
        TimeGrid.from_mandatory_times([], 4)


# ---------------------------------------------------------------------------
# IncrementalStatistics
# ---------------------------------------------------------------------------
@pytest.fixture(scope="module")
def weighted_samples():
    rng = np.random.default_rng(42)
    values = rng.normal(0.5, 2.0, 500_000)
    weights = rng.uniform(0.5, 1.5, 500_000)
    return values, weights


def test_weighted_moments_match_numpy(weighted_samples):
    values, weights = weighted_samples
    stats = IncrementalStatistics()
    stats.add_sequence(values, weights)

    n = len(values)
    w = weights.sum()
    mean = (weights * values).sum() / w
    centered = values - mean
    variance = n / (n - 1.0) * (weights * centered ** 2).sum() / w
    sigma = np.sqrt(variance)
    skewness = (weights * centered ** 3).sum() / w / sigma ** 3 * (n / (n - 1.0)) * (n / (n - 2.0))
    kurtosis = (weights * centered ** 4).sum() / w / variance ** 2
    kurtosis *= (n / (n - 1.0)) * (n / (n - 2.0)) * ((n + 1.0) / (n - 3.0))
    kurtosis -= 3.0 * (n - 1.0) / (n - 2.0) * (n - 1.0) / (n - 3.0)

    assert stats.samples == n
    assert stats.weight_sum == pytest.approx(w, rel=1e-10)
    assert stats.mean() == pytest.approx(mean, rel=1e-9)
    assert stats.variance() == pytest.approx(variance, rel=1e-9)
    assert stats.skewness() == pytest.approx(skewness, abs=1e-8)
    assert stats.kurtosis() == pytest.approx(kurtosis, abs=1e-8)
    assert stats.min() == values.min()
    assert stats.max() == values.max()


def test_downside_variance(weighted_samples):
    values, weights = weighted_samples
    stats = IncrementalStatistics()
    stats.add_sequence(values, weights)

    below = values < 0.0
    m = below.sum()
    expected = m / (m - 1.0) * (weights[below] * values[below] ** 2).sum() / weights[below].sum()
    assert stats.downside_variance() == pytest.approx(expected, rel=1e-10)


def test_unweighted_sequence():
    stats = IncrementalStatistics()
    stats.add_sequence([1.0, 2.0, 3.0, 4.0])
    assert stats.mean() == pytest.approx(2.5)
    assert stats.variance() == pytest.approx(np.var([1.0, 2.0, 3.0, 4.0], ddof=1))


def test_statistics_errors():
    stats = IncrementalStatistics()
    with pytest.raises(ValidationError):
        stats.mean()
    with pytest.raises(ValidationError):
        stats.add(1.0, -1.0)
    stats.add(1.0)
    with pytest.raises(ValidationError):
        stats.variance()
    with pytest.raises(ValidationError):
        stats.add_sequence([1.0, 2.0], [1.0])
    stats.reset()
    assert stats.samples == 0
