# -*- coding: utf-8 -*-
"""
Tests for sarviz.image_processing.statistics - moments and percentiles.

Created
-------
2026-03-05
"""

import numpy as np
import pytest

from sarviz.image_processing.statistics import (
    HISTOGRAM_BINS,
    PERCENTILE_LEVELS,
    DistributionStats,
    RunningMoments,
    compute_statistics,
    histogram_percentiles,
)


@pytest.fixture
def db_grid():
    rng = np.random.default_rng(42)
    return rng.uniform(-30.0, 10.0, (200, 200))


# ---------------------------------------------------------------------------
# RunningMoments
# ---------------------------------------------------------------------------

class TestRunningMoments:
    def test_blocks_match_numpy(self):
        rng = np.random.default_rng(1)
        values = rng.normal(-12.0, 4.0, 1000)
        acc = RunningMoments()
        for block in np.array_split(values, 13):
            acc.update(block)
        assert acc.count == 1000
        assert acc.mean == pytest.approx(values.mean())
        assert acc.variance == pytest.approx(values.var())
        assert acc.min == values.min()
        assert acc.max == values.max()

    def test_merge_equals_single_pass(self):
        rng = np.random.default_rng(2)
        x = rng.normal(size=300)
        y = rng.normal(5.0, 2.0, size=500)
        a, b, whole = RunningMoments(), RunningMoments(), RunningMoments()
        a.update(x)
        b.update(y)
        a.merge(b)
        whole.update(np.concatenate([x, y]))
        assert a.count == whole.count
        assert a.mean == pytest.approx(whole.mean)
        assert a.std == pytest.approx(whole.std)

    def test_empty_updates_ignored(self):
        acc = RunningMoments()
        acc.update(np.array([]))
        assert acc.count == 0
        assert acc.variance == 0.0

    def test_large_offset_stays_stable(self):
        values = 1e9 + np.array([4.0, 7.0, 13.0, 16.0])
        acc = RunningMoments()
        acc.update(values[:2])
        acc.update(values[2:])
        assert acc.variance == pytest.approx(22.5)


# ---------------------------------------------------------------------------
# Histogram inversion
# ---------------------------------------------------------------------------

class TestHistogramPercentiles:
    def test_uniform_counts(self):
        counts = np.array([1, 1, 1, 1])
        out = histogram_percentiles(counts, 0.0, 4.0, (0.0, 0.5, 0.99))
        np.testing.assert_allclose(out, [0.0, 2.0, 3.0])

    def test_interpolates_within_bin(self):
        counts = np.array([0, 4, 0, 0])
        out = histogram_percentiles(counts, 0.0, 4.0, (0.5,))
        assert out[0] == pytest.approx(1.5)

    def test_never_exceeds_max(self):
        counts = np.array([0, 0, 0, 10])
        out = histogram_percentiles(counts, -1.0, 1.0, (0.99,))
        assert out[0] <= 1.0


# ---------------------------------------------------------------------------
# compute_statistics
# ---------------------------------------------------------------------------

class TestComputeStatistics:
    def test_empty_mask(self, db_grid):
        stats = compute_statistics(db_grid, np.zeros(db_grid.shape, bool))
        assert stats == DistributionStats.empty()
        assert stats.is_empty
        assert stats.dynamic_range == 0.0

    def test_moments_match_numpy(self, db_grid):
        mask = db_grid > -25.0
        stats = compute_statistics(db_grid, mask, block_rows=7)
        valid = db_grid[mask]
        assert stats.valid_count == valid.size
        assert stats.mean == pytest.approx(valid.mean())
        assert stats.std == pytest.approx(valid.std())
        assert stats.min == valid.min()
        assert stats.max == valid.max()

    def test_percentiles_ordered_and_bounded(self, db_grid):
        stats = compute_statistics(db_grid, np.ones(db_grid.shape, bool))
        values = list(stats.percentiles().values())
        assert values == sorted(values)
        assert stats.min <= values[0]
        assert values[-1] <= stats.max

    def test_percentiles_within_bin_tolerance(self, db_grid):
        stats = compute_statistics(db_grid, np.ones(db_grid.shape, bool))
        width = (stats.max - stats.min) / HISTOGRAM_BINS
        expected = np.quantile(db_grid, PERCENTILE_LEVELS)
        actual = np.array(list(stats.percentiles().values()))
        np.testing.assert_allclose(actual, expected, atol=2 * width)

    def test_constant_grid_is_degenerate(self):
        db = np.full((10, 10), -7.5)
        stats = compute_statistics(db, np.ones(db.shape, bool))
        assert stats.valid_count == 100
        assert stats.std == 0.0
        assert stats.dynamic_range == 0.0
        assert all(v == -7.5 for v in stats.percentiles().values())

    def test_block_size_does_not_change_result(self, db_grid):
        mask = db_grid > -20.0
        a = compute_statistics(db_grid, mask, block_rows=1024)
        b = compute_statistics(db_grid, mask, block_rows=3)
        assert a.valid_count == b.valid_count
        assert a.median == pytest.approx(b.median)
        assert a.std == pytest.approx(b.std)

    def test_iqr(self, db_grid):
        stats = compute_statistics(db_grid, np.ones(db_grid.shape, bool))
        assert stats.iqr == pytest.approx(stats.p75 - stats.p25)
        assert stats.iqr == pytest.approx(20.0, abs=0.5)
