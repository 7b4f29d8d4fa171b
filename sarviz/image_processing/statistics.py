# -*- coding: utf-8 -*-
"""
Distribution Statistics - Streaming moments and histogram percentiles.

Computes a ``DistributionStats`` snapshot over the valid samples of a
dB grid without sorting or materializing the valid subset in one piece:

1. A first pass streams row blocks through ``RunningMoments``, which
   merges per-block count/mean/M2 with the parallel Welford update
   (Chan et al.), tracking min and max alongside. The merge is
   order-independent, so blocks may be reduced in any order.
2. A second pass fills a fixed 4096-bin histogram spanning
   ``[min, max]``; each requested percentile ``p`` is read back by
   locating the bin holding the ``floor(p * count)``-th sample and
   interpolating linearly inside that bin.

Percentiles are therefore accurate to one bin width,
``(max - min) / 4096``.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-03

Modified
--------
2026-03-10
"""

# Standard library
import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, Sequence

# Third-party
import numpy as np

logger = logging.getLogger(__name__)

#: Histogram resolution used for percentile estimation.
HISTOGRAM_BINS = 4096

#: Percentile levels carried by every snapshot, as fractions.
PERCENTILE_LEVELS = (0.01, 0.02, 0.05, 0.10, 0.25, 0.50,
                     0.75, 0.90, 0.95, 0.98, 0.99)

#: Rows per block streamed through each pass.
DEFAULT_BLOCK_ROWS = 1024


@dataclass(frozen=True)
class DistributionStats:
    """Immutable summary of the valid samples of one grid.

    A snapshot with ``valid_count == 0`` is all zeros and means
    "nothing to scale".

    Attributes
    ----------
    valid_count : int
        Number of valid samples.
    min, max, mean, std : float
        Extremes, mean and population standard deviation.
    p01 ... p99 : float
        Percentile estimates; ``median`` is the 50th.
    """

    valid_count: int
    min: float
    max: float
    mean: float
    std: float
    p01: float
    p02: float
    p05: float
    p10: float
    p25: float
    median: float
    p75: float
    p90: float
    p95: float
    p98: float
    p99: float

    @classmethod
    def empty(cls) -> 'DistributionStats':
        """All-zero snapshot for a grid without valid samples."""
        return cls(0, *([0.0] * 15))

    @property
    def is_empty(self) -> bool:
        return self.valid_count == 0

    @property
    def dynamic_range(self) -> float:
        return self.max - self.min

    @property
    def iqr(self) -> float:
        return self.p75 - self.p25

    def percentiles(self) -> Dict[float, float]:
        """Percentile estimates keyed by level (``0.01`` ... ``0.99``)."""
        return dict(zip(PERCENTILE_LEVELS, (
            self.p01, self.p02, self.p05, self.p10, self.p25, self.median,
            self.p75, self.p90, self.p95, self.p98, self.p99,
        )))


class RunningMoments:
    """Streaming count, extremes, mean and M2 over 1-D sample blocks.

    Each ``update`` folds one block in with the pairwise Welford merge,
    which avoids the cancellation of a naive sum of squares.

    Examples
    --------
    >>> acc = RunningMoments()
    >>> acc.update(np.array([1.0, 2.0]))
    >>> acc.update(np.array([3.0, 4.0]))
    >>> acc.count, acc.mean, acc.variance
    (4, 2.5, 1.25)
    """

    def __init__(self) -> None:
        self.count = 0
        self.mean = 0.0
        self.m2 = 0.0
        self.min = math.inf
        self.max = -math.inf

    def update(self, values: np.ndarray) -> None:
        n_b = int(values.size)
        if n_b == 0:
            return
        mean_b = float(values.mean())
        m2_b = float(np.square(values - mean_b).sum())

        n_a = self.count
        n = n_a + n_b
        delta = mean_b - self.mean
        self.mean += delta * n_b / n
        self.m2 += m2_b + delta * delta * n_a * n_b / n
        self.count = n
        self.min = min(self.min, float(values.min()))
        self.max = max(self.max, float(values.max()))

    def merge(self, other: 'RunningMoments') -> None:
        """Fold another accumulator into this one."""
        if other.count == 0:
            return
        n = self.count + other.count
        delta = other.mean - self.mean
        self.m2 += other.m2 + delta * delta * self.count * other.count / n
        self.mean += delta * other.count / n
        self.count = n
        self.min = min(self.min, other.min)
        self.max = max(self.max, other.max)

    @property
    def variance(self) -> float:
        """Population variance; ``0.0`` for an empty accumulator."""
        return self.m2 / self.count if self.count else 0.0

    @property
    def std(self) -> float:
        return math.sqrt(max(self.variance, 0.0))


def _valid_blocks(
    db: np.ndarray, mask: np.ndarray, block_rows: int
) -> Iterator[np.ndarray]:
    for start in range(0, db.shape[0], block_rows):
        stop = start + block_rows
        yield db[start:stop][mask[start:stop]]


def histogram_percentiles(
    counts: np.ndarray,
    vmin: float,
    vmax: float,
    levels: Sequence[float] = PERCENTILE_LEVELS,
) -> np.ndarray:
    """Invert a histogram's cumulative distribution at *levels*.

    For each level ``p`` the target rank is ``floor(p * n)`` clamped to
    ``n - 1``; the bin holding that rank is found on the cumulative
    counts and the value interpolated linearly by the rank's fractional
    position among that bin's samples.

    Parameters
    ----------
    counts : np.ndarray
        1-D histogram over ``[vmin, vmax]`` with equal-width bins.
    vmin, vmax : float
        Histogram span.
    levels : Sequence[float]
        Percentile levels as fractions in ``[0, 1]``.

    Returns
    -------
    np.ndarray
        Estimated values, one per level.
    """
    total = int(counts.sum())
    cumulative = np.cumsum(counts)
    width = (vmax - vmin) / counts.size
    out = np.empty(len(levels), dtype=np.float64)
    for i, p in enumerate(levels):
        target = min(int(p * total), total - 1)
        b = int(np.searchsorted(cumulative, target, side='right'))
        before = cumulative[b] - counts[b]
        frac = (target - before) / counts[b]
        out[i] = min(vmin + (b + frac) * width, vmax)
    return out


def compute_statistics(
    db: np.ndarray,
    mask: np.ndarray,
    bins: int = HISTOGRAM_BINS,
    block_rows: int = DEFAULT_BLOCK_ROWS,
) -> DistributionStats:
    """Summarize the valid samples of *db*.

    Parameters
    ----------
    db : np.ndarray
        dB grid, shape ``(rows, cols)``.
    mask : np.ndarray
        bool validity grid, same shape as *db*.
    bins : int
        Histogram bins for percentile estimation. Default 4096.
    block_rows : int
        Rows per streamed block.

    Returns
    -------
    DistributionStats
        Snapshot; all zeros when no sample is valid.
    """
    moments = RunningMoments()
    for block in _valid_blocks(db, mask, block_rows):
        moments.update(block)

    if moments.count == 0:
        logger.debug("No valid samples; returning empty statistics")
        return DistributionStats.empty()

    vmin, vmax = moments.min, moments.max
    if vmax == vmin:
        values = [vmax if p >= 0.75 else vmin for p in PERCENTILE_LEVELS]
    else:
        counts = np.zeros(bins, dtype=np.int64)
        scale = bins / (vmax - vmin)
        for block in _valid_blocks(db, mask, block_rows):
            idx = ((block - vmin) * scale).astype(np.int64)
            np.clip(idx, 0, bins - 1, out=idx)
            counts += np.bincount(idx, minlength=bins)
        values = histogram_percentiles(counts, vmin, vmax).tolist()

    stats = DistributionStats(
        moments.count, vmin, vmax, moments.mean, moments.std, *values
    )
    logger.debug(
        "Statistics: n=%d, min=%.2f, max=%.2f, mean=%.2f, std=%.2f, median=%.2f",
        stats.valid_count, stats.min, stats.max, stats.mean, stats.std,
        stats.median,
    )
    return stats
