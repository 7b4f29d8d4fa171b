# -*- coding: utf-8 -*-
"""
Autoscale - Strategy-driven mapping of dB grids to 8/16-bit pixels.

A strategy selects clip bounds and a gamma from the distribution
snapshot of the valid samples; quantization then clamps each valid
sample to the window, normalizes, applies the gamma and scales to the
bit depth's maximum value. Invalid samples map to ``0``.

Strategy table (``p*`` are percentiles of the valid dB samples):

==========  =============================================  =====
Strategy    Window                                         Gamma
==========  =============================================  =====
STANDARD    range < 15: median +/- max(20, 0.8 range)/2    1.1
            IQR < 5: [p25 - 2.5 IQR, p75 + 2.5 IQR]        1.0
            range > 40: [max(p02, min + 2%), min(p98,      0.9
            max - 2%)]
            otherwise: [p02, p98]                          1.0
ROBUST      [max(p25 - 2.5 IQR, p01, min),                 1.0
            min(p75 + 2.5 IQR, p99, max)]
ADAPTIVE    skew/tail driven percentile pair               0.8-1.1
EQUALIZED   [p01, p99]                                     1.0
TAMED       [p25, p99]                                     1.0
DEFAULT     [p05, p95]                                     1.0
CLAHE       [p01, p99] normalization, then tiled CLAHE     n/a
==========  =============================================  =====

Degenerate inputs never raise: an empty snapshot yields an all-zero
band and every clip range is floored at one dB.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-04

Modified
--------
2026-03-11
"""

# Standard library
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Optional

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy.ndimage import maximum_filter, minimum_filter

# SARVIZ internal
from sarviz.exceptions import ValidationError
from sarviz.image_processing.base import ImageTransform
from sarviz.image_processing.intensity import NOISE_FLOOR_DB
from sarviz.image_processing.clahe import (
    DEFAULT_CLIP_LIMIT,
    DEFAULT_TILE_GRID,
    equalize_adaptive,
)
from sarviz.image_processing.params import Desc, Options
from sarviz.image_processing.statistics import DistributionStats, compute_statistics
from sarviz.image_processing.versioning import processor_tags, processor_version
from sarviz.vocabulary import AutoscaleStrategy, BitDepth, Polarization, ProcessorCategory

logger = logging.getLogger(__name__)

#: Smallest clip window, in dB.
MIN_CLIP_RANGE = 1.0

#: Multiplier on the IQR for outlier fences.
OUTLIER_FACTOR = 2.5


@dataclass(frozen=True)
class StrategyParameters:
    """Clip window and tone curve chosen by a strategy.

    Attributes
    ----------
    low_clip, high_clip : float
        dB window mapped onto ``[0, max_value]``.
    gamma : float
        Exponent applied to the normalized value.
    use_local_enhancement : bool
        Apply 3x3 local contrast adjustment before clipping. No strategy
        in the table sets it.
    """

    low_clip: float
    high_clip: float
    gamma: float = 1.0
    use_local_enhancement: bool = False

    @property
    def clip_range(self) -> float:
        return max(self.high_clip - self.low_clip, MIN_CLIP_RANGE)


def _standard(stats: DistributionStats):
    dynamic_range = stats.dynamic_range
    iqr = stats.iqr
    if dynamic_range < 15.0:
        logger.debug("Low contrast SAR: median-centred window")
        width = max(20.0, 0.8 * dynamic_range)
        # Wider than the data; not re-clamped.
        return stats.median - width / 2.0, stats.median + width / 2.0, 1.1, False
    if iqr < 5.0:
        logger.debug("Heavy-tailed SAR: IQR fences")
        return (stats.p25 - OUTLIER_FACTOR * iqr,
                stats.p75 + OUTLIER_FACTOR * iqr, 1.0, True)
    if dynamic_range > 40.0:
        logger.debug("High dynamic range SAR: trimmed 2nd/98th percentiles")
        return (max(stats.p02, stats.min + 0.02 * dynamic_range),
                min(stats.p98, stats.max - 0.02 * dynamic_range), 0.9, True)
    logger.debug("Normal SAR: 2nd/98th percentiles")
    return stats.p02, stats.p98, 1.0, True


def _adaptive(stats: DistributionStats):
    skew = (stats.mean - stats.median) / max(abs(stats.std), 1.0)
    tail = (stats.p99 - stats.p95) / max(stats.p95 - stats.p75, 1.0)
    if abs(skew) > 0.5:
        if skew > 0.0:
            return stats.p02, stats.p98, 0.9
        return stats.p05, stats.p95, 1.1
    if tail > 2.0:
        return stats.p10, stats.p90, 0.8
    return stats.p05, stats.p95, 1.0


def select_parameters(
    stats: DistributionStats,
    strategy: AutoscaleStrategy,
) -> StrategyParameters:
    """Derive the clip window and gamma for *strategy* from *stats*.

    Windows are re-clamped to ``[stats.min, stats.max]``, except the
    STANDARD low-contrast window which is deliberately wider than the
    data. CLAHE returns its normalization window (the EQUALIZED one).
    """
    clamp = True
    if strategy is AutoscaleStrategy.STANDARD:
        low, high, gamma, clamp = _standard(stats)
    elif strategy is AutoscaleStrategy.ROBUST:
        fence = OUTLIER_FACTOR * stats.iqr
        low = max(stats.p25 - fence, stats.p01, stats.min)
        high = min(stats.p75 + fence, stats.p99, stats.max)
        gamma = 1.0
    elif strategy is AutoscaleStrategy.ADAPTIVE:
        low, high, gamma = _adaptive(stats)
    elif strategy in (AutoscaleStrategy.EQUALIZED, AutoscaleStrategy.CLAHE):
        low, high, gamma = stats.p01, stats.p99, 1.0
    elif strategy is AutoscaleStrategy.TAMED:
        low, high, gamma = stats.p25, stats.p99, 1.0
    elif strategy is AutoscaleStrategy.DEFAULT:
        low, high, gamma = stats.p05, stats.p95, 1.0
    else:
        raise ValidationError(f"Unknown autoscale strategy: {strategy!r}")

    if clamp:
        low = max(low, stats.min)
        high = min(high, stats.max)
    return StrategyParameters(low, high, gamma, use_local_enhancement=False)


def tamed_synthetic_rgb_parameters(
    stats: DistributionStats,
    co_polarized: bool,
) -> StrategyParameters:
    """Band-specific TAMED window for synthetic RGB composition.

    Co-polarized bands start at ``min(p02, p05)``, cross-polarized at
    ``p05``; both end at ``p99``. Co- and cross-pol channels have
    different noise floors and must not be stretched identically before
    they are composited.
    """
    low = min(stats.p02, stats.p05) if co_polarized else stats.p05
    low = max(low, stats.min)
    high = min(stats.p99, stats.max)
    return StrategyParameters(low, high, 1.0)


def apply_local_enhancement(db: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Scale each valid sample by its 3x3 local contrast.

    ``v * (1 + 0.1 * (v - local_median) / local_range)`` over the valid
    neighbours (upper median for even counts); unchanged where the local
    range is zero. Invalid samples pass through.
    """
    hi = maximum_filter(np.where(mask, db, -np.inf), size=3,
                        mode='constant', cval=-np.inf)
    lo = minimum_filter(np.where(mask, db, np.inf), size=3,
                        mode='constant', cval=np.inf)

    padded = np.pad(np.where(mask, db, np.nan), 1, constant_values=np.nan)
    windows = sliding_window_view(padded, (3, 3)).reshape(*db.shape, 9)
    ordered = np.sort(windows, axis=-1)
    n_valid = np.count_nonzero(~np.isnan(windows), axis=-1)
    median = np.take_along_axis(ordered, (n_valid // 2)[..., None], axis=-1)[..., 0]

    local_range = hi - lo
    adjust = mask & (local_range > 0)
    factor = np.ones(db.shape, dtype=np.float64)
    np.divide(0.1 * (db - median), local_range, out=factor, where=adjust)
    factor[adjust] += 1.0
    return db * factor


def quantize(
    db: np.ndarray,
    mask: np.ndarray,
    params: StrategyParameters,
    bit_depth: BitDepth,
) -> np.ndarray:
    """Map valid dB samples through the clip window and gamma.

    ``round(((clamp(v, low, high) - low) / range) ** gamma * max_value)``
    with ``range`` floored at one dB. Invalid samples map to ``0``.
    """
    max_value = bit_depth.max_value
    values = apply_local_enhancement(db, mask) if params.use_local_enhancement else db
    clipped = np.clip(values, params.low_clip, params.high_clip)
    normalized = np.clip((clipped - params.low_clip) / params.clip_range, 0.0, 1.0)
    if params.gamma != 1.0:
        normalized = normalized ** params.gamma
    scaled = np.clip(np.floor(normalized * max_value + 0.5), 0, max_value)
    scaled[~mask] = 0
    return scaled.astype(bit_depth.dtype)


def autoscale_clahe(
    db: np.ndarray,
    mask: np.ndarray,
    stats: DistributionStats,
    bit_depth: BitDepth,
    tile_grid: int = DEFAULT_TILE_GRID,
    clip_limit: float = DEFAULT_CLIP_LIMIT,
) -> np.ndarray:
    """Normalize with the EQUALIZED window, then equalize tile-locally.

    A flat distribution has nothing to equalize and quantizes to zero.
    """
    params = select_parameters(stats, AutoscaleStrategy.CLAHE)
    if stats.dynamic_range == 0.0:
        return quantize(db, mask, params, bit_depth)
    normalized = (np.clip(db, params.low_clip, params.high_clip)
                  - params.low_clip) / params.clip_range
    equalized = equalize_adaptive(normalized, mask, tile_grid, clip_limit)
    max_value = bit_depth.max_value
    out = np.clip(np.floor(equalized * max_value + 0.5), 0, max_value)
    out[~mask] = 0
    return out.astype(bit_depth.dtype)


def autoscale(
    db: np.ndarray,
    mask: np.ndarray,
    strategy: AutoscaleStrategy = AutoscaleStrategy.DEFAULT,
    bit_depth: BitDepth = BitDepth.U8,
    stats: Optional[DistributionStats] = None,
) -> np.ndarray:
    """Quantize a dB grid with *strategy* at *bit_depth*.

    Parameters
    ----------
    db : np.ndarray
        dB grid, shape ``(rows, cols)``.
    mask : np.ndarray
        bool validity grid, same shape.
    strategy : AutoscaleStrategy
        Contrast strategy.
    bit_depth : BitDepth
        Output depth; ``uint8`` or ``uint16``.
    stats : DistributionStats, optional
        Precomputed snapshot of ``(db, mask)``; computed when omitted.

    Returns
    -------
    np.ndarray
        Quantized band, same shape, dtype of *bit_depth*.
    """
    if stats is None:
        stats = compute_statistics(db, mask)
    if stats.is_empty:
        logger.info("Autoscale: no valid samples, emitting blank band")
        return np.zeros(db.shape, dtype=bit_depth.dtype)

    logger.info(
        "SAR stats: range=%.1fdB, mean=%.1fdB, std=%.1fdB, IQR=%.1fdB",
        stats.dynamic_range, stats.mean, stats.std, stats.iqr,
    )
    if strategy is AutoscaleStrategy.CLAHE:
        return autoscale_clahe(db, mask, stats, bit_depth)

    params = select_parameters(stats, strategy)
    logger.debug(
        "Autoscale %s: window=[%.1f, %.1f] dB, gamma=%.2f, local_enh=%s",
        strategy.name, params.low_clip, params.high_clip, params.gamma,
        params.use_local_enhancement,
    )
    return quantize(db, mask, params, bit_depth)


def autoscale_tamed_synthetic_rgb(
    db: np.ndarray,
    mask: np.ndarray,
    polarization: Polarization,
    stats: Optional[DistributionStats] = None,
) -> np.ndarray:
    """8-bit TAMED quantization with the band-specific low clip."""
    if stats is None:
        stats = compute_statistics(db, mask)
    if stats.is_empty:
        return np.zeros(db.shape, dtype=np.uint8)
    params = tamed_synthetic_rgb_parameters(stats, polarization.is_co_polarized)
    logger.debug("Tamed synRGB %s: window=[%.1f, %.1f] dB",
                 polarization.name, params.low_clip, params.high_clip)
    return quantize(db, mask, params, BitDepth.U8)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Strategy-driven dB autoscale to 8/16-bit')
class SarAutoscale(ImageTransform):
    """Quantize dB grids with a named autoscale strategy.

    Parameters
    ----------
    strategy : AutoscaleStrategy
        Contrast strategy. Default ``CLAHE``.
    bit_depth : BitDepth
        Output depth. Default ``U8``.

    Examples
    --------
    >>> db, mask = ToDecibels().apply_with_mask(intensity)
    >>> band = SarAutoscale(strategy=AutoscaleStrategy.ROBUST).apply(
    ...     db, valid_mask=mask)
    """

    strategy: Annotated[AutoscaleStrategy, Options(*AutoscaleStrategy),
                        Desc('Contrast strategy')] = AutoscaleStrategy.CLAHE
    bit_depth: Annotated[BitDepth, Options(*BitDepth),
                         Desc('Output bit depth')] = BitDepth.U8

    def __init__(
        self,
        strategy: AutoscaleStrategy = AutoscaleStrategy.CLAHE,
        bit_depth: BitDepth = BitDepth.U8,
    ) -> None:
        self.strategy = strategy
        self.bit_depth = bit_depth
        self._validate_params()

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Quantize the dB grid *source*.

        Keyword arguments ``valid_mask`` (defaults to ``source > -50``)
        and ``stats`` (a precomputed ``DistributionStats``) are optional.
        """
        params = self._resolve_params(kwargs)
        mask = kwargs.get('valid_mask')
        if mask is None:
            mask = source > NOISE_FLOOR_DB
        return autoscale(source, mask, params['strategy'],
                         params['bit_depth'], kwargs.get('stats'))
