# -*- coding: utf-8 -*-
"""
CLAHE - Contrast-limited adaptive histogram equalization on [0, 1] grids.

The grid is partitioned into a ``tile_grid x tile_grid`` layout of
ceiling-sized tiles. Each tile gets a 256-bin histogram of its valid
pixels, clipped at ``max(1, clip_limit * n / 256)`` counts per bin with
the clipped excess spread evenly back over all bins (integer share plus
a one-per-bin remainder starting at bin 0). The normalized cumulative
distribution of each tile is its mapping function.

Each output pixel bilinearly blends the mappings of the four tiles whose
centres surround it, evaluated at the pixel's own bin, so neighbouring
tiles join without a visible seam. Invalid pixels map to ``0``.

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
2026-03-10
"""

# Standard library
import logging
import math
from typing import Annotated, Any, Optional

# Third-party
import numpy as np

# SARVIZ internal
from sarviz.exceptions import ValidationError
from sarviz.image_processing.base import ImageTransform
from sarviz.image_processing.params import Desc, Range
from sarviz.image_processing.versioning import processor_tags, processor_version
from sarviz.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

CLAHE_BINS = 256
DEFAULT_TILE_GRID = 8
DEFAULT_CLIP_LIMIT = 2.0


def clip_histogram(hist: np.ndarray, limit: int) -> np.ndarray:
    """Clip *hist* at *limit* and redistribute the excess uniformly.

    The excess is divided by the bin count; the integer share goes to
    every bin and the remainder adds one count to each of the first
    ``remainder`` bins. The total count is preserved.
    """
    hist = hist.astype(np.int64)
    excess = int(np.maximum(hist - limit, 0).sum())
    clipped = np.minimum(hist, limit)
    share, remainder = divmod(excess, hist.size)
    clipped += share
    clipped[:remainder] += 1
    return clipped


def tile_mapping(
    bins: np.ndarray,
    clip_limit: float = DEFAULT_CLIP_LIMIT,
    n_bins: int = CLAHE_BINS,
) -> np.ndarray:
    """Normalized clipped CDF for the bin indices of one tile's valid pixels.

    A tile without valid pixels maps each bin to its own position on
    ``[0, 1]``.
    """
    n = int(bins.size)
    if n == 0:
        return np.linspace(0.0, 1.0, n_bins)
    hist = np.bincount(bins, minlength=n_bins)
    limit = max(1, int(clip_limit * n / n_bins))
    cdf = np.cumsum(clip_histogram(hist, limit)).astype(np.float64)
    return cdf / cdf[-1]


def _tile_centres(size: int, tile: int, n_tiles: int):
    """Lower/upper tile index and upper weight for each pixel on one axis."""
    f = (np.arange(size) + 0.5) / tile - 0.5
    lo = np.floor(f).astype(np.int64)
    weight = f - lo
    return np.clip(lo, 0, n_tiles - 1), np.clip(lo + 1, 0, n_tiles - 1), weight


def equalize_adaptive(
    normalized: np.ndarray,
    mask: Optional[np.ndarray] = None,
    tile_grid: int = DEFAULT_TILE_GRID,
    clip_limit: float = DEFAULT_CLIP_LIMIT,
) -> np.ndarray:
    """Apply tiled CLAHE to a grid already normalized to ``[0, 1]``.

    Parameters
    ----------
    normalized : np.ndarray
        Float grid, shape ``(rows, cols)``, values in ``[0, 1]``.
    mask : np.ndarray, optional
        bool validity grid. ``None`` treats every pixel as valid.
    tile_grid : int
        Tiles per axis. Default 8.
    clip_limit : float
        Contrast limit relative to a uniform histogram. Default 2.0.

    Returns
    -------
    np.ndarray
        float64 grid in ``[0, 1]``; ``0`` at invalid pixels.
    """
    if normalized.ndim != 2:
        raise ValidationError(
            f"CLAHE expects a 2D grid, got shape {normalized.shape}"
        )
    rows, cols = normalized.shape
    if mask is None:
        mask = np.ones(normalized.shape, dtype=bool)
    if rows == 0 or cols == 0:
        return np.zeros(normalized.shape, dtype=np.float64)

    tile_h = math.ceil(rows / tile_grid)
    tile_w = math.ceil(cols / tile_grid)
    ny = math.ceil(rows / tile_h)
    nx = math.ceil(cols / tile_w)

    bins = (np.clip(normalized, 0.0, 1.0) * CLAHE_BINS).astype(np.int64)
    np.minimum(bins, CLAHE_BINS - 1, out=bins)

    luts = np.empty((ny, nx, CLAHE_BINS), dtype=np.float64)
    for ty in range(ny):
        rs = slice(ty * tile_h, (ty + 1) * tile_h)
        for tx in range(nx):
            cs = slice(tx * tile_w, (tx + 1) * tile_w)
            luts[ty, tx] = tile_mapping(bins[rs, cs][mask[rs, cs]], clip_limit)

    logger.debug("CLAHE: %dx%d tiles of %dx%d px, clip_limit=%.2f",
                 ny, nx, tile_h, tile_w, clip_limit)

    y0, y1, wy = _tile_centres(rows, tile_h, ny)
    x0, x1, wx = _tile_centres(cols, tile_w, nx)
    y0, y1, wy = y0[:, None], y1[:, None], wy[:, None]
    x0, x1, wx = x0[None, :], x1[None, :], wx[None, :]

    top = (1.0 - wx) * luts[y0, x0, bins] + wx * luts[y0, x1, bins]
    bottom = (1.0 - wx) * luts[y1, x0, bins] + wx * luts[y1, x1, bins]
    out = (1.0 - wy) * top + wy * bottom
    out[~mask] = 0.0
    return out


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Contrast-limited adaptive histogram equalization')
class ClaheEqualizer(ImageTransform):
    """Tiled CLAHE for ``[0, 1]`` grids.

    Parameters
    ----------
    tile_grid : int
        Tiles per axis. Default 8.
    clip_limit : float
        Histogram clip limit relative to a uniform distribution.
        Default 2.0.

    Examples
    --------
    >>> eq = ClaheEqualizer()
    >>> out = eq.apply(normalized, valid_mask=mask)
    """

    tile_grid: Annotated[int, Range(min=1, max=64),
                         Desc('Tiles per axis')] = DEFAULT_TILE_GRID
    clip_limit: Annotated[float, Range(min=0.0),
                          Desc('Histogram clip limit')] = DEFAULT_CLIP_LIMIT

    def __init__(
        self,
        tile_grid: int = DEFAULT_TILE_GRID,
        clip_limit: float = DEFAULT_CLIP_LIMIT,
    ) -> None:
        self.tile_grid = tile_grid
        self.clip_limit = clip_limit
        self._validate_params()

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Equalize *source*; pass ``valid_mask=`` to exclude no-data."""
        params = self._resolve_params(kwargs)
        return equalize_adaptive(
            source,
            kwargs.get('valid_mask'),
            tile_grid=params['tile_grid'],
            clip_limit=params['clip_limit'],
        )
