# -*- coding: utf-8 -*-
"""
Synthetic RGB - LUT-driven false-colour composites from two 8-bit bands.

``band1`` (co-pol, VV/HH) drives red, ``band2`` (cross-pol, VH/HV) drives
green and blue is a compressed red/green ratio. All per-pixel power
functions are folded into lookup tables built once per call: two
256-entry gamma tables and a 65,536-entry blue table indexed by
``(b1 << 8) | b2``. Composition is then three table reads per pixel.

Two algorithms are provided:

- **default**: ``gamma_R = 0.7``, ``gamma_G = 0.9``,
  ``blue = round((r / g) ** 0.1 * 255 * 0.24)``, and ``blue = 0``
  wherever ``b2 == 0``.
- **suppressed**: used after TAMED or CLAHE autoscaling to keep speckle
  over water dark. A low-intensity floor is taken near the 5th
  percentile of the combined two-band histogram (plus 3 levels, capped
  at 40); pixels with both bands at or below it are black, the gamma
  tables are floor-shifted (``1.15`` / ``1.10``) and the blue ratio is
  stabilized with ``+8`` on both terms and a ``0.18`` gain.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-05

Modified
--------
2026-03-11
"""

# Standard library
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

# Third-party
import numpy as np

# SARVIZ internal
from sarviz.exceptions import CompositeModeNotImplementedError, ShapeMismatchError, ValidationError
from sarviz.vocabulary import AutoscaleStrategy, SyntheticRgbMode

logger = logging.getLogger(__name__)

GAMMA_R = 0.7
GAMMA_G = 0.9
GAMMA_B = 0.1
BLUE_GAIN = 0.24

SUPPRESSED_GAMMA_R = 1.15
SUPPRESSED_GAMMA_G = 1.10
SUPPRESSED_BLUE_GAIN = 0.18
RATIO_EPSILON = 8.0

WATER_PERCENTILE = 0.05
WATER_CUSHION = 3
WATER_FLOOR_CAP = 40

_LEVELS = np.arange(256, dtype=np.float64)


def _round_u8(values: np.ndarray) -> np.ndarray:
    """Round half up and clamp to ``[0, 255]``."""
    return np.clip(np.floor(values + 0.5), 0, 255).astype(np.uint8)


@dataclass(frozen=True)
class CompositeLut:
    """Lookup tables for one composite configuration.

    Attributes
    ----------
    red, green : np.ndarray
        uint8 tables of 256 entries indexed by the raw band value.
    blue : np.ndarray
        uint8 table of 65,536 entries indexed by ``(b1 << 8) | b2``.
    water_floor : int or None
        Pixels with both raw bands at or below this are black.
    """

    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray
    water_floor: Optional[int] = None

    def compose(self, band1: np.ndarray, band2: np.ndarray) -> np.ndarray:
        """Compose two uint8 bands into a ``(rows, cols, 3)`` uint8 image."""
        b1 = band1.astype(np.intp)
        b2 = band2.astype(np.intp)
        rgb = np.empty(band1.shape + (3,), dtype=np.uint8)
        rgb[..., 0] = self.red[b1]
        rgb[..., 1] = self.green[b2]
        rgb[..., 2] = self.blue[(b1 << 8) | b2]
        if self.water_floor is not None:
            water = (band1 <= self.water_floor) & (band2 <= self.water_floor)
            rgb[water] = 0
        return rgb


def gamma_table(gamma: float, floor: int = 0) -> np.ndarray:
    """256-entry uint8 gamma table, optionally shifted above *floor*.

    Without a floor: ``round((v / 255) ** gamma * 255)``. With a floor,
    values at or below it map to ``0`` and values above are rescaled to
    ``(0, 1]`` over ``(floor, 255]`` before the gamma.
    """
    if floor <= 0:
        return _round_u8((_LEVELS / 255.0) ** gamma * 255.0)
    shifted = np.clip((_LEVELS - floor) / (255.0 - floor), 0.0, 1.0)
    table = _round_u8(shifted ** gamma * 255.0)
    table[:floor + 1] = 0
    return table


@lru_cache(maxsize=1)
def _default_lut() -> CompositeLut:
    red = gamma_table(GAMMA_R)
    green = gamma_table(GAMMA_G)
    r = red.astype(np.float64)[:, None]
    g = green.astype(np.float64)[None, :]
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = r / g
        blue = _round_u8(ratio ** GAMMA_B * 255.0 * BLUE_GAIN)
    blue[:, 0] = 0
    for table in (red, green, blue):
        table.setflags(write=False)
    return CompositeLut(red, green, blue.ravel())


def _suppressed_lut(water_floor: int) -> CompositeLut:
    red = gamma_table(SUPPRESSED_GAMMA_R, water_floor)
    green = gamma_table(SUPPRESSED_GAMMA_G, water_floor)
    ratio = ((red.astype(np.float64)[:, None] + RATIO_EPSILON)
             / (green.astype(np.float64)[None, :] + RATIO_EPSILON))
    blue = _round_u8(ratio ** GAMMA_B * 255.0 * SUPPRESSED_BLUE_GAIN)
    return CompositeLut(red, green, blue.ravel(), water_floor=water_floor)


def water_floor(band1: np.ndarray, band2: np.ndarray) -> int:
    """Low-intensity floor from the combined histogram of both bands.

    The smallest level whose cumulative share reaches 5 %, plus a
    3-level cushion, capped at 40.
    """
    hist = (np.bincount(band1.ravel(), minlength=256)
            + np.bincount(band2.ravel(), minlength=256))
    total = int(hist.sum())
    if total == 0:
        level = 0
    else:
        level = int(np.searchsorted(np.cumsum(hist), WATER_PERCENTILE * total))
    return min(level + WATER_CUSHION, WATER_FLOOR_CAP)


def _check_bands(band1: np.ndarray, band2: np.ndarray) -> None:
    if band1.shape != band2.shape:
        raise ShapeMismatchError(
            f"Shape mismatch: band1 {band1.shape} vs band2 {band2.shape}"
        )
    for name, band in (('band1', band1), ('band2', band2)):
        if band.dtype != np.uint8:
            raise ValidationError(
                f"{name} must be uint8, got {band.dtype}"
            )


def create_synthetic_rgb(band1: np.ndarray, band2: np.ndarray) -> np.ndarray:
    """Default synthetic RGB composite.

    Parameters
    ----------
    band1 : np.ndarray
        uint8 co-pol band, shape ``(rows, cols)``; drives red.
    band2 : np.ndarray
        uint8 cross-pol band, same shape; drives green.

    Returns
    -------
    np.ndarray
        Interleaved RGB, shape ``(rows, cols, 3)``, dtype uint8.

    Raises
    ------
    ShapeMismatchError
        If the bands differ in shape.
    """
    _check_bands(band1, band2)
    return _default_lut().compose(band1, band2)


def create_synthetic_rgb_suppressed(
    band1: np.ndarray, band2: np.ndarray
) -> np.ndarray:
    """Synthetic RGB composite with low-backscatter (water) suppression."""
    _check_bands(band1, band2)
    floor = water_floor(band1, band2)
    logger.debug("Suppressed synRGB: water floor=%d", floor)
    return _suppressed_lut(floor).compose(band1, band2)


def create_synthetic_rgb_rgb_ratio(band1: np.ndarray, band2: np.ndarray) -> np.ndarray:
    """Copernicus "RGB ratio" visualization. Not yet available."""
    raise CompositeModeNotImplementedError(
        "Synthetic RGB mode 'rgb-ratio' has no dedicated formula yet"
    )


def create_synthetic_rgb_urban(band1: np.ndarray, band2: np.ndarray) -> np.ndarray:
    """Copernicus "SAR urban" visualization. Not yet available."""
    raise CompositeModeNotImplementedError(
        "Synthetic RGB mode 'sar-urban' has no dedicated formula yet"
    )


def create_synthetic_rgb_enhanced(band1: np.ndarray, band2: np.ndarray) -> np.ndarray:
    """Copernicus "enhanced visualization". Not yet available."""
    raise CompositeModeNotImplementedError(
        "Synthetic RGB mode 'enhanced' has no dedicated formula yet"
    )


def create_synthetic_rgb_by_mode(
    mode: SyntheticRgbMode,
    band1: np.ndarray,
    band2: np.ndarray,
    strategy: Optional[AutoscaleStrategy] = None,
) -> np.ndarray:
    """Compose by named mode.

    Every mode currently resolves to the default algorithm. When the
    bands were autoscaled with TAMED or CLAHE the water-suppressed
    variant is used instead.
    """
    if not isinstance(mode, SyntheticRgbMode):
        raise ValidationError(f"Unknown synthetic RGB mode: {mode!r}")
    if strategy in (AutoscaleStrategy.TAMED, AutoscaleStrategy.CLAHE):
        logger.debug("synRGB %s: suppressed variant for %s",
                     mode.value, strategy.name)
        return create_synthetic_rgb_suppressed(band1, band2)
    return create_synthetic_rgb(band1, band2)
