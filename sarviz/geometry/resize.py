# -*- coding: utf-8 -*-
"""
Resize - Aspect-preserving Lanczos downsampling and square padding.

``transform_geometry`` is the geometric stage of the pipeline: it
resamples one quantized band (or a band pair) so the long side matches a
target size, optionally centres the result on a square canvas, and
returns a ``GeometricRecord`` from which the caller re-derives pixel
size and origin of the output geotransform.

Resampling uses Pillow's Lanczos (a = 3) convolution filter on 8-bit
data. 16-bit bands are reduced to their high byte, resampled as 8-bit
and promoted back with ``<< 8``, so a 16-bit resize keeps only 8 bits
of precision. Upsampling is never performed: a target above the long
side is a logged no-op.

Dependencies
------------
Pillow

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-06

Modified
--------
2026-03-11
"""

# Standard library
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

# Third-party
import numpy as np
from PIL import Image

# SARVIZ internal
from sarviz.exceptions import (
    MissingBandError,
    ResampleError,
    ShapeMismatchError,
    ValidationError,
)
from sarviz.geometry.padding import pad_to_square
from sarviz.vocabulary import BitDepth

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeometricRecord:
    """Relation between an output grid and its source grid.

    Attributes
    ----------
    final_cols, final_rows : int
        Output dimensions, padding included.
    scale_x, scale_y : float
        Resampled size over original size, per axis.
    pad_left, pad_top : int
        Padding offsets of the resampled content.
    """

    final_cols: int
    final_rows: int
    scale_x: float = 1.0
    scale_y: float = 1.0
    pad_left: int = 0
    pad_top: int = 0


@dataclass(frozen=True)
class GeometricResult:
    """Output of ``transform_geometry``: the band(s) and their record."""

    band: np.ndarray
    band2: Optional[np.ndarray]
    record: GeometricRecord

    @property
    def final_cols(self) -> int:
        return self.record.final_cols

    @property
    def final_rows(self) -> int:
        return self.record.final_rows


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_resize_dimensions(
    cols: int, rows: int, target_size: int
) -> Tuple[int, int]:
    """New ``(cols, rows)`` with the long side at *target_size*.

    The short side scales by ``target_size / long_side``, rounded to the
    nearest integer (at least 1). A target above the long side keeps
    the original dimensions.
    """
    if target_size <= 0:
        raise ValidationError(
            f"Size must be greater than 0, got: {target_size}"
        )
    long_side = max(cols, rows)
    short_side = min(cols, rows)
    if target_size > long_side:
        logger.warning(
            "Target size %d is larger than original long side %d. "
            "Keeping original dimensions %dx%d",
            target_size, long_side, cols, rows,
        )
        return cols, rows

    new_short = max(1, _round_half_up(short_side * target_size / long_side))
    if cols > rows:
        return target_size, new_short
    return new_short, target_size


def resize_u8(band: np.ndarray, cols: int, rows: int) -> np.ndarray:
    """Lanczos-resample a uint8 band to ``(rows, cols)``.

    Raises
    ------
    ResampleError
        If Pillow rejects the data or dimensions.
    """
    try:
        image = Image.fromarray(np.ascontiguousarray(band, dtype=np.uint8))
        resized = image.resize((cols, rows), resample=Image.Resampling.LANCZOS)
    except (ValueError, TypeError, OSError, MemoryError) as e:
        raise ResampleError(f"Lanczos resize to {cols}x{rows} failed: {e}") from e
    return np.asarray(resized, dtype=np.uint8)


def resize_u16(band: np.ndarray, cols: int, rows: int) -> np.ndarray:
    """Resample a uint16 band through its high byte.

    The band is reduced with ``>> 8``, resampled as 8-bit and promoted
    with ``<< 8``; the low byte of every output sample is zero.
    """
    high = (band.astype(np.uint16) >> 8).astype(np.uint8)
    return resize_u8(high, cols, rows).astype(np.uint16) << 8


def _resize(band: np.ndarray, cols: int, rows: int, bit_depth: BitDepth) -> np.ndarray:
    if bit_depth is BitDepth.U16:
        return resize_u16(band, cols, rows)
    return resize_u8(band, cols, rows)


def transform_geometry(
    band: np.ndarray,
    band2: Optional[np.ndarray] = None,
    target_size: Optional[int] = None,
    pad: bool = False,
    bit_depth: Optional[BitDepth] = None,
    dual_band: bool = False,
) -> GeometricResult:
    """Resample and/or pad one or two quantized bands.

    Parameters
    ----------
    band : np.ndarray
        Quantized band, shape ``(rows, cols)``, uint8 or uint16.
    band2 : np.ndarray, optional
        Second band of the same shape, transformed identically.
    target_size : int, optional
        Desired long side in pixels. ``None`` keeps the resolution.
    pad : bool
        Centre the result on a zero-filled square canvas.
    bit_depth : BitDepth, optional
        Depth of the bands; inferred from ``band.dtype`` when omitted.
    dual_band : bool
        The caller requires two output bands.

    Returns
    -------
    GeometricResult

    Raises
    ------
    MissingBandError
        If *dual_band* is set and *band2* is missing.
    ShapeMismatchError
        If *band2* differs in shape from *band*.
    ResampleError
        If the resampler fails.
    """
    if bit_depth is None:
        bit_depth = BitDepth.U16 if band.dtype == np.uint16 else BitDepth.U8
    if dual_band and band2 is None:
        raise MissingBandError(
            f"Second band required for dual-band {bit_depth.name} output"
        )
    if band2 is not None and band2.shape != band.shape:
        raise ShapeMismatchError(
            f"Shape mismatch: band {band.shape} vs band2 {band2.shape}"
        )

    rows, cols = band.shape
    new_cols, new_rows = cols, rows
    scale_x = scale_y = 1.0
    if target_size is not None:
        logger.info("Resizing image to %d (long side)", target_size)
        new_cols, new_rows = calculate_resize_dimensions(cols, rows, target_size)

    if (new_cols, new_rows) != (cols, rows):
        logger.info("Original size: %dx%d, New size: %dx%d",
                    cols, rows, new_cols, new_rows)
        band = _resize(band, new_cols, new_rows, bit_depth)
        if band2 is not None:
            band2 = _resize(band2, new_cols, new_rows, bit_depth)
        scale_x = new_cols / cols
        scale_y = new_rows / rows

    pad_left = pad_top = 0
    if pad:
        band, pad_left, pad_top = pad_to_square(band)
        if band2 is not None:
            band2 = pad_to_square(band2)[0]

    final_rows, final_cols = band.shape
    record = GeometricRecord(final_cols, final_rows, scale_x, scale_y,
                             pad_left, pad_top)
    return GeometricResult(band, band2, record)
