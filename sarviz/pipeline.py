# -*- coding: utf-8 -*-
"""
Pipeline - End-to-end in-memory visualization of SAR channels.

Runs the full chain on raw channel grids already in memory: radiometric
conversion to dB, strategy-driven quantization, aspect-preserving
resampling with optional square padding, and (for dual-polarization
input) synthetic RGB composition. The geotransform of the source grid,
when given, is carried through the geometric stage.

Entry points mirror the output products:

- ``process_single_band`` - one channel to one gray band.
- ``process_dual_band`` - two channels to two co-registered gray bands.
- ``process_synthetic_rgb`` - co/cross-polarized pair to an RGB image.
- ``process_polarization_operation`` - pair combined into one band.
- ``process`` - dispatch from a ``ProcessingParams``.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-08

Modified
--------
2026-03-11
"""

# Standard library
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

# SARVIZ internal
from sarviz.config import ProcessingParams
from sarviz.exceptions import MissingBandError, ShapeMismatchError, ValidationError
from sarviz.geometry.geotransform import GeoTransform, adjust_geotransform
from sarviz.geometry.resize import GeometricRecord, transform_geometry
from sarviz.image_processing.autoscale import (
    autoscale,
    autoscale_tamed_synthetic_rgb,
)
from sarviz.image_processing.intensity import db_with_mask
from sarviz.image_processing.polarization import DENOMINATOR_EPS, combine_channels
from sarviz.image_processing.synthetic_rgb import create_synthetic_rgb_by_mode
from sarviz.vocabulary import (
    AutoscaleStrategy,
    BitDepth,
    OutputFormat,
    Polarization,
    PolarizationOperation,
    SyntheticRgbMode,
)

logger = logging.getLogger(__name__)

#: Dual-polarization pairs in order of preference.
CHANNEL_PAIRS = (
    (Polarization.VV, Polarization.VH),
    (Polarization.HH, Polarization.HV),
)


@dataclass
class ProcessedImage:
    """Result of in-memory processing.

    Exactly one of ``gray`` and ``rgb`` is set. ``gray_band2`` is set
    for dual-band output only.

    Attributes
    ----------
    width, height : int
        Output dimensions in pixels.
    bit_depth : BitDepth
        Depth of the gray bands; ``U8`` for RGB output.
    gray : np.ndarray, optional
        First gray band, shape ``(height, width)``.
    gray_band2 : np.ndarray, optional
        Second gray band, same shape and dtype as ``gray``.
    rgb : np.ndarray, optional
        Interleaved RGB, shape ``(height, width, 3)``, uint8.
    record : GeometricRecord
        Resampling scale and padding offsets relative to the input.
    geotransform : GeoTransform, optional
        Geotransform of the output grid.
    """

    width: int
    height: int
    bit_depth: BitDepth
    record: GeometricRecord
    gray: Optional[np.ndarray] = None
    gray_band2: Optional[np.ndarray] = None
    rgb: Optional[np.ndarray] = None
    geotransform: Optional[GeoTransform] = None

    @property
    def band_count(self) -> int:
        if self.rgb is not None:
            return 3
        return 2 if self.gray_band2 is not None else 1


def _check_same_shape(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape != b.shape:
        raise ShapeMismatchError(
            f"Channel shapes differ: {a.shape} vs {b.shape}"
        )


def _quantize(channel: np.ndarray, strategy: AutoscaleStrategy,
              bit_depth: BitDepth) -> np.ndarray:
    db, mask = db_with_mask(channel)
    return autoscale(db, mask, strategy, bit_depth)


def _adjusted(geotransform: Optional[Sequence[float]],
              record: GeometricRecord) -> Optional[GeoTransform]:
    if geotransform is None:
        return None
    return adjust_geotransform(geotransform, record)


def process_single_band(
    channel: np.ndarray,
    strategy: AutoscaleStrategy = AutoscaleStrategy.CLAHE,
    bit_depth: BitDepth = BitDepth.U8,
    target_size: Optional[int] = None,
    pad: bool = False,
    geotransform: Optional[Sequence[float]] = None,
) -> ProcessedImage:
    """Visualize one channel as a single gray band.

    Parameters
    ----------
    channel : np.ndarray
        Raw intensity grid, shape ``(rows, cols)``, real or complex.
    strategy : AutoscaleStrategy
        Contrast strategy. Default ``CLAHE``.
    bit_depth : BitDepth
        Output depth. Default ``U8``.
    target_size : int, optional
        Long side of the output; ``None`` keeps the input size.
    pad : bool
        Zero-pad to a square.
    geotransform : Sequence[float], optional
        GDAL geotransform of *channel*.

    Returns
    -------
    ProcessedImage
    """
    scaled = _quantize(channel, strategy, bit_depth)
    return _gray_image(scaled, bit_depth, target_size, pad, geotransform)


def _gray_image(
    scaled: np.ndarray,
    bit_depth: BitDepth,
    target_size: Optional[int],
    pad: bool,
    geotransform: Optional[Sequence[float]],
) -> ProcessedImage:
    geo = transform_geometry(scaled, target_size=target_size, pad=pad,
                             bit_depth=bit_depth)
    return ProcessedImage(
        width=geo.final_cols,
        height=geo.final_rows,
        bit_depth=bit_depth,
        record=geo.record,
        gray=geo.band,
        geotransform=_adjusted(geotransform, geo.record),
    )


def process_dual_band(
    channel1: np.ndarray,
    channel2: np.ndarray,
    strategy: AutoscaleStrategy = AutoscaleStrategy.CLAHE,
    bit_depth: BitDepth = BitDepth.U8,
    target_size: Optional[int] = None,
    pad: bool = False,
    geotransform: Optional[Sequence[float]] = None,
) -> ProcessedImage:
    """Visualize two channels as co-registered gray bands.

    Each channel is quantized against its own statistics; both share
    one geometric record.

    Raises
    ------
    ShapeMismatchError
        If the channels differ in shape.
    """
    _check_same_shape(channel1, channel2)
    band1 = _quantize(channel1, strategy, bit_depth)
    band2 = _quantize(channel2, strategy, bit_depth)
    geo = transform_geometry(band1, band2, target_size=target_size, pad=pad,
                             bit_depth=bit_depth, dual_band=True)
    return ProcessedImage(
        width=geo.final_cols,
        height=geo.final_rows,
        bit_depth=bit_depth,
        record=geo.record,
        gray=geo.band,
        gray_band2=geo.band2,
        geotransform=_adjusted(geotransform, geo.record),
    )


def process_synthetic_rgb(
    co_channel: np.ndarray,
    cross_channel: np.ndarray,
    strategy: AutoscaleStrategy = AutoscaleStrategy.CLAHE,
    mode: SyntheticRgbMode = SyntheticRgbMode.DEFAULT,
    target_size: Optional[int] = None,
    pad: bool = False,
    geotransform: Optional[Sequence[float]] = None,
    polarizations: Tuple[Polarization, Polarization] = CHANNEL_PAIRS[0],
) -> ProcessedImage:
    """Compose a co/cross-polarized pair into a synthetic RGB image.

    Both channels are quantized to 8 bits. Under ``TAMED`` each band
    uses its polarization-specific low clip. Resampling happens before
    composition; the water-suppressed composite is used for ``TAMED``
    and ``CLAHE``.

    Parameters
    ----------
    co_channel, cross_channel : np.ndarray
        Raw intensity grids of the same shape.
    polarizations : Tuple[Polarization, Polarization]
        Polarizations of the two channels. Default ``(VV, VH)``.

    Raises
    ------
    ShapeMismatchError
        If the channels differ in shape.
    CompositeModeNotImplementedError
        If *mode* has no implementation.
    """
    _check_same_shape(co_channel, cross_channel)
    if strategy is AutoscaleStrategy.TAMED:
        bands = []
        for channel, pol in zip((co_channel, cross_channel), polarizations):
            db, mask = db_with_mask(channel)
            bands.append(autoscale_tamed_synthetic_rgb(db, mask, pol))
        band1, band2 = bands
    else:
        band1 = _quantize(co_channel, strategy, BitDepth.U8)
        band2 = _quantize(cross_channel, strategy, BitDepth.U8)

    geo = transform_geometry(band1, band2, target_size=target_size, pad=pad,
                             bit_depth=BitDepth.U8, dual_band=True)
    rgb = create_synthetic_rgb_by_mode(mode, geo.band, geo.band2, strategy)
    return ProcessedImage(
        width=geo.final_cols,
        height=geo.final_rows,
        bit_depth=BitDepth.U8,
        record=geo.record,
        rgb=rgb,
        geotransform=_adjusted(geotransform, geo.record),
    )


def process_polarization_operation(
    a: np.ndarray,
    b: np.ndarray,
    operation: PolarizationOperation,
    strategy: AutoscaleStrategy = AutoscaleStrategy.CLAHE,
    bit_depth: BitDepth = BitDepth.U8,
    target_size: Optional[int] = None,
    pad: bool = False,
    geotransform: Optional[Sequence[float]] = None,
) -> ProcessedImage:
    """Combine two channels with *operation*, then visualize one band.

    LOG_RATIO already yields decibels, so it is autoscaled directly with
    every sample valid where the denominator is usable.
    """
    logger.info("Combining channels: %s", operation.label)
    combined = combine_channels(a, b, operation)
    if operation is PolarizationOperation.LOG_RATIO:
        db = np.real(combined).astype(np.float64)
        mask = np.abs(b) > DENOMINATOR_EPS
        scaled = autoscale(db, mask, strategy, bit_depth)
        return _gray_image(scaled, bit_depth, target_size, pad, geotransform)
    return process_single_band(combined, strategy, bit_depth, target_size,
                               pad, geotransform)


def _channel_lookup(
    channels: Mapping[Union[Polarization, str], np.ndarray]
) -> dict:
    lookup = {}
    for key, grid in channels.items():
        if isinstance(key, Polarization):
            lookup[key] = grid
            continue
        try:
            lookup[Polarization(str(key).strip().lower())] = grid
        except ValueError:
            choices = ', '.join(p.value for p in Polarization)
            raise ValidationError(
                f"Unknown polarization channel {key!r}; expected one of: {choices}"
            ) from None
    return lookup


def select_channel_pair(
    channels: Mapping[Union[Polarization, str], np.ndarray]
) -> Tuple[Tuple[Polarization, Polarization], np.ndarray, np.ndarray]:
    """Pick the dual-polarization pair, preferring VV/VH over HH/HV.

    Raises
    ------
    MissingBandError
        If neither complete pair is present.
    """
    lookup = _channel_lookup(channels)
    for pair in CHANNEL_PAIRS:
        if all(p in lookup for p in pair):
            return pair, lookup[pair[0]], lookup[pair[1]]
    available = ', '.join(sorted(p.value for p in lookup)) or 'none'
    raise MissingBandError(
        f"Dual-polarization output requires VV+VH or HH+HV; "
        f"available: {available}"
    )


def process(
    channels: Mapping[Union[Polarization, str], np.ndarray],
    params: Optional[ProcessingParams] = None,
    geotransform: Optional[Sequence[float]] = None,
) -> ProcessedImage:
    """Run the product described by *params* on in-memory channels.

    Parameters
    ----------
    channels : Mapping[Polarization or str, np.ndarray]
        Raw intensity grids keyed by polarization.
    params : ProcessingParams, optional
        Run configuration; defaults apply when omitted.
    geotransform : Sequence[float], optional
        Geotransform shared by the input channels.

    Raises
    ------
    MissingBandError
        If a required channel is absent.
    ValidationError
        If a channel key is not a known polarization.
    """
    if params is None:
        params = ProcessingParams()
    bit_depth = params.effective_bit_depth

    if params.operation is not None:
        _, a, b = select_channel_pair(channels)
        return process_polarization_operation(
            a, b, params.operation, params.autoscale, bit_depth,
            params.target_size, params.pad, geotransform)

    if params.multiband:
        pair, first, second = select_channel_pair(channels)
        if params.output_format is OutputFormat.TIFF:
            return process_dual_band(
                first, second, params.autoscale, bit_depth,
                params.target_size, params.pad, geotransform)
        return process_synthetic_rgb(
            first, second, params.autoscale, params.synthetic_rgb_mode,
            params.target_size, params.pad, geotransform, pair)

    lookup = _channel_lookup(channels)
    if params.polarization not in lookup:
        raise MissingBandError(
            f"Channel {params.polarization.value} not available"
        )
    return process_single_band(
        lookup[params.polarization], params.autoscale, bit_depth,
        params.target_size, params.pad, geotransform)
