# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the SARVIZ framework.

Single source of truth for the controlled vocabularies shared by the
processing core, the pipeline and the configuration layer: polarization
channels, channel algebra operations, autoscale strategies, output bit
depths, synthetic RGB modes, output formats and processor categories.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-02

Modified
--------
2026-03-09
"""

from enum import Enum

import numpy as np


class Polarization(Enum):
    """Transmit/receive channel of a SAR product."""

    VV = "vv"
    VH = "vh"
    HH = "hh"
    HV = "hv"

    @property
    def is_co_polarized(self) -> bool:
        """True for like-polarized channels (``VV``, ``HH``)."""
        return self in (Polarization.VV, Polarization.HH)

    @property
    def is_cross_polarized(self) -> bool:
        """True for cross-polarized channels (``VH``, ``HV``)."""
        return not self.is_co_polarized


class PolarizationOperation(Enum):
    """Element-wise combination of two polarization channels."""

    SUM = "sum"
    DIFF = "diff"
    RATIO = "ratio"
    NDIFF = "n-diff"
    LOG_RATIO = "log-ratio"

    @property
    def label(self) -> str:
        """Metadata label used for product tagging."""
        return _OPERATION_LABELS[self]


_OPERATION_LABELS = {
    PolarizationOperation.SUM: "sum",
    PolarizationOperation.DIFF: "difference",
    PolarizationOperation.RATIO: "ratio",
    PolarizationOperation.NDIFF: "normalized_diff",
    PolarizationOperation.LOG_RATIO: "log_ratio",
}


class AutoscaleStrategy(Enum):
    """Contrast strategy used to map dB values to integer pixels.

    ``CLAHE`` is a first-class member; it bypasses clip/gamma
    quantization and equalizes tile-locally instead.
    """

    STANDARD = "standard"
    ROBUST = "robust"
    ADAPTIVE = "adaptive"
    EQUALIZED = "equalized"
    TAMED = "tamed"
    CLAHE = "clahe"
    DEFAULT = "default"


class BitDepth(Enum):
    """Output sample width."""

    U8 = "u8"
    U16 = "u16"

    @property
    def max_value(self) -> int:
        """Largest representable sample value."""
        return 255 if self is BitDepth.U8 else 65535

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype of a quantized band at this depth."""
        return np.dtype(np.uint8) if self is BitDepth.U8 else np.dtype(np.uint16)


class SyntheticRgbMode(Enum):
    """Named synthetic RGB composition modes.

    All modes currently resolve to the default LUT algorithm.
    """

    DEFAULT = "default"
    RGB_RATIO = "rgb-ratio"
    SAR_URBAN = "sar-urban"
    ENHANCED = "enhanced"


class OutputFormat(Enum):
    """Supported output file formats."""

    TIFF = "tiff"
    JPEG = "jpeg"
    PNG = "png"

    @property
    def extension(self) -> str:
        """Conventional filename extension, without the dot."""
        return {"tiff": "tiff", "jpeg": "jpg", "png": "png"}[self.value]


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    ENHANCE = "enhance"
    MATH = "math"
    ANALYZE = "analyze"
    GEOMETRY = "geometry"
