# -*- coding: utf-8 -*-
"""
SARVIZ - SAR visualization pipeline.

Turns raw synthetic aperture radar backscatter grids into display-ready
8/16-bit imagery: decibel conversion with a noise-floor validity mask,
histogram statistics, strategy-driven autoscaling (including CLAHE),
polarization channel algebra, synthetic RGB composites, Lanczos
resampling with square padding, and JPEG/PNG/GeoTIFF output.

Dependencies
------------
numpy
scipy
Pillow
PyYAML

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
2026-03-11
"""

__version__ = "0.1.0"

from sarviz.exceptions import (
    SarvizError,
    ValidationError,
    ShapeMismatchError,
    MissingBandError,
    ProcessorError,
    ResampleError,
    CompositeModeNotImplementedError,
    DependencyError,
)
from sarviz.vocabulary import (
    Polarization,
    PolarizationOperation,
    AutoscaleStrategy,
    BitDepth,
    SyntheticRgbMode,
    OutputFormat,
    ProcessorCategory,
)
from sarviz.config import ProcessingParams
from sarviz.pipeline import (
    ProcessedImage,
    process,
    process_dual_band,
    process_polarization_operation,
    process_single_band,
    process_synthetic_rgb,
)

__all__ = [
    '__version__',
    'SarvizError',
    'ValidationError',
    'ShapeMismatchError',
    'MissingBandError',
    'ProcessorError',
    'ResampleError',
    'CompositeModeNotImplementedError',
    'DependencyError',
    'Polarization',
    'PolarizationOperation',
    'AutoscaleStrategy',
    'BitDepth',
    'SyntheticRgbMode',
    'OutputFormat',
    'ProcessorCategory',
    'ProcessingParams',
    'ProcessedImage',
    'process',
    'process_dual_band',
    'process_polarization_operation',
    'process_single_band',
    'process_synthetic_rgb',
]
