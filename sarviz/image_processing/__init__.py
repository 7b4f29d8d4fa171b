# -*- coding: utf-8 -*-
"""
Image Processing Module - Radiometric, statistical and contrast stages.

Sub-modules
-----------
polarization.py
    Element-wise channel algebra (sum, difference, ratio, normalized
    difference, log ratio).
intensity.py
    ``ToDecibels`` and the noise-floor validity mask.
statistics.py
    Streaming moments and histogram percentiles of valid dB samples.
autoscale.py
    Strategy-driven quantization to 8/16 bits (``SarAutoscale``).
clahe.py
    Contrast-limited adaptive histogram equalization (``ClaheEqualizer``).
synthetic_rgb.py
    Dual-polarization RGB composites.
versioning.py, params.py, base.py
    Processor infrastructure: version/tag decorators, ``Annotated``
    tunable parameter markers, ``ImageProcessor`` / ``ImageTransform``.

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

from sarviz.image_processing.base import ImageProcessor, ImageTransform
from sarviz.image_processing.params import Range, Options, Desc, ParamSpec
from sarviz.image_processing.versioning import processor_version, processor_tags
from sarviz.image_processing.polarization import (
    combine_channels,
    sum_channels,
    difference_channels,
    ratio_channels,
    normalized_difference_channels,
    log_ratio_channels,
)
from sarviz.image_processing.intensity import ToDecibels, db_with_mask
from sarviz.image_processing.statistics import (
    DistributionStats,
    RunningMoments,
    compute_statistics,
)
from sarviz.image_processing.autoscale import (
    SarAutoscale,
    StrategyParameters,
    autoscale,
    autoscale_tamed_synthetic_rgb,
    select_parameters,
)
from sarviz.image_processing.clahe import ClaheEqualizer, equalize_adaptive
from sarviz.image_processing.synthetic_rgb import (
    create_synthetic_rgb,
    create_synthetic_rgb_suppressed,
    create_synthetic_rgb_by_mode,
)

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'processor_version',
    'processor_tags',
    'combine_channels',
    'sum_channels',
    'difference_channels',
    'ratio_channels',
    'normalized_difference_channels',
    'log_ratio_channels',
    'ToDecibels',
    'db_with_mask',
    'DistributionStats',
    'RunningMoments',
    'compute_statistics',
    'SarAutoscale',
    'StrategyParameters',
    'autoscale',
    'autoscale_tamed_synthetic_rgb',
    'select_parameters',
    'ClaheEqualizer',
    'equalize_adaptive',
    'create_synthetic_rgb',
    'create_synthetic_rgb_suppressed',
    'create_synthetic_rgb_by_mode',
]
