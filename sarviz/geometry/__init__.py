# -*- coding: utf-8 -*-
"""
Geometry Module - Resampling, square padding and geotransform tracking.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-06
"""

from sarviz.geometry.padding import pad_to_square, square_padding
from sarviz.geometry.resize import (
    GeometricRecord,
    GeometricResult,
    calculate_resize_dimensions,
    resize_u8,
    resize_u16,
    transform_geometry,
)
from sarviz.geometry.geotransform import (
    GeoTransform,
    adjust_geotransform,
    world_file_lines,
)

__all__ = [
    'pad_to_square',
    'square_padding',
    'GeometricRecord',
    'GeometricResult',
    'calculate_resize_dimensions',
    'resize_u8',
    'resize_u16',
    'transform_geometry',
    'GeoTransform',
    'adjust_geotransform',
    'world_file_lines',
]
