# -*- coding: utf-8 -*-
"""
IO Module - Writers for SAR visualization products.

Provides an ``ImageWriter`` base, a Pillow-backed JPEG/PNG writer, a
rasterio-backed GeoTIFF writer, world-file sidecars, and
``write_processed_image`` which routes a pipeline result to the right
writer.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-09
"""

from sarviz.IO.base import ImageWriter
from sarviz.IO.geotiff import GeoTIFFWriter
from sarviz.IO.product import write_processed_image
from sarviz.IO.raster import RasterImageWriter, format_from_path
from sarviz.IO.worldfile import (
    world_file_path,
    write_prj_file,
    write_world_file,
)

__all__ = [
    'ImageWriter',
    'GeoTIFFWriter',
    'RasterImageWriter',
    'format_from_path',
    'world_file_path',
    'write_prj_file',
    'write_world_file',
    'write_processed_image',
]
