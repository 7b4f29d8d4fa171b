# -*- coding: utf-8 -*-
"""
Geotransform - Carry an affine geotransform through resampling and padding.

Geotransforms use the GDAL six-coefficient convention
``(origin_x, pixel_w, row_rot, origin_y, col_rot, pixel_h)`` mapping the
top-left corner of pixel ``(col, row)`` to map coordinates.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-07

Modified
--------
2026-03-09
"""

# Standard library
from typing import List, Sequence, Tuple

# SARVIZ internal
from sarviz.exceptions import ValidationError
from sarviz.geometry.resize import GeometricRecord

GeoTransform = Tuple[float, float, float, float, float, float]


def _as_geotransform(gt: Sequence[float]) -> List[float]:
    values = [float(v) for v in gt]
    if len(values) != 6:
        raise ValidationError(
            f"Geotransform must have 6 coefficients, got {len(values)}"
        )
    return values


def adjust_geotransform(gt: Sequence[float], record: GeometricRecord) -> GeoTransform:
    """Return the geotransform of the transformed grid.

    Pixel sizes grow by the inverse of the resampling scale and the
    origin moves up/left by the padding offsets.

    Parameters
    ----------
    gt : Sequence[float]
        Geotransform of the original grid.
    record : GeometricRecord
        Record produced by ``transform_geometry``.
    """
    out = _as_geotransform(gt)
    if record.scale_x > 0:
        out[1] /= record.scale_x
    if record.scale_y > 0:
        out[5] /= record.scale_y
    out[0] -= record.pad_left * out[1]
    out[3] -= record.pad_top * out[5]
    return tuple(out)


def world_file_lines(gt: Sequence[float]) -> List[str]:
    """Six world-file lines (A, D, B, E, C, F) for *gt*.

    World files reference the centre of the upper-left pixel, so the
    origin is shifted by half a pixel along both axes.
    """
    origin_x, a, b, origin_y, d, e = _as_geotransform(gt)
    c = origin_x + 0.5 * a + 0.5 * b
    f = origin_y + 0.5 * d + 0.5 * e
    return [f"{v:.12f}" for v in (a, d, b, e, c, f)]
