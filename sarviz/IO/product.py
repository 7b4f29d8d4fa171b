# -*- coding: utf-8 -*-
"""
Product - Write a ``ProcessedImage`` with the matching writer.

TIFF output goes through ``GeoTIFFWriter`` with the geotransform and CRS
embedded. JPEG and PNG go through ``RasterImageWriter`` with a
world-file sidecar (and a ``.prj`` when a CRS is given).

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-10
"""

# Standard library
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np

# SARVIZ internal
from sarviz.exceptions import ValidationError
from sarviz.IO.geotiff import GeoTIFFWriter
from sarviz.IO.raster import RasterImageWriter, format_from_path
from sarviz.IO.worldfile import write_prj_file, write_world_file
from sarviz.pipeline import ProcessedImage
from sarviz.vocabulary import OutputFormat

logger = logging.getLogger(__name__)


def _raster_payload(image: ProcessedImage, fmt: OutputFormat) -> np.ndarray:
    if image.rgb is not None:
        if fmt is OutputFormat.TIFF:
            return np.moveaxis(image.rgb, -1, 0)
        return image.rgb
    if image.gray is None:
        raise ValidationError("ProcessedImage holds no pixel data")
    if image.gray_band2 is not None:
        if fmt is not OutputFormat.TIFF:
            raise ValidationError(
                f"Dual-band output requires TIFF, got {fmt.name}"
            )
        return np.stack([image.gray, image.gray_band2])
    return image.gray


def write_processed_image(
    path: Union[str, Path],
    image: ProcessedImage,
    fmt: Optional[OutputFormat] = None,
    crs: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write *image* to *path*.

    Parameters
    ----------
    path : str or Path
        Output file.
    image : ProcessedImage
        Pipeline result.
    fmt : OutputFormat, optional
        Output format; inferred from the extension when omitted.
    crs : str, optional
        WKT or ``EPSG:XXXX`` projection of the geotransform.
    metadata : Dict[str, Any], optional
        Tags for formats that carry them.

    Returns
    -------
    Path
        The written image path.

    Raises
    ------
    ValidationError
        If the image content does not fit *fmt*.
    DependencyError
        If TIFF output is requested without rasterio.
    """
    path = Path(path)
    if fmt is None:
        fmt = format_from_path(path)
    data = _raster_payload(image, fmt)

    if fmt is OutputFormat.TIFF:
        geolocation = {'geotransform': image.geotransform, 'crs': crs}
        with GeoTIFFWriter(path, metadata) as writer:
            writer.write(data, geolocation=geolocation)
        return path

    with RasterImageWriter(path, fmt, metadata) as writer:
        writer.write(data)
    if image.geotransform is not None:
        write_world_file(path, image.geotransform)
        if crs:
            write_prj_file(path, crs)
    return path
