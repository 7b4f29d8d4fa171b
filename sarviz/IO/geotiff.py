# -*- coding: utf-8 -*-
"""
GeoTIFF Writer - Write one or more quantized bands to GeoTIFF.

Bands are written with rasterio (GDAL). A GDAL geotransform is stored
through ``Affine.from_gdal``; a CRS given as WKT or ``EPSG:XXXX`` is
attached when present. Metadata entries become dataset tags.

Dependencies
------------
rasterio

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-09

Modified
--------
2026-03-10
"""

# Standard library
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np

try:
    import rasterio
    from rasterio.crs import CRS
    from rasterio.transform import Affine
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

# SARVIZ internal
from sarviz.exceptions import DependencyError, ValidationError
from sarviz.IO.base import ImageWriter

logger = logging.getLogger(__name__)


class GeoTIFFWriter(ImageWriter):
    """Write uint8/uint16 bands to a GeoTIFF file.

    Parameters
    ----------
    filepath : str or Path
        Output file path.
    metadata : Dict[str, Any], optional
        Dataset tags.
    compress : str, optional
        GDAL compression name, e.g. ``'lzw'``. Default ``'deflate'``.

    Raises
    ------
    DependencyError
        If rasterio is not installed.

    Examples
    --------
    >>> with GeoTIFFWriter('scene.tif') as writer:
    ...     writer.write(np.stack([vv, vh]),
    ...                  geolocation={'geotransform': gt, 'crs': 'EPSG:4326'})
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None,
        compress: Optional[str] = 'deflate',
    ) -> None:
        if not _HAS_RASTERIO:
            raise DependencyError(
                "rasterio is required for GeoTIFF writing. "
                "Install with: pip install rasterio"
            )
        super().__init__(filepath, metadata)
        self.compress = compress

    def write(
        self,
        data: np.ndarray,
        geolocation: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Write a ``(rows, cols)`` band or a ``(bands, rows, cols)`` stack.

        Parameters
        ----------
        data : np.ndarray
            uint8 or uint16 samples.
        geolocation : Dict[str, Any], optional
            ``'geotransform'``: GDAL six-tuple; ``'crs'``: WKT or
            ``EPSG:XXXX`` string.

        Raises
        ------
        ValidationError
            If the shape or dtype is unsupported.
        """
        if data.ndim == 2:
            data = data[np.newaxis, ...]
        if data.ndim != 3:
            raise ValidationError(
                f"Expected (rows, cols) or (bands, rows, cols), got "
                f"shape {data.shape}"
            )
        if data.dtype not in (np.uint8, np.uint16):
            raise ValidationError(
                f"GeoTIFF bands must be uint8 or uint16, got {data.dtype}"
            )

        count, rows, cols = data.shape
        profile: Dict[str, Any] = {
            'driver': 'GTiff',
            'dtype': data.dtype.name,
            'width': cols,
            'height': rows,
            'count': count,
        }
        if self.compress:
            profile['compress'] = self.compress

        geolocation = geolocation or {}
        gt = geolocation.get('geotransform')
        if gt is not None:
            profile['transform'] = Affine.from_gdal(*gt)
        crs = geolocation.get('crs')
        if crs:
            profile['crs'] = CRS.from_user_input(crs)

        with rasterio.open(str(self.filepath), 'w', **profile) as dst:
            dst.write(data)
            if self.metadata:
                dst.update_tags(**{str(k): str(v)
                                   for k, v in self.metadata.items()})
        logger.info("Wrote GeoTIFF %dx%d, %d band(s) %s to %s",
                    cols, rows, count, data.dtype.name, self.filepath)
