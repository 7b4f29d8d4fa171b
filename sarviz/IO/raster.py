# -*- coding: utf-8 -*-
"""
Raster Writer - Write quantized bands and RGB composites to JPEG or PNG.

Grayscale uint8 bands are written as mode ``L``, uint16 bands as
``I;16`` (PNG only), and ``(rows, cols, 3)`` uint8 composites as
``RGB``. Georeferencing is not embedded; use the world-file sidecars.

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
from PIL import Image
from PIL.PngImagePlugin import PngInfo

# SARVIZ internal
from sarviz.exceptions import ValidationError
from sarviz.IO.base import ImageWriter
from sarviz.vocabulary import OutputFormat

logger = logging.getLogger(__name__)

#: Default JPEG quality.
JPEG_QUALITY = 90

_PIL_FORMATS = {OutputFormat.JPEG: 'JPEG', OutputFormat.PNG: 'PNG'}


def format_from_path(filepath: Union[str, Path]) -> OutputFormat:
    """Infer the output format from a filename extension.

    Raises
    ------
    ValidationError
        If the extension is not a supported format.
    """
    ext = Path(filepath).suffix.lower().lstrip('.')
    if ext in ('jpg', 'jpeg'):
        return OutputFormat.JPEG
    if ext == 'png':
        return OutputFormat.PNG
    if ext in ('tif', 'tiff'):
        return OutputFormat.TIFF
    raise ValidationError(f"Unsupported output extension: '{ext}'")


class RasterImageWriter(ImageWriter):
    """Write gray bands or RGB composites with Pillow.

    Parameters
    ----------
    filepath : str or Path
        Output file path.
    output_format : OutputFormat, optional
        ``JPEG`` or ``PNG``. Inferred from the extension when omitted.
    metadata : Dict[str, Any], optional
        Written as PNG text chunks; ignored for JPEG.
    quality : int
        JPEG quality, 1-95. Default 90.

    Examples
    --------
    >>> with RasterImageWriter('scene.png') as writer:
    ...     writer.write(band)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        output_format: Optional[OutputFormat] = None,
        metadata: Optional[Dict[str, Any]] = None,
        quality: int = JPEG_QUALITY,
    ) -> None:
        super().__init__(filepath, metadata)
        if output_format is None:
            output_format = format_from_path(self.filepath)
        if output_format not in _PIL_FORMATS:
            raise ValidationError(
                f"RasterImageWriter supports JPEG and PNG, "
                f"got {output_format.name}"
            )
        self.output_format = output_format
        self.quality = quality

    def _to_image(self, data: np.ndarray) -> 'Image.Image':
        if data.ndim == 3 and data.shape[2] == 3:
            if data.dtype != np.uint8:
                raise ValidationError(
                    f"RGB data must be uint8, got {data.dtype}"
                )
            return Image.fromarray(np.ascontiguousarray(data))
        if data.ndim != 2:
            raise ValidationError(
                f"Expected 2D grayscale (rows, cols) or 3D RGB "
                f"(rows, cols, 3), got shape {data.shape}"
            )
        if data.dtype == np.uint8:
            return Image.fromarray(np.ascontiguousarray(data))
        if data.dtype == np.uint16:
            if self.output_format is OutputFormat.JPEG:
                raise ValidationError("JPEG output supports 8-bit data only")
            return Image.fromarray(
                np.ascontiguousarray(data, dtype='<u2'))
        raise ValidationError(
            f"Unsupported dtype for raster output: {data.dtype}"
        )

    def write(
        self,
        data: np.ndarray,
        geolocation: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Encode *data* to ``self.filepath``.

        *geolocation* is not embedded; see ``write_world_file``.
        """
        image = self._to_image(data)
        save_kwargs: Dict[str, Any] = {}
        if self.output_format is OutputFormat.JPEG:
            save_kwargs['quality'] = self.quality
        elif self.metadata:
            info = PngInfo()
            for key, value in self.metadata.items():
                info.add_text(str(key), str(value))
            save_kwargs['pnginfo'] = info
        image.save(str(self.filepath), format=_PIL_FORMATS[self.output_format],
                   **save_kwargs)
        logger.info("Wrote %s %dx%d (%s) to %s", self.output_format.name,
                    image.width, image.height, image.mode, self.filepath)
