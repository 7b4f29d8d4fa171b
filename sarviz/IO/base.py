# -*- coding: utf-8 -*-
"""
IO Base - Abstract writer interface for visualization products.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-09
"""

# Standard library
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np


class ImageWriter(ABC):
    """Encode one visualization product into a file.

    Writers are single-shot: construct with the destination, call
    ``write`` once. They support ``with`` blocks so that writers holding
    open handles can release them in ``close``.

    Parameters
    ----------
    filepath : str or Path
        Destination file.
    metadata : Dict[str, Any], optional
        Tags embedded by formats that carry them.
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.filepath = Path(filepath)
        self.metadata = dict(metadata or {})

    @abstractmethod
    def write(
        self,
        data: np.ndarray,
        geolocation: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Encode *data* to ``self.filepath``.

        *data* is a ``(rows, cols)`` band, a ``(bands, rows, cols)``
        stack or a ``(rows, cols, 3)`` RGB image depending on the
        writer. *geolocation* may hold ``'geotransform'`` (GDAL order)
        and ``'crs'``.

        Raises
        ------
        ValidationError
            If the format cannot hold *data*.
        """

    def close(self) -> None:
        """Release resources; nothing to do for single-shot writers."""

    def __enter__(self) -> 'ImageWriter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
