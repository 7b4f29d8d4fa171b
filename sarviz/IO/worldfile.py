# -*- coding: utf-8 -*-
"""
World File - ESRI world-file and projection sidecars.

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
import logging
from pathlib import Path
from typing import Sequence, Union

# SARVIZ internal
from sarviz.geometry.geotransform import world_file_lines

logger = logging.getLogger(__name__)

_WORLD_EXTENSIONS = {
    'jpg': 'jgw',
    'jpeg': 'jgw',
    'png': 'pgw',
    'tif': 'tfw',
    'tiff': 'tfw',
}


def world_file_path(image_path: Union[str, Path]) -> Path:
    """Sidecar path: ``.jgw``/``.pgw``/``.tfw``, else ``<first letter>w``.

    An image without an extension gets ``.wld``.
    """
    image_path = Path(image_path)
    ext = image_path.suffix.lower().lstrip('.')
    if ext in _WORLD_EXTENSIONS:
        world_ext = _WORLD_EXTENSIONS[ext]
    elif ext:
        world_ext = ext[0] + 'w'
    else:
        world_ext = 'wld'
    return image_path.with_suffix('.' + world_ext)


def write_world_file(image_path: Union[str, Path],
                     geotransform: Sequence[float]) -> Path:
    """Write the world file for *image_path* and return its path."""
    path = world_file_path(image_path)
    path.write_text('\n'.join(world_file_lines(geotransform)) + '\n')
    logger.debug("Wrote world file %s", path)
    return path


def write_prj_file(image_path: Union[str, Path], projection: str) -> Path:
    """Write *projection* (WKT or ``EPSG:XXXX``) to a ``.prj`` sidecar."""
    path = Path(image_path).with_suffix('.prj')
    path.write_text(projection)
    logger.debug("Wrote projection file %s", path)
    return path
