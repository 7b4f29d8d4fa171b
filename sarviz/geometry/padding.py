# -*- coding: utf-8 -*-
"""
Padding - Centre a grid on a zero-filled square canvas.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-06
"""

# Standard library
import logging
from typing import Tuple

# Third-party
import numpy as np

logger = logging.getLogger(__name__)


def square_padding(cols: int, rows: int) -> Tuple[int, int, int]:
    """Return ``(side, pad_left, pad_top)`` for a ``cols x rows`` grid.

    ``side`` is the longer dimension; each offset is
    ``(side - dim) // 2`` so odd remainders go to the right/bottom.
    """
    side = max(cols, rows)
    return side, (side - cols) // 2, (side - rows) // 2


def pad_to_square(grid: np.ndarray) -> Tuple[np.ndarray, int, int]:
    """Centre *grid* on a square canvas sized to its longer side.

    Parameters
    ----------
    grid : np.ndarray
        2D grid, shape ``(rows, cols)``, any dtype.

    Returns
    -------
    padded : np.ndarray
        Square grid, same dtype, zero border.
    pad_left : int
        Columns added on the left.
    pad_top : int
        Rows added on top.
    """
    rows, cols = grid.shape
    side, pad_left, pad_top = square_padding(cols, rows)
    logger.debug("Padding %dx%d to %dx%d (left=%d, top=%d)",
                 cols, rows, side, side, pad_left, pad_top)
    padded = np.zeros((side, side), dtype=grid.dtype)
    padded[pad_top:pad_top + rows, pad_left:pad_left + cols] = grid
    return padded, pad_left, pad_top
