# -*- coding: utf-8 -*-
"""
Polarization Algebra - Element-wise combination of two channel grids.

Sum, difference, ratio, normalized difference and log ratio of two
same-shaped polarization channels (typically VV/VH or HH/HV). Every
operation that divides guards its denominator: where the magnitude of
the denominator is not above ``1e-10`` the output sample is ``0``, so
the result never holds NaN or Inf.

All functions are pure and return new arrays.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-02

Modified
--------
2026-03-05
"""

# Standard library
from typing import Callable, Dict

# Third-party
import numpy as np

# SARVIZ internal
from sarviz.exceptions import ShapeMismatchError
from sarviz.vocabulary import PolarizationOperation

#: Denominators with magnitude at or below this produce a zero sample.
DENOMINATOR_EPS = 1e-10


def _check_pair(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape != b.shape:
        raise ShapeMismatchError(
            f"Shape mismatch: a {a.shape} vs b {b.shape}"
        )


def _safe_divide(num: np.ndarray, den: np.ndarray) -> np.ndarray:
    ok = np.abs(den) > DENOMINATOR_EPS
    out = np.zeros(np.broadcast(num, den).shape, dtype=np.result_type(num, den, np.float64))
    np.divide(num, den, out=out, where=ok)
    return out


def sum_channels(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise ``a + b``."""
    _check_pair(a, b)
    return a + b


def difference_channels(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise ``a - b``."""
    _check_pair(a, b)
    return a - b


def ratio_channels(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise ``a / b``; ``0`` where ``|b| <= 1e-10``."""
    _check_pair(a, b)
    return _safe_divide(a, b)


def normalized_difference_channels(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise ``(a - b) / (a + b)``; ``0`` where ``|a + b| <= 1e-10``."""
    _check_pair(a, b)
    return _safe_divide(a - b, a + b)


def log_ratio_channels(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise ``10 * log10(|a / b|)``; ``0`` where ``|b| <= 1e-10``.

    For complex inputs the result occupies the real component and the
    imaginary component is zero. A zero numerator with a valid
    denominator also yields ``0`` rather than ``-inf``.
    """
    _check_pair(a, b)
    mag = np.abs(_safe_divide(a, b))
    db = np.zeros(mag.shape, dtype=np.float64)
    np.log10(mag, out=db, where=mag > 0)
    db *= 10.0
    if np.iscomplexobj(a) or np.iscomplexobj(b):
        return db.astype(np.complex128)
    return db


_OPERATIONS: Dict[PolarizationOperation, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    PolarizationOperation.SUM: sum_channels,
    PolarizationOperation.DIFF: difference_channels,
    PolarizationOperation.RATIO: ratio_channels,
    PolarizationOperation.NDIFF: normalized_difference_channels,
    PolarizationOperation.LOG_RATIO: log_ratio_channels,
}


def combine_channels(
    a: np.ndarray,
    b: np.ndarray,
    operation: PolarizationOperation,
) -> np.ndarray:
    """Combine two channels with the named operation.

    Parameters
    ----------
    a, b : np.ndarray
        Real or complex grids of identical shape.
    operation : PolarizationOperation
        Combination to apply.

    Returns
    -------
    np.ndarray
        Combined grid, same shape as the inputs.

    Raises
    ------
    ShapeMismatchError
        If ``a`` and ``b`` differ in shape.
    """
    return _OPERATIONS[operation](a, b)
