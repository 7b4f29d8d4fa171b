# -*- coding: utf-8 -*-
"""
Radiometric Conversion - Intensity to dB with a per-pixel validity mask.

Maps each raw intensity sample to ``10 * log10(max(value, 1e-10))`` and
flags it valid when the result exceeds the ``-50 dB`` noise floor.
Complex inputs use the real component as the intensity, following the
product convention of detected (GRD) channels stored as complex with a
zero imaginary part.

Never fails: all-invalid inputs simply propagate an all-false mask.

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
2026-03-06
"""

# Standard library
from typing import Annotated, Any, Tuple

# Third-party
import numpy as np

# SARVIZ internal
from sarviz.image_processing.base import ImageTransform
from sarviz.image_processing.params import Desc, Range
from sarviz.image_processing.versioning import processor_tags, processor_version
from sarviz.vocabulary import ProcessorCategory

#: Smallest intensity fed to the logarithm.
MIN_INTENSITY = 1e-10

#: dB values at or below this are treated as no-data.
NOISE_FLOOR_DB = -50.0


def to_intensity(source: np.ndarray) -> np.ndarray:
    """Return the float64 intensity grid for a real or complex *source*."""
    if np.iscomplexobj(source):
        return np.real(source).astype(np.float64)
    return np.asarray(source, dtype=np.float64)


def db_with_mask(
    source: np.ndarray,
    noise_floor_db: float = NOISE_FLOOR_DB,
) -> Tuple[np.ndarray, np.ndarray]:
    """Convert intensities to dB and compute the validity mask.

    Parameters
    ----------
    source : np.ndarray
        Real or complex grid, shape ``(rows, cols)``.
    noise_floor_db : float
        Validity threshold. Default ``-50.0``.

    Returns
    -------
    db : np.ndarray
        float64 dB grid, same shape as *source*.
    mask : np.ndarray
        bool grid, ``True`` where ``db > noise_floor_db``.
    """
    magnitude = np.maximum(to_intensity(source), MIN_INTENSITY)
    db = 10.0 * np.log10(magnitude)
    return db, db > noise_floor_db


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Intensity to dB with noise-floor mask')
class ToDecibels(ImageTransform):
    """Convert raw backscatter intensity to dB.

    Computes ``10 * log10(max(intensity, 1e-10))``. Complex inputs use
    their real component. ``apply`` returns the dB grid only;
    ``apply_with_mask`` also returns the validity mask.

    Parameters
    ----------
    noise_floor_db : float
        Values at or below this are flagged invalid. Default ``-50.0``.

    Examples
    --------
    >>> to_db = ToDecibels()
    >>> db, mask = to_db.apply_with_mask(np.array([[1.0, 100.0, 0.0]]))
    >>> db
    array([[  0.,  20., -100.]])
    >>> mask
    array([[ True,  True, False]])
    """

    noise_floor_db: Annotated[float, Range(max=0.0),
                              Desc('Validity threshold in dB')] = NOISE_FLOOR_DB

    def __init__(self, noise_floor_db: float = NOISE_FLOOR_DB) -> None:
        self.noise_floor_db = noise_floor_db
        self._validate_params()

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Return the dB grid, dtype float64."""
        return self.apply_with_mask(source, **kwargs)[0]

    def apply_with_mask(
        self, source: np.ndarray, **kwargs: Any
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(db, valid_mask)`` for *source*."""
        params = self._resolve_params(kwargs)
        return db_with_mask(source, params['noise_floor_db'])
