# -*- coding: utf-8 -*-
"""
Tests for sarviz.image_processing.intensity - dB conversion and mask.

Created
-------
2026-03-04
"""

import numpy as np
import pytest

from sarviz.exceptions import ValidationError
from sarviz.image_processing.intensity import (
    NOISE_FLOOR_DB,
    ToDecibels,
    db_with_mask,
)


class TestDbWithMask:
    def test_known_values(self):
        db, mask = db_with_mask(np.array([[1.0, 10.0, 100.0]]))
        np.testing.assert_allclose(db, [[0.0, 10.0, 20.0]])
        assert mask.all()

    def test_zero_and_negative_hit_intensity_floor(self):
        db, mask = db_with_mask(np.array([[0.0, -5.0]]))
        np.testing.assert_allclose(db, [[-100.0, -100.0]])
        assert not mask.any()

    def test_mask_is_strictly_above_noise_floor(self):
        db, mask = db_with_mask(np.array([[1e-6, 1.01e-5, 9.9e-6]]))
        np.testing.assert_array_equal(mask, db > NOISE_FLOOR_DB)
        assert mask.tolist() == [[False, True, False]]

    def test_monotonic(self):
        rng = np.random.default_rng(0)
        values = np.sort(rng.uniform(1e-8, 1e3, 500))
        db, _ = db_with_mask(values[None, :])
        assert np.all(np.diff(db[0]) >= 0.0)

    def test_complex_uses_real_part(self):
        db, _ = db_with_mask(np.array([[100.0 + 50.0j, 0.0 + 10.0j]]))
        np.testing.assert_allclose(db, [[20.0, -100.0]])

    def test_float32_input_promoted(self):
        db, _ = db_with_mask(np.ones((4, 4), dtype=np.float32))
        assert db.dtype == np.float64


class TestToDecibels:
    def test_apply_returns_db(self):
        out = ToDecibels().apply(np.array([[1.0, 100.0]]))
        np.testing.assert_allclose(out, [[0.0, 20.0]])

    def test_apply_with_mask(self):
        db, mask = ToDecibels().apply_with_mask(np.array([[1.0, 100.0, 0.0]]))
        np.testing.assert_allclose(db, [[0.0, 20.0, -100.0]])
        assert mask.tolist() == [[True, True, False]]

    def test_custom_noise_floor(self):
        _, mask = ToDecibels(noise_floor_db=-10.0).apply_with_mask(
            np.array([[0.05, 0.2]]))
        assert mask.tolist() == [[False, True]]

    def test_runtime_override(self):
        _, mask = ToDecibels().apply_with_mask(
            np.array([[0.05]]), noise_floor_db=-20.0)
        assert mask.tolist() == [[True]]

    def test_positive_floor_rejected(self):
        with pytest.raises(ValidationError):
            ToDecibels(noise_floor_db=5.0)

    def test_version_declared(self):
        assert ToDecibels.__processor_version__ == '1.0.0'
