# -*- coding: utf-8 -*-
"""
Tests for sarviz.image_processing.polarization - channel algebra.

Created
-------
2026-03-04
"""

import numpy as np
import pytest

from sarviz.exceptions import ShapeMismatchError, ValidationError
from sarviz.image_processing.polarization import (
    combine_channels,
    difference_channels,
    log_ratio_channels,
    normalized_difference_channels,
    ratio_channels,
    sum_channels,
)
from sarviz.vocabulary import PolarizationOperation


@pytest.fixture
def pair():
    rng = np.random.default_rng(7)
    a = rng.uniform(0.1, 2.0, (16, 12))
    b = rng.uniform(0.1, 2.0, (16, 12))
    return a, b


# ---------------------------------------------------------------------------
# Element-wise operations
# ---------------------------------------------------------------------------

class TestOperations:
    def test_sum_and_difference(self, pair):
        a, b = pair
        np.testing.assert_allclose(sum_channels(a, b), a + b)
        np.testing.assert_allclose(difference_channels(a, b), a - b)

    def test_ratio(self, pair):
        a, b = pair
        np.testing.assert_allclose(ratio_channels(a, b), a / b)

    def test_ratio_zero_denominator_is_zero(self):
        a = np.full((2, 2), 5.0)
        b = np.array([[0.0, 1e-12], [2.0, -1e-11]])
        out = ratio_channels(a, b)
        np.testing.assert_array_equal(out, [[0.0, 0.0], [2.5, 0.0]])
        assert np.all(np.isfinite(out))

    def test_normalized_difference(self, pair):
        a, b = pair
        np.testing.assert_allclose(
            normalized_difference_channels(a, b), (a - b) / (a + b))

    def test_normalized_difference_zero_sum(self):
        a = np.array([[1.0, 3.0]])
        b = np.array([[-1.0, 1.0]])
        np.testing.assert_array_equal(
            normalized_difference_channels(a, b), [[0.0, 0.5]])

    def test_log_ratio(self):
        a = np.array([[100.0, 1.0, 0.0, 4.0]])
        b = np.array([[1.0, 10.0, 3.0, 0.0]])
        out = log_ratio_channels(a, b)
        np.testing.assert_allclose(out, [[20.0, -10.0, 0.0, 0.0]])

    def test_log_ratio_complex_real_part(self):
        a = np.array([[10.0 + 0j, 0 + 1j]])
        b = np.array([[1.0 + 0j, 0 + 1j]])
        out = log_ratio_channels(a, b)
        assert np.iscomplexobj(out)
        np.testing.assert_allclose(out.real, [[10.0, 0.0]])
        np.testing.assert_array_equal(out.imag, 0.0)

    def test_complex_ratio(self):
        a = np.array([[2 + 2j]])
        b = np.array([[1 + 1j]])
        np.testing.assert_allclose(ratio_channels(a, b), [[2 + 0j]])


# ---------------------------------------------------------------------------
# Dispatch and shape checks
# ---------------------------------------------------------------------------

class TestCombineChannels:
    @pytest.mark.parametrize('operation, func', [
        (PolarizationOperation.SUM, sum_channels),
        (PolarizationOperation.DIFF, difference_channels),
        (PolarizationOperation.RATIO, ratio_channels),
        (PolarizationOperation.NDIFF, normalized_difference_channels),
        (PolarizationOperation.LOG_RATIO, log_ratio_channels),
    ])
    def test_dispatch(self, pair, operation, func):
        a, b = pair
        np.testing.assert_allclose(combine_channels(a, b, operation),
                                   func(a, b))

    def test_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            combine_channels(np.ones((3, 4)), np.ones((4, 3)),
                             PolarizationOperation.SUM)

    def test_shape_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            ratio_channels(np.ones((2, 2)), np.ones((2, 3)))
        assert issubclass(ShapeMismatchError, ValidationError)

    def test_labels(self):
        assert PolarizationOperation.NDIFF.label == 'normalized_diff'
        assert PolarizationOperation.LOG_RATIO.label == 'log_ratio'
