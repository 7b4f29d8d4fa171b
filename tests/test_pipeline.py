# -*- coding: utf-8 -*-
"""
Tests for sarviz.pipeline - end-to-end in-memory processing.

Created
-------
2026-03-08
"""

import numpy as np
import pytest

from sarviz.config import ProcessingParams
from sarviz.exceptions import (
    CompositeModeNotImplementedError,
    MissingBandError,
    ShapeMismatchError,
    ValidationError,
)
from sarviz.image_processing.polarization import combine_channels
from sarviz.pipeline import (
    process,
    process_dual_band,
    process_polarization_operation,
    process_single_band,
    process_synthetic_rgb,
    select_channel_pair,
)
from sarviz.vocabulary import (
    AutoscaleStrategy,
    BitDepth,
    OutputFormat,
    Polarization,
    PolarizationOperation,
    SyntheticRgbMode,
)

GT = (500000.0, 10.0, 0.0, 4200000.0, 0.0, -10.0)


@pytest.fixture
def channels():
    """Speckle-like VV/VH intensities, 50 rows by 100 columns."""
    rng = np.random.default_rng(99)
    vv = rng.exponential(0.1, (50, 100)).astype(np.float32)
    vh = rng.exponential(0.02, (50, 100)).astype(np.float32)
    vv[:, :4] = 0.0
    return {Polarization.VV: vv, Polarization.VH: vh}


# ---------------------------------------------------------------------------
# Single band
# ---------------------------------------------------------------------------

class TestSingleBand:
    def test_native_size(self, channels):
        image = process_single_band(channels[Polarization.VV])
        assert (image.width, image.height) == (100, 50)
        assert image.gray.dtype == np.uint8
        assert image.rgb is None and image.gray_band2 is None
        assert image.band_count == 1
        assert image.geotransform is None

    def test_no_data_columns_are_zero(self, channels):
        image = process_single_band(channels[Polarization.VV],
                                    AutoscaleStrategy.ROBUST)
        assert not image.gray[:, :4].any()

    def test_constant_scene_standard(self):
        image = process_single_band(np.full((8, 8), 0.05),
                                    AutoscaleStrategy.STANDARD)
        np.testing.assert_array_equal(image.gray, 119)

    def test_pad_to_square(self, channels):
        image = process_single_band(channels[Polarization.VV], pad=True,
                                    geotransform=GT)
        assert (image.width, image.height) == (100, 100)
        assert image.record.pad_top == 25
        assert not image.gray[:25].any() and not image.gray[75:].any()
        assert image.geotransform[3] == pytest.approx(4200000.0 + 250.0)

    def test_resize_sixteen_bit(self, channels):
        image = process_single_band(channels[Polarization.VV],
                                    AutoscaleStrategy.DEFAULT, BitDepth.U16,
                                    target_size=50, geotransform=GT)
        assert image.gray.shape == (25, 50)
        assert image.gray.dtype == np.uint16
        assert image.geotransform[1] == pytest.approx(20.0)
        assert image.geotransform[5] == pytest.approx(-20.0)


# ---------------------------------------------------------------------------
# Two-channel products
# ---------------------------------------------------------------------------

class TestDualChannel:
    def test_dual_band(self, channels):
        image = process_dual_band(channels[Polarization.VV],
                                  channels[Polarization.VH],
                                  bit_depth=BitDepth.U16, target_size=40)
        assert image.gray.shape == image.gray_band2.shape == (20, 40)
        assert image.gray_band2.dtype == np.uint16
        assert image.band_count == 2

    def test_dual_band_shape_mismatch(self, channels):
        with pytest.raises(ShapeMismatchError):
            process_dual_band(channels[Polarization.VV],
                              channels[Polarization.VH][:10])

    def test_synthetic_rgb(self, channels):
        image = process_synthetic_rgb(channels[Polarization.VV],
                                      channels[Polarization.VH],
                                      AutoscaleStrategy.DEFAULT)
        assert image.rgb.shape == (50, 100, 3)
        assert image.rgb.dtype == np.uint8
        assert image.gray is None
        assert image.band_count == 3

    @pytest.mark.parametrize('strategy', [AutoscaleStrategy.TAMED,
                                          AutoscaleStrategy.CLAHE])
    def test_synthetic_rgb_padding_is_black(self, channels, strategy):
        image = process_synthetic_rgb(channels[Polarization.VV],
                                      channels[Polarization.VH],
                                      strategy, pad=True)
        assert image.rgb.shape == (100, 100, 3)
        assert not image.rgb[:25].any()

    def test_synthetic_rgb_mode_placeholder_is_default(self, channels):
        a = process_synthetic_rgb(channels[Polarization.VV],
                                  channels[Polarization.VH],
                                  AutoscaleStrategy.ROBUST,
                                  SyntheticRgbMode.ENHANCED)
        b = process_synthetic_rgb(channels[Polarization.VV],
                                  channels[Polarization.VH],
                                  AutoscaleStrategy.ROBUST)
        np.testing.assert_array_equal(a.rgb, b.rgb)

    def test_polarization_operation(self, channels):
        vv, vh = channels[Polarization.VV], channels[Polarization.VH]
        image = process_polarization_operation(
            vv, vh, PolarizationOperation.RATIO, AutoscaleStrategy.EQUALIZED)
        expected = process_single_band(
            combine_channels(vv, vh, PolarizationOperation.RATIO),
            AutoscaleStrategy.EQUALIZED)
        np.testing.assert_array_equal(image.gray, expected.gray)

    def test_log_ratio_is_scaled_once(self):
        # 10 log10(a / b) = [-10, 0, 10, 20] dB; none of it is no-data.
        a = np.array([[1.0, 1.0, 10.0, 100.0]])
        b = np.array([[10.0, 1.0, 1.0, 1.0]])
        image = process_polarization_operation(
            a, b, PolarizationOperation.LOG_RATIO, AutoscaleStrategy.EQUALIZED)
        np.testing.assert_array_equal(image.gray, [[0, 85, 170, 255]])

    def test_log_ratio_zero_denominator_is_no_data(self):
        a = np.array([[1.0, 1.0, 10.0, 100.0]])
        b = np.array([[0.0, 1.0, 1.0, 1.0]])
        image = process_polarization_operation(
            a, b, PolarizationOperation.LOG_RATIO, AutoscaleStrategy.EQUALIZED)
        assert image.gray[0, 0] == 0
        assert image.gray[0, 3] == 255


# ---------------------------------------------------------------------------
# Dispatch from ProcessingParams
# ---------------------------------------------------------------------------

class TestProcess:
    def test_default_params_single_vv(self, channels):
        image = process(channels)
        assert image.gray.shape == (50, 100)
        assert image.bit_depth is BitDepth.U8

    def test_string_keys(self, channels):
        named = {p.value: grid for p, grid in channels.items()}
        image = process(named, ProcessingParams(polarization=Polarization.VH))
        assert image.gray is not None

    def test_unknown_string_key(self, channels):
        with pytest.raises(ValidationError, match='xx'):
            process({'xx': channels[Polarization.VV]})

    def test_missing_channel(self, channels):
        with pytest.raises(MissingBandError):
            process(channels, ProcessingParams(polarization=Polarization.HH))

    def test_multiband_tiff(self, channels):
        image = process(channels, ProcessingParams(multiband=True))
        assert image.gray_band2 is not None

    def test_multiband_jpeg_is_rgb(self, channels):
        params = ProcessingParams(output_format=OutputFormat.JPEG,
                                  bit_depth=BitDepth.U16, multiband=True)
        image = process(channels, params)
        assert image.rgb is not None
        assert image.bit_depth is BitDepth.U8

    def test_hh_hv_fallback(self, channels):
        pair = {Polarization.HH: channels[Polarization.VV],
                Polarization.HV: channels[Polarization.VH]}
        (first, second), _, _ = select_channel_pair(pair)
        assert (first, second) == (Polarization.HH, Polarization.HV)
        image = process(pair, ProcessingParams(
            operation=PolarizationOperation.DIFF))
        assert image.gray.shape == (50, 100)

    def test_pair_missing(self, channels):
        with pytest.raises(MissingBandError, match='vv'):
            process({Polarization.VV: channels[Polarization.VV]},
                    ProcessingParams(multiband=True))

    def test_geotransform_forwarded(self, channels):
        image = process(channels, ProcessingParams(target_size=50),
                        geotransform=GT)
        assert image.geotransform[1] == pytest.approx(20.0)

    def test_not_implemented_error_type(self):
        assert issubclass(CompositeModeNotImplementedError, NotImplementedError)
