# -*- coding: utf-8 -*-
"""
Tests for sarviz.IO - raster, GeoTIFF and world-file writers.

Dependencies
------------
pytest
Pillow
rasterio (GeoTIFF tests only)

Created
-------
2026-03-10
"""

import numpy as np
import pytest
from PIL import Image

try:
    import rasterio
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

from sarviz.exceptions import ValidationError
from sarviz.IO.geotiff import GeoTIFFWriter
from sarviz.IO.product import write_processed_image
from sarviz.IO.raster import RasterImageWriter, format_from_path
from sarviz.IO.worldfile import world_file_path, write_prj_file, write_world_file
from sarviz.pipeline import process_dual_band, process_single_band, process_synthetic_rgb
from sarviz.vocabulary import AutoscaleStrategy, BitDepth, OutputFormat

requires_rasterio = pytest.mark.skipif(
    not _HAS_RASTERIO, reason="rasterio not installed"
)

GT = (300000.0, 30.0, 0.0, 5000000.0, 0.0, -30.0)


@pytest.fixture
def gray():
    rng = np.random.default_rng(51)
    return rng.integers(0, 256, (24, 32), dtype=np.uint8)


@pytest.fixture
def intensity():
    rng = np.random.default_rng(52)
    return rng.exponential(0.1, (24, 32)), rng.exponential(0.02, (24, 32))


# ---------------------------------------------------------------------------
# RasterImageWriter
# ---------------------------------------------------------------------------

class TestRasterImageWriter:
    def test_png_gray_round_trip(self, tmp_path, gray):
        path = tmp_path / 'band.png'
        with RasterImageWriter(path) as writer:
            writer.write(gray)
        np.testing.assert_array_equal(np.asarray(Image.open(path)), gray)

    def test_png_sixteen_bit(self, tmp_path):
        data = np.arange(0, 65536, 256, dtype=np.uint16).reshape(16, 16)
        path = tmp_path / 'band16.png'
        RasterImageWriter(path).write(data)
        back = np.asarray(Image.open(path)).astype(np.uint16)
        np.testing.assert_array_equal(back, data)

    def test_png_rgb_with_text(self, tmp_path, gray):
        rgb = np.stack([gray, gray[::-1], gray // 2], axis=-1)
        path = tmp_path / 'rgb.png'
        RasterImageWriter(path, metadata={'strategy': 'clahe'}).write(rgb)
        with Image.open(path) as img:
            assert img.mode == 'RGB'
            assert img.text['strategy'] == 'clahe'
            np.testing.assert_array_equal(np.asarray(img), rgb)

    def test_jpeg_gray(self, tmp_path, gray):
        path = tmp_path / 'band.jpg'
        RasterImageWriter(path).write(gray)
        with Image.open(path) as img:
            assert img.format == 'JPEG'
            assert img.size == (32, 24)

    def test_jpeg_rejects_sixteen_bit(self, tmp_path):
        with pytest.raises(ValidationError):
            RasterImageWriter(tmp_path / 'x.jpg').write(
                np.zeros((4, 4), dtype=np.uint16))

    def test_rejects_float(self, tmp_path):
        with pytest.raises(ValidationError):
            RasterImageWriter(tmp_path / 'x.png').write(np.zeros((4, 4)))

    def test_rejects_tiff_format(self, tmp_path):
        with pytest.raises(ValidationError):
            RasterImageWriter(tmp_path / 'x.tif')

    def test_format_from_path(self):
        assert format_from_path('a.JPEG') is OutputFormat.JPEG
        assert format_from_path('a.tif') is OutputFormat.TIFF
        with pytest.raises(ValidationError):
            format_from_path('a.bmp')


# ---------------------------------------------------------------------------
# World files
# ---------------------------------------------------------------------------

class TestWorldFile:
    @pytest.mark.parametrize('name, expected', [
        ('a.jpg', 'a.jgw'),
        ('a.jpeg', 'a.jgw'),
        ('a.png', 'a.pgw'),
        ('a.tiff', 'a.tfw'),
        ('a.bmp', 'a.bw'),
        ('a', 'a.wld'),
    ])
    def test_sidecar_names(self, tmp_path, name, expected):
        assert world_file_path(tmp_path / name) == tmp_path / expected

    def test_contents(self, tmp_path):
        path = write_world_file(tmp_path / 'scene.png', GT)
        values = [float(v) for v in path.read_text().split()]
        assert values == [30.0, 0.0, 0.0, -30.0, 300015.0, 4999985.0]

    def test_prj(self, tmp_path):
        path = write_prj_file(tmp_path / 'scene.png', 'EPSG:32633')
        assert path.name == 'scene.prj'
        assert path.read_text() == 'EPSG:32633'


# ---------------------------------------------------------------------------
# write_processed_image
# ---------------------------------------------------------------------------

class TestWriteProcessedImage:
    def test_jpeg_rgb_with_sidecars(self, tmp_path, intensity):
        image = process_synthetic_rgb(*intensity, AutoscaleStrategy.DEFAULT,
                                      target_size=16, geotransform=GT)
        path = write_processed_image(tmp_path / 'rgb.jpg', image,
                                     crs='EPSG:32633')
        with Image.open(path) as img:
            assert img.size == (16, 12)
            assert img.mode == 'RGB'
        assert (tmp_path / 'rgb.jgw').exists()
        assert (tmp_path / 'rgb.prj').exists()
        values = [float(v) for v in (tmp_path / 'rgb.jgw').read_text().split()]
        assert values[0] == pytest.approx(60.0)

    def test_png_without_geotransform_has_no_sidecar(self, tmp_path, intensity):
        image = process_single_band(intensity[0])
        write_processed_image(tmp_path / 'gray.png', image)
        assert not (tmp_path / 'gray.pgw').exists()

    def test_dual_band_requires_tiff(self, tmp_path, intensity):
        image = process_dual_band(*intensity)
        with pytest.raises(ValidationError):
            write_processed_image(tmp_path / 'dual.png', image)


# ---------------------------------------------------------------------------
# GeoTIFFWriter
# ---------------------------------------------------------------------------

@requires_rasterio
class TestGeoTIFFWriter:
    def test_single_band_round_trip(self, tmp_path, gray):
        path = tmp_path / 'band.tif'
        with GeoTIFFWriter(path, metadata={'polarization': 'vv'}) as writer:
            writer.write(gray, geolocation={'geotransform': GT,
                                            'crs': 'EPSG:32633'})
        with rasterio.open(path) as ds:
            assert ds.count == 1
            np.testing.assert_array_equal(ds.read(1), gray)
            assert ds.transform.to_gdal() == pytest.approx(GT)
            assert ds.crs.to_epsg() == 32633
            assert ds.tags()['polarization'] == 'vv'

    def test_rejects_float(self, tmp_path):
        with pytest.raises(ValidationError):
            GeoTIFFWriter(tmp_path / 'x.tif').write(np.zeros((4, 4)))

    def test_dual_band_sixteen_bit(self, tmp_path, intensity):
        image = process_dual_band(*intensity, bit_depth=BitDepth.U16,
                                  geotransform=GT)
        path = write_processed_image(tmp_path / 'dual.tif', image)
        with rasterio.open(path) as ds:
            assert ds.count == 2
            assert ds.dtypes[0] == 'uint16'
            np.testing.assert_array_equal(ds.read(2), image.gray_band2)

    def test_rgb_as_three_bands(self, tmp_path, intensity):
        image = process_synthetic_rgb(*intensity)
        path = write_processed_image(tmp_path / 'rgb.tiff', image)
        with rasterio.open(path) as ds:
            assert ds.count == 3
            np.testing.assert_array_equal(ds.read(1), image.rgb[..., 0])
