"""Tests for region cropping and binarization."""

import cv2
import numpy as np
import pytest

from efscan.capture.regions import binarize, crop, decode_image, pixel_rect
from efscan.core.types import Region
from efscan.utils.error_handler import ImageDecodeError, InvalidRegionError

from conftest import encode_png


def decode(png_bytes: bytes) -> np.ndarray:
    return cv2.imdecode(np.frombuffer(png_bytes, dtype=np.uint8), cv2.IMREAD_UNCHANGED)


class TestDecodeImage:
    """Test decode_image()."""

    def test_decodes_png(self):
        image = np.zeros((10, 20, 3), dtype=np.uint8)
        decoded = decode_image(encode_png(image))
        assert decoded.shape == (10, 20, 3)

    def test_rejects_garbage(self):
        with pytest.raises(ImageDecodeError):
            decode_image(b"definitely not an image")

    def test_rejects_empty(self):
        with pytest.raises(ImageDecodeError):
            decode_image(b"")


class TestPixelRect:
    """Test pixel_rect()."""

    def test_rounds_to_nearest_pixel(self):
        region = Region(x=0.25, y=0.5, w=0.5, h=0.25)
        assert pixel_rect(100, 80, region) == (25, 40, 50, 20)

    def test_rounding_half_up(self):
        # 0.125 * 100 = 12.5 -> 13
        assert pixel_rect(100, 100, Region(0.125, 0.0, 0.5, 0.5))[0] == 13

    def test_region_past_edge_rejected(self):
        with pytest.raises(InvalidRegionError):
            pixel_rect(100, 100, Region(x=0.9, y=0.9, w=0.3, h=0.3))

    def test_negative_origin_rejected(self):
        with pytest.raises(InvalidRegionError):
            pixel_rect(100, 100, Region(x=-0.1, y=0.0, w=0.5, h=0.5))

    def test_empty_area_rejected(self):
        with pytest.raises(InvalidRegionError):
            pixel_rect(100, 100, Region(x=0.1, y=0.1, w=0.001, h=0.5))

    def test_full_image(self):
        assert pixel_rect(64, 48, Region(0.0, 0.0, 1.0, 1.0)) == (0, 0, 64, 48)


class TestBinarize:
    """Test binarize()."""

    def test_bright_pixels_become_black(self):
        image = np.zeros((2, 2, 3), dtype=np.uint8)
        image[0, 0] = (220, 220, 220)  # light gray label text
        result = binarize(image, 128)
        assert result[0, 0] == 0
        assert result[1, 1] == 255

    def test_uses_bt709_weights_in_bgr_order(self):
        """Pure green is far brighter than pure blue under BT.709."""
        image = np.zeros((1, 3, 3), dtype=np.uint8)
        image[0, 0] = (0, 0, 255)    # red   -> L = 54.2
        image[0, 1] = (0, 255, 0)    # green -> L = 182.4
        image[0, 2] = (255, 0, 0)    # blue  -> L = 18.4
        result = binarize(image, 100)
        assert list(result[0]) == [255, 0, 255]

        result = binarize(image, 50)
        assert list(result[0]) == [0, 0, 255]

    def test_threshold_is_strict(self):
        image = np.full((1, 1), 128, dtype=np.uint8)
        assert binarize(image, 128)[0, 0] == 255
        assert binarize(image, 127)[0, 0] == 0

    def test_yellow_text_on_dark_background(self):
        image = np.full((4, 4, 3), 25, dtype=np.uint8)
        image[1:3, 1:3] = (40, 210, 230)  # BGR yellow
        result = binarize(image, 100)
        assert (result[1:3, 1:3] == 0).all()
        assert result[0, 0] == 255


class TestCrop:
    """Test crop()."""

    def test_returns_encoded_crop(self):
        image = np.zeros((100, 200, 3), dtype=np.uint8)
        image[50:, 100:] = (255, 255, 255)
        png = crop(image, Region(x=0.5, y=0.5, w=0.5, h=0.5))
        decoded = decode(png)
        assert decoded.shape[:2] == (50, 100)
        assert (decoded == 255).all()

    def test_binarized_crop_is_single_channel(self):
        image = np.zeros((100, 200, 3), dtype=np.uint8)
        image[10:20, 10:20] = (250, 250, 250)
        png = crop(image, Region(x=0.0, y=0.0, w=0.5, h=0.5, binarize=True, threshold=128))
        decoded = decode(png)
        assert decoded.ndim == 2
        assert decoded[15, 15] == 0
        assert decoded[40, 40] == 255

    def test_out_of_bounds_region_raises(self):
        image = np.zeros((100, 100, 3), dtype=np.uint8)
        with pytest.raises(InvalidRegionError):
            crop(image, Region(x=0.9, y=0.9, w=0.3, h=0.3))

    def test_does_not_modify_source(self):
        image = np.full((20, 20, 3), 200, dtype=np.uint8)
        crop(image, Region(0.0, 0.0, 1.0, 1.0, binarize=True, threshold=10))
        assert (image == 200).all()
