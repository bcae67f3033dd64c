"""
Tests for the raster operations
"""

import numpy as np
import pytest
from PIL import Image

from core.image.processors import (
    needs_resize,
    resize_to_target,
    rotate_clockwise,
    scaled_size,
    to_grayscale,
)


class TestGrayscale:
    """Test layout-preserving grayscale conversion"""

    def test_rgb_channels_equal(self, rgb_array):
        result = to_grayscale(Image.fromarray(rgb_array))
        array = np.array(result)

        assert result.mode == "RGB"
        assert result.size == (300, 200)
        assert np.array_equal(array[:, :, 0], array[:, :, 1])
        assert np.array_equal(array[:, :, 1], array[:, :, 2])

    def test_luminance_weights(self):
        """Pure primaries map to their ITU-R 601 luma"""
        array = np.zeros((1, 3, 3), dtype=np.uint8)
        array[0, 0] = (255, 0, 0)
        array[0, 1] = (0, 255, 0)
        array[0, 2] = (0, 0, 255)

        result = np.array(to_grayscale(Image.fromarray(array)))

        assert abs(int(result[0, 0, 0]) - 76) <= 1
        assert abs(int(result[0, 1, 0]) - 150) <= 1
        assert abs(int(result[0, 2, 0]) - 29) <= 1

    def test_rgba_keeps_alpha(self, rgba_array):
        result = to_grayscale(Image.fromarray(rgba_array))
        array = np.array(result)

        assert result.mode == "RGBA"
        assert np.array_equal(array[:, :, 3], rgba_array[:, :, 3])
        assert np.array_equal(array[:, :, 0], array[:, :, 2])

    def test_already_gray_unchanged(self):
        gray = np.arange(60, dtype=np.uint8).reshape(6, 10)

        result = to_grayscale(Image.fromarray(gray))

        assert result.mode == "L"
        assert np.array_equal(np.array(result), gray)

    def test_gray_with_alpha_unchanged(self):
        la = np.dstack([np.full((4, 5), 90, np.uint8), np.full((4, 5), 30, np.uint8)])

        result = to_grayscale(Image.fromarray(la))

        assert result.mode == "LA"
        assert np.array_equal(np.array(result), la)

    @pytest.mark.parametrize("dtype", [np.uint16, np.bool_])
    def test_deep_and_bilevel_gray_unchanged(self, dtype):
        array = np.array([[0, 1, 1], [1, 0, 1]], dtype=dtype)
        if dtype == np.uint16:
            array = array * 50000

        result = to_grayscale(Image.fromarray(array))

        assert np.array_equal(np.array(result), array)
        assert np.array(result).dtype == array.dtype

    def test_unsupported_layout(self):
        with pytest.raises(ValueError):
            to_grayscale(Image.new("CMYK", (2, 2)))


class TestResize:
    """Test proportional downscale"""

    def test_needs_resize(self):
        assert needs_resize(801)
        assert not needs_resize(800)
        assert not needs_resize(10)

    def test_scaled_size_exact(self):
        assert scaled_size(1600, 1000) == (800, 500)
        assert scaled_size(1000, 1000) == (800, 800)

    def test_scaled_size_rounds_half_up(self):
        """500.5 -> 501 and 501.5 -> 502"""
        assert scaled_size(1600, 1001) == (800, 501)
        assert scaled_size(1600, 1003) == (800, 502)
        assert scaled_size(1600, 1002) == (800, 501)

    def test_scaled_size_never_zero_height(self):
        assert scaled_size(100000, 10) == (800, 1)

    def test_resize_dimensions(self):
        image = Image.new("RGB", (1600, 1000), (10, 20, 30))

        result = resize_to_target(image)

        assert result.size == (800, 500)
        assert result.mode == "RGB"

    def test_bilinear_keeps_flat_color(self):
        image = Image.new("RGB", (1000, 400), (10, 200, 30))

        result = np.array(resize_to_target(image))

        assert np.all(result == np.array([10, 200, 30], dtype=np.uint8))

    def test_alpha_dropped(self):
        image = Image.new("RGBA", (1200, 600), (50, 60, 70, 0))

        result = resize_to_target(image)

        assert result.mode == "RGB"
        assert result.size == (800, 400)

    def test_16bit_gray_scaled_not_clamped(self):
        image = Image.fromarray(np.full((100, 1000), 20000, dtype=np.uint16))

        result = np.array(resize_to_target(image))

        assert result.shape == (80, 800, 3)
        assert np.all(result == 20000 >> 8)

    def test_gray_expanded_to_rgb(self):
        result = resize_to_target(Image.new("L", (900, 90), 128))

        assert result.mode == "RGB"
        assert result.size == (800, 80)

    def test_refuses_upscale(self):
        with pytest.raises(ValueError):
            resize_to_target(Image.new("RGB", (800, 600)))


class TestRotate:
    """Test clockwise quarter turn"""

    def test_pixel_mapping(self):
        """Source (x, y) lands at (height - 1 - y, x)"""
        source = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint8)

        result = np.array(rotate_clockwise(Image.fromarray(source)))

        assert np.array_equal(result, np.array([[4, 1], [5, 2], [6, 3]], dtype=np.uint8))

    def test_dimensions_swapped(self, rgb_array):
        result = rotate_clockwise(Image.fromarray(rgb_array))

        assert result.size == (200, 300)
        assert result.mode == "RGB"

    def test_exact_permutation(self, rgb_array):
        result = np.array(rotate_clockwise(Image.fromarray(rgb_array)))
        height = rgb_array.shape[0]

        for x, y in [(0, 0), (299, 0), (0, 199), (299, 199), (150, 73)]:
            assert np.array_equal(result[x, height - 1 - y], rgb_array[y, x])

    def test_full_turn_is_identity(self, rgba_array):
        image = Image.fromarray(rgba_array)
        for _ in range(4):
            image = rotate_clockwise(image)

        assert image.mode == "RGBA"
        assert np.array_equal(np.array(image), rgba_array)

    def test_16bit_samples_kept(self):
        source = np.array([[1000, 20000], [40000, 65000], [100, 200]], dtype=np.uint16)

        result = np.array(rotate_clockwise(Image.fromarray(source)))

        assert result.dtype == np.uint16
        assert np.array_equal(result, np.array([[100, 40000, 1000], [200, 65000, 20000]]))

    def test_bilevel_kept(self):
        source = np.array([[True, False, False], [False, True, True]])

        result = rotate_clockwise(Image.fromarray(source))

        assert result.mode == "1"
        assert np.array_equal(np.array(result), np.rot90(source, -1))

    def test_gray_with_alpha(self):
        la = np.dstack([np.arange(6, dtype=np.uint8).reshape(2, 3), np.full((2, 3), 7, np.uint8)])

        result = rotate_clockwise(Image.fromarray(la))

        assert result.mode == "LA"
        assert result.size == (2, 3)
