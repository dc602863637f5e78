"""Unit tests for the Canvas pixel buffer.

Tests cover:
- Construction and pixel access
- Out-of-bounds writes and reads
- PPM header, pixel data, clamping and line wrapping
"""

import logging

import numpy as np
import pytest

from phongtracer.core.tuples import KindError, color, vector
from phongtracer.preview.canvas import PPM_LINE_LIMIT, Canvas


class TestCanvasBasics:
    """Tests for creating and writing canvases."""

    def test_starts_black(self):
        """Test that every pixel is initially black."""
        canvas = Canvas(10, 20)
        assert canvas.width == 10
        assert canvas.height == 20
        assert np.all(canvas.to_numpy() == 0.0)
        assert canvas.pixel_at(9, 19) == color(0, 0, 0)

    def test_array_shape(self):
        """Test that the buffer is indexed (row, column, channel)."""
        assert Canvas(10, 20).to_numpy().shape == (20, 10, 3)

    @pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (-1, 5)])
    def test_invalid_dimensions(self, width, height):
        """Test that dimensions must be positive."""
        with pytest.raises(ValueError):
            Canvas(width, height)

    def test_write_pixel(self):
        """Test writing and reading back a pixel."""
        canvas = Canvas(10, 20)
        red = color(1, 0, 0)
        canvas.write_pixel(2, 3, red)
        assert canvas.pixel_at(2, 3) == red
        assert tuple(canvas.to_numpy()[3, 2]) == (1.0, 0.0, 0.0)

    def test_stores_unclamped_values(self):
        """Test that raw colors are kept until serialization."""
        canvas = Canvas(2, 2)
        canvas.write_pixel(0, 0, color(1.5, -0.5, 0.25))
        assert canvas.pixel_at(0, 0) == color(1.5, -0.5, 0.25)

    def test_write_requires_color(self):
        """Test that only colors may be written."""
        with pytest.raises(KindError):
            Canvas(2, 2).write_pixel(0, 0, vector(1, 0, 0))

    def test_out_of_bounds_write_ignored(self, caplog):
        """Test that writes outside the canvas are dropped and logged."""
        canvas = Canvas(3, 3)
        with caplog.at_level(logging.DEBUG, logger="phongtracer.preview.canvas"):
            canvas.write_pixel(3, 0, color(1, 1, 1))
            canvas.write_pixel(0, -1, color(1, 1, 1))
        assert np.all(canvas.to_numpy() == 0.0)
        assert "Ignoring write" in caplog.text

    def test_out_of_bounds_read_raises(self):
        """Test that reads outside the canvas raise IndexError."""
        with pytest.raises(IndexError):
            Canvas(3, 3).pixel_at(3, 0)

    def test_fill(self):
        """Test setting every pixel at once."""
        canvas = Canvas(4, 2)
        canvas.fill(color(0.2, 0.4, 0.6))
        assert canvas.pixel_at(3, 1) == color(0.2, 0.4, 0.6)

    def test_from_array(self):
        """Test wrapping an existing array."""
        image = np.zeros((2, 3, 3))
        image[1, 2] = (0.5, 0.25, 1.0)
        canvas = Canvas.from_array(image)
        assert (canvas.width, canvas.height) == (3, 2)
        assert canvas.pixel_at(2, 1) == color(0.5, 0.25, 1.0)
        image[1, 2] = 0.0
        assert canvas.pixel_at(2, 1) == color(0.5, 0.25, 1.0)

    def test_from_array_rejects_bad_shape(self):
        """Test that arrays must be (H, W, 3)."""
        with pytest.raises(ValueError):
            Canvas.from_array(np.zeros((2, 3)))


class TestPPM:
    """Tests for plain-text PPM serialization."""

    def test_header(self):
        """Test the P3 header lines."""
        lines = Canvas(5, 3).to_ppm().splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_pixel_data(self):
        """Test clamping and scaling of pixel data."""
        canvas = Canvas(5, 3)
        canvas.write_pixel(0, 0, color(1.5, 0, 0))
        canvas.write_pixel(2, 1, color(0, 0.5, 0))
        canvas.write_pixel(4, 2, color(-0.5, 0, 1))
        lines = canvas.to_ppm().splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_wrap(self):
        """Test that no line exceeds the PPM limit."""
        canvas = Canvas(10, 2)
        canvas.fill(color(1, 0.8, 0.6))
        lines = canvas.to_ppm().splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]

    def test_line_limit_on_wide_canvas(self):
        """Test the line limit on a wide canvas."""
        canvas = Canvas(100, 3)
        canvas.fill(color(1, 1, 1))
        assert all(len(line) <= PPM_LINE_LIMIT for line in canvas.to_ppm().splitlines())

    def test_ends_with_newline(self):
        """Test the trailing newline."""
        assert Canvas(5, 3).to_ppm().endswith("\n")

    def test_value_count(self):
        """Test that every channel of every pixel is written."""
        canvas = Canvas(7, 4)
        body = canvas.to_ppm().splitlines()[3:]
        assert len(" ".join(body).split()) == 7 * 4 * 3

    def test_rounds_half_up(self):
        """Test that exact halves round up."""
        canvas = Canvas(1, 1)
        canvas.write_pixel(0, 0, color(0.5, 0.25, 0.75))
        assert canvas.to_ppm().splitlines()[3] == "128 64 191"

    def test_to_uint8_matches_ppm(self):
        """Test that the uint8 export uses the same quantization."""
        canvas = Canvas(2, 1)
        canvas.write_pixel(0, 0, color(1.5, 0.5, -1))
        canvas.write_pixel(1, 0, color(0.8, 0.6, 0.2))
        image = canvas.to_uint8()
        assert image.dtype == np.uint8
        values = " ".join(str(v) for v in image.reshape(-1))
        assert canvas.to_ppm().splitlines()[3] == values
