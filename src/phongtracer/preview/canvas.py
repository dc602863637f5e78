"""Pixel buffer holding raw, unclamped colors.

The canvas stores exactly what the lighting model computes. Clamping to the
displayable [0, 1] range and quantizing to 8 bits happen only when the
canvas is serialized, either to plain-text PPM (``to_ppm``) or to a uint8
array for PNG export (``to_uint8``).

Example:
    >>> from phongtracer.core.tuples import color
    >>> from phongtracer.preview.canvas import Canvas
    >>> canvas = Canvas(5, 3)
    >>> canvas.write_pixel(0, 0, color(1.5, 0, 0))
    >>> canvas.to_ppm().splitlines()[:4]
    ['P3', '5 3', '255', '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0']
"""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from phongtracer.core.tuples import Kind, KindError, Tuple, color

logger = logging.getLogger(__name__)

# Maximum channel value written to PPM output
MAX_COLOR_VALUE = 255

# PPM readers may reject lines longer than this
PPM_LINE_LIMIT = 70


def _quantize(image: npt.NDArray[np.float64]) -> npt.NDArray[np.uint8]:
    """Clamp channels to [0, 1] and scale to 0..255, rounding half up."""
    clamped = np.clip(image, 0.0, 1.0)
    return np.floor(clamped * MAX_COLOR_VALUE + 0.5).astype(np.uint8)


class Canvas:
    """A width x height grid of colors, initially black.

    Pixel (0, 0) is the top-left corner. Internally the colors live in a
    float64 array of shape (height, width, 3).

    Args:
        width: Number of columns.
        height: Number of rows.

    Raises:
        ValueError: If either dimension is not positive.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._pixels = np.zeros((self._height, self._width, 3), dtype=np.float64)

    @classmethod
    def from_array(cls, image: npt.ArrayLike) -> Canvas:
        """Wrap a copy of an (H, W, 3) color array.

        Raises:
            ValueError: If the array does not have shape (H, W, 3).
        """
        data = np.asarray(image, dtype=np.float64)
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (H, W, 3), got {data.shape}")
        canvas = cls(data.shape[1], data.shape[0])
        canvas._pixels[...] = data
        return canvas

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def write_pixel(self, x: int, y: int, pixel: Tuple) -> None:
        """Store a color at (x, y).

        Writes that fall outside the canvas are ignored.

        Raises:
            KindError: If pixel is not a color.
        """
        if pixel.kind is not Kind.COLOR:
            raise KindError(f"Canvas pixels must be colors, got a {pixel.kind.value}")
        if not self.contains(x, y):
            logger.debug("Ignoring write outside %dx%d canvas at (%d, %d)", self._width, self._height, x, y)
            return
        self._pixels[y, x] = pixel.as_rgb()

    def pixel_at(self, x: int, y: int) -> Tuple:
        """Return the color stored at (x, y).

        Raises:
            IndexError: If (x, y) lies outside the canvas.
        """
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} canvas")
        r, g, b = self._pixels[y, x]
        return color(float(r), float(g), float(b))

    def fill(self, pixel: Tuple) -> None:
        """Set every pixel to the same color."""
        if pixel.kind is not Kind.COLOR:
            raise KindError(f"Canvas pixels must be colors, got a {pixel.kind.value}")
        self._pixels[...] = pixel.as_rgb()

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the raw colors, shape (height, width, 3)."""
        return self._pixels.copy()

    def to_uint8(self) -> npt.NDArray[np.uint8]:
        """Return clamped 8-bit colors, shape (height, width, 3)."""
        return _quantize(self._pixels)

    def to_ppm(self) -> str:
        """Serialize to plain-text PPM (P3).

        Each image row starts on a new line, and long rows wrap so that no
        line exceeds 70 characters. The output ends with a newline.
        """
        lines = ["P3", f"{self._width} {self._height}", str(MAX_COLOR_VALUE)]
        for row in _quantize(self._pixels):
            current = ""
            for value in row.reshape(-1):
                text = str(int(value))
                if not current:
                    current = text
                elif len(current) + 1 + len(text) > PPM_LINE_LIMIT:
                    lines.append(current)
                    current = text
                else:
                    current = f"{current} {text}"
            lines.append(current)
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"
