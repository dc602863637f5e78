"""Image export for rendered canvases.

Supported formats:
    - PPM (plain-text P3, written directly)
    - PNG (8-bit RGB via Pillow, optional gamma encoding)

Example:
    >>> from phongtracer.preview.canvas import Canvas
    >>> from phongtracer.preview.export import save_canvas
    >>> canvas = Canvas(64, 64)
    >>> save_canvas(canvas, "sphere.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from phongtracer.preview.canvas import MAX_COLOR_VALUE, Canvas

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".ppm", ".png")


def apply_gamma(
    image: npt.NDArray[np.float64],
    gamma: float = 2.2,
) -> npt.NDArray[np.float64]:
    """Apply gamma encoding to a linear image.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value. 1.0 leaves the image unchanged.

    Returns:
        Gamma encoded image, clamped to [0, 1].
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")

    # Clamp before the power to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)
    if gamma == 1.0:
        return image
    return np.power(image, 1.0 / gamma)


def save_ppm(canvas: Canvas, filepath: str | Path) -> Path:
    """Write the canvas as a plain-text PPM file.

    Returns:
        The path written.
    """
    path = Path(filepath)
    path.write_text(canvas.to_ppm(), encoding="ascii")
    logger.debug("Wrote %dx%d PPM to %s", canvas.width, canvas.height, path)
    return path


def save_png(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> Path:
    """Write the canvas as an 8-bit RGB PNG file.

    Args:
        canvas: The canvas to save.
        filepath: Output file path (should end in .png).
        gamma: Gamma encoding applied after clamping. The default of 1.0
            writes the same channel values as the PPM output.

    Returns:
        The path written.
    """
    path = Path(filepath)
    if gamma == 1.0:
        image_uint8 = canvas.to_uint8()
    else:
        encoded = apply_gamma(canvas.to_numpy(), gamma)
        image_uint8 = np.floor(encoded * MAX_COLOR_VALUE + 0.5).astype(np.uint8)

    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(path)
    logger.debug("Wrote %dx%d PNG to %s", canvas.width, canvas.height, path)
    return path


def save_canvas(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> Path:
    """Save the canvas in the format given by the file suffix.

    Raises:
        ValueError: If the suffix is not .ppm or .png.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix == ".ppm":
        return save_ppm(canvas, path)
    if suffix == ".png":
        return save_png(canvas, path, gamma=gamma)
    raise ValueError(
        f"Unsupported image format '{path.suffix}'. Expected one of {SUPPORTED_SUFFIXES}"
    )


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
