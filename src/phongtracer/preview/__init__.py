"""Preview module for pixel storage and image output.

Components:
    canvas: Raw color buffer with plain-text PPM serialization
    export: PPM/PNG file output and image comparison
"""

from .canvas import Canvas
from .export import apply_gamma, compute_rmse, save_canvas, save_png, save_ppm

__all__ = [
    "Canvas",
    "apply_gamma",
    "compute_rmse",
    "save_canvas",
    "save_png",
    "save_ppm",
]
