"""Scene module: light sources and ready-made scenes."""

from .demo import clock_positions, create_clock_canvas, create_sphere_scene
from .light import PointLight

__all__ = [
    "PointLight",
    "create_sphere_scene",
    "create_clock_canvas",
    "clock_positions",
]
