"""Ready-made scenes for the example script and tests.

Two scenes are provided:

    - create_sphere_scene: a single magenta sphere at the origin lit from
      the upper left, viewed by the default wall camera.
    - create_clock_canvas: the twelve hour marks of a clock face, plotted
      by rotating the twelve o'clock point about the z axis.

Example:
    >>> from phongtracer.core.reference import render
    >>> from phongtracer.scene.demo import create_sphere_scene
    >>> sphere, light, camera = create_sphere_scene(100, 100)
    >>> canvas = render(sphere, light, camera)
"""

from __future__ import annotations

import math

from phongtracer.camera.pinhole import PinholeCamera
from phongtracer.core.matrices import Matrix
from phongtracer.core.transformations import rotation_z
from phongtracer.core.tuples import WHITE, Tuple, color, point
from phongtracer.geometry.sphere import Sphere
from phongtracer.materials.phong import Material
from phongtracer.preview.canvas import Canvas
from phongtracer.scene.light import PointLight

# Default sphere scene parameters
SPHERE_COLOR = (1.0, 0.2, 1.0)
LIGHT_POSITION = (-10.0, 10.0, -10.0)

# Fraction of the canvas size used as the clock radius
CLOCK_RADIUS_FRACTION = 0.4


def create_sphere_scene(
    width: int,
    height: int,
    color_rgb: tuple[float, float, float] = SPHERE_COLOR,
    transform: Matrix | None = None,
) -> tuple[Sphere, PointLight, PinholeCamera]:
    """Create the single-sphere scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        color_rgb: Surface color of the sphere.
        transform: Optional object-to-world transform for the sphere.

    Returns:
        Tuple of (sphere, light, camera).
    """
    material = Material(color=color(*color_rgb))
    sphere = Sphere(transform=transform, material=material)
    light = PointLight(position=point(*LIGHT_POSITION), intensity=WHITE)
    camera = PinholeCamera(width=width, height=height)
    return sphere, light, camera


def clock_positions(size: int) -> list[Tuple]:
    """Return the twelve hour marks in canvas coordinates.

    Hour 0 sits at the top of the canvas and the marks run clockwise. The
    canvas row axis points down, so world y is flipped when mapping to rows.
    """
    center = size / 2.0
    radius = size * CLOCK_RADIUS_FRACTION
    twelve = point(0.0, 1.0, 0.0)

    positions = []
    for hour in range(12):
        mark = (
            twelve.rotate_z(-hour * math.pi / 6.0)
            .scale(radius, -radius, 1.0)
            .translate(center, center, 0.0)
        )
        positions.append(mark)
    return positions


def create_clock_canvas(size: int = 500, mark_color: Tuple = WHITE) -> Canvas:
    """Plot the twelve hour marks of a clock face on a square canvas.

    Raises:
        ValueError: If size is not positive.
    """
    canvas = Canvas(size, size)
    for mark in clock_positions(size):
        canvas.write_pixel(round(mark.x), round(mark.y), mark_color)
    return canvas
