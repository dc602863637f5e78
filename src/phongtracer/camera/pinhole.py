"""Pinhole camera that casts rays from an eye point onto a flat wall.

The camera sits at ``eye`` and looks down the +z axis at a square wall
placed at ``z = wall_z``. The wall is ``wall_size`` world units across along
the longer image dimension and is split into a grid of pixels; pixel (0, 0)
is the top-left corner of the image. A ray for a pixel starts at the eye and
passes through the top-left corner of that pixel on the wall.

With the defaults (eye at z = -5, wall at z = 10, 7 units across) a unit
sphere at the origin fills most of the frame.

Example:
    >>> from phongtracer.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(width=100, height=100)
    >>> ray = camera.ray_for_pixel(50, 50)
    >>> ray.origin
    point(0.0, 0.0, -5.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from phongtracer.core.ray import Ray
from phongtracer.core.tuples import Kind, KindError, Tuple, point


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the wall-projection camera.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        eye: Ray origin in world space (a point).
        wall_z: Distance of the wall plane along +z.
        wall_size: Extent of the wall along the longer image dimension.
    """

    width: int
    height: int
    eye: Tuple = field(default_factory=lambda: point(0.0, 0.0, -5.0))
    wall_z: float = 10.0
    wall_size: float = 7.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.wall_size <= 0.0:
            raise ValueError(f"Wall size must be positive, got {self.wall_size}")
        if self.eye.kind is not Kind.POINT:
            raise KindError(f"Camera eye must be a point, got a {self.eye.kind.value}")

    __hash__ = None  # type: ignore[assignment]

    @property
    def pixel_size(self) -> float:
        """World-space size of one pixel on the wall."""
        return self.wall_size / max(self.width, self.height)

    @property
    def half_width(self) -> float:
        return self.pixel_size * self.width / 2.0

    @property
    def half_height(self) -> float:
        return self.pixel_size * self.height / 2.0

    def world_point(self, x: int, y: int) -> Tuple:
        """Return the wall point at the top-left corner of pixel (x, y).

        World y grows upward while pixel rows grow downward.
        """
        world_x = -self.half_width + self.pixel_size * x
        world_y = self.half_height - self.pixel_size * y
        return point(world_x, world_y, self.wall_z)

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Return the normalized ray from the eye through pixel (x, y)."""
        direction = (self.world_point(x, y) - self.eye).normalize()
        return Ray(origin=self.eye, direction=direction)
