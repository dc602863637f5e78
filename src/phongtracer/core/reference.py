"""Reference renderer: the direct-illumination pipeline in plain Python.

For each pixel the camera casts one ray, the sphere reports its
intersections, the visible hit is shaded with the Phong model, and the
color lands on a Canvas. Pixels whose ray misses keep the background color.

Every step is a pure function of its inputs, so disjoint row ranges can be
rendered independently (``rows=range(start, stop)``) and merged by the
caller.

This renderer is the ground truth for the Taichi integrator in
``phongtracer.core.integrator``.

Example:
    >>> from phongtracer.core.reference import render
    >>> from phongtracer.scene.demo import create_sphere_scene
    >>> sphere, light, camera = create_sphere_scene(64, 64)
    >>> canvas = render(sphere, light, camera)
"""

from __future__ import annotations

import logging
import time

from phongtracer.camera.pinhole import PinholeCamera
from phongtracer.core.ray import Ray
from phongtracer.core.tuples import BLACK, Tuple
from phongtracer.geometry.sphere import Sphere
from phongtracer.preview.canvas import Canvas
from phongtracer.scene.light import PointLight

logger = logging.getLogger(__name__)


def shade(sphere: Sphere, light: PointLight, ray: Ray) -> Tuple | None:
    """Return the lit color where the ray first meets the sphere.

    Args:
        sphere: The primitive to intersect.
        light: The single light source.
        ray: The ray to trace.

    Returns:
        The unclamped color of the visible hit, or None if there is no hit.

    Raises:
        NonInvertibleMatrixError: If the sphere's transform is singular.
    """
    hit = sphere.intersect(ray).hit()
    if hit is None:
        return None

    position = ray.position(hit.t)
    normal = hit.object.normal_at(position)
    eye = -ray.direction
    return hit.object.material.lighting(light, position, eye, normal)


def render(
    sphere: Sphere,
    light: PointLight,
    camera: PinholeCamera,
    *,
    background: Tuple = BLACK,
    rows: range | None = None,
    canvas: Canvas | None = None,
) -> Canvas:
    """Render the sphere onto a canvas.

    Args:
        sphere: The primitive to render.
        light: The single light source.
        camera: Ray generator; its dimensions size the canvas.
        background: Color for pixels whose ray misses the sphere.
        rows: Optional subset of rows to render. Other rows are left as they
            are in the canvas.
        canvas: Optional canvas to draw into. Must match the camera size.

    Returns:
        The canvas that was drawn into.

    Raises:
        ValueError: If the canvas size does not match the camera.
        NonInvertibleMatrixError: If the sphere's transform is singular.
    """
    if canvas is None:
        canvas = Canvas(camera.width, camera.height)
    elif (canvas.width, canvas.height) != (camera.width, camera.height):
        raise ValueError(
            f"Canvas is {canvas.width}x{canvas.height} but camera is "
            f"{camera.width}x{camera.height}"
        )

    if rows is None:
        rows = range(camera.height)

    start_time = time.perf_counter()
    hits = 0
    for y in rows:
        for x in range(camera.width):
            pixel = shade(sphere, light, camera.ray_for_pixel(x, y))
            if pixel is None:
                pixel = background
            else:
                hits += 1
            canvas.write_pixel(x, y, pixel)

    logger.debug(
        "Rendered %d rows x %d columns (%d hits) in %.3fs",
        len(rows),
        camera.width,
        hits,
        time.perf_counter() - start_time,
    )
    return canvas
