"""Phong-shaded ray tracer for a single transformed sphere.

This package renders the classic one-sphere scene: a camera casts one ray
per pixel, the ray is intersected with a unit sphere placed in the world by
an affine transform, and the visible hit is shaded with the Phong model
under a single point light. Rendering runs either as plain Python
(``core.reference``) or as a data-parallel Taichi kernel
(``core.integrator``).

Subpackages:
    core: Tuples, matrices, transforms, rays, and the two renderers
    geometry: Sphere primitive and intersection records
    materials: Phong material and lighting model
    scene: Point light and ready-made demo scenes
    camera: Wall-projection pinhole camera
    preview: Canvas, PPM serialization, and image export
"""

__version__ = "0.1.0"
