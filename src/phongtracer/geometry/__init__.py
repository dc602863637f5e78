"""Geometry module for the sphere primitive and its intersections.

Components:
    sphere: Unit sphere with an object-to-world transform
    intersection: Intersection records and visible-hit selection
"""

from .intersection import Intersection, Intersections, intersections
from .sphere import Sphere

__all__ = [
    "Sphere",
    "Intersection",
    "Intersections",
    "intersections",
]
