"""Core value types and rendering drivers.

Components:
    tuples: Points, vectors and colors with kind-checked arithmetic
    matrices: Immutable square matrices with cofactor inverse
    transformations: Translation, scaling, rotation, shearing, chaining
    ray: Ray value type
    reference: Pure Python renderer
    integrator: Taichi renderer (allocates Taichi fields on import)

Everything in this package except the integrator is pure Python and works
without initializing Taichi.
"""

from .constants import EPSILON, approx_eq
from .matrices import Matrix, NonInvertibleMatrixError, identity
from .ray import Ray
from .transformations import (
    Axis,
    chain,
    rotation,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from .tuples import BLACK, WHITE, Kind, KindError, Tuple, color, point, vector

# Note: reference and integrator are NOT imported here to avoid circular imports.
# Import directly from phongtracer.core.reference or phongtracer.core.integrator.

__all__ = [
    "EPSILON",
    "approx_eq",
    "Kind",
    "KindError",
    "Tuple",
    "point",
    "vector",
    "color",
    "BLACK",
    "WHITE",
    "Matrix",
    "NonInvertibleMatrixError",
    "identity",
    "Axis",
    "translation",
    "scaling",
    "rotation",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "chain",
    "Ray",
]
