"""Unit sphere primitive with an object-to-world transform.

Every sphere is the unit sphere centered at the object-space origin. Its
placement, size and shape in the world come from ``transform``; rays are
intersected in object space by transforming them with the inverse of that
transform, which keeps the intersection math a fixed quadratic.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = 1

which expands to ``a*t^2 + b*t + c = 0`` with:
    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - 1

Example:
    >>> from phongtracer.core.ray import Ray
    >>> from phongtracer.core.transformations import scaling
    >>> from phongtracer.core.tuples import point, vector
    >>> from phongtracer.geometry.sphere import Sphere
    >>> sphere = Sphere(transform=scaling(2, 2, 2))
    >>> [i.t for i in sphere.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))]
    [3.0, 7.0]
"""

from __future__ import annotations

import math

from phongtracer.core.constants import EPSILON, approx_eq
from phongtracer.core.matrices import Matrix
from phongtracer.core.ray import Ray
from phongtracer.core.tuples import Kind, KindError, Tuple, point, vector
from phongtracer.geometry.intersection import Intersections
from phongtracer.materials.phong import Material


class Sphere:
    """A unit sphere placed in the world by an affine transform.

    Equality only compares the object-space shape (origin and radius), not
    the transform or the material: it identifies the primitive an
    intersection belongs to.

    Args:
        transform: Object-to-world transform (defaults to the identity).
            Must be invertible by the time the sphere is intersected.
        material: Surface material (defaults to ``Material()``).
    """

    def __init__(
        self,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        self.origin = point(0.0, 0.0, 0.0)
        self.radius = 1.0
        self.material = material if material is not None else Material()
        self._transform = Matrix.identity(4)
        self._inverse: Matrix | None = self._transform
        if transform is not None:
            self.set_transform(transform)

    # -------------------------------------------------------------------------
    # Transform
    # -------------------------------------------------------------------------

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, transform: Matrix) -> None:
        self.set_transform(transform)

    def set_transform(self, transform: Matrix) -> None:
        """Replace the object-to-world transform.

        A singular transform is accepted here; the error surfaces when the
        sphere is intersected or asked for a normal.
        """
        if transform.size != 4:
            raise ValueError(f"Sphere transform must be 4x4, got {transform.size}x{transform.size}")
        self._transform = transform
        self._inverse = None

    @property
    def inverse_transform(self) -> Matrix:
        """World-to-object transform, cached per transform.

        Raises:
            NonInvertibleMatrixError: If the transform is singular.
        """
        if self._inverse is None:
            self._inverse = self._transform.inverse_or_raise()
        return self._inverse

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with the sphere.

        Args:
            ray: The ray to test.

        Returns:
            No intersections on a miss, one for a tangent ray (both roots
            within EPSILON), otherwise two in ascending order of t. Roots
            behind the ray origin are included.

        Raises:
            NonInvertibleMatrixError: If the sphere's transform is singular.
        """
        local_ray = ray.transform(self.inverse_transform)

        sphere_to_ray = local_ray.origin - self.origin
        a = local_ray.direction.dot(local_ray.direction)
        b = 2.0 * local_ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return Intersections()

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)

        if abs(t1 - t2) < EPSILON:
            return Intersections.from_ts([t1], self)
        return Intersections.from_ts(sorted((t1, t2)), self)

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Return the unit surface normal at a world-space point.

        The object-space normal is carried back to world space with the
        transpose of the inverse transform, which stays perpendicular to the
        surface under non-uniform scaling. That product can leave a non-zero
        fourth component when the transform translates, so only the first
        three components are kept.

        Raises:
            KindError: If world_point is not a point.
            NonInvertibleMatrixError: If the sphere's transform is singular.
        """
        if world_point.kind is not Kind.POINT:
            raise KindError(f"normal_at expects a point, got a {world_point.kind.value}")

        inverse = self.inverse_transform
        object_point = inverse @ world_point
        object_normal = object_point - self.origin
        x, y, z, _ = inverse.transpose().apply(*object_normal.components)
        return vector(x, y, z).normalize()

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return self.origin == other.origin and approx_eq(self.radius, other.radius)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Sphere(transform={self._transform!r}, material={self.material!r})"
