"""Ray value type.

Example:
    >>> from phongtracer.core.ray import Ray
    >>> from phongtracer.core.tuples import point, vector
    >>> ray = Ray(origin=point(2, 3, 4), direction=vector(1, 0, 0))
    >>> ray.position(2.5)
    point(4.5, 3.0, 4.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from phongtracer.core.matrices import Matrix
from phongtracer.core.transformations import scaling, translation
from phongtracer.core.tuples import Kind, KindError, Tuple


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and a direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of travel. Not normalized automatically;
            intersection parameters are measured in units of its length.
    """

    origin: Tuple
    direction: Tuple

    def __post_init__(self) -> None:
        if self.origin.kind is not Kind.POINT:
            raise KindError(f"Ray origin must be a point, got a {self.origin.kind.value}")
        if self.direction.kind is not Kind.VECTOR:
            raise KindError(
                f"Ray direction must be a vector, got a {self.direction.kind.value}"
            )

    # Tuples are unhashable, so rays are too
    __hash__ = None  # type: ignore[assignment]

    def position(self, t: float) -> Tuple:
        """Return the point ``origin + direction * t``.

        Negative t gives points behind the origin.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with origin and direction multiplied by matrix.

        The direction is a vector, so translation leaves it untouched.
        """
        return Ray(origin=matrix @ self.origin, direction=matrix @ self.direction)

    def translate(self, x: float, y: float, z: float) -> Ray:
        return self.transform(translation(x, y, z))

    def scale(self, x: float, y: float, z: float) -> Ray:
        return self.transform(scaling(x, y, z))
