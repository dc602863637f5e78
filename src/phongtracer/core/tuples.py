"""Homogeneous tuples: points, vectors and colors.

A Tuple carries three scalar components and an explicit kind tag. The fourth
homogeneous component ``w`` is derived from the kind (1.0 for points, 0.0 for
vectors and colors), so matrix transforms treat points and vectors correctly
while operations that make no geometric sense are rejected up front instead
of silently producing a meaningless ``w``.

Kind rules for the binary operators:

    point  + vector = point      point  - point  = vector
    vector + point  = point      point  - vector = point
    vector + vector = vector     vector - vector = vector
    color  + color  = color      color  - color  = color

Anything else (two points added together, a color dotted with a vector,
normalizing a point, ...) raises KindError.

Example:
    >>> from phongtracer.core.tuples import point, vector
    >>> p = point(1, 2, 3)
    >>> v = vector(0, 0, 1)
    >>> p + v * 2
    point(1.0, 2.0, 5.0)
    >>> (point(3, 2, 1) - point(5, 6, 7)).kind
    <Kind.VECTOR: 'vector'>
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from phongtracer.core.constants import approx_eq

if TYPE_CHECKING:
    from phongtracer.core.matrices import Matrix


class Kind(Enum):
    """Discriminant of a homogeneous tuple."""

    POINT = "point"
    VECTOR = "vector"
    COLOR = "color"


class KindError(TypeError):
    """Raised when an operation is applied to the wrong kind of tuple."""


# Result kind for each allowed operand pair
_SUM_KINDS = {
    (Kind.POINT, Kind.VECTOR): Kind.POINT,
    (Kind.VECTOR, Kind.POINT): Kind.POINT,
    (Kind.VECTOR, Kind.VECTOR): Kind.VECTOR,
    (Kind.COLOR, Kind.COLOR): Kind.COLOR,
}

_DIFFERENCE_KINDS = {
    (Kind.POINT, Kind.POINT): Kind.VECTOR,
    (Kind.POINT, Kind.VECTOR): Kind.POINT,
    (Kind.VECTOR, Kind.VECTOR): Kind.VECTOR,
    (Kind.COLOR, Kind.COLOR): Kind.COLOR,
}


@dataclass(frozen=True, eq=False)
class Tuple:
    """An immutable point, vector or color.

    Equality is approximate: two tuples are equal when they share a kind and
    every component differs by less than EPSILON. Because of that, tuples are
    deliberately unhashable.

    Attributes:
        x: First component (red channel for colors).
        y: Second component (green channel for colors).
        z: Third component (blue channel for colors).
        kind: Whether the tuple is a point, a vector or a color.
    """

    x: float
    y: float
    z: float
    kind: Kind = Kind.VECTOR

    def __post_init__(self) -> None:
        if not isinstance(self.kind, Kind):
            raise TypeError(f"kind must be a Kind, got {self.kind!r}")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def w(self) -> float:
        """Homogeneous coordinate: 1.0 for points, 0.0 otherwise."""
        return 1.0 if self.kind is Kind.POINT else 0.0

    @property
    def components(self) -> tuple[float, float, float, float]:
        """The four homogeneous components ``(x, y, z, w)``."""
        return (self.x, self.y, self.z, self.w)

    @property
    def red(self) -> float:
        return self.x

    @property
    def green(self) -> float:
        return self.y

    @property
    def blue(self) -> float:
        return self.z

    def is_point(self) -> bool:
        return self.kind is Kind.POINT

    def is_vector(self) -> bool:
        return self.kind is Kind.VECTOR

    def is_color(self) -> bool:
        return self.kind is Kind.COLOR

    def as_rgb(self) -> tuple[float, float, float]:
        """Return the color channels as a plain ``(r, g, b)`` tuple.

        Raises:
            KindError: If the tuple is not a color.
        """
        self._require(Kind.COLOR, operation="read channels of")
        return (self.x, self.y, self.z)

    def _require(self, *kinds: Kind, operation: str) -> None:
        if self.kind not in kinds:
            raise KindError(f"cannot {operation} a {self.kind.value}")

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        kind = _SUM_KINDS.get((self.kind, other.kind))
        if kind is None:
            raise KindError(f"cannot add a {other.kind.value} to a {self.kind.value}")
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, kind)

    def __sub__(self, other: object) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        kind = _DIFFERENCE_KINDS.get((self.kind, other.kind))
        if kind is None:
            raise KindError(
                f"cannot subtract a {other.kind.value} from a {self.kind.value}"
            )
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, kind)

    def __neg__(self) -> Tuple:
        self._require(Kind.VECTOR, Kind.COLOR, operation="negate")
        return Tuple(-self.x, -self.y, -self.z, self.kind)

    def __mul__(self, other: object) -> Tuple:
        if isinstance(other, Tuple):
            return self.hadamard_product(other)
        if not isinstance(other, numbers.Real):
            return NotImplemented
        self._require(Kind.VECTOR, Kind.COLOR, operation="scale")
        return Tuple(self.x * other, self.y * other, self.z * other, self.kind)

    def __rmul__(self, other: object) -> Tuple:
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self.__mul__(other)

    def __truediv__(self, other: object) -> Tuple:
        if not isinstance(other, numbers.Real):
            return NotImplemented
        self._require(Kind.VECTOR, Kind.COLOR, operation="divide")
        return Tuple(self.x / other, self.y / other, self.z / other, self.kind)

    def magnitude(self) -> float:
        """Euclidean norm over all four homogeneous components."""
        x, y, z, w = self.components
        return math.sqrt(x * x + y * y + z * z + w * w)

    def normalize(self) -> Tuple:
        """Return the unit vector pointing in the same direction.

        Raises:
            KindError: If the tuple is not a vector.
            ZeroDivisionError: If the vector has zero length.
        """
        self._require(Kind.VECTOR, operation="normalize")
        magnitude = self.magnitude()
        if magnitude == 0.0:
            raise ZeroDivisionError("cannot normalize a zero-length vector")
        return Tuple(self.x / magnitude, self.y / magnitude, self.z / magnitude, Kind.VECTOR)

    def dot(self, other: Tuple) -> float:
        """Dot product of two vectors."""
        self._require(Kind.VECTOR, operation="take the dot product of")
        other._require(Kind.VECTOR, operation="take the dot product of")
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Tuple) -> Tuple:
        """Cross product of two vectors (right-handed)."""
        self._require(Kind.VECTOR, operation="take the cross product of")
        other._require(Kind.VECTOR, operation="take the cross product of")
        return Tuple(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
            Kind.VECTOR,
        )

    def hadamard_product(self, other: Tuple) -> Tuple:
        """Channel-wise product of two colors.

        Used to modulate a surface color by the color of the light hitting it.
        """
        self._require(Kind.COLOR, operation="blend")
        other._require(Kind.COLOR, operation="blend")
        return Tuple(self.x * other.x, self.y * other.y, self.z * other.z, Kind.COLOR)

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector about a surface normal.

        Args:
            normal: The surface normal (should be unit length).

        Returns:
            ``self - normal * 2 * dot(self, normal)``.
        """
        return self - normal * 2.0 * self.dot(normal)

    # -------------------------------------------------------------------------
    # Fluent transforms
    # -------------------------------------------------------------------------

    def transform(self, matrix: Matrix) -> Tuple:
        """Return ``matrix @ self``."""
        return matrix @ self

    def translate(self, x: float, y: float, z: float) -> Tuple:
        from phongtracer.core.transformations import translation

        return translation(x, y, z) @ self

    def scale(self, x: float, y: float, z: float) -> Tuple:
        from phongtracer.core.transformations import scaling

        return scaling(x, y, z) @ self

    def rotate_x(self, radians: float) -> Tuple:
        from phongtracer.core.transformations import rotation_x

        return rotation_x(radians) @ self

    def rotate_y(self, radians: float) -> Tuple:
        from phongtracer.core.transformations import rotation_y

        return rotation_y(radians) @ self

    def rotate_z(self, radians: float) -> Tuple:
        from phongtracer.core.transformations import rotation_z

        return rotation_z(radians) @ self

    def shear(
        self,
        x_y: float,
        x_z: float,
        y_x: float,
        y_z: float,
        z_x: float,
        z_y: float,
    ) -> Tuple:
        from phongtracer.core.transformations import shearing

        return shearing(x_y, x_z, y_x, y_z, z_x, z_y) @ self

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            self.kind is other.kind
            and approx_eq(self.x, other.x)
            and approx_eq(self.y, other.y)
            and approx_eq(self.z, other.z)
        )

    def __repr__(self) -> str:
        return f"{self.kind.value}({self.x!r}, {self.y!r}, {self.z!r})"


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1)."""
    return Tuple(x, y, z, Kind.POINT)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w = 0)."""
    return Tuple(x, y, z, Kind.VECTOR)


def color(red: float, green: float, blue: float) -> Tuple:
    """Create a color. Channels are unclamped."""
    return Tuple(red, green, blue, Kind.COLOR)


BLACK = color(0.0, 0.0, 0.0)
WHITE = color(1.0, 1.0, 1.0)
