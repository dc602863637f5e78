"""Factories for 4x4 affine transform matrices.

Every factory returns a new Matrix. Transforms compose by matrix
multiplication and apply right to left: for ``T = A @ B @ C``, ``T @ p``
applies C first, then B, then A. ``chain`` takes transforms in the order
they should be applied and builds that product for you.

Example:
    >>> import math
    >>> from phongtracer.core.transformations import chain, rotation_x, scaling, translation
    >>> from phongtracer.core.tuples import point
    >>> t = chain(rotation_x(math.pi / 2), scaling(5, 5, 5), translation(10, 5, 7))
    >>> t @ point(1, 0, 1)
    point(15.0, 0.0, 7.0)
"""

from __future__ import annotations

import math
from enum import Enum

from phongtracer.core.matrices import Matrix


class Axis(Enum):
    """Coordinate axis for rotations."""

    X = "x"
    Y = "y"
    Z = "z"


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by ``(x, y, z)``. Vectors are unaffected."""
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scale each axis independently. Negative factors reflect."""
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation(axis: Axis, radians: float) -> Matrix:
    """Right-handed rotation about a coordinate axis.

    Args:
        axis: The axis to rotate about.
        radians: Rotation angle. Positive angles turn counter-clockwise when
            looking down the axis toward the origin.

    Returns:
        The rotation matrix.
    """
    cos = math.cos(radians)
    sin = math.sin(radians)

    if axis is Axis.X:
        rows = [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, cos, -sin, 0.0],
            [0.0, sin, cos, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    elif axis is Axis.Y:
        rows = [
            [cos, 0.0, sin, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-sin, 0.0, cos, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    elif axis is Axis.Z:
        rows = [
            [cos, -sin, 0.0, 0.0],
            [sin, cos, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    else:
        raise ValueError(f"Unknown rotation axis: {axis!r}")

    return Matrix(rows)


def rotation_x(radians: float) -> Matrix:
    return rotation(Axis.X, radians)


def rotation_y(radians: float) -> Matrix:
    return rotation(Axis.Y, radians)


def rotation_z(radians: float) -> Matrix:
    return rotation(Axis.Z, radians)


def shearing(
    x_y: float,
    x_z: float,
    y_x: float,
    y_z: float,
    z_x: float,
    z_y: float,
) -> Matrix:
    """Shear (skew) transform.

    Each argument moves the first named coordinate in proportion to the
    second one, e.g. ``x_y`` adds ``x_y * y`` to x.
    """
    return Matrix(
        [
            [1.0, x_y, x_z, 0.0],
            [y_x, 1.0, y_z, 0.0],
            [z_x, z_y, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def chain(*transforms: Matrix) -> Matrix:
    """Compose transforms given in application order.

    ``chain(a, b, c)`` returns ``c @ b @ a``: a is applied first. With no
    arguments the identity is returned.
    """
    result = Matrix.identity(4)
    for transform in transforms:
        result = transform @ result
    return result
