"""Square matrices with cofactor-expansion determinant and inverse.

Matrices are immutable N x N values backed by a read-only float64 NumPy
array. N is fixed at construction; 4 x 4 is the size used for affine
transforms, while 2 x 2 and 3 x 3 appear as the submatrices visited by the
recursive determinant.

The inverse is computed as the transposed matrix of cofactors divided by the
determinant. Cofactor expansion is exponential in N, but N never exceeds 4
here, and keeping the same method at every size keeps results consistent
with hand-computed expectations.

Example:
    >>> from phongtracer.core.matrices import Matrix
    >>> from phongtracer.core.tuples import point
    >>> m = Matrix([[1, 0, 0, 5], [0, 1, 0, -3], [0, 0, 1, 2], [0, 0, 0, 1]])
    >>> m @ point(-3, 4, 5)
    point(2.0, 1.0, 7.0)
    >>> m.inverse() @ (m @ point(-3, 4, 5))
    point(-3.0, 4.0, 5.0)
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import numpy.typing as npt

from phongtracer.core.constants import EPSILON
from phongtracer.core.tuples import Kind, KindError, Tuple


class NonInvertibleMatrixError(ValueError):
    """Raised when an inverse is required of a matrix whose determinant is 0."""


class Matrix:
    """An immutable square matrix of floats.

    Equality is approximate: two matrices are equal when they have the same
    size and every entry differs by less than EPSILON. Matrices are therefore
    unhashable.

    Args:
        rows: Row-major nested sequence (or 2D array) of numbers.

    Raises:
        ValueError: If the rows do not form a square matrix of size >= 2.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: Iterable[Iterable[float]] | npt.ArrayLike) -> None:
        if not isinstance(rows, np.ndarray):
            rows = [list(row) for row in rows]
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        if data.shape[0] < 2:
            raise ValueError(f"Matrix must be at least 2x2, got {data.shape[0]}x{data.shape[0]}")
        data.flags.writeable = False
        self._data = data

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        """Return the size x size identity matrix."""
        return cls(np.identity(size, dtype=np.float64))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._data.shape[0]

    @property
    def rows(self) -> tuple[tuple[float, ...], ...]:
        """Entries as nested Python tuples, row-major."""
        return tuple(tuple(float(value) for value in row) for row in self._data)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the entries."""
        return self._data.copy()

    def __getitem__(self, index: int | tuple[int, int]) -> float | tuple[float, ...]:
        if isinstance(index, tuple):
            row, col = index
            return float(self._data[row, col])
        return tuple(float(value) for value in self._data[index])

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def __matmul__(self, other: object) -> Matrix | Tuple:
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(
                    f"Cannot multiply a {self.size}x{self.size} matrix "
                    f"by a {other.size}x{other.size} matrix"
                )
            return Matrix(self._data @ other._data)
        if isinstance(other, Tuple):
            return self._multiply_tuple(other)
        return NotImplemented

    def apply(self, x: float, y: float, z: float, w: float) -> tuple[float, float, float, float]:
        """Multiply a 4x4 matrix by the column vector ``(x, y, z, w)``.

        Returns:
            The four raw homogeneous components of the product.
        """
        if self.size != 4:
            raise ValueError(f"Only 4x4 matrices transform tuples, got {self.size}x{self.size}")
        result = self._data @ np.array((x, y, z, w), dtype=np.float64)
        return (float(result[0]), float(result[1]), float(result[2]), float(result[3]))

    def _multiply_tuple(self, other: Tuple) -> Tuple:
        if other.kind is Kind.COLOR:
            raise KindError("cannot transform a color")
        x, y, z, w = self.apply(*other.components)
        # A vector stays a vector: the fourth component is dropped. A point
        # only stays a point under an affine matrix.
        if other.kind is Kind.POINT and abs(w - 1.0) >= EPSILON:
            raise ValueError(f"Matrix is not affine: transformed point has w = {w}")
        return Tuple(x, y, z, other.kind)

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    # -------------------------------------------------------------------------
    # Determinant and inverse
    # -------------------------------------------------------------------------

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        if self.size == 2:
            raise ValueError("A 2x2 matrix has no submatrix")
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(data)

    def minor(self, row: int, col: int) -> float:
        """Determinant of the submatrix at (row, col)."""
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        """Minor at (row, col), negated when row + col is odd."""
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.size == 2:
            (a, b), (c, d) = self._data
            return float(a * d - b * c)
        return sum(
            self.cofactor(0, col) * float(self._data[0, col]) for col in range(self.size)
        )

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Matrix | None:
        """Return the inverse, or None when the matrix is singular.

        Each cofactor is divided by the determinant and stored at the
        transposed position, giving ``adjugate / determinant``.
        """
        determinant = self.determinant()
        if determinant == 0.0:
            return None

        output = np.zeros_like(self._data)
        for row in range(self.size):
            for col in range(self.size):
                output[col, row] = self.cofactor(row, col) / determinant
        return Matrix(output)

    def inverse_or_raise(self) -> Matrix:
        """Return the inverse.

        Raises:
            NonInvertibleMatrixError: If the determinant is 0.
        """
        inverse = self.inverse()
        if inverse is None:
            raise NonInvertibleMatrixError(f"Matrix is not invertible:\n{self!r}")
        return inverse

    # -------------------------------------------------------------------------
    # Fluent transforms (each applies after the transforms already in self)
    # -------------------------------------------------------------------------

    def translate(self, x: float, y: float, z: float) -> Matrix:
        from phongtracer.core.transformations import translation

        return translation(x, y, z) @ self

    def scale(self, x: float, y: float, z: float) -> Matrix:
        from phongtracer.core.transformations import scaling

        return scaling(x, y, z) @ self

    def rotate_x(self, radians: float) -> Matrix:
        from phongtracer.core.transformations import rotation_x

        return rotation_x(radians) @ self

    def rotate_y(self, radians: float) -> Matrix:
        from phongtracer.core.transformations import rotation_y

        return rotation_y(radians) @ self

    def rotate_z(self, radians: float) -> Matrix:
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
    ) -> Matrix:
        from phongtracer.core.transformations import shearing

        return shearing(x_y, x_z, y_x, y_z, z_x, z_y) @ self

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if other.size != self.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{value:g}" for value in row) + "]" for row in self._data
        )
        return f"Matrix([{rows}])"


def identity(size: int = 4) -> Matrix:
    """Shorthand for ``Matrix.identity(size)``."""
    return Matrix.identity(size)

