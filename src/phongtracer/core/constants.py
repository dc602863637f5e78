"""Numeric constants shared by every value type.

Tuple, Matrix, Intersection and Sphere equality all compare floating point
components against the same tolerance so that chains of transforms (for
example translate followed by the inverse translation) compare equal to the
value they started from.
"""

# Absolute tolerance used by every approximate equality in the package
EPSILON = 1e-5


def approx_eq(a: float, b: float) -> bool:
    """Return True if two floats differ by less than EPSILON."""
    return abs(a - b) < EPSILON
