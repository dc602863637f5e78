"""Intersection records and visible-hit selection.

An Intersection tags a ray parameter ``t`` with the primitive it belongs to.
Intersections keeps every intersection a primitive reports, including those
behind the ray origin (negative t), since they matter when deciding whether
the origin lies inside an object. Only ``hit()`` filters them out.

Example:
    >>> from phongtracer.geometry.intersection import Intersections
    >>> from phongtracer.geometry.sphere import Sphere
    >>> xs = Intersections.from_ts([5.0, 7.0, -3.0, 2.0], Sphere())
    >>> xs.hit().t
    2.0
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, overload

from phongtracer.core.constants import approx_eq

if TYPE_CHECKING:
    from phongtracer.geometry.sphere import Sphere


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray parameter at which a ray meets a primitive.

    Two intersections are equal when they refer to equal primitives and their
    t values differ by less than EPSILON.

    Attributes:
        t: Ray parameter of the intersection point.
        object: The primitive that was hit.
    """

    t: float
    object: Sphere

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.object == other.object and approx_eq(self.t, other.t)

    def __repr__(self) -> str:
        return f"Intersection(t={self.t!r})"


class Intersections(Sequence[Intersection]):
    """An immutable, ordered collection of intersections.

    Order is the order in which intersections were reported; it is not
    necessarily sorted by t.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Intersection] = ()) -> None:
        self._items = tuple(items)

    @classmethod
    def from_ts(cls, ts: Iterable[float], obj: Sphere) -> Intersections:
        """Build intersections for a single primitive from raw t values."""
        return cls(Intersection(float(t), obj) for t in ts)

    @overload
    def __getitem__(self, index: int) -> Intersection: ...

    @overload
    def __getitem__(self, index: slice) -> Intersections: ...

    def __getitem__(self, index: int | slice) -> Intersection | Intersections:
        if isinstance(index, slice):
            return Intersections(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def hit(self) -> Intersection | None:
        """Return the visible intersection.

        The visible intersection is the one with the smallest non-negative t.
        Intersections behind the ray origin are never selected. Ties keep
        the earliest reported intersection.

        Returns:
            The hit, or None if the collection is empty or every t is negative.
        """
        best: Intersection | None = None
        for intersection in self._items:
            if intersection.t < 0.0:
                continue
            if best is None or intersection.t < best.t:
                best = intersection
        return best

    def sorted(self) -> Intersections:
        """Return a copy ordered by ascending t."""
        return Intersections(sorted(self._items, key=lambda i: i.t))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersections):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Intersections({list(self._items)!r})"


def intersections(*items: Intersection) -> Intersections:
    """Collect intersections passed as separate arguments."""
    return Intersections(items)
