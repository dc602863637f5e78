"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass

from phongtracer.core.tuples import Kind, KindError, Tuple


@dataclass(frozen=True)
class PointLight:
    """A light with no size, emitting equally in every direction.

    Attributes:
        position: Where the light sits in world space (a point).
        intensity: Color and brightness of the light (a color).
    """

    position: Tuple
    intensity: Tuple

    def __post_init__(self) -> None:
        if self.position.kind is not Kind.POINT:
            raise KindError(
                f"Light position must be a point, got a {self.position.kind.value}"
            )
        if self.intensity.kind is not Kind.COLOR:
            raise KindError(
                f"Light intensity must be a color, got a {self.intensity.kind.value}"
            )

    __hash__ = None  # type: ignore[assignment]
