"""Phong reflection model.

The Phong model approximates the light leaving a surface point as the sum of
three terms:

    ambient  = surface_color * light_color * ambient
    diffuse  = surface_color * light_color * diffuse * dot(light_dir, normal)
    specular = light_color * specular * dot(reflected_light_dir, eye) ** shininess

The diffuse and specular terms vanish when the light is behind the surface,
and the specular term also vanishes when the reflection points away from the
eye. The result is left unclamped; mapping to a displayable range happens
when the canvas is serialized.

Example:
    >>> from phongtracer.core.tuples import color, point, vector
    >>> from phongtracer.materials.phong import Material
    >>> from phongtracer.scene.light import PointLight
    >>> light = PointLight(point(0, 0, -10), color(1, 1, 1))
    >>> Material().lighting(light, point(0, 0, 0), vector(0, 0, -1), vector(0, 0, -1))
    color(1.9, 1.9, 1.9)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from phongtracer.core.tuples import BLACK, WHITE, Kind, KindError, Tuple

if TYPE_CHECKING:
    from phongtracer.scene.light import PointLight


@dataclass(frozen=True)
class Material:
    """Surface reflectance parameters for the Phong model.

    Attributes:
        color: Surface color.
        ambient: Fraction of the light reflected regardless of geometry.
        diffuse: Fraction of the light reflected from a matte surface.
        specular: Strength of the highlight.
        shininess: Size of the highlight; larger values give a smaller,
            tighter highlight.
    """

    color: Tuple = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def __post_init__(self) -> None:
        if self.color.kind is not Kind.COLOR:
            raise KindError(f"Material color must be a color, got a {self.color.kind.value}")
        for name in ("ambient", "diffuse", "specular", "shininess"):
            value = float(getattr(self, name))
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
            object.__setattr__(self, name, value)

    __hash__ = None  # type: ignore[assignment]

    def with_changes(self, **changes: Any) -> Material:
        """Return a copy with the given attributes replaced."""
        return dataclasses.replace(self, **changes)

    def lighting(
        self,
        light: PointLight,
        position: Tuple,
        eye_vector: Tuple,
        normal_vector: Tuple,
    ) -> Tuple:
        """Shade a surface point with this material. See ``lighting``."""
        return lighting(self, light, position, eye_vector, normal_vector)


def lighting(
    material: Material,
    light: PointLight,
    position: Tuple,
    eye_vector: Tuple,
    normal_vector: Tuple,
) -> Tuple:
    """Compute the color of a surface point lit by a single point light.

    Args:
        material: The surface material.
        light: The light source.
        position: The point being shaded.
        eye_vector: Unit vector from the point toward the eye.
        normal_vector: Unit surface normal at the point.

    Returns:
        The unclamped color ``ambient + diffuse + specular``.
    """
    effective_color = material.color.hadamard_product(light.intensity)
    ambient = effective_color * material.ambient

    light_vector = (light.position - position).normalize()
    light_dot_normal = light_vector.dot(normal_vector)

    # Light on the other side of the surface
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflect_vector = (-light_vector).reflect(normal_vector)
    reflect_dot_eye = reflect_vector.dot(eye_vector)

    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular
