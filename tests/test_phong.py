"""Unit tests for the Phong material and lighting model.

Tests cover:
- Material defaults, validation and copies
- Lighting with the eye and light in various positions
- Unclamped results and the ambient floor
"""

import math

import pytest

from phongtracer.core.tuples import BLACK, WHITE, KindError, color, point, vector
from phongtracer.materials.phong import Material, lighting
from phongtracer.scene.light import PointLight

HALF_ROOT_2 = math.sqrt(2) / 2


class TestMaterial:
    """Tests for the Material dataclass."""

    def test_defaults(self):
        """Test the default reflectance parameters."""
        m = Material()
        assert m.color == color(1, 1, 1)
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0

    def test_parameters_coerced_to_float(self):
        """Test that integer parameters are stored as floats."""
        m = Material(ambient=1, shininess=10)
        assert isinstance(m.ambient, float)
        assert isinstance(m.shininess, float)

    @pytest.mark.parametrize("name", ["ambient", "diffuse", "specular", "shininess"])
    def test_negative_parameter_rejected(self, name):
        """Test that reflectance parameters must be non-negative."""
        with pytest.raises(ValueError):
            Material(**{name: -0.1})

    def test_color_must_be_color(self):
        """Test that the surface color must be a color tuple."""
        with pytest.raises(KindError):
            Material(color=vector(1, 0, 0))

    def test_with_changes(self):
        """Test copying a material with new values."""
        m = Material()
        shiny = m.with_changes(shininess=50.0, color=color(1, 0.2, 1))
        assert shiny.shininess == 50.0
        assert shiny.color == color(1, 0.2, 1)
        assert m.shininess == 200.0

    def test_with_changes_validates(self):
        """Test that copies are validated too."""
        with pytest.raises(ValueError):
            Material().with_changes(diffuse=-1.0)

    def test_immutable(self):
        """Test that fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            Material().ambient = 0.5


class TestLighting:
    """Tests for the lighting function."""

    def setup_method(self):
        self.material = Material()
        self.position = point(0, 0, 0)

    def test_eye_between_light_and_surface(self):
        """Test full ambient, diffuse and specular."""
        eye = vector(0, 0, -1)
        normal = vector(0, 0, -1)
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        result = lighting(self.material, light, self.position, eye, normal)
        assert result == color(1.9, 1.9, 1.9)

    def test_eye_offset_45_degrees(self):
        """Test that moving the eye off the reflection kills the highlight."""
        eye = vector(0, HALF_ROOT_2, -HALF_ROOT_2)
        normal = vector(0, 0, -1)
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        result = lighting(self.material, light, self.position, eye, normal)
        assert result == color(1.0, 1.0, 1.0)

    def test_light_offset_45_degrees(self):
        """Test reduced diffuse with the light off to the side."""
        eye = vector(0, 0, -1)
        normal = vector(0, 0, -1)
        light = PointLight(point(0, 10, -10), color(1, 1, 1))
        result = lighting(self.material, light, self.position, eye, normal)
        assert result == color(0.7364, 0.7364, 0.7364)

    def test_eye_in_reflection_path(self):
        """Test full specular with the eye on the reflected ray."""
        eye = vector(0, -HALF_ROOT_2, -HALF_ROOT_2)
        normal = vector(0, 0, -1)
        light = PointLight(point(0, 10, -10), color(1, 1, 1))
        result = lighting(self.material, light, self.position, eye, normal)
        assert result == color(1.6364, 1.6364, 1.6364)

    def test_light_behind_surface(self):
        """Test that only ambient remains when the light is behind."""
        eye = vector(0, 0, -1)
        normal = vector(0, 0, -1)
        light = PointLight(point(0, 0, 10), color(1, 1, 1))
        result = lighting(self.material, light, self.position, eye, normal)
        assert result == color(0.1, 0.1, 0.1)

    def test_method_matches_function(self):
        """Test that Material.lighting delegates to lighting."""
        eye = vector(0, 0, -1)
        normal = vector(0, 0, -1)
        light = PointLight(point(0, 10, -10), color(1, 1, 1))
        assert self.material.lighting(light, self.position, eye, normal) == lighting(
            self.material, light, self.position, eye, normal
        )

    def test_result_is_unclamped(self):
        """Test that bright lights produce channels above 1."""
        light = PointLight(point(0, 0, -10), color(2, 2, 2))
        result = lighting(self.material, light, self.position, vector(0, 0, -1), vector(0, 0, -1))
        assert result == color(3.8, 3.8, 3.8)

    def test_surface_color_tints_ambient_and_diffuse_only(self):
        """Test that the highlight takes the light's color."""
        material = Material(color=color(1, 0, 0))
        light = PointLight(point(0, 0, -10), WHITE)
        result = lighting(material, light, self.position, vector(0, 0, -1), vector(0, 0, -1))
        assert result == color(1.9, 0.9, 0.9)

    def test_black_light_gives_black(self):
        """Test that a light with no intensity contributes nothing."""
        light = PointLight(point(0, 0, -10), BLACK)
        result = lighting(self.material, light, self.position, vector(0, 0, -1), vector(0, 0, -1))
        assert result == BLACK

    def test_ambient_is_lower_bound(self):
        """Test that every channel is at least the ambient term."""
        eye = vector(0, 0, -1)
        normal = vector(0, 0, -1)
        for light_position in [point(0, 0, -10), point(0, 10, -10), point(0, 0, 10), point(5, -3, 1)]:
            light = PointLight(light_position, WHITE)
            result = lighting(self.material, light, self.position, eye, normal)
            for channel in result.as_rgb():
                assert channel >= self.material.ambient - 1e-12


class TestPointLight:
    """Tests for the PointLight dataclass."""

    def test_constructor(self):
        """Test that position and intensity are stored."""
        light = PointLight(point(0, 0, 0), color(1, 1, 1))
        assert light.position == point(0, 0, 0)
        assert light.intensity == color(1, 1, 1)

    def test_position_must_be_point(self):
        """Test that a vector position is rejected."""
        with pytest.raises(KindError):
            PointLight(vector(0, 0, 0), color(1, 1, 1))

    def test_intensity_must_be_color(self):
        """Test that a vector intensity is rejected."""
        with pytest.raises(KindError):
            PointLight(point(0, 0, 0), vector(1, 1, 1))
