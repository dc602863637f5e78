"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from scene creation through the
final image file, for both renderers and the command-line script. Images
are kept small so the pure Python renderer stays fast.

Note: The Taichi integrator is reached through the clean_integrator fixture,
which imports it after conftest.py has initialized Taichi.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

from examples.render_sphere import main, parse_args, render_scene
from phongtracer.core.reference import render
from phongtracer.preview.canvas import Canvas
from phongtracer.preview.export import compute_rmse, save_canvas
from phongtracer.scene.demo import create_sphere_scene


class TestSphereIntegration:
    """Integration tests for the single-sphere scene."""

    def test_reference_render_to_ppm(self, tmp_path: Path) -> None:
        """Test rendering and saving a PPM file."""
        sphere, light, camera = create_sphere_scene(20, 20)
        canvas = render(sphere, light, camera)
        path = save_canvas(canvas, tmp_path / "sphere.ppm")

        text = path.read_text(encoding="ascii")
        assert text.startswith("P3\n20 20\n255\n")
        assert text.endswith("\n")

    def test_ppm_and_png_agree(self, tmp_path: Path) -> None:
        """Test that both formats store the same 8-bit values."""
        sphere, light, camera = create_sphere_scene(16, 12)
        canvas = render(sphere, light, camera)
        ppm_path = save_canvas(canvas, tmp_path / "sphere.ppm")
        png_path = save_canvas(canvas, tmp_path / "sphere.png")

        with PILImage.open(ppm_path) as ppm, PILImage.open(png_path) as png:
            assert np.array_equal(np.asarray(ppm), np.asarray(png))

    def test_lit_side_faces_light(self) -> None:
        """Test that the upper-left of the sphere is brighter than the lower-right."""
        sphere, light, camera = create_sphere_scene(21, 21)
        image = render(sphere, light, camera).to_numpy()
        brightness = image.sum(axis=2)
        assert brightness[7, 7] > brightness[13, 13]

    def test_highlight_exceeds_one_before_clamping(self) -> None:
        """Test that the raw image keeps unclamped highlight values."""
        sphere, light, camera = create_sphere_scene(41, 41)
        image = render(sphere, light, camera).to_numpy()
        assert image.max() > 1.0
        assert Canvas.from_array(image).to_uint8().max() == 255

    def test_taichi_matches_reference(self, clean_integrator) -> None:
        """Test that the two renderers produce the same image."""
        sphere, light, camera = create_sphere_scene(24, 24)
        taichi_image = clean_integrator.render_canvas(sphere, light, camera).to_numpy()
        reference_image = render(sphere, light, camera).to_numpy()
        assert compute_rmse(taichi_image, reference_image) < 0.05


class TestCommandLine:
    """Integration tests for the example script."""

    def test_parse_defaults(self) -> None:
        """Test the default options."""
        args = parse_args([])
        assert (args.width, args.height) == (100, 100)
        assert args.backend == "reference"
        assert args.scene == "sphere"
        assert args.output == "sphere.ppm"

    def test_rejects_unknown_backend(self) -> None:
        """Test that argparse rejects unknown choices."""
        with pytest.raises(SystemExit):
            parse_args(["--backend", "cuda"])

    def test_main_reference_png(self, tmp_path: Path) -> None:
        """Test the script end to end with the reference renderer."""
        output = tmp_path / "sphere.png"
        status = main(["--width", "12", "--height", "10", "--output", str(output), "--quiet"])
        assert status == 0
        with PILImage.open(output) as img:
            assert img.size == (12, 10)

    def test_main_clock(self, tmp_path: Path) -> None:
        """Test plotting the clock face."""
        output = tmp_path / "clock.ppm"
        status = main(["--scene", "clock", "--width", "60", "--output", str(output), "--quiet"])
        assert status == 0
        assert output.read_text(encoding="ascii").startswith("P3\n60 60\n255\n")

    def test_main_reports_errors(self, tmp_path: Path, capsys) -> None:
        """Test that failures return a non-zero status."""
        output = tmp_path / "sphere.jpg"
        status = main(["--width", "4", "--height", "4", "--output", str(output), "--quiet"])
        assert status == 1
        assert "Unsupported image format" in capsys.readouterr().err

    def test_render_scene_taichi_backend(self, tmp_path: Path, clean_integrator) -> None:
        """Test the Taichi backend through the script helper."""
        path = render_scene(
            width=16,
            height=16,
            output_path=str(tmp_path / "sphere.ppm"),
            backend="taichi",
            quiet=True,
        )
        assert path.exists()

    def test_render_scene_prints_progress(self, tmp_path: Path, capsys) -> None:
        """Test progress output when not quiet."""
        render_scene(width=8, height=8, output_path=str(tmp_path / "s.ppm"))
        out = capsys.readouterr().out
        assert "Creating sphere scene (8x8)" in out
        assert "Saved to:" in out
