#!/usr/bin/env python3
"""Render the single-sphere scene or the clock face.

This script renders the magenta Phong-shaded sphere with either the pure
Python reference renderer or the Taichi kernel, or plots the clock face
hour marks, and writes the result as PPM or PNG.

Usage:
    python -m examples.render_sphere [options]

Options:
    --width WIDTH       Image width in pixels (default: 100)
    --height HEIGHT     Image height in pixels (default: 100)
    --output OUTPUT     Output file path, .ppm or .png (default: sphere.ppm)
    --backend BACKEND   Renderer: reference or taichi (default: reference)
    --scene SCENE       Scene: sphere or clock (default: sphere)
    --gamma GAMMA       Gamma encoding for PNG output (default: 1.0)
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_sphere --width 256 --height 256 --backend taichi --output sphere.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

BACKENDS = ("reference", "taichi")
SCENES = ("sphere", "clock")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Phong-shaded sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=100,
        help="Image width in pixels (default: 100)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=100,
        help="Image height in pixels (default: 100)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sphere.ppm",
        help="Output file path, .ppm or .png (default: sphere.ppm)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="reference",
        help="Renderer to use (default: reference)",
    )
    parser.add_argument(
        "--scene",
        choices=SCENES,
        default="sphere",
        help="Scene to render (default: sphere)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma encoding for PNG output (default: 1.0)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def init_taichi(quiet: bool = False) -> None:
    """Initialize Taichi in double precision, preferring the GPU."""
    import taichi as ti

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu, default_fp=ti.f64)
        if not quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu, default_fp=ti.f64)
        if not quiet:
            print("Using CPU backend")


def render_scene(
    width: int = 100,
    height: int = 100,
    output_path: str = "sphere.ppm",
    backend: str = "reference",
    scene: str = "sphere",
    gamma: float = 1.0,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    The Taichi backend expects Taichi to be initialized already.

    Args:
        width: Image width in pixels.
        height: Image height in pixels (ignored by the clock scene, which is
            square with side ``width``).
        output_path: Output file path (.ppm or .png).
        backend: "reference" or "taichi".
        scene: "sphere" or "clock".
        gamma: Gamma encoding for PNG output.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from phongtracer.preview.export import save_canvas
    from phongtracer.scene.demo import create_clock_canvas, create_sphere_scene

    start_time = time.time()

    if scene == "clock":
        if not quiet:
            print(f"Plotting clock face ({width}x{width})...")
        canvas = create_clock_canvas(width)
    elif scene == "sphere":
        if not quiet:
            print(f"Creating sphere scene ({width}x{height})...")
        sphere, light, camera = create_sphere_scene(width, height)

        if not quiet:
            print(f"Rendering with the {backend} backend...")
        if backend == "taichi":
            from phongtracer.core.integrator import render_canvas

            canvas = render_canvas(sphere, light, camera)
        elif backend == "reference":
            from phongtracer.core.reference import render

            canvas = render(sphere, light, camera)
        else:
            raise ValueError(f"Unknown backend '{backend}'. Expected one of {BACKENDS}")
    else:
        raise ValueError(f"Unknown scene '{scene}'. Expected one of {SCENES}")

    output_file = save_canvas(canvas, output_path, gamma=gamma)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.backend == "taichi" and args.scene == "sphere":
        init_taichi(quiet=args.quiet)

    try:
        render_scene(
            width=args.width,
            height=args.height,
            output_path=args.output,
            backend=args.backend,
            scene=args.scene,
            gamma=args.gamma,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
