"""Pytest configuration for phongtracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti

from phongtracer.core.transformations import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from phongtracer.core.tuples import point, vector


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Double precision
    keeps kernel results comparable with the pure Python renderer.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture
def clean_integrator():
    """Reset the Taichi integrator's scene and render target around a test.

    Yields the integrator module so tests can use it directly.
    """
    # Import here to ensure Taichi is initialized before fields are allocated
    from phongtracer.core import integrator

    integrator.clear_scene()
    integrator.reset_render_target()

    yield integrator

    integrator.clear_scene()
    integrator.reset_render_target()


@pytest.fixture
def sample_transforms():
    """A fixed set of invertible affine transforms."""
    return [
        translation(5, -3, 2),
        scaling(2, 3, 4),
        scaling(-1, 1, 1),
        rotation_x(0.7),
        rotation_y(-1.3),
        rotation_z(2.9),
        shearing(1, 0, 0, 0, 0, 0),
        shearing(0.5, -0.25, 0.1, 0.3, -0.2, 0.4),
        chain(rotation_x(1.1), scaling(0.5, 2, 1.5), translation(-4, 1, 3)),
        chain(shearing(0, 1, 0, 0, 0, 1), rotation_z(-0.4), translation(0.5, 0.5, -7)),
    ]


@pytest.fixture
def sample_points():
    """A fixed set of points, including the origin."""
    return [
        point(0, 0, 0),
        point(1, 2, 3),
        point(-3, 4, 5),
        point(0.25, -7.5, 12),
        point(-1, -1, -1),
    ]


@pytest.fixture
def sample_vectors():
    """A fixed set of non-zero vectors."""
    return [
        vector(1, 0, 0),
        vector(0, 1, 0),
        vector(1, 2, 3),
        vector(-4.5, 0.5, 2),
        vector(0.1, -0.2, 0.3),
    ]
