"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: small scenes that
render fast and have known closed-form answers, a matching camera, and
seeded sample generators.
"""

import pytest

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import Vec3
from pathtracer.materials import Material
from pathtracer.scene.scene import Scene

BLACK = (0.0, 0.0, 0.0)


@pytest.fixture
def rng():
    """A seeded sample generator for row 0, sample pass 0."""
    return SampleGenerator.for_row(seed=42, row=0)


@pytest.fixture
def inside_camera():
    """A camera at the origin looking down -Z, tracing from its own position."""
    return PinholeCamera(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0), near_offset=0.0)


@pytest.fixture
def dim_scene():
    """A closed room whose radiance never exceeds 1.

    A faintly glowing grey enclosure holds a small light and two balls. Every
    sample stays well below 1, so the per-sub-pixel clamp never triggers and
    sample passes can be split and merged without changing the result.
    """
    scene = Scene()
    scene.add_sphere(Material.DIFFUSE, 50.0, (0.0, 0.0, 0.0), (0.05, 0.05, 0.05), (0.5, 0.5, 0.5))
    scene.add_sphere(Material.DIFFUSE, 5.0, (0.0, 20.0, -20.0), (0.1, 0.1, 0.1), BLACK)
    scene.add_sphere(Material.DIFFUSE, 8.0, (-10.0, -5.0, -30.0), BLACK, (0.5, 0.4, 0.3))
    scene.add_sphere(Material.SPECULAR, 6.0, (12.0, -8.0, -25.0), BLACK, (0.5, 0.5, 0.5))
    return scene.freeze()


@pytest.fixture
def glowing_enclosure():
    """A black sphere with unit emission, seen from its center."""
    scene = Scene()
    scene.add_sphere(Material.DIFFUSE, 10.0, (0.0, 0.0, 0.0), (1.0, 1.0, 1.0), BLACK)
    return scene.freeze()
