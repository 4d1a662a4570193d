"""Tests for the scene container and its queries.

This module tests:
- Adding primitives, freezing and ownership rules
- Nearest-hit queries and their tie-breaking
- Shadow casting toward lights
- Direct light sampling with occlusion
- The built-in smallpt room
"""

import pytest

from pathtracer.camera import PinholeCamera
from pathtracer.core.ray import Ray
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import ZERO, Vec3
from pathtracer.geometry import Sphere
from pathtracer.materials import Material
from pathtracer.scene import Scene, SmallptParams, create_smallpt_scene

BLACK = (0.0, 0.0, 0.0)
GREY = (0.5, 0.5, 0.5)
UP = Vec3(0.0, 1.0, 0.0)


def _lit_scene(occluded):
    """A light straight above the origin, optionally blocked by a ball."""
    scene = Scene()
    light = scene.add_sphere(Material.DIFFUSE, 1.0, (0.0, 10.0, 0.0), (1.0, 1.0, 1.0), BLACK)
    if occluded:
        scene.add_sphere(Material.DIFFUSE, 2.0, (0.0, 5.0, 0.0), BLACK, GREY)
    return scene.freeze(), light


class TestSceneConstruction:
    """Test adding primitives and freezing."""

    def test_add_returns_indices_in_order(self):
        scene = Scene()
        assert scene.add_sphere(Material.DIFFUSE, 1.0, (0.0, 0.0, 0.0), BLACK, GREY) == 0
        assert scene.add_sphere(Material.SPECULAR, 1.0, (5.0, 0.0, 0.0), BLACK, GREY) == 1
        assert len(scene) == 2
        assert scene[1].material == Material.SPECULAR

    def test_emissive_indices(self):
        scene = Scene()
        scene.add_sphere(Material.DIFFUSE, 1.0, (0.0, 0.0, 0.0), BLACK, GREY)
        scene.add_sphere(Material.DIFFUSE, 1.0, (5.0, 0.0, 0.0), (2.0, 2.0, 2.0), BLACK)
        assert scene.emissive_indices == (1,)

    def test_adding_same_primitive_twice_fails(self):
        """Test that a primitive can only be owned once."""
        scene = Scene()
        sphere = Sphere(Material.DIFFUSE, 1.0, ZERO, ZERO, Vec3(*GREY))
        scene.add(sphere)
        with pytest.raises(ValueError, match="already in the scene"):
            scene.add(sphere)

    def test_frozen_scene_rejects_additions(self):
        scene = Scene().freeze()
        with pytest.raises(RuntimeError, match="frozen"):
            scene.add_sphere(Material.DIFFUSE, 1.0, (0.0, 0.0, 0.0), BLACK, GREY)

    def test_freeze_returns_scene(self):
        scene = Scene()
        assert scene.freeze() is scene
        assert scene.frozen


class TestSceneIntersection:
    """Test nearest-hit queries."""

    def test_empty_scene_misses(self):
        assert Scene().intersect(Ray(ZERO, UP)) is None

    def test_nearest_of_two(self):
        """Test that the closer of two spheres along the ray is reported."""
        scene = Scene()
        scene.add_sphere(Material.DIFFUSE, 1.0, (0.0, 10.0, 0.0), BLACK, GREY)
        scene.add_sphere(Material.DIFFUSE, 1.0, (0.0, 5.0, 0.0), BLACK, GREY)
        index, dist = scene.nearest(Ray(ZERO, UP))
        assert index == 1
        assert abs(dist - 4.0) < 1e-9

    def test_tie_keeps_first_added(self):
        """Test that equal distances resolve to the earlier primitive."""
        scene = Scene()
        scene.add_sphere(Material.DIFFUSE, 1.0, (0.0, 5.0, 0.0), BLACK, GREY)
        scene.add_sphere(Material.SPECULAR, 1.0, (0.0, 5.0, 0.0), BLACK, GREY)
        index, _ = scene.nearest(Ray(ZERO, UP))
        assert index == 0
        assert scene.intersect(Ray(ZERO, UP)).material == Material.DIFFUSE


class TestShadows:
    """Test shadow casting and direct light sampling."""

    def test_unoccluded_light_is_visible(self):
        scene, light = _lit_scene(occluded=False)
        assert scene.shadow_cast(Ray(ZERO, UP), light)

    def test_occluded_light_is_not_visible(self):
        scene, light = _lit_scene(occluded=True)
        assert not scene.shadow_cast(Ray(ZERO, UP), light)

    def test_ray_missing_everything_sees_no_light(self):
        scene, light = _lit_scene(occluded=False)
        assert not scene.shadow_cast(Ray(ZERO, Vec3(1.0, 0.0, 0.0)), light)

    def test_sample_lights_unoccluded_is_positive(self):
        scene, _ = _lit_scene(occluded=False)
        rng = SampleGenerator.for_row(seed=1, row=0)
        direct = scene.sample_lights(ZERO, UP, rng)
        assert direct.min_component() > 0.0

    def test_sample_lights_occluded_is_zero(self):
        """Test that a ball covering the whole light cone blocks all light."""
        scene, _ = _lit_scene(occluded=True)
        rng = SampleGenerator.for_row(seed=1, row=0)
        for _ in range(50):
            assert scene.sample_lights(ZERO, UP, rng) == ZERO


class TestSmallptScene:
    """Test the built-in demo room."""

    def test_room_layout(self):
        scene, camera = create_smallpt_scene()
        assert len(scene) == 9
        assert scene.frozen
        assert scene.emissive_indices == (8,)
        assert scene[6].material == Material.SPECULAR
        assert scene[7].material == Material.REFRACTIVE
        assert isinstance(camera, PinholeCamera)

    def test_light_pokes_through_ceiling(self):
        """Test that the light sphere dips just below the ceiling plane."""
        scene, _ = create_smallpt_scene()
        light = scene[8]
        assert abs((light.center.y - light.radius) - (81.6 - 0.27)) < 1e-6

    def test_custom_params(self):
        params = SmallptParams(light_emission=(4.0, 4.0, 4.0), left_wall_color=(0.1, 0.9, 0.1))
        scene, _ = create_smallpt_scene(params)
        assert scene[0].colour == Vec3(0.1, 0.9, 0.1)
        assert scene[8].emission == Vec3(4.0, 4.0, 4.0)

    def test_camera_ray_hits_room(self):
        """Test that a central camera ray reaches the back wall at z = 0."""
        scene, camera = create_smallpt_scene()
        ray = camera.primary_ray(32, 24, 0, 0, 0.0, 0.0, 64, 48, camera.image_axes(64, 48))
        hit = scene.intersect(ray)
        assert hit is not None
        assert abs(hit.position.z) < 1e-3
        assert hit.colour == Vec3(0.75, 0.75, 0.75)
