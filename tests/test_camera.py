"""Unit tests for the pinhole camera.

Tests cover:
- Image-plane axes
- Primary ray generation, orientation and near offset
- Construction validation
"""

import pytest

from pathtracer.camera import DEFAULT_FOV_SCALE, PinholeCamera
from pathtracer.core.vector import Vec3


@pytest.fixture
def camera():
    return PinholeCamera(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0), near_offset=0.0)


class TestImageAxes:
    """Test image-plane axis construction."""

    def test_horizontal_axis_scales_with_aspect(self, camera):
        cx, _ = camera.image_axes(200, 100)
        assert abs(cx.x - 2.0 * DEFAULT_FOV_SCALE) < 1e-12
        assert cx.y == 0.0
        assert cx.z == 0.0

    def test_vertical_axis_points_up(self, camera):
        _, cy = camera.image_axes(200, 100)
        assert abs(cy.y - DEFAULT_FOV_SCALE) < 1e-12
        assert abs(cy.x) < 1e-12


class TestPrimaryRays:
    """Test ray generation through the image plane."""

    def test_rays_are_unit_length(self, camera):
        axes = camera.image_axes(8, 6)
        for x, y in [(0, 0), (7, 5), (3, 2)]:
            ray = camera.primary_ray(x, y, 1, 0, 0.3, -0.4, 8, 6, axes)
            assert abs(ray.direction.length() - 1.0) < 1e-9

    def test_top_row_looks_up_and_left_column_looks_left(self, camera):
        """Test that row 0 is the top of the image and column 0 the left."""
        axes = camera.image_axes(8, 6)
        top_left = camera.primary_ray(0, 0, 0, 0, 0.0, 0.0, 8, 6, axes)
        bottom_right = camera.primary_ray(7, 5, 1, 1, 0.0, 0.0, 8, 6, axes)
        assert top_left.direction.y > 0.0
        assert top_left.direction.x < 0.0
        assert bottom_right.direction.y < 0.0
        assert bottom_right.direction.x > 0.0

    def test_center_ray_follows_view_direction(self, camera):
        """Test that the symmetric sub-pixel pair straddles the view direction."""
        axes = camera.image_axes(2, 2)
        # Sub-pixel (1, *) of pixel 0 and (0, *) of pixel 1 meet at u = 0
        ray = camera.primary_ray(0, 0, 1, 0, 0.5, -0.5, 2, 2, axes)
        assert abs(ray.direction.x) < 1e-9
        assert abs(ray.direction.y) < 1e-9
        assert abs(ray.direction.z + 1.0) < 1e-9

    def test_near_offset_moves_origin(self):
        camera = PinholeCamera(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -2.0), near_offset=10.0)
        ray = camera.primary_ray(0, 0, 1, 0, 0.5, -0.5, 2, 2, camera.image_axes(2, 2))
        assert abs(ray.origin.z + 10.0) < 1e-9


class TestCameraValidation:
    def test_zero_direction_rejected(self):
        with pytest.raises(ValueError, match="non-zero"):
            PinholeCamera(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 0.0))

    def test_direction_is_stored_as_given(self):
        camera = PinholeCamera((1.0, 2.0, 3.0), (0.0, 0.0, -2.0))
        assert camera.position == Vec3(1.0, 2.0, 3.0)
        assert camera.direction == Vec3(0.0, 0.0, -2.0)
