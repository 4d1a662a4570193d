"""Pinhole camera model for primary ray generation.

The camera looks along a fixed direction from a fixed position. Image-plane
axes are derived from the image size:

    cx = (width * fov_scale / height, 0, 0)
    cy = normalize(cx x direction) * fov_scale

A ray through pixel (x, y), with y = 0 the top row, sub-pixel (sx, sy) of a
2x2 grid and tent-filter offsets (dx, dy) in (-1, 1) points along

    d = normalize(cx * u + cy * v + direction)
    u = ((sx + 0.5 + dx) / 2 + x) / width - 0.5
    v = ((sy + 0.5 + dy) / 2 + (height - y - 1)) / height - 0.5

and starts near_offset units along d from the camera position, which pushes
the origin through the front wall of a closed room scene.

Example:
    >>> from pathtracer.camera.pinhole import PinholeCamera
    >>> from pathtracer.core.vector import Vec3
    >>> camera = PinholeCamera(Vec3(50.0, 52.0, 295.6), Vec3(0.0, -0.042612, -1.0))
    >>> axes = camera.image_axes(64, 48)
    >>> ray = camera.primary_ray(32, 24, 0, 0, 0.0, 0.0, 64, 48, axes)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3

# Half-height of the image plane at unit distance (about 54 degrees vfov)
DEFAULT_FOV_SCALE = 0.5135


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        position: Camera position in world space.
        direction: View direction; normalized on construction.
        fov_scale: Half-extent of the image plane at unit distance.
        near_offset: Distance along each primary ray before tracing starts.
    """

    position: Vec3
    direction: Vec3
    fov_scale: float = DEFAULT_FOV_SCALE
    near_offset: float = 140.0
    _unit_direction: Vec3 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if Vec3(*self.direction).is_zero():
            raise ValueError("Camera direction must be non-zero")
        object.__setattr__(self, "position", Vec3(*self.position))
        object.__setattr__(self, "direction", Vec3(*self.direction))
        object.__setattr__(self, "_unit_direction", self.direction.normalized())

    def image_axes(self, width: int, height: int) -> tuple[Vec3, Vec3]:
        """Compute the horizontal and vertical image-plane axes.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            Tuple (cx, cy).
        """
        cx = Vec3(width * self.fov_scale / height, 0.0, 0.0)
        cy = cx.cross(self._unit_direction).normalized() * self.fov_scale
        return cx, cy

    def primary_ray(
        self,
        x: int,
        y: int,
        sx: int,
        sy: int,
        dx: float,
        dy: float,
        width: int,
        height: int,
        axes: tuple[Vec3, Vec3],
    ) -> Ray:
        """Generate the camera ray for one jittered sub-pixel sample.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).
            sx: Sub-pixel column, 0 or 1.
            sy: Sub-pixel row, 0 or 1 (1 = upper half of the pixel).
            dx: Horizontal tent offset in (-1, 1).
            dy: Vertical tent offset in (-1, 1).
            width: Image width in pixels.
            height: Image height in pixels.
            axes: The (cx, cy) pair from image_axes().

        Returns:
            A ray with unit direction.
        """
        cx, cy = axes
        u = ((sx + 0.5 + dx) / 2.0 + x) / width - 0.5
        v = ((sy + 0.5 + dy) / 2.0 + (height - y - 1)) / height - 0.5
        d = (cx * u + cy * v + self._unit_direction).normalized()
        return Ray(self.position + d * self.near_offset, d)
