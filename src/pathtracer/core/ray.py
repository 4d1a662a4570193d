"""Ray data structure and direction utilities.

This module provides the Ray value type together with the small pieces of
vector geometry shared by primitives and materials: mirror reflection and
the construction of an orthonormal basis around a direction.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vector import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))
    >>> ray.at(5.0)
    Vec3(x=0.0, y=0.0, z=5.0)
"""

from __future__ import annotations

from typing import NamedTuple

from pathtracer.core.vector import X_AXIS, Y_AXIS, Vec3


class Ray(NamedTuple):
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Expected to be unit length for
            intersection distances to be meaningful, but this is not
            enforced; callers normalize before continuing a path.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Compute the point origin + t * direction."""
        return self.origin + self.direction * t


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident direction about a unit normal: d - 2(n.d)n."""
    return incident - normal * (2.0 * normal.dot(incident))


def orthonormal_basis(w: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis (u, v, w) around a unit vector w.

    The helper axis is the y axis unless w is nearly perpendicular to the
    x axis, in which case the x axis is used, so the helper is never close
    to parallel with w.

    Args:
        w: Unit vector that becomes the third basis axis.

    Returns:
        Tuple (u, v, w) of mutually orthogonal unit vectors.
    """
    helper = Y_AXIS if abs(w.x) > 0.1 else X_AXIS
    u = helper.cross(w).normalized()
    v = w.cross(u)
    return u, v, w
