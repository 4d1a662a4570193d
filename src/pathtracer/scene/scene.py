"""Scene container with nearest-hit and visibility queries.

The scene owns its primitives and addresses them by a stable integer index
(the order they were added in). Shadow tests compare indices: a visibility
ray "sees" a light only when the nearest primitive it hits is that same
light.

A scene is built once and then frozen before rendering. After freezing,
nothing in it changes, which is what allows every render worker to share
one scene without locks.

Example:
    >>> from pathtracer.core.vector import ZERO, Vec3
    >>> from pathtracer.materials import Material
    >>> scene = Scene()
    >>> scene.add_sphere(Material.DIFFUSE, 1.0, Vec3(0.0, 0.0, -3.0), ZERO, Vec3(0.5, 0.5, 0.5))
    0
    >>> scene.freeze()
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator

from pathtracer.core.ray import Ray
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import ZERO, Vec3
from pathtracer.geometry.renderable import Hit, Renderable
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import Material

logger = logging.getLogger(__name__)


class Scene:
    """An ordered collection of renderable primitives.

    Attributes:
        frozen: True once freeze() was called; the scene is then read-only.
    """

    def __init__(self) -> None:
        """Initialize an empty, mutable scene."""
        self._objects: list[Renderable] = []
        self._identities: set[int] = set()
        self._emissive: list[int] = []
        self.frozen = False

    # =========================================================================
    # Construction
    # =========================================================================

    def add(self, primitive: Renderable) -> int:
        """Add a primitive to the scene.

        Args:
            primitive: The primitive; the scene takes ownership of it.

        Returns:
            The index of the primitive in the scene.

        Raises:
            RuntimeError: If the scene is frozen.
            ValueError: If the primitive was already added.
        """
        if self.frozen:
            raise RuntimeError("Cannot add primitives to a frozen scene")
        if primitive.identity() in self._identities:
            raise ValueError(f"Primitive {primitive!r} is already in the scene")

        index = len(self._objects)
        self._objects.append(primitive)
        self._identities.add(primitive.identity())
        if primitive.is_emissive:
            self._emissive.append(index)
        return index

    def add_sphere(
        self,
        material: Material,
        radius: float,
        center: tuple[float, float, float],
        emission: tuple[float, float, float],
        colour: tuple[float, float, float],
    ) -> int:
        """Create a sphere and add it to the scene.

        Returns:
            The index of the new sphere.
        """
        return self.add(Sphere(material, radius, Vec3(*center), Vec3(*emission), Vec3(*colour)))

    def freeze(self) -> Scene:
        """Make the scene read-only and return it."""
        if not self.frozen:
            self.frozen = True
            logger.debug(
                "Scene frozen with %d primitives (%d emissive)",
                len(self._objects),
                len(self._emissive),
            )
        return self

    # =========================================================================
    # Access
    # =========================================================================

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Renderable]:
        return iter(self._objects)

    def __getitem__(self, index: int) -> Renderable:
        return self._objects[index]

    @property
    def emissive_indices(self) -> tuple[int, ...]:
        """Indices of every emissive primitive, in scene order."""
        return tuple(self._emissive)

    # =========================================================================
    # Queries
    # =========================================================================

    def nearest(self, ray: Ray) -> tuple[int, float] | None:
        """Find the nearest primitive along a ray.

        Equal distances keep the primitive that comes first in scene order.

        Returns:
            Tuple (index, distance), or None if nothing is hit.
        """
        hit_dist = math.inf
        hit_index = -1
        for index, obj in enumerate(self._objects):
            dist = obj.intersect(ray)
            if dist is not None and dist < hit_dist:
                hit_dist = dist
                hit_index = index
        if hit_index < 0:
            return None
        return hit_index, hit_dist

    def intersect(self, ray: Ray) -> Hit | None:
        """Return the hit record of the nearest primitive, or None on a miss."""
        found = self.nearest(ray)
        if found is None:
            return None
        index, dist = found
        return self._objects[index].get_hit(ray, dist)

    def shadow_cast(self, ray: Ray, light_index: int) -> bool:
        """Test whether a light is visible along a ray.

        Args:
            ray: Visibility ray leaving the shading point.
            light_index: Scene index of the light that was sampled.

        Returns:
            True only when the nearest primitive the ray hits is the light
            itself, i.e. the light is not occluded.
        """
        found = self.nearest(ray)
        return found is not None and found[0] == light_index

    def sample_lights(self, origin: Vec3, normal: Vec3, rng: SampleGenerator) -> Vec3:
        """Estimate direct lighting at a shading point.

        Draws one direction toward every emissive primitive, casts one
        visibility ray per light and sums the contributions of the lights
        that are visible.

        Args:
            origin: The shading point.
            normal: Unit normal at the shading point, facing the incoming ray.
            rng: The worker's sample generator.

        Returns:
            The summed direct-lighting estimate (before the surface colour).
        """
        emission = ZERO
        for index in self._emissive:
            sample = self._objects[index].random_emission(origin, normal, rng)
            if sample is None:
                continue
            direction, contribution = sample
            if self.shadow_cast(Ray(origin, direction), index):
                emission = emission + contribution
        return emission

    def __repr__(self) -> str:
        return f"Scene(primitives={len(self._objects)}, frozen={self.frozen})"
