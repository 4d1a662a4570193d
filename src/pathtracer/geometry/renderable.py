"""Interface shared by every primitive the scene can hold.

A Renderable owns its geometry, its material tag, an emitted radiance and an
albedo colour. The scene and the integrator only talk to primitives through
this interface, so new shapes can be added by subclassing Renderable.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass

from pathtracer.core.ray import Ray
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import Vec3
from pathtracer.materials.material import Material

# Minimum hit distance, avoids re-hitting the surface a ray was spawned from
HIT_EPSILON = 1e-4

# Process-wide source of primitive identities
_identities = itertools.count(1)


def next_identity() -> int:
    """Return an integer no other primitive created in this process has."""
    return next(_identities)


@dataclass
class Hit:
    """Record of a ray-primitive intersection.

    Only lives for one shading evaluation.

    Attributes:
        distance: Parameter along the ray where the intersection occurred.
        position: The world-space hit point.
        normal: Unit surface normal, always pointing out of the primitive.
        material: Material tag of the primitive hit.
        emission: Emitted radiance of the primitive hit.
        colour: Albedo of the primitive hit.
    """

    distance: float
    position: Vec3
    normal: Vec3
    material: Material
    emission: Vec3
    colour: Vec3


class Renderable(ABC):
    """Abstract base class for primitives.

    Subclasses must set ``material``, ``emission`` and ``colour`` and call
    ``super().__init__()`` so the emissive flag and identity are assigned.
    """

    material: Material
    emission: Vec3
    colour: Vec3

    def __init__(self) -> None:
        self._emissive = self.emission.max_component() > 0.0
        self._identity = next_identity()

    @property
    def is_emissive(self) -> bool:
        """True when any emission channel is positive (cached at construction)."""
        return self._emissive

    def identity(self) -> int:
        """Stable handle unique to this instance for its whole lifetime."""
        return self._identity

    @abstractmethod
    def intersect(self, ray: Ray) -> float | None:
        """Return the nearest hit distance beyond HIT_EPSILON, or None."""

    @abstractmethod
    def get_hit(self, ray: Ray, distance: float) -> Hit:
        """Build the hit record for an intersection found by intersect()."""

    @abstractmethod
    def random_emission(
        self, origin: Vec3, normal: Vec3, rng: SampleGenerator
    ) -> tuple[Vec3, Vec3] | None:
        """Sample a direction toward this primitive for explicit light sampling.

        Args:
            origin: The shading point.
            normal: Unit normal at the shading point, facing the incoming ray.
            rng: The worker's sample generator.

        Returns:
            Tuple (direction, contribution) where the contribution already
            has the sampling pdf divided out and the receiver cosine applied,
            or None when no direction can be sampled from ``origin``.
        """
