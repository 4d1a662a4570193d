"""Sphere primitive.

Intersection uses the geometric form of the ray-sphere quadratic for a unit
direction d and origin o:

    b = (center - o) . d
    discriminant = b^2 - |center - o|^2 + r^2
    t = b -/+ sqrt(discriminant)

The nearer root beyond HIT_EPSILON wins, which makes a ray leaving the
surface ignore the surface it starts on.

For explicit light sampling an emissive sphere is seen from the shading
point as a cone of directions; random_emission() samples that cone
uniformly by solid angle. A shading point inside the light sees it in every
direction, so the hemisphere around the receiver normal is sampled instead.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vector import ZERO, Vec3
    >>> from pathtracer.materials import Material
    >>> sphere = Sphere(Material.DIFFUSE, 100.0, Vec3(0.0, 0.0, 200.0), ZERO, ZERO)
    >>> sphere.intersect(Ray(ZERO, Vec3(0.0, 0.0, 1.0)))
    100.0
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Ray, orthonormal_basis
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import Vec3
from pathtracer.geometry.renderable import HIT_EPSILON, Hit, Renderable
from pathtracer.materials.lambertian import sample_diffuse_direction
from pathtracer.materials.material import Material


class Sphere(Renderable):
    """A sphere defined by center point and radius.

    Attributes:
        material: Surface material tag.
        radius: The radius of the sphere (positive float).
        radius_squared: Cached radius * radius.
        center: The center point of the sphere.
        emission: Emitted radiance, zero for non-lights.
        colour: Albedo per channel, each in [0, 1].
    """

    __slots__ = (
        "material",
        "radius",
        "radius_squared",
        "center",
        "emission",
        "colour",
        "_emissive",
        "_identity",
    )

    def __init__(
        self,
        material: Material,
        radius: float,
        center: Vec3,
        emission: Vec3,
        colour: Vec3,
    ) -> None:
        """Create a sphere.

        Raises:
            ValueError: If the radius is not positive, a colour component is
                outside [0, 1] or an emission component is negative.
        """
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        for i, component in enumerate(colour):
            if component < 0.0 or component > 1.0:
                raise ValueError(
                    f"Colour component {i} = {component} is outside [0, 1]. "
                    "This would violate energy conservation."
                )
        for i, component in enumerate(emission):
            if component < 0.0:
                raise ValueError(f"Emission component {i} = {component} is negative.")
        self.material = Material(material)
        self.radius = float(radius)
        self.radius_squared = self.radius * self.radius
        self.center = Vec3(*(float(c) for c in center))
        self.emission = Vec3(*(float(c) for c in emission))
        self.colour = Vec3(*(float(c) for c in colour))
        super().__init__()

    def intersect(self, ray: Ray) -> float | None:
        op = self.center - ray.origin
        b = op.dot(ray.direction)
        discriminant = b * b - op.dot(op) + self.radius_squared
        if discriminant < 0.0:
            return None
        root = math.sqrt(discriminant)
        t = b - root
        if t > HIT_EPSILON:
            return t
        t = b + root
        if t > HIT_EPSILON:
            return t
        return None

    def get_hit(self, ray: Ray, distance: float) -> Hit:
        position = ray.at(distance)
        normal = (position - self.center) / self.radius
        return Hit(
            distance=distance,
            position=position,
            normal=normal,
            material=self.material,
            emission=self.emission,
            colour=self.colour,
        )

    def random_emission(
        self, origin: Vec3, normal: Vec3, rng: SampleGenerator
    ) -> tuple[Vec3, Vec3] | None:
        """Sample the cone the sphere subtends from ``origin``.

        The returned contribution is
        emission * max(0, direction . normal) * omega / pi, where
        omega = 2 * pi * (1 - cos_a_max) is the solid angle of the cone (the
        reciprocal of the uniform pdf) and 1 / pi is the Lambertian BRDF
        without the receiver's colour, which the caller applies.

        When ``origin`` is inside or on the sphere the light surrounds it and
        there is no cone. A cosine-weighted direction around ``normal`` is
        drawn instead; its pdf cos / pi cancels the Lambertian cos / pi, so the
        contribution is the emission itself.

        Returns:
            (direction, contribution).
        """
        to_center = self.center - origin
        dist_squared = to_center.dot(to_center)
        if dist_squared <= self.radius_squared:
            return sample_diffuse_direction(normal, rng), self.emission

        u, v, w = orthonormal_basis(to_center.normalized())
        cos_a_max = math.sqrt(1.0 - self.radius_squared / dist_squared)
        eps1 = rng.next_float()
        eps2 = rng.next_float()
        cos_a = 1.0 - eps1 + eps1 * cos_a_max
        sin_a = math.sqrt(max(0.0, 1.0 - cos_a * cos_a))
        phi = 2.0 * math.pi * eps2
        direction = (
            u * (math.cos(phi) * sin_a) + v * (math.sin(phi) * sin_a) + w * cos_a
        ).normalized()

        omega = 2.0 * math.pi * (1.0 - cos_a_max)
        cosine = max(0.0, direction.dot(normal))
        return direction, self.emission * (cosine * omega / math.pi)

    def __repr__(self) -> str:
        return (
            f"Sphere(material={self.material.name}, radius={self.radius}, "
            f"center={tuple(self.center)}, emission={tuple(self.emission)}, "
            f"colour={tuple(self.colour)})"
        )
