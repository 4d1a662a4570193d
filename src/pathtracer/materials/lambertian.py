"""Lambertian (ideal diffuse) material sampling.

Diffuse surfaces scatter light equally in all directions. Sampling the
outgoing direction proportionally to cos(theta) makes the BRDF * cos / pdf
weight collapse to the surface colour, so the integrator only multiplies
by the colour after a bounce.

Example:
    >>> from pathtracer.core.sampler import SampleGenerator
    >>> from pathtracer.core.vector import Vec3
    >>> rng = SampleGenerator.for_row(seed=1, row=0)
    >>> direction = sample_diffuse_direction(Vec3(0.0, 1.0, 0.0), rng)
    >>> direction.y > 0.0
    True
"""

from __future__ import annotations

import math

from pathtracer.core.ray import orthonormal_basis
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import Vec3


def sample_diffuse_direction(normal: Vec3, rng: SampleGenerator) -> Vec3:
    """Sample a cosine-weighted direction in the hemisphere around a normal.

    Two uniforms are drawn: r1 picks the azimuth over 2*pi and r2 the radius,
    with sqrt(r2) and sqrt(1 - r2) giving the cosine-weighted polar
    distribution.

    Args:
        normal: Unit normal facing the side the light arrives from.
        rng: The worker's sample generator.

    Returns:
        A unit direction with a non-negative dot product with the normal.
    """
    r1 = 2.0 * math.pi * rng.next_float()
    r2 = rng.next_float()
    r2s = math.sqrt(r2)
    u, v, w = orthonormal_basis(normal)
    direction = u * (math.cos(r1) * r2s) + v * (math.sin(r1) * r2s) + w * math.sqrt(1.0 - r2)
    return direction.normalized()
