"""Dielectric (glass) material implementation.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when the refraction discriminant is negative

The integrator traces both the reflected and the transmitted branch near the
camera and picks one of them stochastically deeper in the path; the weights
for the stochastic choice come from russian_roulette_weights().

Example:
    >>> from pathtracer.core.vector import Vec3
    >>> normal = Vec3(0.0, 0.0, 1.0)
    >>> result = refract(Vec3(0.0, 0.0, -1.0), normal, normal)
    >>> round(result.reflectance, 4)
    0.04
"""

from __future__ import annotations

import math
from typing import NamedTuple

from pathtracer.core.vector import Vec3

# Index of refraction outside any object
VACUUM_IOR = 1.0

# Index of refraction of every refractive primitive
GLASS_IOR = 1.5


class Refraction(NamedTuple):
    """Result of refracting a direction through a dielectric boundary.

    Attributes:
        direction: The transmitted unit direction.
        reflectance: Fresnel reflectance R in [0, 1]; 1 - R is transmitted.
        entering: True when the ray passes from vacuum into glass.
    """

    direction: Vec3
    reflectance: float
    entering: bool


def refract(direction: Vec3, normal: Vec3, oriented_normal: Vec3) -> Refraction | None:
    """Refract a direction at a glass surface.

    Args:
        direction: Incoming unit direction.
        normal: Geometric (outward) unit normal at the hit.
        oriented_normal: The normal flipped to face against the incoming ray.

    Returns:
        The transmitted direction with its Fresnel reflectance, or None on
        total internal reflection.
    """
    entering = normal.dot(oriented_normal) > 0.0
    eta = VACUUM_IOR / GLASS_IOR if entering else GLASS_IOR / VACUUM_IOR
    ddn = direction.dot(oriented_normal)
    cos2t = 1.0 - eta * eta * (1.0 - ddn * ddn)
    if cos2t < 0.0:
        return None

    tbd = ddn * eta + math.sqrt(cos2t)
    if not entering:
        tbd = -tbd
    transmitted = (direction * eta - normal * tbd).normalized()

    # Schlick: R0 + (1 - R0)(1 - cos)^5 with the cosine on the vacuum side
    a = GLASS_IOR - VACUUM_IOR
    b = GLASS_IOR + VACUUM_IOR
    r0 = (a * a) / (b * b)
    c = 1.0 - (-ddn if entering else transmitted.dot(normal))
    reflectance = r0 + (1.0 - r0) * c * c * c * c * c
    return Refraction(transmitted, reflectance, entering)


def russian_roulette_weights(reflectance: float) -> tuple[float, float, float]:
    """Probability and weights for choosing a single glass branch.

    Reflection is chosen with probability p = 0.25 + 0.5 * R so that neither
    branch is starved; the chosen branch is weighted by R / p or
    (1 - R) / (1 - p) to keep the estimate unbiased.

    Args:
        reflectance: Fresnel reflectance R.

    Returns:
        Tuple (p, reflect_weight, transmit_weight).
    """
    p = 0.25 + 0.5 * reflectance
    return p, reflectance / p, (1.0 - reflectance) / (1.0 - p)
