"""Path tracing integrator for Monte Carlo light transport.

This module implements the recursive radiance estimator: material-based
scattering, explicit light sampling at diffuse surfaces, Russian roulette
termination and the two-branch / one-branch handling of glass.

Key features:
    - Material dispatch (Diffuse, Specular, Refractive)
    - Next-event estimation at diffuse bounces, with the emission of the
      next hit suppressed so direct light is not counted twice
    - Russian roulette on the surface colour after MIN_BOUNCES_BEFORE_RR
      bounces, hard-capped at MAX_DEPTH
    - Deterministic reflection + transmission split for the first glass
      bounces, stochastic branch selection deeper in the path

Each bounce is one nested call. MAX_DEPTH keeps the recursion well below the
interpreter's default limit of 1000 frames.

Example:
    >>> from pathtracer.core.integrator import radiance
    >>> from pathtracer.core.sampler import SampleGenerator
    >>> from pathtracer.scene.smallpt import create_smallpt_scene
    >>>
    >>> scene, camera = create_smallpt_scene()
    >>> rng = SampleGenerator.for_row(seed=1, row=0)
    >>> ray = camera.primary_ray(32, 24, 0, 0, 0.0, 0.0, 64, 48, camera.image_axes(64, 48))
    >>> colour = radiance(scene, ray, 0, rng)
"""

from __future__ import annotations

from pathtracer.core.ray import Ray, reflect
from pathtracer.core.sampler import SampleGenerator
from pathtracer.core.vector import ZERO, Vec3
from pathtracer.materials.dielectric import refract, russian_roulette_weights
from pathtracer.materials.lambertian import sample_diffuse_direction
from pathtracer.materials.material import Material
from pathtracer.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Bounces that always continue before Russian roulette applies
MIN_BOUNCES_BEFORE_RR = 5

# Hard cutoff on path length
MAX_DEPTH = 500

# Glass bounces up to this depth trace both reflection and transmission
SPLIT_GLASS_DEPTH = 2


def radiance(
    scene: Scene,
    ray: Ray,
    depth: int,
    rng: SampleGenerator,
    include_emission: bool = True,
) -> Vec3:
    """Estimate the radiance arriving along a ray.

    Args:
        scene: The frozen scene to trace against.
        ray: The ray to follow; its direction must be unit length.
        depth: Number of bounces already taken (0 for camera rays).
        rng: The worker's sample generator.
        include_emission: Whether the emission of the surface this ray hits
            counts. True for camera rays and after mirror or glass bounces,
            False after a diffuse bounce whose direct light was already
            sampled explicitly.

    Returns:
        The estimated radiance (RGB).
    """
    hit = scene.intersect(ray)
    if hit is None:
        return ZERO

    normal = hit.normal
    oriented = normal if normal.dot(ray.direction) < 0.0 else -normal
    emission = hit.emission if include_emission else ZERO
    colour = hit.colour

    depth += 1
    if depth > MIN_BOUNCES_BEFORE_RR:
        survival = colour.max_component()
        if rng.next_float() < survival and depth < MAX_DEPTH:
            colour = colour * (1.0 / survival)
        else:
            return emission

    position = hit.position
    material = hit.material

    if material == Material.DIFFUSE:
        direction = sample_diffuse_direction(oriented, rng)
        emission = emission + colour * scene.sample_lights(position, oriented, rng)
        return emission + colour * radiance(scene, Ray(position, direction), depth, rng, False)

    reflected_ray = Ray(position, reflect(ray.direction, normal))

    if material == Material.SPECULAR:
        return emission + colour * radiance(scene, reflected_ray, depth, rng)

    # Refractive
    refraction = refract(ray.direction, normal, oriented)
    if refraction is None:
        # Total internal reflection
        return emission + colour * radiance(scene, reflected_ray, depth, rng)

    transmitted_ray = Ray(position, refraction.direction)
    re = refraction.reflectance
    if depth > SPLIT_GLASS_DEPTH:
        p, reflect_weight, transmit_weight = russian_roulette_weights(re)
        if rng.next_float() < p:
            incoming = radiance(scene, reflected_ray, depth, rng) * reflect_weight
        else:
            incoming = radiance(scene, transmitted_ray, depth, rng) * transmit_weight
    else:
        incoming = (
            radiance(scene, reflected_ray, depth, rng) * re
            + radiance(scene, transmitted_ray, depth, rng) * (1.0 - re)
        )
    return emission + colour * incoming
