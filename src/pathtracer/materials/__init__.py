"""Materials module for the three surface models of the renderer.

Components:
    material: The Material tag set
    lambertian: Ideal diffuse reflection (cosine-weighted hemisphere sampling)
    dielectric: Glass with Snell refraction and Schlick Fresnel reflectance

Specular (mirror) surfaces only need the reflection helper from
pathtracer.core.ray.
"""

from .dielectric import (
    GLASS_IOR,
    VACUUM_IOR,
    Refraction,
    refract,
    russian_roulette_weights,
)
from .lambertian import sample_diffuse_direction
from .material import Material

__all__ = [
    "Material",
    "GLASS_IOR",
    "VACUUM_IOR",
    "Refraction",
    "refract",
    "russian_roulette_weights",
    "sample_diffuse_direction",
]
