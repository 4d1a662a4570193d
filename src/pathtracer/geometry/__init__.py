"""Geometry module for renderable primitives.

Components:
    renderable: The Renderable interface and the Hit record it produces
    sphere: Sphere primitive with ray-sphere intersection and cone sampling
        for explicit light sampling

Primitives are plain Python objects that are immutable once built, so one
scene can be shared by every render worker without locking.

Ray-object intersection follows the pattern:
    distance = primitive.intersect(ray)
    if distance is not None:
        hit = primitive.get_hit(ray, distance)
"""

from .renderable import HIT_EPSILON, Hit, Renderable
from .sphere import Sphere

__all__ = [
    "HIT_EPSILON",
    "Hit",
    "Renderable",
    "Sphere",
]
