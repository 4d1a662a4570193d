"""Scene module for scene management and ray-scene queries.

Components:
    scene: Scene container with nearest-hit, shadow and light-sampling queries
    smallpt: The nine-sphere demo room and its camera

The scene is the only aggregate the integrator talks to. Its queries are
linear scans over the primitives in insertion order.
"""

from .scene import Scene
from .smallpt import SmallptParams, create_smallpt_scene

__all__ = [
    "Scene",
    "SmallptParams",
    "create_smallpt_scene",
]
