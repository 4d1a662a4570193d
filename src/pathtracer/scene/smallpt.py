"""The smallpt demo room.

A closed room built from nine spheres: four huge spheres form the side,
back and front walls, two more form the floor and ceiling, a mirror sphere
and a glass sphere stand on the floor, and a large emissive sphere sunk
into the ceiling acts as the light.

The coordinate system has the room spanning roughly x in [1, 99],
y in [0, 81.6] and z in [0, 170], with the camera outside the front wall
looking toward -Z; each primary ray starts 140 units along its direction,
which puts it inside the room.

Example:
    >>> from pathtracer.scene.smallpt import create_smallpt_scene
    >>> scene, camera = create_smallpt_scene()
    >>> len(scene)
    9
"""

from dataclasses import dataclass

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.core.vector import Vec3
from pathtracer.materials.material import Material
from pathtracer.scene.scene import Scene

# =============================================================================
# Room Constants
# =============================================================================

# Radius of the spheres standing in for walls
WALL_RADIUS = 1e5

BLACK = (0.0, 0.0, 0.0)
RED = (0.75, 0.25, 0.25)
BLUE = (0.25, 0.25, 0.75)
GREY = (0.75, 0.75, 0.75)
WHITE = (0.999, 0.999, 0.999)

CAMERA_POSITION = Vec3(50.0, 52.0, 295.6)
CAMERA_DIRECTION = Vec3(0.0, -0.042612, -1.0)


@dataclass
class SmallptParams:
    """Parameters for customizing the demo room.

    Attributes:
        light_emission: Emitted radiance of the ceiling light.
        light_radius: Radius of the ceiling light sphere.
        left_wall_color: Albedo of the left wall.
        right_wall_color: Albedo of the right wall.
    """

    light_emission: tuple[float, float, float] = (12.0, 12.0, 12.0)
    light_radius: float = 600.0
    left_wall_color: tuple[float, float, float] = RED
    right_wall_color: tuple[float, float, float] = BLUE


def create_smallpt_scene(params: SmallptParams | None = None) -> tuple[Scene, PinholeCamera]:
    """Create the frozen demo room and its camera.

    Args:
        params: Optional SmallptParams; defaults reproduce the classic room.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    if params is None:
        params = SmallptParams()

    scene = Scene()
    r = WALL_RADIUS

    # Walls: left, right, back, front
    scene.add_sphere(Material.DIFFUSE, r, (r + 1.0, 40.8, 81.6), BLACK, params.left_wall_color)
    scene.add_sphere(Material.DIFFUSE, r, (-r + 99.0, 40.8, 81.6), BLACK, params.right_wall_color)
    scene.add_sphere(Material.DIFFUSE, r, (50.0, 40.8, r), BLACK, GREY)
    scene.add_sphere(Material.DIFFUSE, r, (50.0, 40.8, -r + 170.0), BLACK, BLACK)

    # Floor and ceiling
    scene.add_sphere(Material.DIFFUSE, r, (50.0, r, 81.6), BLACK, GREY)
    scene.add_sphere(Material.DIFFUSE, r, (50.0, -r + 81.6, 81.6), BLACK, GREY)

    # Mirror and glass balls
    scene.add_sphere(Material.SPECULAR, 16.5, (27.0, 16.5, 47.0), BLACK, WHITE)
    scene.add_sphere(Material.REFRACTIVE, 16.5, (73.0, 16.5, 78.0), BLACK, WHITE)

    # Light, mostly hidden above the ceiling
    light_y = 81.6 + params.light_radius - 0.27
    scene.add_sphere(
        Material.DIFFUSE,
        params.light_radius,
        (50.0, light_y, 81.6),
        params.light_emission,
        BLACK,
    )

    camera = PinholeCamera(CAMERA_POSITION, CAMERA_DIRECTION)
    return scene.freeze(), camera
