"""CPU Monte Carlo path tracer for sphere scenes.

This package renders physically based images of scenes made of spheres with
diffuse, mirror and glass surfaces, with support for:
- Path tracing with next event estimation towards spherical lights
- Russian roulette path termination
- Deterministic, seed-reproducible rendering on a thread or process pool
- Partial renders that can be merged into one image

Subpackages:
    core: Vectors, rays, sampling, integrator, scheduler and accumulation
    geometry: Sphere primitive and the renderable interface
    materials: Diffuse, specular and refractive surface models
    scene: Scene container and the built-in smallpt scene
    camera: Pinhole camera with ray generation
    output: PNG export and the partial render format
"""

__version__ = "0.1.0"
