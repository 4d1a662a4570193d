"""Core rendering module.

This module contains the fundamental building blocks for path tracing:

Components:
    vector: Immutable 3-component vector used for points, directions and colours
    ray: Ray data structure, reflection and orthonormal bases
    sampler: Deterministic per-row random number generation
    buffer: Accumulation of radiance sums and sample counts
    integrator: Recursive radiance estimator (path tracing with light sampling)
    scheduler: Row work units on a thread or process pool
    progressive: Batch-by-batch accumulation for interactive use

The core module handles the rendering equation integration, implementing
Monte Carlo path tracing with Russian roulette termination, next event
estimation towards sphere lights, and 2x2 sub-pixel anti-aliasing.
"""

from .buffer import AccumulationBuffer
from .ray import Ray, orthonormal_basis, reflect
from .sampler import BLOCK_SIZE, ROW_SEED_SALT, SampleGenerator
from .vector import ONE, X_AXIS, Y_AXIS, Z_AXIS, ZERO, Vec3

# Note: integrator, scheduler and progressive are NOT imported here to avoid
# circular imports (they depend on scene and camera, which depend on core).
#
# For rendering, use:
#   from pathtracer.core.scheduler import render_image
#   from pathtracer.core.progressive import ProgressiveRenderer

__all__ = [
    "Vec3",
    "ZERO",
    "ONE",
    "X_AXIS",
    "Y_AXIS",
    "Z_AXIS",
    "Ray",
    "reflect",
    "orthonormal_basis",
    "SampleGenerator",
    "ROW_SEED_SALT",
    "BLOCK_SIZE",
    "AccumulationBuffer",
]
