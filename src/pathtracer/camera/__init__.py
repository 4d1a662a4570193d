"""Camera module for primary ray generation.

Components:
    pinhole: Fixed-direction pinhole camera with a 2x2 sub-pixel grid

Ray generation uses pixel coordinates with (0, 0) at the top-left of the
image; sub-pixel positions are jittered with tent-filter offsets drawn by
the caller's sample generator.
"""

from .pinhole import DEFAULT_FOV_SCALE, PinholeCamera

__all__ = [
    "DEFAULT_FOV_SCALE",
    "PinholeCamera",
]
