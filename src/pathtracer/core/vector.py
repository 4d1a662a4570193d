"""Three-component vector type used for positions, directions and colours.

Vec3 is an immutable value type built on a named tuple, so instances are
hashable, cheap to create and safe to share between worker threads. The
arithmetic operators are overridden to act component-wise instead of as
tuple concatenation/repetition.

Example:
    >>> from pathtracer.core.vector import Vec3
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.0, 1.0, 0.0)
    >>> a + b
    Vec3(x=1.0, y=3.0, z=3.0)
    >>> a.cross(b)
    Vec3(x=-3.0, y=0.0, z=1.0)
"""

from __future__ import annotations

import math
from typing import NamedTuple


def _clamp01(value: float) -> float:
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


class Vec3(NamedTuple):
    """An immutable 3D vector of float64 components.

    Multiplication and division accept either another Vec3 (component-wise)
    or a scalar. Normalizing a zero vector is a caller error and raises
    ZeroDivisionError rather than being guarded.

    Attributes:
        x: First component (red channel for colours).
        y: Second component (green channel for colours).
        z: Third component (blue channel for colours).
    """

    x: float
    y: float
    z: float

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:  # type: ignore[override]
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:  # type: ignore[override]
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:  # type: ignore[override]
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        recip = 1.0 / other
        return Vec3(self.x * recip, self.y * recip, self.z * recip)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def dot(self, other: Vec3) -> float:
        """Dot product of two vectors."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Cross product self x other."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vec3:
        """Return the unit vector in the same direction.

        Divides by sqrt(dot(self, self)). The input must not be the zero
        vector.
        """
        return self / math.sqrt(self.dot(self))

    # -------------------------------------------------------------------------
    # Component-wise helpers
    # -------------------------------------------------------------------------

    def min(self, other: Vec3) -> Vec3:
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def max(self, other: Vec3) -> Vec3:
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def abs(self) -> Vec3:
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def clamp(self) -> Vec3:
        """Clamp every component to [0, 1]."""
        return Vec3(_clamp01(self.x), _clamp01(self.y), _clamp01(self.z))

    def max_component(self) -> float:
        """Largest component value (used as the Russian roulette probability)."""
        return max(self.x, self.y, self.z)

    def max_axis(self) -> int:
        """Index (0, 1 or 2) of the largest component; first one wins ties."""
        value = self.max_component()
        return 0 if self.x == value else 1 if self.y == value else 2

    def min_component(self) -> float:
        return min(self.x, self.y, self.z)

    def min_axis(self) -> int:
        """Index (0, 1 or 2) of the smallest component; first one wins ties."""
        value = self.min_component()
        return 0 if self.x == value else 1 if self.y == value else 2

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> Vec3:
        return ZERO

    @classmethod
    def one(cls) -> Vec3:
        return ONE

    @classmethod
    def full(cls, value: float) -> Vec3:
        return cls(value, value, value)


ZERO = Vec3(0.0, 0.0, 0.0)
ONE = Vec3(1.0, 1.0, 1.0)
X_AXIS = Vec3(1.0, 0.0, 0.0)
Y_AXIS = Vec3(0.0, 1.0, 0.0)
Z_AXIS = Vec3(0.0, 0.0, 1.0)
