"""
Pure-Python 3-D vector primitive.

All coordinates in mm, Z up.  ``normalize()`` never raises: a zero-length
vector normalizes to a NaN vector, and callers check the result with
``is_well_defined()`` before using it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

_NAN = float("nan")


@dataclass(frozen=True)
class Vec3:
    """An immutable point or direction in 3-D space."""

    x: float
    y: float
    z: float

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vec3:
        """Unit vector in the same direction (NaN vector if zero-length)."""
        mag = self.length
        if mag == 0.0 or not math.isfinite(mag):
            return Vec3(_NAN, _NAN, _NAN)
        return Vec3(self.x / mag, self.y / mag, self.z / mag)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def is_well_defined(self) -> bool:
        """True when every component is a finite number."""
        return (math.isfinite(self.x)
                and math.isfinite(self.y)
                and math.isfinite(self.z))


UP = Vec3(0.0, 0.0, 1.0)
X_AXIS = Vec3(1.0, 0.0, 0.0)


def angle_between(a: Vec3, b: Vec3) -> float | None:
    """Angle in radians between two unit vectors.

    Returns ``None`` when the dot product is NaN or falls outside
    ``[-1, 1]`` (rounding on nearly parallel or opposite directions).
    """
    d = a.dot(b)
    if not -1.0 <= d <= 1.0:
        return None
    return math.acos(d)
