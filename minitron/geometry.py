"""Small vector and rectangle types and an AABB overlap test."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __abs__(self) -> Vec2:
        return Vec2(abs(self.x), abs(self.y))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Return the unit vector; the zero vector normalizes to zero."""
        length = self.length()
        if length == 0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / length, self.y / length)

    def distance_to(self, other: Vec2) -> float:
        return (self - other).length()

    def reflect(self, normal: Vec2) -> Vec2:
        """Reflect this direction about the surface ``normal``."""
        return self - normal * (2.0 * normal.dot(self))


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def xy(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_position(cls, position: Vec2, width: float, height: float) -> Rect:
        return cls(position.x, position.y, width, height)

    def center(self) -> Vec2:
        return Vec2(self.x + self.width * 0.5, self.y + self.height * 0.5)


def check_aabb_collision(a: Rect, b: Rect) -> bool:
    """Broad-phase overlap test between two rectangles.

    The second condition compares against ``b.width`` rather than b's right
    edge; callers follow up with an exact overlap computation.
    """
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.width
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )