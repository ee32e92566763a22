"""2D vector maths, collision tests and random helpers used by the game."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

EPSILON = 1e-6


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def scale(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Return the unit vector in this direction; the zero vector stays zero."""
        size = self.length()
        if size == 0.0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / size, self.y / size)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def distance(self, other: Vec2) -> float:
        return (self - other).length()

    def rotated(self, angle: float) -> Vec2:
        """Rotate counter-clockwise (in a y-up frame) by ``angle`` radians."""
        c, s = math.cos(angle), math.sin(angle)
        return Vec2(c * self.x - s * self.y, s * self.x + c * self.y)

    def reflect(self, normal: Vec2) -> Vec2:
        """Reflect this vector about the plane with the given unit normal."""
        d = self.dot(normal)
        return Vec2(self.x - 2.0 * normal.x * d, self.y - 2.0 * normal.y * d)

    def clamp(self, low: Vec2, high: Vec2) -> Vec2:
        return Vec2(clamp(self.x, low.x, high.x), clamp(self.y, low.y, high.y))


def angle_between(v1: Vec2, v2: Vec2) -> float:
    """Signed angle in radians that rotates ``v1`` onto ``v2``."""
    dot = v1.x * v2.x + v1.y * v2.y
    det = v1.x * v2.y - v1.y * v2.x
    return math.atan2(det, dot)


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def lerp(start: float, end: float, amount: float) -> float:
    return start + amount * (end - start)


def smooth_step(edge0: float, edge1: float, x: float) -> float:
    """Hermite interpolation between 0 and 1 as ``x`` goes from edge0 to edge1."""
    t = clamp((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def segment_intersection(p0: Vec2, p1: Vec2, q0: Vec2, q1: Vec2) -> Vec2 | None:
    """Return the point where segments p0-p1 and q0-q1 cross, or None."""
    r = p1 - p0
    s = q1 - q0
    denom = r.x * s.y - r.y * s.x
    if abs(denom) < EPSILON:
        return None
    diff = q0 - p0
    t = (diff.x * s.y - diff.y * s.x) / denom
    u = (diff.x * r.y - diff.y * r.x) / denom
    if -EPSILON <= t <= 1.0 + EPSILON and -EPSILON <= u <= 1.0 + EPSILON:
        return p0 + r.scale(t)
    return None


def circle_touches_segment(center: Vec2, radius: float, p0: Vec2, p1: Vec2) -> bool:
    """True when the circle overlaps the segment p0-p1."""
    seg = p1 - p0
    if abs(seg.x) + abs(seg.y) <= EPSILON:
        return center.distance(p0) <= radius
    t = clamp((center - p0).dot(seg) / seg.dot(seg), 0.0, 1.0)
    closest = p0 + seg.scale(t)
    return center.distance(closest) <= radius


def left_normal(p0: Vec2, p1: Vec2) -> Vec2:
    """Unit normal of the segment p0-p1: the tangent rotated a quarter turn."""
    tangent = p1 - p0
    return Vec2(-tangent.y, tangent.x).normalized()


def random_unit_float(rng: random.Random) -> float:
    """A random float in [0, 1]."""
    return rng.random()


def random_in_range(rng: random.Random, low: float, high: float) -> float:
    return low + (high - low) * random_unit_float(rng)


def random_on_circle(rng: random.Random, scale: float) -> Vec2:
    """A vector of length ``scale`` pointing in a random direction."""
    x = random_unit_float(rng) * 2.0 - 1.0
    y = random_unit_float(rng) * 2.0 - 1.0
    return Vec2(x, y).normalized().scale(scale)