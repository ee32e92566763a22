"""Game objects: asteroids, bullets, power-ups, the player and bounded pools."""

from __future__ import annotations

import math
import random
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Generic, TypeVar

from .geometry import Vec2, angle_between, random_in_range

POINTS_PER_ASTEROID = 150

POWER_UP_RADIUS = 80.0
POWER_UP_DURATION = 10.0

PLAYER_SHOOTING_RATE = 0.25
PLAYER_WIDTH = 48.0
PLAYER_HEIGHT = 64.0

BULLET_RADIUS = 10.0
ASTEROID_VERTEX_COUNT = 12
ASTEROID_MAX_SCALE = 128.0

ASTEROID_CAPACITY = 128
BULLET_CAPACITY = 128
POWER_UP_CAPACITY = 4

T = TypeVar("T")


class PowerUpType(IntEnum):
    BOUNCEY_BULLETS = 0
    INVINCIBILITY = 1
    SHOTGUN = 2
    MACHINE_GUN = 3


def _closed_edges(points: list[Vec2]) -> Iterator[tuple[Vec2, Vec2]]:
    return zip(points, points[1:] + points[:1])


@dataclass
class Asteroid:
    """A rotating polygon; generation 0 is large, 1 medium, 2 small."""

    position: Vec2
    velocity: Vec2
    angular_velocity: float = 0.0
    generation: int = 0
    vertices: list[Vec2] = field(default_factory=list)

    def world_vertices(self) -> list[Vec2]:
        return [v + self.position for v in self.vertices]

    def edges(self) -> Iterator[tuple[Vec2, Vec2]]:
        """Yield each outline edge in world space, closing the polygon."""
        return _closed_edges(self.world_vertices())


@dataclass
class Bullet:
    prev_position: Vec2
    position: Vec2
    velocity: Vec2
    radius: float = BULLET_RADIUS


@dataclass
class PowerUp:
    type: PowerUpType
    position: Vec2
    time_spawned: float
    radius: float = 0.0
    lerp_prog: float = 0.0


@dataclass
class Player:
    """The ship: a four-point outline that turns to face the aim point."""

    position: Vec2
    reference_vertices: tuple[Vec2, ...]
    height: float = PLAYER_HEIGHT
    velocity: Vec2 = Vec2(0.0, 0.0)
    score: int = 0
    shooting_rate: float = PLAYER_SHOOTING_RATE
    shooting_timestamp: float = 0.0
    active_power_ups: set[PowerUpType] = field(default_factory=set)
    power_up_timestamps: dict[PowerUpType, float] = field(
        default_factory=lambda: {kind: 0.0 for kind in PowerUpType}
    )
    vertices: list[Vec2] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.vertices:
            self.vertices = list(self.reference_vertices)

    def has_power_up(self, kind: PowerUpType) -> bool:
        return kind in self.active_power_ups

    def world_vertices(self) -> list[Vec2]:
        return [v + self.position for v in self.vertices]

    def edges(self) -> Iterator[tuple[Vec2, Vec2]]:
        return _closed_edges(self.world_vertices())

    def aim_at(self, target: Vec2) -> None:
        """Turn the outline so the nose points towards ``target``."""
        angle = angle_between(Vec2(0.0, -1.0), target - self.position)
        self.vertices = [v.rotated(angle) for v in self.reference_vertices]


class BoundedBuffer(Generic[T]):
    """A fixed-capacity pool; removal swaps the last item into the hole."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._items: list[T] = []

    def push(self, item: T) -> bool:
        """Append ``item``; return False and drop it when the pool is full."""
        if len(self._items) >= self.capacity:
            return False
        self._items.append(item)
        return True

    def remove(self, index: int) -> T:
        """Remove the item at ``index`` by moving the last item into its place."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"index {index} out of range for {len(self._items)} items")
        items = self._items
        items[index], items[-1] = items[-1], items[index]
        return items.pop()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def clear(self) -> None:
        self._items.clear()


def create_asteroid(
    rng: random.Random, position: Vec2, velocity: Vec2, scale: float, generation: int
) -> Asteroid:
    """Build an asteroid with a jagged outline of random radii around ``scale``."""
    step = 2.0 * math.pi / ASTEROID_VERTEX_COUNT
    variance = random_in_range(rng, 0.75, 1.5)
    vertices = []
    for i in range(ASTEROID_VERTEX_COUNT):
        angle = (i + 1) * step
        size = scale * random_in_range(rng, 0.4 * variance, variance)
        vertices.append(Vec2(math.cos(angle), math.sin(angle)).normalized().scale(size))
    return Asteroid(
        position=position,
        velocity=velocity,
        angular_velocity=random_in_range(rng, -2.0, 2.0),
        generation=generation,
        vertices=vertices,
    )


def create_random_power_up(rng: random.Random, position: Vec2, now: float) -> PowerUp:
    kind = PowerUpType(rng.randint(0, len(PowerUpType) - 1))
    return PowerUp(type=kind, position=position, time_spawned=now)


def create_player(position: Vec2, now: float) -> Player:
    """A fresh ship at ``position`` that may fire immediately after the shot delay."""
    w, h = PLAYER_WIDTH, PLAYER_HEIGHT
    reference = (
        Vec2(0.0, -h / 2.0),
        Vec2(w / 2.0, h / 2.0),
        Vec2(0.0, h / 8.0),
        Vec2(-w / 2.0, h / 2.0),
    )
    return Player(
        position=position,
        reference_vertices=reference,
        height=h,
        shooting_timestamp=now,
    )