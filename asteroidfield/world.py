"""Game state and the per-frame simulation: movement, shooting and collisions."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum, auto

from .entities import (
    ASTEROID_CAPACITY,
    ASTEROID_MAX_SCALE,
    BULLET_CAPACITY,
    BULLET_RADIUS,
    PLAYER_SHOOTING_RATE,
    POINTS_PER_ASTEROID,
    POWER_UP_CAPACITY,
    POWER_UP_DURATION,
    POWER_UP_RADIUS,
    Asteroid,
    BoundedBuffer,
    Bullet,
    Player,
    PowerUp,
    PowerUpType,
    create_asteroid,
    create_player,
    create_random_power_up,
)
from .geometry import (
    Vec2,
    circle_touches_segment,
    left_normal,
    lerp,
    random_in_range,
    random_on_circle,
    segment_intersection,
    smooth_step,
)

WORLD_WIDTH = 2560.0
WORLD_HEIGHT = 1440.0
INITIAL_ASTEROID_COUNT = 24
BULLET_SPEED = 900.0
PLAYER_ACCELERATION = 2.0
PLAYER_MAX_SPEED = 250.0
PLAYER_DRAG = 0.30
INVINCIBILITY_SHIELD_INSET = 16.0
POWER_UP_SPAWN_ODDS = 30
POWER_UP_SPAWN_PADDING = 50.0


class SoundName(Enum):
    SHOOT = auto()
    EXPLOSION = auto()
    WIN = auto()
    LOSE = auto()
    POWER_UP_SPAWNED = auto()
    POWER_UP_GAINED = auto()


@dataclass(frozen=True)
class Controls:
    """Player input for one frame; ``aim`` is in world coordinates."""

    aim: Vec2 = Vec2(0.0, 0.0)
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    fire: bool = False
    restart: bool = False

    def _direction(self) -> Vec2:
        x = (1.0 if self.right else 0.0) - (1.0 if self.left else 0.0)
        y = (1.0 if self.down else 0.0) - (1.0 if self.up else 0.0)
        return Vec2(x, y).normalized()


def move_asteroids(
    asteroids: BoundedBuffer[Asteroid], max_scale: float, world_max: Vec2, dt: float
) -> None:
    """Advance, wrap around the world edges and spin every asteroid."""
    for asteroid in asteroids:
        x = asteroid.position.x + asteroid.velocity.x * dt
        y = asteroid.position.y + asteroid.velocity.y * dt

        scale = max_scale / (1.0 + asteroid.generation)
        max_x_off = int(world_max.x + scale * 0.9)
        min_x_off = int(0.0 - scale * 0.9)
        max_y_off = int(world_max.y + scale * 0.9)
        min_y_off = int(0.0 - scale * 0.9)

        if x > max_x_off:
            x -= max_x_off + scale
        elif x < min_x_off:
            x += max_x_off + scale

        if y > max_y_off:
            y -= max_y_off + scale
        elif y < min_y_off:
            y += max_y_off + scale

        asteroid.position = Vec2(x, y)
        angle = asteroid.angular_velocity * dt
        asteroid.vertices = [v.rotated(angle) for v in asteroid.vertices]


def explode_asteroid(
    rng: random.Random, asteroids: BoundedBuffer[Asteroid], index: int, max_scale: float
) -> None:
    """Remove the asteroid at ``index``; unless it was the smallest, split it in two."""
    asteroid = asteroids.remove(index)
    generation = asteroid.generation
    if generation >= 2:
        return
    scale = max_scale / (2.0 * (generation + 1))
    split = asteroid.velocity.normalized().scale(scale * 0.5)
    asteroids.push(
        create_asteroid(rng, asteroid.position + split, asteroid.velocity, scale, generation + 1)
    )
    asteroids.push(
        create_asteroid(rng, asteroid.position - split, -asteroid.velocity, scale, generation + 1)
    )


def cull_bullets(bullets: BoundedBuffer[Bullet], world_min: Vec2, world_max: Vec2) -> None:
    """Drop bullets that have left the world rectangle."""
    i = 0
    while i < len(bullets):
        p = bullets[i].position
        if p.y > world_max.y or p.y < world_min.y or p.x > world_max.x or p.x < world_min.x:
            bullets.remove(i)
        else:
            i += 1


def player_hits_segment(player: Player, p0: Vec2, p1: Vec2) -> bool:
    """True when any edge of the ship's outline crosses the segment p0-p1."""
    return any(segment_intersection(p0, p1, a, b) is not None for a, b in player.edges())


def bullet_hits_segment(bullets: BoundedBuffer[Bullet], p0: Vec2, p1: Vec2) -> int | None:
    """Index of the first bullet touching segment p0-p1, or None.

    The bullet that hits has its velocity reflected off the segment.
    """
    for index, bullet in enumerate(bullets):
        delta = bullet.position - bullet.prev_position
        tip = bullet.position + delta.normalized().scale(bullet.radius * 0.5)
        crossed = segment_intersection(p0, p1, bullet.prev_position, tip) is not None
        if crossed or circle_touches_segment(bullet.position, bullet.radius, p0, p1):
            reflection = delta.reflect(left_normal(p0, p1)).normalized()
            bullet.velocity = reflection.scale(bullet.velocity.length())
            return index
    return None


class GameState:
    """Everything the simulation tracks between frames."""

    def __init__(self, rng: random.Random, now: float) -> None:
        self.rng = rng
        self.world_min = Vec2(0.0, 0.0)
        self.world_max = Vec2(WORLD_WIDTH, WORLD_HEIGHT)
        self.asteroid_max_scale = ASTEROID_MAX_SCALE
        self._sounds: list[tuple[SoundName, float]] = []
        self.reset(now)

    def reset(self, now: float) -> None:
        """Start a new round: fresh ship in the centre and a ring of asteroids."""
        self.game_over = False
        self.game_won = False
        center = Vec2(self.world_max.x / 2.0, self.world_max.y / 2.0)
        self.player = create_player(center, now)
        self.asteroids: BoundedBuffer[Asteroid] = BoundedBuffer(ASTEROID_CAPACITY)
        self.bullets: BoundedBuffer[Bullet] = BoundedBuffer(BULLET_CAPACITY)
        self.power_ups: BoundedBuffer[PowerUp] = BoundedBuffer(POWER_UP_CAPACITY)

        height = self.world_max.y
        for _ in range(INITIAL_ASTEROID_COUNT):
            offset = random_on_circle(
                self.rng, random_in_range(self.rng, height / 4.0, height / 1.25)
            )
            velocity = random_on_circle(self.rng, random_in_range(self.rng, 50.0, 250.0))
            self.asteroids.push(
                create_asteroid(self.rng, center + offset, velocity, self.asteroid_max_scale, 0)
            )

    def take_sounds(self) -> list[tuple[SoundName, float]]:
        """Return the (sound, pitch) pairs queued since the last call and clear them."""
        sounds, self._sounds = self._sounds, []
        return sounds

    def _play(self, name: SoundName, pitch: float = 1.0) -> None:
        self._sounds.append((name, pitch))

    def update(self, dt: float, now: float, controls: Controls) -> None:
        """Advance the game by ``dt`` seconds at time ``now``."""
        if self.game_over or self.game_won:
            if controls.restart:
                self.reset(now)
            return

        if len(self.asteroids) == 0:
            self.game_won = True
            self._play(SoundName.WIN)
            return

        self._update_power_ups(dt, now)
        cull_bullets(self.bullets, self.world_min, self.world_max)
        self.player.aim_at(controls.aim)
        if controls.fire:
            self._shoot(now, controls.aim)
        self._move_player(dt, controls._direction())

        for bullet in self.bullets:
            bullet.prev_position = bullet.position
            bullet.position = bullet.position + bullet.velocity.scale(dt)

        move_asteroids(self.asteroids, self.asteroid_max_scale, self.world_max, dt)
        self._resolve_collisions(now)

    def _update_power_ups(self, dt: float, now: float) -> None:
        player = self.player
        i = 0
        while i < len(self.power_ups):
            power_up = self.power_ups[i]
            power_up.lerp_prog = min(power_up.lerp_prog + dt, 1.0)
            power_up.radius = lerp(0.0, POWER_UP_RADIUS, smooth_step(0.0, 1.0, power_up.lerp_prog))
            if power_up.position.distance(player.position) <= POWER_UP_RADIUS:
                player.active_power_ups.add(power_up.type)
                player.power_up_timestamps[power_up.type] = now
                self._play(SoundName.POWER_UP_GAINED)
                self.power_ups.remove(i)
            else:
                i += 1

        for kind, stamp in player.power_up_timestamps.items():
            if now - stamp >= POWER_UP_DURATION:
                player.active_power_ups.discard(kind)

    def _shoot(self, now: float, aim: Vec2) -> None:
        player = self.player
        rate = PLAYER_SHOOTING_RATE
        if player.has_power_up(PowerUpType.MACHINE_GUN):
            rate *= 0.5
        if now - player.shooting_timestamp < rate:
            return

        self._play(SoundName.SHOOT, random_in_range(self.rng, 0.95, 1.05))
        direction = (aim - player.position).normalized()
        muzzle = player.position + direction.scale(player.height / 2.0)

        if player.has_power_up(PowerUpType.SHOTGUN):
            # The further away the aim point, the tighter the spread.
            distance = player.position.distance(aim)
            spread = 0.9 if distance == 0.0 else max(0.2, min(0.9, 1.0 / (distance * 0.01)))
            for side in (-1, 0, 1):
                offset = Vec2(
                    side * spread * direction.dot(Vec2(0.0, -1.0)),
                    side * spread * direction.dot(Vec2(1.0, 0.0)),
                )
                heading = (direction + offset).normalized()
                self.bullets.push(
                    Bullet(muzzle, muzzle, heading.scale(BULLET_SPEED), BULLET_RADIUS)
                )
        else:
            self.bullets.push(Bullet(muzzle, muzzle, direction.scale(BULLET_SPEED), BULLET_RADIUS))

        player.shooting_timestamp = now

    def _move_player(self, dt: float, direction: Vec2) -> None:
        player = self.player
        velocity = player.velocity + direction.scale(PLAYER_ACCELERATION * dt)
        max_magnitude = PLAYER_MAX_SPEED * dt
        if velocity.length() > max_magnitude:
            velocity = velocity.normalized().scale(max_magnitude)

        position = player.position + velocity
        h = player.height
        min_x, max_x = self.world_min.x - h, self.world_max.x + h
        min_y, max_y = self.world_min.y - h, self.world_max.y + h
        x, y = position.x, position.y
        if x > max_x:
            x -= max_x + h
        elif x < min_x:
            x += max_x + h
        if y > max_y:
            y -= max_y + h
        elif y < min_y:
            y += max_y + h
        player.position = Vec2(x, y)

        player.velocity = velocity.scale(math.exp(-PLAYER_DRAG * dt))

    def _resolve_collisions(self, now: float) -> None:
        player = self.player
        i = 0
        while i < len(self.asteroids):
            asteroid = self.asteroids[i]
            for p0, p1 in asteroid.edges():
                if player.has_power_up(PowerUpType.INVINCIBILITY):
                    shield = player.height - INVINCIBILITY_SHIELD_INSET
                    if circle_touches_segment(player.position, shield, p0, p1):
                        push_out = -left_normal(p0, p1)
                        player.velocity = push_out.scale(player.velocity.length())
                elif player_hits_segment(player, p0, p1):
                    self.game_over = True
                    self._play(SoundName.LOSE)
                    break

                bullet_id = bullet_hits_segment(self.bullets, p0, p1)
                if bullet_id is None:
                    continue

                self._play(SoundName.EXPLOSION, random_in_range(self.rng, 0.90, 1.1))
                player.score += POINTS_PER_ASTEROID // (asteroid.generation + 1)

                if self.rng.randint(0, POWER_UP_SPAWN_ODDS) == 0:
                    padding = Vec2(POWER_UP_SPAWN_PADDING, POWER_UP_SPAWN_PADDING)
                    spot = asteroid.position.clamp(
                        self.world_min + padding, self.world_max - padding
                    )
                    self.power_ups.push(create_random_power_up(self.rng, spot, now))
                    self._play(SoundName.POWER_UP_SPAWNED)

                explode_asteroid(self.rng, self.asteroids, i, self.asteroid_max_scale)
                i -= 1
                if not player.has_power_up(PowerUpType.BOUNCEY_BULLETS):
                    self.bullets.remove(bullet_id)
                break
            i += 1