"""Drawing the game: geometry into an off-screen target, a bloom pass, then the UI."""

from __future__ import annotations

import math

import pygame

from .entities import PowerUp, PowerUpType
from .geometry import Vec2, lerp
from .world import GameState

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
GRAY: Color = (130, 130, 130)
DARKGRAY: Color = (80, 80, 80)
YELLOW: Color = (253, 249, 0)
ORANGE: Color = (255, 161, 0)
BLUE: Color = (0, 121, 241)
GOLD: Color = (255, 203, 0)
GREEN: Color = (0, 228, 48)
RED: Color = (230, 41, 55)
LIME: Color = (0, 158, 47)

POWER_UP_COLORS: dict[PowerUpType, Color] = {
    PowerUpType.BOUNCEY_BULLETS: BLUE,
    PowerUpType.INVINCIBILITY: GOLD,
    PowerUpType.SHOTGUN: GREEN,
    PowerUpType.MACHINE_GUN: RED,
}
POWER_UP_LETTERS: dict[PowerUpType, str] = {
    PowerUpType.BOUNCEY_BULLETS: "B",
    PowerUpType.INVINCIBILITY: "I",
    PowerUpType.SHOTGUN: "S",
    PowerUpType.MACHINE_GUN: "M",
}

BLOOM_LEVELS = 4
BLOOM_BLUR_PASSES = 3

SCORE_FONT_SIZE = 36
STATUS_FONT_SIZE = 42
HINT_FONT_SIZE = 20
SHIELD_INSET = 16.0
_GRADIENT_STEPS = 24


def _new_surface(size: tuple[int, int]) -> pygame.Surface:
    return pygame.Surface(size, 0, 32)


def _blur(src: pygame.Surface, dst: pygame.Surface, horizontal: bool) -> None:
    """Blur ``src`` along one axis into ``dst`` by a bilinear down- and up-scale."""
    width, height = src.get_size()
    shrunk = (max(1, width // 2), height) if horizontal else (width, max(1, height // 2))
    small = pygame.transform.smoothscale(src, shrunk)
    dst.blit(pygame.transform.smoothscale(small, (width, height)), (0, 0))


class BloomEffect:
    """A chain of progressively smaller blurred copies added back onto the image."""

    def __init__(
        self,
        width: int,
        height: int,
        levels: int = BLOOM_LEVELS,
        passes: int = BLOOM_BLUR_PASSES,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"bloom size must be positive, got {width}x{height}")
        if levels < 1:
            raise ValueError(f"bloom needs at least one level, got {levels}")
        if passes < 0:
            raise ValueError(f"blur pass count cannot be negative, got {passes}")
        self.passes = passes
        self.buffers: list[tuple[pygame.Surface, pygame.Surface]] = []
        w, h = width, height
        for _ in range(levels):
            size = (max(1, w), max(1, h))
            self.buffers.append((_new_surface(size), _new_surface(size)))
            w //= 2
            h //= 2

    def apply(self, surface: pygame.Surface) -> pygame.Surface:
        """Return a new surface holding ``surface`` with the glow added."""
        previous: pygame.Surface | None = None
        for primary, secondary in self.buffers:
            primary.fill(BLACK)
            if previous is None:
                if surface.get_size() == primary.get_size():
                    primary.blit(surface, (0, 0))
                else:
                    primary.blit(pygame.transform.scale(surface, primary.get_size()), (0, 0))
            else:
                primary.blit(pygame.transform.smoothscale(previous, primary.get_size()), (0, 0))
            for _ in range(self.passes):
                _blur(primary, secondary, horizontal=True)
                _blur(secondary, primary, horizontal=False)
            previous = primary

        size = surface.get_size()
        result = _new_surface(size)
        result.blit(surface, (0, 0))
        for primary, _ in self.buffers:
            layer = pygame.transform.smoothscale(primary, size)
            result.blit(layer, (0, 0), special_flags=pygame.BLEND_RGB_ADD)
        return result


def power_up_triangle(power_up: PowerUp, now: float) -> list[Vec2]:
    """The three corners of a power-up's spinning triangle at time ``now``."""
    corners = []
    for i in range(3):
        angle = (2.0 * math.pi / 3.0) * (i + 1) + now * 2.0
        corners.append(
            Vec2(
                math.cos(angle) * power_up.radius + power_up.position.x,
                math.sin(angle) * power_up.radius + power_up.position.y,
            )
        )
    return corners


class Renderer:
    """Draws a :class:`GameState` onto a screen surface through a zoomed camera."""

    def __init__(self, width: int, height: int, zoom: float) -> None:
        pygame.font.init()
        self.width = width
        self.height = height
        self.zoom = zoom
        self.target = _new_surface((width, height))
        self.bloom = BloomEffect(width, height)
        self._fonts: dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = pygame.font.Font(None, size)
        return font

    def _point(self, v: Vec2) -> tuple[float, float]:
        return (v.x * self.zoom, v.y * self.zoom)

    def _line(self, a: Vec2, b: Vec2, width: float, color: Color) -> None:
        thickness = max(1, round(width * self.zoom))
        pygame.draw.line(self.target, color, self._point(a), self._point(b), thickness)

    def _text(
        self, surface: pygame.Surface, text: str, x: float, y: float, size: int, color: Color
    ) -> None:
        if size < 1:
            return
        surface.blit(self._font(size).render(text, True, color), (x, y))

    def _shield(self, center: Vec2, radius: float) -> None:
        r = max(1, round(radius * self.zoom))
        glow = pygame.Surface((2 * r, 2 * r), pygame.SRCALPHA, 32)
        for step in range(_GRADIENT_STEPS):
            t = step / _GRADIENT_STEPS
            ring = max(1, round(r * (1.0 - t)))
            color = (
                round(lerp(ORANGE[0], 0, t)),
                round(lerp(ORANGE[1], 0, t)),
                round(lerp(ORANGE[2], 0, t)),
                round(lerp(128, 0, t)),
            )
            pygame.draw.circle(glow, color, (r, r), ring)
        x, y = self._point(center)
        self.target.blit(glow, (x - r, y - r))

    def _draw_world(self, state: GameState, now: float) -> None:
        for asteroid in state.asteroids:
            for p0, p1 in asteroid.edges():
                self._line(p0, p1, 3.0, WHITE)

        for power_up in state.power_ups:
            color = POWER_UP_COLORS[power_up.type]
            a, b, c = power_up_triangle(power_up, now)
            for p0, p1 in ((a, b), (b, c), (c, a)):
                self._line(p0, p1, 6.0, color)
            font_size = int(int(power_up.radius - 20) * self.zoom)
            x = power_up.position.x - power_up.radius / 2.0 + 20.0
            y = power_up.position.y - power_up.radius / 2.0 + 20.0
            sx, sy = self._point(Vec2(x, y))
            self._text(self.target, POWER_UP_LETTERS[power_up.type], sx, sy, font_size, WHITE)

        for bullet in state.bullets:
            radius = max(1, round(bullet.radius * self.zoom))
            pygame.draw.circle(self.target, YELLOW, self._point(bullet.position), radius)

        player = state.player
        if player.has_power_up(PowerUpType.INVINCIBILITY):
            self._shield(player.position, player.height - SHIELD_INSET)
        for p0, p1 in player.edges():
            self._line(p0, p1, 3.0, ORANGE)

    def _draw_ui(self, state: GameState, screen: pygame.Surface) -> None:
        sw, sh = screen.get_size()
        overlay = pygame.Surface((sw, sh), pygame.SRCALPHA, 32)
        rect = pygame.Rect(round(sw / 2.0 - 256.0), round(sh / 2.0 - 128.0), 512, 256)
        pygame.draw.rect(overlay, (*DARKGRAY, 128), rect, border_radius=round(0.3 * 128))
        screen.blit(overlay, (0, 0))

        color = RED if state.game_over else GREEN
        status = "GAME OVER!" if state.game_over else "YOU WIN!"
        hint = "PRESS SPACE TO START OVER"

        width = self._font(STATUS_FONT_SIZE).size(status)[0]
        x = sw / 2.0 - width / 2.0
        y = sh / 2.0 - STATUS_FONT_SIZE
        self._text(screen, status, x, y, STATUS_FONT_SIZE, color)

        width = self._font(HINT_FONT_SIZE).size(hint)[0]
        x = sw / 2.0 - width / 2.0
        self._text(screen, hint, x, y + HINT_FONT_SIZE * 4, HINT_FONT_SIZE, WHITE)

    def draw(
        self,
        state: GameState,
        screen: pygame.Surface,
        show_fps: bool = False,
        fps: float = 0.0,
    ) -> None:
        """Render one frame of ``state`` onto ``screen``."""
        now = pygame.time.get_ticks() / 1000.0
        self.target.fill(BLACK)
        self._draw_world(state, now)

        # The score goes in before the bloom pass so that it glows too.
        self._text(
            self.target,
            f"SCORE: {state.player.score}",
            10,
            self.target.get_height() - SCORE_FONT_SIZE - 10,
            SCORE_FONT_SIZE,
            GRAY,
        )

        screen.fill(BLACK)
        screen.blit(self.bloom.apply(self.target), (0, 0))

        if state.game_over or state.game_won:
            self._draw_ui(state, screen)

        if show_fps:
            self._text(screen, f"{round(fps)} FPS", 10, 10, HINT_FONT_SIZE, LIME)