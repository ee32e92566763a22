"""The game window: input, sound and the main loop."""

from __future__ import annotations

import argparse
import random
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any

import pygame

from .geometry import Vec2
from .render import Renderer
from .world import WORLD_WIDTH, Controls, GameState, SoundName

SOUND_FILES: dict[SoundName, str] = {
    SoundName.SHOOT: "shoot.wav",
    SoundName.EXPLOSION: "explosion.wav",
    SoundName.WIN: "win.wav",
    SoundName.LOSE: "lose.wav",
    SoundName.POWER_UP_SPAWNED: "power_up_spawned.wav",
    SoundName.POWER_UP_GAINED: "power_up_gained.wav",
}
SOUND_VOLUMES: dict[SoundName, float] = {SoundName.EXPLOSION: 0.5}


def _resample(raw: bytes, frame_size: int, pitch: float) -> bytes:
    """Play ``raw`` back ``pitch`` times faster by picking the nearest frames."""
    if pitch <= 0.0:
        raise ValueError(f"pitch must be positive, got {pitch}")
    frames = len(raw) // frame_size
    if frames == 0:
        return b""
    count = max(1, int(frames / pitch))
    picks = (min(frames - 1, int(i * pitch)) for i in range(count))
    return b"".join(raw[j * frame_size : (j + 1) * frame_size] for j in picks)


class SoundBank:
    """The game's sound effects; missing files or audio stay silent."""

    def __init__(self, directory: str | Path) -> None:
        self._frame_size = 0
        self._sounds: dict[SoundName, Any] = {}
        self._raw: dict[SoundName, bytes] = {}
        self._variants: dict[tuple[SoundName, float], Any] = {}

        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init()
            except pygame.error:
                return
        _, size, channels = pygame.mixer.get_init()
        self._frame_size = abs(size) // 8 * channels

        base = Path(directory)
        for name, filename in SOUND_FILES.items():
            try:
                sound = pygame.mixer.Sound(str(base / filename))
            except (pygame.error, FileNotFoundError):
                continue
            sound.set_volume(SOUND_VOLUMES.get(name, 1.0))
            self._sounds[name] = sound
            self._raw[name] = sound.get_raw()

    def play(self, name: SoundName, pitch: float = 1.0) -> bool:
        """Play a sound at ``pitch``; return whether anything was played."""
        sound = self._sounds.get(name)
        if sound is None:
            return False
        pitch = round(pitch, 2)
        if pitch != 1.0:
            key = (name, pitch)
            variant = self._variants.get(key)
            if variant is None:
                data = _resample(self._raw[name], self._frame_size, pitch)
                variant = pygame.mixer.Sound(buffer=data)
                variant.set_volume(SOUND_VOLUMES.get(name, 1.0))
                self._variants[key] = variant
            sound = variant
        sound.play()
        return True


def read_controls(
    keys: Any,
    mouse_buttons: Sequence[bool],
    mouse_pos: tuple[float, float],
    zoom: float,
) -> Controls:
    """Turn pressed keys, mouse buttons and the cursor into world-space controls."""
    return Controls(
        aim=Vec2(mouse_pos[0], mouse_pos[1]).scale(1.0 / zoom),
        up=bool(keys[pygame.K_w] or keys[pygame.K_UP]),
        down=bool(keys[pygame.K_s] or keys[pygame.K_DOWN]),
        left=bool(keys[pygame.K_a] or keys[pygame.K_LEFT]),
        right=bool(keys[pygame.K_d] or keys[pygame.K_RIGHT]),
        fire=bool(keys[pygame.K_SPACE] or (mouse_buttons and mouse_buttons[0])),
        restart=bool(keys[pygame.K_SPACE]),
    )


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="asteroidfield", description="Shoot the asteroids.")
    parser.add_argument("--width", type=int, default=1920)
    parser.add_argument("--height", type=int, default=1080)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--sounds", default="sounds", help="directory holding the sound files")
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def _now() -> float:
    return pygame.time.get_ticks() / 1000.0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("Asteroids")
        # The camera assumes the aspect ratio never changes.
        zoom = args.width / WORLD_WIDTH
        sounds = SoundBank(args.sounds)
        renderer = Renderer(args.width, args.height, zoom)
        clock = pygame.time.Clock()
        state = GameState(random.Random(args.seed), _now())
        show_fps = False

        running = True
        while running:
            dt = clock.tick(args.fps) / 1000.0
            restart = False
            toggle_fps = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        restart = True
                    elif event.key == pygame.K_f:
                        toggle_fps = True
            if not running:
                break

            if toggle_fps and not (state.game_over or state.game_won):
                show_fps = not show_fps

            controls = read_controls(
                pygame.key.get_pressed(), pygame.mouse.get_pressed(), pygame.mouse.get_pos(), zoom
            )
            state.update(dt, _now(), replace(controls, restart=restart))
            for name, pitch in state.take_sounds():
                sounds.play(name, pitch)

            renderer.draw(state, screen, show_fps, clock.get_fps())
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0