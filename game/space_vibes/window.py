"""
Arcade front-end: window, input, sprites, sounds, HUD and overlays

Arcade's y axis points up; the simulation's points down. ArcadeSurface
flips every coordinate so the painter can stay in screen space.
"""

from __future__ import annotations

import os
import random
from typing import Dict, Optional

import arcade

from .config import PlayerConfig
from .entities import InputState
from .hooks import SOUND_CUES, GameHooks, SessionSummary
from .render import Color, Surface, draw_frame
from .world import GameWorld

SCREEN_TITLE = "Space Vibes"

SPRITE_NAMES = (
    "player", "enemy", "boss", "rock",
    "orangePU", "greenPU", "purplePU", "bluePU", "yellowPU",
)

HUD_COLOR = (220, 220, 220)


def _rgba(color: Color, alpha: float):
    return (color[0], color[1], color[2], int(max(0.0, min(1.0, alpha)) * 255))


class ArcadeSurface(Surface):
    """Surface back-end drawing with arcade primitives"""

    def __init__(self, width: int, height: int, textures: Dict[str, arcade.Texture]):
        self.width = width
        self.height = height
        self.textures = textures
        self._ox = 0.0
        self._oy = 0.0

    def _sx(self, x: float) -> float:
        return x + self._ox

    def _sy(self, y: float) -> float:
        return self.height - (y + self._oy)

    def set_offset(self, dx, dy):
        self._ox = dx
        self._oy = dy

    def clear(self, color, alpha=1.0):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, _rgba(color, alpha))

    def circle(self, x, y, r, color, alpha=1.0, line_width=0):
        if line_width > 0:
            arcade.draw_circle_outline(self._sx(x), self._sy(y), r, _rgba(color, alpha), line_width)
        else:
            arcade.draw_circle_filled(self._sx(x), self._sy(y), r, _rgba(color, alpha))

    def rect(self, x, y, w, h, color, alpha=1.0):
        left = self._sx(x)
        top = self._sy(y)
        arcade.draw_lrbt_rectangle_filled(left, left + w, top - h, top, _rgba(color, alpha))

    def line(self, x1, y1, x2, y2, line_width, color, alpha=1.0):
        arcade.draw_line(self._sx(x1), self._sy(y1), self._sx(x2), self._sy(y2), _rgba(color, alpha), line_width)

    def image(self, name, x, y, w, h) -> bool:
        tex = self.textures.get(name)
        if tex is None:
            return False
        left = self._sx(x)
        bottom = self._sy(y) - h
        arcade.draw_texture_rect(tex, arcade.LBWH(left, bottom, w, h))
        return True


def load_textures(assets_dir: Optional[str], verbose: bool = True) -> Dict[str, arcade.Texture]:
    """Load whatever sprites exist; missing ones fall back to primitives"""
    textures: Dict[str, arcade.Texture] = {}
    if not assets_dir:
        return textures
    for name in SPRITE_NAMES:
        path = os.path.join(assets_dir, "sprites", f"{name}.png")
        if not os.path.exists(path):
            continue
        try:
            textures[name] = arcade.load_texture(path)
        except (OSError, ValueError) as exc:
            if verbose:
                print(f"[SpaceVibes] Could not load sprite {path}: {exc}")
    if verbose:
        print(f"[SpaceVibes] Loaded {len(textures)}/{len(SPRITE_NAMES)} sprites")
    return textures


def load_sounds(assets_dir: Optional[str], verbose: bool = True) -> Dict[str, tuple]:
    sounds: Dict[str, tuple] = {}
    if not assets_dir:
        return sounds
    for name, (fname, volume) in SOUND_CUES.items():
        path = os.path.join(assets_dir, "sounds", fname)
        if not os.path.exists(path):
            continue
        try:
            sounds[name] = (arcade.load_sound(path), volume)
        except (OSError, ValueError) as exc:
            if verbose:
                print(f"[SpaceVibes] Could not load sound {path}: {exc}")
    return sounds


class WindowHooks(GameHooks):
    """Plays cues through arcade and keeps the HUD values current"""

    def __init__(self, window: "SpaceVibesWindow"):
        self.window = window

    def play_sound(self, name: str):
        entry = self.window.sounds.get(name)
        if entry is None:
            return
        sound, volume = entry
        arcade.play_sound(sound, volume=volume)

    def on_score(self, score: int):
        self.window.hud_score = score

    def on_lives(self, lives: int):
        self.window.hud_lives = lives

    def on_game_over(self, summary: SessionSummary):
        self.window.summary = summary
        if self.window.fullscreen:
            self.window.set_fullscreen(False)
        if self.window.verbose:
            result = "victory" if summary.victory else "defeat"
            print(f"[SpaceVibes] Session over ({result}): score={summary.score} "
                  f"time={summary.time_survived}s kills={summary.enemies_killed} "
                  f"bosses={summary.bosses_killed}")


class SpaceVibesWindow(arcade.Window):
    """Start screen -> play -> end screen; R starts a fresh session"""

    def __init__(
        self,
        player_config: PlayerConfig,
        width: int,
        height: int,
        assets_dir: Optional[str] = None,
        seed: Optional[int] = None,
        verbose: bool = True,
    ):
        super().__init__(width, height, SCREEN_TITLE, update_rate=1 / 60)
        self.player_config = player_config
        self.seed = seed
        self.verbose = verbose

        self.textures = load_textures(assets_dir, verbose)
        self.sounds = load_sounds(assets_dir, verbose)
        self.surface = ArcadeSurface(width, height, self.textures)
        self.hooks = WindowHooks(self)

        self.keys = {"up": False, "down": False, "left": False, "right": False}
        self.mouse_x = width / 2
        self.mouse_y = height / 2
        self._shoot_pressed = False
        self._dash_pressed = False

        self.started = False
        self.summary: Optional[SessionSummary] = None
        self.world: GameWorld = None  # type: ignore
        self.hud_score = 0
        self.hud_lives = 0
        self.setup()

    def setup(self):
        rng = random.Random(self.seed)
        self.world = GameWorld(
            self.player_config, width=self.width, height=self.height, rng=rng, hooks=self.hooks
        )
        self.summary = None
        self.hud_score = 0
        self.hud_lives = self.world.player.lives

    # ----------------------------
    # Loop
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.started or self.world.game_over:
            return
        inp = InputState(
            up=self.keys["up"],
            down=self.keys["down"],
            left=self.keys["left"],
            right=self.keys["right"],
            shoot=self._shoot_pressed,
            dash=self._dash_pressed,
            aim_x=self.mouse_x,
            aim_y=self.mouse_y,
        )
        self._shoot_pressed = False
        self._dash_pressed = False
        self.world.step(inp)

    def on_draw(self):
        self.clear()
        if not self.started:
            self._draw_start_screen()
            return

        draw_frame(self.world, self.surface)
        self._draw_hud()
        if self.summary is not None:
            self._draw_end_screen()

    def _draw_hud(self):
        pl = self.world.player
        arcade.draw_text(f"Score: {self.hud_score}", 12, self.height - 30, HUD_COLOR, 16)
        arcade.draw_text(f"Lives: {self.hud_lives}", 12, self.height - 54, HUD_COLOR, 16)
        if pl.shield > 0:
            arcade.draw_text(f"Shield: {int(pl.shield)}", 12, self.height - 78, HUD_COLOR, 14)

    def _draw_start_screen(self):
        cx = self.width / 2
        arcade.draw_text("SPACE VIBES", cx, self.height * 0.65, arcade.color.WHITE, 64, anchor_x="center")
        lines = ["WASD - Move", "Left Mouse - Shoot", "Shift - Dash", "F - Fullscreen"]
        for i, line in enumerate(lines):
            arcade.draw_text(line, cx, self.height * 0.5 - i * 32, arcade.color.WHITE, 20, anchor_x="center")
        arcade.draw_text("Press ENTER to Start", cx, self.height * 0.2, arcade.color.WHITE, 24, anchor_x="center")

    def _draw_end_screen(self):
        s = self.summary
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, 230))
        cx = self.width / 2
        title = "YOU WIN" if s.victory else "GAME OVER"
        arcade.draw_text(title, cx, self.height * 0.7, arcade.color.WHITE, 48, anchor_x="center")
        lines = [
            f"Score: {s.score}",
            f"Time survived: {s.time_survived}s",
            f"Enemies destroyed: {s.enemies_killed}",
            f"Bosses defeated: {s.bosses_killed}",
            "",
            "Press [R] to restart",
        ]
        for i, line in enumerate(lines):
            arcade.draw_text(line, cx, self.height * 0.55 - i * 36, arcade.color.WHITE, 22, anchor_x="center")

    # ----------------------------
    # Input handling (keyboard + mouse)
    # ----------------------------

    def on_key_press(self, key, modifiers):
        if key == arcade.key.W:
            self.keys["up"] = True
        elif key == arcade.key.S:
            self.keys["down"] = True
        elif key == arcade.key.A:
            self.keys["left"] = True
        elif key == arcade.key.D:
            self.keys["right"] = True
        elif key in (arcade.key.LSHIFT, arcade.key.RSHIFT):
            if self.world.player.dash_cooldown <= 0:
                self._dash_pressed = True
        elif key == arcade.key.F:
            self.set_fullscreen(not self.fullscreen)
        elif key in (arcade.key.RETURN, arcade.key.ENTER):
            if not self.started:
                self.started = True
        elif key == arcade.key.R:
            if self.summary is not None:
                self.setup()

    def on_key_release(self, key, modifiers):
        if key == arcade.key.W:
            self.keys["up"] = False
        elif key == arcade.key.S:
            self.keys["down"] = False
        elif key == arcade.key.A:
            self.keys["left"] = False
        elif key == arcade.key.D:
            self.keys["right"] = False

    def on_mouse_motion(self, x, y, dx, dy):
        self.mouse_x = x
        self.mouse_y = self.height - y

    def on_mouse_press(self, x, y, button, modifiers):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self._shoot_pressed = True

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        # Fires from inside arcade.Window.__init__ as well
        surface = getattr(self, "surface", None)
        if surface is not None:
            surface.width = width
            surface.height = height
        world = getattr(self, "world", None)
        if world is not None:
            world.width = width
            world.height = height


def run_game(
    player_config: PlayerConfig,
    width: int,
    height: int,
    assets_dir: Optional[str] = None,
    seed: Optional[int] = None,
    verbose: bool = True,
):
    SpaceVibesWindow(player_config, width, height, assets_dir=assets_dir, seed=seed, verbose=verbose)
    arcade.run()
