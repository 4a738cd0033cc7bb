"""
Frame painter

Everything is drawn through a small Surface interface (filled/outlined
circle, filled rectangle, stroked line, scaled image blit) in screen
coordinates with y pointing down. Back-ends: ArcadeSurface for the game
window, RasterSurface (numpy) for rgb_array frames and tests.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict, Tuple

from .boss import LaserState
from .world import GameWorld

Color = Tuple[int, int, int]

PALETTE: Dict[str, Color] = {
    "background": (0, 0, 0),
    "white": (255, 255, 255),
    "orange": (255, 165, 0),
    "red": (255, 0, 0),
    "yellow": (255, 255, 0),
    "lime": (0, 255, 0),
    "gray": (128, 128, 128),
    "cyan": (80, 220, 255),
    "shield": (0, 200, 255),
    "darkred": (139, 0, 0),
    "orangered": (255, 69, 0),
    "magenta": (255, 0, 255),
}

PHASE_COLORS = {1: "darkred", 2: "orangered", 3: "magenta"}

POWERUP_SPRITES = {
    "life": "greenPU",
    "rapid": "yellowPU",
    "big": "orangePU",
    "spread": "purplePU",
    "shield": "bluePU",
}

LASER_LENGTH = 2000
ENEMY_SHIP_SIZE = 15
ENEMY_SHIP_STROKE = 3
HEALTH_BAR_WIDTH = 300


def rgb(name: str) -> Color:
    return PALETTE.get(name, PALETTE["white"])


class Surface(ABC):
    """Abstract 2D drawing surface of known pixel size"""

    width: int
    height: int

    @abstractmethod
    def set_offset(self, dx: float, dy: float):
        raise NotImplementedError

    @abstractmethod
    def clear(self, color: Color, alpha: float = 1.0):
        raise NotImplementedError

    @abstractmethod
    def circle(self, x: float, y: float, r: float, color: Color, alpha: float = 1.0, line_width: float = 0):
        """Filled circle, or a ring when line_width > 0"""
        raise NotImplementedError

    @abstractmethod
    def rect(self, x: float, y: float, w: float, h: float, color: Color, alpha: float = 1.0):
        raise NotImplementedError

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float, line_width: float, color: Color, alpha: float = 1.0):
        raise NotImplementedError

    @abstractmethod
    def image(self, name: str, x: float, y: float, w: float, h: float) -> bool:
        """Blit a sprite scaled to the box; False if it is not available"""
        raise NotImplementedError


def draw_frame(world: GameWorld, surface: Surface):
    """Paint one full frame of the world"""
    ox, oy = world.shake_offset
    surface.set_offset(ox, oy)
    # Translucent clear leaves short trails
    surface.clear(rgb("background"), alpha=0.4)

    for s in world.stars:
        surface.circle(s.x, s.y, s.size, rgb("white"))

    _draw_player(world, surface)

    for r in world.rocks:
        if not surface.image("rock", r.x, r.y, r.size, r.size):
            surface.rect(r.x, r.y, r.size, r.size, rgb("gray"))

    for p in world.projectiles:
        surface.circle(p.x, p.y, p.radius, rgb("red" if p.from_enemy else "yellow"))

    for p in world.particles:
        surface.circle(p.x, p.y, p.size, rgb(p.color), alpha=p.alpha)

    for e in world.enemies:
        if not surface.image("enemy", e.x - 30, e.y - 30, 60, 60):
            _draw_ship(surface, e.x, e.y, ENEMY_SHIP_SIZE, rgb("orange"))

    if world.boss is not None:
        _draw_boss(world, surface)

    for pu in world.power_ups:
        sz = pu.size
        if not surface.image(POWERUP_SPRITES[pu.kind], pu.x - sz, pu.y - sz, sz * 2, sz * 2):
            surface.circle(pu.x, pu.y, sz, rgb("white"))

    surface.set_offset(0.0, 0.0)


def _draw_player(world: GameWorld, surface: Surface):
    pl = world.player
    if not surface.image("player", pl.x - pl.width / 2, pl.y - pl.height / 2, pl.width, pl.height):
        surface.circle(pl.x, pl.y, min(pl.width, pl.height) / 2, rgb("cyan"))

    if pl.shield > 0:
        surface.circle(pl.x, pl.y, 30, rgb("shield"), alpha=0.7, line_width=4)
    if pl.dashing:
        surface.circle(pl.x, pl.y, 35, rgb("white"), alpha=0.8, line_width=6)


def _draw_boss(world: GameWorld, surface: Surface):
    boss = world.boss
    if not surface.image("boss", boss.x, boss.y, boss.width, boss.height):
        surface.rect(boss.x, boss.y, boss.width, boss.height, rgb(PHASE_COLORS[boss.phase]))

    state = boss.laser_state
    if state is not LaserState.IDLE:
        x2 = boss.center_x + math.cos(boss.laser_angle) * LASER_LENGTH
        y2 = boss.center_y + math.sin(boss.laser_angle) * LASER_LENGTH
        if state is LaserState.WARNING:
            surface.line(boss.center_x, boss.center_y, x2, y2, 4, rgb("yellow"), alpha=0.4)
        else:
            surface.line(boss.center_x, boss.center_y, x2, y2, 10, rgb("red"))

    # Health bar, pinned to the top of the screen
    bx = world.width / 2 - HEALTH_BAR_WIDTH / 2
    surface.rect(bx, 20, HEALTH_BAR_WIDTH, 15, rgb("red"))
    fill = HEALTH_BAR_WIDTH * boss.health_ratio
    if fill > 0:
        surface.rect(bx, 20, fill, 15, rgb("lime"))


def _draw_ship(surface: Surface, x: float, y: float, size: float, color: Color):
    """Outlined triangle pointing up, centred on x/y"""
    corners = [(x, y - size), (x - size, y + size), (x + size, y + size)]
    for i, (x1, y1) in enumerate(corners):
        x2, y2 = corners[(i + 1) % 3]
        surface.line(x1, y1, x2, y2, ENEMY_SHIP_STROKE, color)
