"""
Game entity dataclasses

Each kind owns its own position/velocity and its per-tick motion.
Anything that touches another kind (damage, scoring, spawning) lives in
the world and the collision engine.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .config import (
    ENEMY_CONFIG,
    GAME_CONFIG,
    PARTICLE_CONFIG,
    PLAYER_DEFAULTS,
    POWERUP_CONFIG,
    ROCK_CONFIG,
    PlayerConfig,
)
from .utils import angle_to, clamp


class HitResult(Enum):
    """Outcome of Player.take_hit"""
    IGNORED = "ignored"      # dashing, nothing happened
    SHIELD = "shield"        # absorbed by the shield
    LIFE = "life"            # a life was lost


@dataclass
class InputState:
    """Snapshot of the controls for one tick"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    shoot: bool = False      # trigger pressed this tick
    dash: bool = False       # edge-triggered
    aim_x: float = 0.0
    aim_y: float = 0.0


@dataclass
class Projectile:
    """Bullet fired by the player or by an enemy/boss"""
    x: float
    y: float
    vx: float
    vy: float
    from_enemy: bool
    radius: float = 5.0
    damage: float = 5.0
    alive: bool = True

    def update(self):
        self.x += self.vx
        self.y += self.vy

    def off_screen(self, width: float, height: float) -> bool:
        return self.x < 0 or self.x > width or self.y < 0 or self.y > height


@dataclass
class Enemy:
    """Enemy ship descending from the top edge"""
    x: float
    y: float
    size: float = ENEMY_CONFIG["size"]
    alive: bool = True

    def update(self, slowed: bool = False):
        self.y += ENEMY_CONFIG["slow_speed"] if slowed else ENEMY_CONFIG["speed"]

    def maybe_shoot(self, rng: random.Random, target_x: float, target_y: float) -> Optional[Projectile]:
        """Fire at the target with a small fixed chance"""
        if rng.random() >= ENEMY_CONFIG["fire_chance"]:
            return None
        ang = angle_to(self.x, self.y, target_x, target_y)
        speed = GAME_CONFIG["enemy_bullet_speed"]
        return Projectile(
            x=self.x,
            y=self.y,
            vx=math.cos(ang) * speed,
            vy=math.sin(ang) * speed,
            from_enemy=True,
        )


@dataclass
class Rock:
    """Falling rock; x/y is the top-left corner"""
    x: float
    y: float
    speed: float
    size: float = ROCK_CONFIG["size"]
    alive: bool = True

    @classmethod
    def spawn(cls, rng: random.Random, width: float) -> "Rock":
        size = ROCK_CONFIG["size"]
        return cls(
            x=rng.random() * max(0.0, width - size),
            y=-size,
            speed=ROCK_CONFIG["min_speed"] + rng.random() * ROCK_CONFIG["speed_range"],
        )

    def update(self):
        self.y += self.speed


@dataclass
class PowerUp:
    """Collectible, picked up by shooting it"""
    x: float
    y: float
    kind: str
    size: float = POWERUP_CONFIG["size"]
    alive: bool = True

    def __post_init__(self):
        if self.kind not in POWERUP_CONFIG["kinds"]:
            raise ValueError(f"Unknown power-up kind: {self.kind}")

    @classmethod
    def spawn(cls, rng: random.Random, x: float, y: float) -> "PowerUp":
        return cls(x=x, y=y, kind=rng.choice(POWERUP_CONFIG["kinds"]))

    def update(self):
        self.y += POWERUP_CONFIG["fall_speed"]


@dataclass
class Particle:
    """Cosmetic explosion fragment"""
    x: float
    y: float
    vx: float
    vy: float
    color: str
    size: float = PARTICLE_CONFIG["size"]
    life: int = PARTICLE_CONFIG["life"]

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def alpha(self) -> float:
        return clamp(self.life / PARTICLE_CONFIG["life"], 0.0, 1.0)

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.life -= 1


def make_explosion(rng: random.Random, x: float, y: float, count: int = 20, color: str = "orange") -> List[Particle]:
    """Burst of particles scattering from (x, y)"""
    spread = PARTICLE_CONFIG["max_speed"] * 2
    return [
        Particle(
            x=x,
            y=y,
            vx=(rng.random() - 0.5) * spread,
            vy=(rng.random() - 0.5) * spread,
            color=color,
        )
        for _ in range(count)
    ]


@dataclass
class Player:
    """The player's ship"""
    x: float
    y: float
    width: float
    height: float
    speed: float
    lives: int
    fire_interval_ms: float = PLAYER_DEFAULTS["fire_interval_ms"]
    bullet_size: float = PLAYER_DEFAULTS["bullet_size"]
    spread: bool = False
    enemy_slow: bool = False
    shield: float = 0.0
    max_shield: float = PLAYER_DEFAULTS["max_shield"]
    dash_cooldown: int = 0
    dashing: bool = False
    dash_time: int = 0
    last_shot_ms: Optional[float] = None
    # power-up kind -> expiry time (ms on the simulation clock)
    effects: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_config(cls, cfg: PlayerConfig, width: float, height: float) -> "Player":
        return cls(
            x=width / 2,
            y=height - PLAYER_DEFAULTS["start_offset_y"],
            width=cfg.width,
            height=cfg.height,
            speed=cfg.speed,
            lives=cfg.lives,
        )

    @property
    def damage(self) -> float:
        if self.bullet_size > PLAYER_DEFAULTS["bullet_size"]:
            return PLAYER_DEFAULTS["big_damage"]
        return PLAYER_DEFAULTS["base_damage"]

    # ----------------------------
    # Movement / dash
    # ----------------------------

    def update(self, inp: InputState, width: float, height: float):
        """Advance the dash timers, then move"""
        self._update_dash()
        self.move(inp, width, height)

    def _update_dash(self):
        if self.dash_cooldown > 0:
            self.dash_cooldown -= 1

        if self.dashing:
            if self.dash_time <= 0:
                self.dashing = False
            else:
                self.dash_time -= 1

    def move(self, inp: InputState, width: float, height: float):
        step = PLAYER_DEFAULTS["dash_speed"] if self.dashing else self.speed

        if inp.left:
            self.x -= step
        if inp.right:
            self.x += step
        if inp.up:
            self.y -= step
        if inp.down:
            self.y += step

        # Keep the whole ship on screen
        mx = self.width / 2
        my = self.height / 2
        self.x = clamp(self.x, mx, max(mx, width - mx))
        self.y = clamp(self.y, my, max(my, height - my))

    def start_dash(self) -> bool:
        if self.dash_cooldown > 0:
            return False
        self.dashing = True
        self.dash_time = PLAYER_DEFAULTS["dash_ticks"]
        self.dash_cooldown = PLAYER_DEFAULTS["dash_cooldown_ticks"]
        return True

    # ----------------------------
    # Combat
    # ----------------------------

    def can_shoot(self, now_ms: float) -> bool:
        return self.last_shot_ms is None or now_ms - self.last_shot_ms >= self.fire_interval_ms

    def shoot(self, now_ms: float, aim_x: float, aim_y: float) -> List[Projectile]:
        """Fire toward the aim point; returns the new projectiles (empty when rate limited)"""
        if not self.can_shoot(now_ms):
            return []
        self.last_shot_ms = now_ms

        base = angle_to(self.x, self.y, aim_x, aim_y)
        angles = [base]
        if self.spread:
            off = PLAYER_DEFAULTS["spread_offset"]
            angles += [base - off, base + off]

        speed = GAME_CONFIG["player_bullet_speed"]
        return [
            Projectile(
                x=self.x,
                y=self.y,
                vx=math.cos(a) * speed,
                vy=math.sin(a) * speed,
                from_enemy=False,
                radius=self.bullet_size,
                damage=self.damage,
            )
            for a in angles
        ]

    def take_hit(self, amount: float = GAME_CONFIG["hit_amount"]) -> HitResult:
        """Shield absorbs first, otherwise a life is lost. Dashing ignores the hit."""
        if self.dashing:
            return HitResult.IGNORED

        if self.shield > 0:
            self.shield = max(0.0, self.shield - amount)
            return HitResult.SHIELD

        self.lives = max(0, self.lives - 1)
        return HitResult.LIFE


@dataclass
class Star:
    """Background star; wraps to the top after leaving the bottom edge"""
    x: float
    y: float
    size: float
    speed: float

    @classmethod
    def spawn(cls, rng: random.Random, width: float, height: float) -> "Star":
        return cls(
            x=rng.random() * width,
            y=rng.random() * height,
            size=rng.random() * 1.2 + 0.5,
            speed=rng.random() * 2 + 0.5,
        )

    def update(self, rng: random.Random, width: float, height: float):
        self.y += self.speed
        if self.y > height:
            self.y = 0.0
            self.x = rng.random() * width
