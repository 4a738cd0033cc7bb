"""
Boss entity and its phase / laser state machines

Phase is recomputed from the health ratio every tick, so it only ever
moves forward as the boss takes damage. The laser runs independently of
the fire cooldown: idle -> warning (harmless) -> lethal -> idle.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .config import BOSS_CONFIG
from .entities import Projectile
from .utils import angle_to

PHASE1_ANGLES = (-0.2, 0.0, 0.2)
PHASE2_ANGLES = (-0.6, -0.4, -0.2, 0.0, 0.2, 0.4, 0.6)
RADIAL_SHOTS = 16


class LaserState(Enum):
    IDLE = "idle"
    WARNING = "warning"
    LETHAL = "lethal"


def phase_for(health: float, max_health: float) -> int:
    """Pure mapping from the health ratio to a phase number"""
    ratio = health / max_health
    if ratio >= BOSS_CONFIG["aggressive_ratio"]:
        return 1
    if ratio >= BOSS_CONFIG["rage_ratio"]:
        return 2
    return 3


@dataclass
class Boss:
    """Multi-phase boss; x/y is the top-left corner"""
    x: float
    y: float
    width: float = BOSS_CONFIG["width"]
    height: float = BOSS_CONFIG["height"]
    health: float = BOSS_CONFIG["max_health"]
    max_health: float = BOSS_CONFIG["max_health"]
    phase: int = 1
    speed: float = BOSS_CONFIG["phase_speeds"][1]
    direction: int = 1
    last_shot_ms: Optional[float] = None
    laser_active: bool = False
    laser_charge: int = 0
    laser_angle: float = 0.0

    @classmethod
    def spawn(cls, canvas_width: float) -> "Boss":
        w = BOSS_CONFIG["width"]
        h = BOSS_CONFIG["height"]
        return cls(x=canvas_width / 2 - w / 2, y=BOSS_CONFIG["center_y"] - h / 2)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def health_ratio(self) -> float:
        return max(0.0, self.health) / self.max_health

    @property
    def defeated(self) -> bool:
        return self.health <= 0

    @property
    def laser_state(self) -> LaserState:
        if not self.laser_active:
            return LaserState.IDLE
        if self.laser_charge > BOSS_CONFIG["laser_live_ticks"]:
            return LaserState.WARNING
        return LaserState.LETHAL

    # ----------------------------
    # Per-tick behaviour
    # ----------------------------

    def update_phase(self):
        self.phase = phase_for(self.health, self.max_health)
        self.speed = BOSS_CONFIG["phase_speeds"][self.phase]

    def move(self, canvas_width: float):
        """Bounce between the left and right edges"""
        self.x += self.speed * self.direction

        if self.x <= 0:
            self.x = 0.0
            self.direction = 1
        if self.x + self.width >= canvas_width:
            self.x = canvas_width - self.width
            self.direction = -1

    def update(self, canvas_width: float):
        self.update_phase()
        self.move(canvas_width)

    def try_start_laser(self, rng: random.Random, target_x: float, target_y: float) -> bool:
        """Maybe begin charging the laser (phase 2+ only). Returns True when it starts."""
        if self.laser_active or self.phase < 2:
            return False
        if rng.random() >= BOSS_CONFIG["laser_chance"]:
            return False
        self.start_laser(target_x, target_y)
        return True

    def start_laser(self, target_x: float, target_y: float):
        self.laser_active = True
        self.laser_charge = BOSS_CONFIG["laser_charge_ticks"]
        self.laser_angle = angle_to(self.center_x, self.center_y, target_x, target_y)

    def update_laser(self):
        """Count the charge down; the beam stays lethal for the tick it reaches 0"""
        if not self.laser_active:
            return
        if self.laser_charge <= 0:
            self.laser_active = False
            return
        self.laser_charge -= 1

    def fire_cooldown_ms(self) -> float:
        return BOSS_CONFIG["fire_cooldown_ms"][self.phase]

    def fire(self, now_ms: float) -> List[Projectile]:
        """Phase-dependent volley, rate limited by the phase cooldown"""
        if self.last_shot_ms is not None and now_ms - self.last_shot_ms < self.fire_cooldown_ms():
            return []
        self.last_shot_ms = now_ms

        cx = self.center_x
        cy = self.center_y

        if self.phase == 1:
            return [
                Projectile(x=cx, y=cy + self.height / 2, vx=math.sin(a) * 4, vy=4, from_enemy=True)
                for a in PHASE1_ANGLES
            ]

        if self.phase == 2:
            return [
                Projectile(x=cx, y=cy + self.height / 2, vx=math.sin(a) * 5, vy=5, from_enemy=True)
                for a in PHASE2_ANGLES
            ]

        step = math.pi * 2 / RADIAL_SHOTS
        return [
            Projectile(
                x=cx,
                y=cy,
                vx=math.cos(step * i) * 5,
                vy=math.sin(step * i) * 5,
                from_enemy=True,
            )
            for i in range(RADIAL_SHOTS)
        ]
