"""
Time-based emission of enemies, rocks, power-ups and the one-shot boss

Timers run on the simulation clock handed in by the loop, so once the
loop stops stepping nothing else is spawned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .boss import Boss
from .config import SPAWN_CONFIG
from .entities import Enemy, PowerUp, Rock

if TYPE_CHECKING:
    from .world import GameWorld

_EPS_MS = 1e-6


@dataclass
class IntervalTimer:
    """Fires every `interval_ms`, first time one interval after start"""
    interval_ms: float
    next_due_ms: float = 0.0

    def __post_init__(self):
        if self.interval_ms <= 0:
            raise ValueError(f"Timer interval must be positive, got {self.interval_ms}")
        if self.next_due_ms == 0.0:
            self.next_due_ms = self.interval_ms

    def poll(self, now_ms: float) -> int:
        """Number of times the timer fired up to `now_ms`"""
        count = 0
        while now_ms + _EPS_MS >= self.next_due_ms:
            self.next_due_ms += self.interval_ms
            count += 1
        return count


class Spawner:
    """Independent enemy / rock / power-up timers plus the delayed boss"""

    def __init__(
        self,
        enemy_interval_ms: float = SPAWN_CONFIG["enemy_interval_ms"],
        rock_interval_ms: float = SPAWN_CONFIG["rock_interval_ms"],
        powerup_interval_ms: float = SPAWN_CONFIG["powerup_interval_ms"],
        boss_delay_ms: float = SPAWN_CONFIG["boss_delay_ms"],
    ):
        self.enemy_timer = IntervalTimer(enemy_interval_ms)
        self.rock_timer = IntervalTimer(rock_interval_ms)
        self.powerup_timer = IntervalTimer(powerup_interval_ms)
        self.boss_delay_ms = boss_delay_ms
        self.boss_spawned = False

    def tick(self, world: "GameWorld", now_ms: float):
        rng = world.rng

        for _ in range(self.enemy_timer.poll(now_ms)):
            world.enemies.append(Enemy(x=rng.random() * world.width, y=SPAWN_CONFIG["enemy_spawn_y"]))

        for _ in range(self.rock_timer.poll(now_ms)):
            world.rocks.append(Rock.spawn(rng, world.width))

        for _ in range(self.powerup_timer.poll(now_ms)):
            world.power_ups.append(
                PowerUp.spawn(rng, rng.random() * world.width, SPAWN_CONFIG["powerup_spawn_y"])
            )

        if not self.boss_spawned and now_ms + _EPS_MS >= self.boss_delay_ms:
            self.spawn_boss(world)

    def spawn_boss(self, world: "GameWorld") -> bool:
        """Create the boss once; later calls do nothing"""
        if self.boss_spawned:
            return False
        self.boss_spawned = True
        world.boss = Boss.spawn(world.width)
        return True
