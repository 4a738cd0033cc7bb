"""
GameWorld - the fixed-tick simulation driver
--------------------------------------------
- One `step()` per display refresh (60 Hz), no wall clock involved
- Per-kind entity lists, compacted once per tick
- Spawner timers and power-up expiry run on the tick-derived clock
- Score / lives / game over are pushed out through GameHooks

The world never draws; painters read its state (see render.py).
"""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .boss import Boss
from .collisions import CollisionEngine
from .config import BOSS_CONFIG, GAME_CONFIG, PlayerConfig
from .effects import expire_effects
from .entities import (
    Enemy,
    HitResult,
    InputState,
    Particle,
    Player,
    PowerUp,
    Projectile,
    Rock,
    Star,
    make_explosion,
)
from .hooks import GameHooks, SessionSummary
from .spawner import Spawner


class GameWorld:
    """All mutable state of one play session"""

    def __init__(
        self,
        player_config: PlayerConfig,
        width: int = GAME_CONFIG["width"],
        height: int = GAME_CONFIG["height"],
        fps: int = GAME_CONFIG["fps"],
        rng: Optional[random.Random] = None,
        hooks: Optional[GameHooks] = None,
        spawn: bool = True,
        n_stars: int = GAME_CONFIG["n_stars"],
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        self.width = width
        self.height = height
        self.fps = fps
        self.rng = rng if rng is not None else random.Random()
        self.hooks = hooks if hooks is not None else GameHooks()

        self.player = Player.from_config(player_config, width, height)
        self.boss: Optional[Boss] = None
        self.projectiles: List[Projectile] = []
        self.enemies: List[Enemy] = []
        self.rocks: List[Rock] = []
        self.power_ups: List[PowerUp] = []
        self.particles: List[Particle] = []
        self.stars: List[Star] = [Star.spawn(self.rng, width, height) for _ in range(n_stars)]

        self.spawner: Optional[Spawner] = Spawner() if spawn else None
        self.collisions = CollisionEngine(self)

        # Global state
        self.frame = 0
        self.score = 0
        self.enemies_killed = 0
        self.bosses_killed = 0
        self.game_over = False
        self.victory = False
        self.shake_time = 0
        self.shake_strength = 0.0
        self.shake_offset: Tuple[float, float] = (0.0, 0.0)

    # ----------------------------
    # Clock
    # ----------------------------

    @property
    def now_ms(self) -> float:
        # Derived from the tick count so it never drifts
        return self.frame * 1000.0 / self.fps

    @property
    def elapsed_seconds(self) -> float:
        return self.now_ms / 1000.0

    # ----------------------------
    # Main loop
    # ----------------------------

    def step(self, inp: Optional[InputState] = None) -> bool:
        """Advance one tick. Returns False once the session has ended."""
        if self.game_over:
            return False
        if inp is None:
            inp = InputState(aim_x=self.player.x, aim_y=0.0)

        self.frame += 1
        now = self.now_ms

        self._update_shake()

        if self.spawner is not None:
            self.spawner.tick(self, now)
        expire_effects(self.player, now)

        self._advance(inp, now)
        self.collisions.resolve()
        self._compact()

        return not self.game_over

    def _advance(self, inp: InputState, now: float):
        w, h = self.width, self.height
        pl = self.player

        for s in self.stars:
            s.update(self.rng, w, h)

        if inp.dash:
            pl.start_dash()
        pl.update(inp, w, h)

        if inp.shoot:
            shots = pl.shoot(now, inp.aim_x, inp.aim_y)
            if shots:
                self.projectiles.extend(shots)
                self.hooks.play_sound("shoot")

        for r in self.rocks:
            r.update()

        for p in self.projectiles:
            p.update()

        for p in self.particles:
            p.update()

        for e in self.enemies:
            e.update(slowed=pl.enemy_slow)
            shot = e.maybe_shoot(self.rng, pl.x, pl.y)
            if shot is not None:
                self.projectiles.append(shot)

        if self.boss is not None:
            boss = self.boss
            boss.update(w)
            if boss.try_start_laser(self.rng, pl.x, pl.y):
                self.hooks.play_sound("laser")
            self.projectiles.extend(boss.fire(now))
            boss.update_laser()

        for pu in self.power_ups:
            pu.update()

    def _compact(self):
        self.projectiles = [p for p in self.projectiles if p.alive]
        self.enemies = [e for e in self.enemies if e.alive]
        self.rocks = [r for r in self.rocks if r.alive]
        self.power_ups = [p for p in self.power_ups if p.alive]
        self.particles = [p for p in self.particles if p.alive]

    def _update_shake(self):
        if self.shake_time > 0:
            self.shake_time -= 1
            self.shake_offset = (
                (self.rng.random() - 0.5) * self.shake_strength,
                (self.rng.random() - 0.5) * self.shake_strength,
            )
        else:
            self.shake_offset = (0.0, 0.0)

    # ----------------------------
    # State transitions
    # ----------------------------

    def start_shake(self, strength: float = 10.0, duration: int = 10):
        self.shake_strength = strength
        self.shake_time = duration

    def add_score(self, points: int):
        if points < 0:
            raise ValueError("Score can only increase")
        self.score += points
        self.hooks.on_score(self.score)

    def damage_player(self) -> HitResult:
        """Apply one hit to the player, with shake and defeat when a life is lost"""
        result = self.player.take_hit(GAME_CONFIG["hit_amount"])
        if result is HitResult.LIFE:
            self.start_shake(GAME_CONFIG["shake_strength"], GAME_CONFIG["shake_ticks"])
            self.hooks.on_lives(self.player.lives)
            if self.player.lives <= 0:
                self.end_game(victory=False)
        return result

    def explode(self, x: float, y: float, count: int = 20, color: str = "orange"):
        self.hooks.play_sound(self.rng.choice(("explode", "explode2")))
        self.particles.extend(make_explosion(self.rng, x, y, count, color))

    def kill_enemy(self, enemy: Enemy):
        self.explode(enemy.x, enemy.y, 20, "orange")
        self.add_score(GAME_CONFIG["enemy_kill_score"])
        self.enemies_killed += 1

    def defeat_boss(self):
        boss = self.boss
        if boss is None:
            return
        # Capture the center before the reference goes away
        cx, cy = boss.center_x, boss.center_y
        self.boss = None
        self.add_score(GAME_CONFIG["boss_kill_score"])
        self.bosses_killed += 1
        self.explode(cx, cy, BOSS_CONFIG["explosion_particles"], "red")
        self.end_game(victory=True)

    def end_game(self, victory: bool):
        """Terminal, one-way transition"""
        if self.game_over:
            return
        self.game_over = True
        self.victory = victory
        self.hooks.on_game_over(self.summary())

    def summary(self) -> SessionSummary:
        return SessionSummary(
            victory=self.victory,
            score=self.score,
            time_survived=int(self.elapsed_seconds),
            enemies_killed=self.enemies_killed,
            bosses_killed=self.bosses_killed,
        )
