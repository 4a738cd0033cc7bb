"""
Collision detection and resolution

Runs once per tick after every entity has moved. Removal is
mark-and-compact: a hit only clears the `alive` flag, later rules skip
dead entities, and the world compacts its lists at the end of the tick.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .boss import LaserState
from .config import GAME_CONFIG
from .effects import activate_power_up
from .entities import HitResult
from .utils import circle_rect_collide, distance, line_distance, point_in_expanded_rect

if TYPE_CHECKING:
    from .world import GameWorld


class CollisionEngine:
    """Applies the per-tick hit rules to a world, in a fixed order"""

    def __init__(self, world: "GameWorld"):
        self.world = world

    def resolve(self):
        rules = (
            self._cull_off_screen,
            self._rocks_vs_player,
            self._enemy_shots_vs_player,
            self._laser_vs_player,
            self._player_shots_vs_enemies,
            self._player_shots_vs_boss,
            self._shots_vs_power_ups,
        )
        for rule in rules:
            if self.world.game_over:
                return
            rule()

    # ----------------------------
    # Rules
    # ----------------------------

    def _cull_off_screen(self):
        w = self.world
        for p in w.projectiles:
            if p.alive and p.off_screen(w.width, w.height):
                p.alive = False
        for e in w.enemies:
            if e.y > w.height:
                e.alive = False
        for r in w.rocks:
            if r.y > w.height:
                r.alive = False
        for pu in w.power_ups:
            if pu.y > w.height:
                pu.alive = False

    def _rocks_vs_player(self):
        w = self.world
        pl = w.player
        pad = GAME_CONFIG["player_hit_radius"]
        for r in w.rocks:
            if not r.alive:
                continue
            if point_in_expanded_rect(pl.x, pl.y, r.x, r.y, r.size, r.size, pad):
                w.end_game(victory=False)
                return

    def _enemy_shots_vs_player(self):
        w = self.world
        pl = w.player
        for p in w.projectiles:
            if not p.alive or not p.from_enemy:
                continue
            if distance(p.x, p.y, pl.x, pl.y) >= GAME_CONFIG["player_hit_distance"]:
                continue
            # A dashing player lets the shot pass through
            if w.damage_player() is HitResult.IGNORED:
                continue
            p.alive = False
            if w.game_over:
                return

    def _laser_vs_player(self):
        w = self.world
        boss = w.boss
        if boss is None or boss.laser_state is not LaserState.LETHAL:
            return
        pl = w.player
        d = line_distance(pl.x, pl.y, boss.center_x, boss.center_y, boss.laser_angle)
        if d < GAME_CONFIG["laser_hit_distance"]:
            w.damage_player()

    def _player_shots_vs_enemies(self):
        w = self.world
        for e in w.enemies:
            if not e.alive:
                continue
            for p in w.projectiles:
                if not p.alive or p.from_enemy:
                    continue
                if distance(p.x, p.y, e.x, e.y) < GAME_CONFIG["enemy_hit_distance"]:
                    e.alive = False
                    p.alive = False
                    w.kill_enemy(e)
                    break

    def _player_shots_vs_boss(self):
        w = self.world
        boss = w.boss
        if boss is None:
            return
        tol = GAME_CONFIG["boss_hit_tolerance"]
        for p in w.projectiles:
            if not p.alive or p.from_enemy:
                continue
            if circle_rect_collide(p.x, p.y, p.radius + tol, boss.x, boss.y, boss.width, boss.height):
                p.alive = False
                boss.health -= p.damage
                if boss.defeated:
                    w.defeat_boss()
                    return

    def _shots_vs_power_ups(self):
        w = self.world
        for pu in w.power_ups:
            if not pu.alive:
                continue
            for p in w.projectiles:
                if not p.alive:
                    continue
                if distance(p.x, p.y, pu.x, pu.y) < GAME_CONFIG["pickup_distance"]:
                    pu.alive = False
                    p.alive = False
                    activate_power_up(w.player, pu.kind, w.now_ms)
                    w.hooks.play_sound("powerup")
                    if pu.kind == "life":
                        w.hooks.on_lives(w.player.lives)
                    break
