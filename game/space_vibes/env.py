"""
SpaceVibesEnv - Gymnasium wrapper around the game loop
------------------------------------------------------
- Gymnasium API, one env step == one 60 Hz tick
- MultiDiscrete action space: [move(9), shoot(2), dash(2), aim(8)]
- Vector observation: player state + K nearest enemies + M nearest
  enemy projectiles + nearest rock + boss state, all in [-1, 1]
- rgb_array rendering through the numpy raster surface

Quick test:
    python -m game.space_vibes.env
"""

from __future__ import annotations

import math
import random
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .boss import LaserState
from .canvas import RasterSurface
from .config import GAME_CONFIG, PLAYER_DEFAULTS, PlayerConfig
from .entities import InputState
from .render import draw_frame
from .utils import clamp, seed_everything
from .world import GameWorld

# move: 0 stay, then 8 compass directions starting at "up", clockwise
MOVE_DIRS = [
    (False, False, False, False),
    (True, False, False, False),
    (True, False, False, True),
    (False, False, False, True),
    (False, True, False, True),
    (False, True, False, False),
    (False, True, True, False),
    (False, False, True, False),
    (True, False, True, False),
]

AIM_DISTANCE = 100.0


class SpaceVibesEnv(gym.Env):
    """Headless play of one session per episode"""

    metadata = {"render_modes": ["rgb_array"], "render_fps": GAME_CONFIG["fps"]}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 640,
        height: int = 480,
        player_config: Optional[PlayerConfig] = None,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        m_bullets: int = 5,
        reward_score_scale: float = 0.01,
        penalty_life: float = 1.0,
        penalty_defeat: float = 5.0,
        bonus_victory: float = 10.0,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.player_config = player_config or PlayerConfig(width=60, height=60, speed=6, lives=3)
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets

        self.reward_score_scale = reward_score_scale
        self.penalty_life = penalty_life
        self.penalty_defeat = penalty_defeat
        self.bonus_victory = bonus_victory

        self.action_space = spaces.MultiDiscrete([9, 2, 2, 8])

        # Player: pos(2) lives(1) shield(1) dash cooldown(1) dashing(1) rapid/big/spread(3)
        # Each enemy: rel pos(2)
        # Each enemy bullet: rel pos(2) vel(2)
        # Nearest rock: present(1) rel pos(2)
        # Boss: present(1) rel pos(2) health(1) laser(1)
        obs_dim = 9 + self.k_enemies * 2 + self.m_bullets * 4 + 3 + 5
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

        self.world: GameWorld = None  # type: ignore
        self._step_count = 0
        self._surface: Optional[RasterSurface] = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        rng_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.world = GameWorld(
            self.player_config,
            width=self.width,
            height=self.height,
            rng=random.Random(rng_seed),
        )
        self._step_count = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        move, shoot, dash, aim = (int(a) for a in action)
        pl = self.world.player
        up, down, left, right = MOVE_DIRS[move]
        ax, ay = self._aim_dirs[aim % 8]

        inp = InputState(
            up=up,
            down=down,
            left=left,
            right=right,
            shoot=bool(shoot),
            dash=bool(dash),
            aim_x=pl.x + ax * AIM_DISTANCE,
            aim_y=pl.y + ay * AIM_DISTANCE,
        )

        score_before = self.world.score
        lives_before = pl.lives

        self.world.step(inp)
        self._step_count += 1

        reward = self._compute_reward(score_before, lives_before)
        terminated = self.world.game_over
        truncated = (not terminated) and self._step_count >= self.max_steps

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self):
        if self.render_mode != "rgb_array":
            return None
        if self._surface is None:
            self._surface = RasterSurface(self.width, self.height)
        draw_frame(self.world, self._surface)
        return self._surface.frame

    def close(self):
        self._surface = None

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _rel(self, x: float, y: float) -> List[float]:
        pl = self.world.player
        return [clamp((x - pl.x) / self.width, -1, 1), clamp((y - pl.y) / self.height, -1, 1)]

    def _get_obs(self) -> np.ndarray:
        w = self.world
        pl = w.player
        max_lives = max(1, self.player_config.lives * 2)

        obs = [
            pl.x / self.width * 2 - 1,
            pl.y / self.height * 2 - 1,
            clamp(pl.lives / max_lives, 0, 1) * 2 - 1,
            pl.shield / pl.max_shield * 2 - 1,
            pl.dash_cooldown / PLAYER_DEFAULTS["dash_cooldown_ticks"] * 2 - 1,
            1.0 if pl.dashing else -1.0,
            1.0 if "rapid" in pl.effects else -1.0,
            1.0 if "big" in pl.effects else -1.0,
            1.0 if pl.spread else -1.0,
        ]

        def dist2(o):
            return (o.x - pl.x) ** 2 + (o.y - pl.y) ** 2

        enemies = sorted(w.enemies, key=dist2)
        for i in range(self.k_enemies):
            obs += self._rel(enemies[i].x, enemies[i].y) if i < len(enemies) else [0.0, 0.0]

        bullets = sorted((p for p in w.projectiles if p.from_enemy), key=dist2)
        for i in range(self.m_bullets):
            if i < len(bullets):
                b = bullets[i]
                obs += self._rel(b.x, b.y) + [clamp(b.vx / 5, -1, 1), clamp(b.vy / 5, -1, 1)]
            else:
                obs += [0.0, 0.0, 0.0, 0.0]

        if w.rocks:
            r = min(w.rocks, key=lambda r: (r.x + r.size / 2 - pl.x) ** 2 + (r.y + r.size / 2 - pl.y) ** 2)
            obs += [1.0] + self._rel(r.x + r.size / 2, r.y + r.size / 2)
        else:
            obs += [-1.0, 0.0, 0.0]

        if w.boss is not None:
            b = w.boss
            laser = {LaserState.IDLE: -1.0, LaserState.WARNING: 0.0, LaserState.LETHAL: 1.0}[b.laser_state]
            obs += [1.0] + self._rel(b.center_x, b.center_y) + [b.health_ratio * 2 - 1, laser]
        else:
            obs += [-1.0, 0.0, 0.0, -1.0, -1.0]

        return np.clip(np.array(obs, dtype=np.float32), -1.0, 1.0)

    def _compute_reward(self, score_before: int, lives_before: int) -> float:
        w = self.world
        reward = (w.score - score_before) * self.reward_score_scale
        reward -= self.penalty_life * max(0, lives_before - w.player.lives)

        if w.game_over:
            reward += self.bonus_victory if w.victory else -self.penalty_defeat

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        w = self.world
        return {
            "score": w.score,
            "lives": w.player.lives,
            "shield": w.player.shield,
            "enemies_killed": w.enemies_killed,
            "bosses_killed": w.bosses_killed,
            "boss_present": w.boss is not None,
            "victory": w.victory,
            "num_enemies": len(w.enemies),
            "num_projectiles": len(w.projectiles),
            "step": self._step_count,
        }


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(seed: Optional[int] = 42, verbose: bool = True) -> float:
    """Run one episode with random actions and return the total reward"""
    env = SpaceVibesEnv()
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    if verbose:
        print(f"[SpaceVibesEnv] Random episode return: {total:.2f}  "
              f"score={info['score']}  steps={info['step']}  victory={info['victory']}")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode()
