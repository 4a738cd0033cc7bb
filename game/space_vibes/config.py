"""
Game tuning constants and the player configuration document

All distances are pixels, all speeds are pixels per tick and all
durations are either ticks (suffix `_ticks`) or milliseconds (suffix `_ms`).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict

# Loop parameters
GAME_CONFIG = {
    "width": 1280,
    "height": 720,
    "fps": 60,
    "n_stars": 80,
    "player_hit_radius": 20.0,       # rock overlap padding
    "player_bullet_speed": 12.0,
    "enemy_bullet_speed": 4.0,
    "enemy_hit_distance": 40.0,      # player projectile vs enemy
    "player_hit_distance": 20.0,     # enemy projectile vs player
    "pickup_distance": 20.0,         # any projectile vs power-up
    "boss_hit_tolerance": 4.0,
    "laser_hit_distance": 20.0,
    "shake_strength": 12.0,
    "shake_ticks": 12,
    "enemy_kill_score": 100,
    "boss_kill_score": 5000,
    "hit_amount": 25,                # shield drained per hit
}

# Player stats before any power-up
PLAYER_DEFAULTS = {
    "fire_interval_ms": 300,
    "rapid_fire_interval_ms": 80,
    "bullet_size": 5,
    "big_bullet_size": 12,
    "base_damage": 5,
    "big_damage": 15,
    "spread_offset": 0.3,
    "max_shield": 100,
    "dash_ticks": 10,
    "dash_cooldown_ticks": 120,
    "dash_speed": 20.0,
    "effect_duration_ms": 10000,
    "start_offset_y": 80,
}

SPAWN_CONFIG = {
    "enemy_interval_ms": 500,
    "rock_interval_ms": 3000,
    "powerup_interval_ms": 8000,
    "boss_delay_ms": 30000,
    "enemy_spawn_y": -20.0,
    "powerup_spawn_y": -20.0,
}

ENEMY_CONFIG = {
    "size": 20,
    "speed": 0.6,
    "slow_speed": 0.2,
    "fire_chance": 0.005,
}

ROCK_CONFIG = {
    "size": 64,
    "min_speed": 2.0,
    "speed_range": 3.0,
}

POWERUP_CONFIG = {
    "size": 24,
    "fall_speed": 1.0,
    "kinds": ("life", "rapid", "big", "spread", "shield"),
}

PARTICLE_CONFIG = {
    "life": 30,
    "size": 4,
    "max_speed": 3.0,
}

BOSS_CONFIG = {
    "width": 180,
    "height": 100,
    "center_y": 120,
    "max_health": 600,
    "phase_speeds": {1: 2.0, 2: 3.5, 3: 5.0},
    "fire_cooldown_ms": {1: 1000, 2: 700, 3: 400},
    "aggressive_ratio": 0.66,        # below -> phase 2
    "rage_ratio": 1 / 3,             # below -> phase 3
    "laser_chance": 0.01,
    "laser_charge_ticks": 60,
    "laser_live_ticks": 20,          # charge at or below this is lethal
    "explosion_particles": 80,
}


class ConfigError(ValueError):
    """Raised when the player configuration document is missing or malformed"""


@dataclass
class PlayerConfig:
    """Initial player parameters read from the JSON document"""
    width: float
    height: float
    speed: float
    lives: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"Player config must be an object, got {type(data).__name__}")

        missing = [k for k in ("width", "height", "speed", "lives") if k not in data]
        if missing:
            raise ConfigError(f"Player config is missing fields: {', '.join(missing)}")

        try:
            cfg = cls(
                width=float(data["width"]),
                height=float(data["height"]),
                speed=float(data["speed"]),
                lives=int(data["lives"]),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Player config has a non-numeric field: {exc}") from exc

        if cfg.width <= 0 or cfg.height <= 0:
            raise ConfigError("Player width and height must be positive")
        if cfg.speed < 0:
            raise ConfigError("Player speed must not be negative")
        if cfg.lives < 1:
            raise ConfigError("Player must start with at least one life")
        return cfg


def load_player_config(path: str) -> PlayerConfig:
    """Load the player document; any problem is fatal for session start"""
    if not os.path.exists(path):
        raise ConfigError(f"Player config not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Player config is not valid JSON: {exc}") from exc

    return PlayerConfig.from_dict(data)
