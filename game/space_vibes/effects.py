"""
Power-up effects

Timed effects are stored on the player as {kind: expiry_ms} and expired
by the game loop, instead of fire-and-forget timers. Picking up the same
kind again refreshes its expiry. Reverting is idempotent.
"""

from __future__ import annotations

from typing import List

from .config import PLAYER_DEFAULTS
from .entities import Player

TIMED_KINDS = ("rapid", "big", "spread")

# Tolerance for comparing tick-derived timestamps
_EPS_MS = 1e-6


def activate_power_up(player: Player, kind: str, now_ms: float):
    """Apply a power-up to the player"""
    if kind == "life":
        player.lives += 1
    elif kind == "shield":
        player.shield = player.max_shield
    elif kind == "rapid":
        player.fire_interval_ms = PLAYER_DEFAULTS["rapid_fire_interval_ms"]
    elif kind == "big":
        player.bullet_size = PLAYER_DEFAULTS["big_bullet_size"]
    elif kind == "spread":
        player.spread = True
    else:
        raise ValueError(f"Unknown power-up kind: {kind}")

    if kind in TIMED_KINDS:
        player.effects[kind] = now_ms + PLAYER_DEFAULTS["effect_duration_ms"]


def revert_effect(player: Player, kind: str):
    """Put a timed stat back to its base value (safe to call twice)"""
    if kind == "rapid":
        player.fire_interval_ms = PLAYER_DEFAULTS["fire_interval_ms"]
    elif kind == "big":
        player.bullet_size = PLAYER_DEFAULTS["bullet_size"]
    elif kind == "spread":
        player.spread = False
    player.effects.pop(kind, None)


def expire_effects(player: Player, now_ms: float) -> List[str]:
    """Revert every effect whose expiry has been reached; returns the kinds reverted"""
    expired = [k for k, t in player.effects.items() if now_ms + _EPS_MS >= t]
    for kind in expired:
        revert_effect(player, kind)
    return expired


def remaining_ms(player: Player, kind: str, now_ms: float) -> float:
    if kind not in player.effects:
        return 0.0
    return max(0.0, player.effects[kind] - now_ms)
