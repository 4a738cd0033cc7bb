"""
Bridge between the simulation and its outer surfaces (HUD, overlays, audio)

The world calls these on state changes; the default implementation does
nothing so the core can run headless.
"""

from __future__ import annotations

from dataclasses import dataclass

# Every cue the world can emit, with its sound file and playback volume
SOUND_CUES = {
    "shoot": ("shoot.wav", 0.4),
    "explode": ("explode.mp3", 0.6),
    "explode2": ("explode2.mp3", 0.6),
    "powerup": ("powerup.mp3", 0.5),
    "laser": ("laser.wav", 0.7),
}


@dataclass(frozen=True)
class SessionSummary:
    """What the end screen shows"""
    victory: bool
    score: int
    time_survived: int  # whole seconds
    enemies_killed: int
    bosses_killed: int


class GameHooks:
    """No-op sink for UI and audio notifications"""

    def play_sound(self, name: str):
        pass

    def on_score(self, score: int):
        pass

    def on_lives(self, lives: int):
        pass

    def on_game_over(self, summary: SessionSummary):
        pass
