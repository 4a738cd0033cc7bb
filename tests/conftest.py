import random

import pytest

from game.space_vibes.config import PlayerConfig
from game.space_vibes.hooks import GameHooks
from game.space_vibes.world import GameWorld

WIDTH = 800
HEIGHT = 600


class RecordingHooks(GameHooks):
    """Keeps every notification for later assertions"""

    def __init__(self):
        self.sounds = []
        self.scores = []
        self.lives = []
        self.summaries = []

    def play_sound(self, name):
        self.sounds.append(name)

    def on_score(self, score):
        self.scores.append(score)

    def on_lives(self, lives):
        self.lives.append(lives)

    def on_game_over(self, summary):
        self.summaries.append(summary)


class FixedRng(random.Random):
    """random() always returns the same value"""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def player_config():
    return PlayerConfig(width=60, height=60, speed=6, lives=3)


@pytest.fixture
def hooks():
    return RecordingHooks()


@pytest.fixture
def world(player_config, hooks):
    """Quiet world: no spawner, no stars, seeded rng"""
    return GameWorld(
        player_config,
        width=WIDTH,
        height=HEIGHT,
        rng=random.Random(1234),
        hooks=hooks,
        spawn=False,
        n_stars=0,
    )


@pytest.fixture
def no_enemy_fire(monkeypatch):
    from game.space_vibes.config import ENEMY_CONFIG
    monkeypatch.setitem(ENEMY_CONFIG, "fire_chance", 0.0)
