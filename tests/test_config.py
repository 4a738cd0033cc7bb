import json

import pytest

from game.space_vibes.config import ConfigError, PlayerConfig, load_player_config


def write(tmp_path, payload):
    path = tmp_path / "player.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return str(path)


def test_loads_player_document(tmp_path):
    cfg = load_player_config(write(tmp_path, {"width": 60, "height": 50, "speed": 6, "lives": 3}))
    assert cfg == PlayerConfig(width=60.0, height=50.0, speed=6.0, lives=3)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_player_config(str(tmp_path / "nope.json"))


def test_invalid_json(tmp_path):
    with pytest.raises(ConfigError):
        load_player_config(write(tmp_path, "{width: 60"))


@pytest.mark.parametrize(
    "payload",
    [
        [1, 2, 3],
        {"width": 60, "height": 60, "speed": 6},
        {"width": "wide", "height": 60, "speed": 6, "lives": 3},
        {"width": 60, "height": 60, "speed": 6, "lives": 0},
        {"width": -1, "height": 60, "speed": 6, "lives": 3},
    ],
)
def test_malformed_documents(tmp_path, payload):
    with pytest.raises(ConfigError):
        load_player_config(write(tmp_path, payload))


def test_shipped_default_loads():
    import os
    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    cfg = load_player_config(os.path.join(root, "player.json"))
    assert cfg.lives == 3
