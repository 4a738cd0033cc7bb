import math

import pytest

from game.space_vibes.entities import Enemy, HitResult, InputState, Player
from conftest import FixedRng

W, H = 800, 600


@pytest.fixture
def player(player_config):
    return Player.from_config(player_config, W, H)


def test_spawns_bottom_center(player):
    assert player.x == W / 2
    assert player.y == H - 80
    assert player.lives == 3
    assert player.fire_interval_ms == 300
    assert player.bullet_size == 5


def test_movement_is_clamped_to_margin(player):
    for _ in range(500):
        player.update(InputState(left=True, up=True), W, H)
    assert player.x == 30
    assert player.y == 30

    for _ in range(500):
        player.update(InputState(right=True, down=True), W, H)
    assert player.x == W - 30
    assert player.y == H - 30


def test_blocked_direction_has_no_effect(player):
    player.x = 30
    player.update(InputState(left=True), W, H)
    assert player.x == 30


def test_dash_only_when_cooldown_elapsed(player):
    assert player.start_dash()
    assert player.dashing
    assert player.dash_cooldown == 120
    assert not player.start_dash()


def test_dash_lasts_ten_ticks_and_cooldown_counts_down(player):
    player.start_dash()
    dashing_ticks = 0
    last_cooldown = player.dash_cooldown
    for _ in range(150):
        player.update(InputState(), W, H)
        assert player.dash_cooldown <= last_cooldown
        last_cooldown = player.dash_cooldown
        if player.dashing:
            dashing_ticks += 1
    assert dashing_ticks == 10
    assert player.dash_cooldown == 0
    assert player.start_dash()


def test_dash_moves_faster(player):
    player.start_dash()
    x0 = player.x
    player.update(InputState(right=True), W, H)
    assert player.x - x0 == pytest.approx(20)


def test_shield_absorbs_before_life(player):
    player.shield = 50
    assert player.take_hit(25) is HitResult.SHIELD
    assert player.shield == 25
    assert player.lives == 3


def test_shield_floors_at_zero(player):
    player.shield = 10
    player.take_hit(25)
    assert player.shield == 0
    assert player.lives == 3


def test_hit_without_shield_costs_one_life(player):
    assert player.take_hit(25) is HitResult.LIFE
    assert player.lives == 2
    assert player.shield == 0


def test_dashing_player_ignores_hits(player):
    player.shield = 50
    player.start_dash()
    assert player.take_hit(25) is HitResult.IGNORED
    assert player.shield == 50
    assert player.lives == 3


def test_shoot_is_rate_limited(player):
    shots = player.shoot(1000, player.x, 0)
    assert len(shots) == 1
    assert player.shoot(1200, player.x, 0) == []
    assert len(player.shoot(1300, player.x, 0)) == 1


def test_shot_aims_at_target(player):
    (shot,) = player.shoot(0, player.x + 100, player.y)
    assert shot.vx == pytest.approx(12)
    assert shot.vy == pytest.approx(0, abs=1e-9)
    assert not shot.from_enemy
    assert shot.radius == 5
    assert shot.damage == 5


def test_spread_adds_two_offset_shots(player):
    player.spread = True
    shots = player.shoot(0, player.x, 0)
    assert len(shots) == 3
    angles = sorted(math.atan2(s.vy, s.vx) for s in shots)
    base = -math.pi / 2
    assert angles == pytest.approx([base - 0.3, base, base + 0.3])


def test_big_bullets_hit_harder(player):
    player.bullet_size = 12
    (shot,) = player.shoot(0, player.x, 0)
    assert shot.radius == 12
    assert shot.damage == 15


def test_enemy_fires_at_target_when_roll_is_under_chance():
    enemy = Enemy(x=100, y=100)
    shot = enemy.maybe_shoot(FixedRng(0.0), 400, 500)
    assert shot is not None
    assert shot.from_enemy
    assert (shot.x, shot.y) == (100, 100)
    # 300/400 toward the target, scaled to speed 4
    assert shot.vx == pytest.approx(2.4)
    assert shot.vy == pytest.approx(3.2)
    assert math.hypot(shot.vx, shot.vy) == pytest.approx(4)


def test_enemy_holds_fire_at_the_chance_boundary():
    enemy = Enemy(x=100, y=100)
    assert enemy.maybe_shoot(FixedRng(0.005), 400, 500) is None
