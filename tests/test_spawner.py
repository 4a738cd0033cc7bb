import pytest

from game.space_vibes.config import POWERUP_CONFIG
from game.space_vibes.spawner import IntervalTimer, Spawner


def test_interval_timer_counts_firings():
    t = IntervalTimer(500)
    assert t.poll(499) == 0
    assert t.poll(500) == 1
    assert t.poll(900) == 0
    assert t.poll(2000) == 3


def test_interval_timer_rejects_zero():
    with pytest.raises(ValueError):
        IntervalTimer(0)


def test_independent_timers(world):
    sp = Spawner()
    sp.tick(world, 3000)
    assert len(world.enemies) == 6
    assert len(world.rocks) == 1
    assert world.power_ups == []
    assert world.boss is None

    sp.tick(world, 8000)
    assert len(world.enemies) == 16
    assert len(world.rocks) == 2
    assert len(world.power_ups) == 1
    assert world.power_ups[0].kind in POWERUP_CONFIG["kinds"]


def test_spawn_positions(world):
    Spawner().tick(world, 8000)
    assert all(e.y == -20 and 0 <= e.x <= world.width for e in world.enemies)
    assert all(r.y == -r.size and 0 <= r.x <= world.width - r.size for r in world.rocks)
    assert all(2 <= r.speed < 5 for r in world.rocks)


def test_boss_spawns_exactly_once(world):
    sp = Spawner()
    sp.tick(world, 29999)
    assert world.boss is None
    sp.tick(world, 30000)
    boss = world.boss
    assert boss is not None
    sp.tick(world, 60000)
    assert world.boss is boss
    assert not sp.spawn_boss(world)


def test_world_spawns_first_enemy_after_half_a_second(player_config, hooks, no_enemy_fire):
    import random
    from game.space_vibes.world import GameWorld

    w = GameWorld(player_config, width=800, height=600, rng=random.Random(3), hooks=hooks, n_stars=0)
    for _ in range(29):
        w.step()
    assert w.enemies == []
    w.step()
    assert len(w.enemies) == 1
