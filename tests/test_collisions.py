import pytest

from game.space_vibes.boss import Boss, LaserState
from game.space_vibes.entities import Enemy, PowerUp, Projectile, Rock


def enemy_shot_at(x, y):
    return Projectile(x=x, y=y, vx=0, vy=0, from_enemy=True)


def player_shot_at(x, y, radius=5, damage=5):
    return Projectile(x=x, y=y, vx=0, vy=0, from_enemy=False, radius=radius, damage=damage)


def test_enemy_shot_costs_a_life(world, hooks):
    pl = world.player
    world.projectiles.append(enemy_shot_at(pl.x + 5, pl.y))
    world.step()
    assert pl.lives == 2
    assert world.projectiles == []
    assert world.shake_time == 12
    assert hooks.lives == [2]


def test_enemy_shot_drains_shield_first(world):
    pl = world.player
    pl.shield = 50
    world.projectiles.append(enemy_shot_at(pl.x, pl.y))
    world.step()
    assert pl.shield == 25
    assert pl.lives == 3
    assert world.shake_time == 0


def test_dashing_player_is_not_hit_and_shot_survives(world):
    pl = world.player
    pl.start_dash()
    world.projectiles.append(enemy_shot_at(pl.x, pl.y))
    world.step()
    assert pl.lives == 3
    assert len(world.projectiles) == 1


def test_last_life_ends_in_defeat(world, hooks):
    pl = world.player
    pl.lives = 1
    world.projectiles.append(enemy_shot_at(pl.x, pl.y))
    assert not world.step()
    assert world.game_over
    assert not world.victory
    assert len(hooks.summaries) == 1
    assert not hooks.summaries[0].victory


def test_off_screen_projectiles_removed(world):
    world.projectiles += [
        player_shot_at(-1, 100),
        player_shot_at(100, world.height + 1),
        player_shot_at(100, 100),
    ]
    world.step()
    assert len(world.projectiles) == 1
    assert world.projectiles[0].x == 100


def test_player_shot_kills_enemy(world, hooks, no_enemy_fire):
    world.enemies.append(Enemy(x=200, y=200))
    world.projectiles.append(player_shot_at(200, 230))
    world.step()
    assert world.enemies == []
    assert world.projectiles == []
    assert world.score == 100
    assert world.enemies_killed == 1
    assert len(world.particles) == 20
    assert hooks.scores == [100]
    assert hooks.sounds[-1] in ("explode", "explode2")


def test_one_shot_kills_one_enemy(world, no_enemy_fire):
    world.enemies += [Enemy(x=200, y=200), Enemy(x=210, y=200)]
    world.projectiles.append(player_shot_at(205, 200))
    world.step()
    assert len(world.enemies) == 1
    assert world.score == 100


def test_neighbours_are_not_skipped(world, no_enemy_fire):
    # Three enemies, three shots: every pair resolves in the same tick
    for x in (100, 300, 500):
        world.enemies.append(Enemy(x=x, y=200))
        world.projectiles.append(player_shot_at(x, 200))
    world.step()
    assert world.enemies == []
    assert world.projectiles == []
    assert world.score == 300


def test_enemy_shots_do_not_kill_enemies(world, no_enemy_fire):
    world.enemies.append(Enemy(x=200, y=200))
    world.projectiles.append(enemy_shot_at(200, 200))
    world.step()
    assert len(world.enemies) == 1
    assert world.score == 0


def test_rock_overlap_is_instant_defeat(world, hooks):
    pl = world.player
    pl.shield = 100
    world.rocks.append(Rock(x=pl.x - 10, y=pl.y - 10, speed=0))
    world.step()
    assert world.game_over
    assert not world.victory
    assert pl.lives == 3
    assert hooks.summaries[0].victory is False


def test_rock_near_miss(world):
    pl = world.player
    world.rocks.append(Rock(x=pl.x + 25, y=pl.y - 10, speed=0))
    world.step()
    assert not world.game_over


@pytest.mark.parametrize("kind", ["rapid", "big", "spread", "shield", "life"])
def test_shooting_power_up_collects_it(world, hooks, kind):
    world.power_ups.append(PowerUp(x=300, y=300, kind=kind))
    world.projectiles.append(player_shot_at(300, 301))
    world.step()
    pl = world.player
    assert world.power_ups == []
    assert world.projectiles == []
    assert hooks.sounds == ["powerup"]
    expected = {
        "rapid": lambda: pl.fire_interval_ms == 80,
        "big": lambda: pl.bullet_size == 12,
        "spread": lambda: pl.spread,
        "shield": lambda: pl.shield == 100,
        "life": lambda: pl.lives == 4,
    }
    assert expected[kind]()


def test_enemy_shot_also_collects_power_up(world):
    world.power_ups.append(PowerUp(x=300, y=300, kind="rapid"))
    world.projectiles.append(enemy_shot_at(300, 301))
    world.step()
    assert world.power_ups == []
    assert world.player.fire_interval_ms == 80


def test_power_up_falls_off_screen(world):
    world.power_ups.append(PowerUp(x=300, y=world.height, kind="life"))
    world.step()
    assert world.power_ups == []
    assert world.player.lives == 3


def test_player_shot_damages_boss(world):
    world.boss = Boss.spawn(world.width)
    world.projectiles.append(player_shot_at(400, 176))
    world.step()
    assert world.boss.health == 595
    assert all(p.from_enemy for p in world.projectiles)


def test_big_shot_does_fifteen(world):
    world.boss = Boss.spawn(world.width)
    world.player.bullet_size = 12
    world.projectiles.append(player_shot_at(400, 176, radius=12, damage=world.player.damage))
    world.step()
    assert world.boss.health == 585


def test_shot_past_boss_misses(world):
    world.boss = Boss.spawn(world.width)
    world.projectiles.append(player_shot_at(400, 180))
    world.step()
    assert world.boss.health == 600


def test_lethal_laser_hits_player(world, hooks):
    boss = Boss.spawn(world.width)
    boss.health = 300
    boss.update_phase()
    pl = world.player
    boss.start_laser(pl.x, pl.y)
    boss.laser_charge = 21
    world.boss = boss
    world.step()
    assert boss.laser_state is LaserState.LETHAL
    assert pl.lives == 2


def test_warning_laser_is_harmless(world):
    boss = Boss.spawn(world.width)
    boss.health = 300
    boss.update_phase()
    pl = world.player
    boss.start_laser(pl.x, pl.y)
    world.boss = boss
    world.step()
    assert boss.laser_state is LaserState.WARNING
    assert pl.lives == 3


def test_dash_ignores_laser(world):
    boss = Boss.spawn(world.width)
    boss.health = 300
    boss.update_phase()
    pl = world.player
    pl.start_dash()
    boss.start_laser(pl.x, pl.y)
    boss.laser_charge = 21
    world.boss = boss
    world.step()
    assert pl.lives == 3


def test_laser_hits_for_every_lethal_tick(world, monkeypatch):
    from game.space_vibes.config import BOSS_CONFIG
    monkeypatch.setitem(BOSS_CONFIG, "laser_chance", 0.0)

    boss = Boss.spawn(world.width)
    boss.health = 300
    boss.update_phase()
    world.boss = boss

    pl = world.player
    pl.x, pl.y = 700, boss.center_y
    pl.lives = 50
    # Horizontal beam through the player's row; the boss moves along it
    boss.start_laser(pl.x, pl.y)

    hit_charges = []
    for _ in range(60):
        lives = pl.lives
        world.step()
        if pl.lives < lives:
            hit_charges.append(boss.laser_charge)

    assert hit_charges == list(range(20, -1, -1))
    assert pl.lives == 50 - 21

    world.step()
    assert boss.laser_state is LaserState.IDLE


def test_rock_leaving_bottom_edge_is_removed(world):
    world.rocks.append(Rock(x=100, y=world.height, speed=2))
    world.step()
    assert world.rocks == []
    assert not world.game_over
