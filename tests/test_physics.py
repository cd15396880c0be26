import math

import pytest

from game.platformer.entities import Enemy, Platform, Player, YellowCoin
from game.platformer.physics import apply_gravity_and_collision, move_platforms, step_loot


def floor(y=500.0):
    return Platform("floor", 0.0, y, 1000.0, 40.0, kind="floor")


def test_landing_snaps_to_platform_top():
    plat = floor()
    player = Player(100.0, plat.y - 32 - 5, vy=5.0, jump_count=2)

    apply_gravity_and_collision(player, [plat])

    assert player.grounded
    assert player.vy == 0.0
    assert player.y + player.h == pytest.approx(plat.y)
    assert player.jump_count == 0
    assert player.platform_id == "floor"
    assert player.land_timer == 10


def test_landing_from_rest_does_not_squash():
    plat = floor()
    player = Player(100.0, plat.y - 32)

    apply_gravity_and_collision(player, [plat])

    assert player.grounded
    assert player.land_timer == 0


def test_hitting_underside_stops_upward_motion():
    ceiling = Platform("ceiling", 0.0, 100.0, 1000.0, 20.0)
    player = Player(100.0, 125.0, vy=-10.0)

    apply_gravity_and_collision(player, [ceiling])

    assert player.y == pytest.approx(120.0)
    assert player.vy == 0.0
    assert not player.grounded


def test_side_collision_pushes_out_horizontally():
    wall = Platform("wall", 200.0, 300.0, 50.0, 100.0)
    player = Player(170.0, 330.0, vx=5.0)

    apply_gravity_and_collision(player, [wall])

    assert player.x == pytest.approx(200.0 - player.w)
    assert player.vx == 0.0


def test_no_overlap_clears_ground_and_platform():
    player = Player(100.0, 100.0, grounded=True, platform_id="old")

    apply_gravity_and_collision(player, [floor()])

    assert not player.grounded
    assert player.platform_id is None
    assert player.vy == pytest.approx(0.6)


def test_boss_landing_arms_squash_timer():
    plat = floor()
    boss = Enemy("boss", "boss", 100.0, plat.y - 96 - 2, 96.0, 96.0, "#000000", 20, 20, vy=3.0)

    apply_gravity_and_collision(boss, [plat])

    assert boss.grounded
    assert boss.land_timer == 10


def test_moving_platform_follows_sine_and_reports_delta():
    plat = Platform("m", 300.0, 200.0, 100.0, 20.0, move_axis="horizontal",
                    origin_x=300.0, origin_y=200.0, phase=math.pi / 2, angular_speed=1.0)
    still = Platform("s", 0.0, 0.0, 10.0, 10.0)

    deltas = move_platforms([plat, still], 0.0)

    assert plat.x == pytest.approx(400.0)
    assert deltas == {"m": pytest.approx((100.0, 0.0))}


def test_vertical_mover_only_moves_y():
    plat = Platform("v", 300.0, 200.0, 100.0, 20.0, move_axis="vertical",
                    origin_x=300.0, origin_y=200.0, phase=-math.pi / 2, angular_speed=1.0)

    move_platforms([plat], 0.0)

    assert plat.x == 300.0
    assert plat.y == pytest.approx(100.0)


def test_loot_bounces_off_platform_top():
    plat = floor()
    coin = YellowCoin("yc", 100.0, plat.y - 14 - 1, vx=2.0, vy=4.0, lifetime=600)

    step_loot(coin, [plat])

    assert coin.y == pytest.approx(plat.y - coin.h)
    assert coin.vy == pytest.approx(-4.4 * 0.6)
    assert coin.vx == pytest.approx(1.6)
