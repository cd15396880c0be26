import pytest

from game.platformer.combat import (
    HIT_POGO, HIT_SWORD, apply_contact_damage, attack_damage, pogo_rect, resolve_hit,
    spawn_loot, sword_rect,
)
from game.platformer.constants import INVULNERABILITY_MS, POGO_BOUNCE_FORCE
from game.platformer.entities import Enemy, Player
from game.platformer.utils import make_rng


def make_enemy(x, y, hp=2, kind="patroller", w=40.0, h=40.0, **kwargs):
    return Enemy("e", kind, x, y, w, h, "#ffffff", hp, max(hp, 2), **kwargs)


def test_damage_depends_on_sword():
    assert attack_damage(False) == 1
    assert attack_damage(True) == 2


def test_pogo_needs_upgrade_air_down_and_attack():
    player = Player(100.0, 100.0)
    assert pogo_rect(player, False, True, True) is None
    assert pogo_rect(player, True, False, True) is None
    assert pogo_rect(player, True, True, False) is None
    assert pogo_rect(player, True, True, True) == (100.0, 132.0, 132.0, 172.0)

    player.grounded = True
    assert pogo_rect(player, True, True, True) is None


def test_sword_rect_follows_facing():
    player = Player(100.0, 100.0, attack_timer=5)
    assert sword_rect(player) == (132.0, 96.0, 182.0, 136.0)
    player.facing = -1
    assert sword_rect(player) == (50.0, 96.0, 100.0, 136.0)
    player.attack_timer = 0
    assert sword_rect(player) is None


def test_pogo_wins_over_sword():
    player = Player(100.0, 100.0, attack_timer=5, jump_count=2)
    enemy = make_enemy(120.0, 130.0)

    hit = resolve_hit(player, enemy, pogo_rect(player, True, True, True), sword_rect(player), 1)

    assert hit == HIT_POGO
    assert enemy.hp == 1
    assert enemy.x == 120.0
    assert player.vy == POGO_BOUNCE_FORCE
    assert player.jump_count == 1


def test_sword_hit_knocks_back_and_kills():
    player = Player(100.0, 100.0, attack_timer=5)
    enemy = make_enemy(140.0, 100.0)

    hit = resolve_hit(player, enemy, None, sword_rect(player), 2)

    assert hit == HIT_SWORD
    assert enemy.dead
    assert enemy.x == 160.0


def test_miss():
    player = Player(100.0, 100.0, attack_timer=5)
    enemy = make_enemy(500.0, 100.0)
    assert resolve_hit(player, enemy, None, sword_rect(player), 1) is None
    assert enemy.hp == 2


def test_contact_damage_respects_invulnerability():
    player = Player(100.0, 100.0)
    enemy = make_enemy(110.0, 100.0)

    assert apply_contact_damage(player, enemy, 1000.0)
    assert player.hp == 4
    assert player.invulnerable_until == 1000.0 + INVULNERABILITY_MS
    assert player.vx < 0

    player.x, player.y = 100.0, 100.0
    assert not apply_contact_damage(player, enemy, 1500.0)
    assert player.hp == 4

    assert apply_contact_damage(player, enemy, 2000.0)
    assert player.hp == 3


def test_dead_enemies_do_no_damage():
    player = Player(100.0, 100.0)
    enemy = make_enemy(110.0, 100.0, dead=True)
    assert not apply_contact_damage(player, enemy, 0.0)


@pytest.mark.parametrize("kind, is_rat, expected", [
    ("patroller", False, 1),
    ("boss", False, 5),
    ("chaser", True, 50),
])
def test_loot_counts(kind, is_rat, expected):
    enemy = make_enemy(0.0, 0.0, kind=kind, is_rat=is_rat)
    loot = spawn_loot(enemy, make_rng(0))
    assert len(loot) == expected
    assert len({c.id for c in loot}) == expected
