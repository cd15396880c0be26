import pytest

from game.platformer.constants import BIOME_COLORS, BOSS_HP, CANVAS_HEIGHT, RAT_BOSS_HP
from game.platformer.level_gen import (
    build_secret_arena, generate_level, is_boss_level, roll_biome,
)
from game.platformer.utils import make_rng


@pytest.mark.parametrize("level", [10, 20, 30])
def test_boss_level_layout(level):
    layout = generate_level(level, make_rng(1))

    assert layout.arena
    assert len(layout.enemies) == 1
    boss = layout.enemies[0]
    assert boss.kind == "boss"
    assert boss.hp == boss.max_hp == BOSS_HP
    assert len(layout.coins) == 4
    assert layout.door is not None and layout.door.locked


@pytest.mark.parametrize("seed", range(8))
def test_procedural_level_shape(seed):
    level = 3
    layout = generate_level(level, make_rng(seed))

    assert not layout.arena
    assert layout.platforms[0].id == "floor-start"
    end = layout.platforms[-1]
    assert end.id == "plat-end"
    assert end.x >= 2500 + 800 * level

    door = layout.door
    assert door.locked
    assert door.y + door.h == pytest.approx(end.y)
    assert end.x <= door.x <= end.x + end.w

    for plat in layout.platforms[1:-1]:
        assert 150.0 <= plat.origin_y <= CANVAS_HEIGHT - 80.0


@pytest.mark.parametrize("seed", range(8))
def test_guards_stand_on_static_platforms(seed):
    layout = generate_level(4, make_rng(seed))
    static_x = {p.x for p in layout.platforms if not p.moving}

    assert len(layout.enemies) <= min(5, len(layout.coins))
    assert len(layout.enemies) >= min(3, len(layout.coins))
    for enemy in layout.enemies:
        assert enemy.kind in ("vertical", "patroller", "chaser")
        assert enemy.min_x in static_x
        assert enemy.hp == enemy.max_hp


def test_same_seed_same_level():
    a = generate_level(5, make_rng(42))
    b = generate_level(5, make_rng(42))
    assert [(p.x, p.y) for p in a.platforms] == [(p.x, p.y) for p in b.platforms]
    assert [(c.x, c.y) for c in a.coins] == [(c.x, c.y) for c in b.coins]


def test_secret_arena_holds_only_the_rat():
    layout = build_secret_arena()
    assert layout.door is None
    assert layout.coins == []
    (rat,) = layout.enemies
    assert rat.is_rat
    assert rat.hp == RAT_BOSS_HP
    assert (rat.w, rat.h) == (80.0, 40.0)


def test_is_boss_level():
    assert is_boss_level(10)
    assert not is_boss_level(9)
    assert not is_boss_level(11)


def test_biome_rerolls_only_after_boss_levels():
    rng = make_rng(3)
    assert roll_biome(5, "#123456", rng) == "#123456"
    assert roll_biome(1, "#123456", rng) == "#123456"
    assert roll_biome(11, "#123456", rng) in BIOME_COLORS
    assert roll_biome(21, "#123456", rng) in BIOME_COLORS
