"""
Procedural level construction.

- Every 10th level is a fixed boss arena
- Other levels are a chain of floating platforms with coins, guard enemies
  and a door at the far end
- The secret arena holds a single giant rat
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import (
    BIOME_COLORS, BOSS_HP, BOSS_LEVEL_EVERY, CANVAS_HEIGHT, CANVAS_WIDTH, COLORS,
    ENEMY_HP, ENTITY_SIZE, MOVING_PLATFORM_SPEED, RAT_BOSS_HP, SPEED_BOSS,
    SPEED_CHASER, SPEED_PATROLLER, SPEED_RAT,
)
from .entities import Coin, Door, Enemy, Platform

PLAYER_SPAWN: Tuple[float, float] = (50.0, CANVAS_HEIGHT - 150.0)
SECRET_SPAWN: Tuple[float, float] = (100.0, CANVAS_HEIGHT - 150.0)


@dataclass
class LevelLayout:
    """Freshly built entity collections for one level"""
    platforms: List[Platform] = field(default_factory=list)
    coins: List[Coin] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    door: Optional[Door] = None
    player_spawn: Tuple[float, float] = PLAYER_SPAWN
    arena: bool = False


def is_boss_level(level: int) -> bool:
    return level % BOSS_LEVEL_EVERY == 0


def roll_biome(level: int, current: str, rng: random.Random) -> str:
    """Background re-rolls on the level right after each boss (11, 21, ...)"""
    if level > 1 and level % BOSS_LEVEL_EVERY == 1:
        return rng.choice(BIOME_COLORS)
    return current


def _arena_shell(prefix: str) -> List[Platform]:
    return [
        Platform(f"{prefix}floor", 0.0, CANVAS_HEIGHT - 40.0, float(CANVAS_WIDTH), 40.0, kind="floor"),
        Platform(f"{prefix}wall-left", -50.0, 0.0, 50.0, float(CANVAS_HEIGHT), kind="floor"),
        Platform(f"{prefix}wall-right", float(CANVAS_WIDTH), 0.0, 50.0, float(CANVAS_HEIGHT), kind="floor"),
    ]


def _coin(cid: str, x: float, y: float) -> Coin:
    return Coin(cid, x, y)


def build_boss_arena() -> LevelLayout:
    """Fixed arena: floor, two walls, a central ledge, the boss and four coins"""
    layout = LevelLayout(arena=True)
    layout.platforms = _arena_shell("arena-")

    plat_w = 360.0
    plat_x = (CANVAS_WIDTH - plat_w) / 2
    plat_y = CANVAS_HEIGHT - 220.0
    layout.platforms.append(Platform("boss-center-plat", plat_x, plat_y, plat_w, 30.0, kind="floating"))

    size = float(ENTITY_SIZE["boss"])
    layout.enemies.append(Enemy(
        id="boss", kind="boss",
        x=CANVAS_WIDTH - 200.0, y=CANVAS_HEIGHT - 150.0, w=size, h=size,
        color=COLORS["boss"], hp=BOSS_HP, max_hp=BOSS_HP, speed=SPEED_BOSS,
    ))

    positions = [
        (plat_x + 20, plat_y - 60),               # left edge of ledge
        (plat_x + plat_w - 40, plat_y - 60),      # right edge of ledge
        (plat_x + plat_w / 2 - 10, plat_y - 140),  # high above ledge
        (100.0, CANVAS_HEIGHT - 100.0),           # near start
    ]
    layout.coins = [_coin(f"boss-coin-{i}", x, y) for i, (x, y) in enumerate(positions)]
    layout.door = Door(CANVAS_WIDTH - 100.0, CANVAS_HEIGHT - 100.0)
    return layout


def build_secret_arena() -> LevelLayout:
    """Walled floor with one giant rat and nothing to collect"""
    layout = LevelLayout(arena=True, player_spawn=SECRET_SPAWN)
    layout.platforms = _arena_shell("secret-")
    layout.enemies.append(Enemy(
        id="giant-rat", kind="chaser",
        x=CANVAS_WIDTH - 200.0, y=CANVAS_HEIGHT - 100.0, w=80.0, h=40.0,
        color=COLORS["rat"], hp=RAT_BOSS_HP, max_hp=RAT_BOSS_HP,
        speed=SPEED_RAT, min_x=0.0, max_x=float(CANVAS_WIDTH), is_rat=True,
    ))
    return layout


def _guard_enemy(idx: int, plat: Platform, rng: random.Random) -> Enemy:
    roll = rng.random()
    if roll < 0.33:
        kind, color = "vertical", COLORS["enemy_vertical"]
    elif roll < 0.66:
        kind, color = "patroller", COLORS["enemy_patroller"]
    else:
        kind, color = "chaser", COLORS["enemy_chaser"]

    size = float(ENTITY_SIZE["enemy"])
    top = plat.y - size
    return Enemy(
        id=f"enemy-{idx}", kind=kind,
        x=plat.x + plat.w / 2 - size / 2, y=top, w=size, h=size,
        color=color, hp=ENEMY_HP, max_hp=ENEMY_HP,
        start_y=top, offset=rng.random() * math.pi * 2,
        min_x=plat.x, max_x=plat.x + plat.w,
        patrol_dir=1 if rng.random() > 0.5 else -1,
        speed=SPEED_PATROLLER if kind == "patroller" else SPEED_CHASER,
    )


def build_procedural_level(level: int, rng: random.Random) -> LevelLayout:
    """Chain of floating platforms to a target length of 2500 + 800 * level"""
    layout = LevelLayout()
    platforms = layout.platforms
    coins = layout.coins

    level_length = 2500 + level * 800
    platforms.append(Platform("floor-start", 0.0, CANVAS_HEIGHT - 40.0, 300.0, 40.0, kind="floor"))

    current_x = 300.0
    current_y = CANVAS_HEIGHT - 40.0
    plat_h = float(ENTITY_SIZE["platform_h"])

    while current_x < level_length:
        gap = 80 + rng.random() * 100
        next_y = current_y + rng.random() * 500 - 250
        next_y = min(max(next_y, 150.0), CANVAS_HEIGHT - 80.0)
        plat_w = 80 + rng.random() * 120
        px = current_x + gap

        is_moving = rng.random() < 0.3
        axis = "horizontal" if rng.random() < 0.5 else "vertical"
        platforms.append(Platform(
            f"plat-{len(platforms)}", px, next_y, plat_w, plat_h, kind="floating",
            move_axis=axis if is_moving else None,
            origin_x=px, origin_y=next_y,
            phase=rng.random() * math.pi * 2,
            angular_speed=MOVING_PLATFORM_SPEED + rng.random(),
        ))

        if rng.random() < 0.6:
            if rng.random() < 0.4:
                coins.append(_coin(f"coin-air-{len(coins)}", px + plat_w / 2, next_y - 120))
            elif rng.random() < 0.7:
                coins.append(_coin(f"coin-gap-{len(coins)}", current_x + gap / 2, min(current_y, next_y) - 50))

        current_x += gap + plat_w
        current_y = next_y

    final_y = min(max(current_y, 200.0), CANVAS_HEIGHT - 100.0)
    end = Platform("plat-end", current_x + 100, final_y, 250.0, 40.0, kind="floating")
    platforms.append(end)
    door_w, door_h = float(ENTITY_SIZE["door_w"]), float(ENTITY_SIZE["door_h"])
    layout.door = Door(end.x + end.w / 2 - door_w / 2, end.y - door_h)

    # Guards sit on the static platform closest (in x) to a random pick of coins
    num_enemies = rng.randint(3, 5)
    guarded = list(coins)
    rng.shuffle(guarded)
    anchors = [p for p in platforms if not p.moving]
    for idx, coin in enumerate(guarded[:num_enemies]):
        plat = min(anchors, key=lambda p: abs(p.x - coin.x))
        layout.enemies.append(_guard_enemy(idx, plat, rng))

    return layout


def generate_level(level: int, rng: random.Random) -> LevelLayout:
    """Build the layout for `level` (boss arena on multiples of 10)"""
    if is_boss_level(level):
        return build_boss_arena()
    return build_procedural_level(level, rng)
