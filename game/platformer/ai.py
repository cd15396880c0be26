"""
Per-frame enemy behaviour.

Only the boss goes through the physics step; the other kinds are kinematic
and never fall or ride platforms.
"""

from __future__ import annotations

import math
import random
from typing import List

from .constants import BOSS_ACCEL, JUMP_FORCE, VERTICAL_AMPLITUDE, VERTICAL_FREQUENCY
from .entities import Enemy, Platform, Player
from .physics import apply_gravity_and_collision


def _clamp_to_range(enemy: Enemy) -> int:
    """Keep the enemy inside [min_x, max_x]; returns which bound was hit (+1/-1/0)"""
    if enemy.max_x is not None and enemy.x + enemy.w > enemy.max_x:
        enemy.x = enemy.max_x - enemy.w
        return 1
    if enemy.min_x is not None and enemy.x < enemy.min_x:
        enemy.x = enemy.min_x
        return -1
    return 0


def update_vertical(enemy: Enemy, now_ms: float):
    phase = (now_ms / 1000.0) * VERTICAL_FREQUENCY + enemy.offset
    enemy.y = enemy.start_y - abs(math.sin(phase)) * VERTICAL_AMPLITUDE


def update_patroller(enemy: Enemy):
    enemy.vx = enemy.speed * enemy.patrol_dir
    enemy.x += enemy.vx
    hit = _clamp_to_range(enemy)
    if hit:
        enemy.patrol_dir = -hit


def update_chaser(enemy: Enemy, player: Player):
    direction = 1 if player.x > enemy.x else -1
    enemy.vx = direction * enemy.speed
    enemy.x += enemy.vx
    _clamp_to_range(enemy)


def update_boss(enemy: Enemy, player: Player, platforms: List[Platform], rng: random.Random):
    if player.x > enemy.x + 10:
        enemy.vx += BOSS_ACCEL
    elif player.x < enemy.x - 10:
        enemy.vx -= BOSS_ACCEL
    enemy.vx = max(min(enemy.vx, enemy.speed), -enemy.speed)

    if enemy.grounded and (player.y < enemy.y - 100 or rng.random() < 0.01):
        enemy.vy = JUMP_FORCE
        enemy.grounded = False

    apply_gravity_and_collision(enemy, platforms)


def update_enemy(enemy: Enemy, player: Player, platforms: List[Platform],
                 now_ms: float, rng: random.Random):
    """Advance one live enemy by a frame"""
    if enemy.land_timer > 0:
        enemy.land_timer -= 1

    if enemy.kind == "vertical":
        update_vertical(enemy, now_ms)
    elif enemy.kind == "patroller":
        update_patroller(enemy)
    elif enemy.kind == "chaser":
        update_chaser(enemy, player)
    elif enemy.kind == "boss":
        update_boss(enemy, player, platforms, rng)
    else:
        raise ValueError(f"Unknown enemy kind: {enemy.kind}")
