"""
Combat resolution: attack hitboxes, hit priority, damage, knockback and loot.
"""

from __future__ import annotations

import random
from typing import List, Optional

from .constants import (
    BOSS_LOOT, ENTITY_SIZE, INVULNERABILITY_MS, KNOCKBACK_FORCE_X, KNOCKBACK_FORCE_Y,
    NORMAL_LOOT, POGO_BOUNCE_FORCE, POGO_DEPTH, RAT_COIN_LIFETIME, RAT_LOOT,
    SWORD_KNOCKBACK, YELLOW_COIN_LIFETIME,
)
from .entities import Enemy, Player, YellowCoin
from .utils import Rect, rect_of, rects_overlap

HIT_POGO = "pogo"
HIT_SWORD = "sword"


def attack_damage(sharp_sword: bool) -> int:
    return 2 if sharp_sword else 1


def pogo_rect(player: Player, down_strike: bool, down: bool, attack: bool) -> Optional[Rect]:
    """Hitbox under the feet while airborne with down+attack held (needs the upgrade)"""
    if not (down_strike and not player.grounded and down and attack):
        return None
    feet = player.y + player.h
    return (player.x, feet, player.x + player.w, feet + POGO_DEPTH)


def sword_rect(player: Player) -> Optional[Rect]:
    """Hitbox in front of the player while a swing is active"""
    if player.attack_timer <= 0:
        return None
    reach = ENTITY_SIZE["sword_reach"]
    height = ENTITY_SIZE["sword_height"]
    if player.facing == 1:
        left, right = player.x + player.w, player.x + player.w + reach
    else:
        left, right = player.x - reach, player.x
    top = player.y + (player.h - height) / 2
    return (left, top, right, top + height)


def resolve_hit(player: Player, enemy: Enemy, pogo: Optional[Rect], sword: Optional[Rect],
                damage: int) -> Optional[str]:
    """
    Apply at most one hit to `enemy` this frame; pogo wins over sword.

    Returns HIT_POGO, HIT_SWORD or None. Marks the enemy dead at hp <= 0.
    """
    box = rect_of(enemy)
    if pogo is not None and rects_overlap(pogo, box):
        kind = HIT_POGO
        player.vy = POGO_BOUNCE_FORCE
        player.jump_count = 1
    elif sword is not None and rects_overlap(sword, box):
        kind = HIT_SWORD
        enemy.x += player.facing * SWORD_KNOCKBACK
    else:
        return None

    enemy.hp -= damage
    if enemy.hp <= 0:
        enemy.dead = True
    return kind


def apply_contact_damage(player: Player, enemy: Enemy, now_ms: float) -> bool:
    """Touching a live enemy costs 1 HP unless the player is invulnerable"""
    if enemy.dead or now_ms < player.invulnerable_until:
        return False
    if not rects_overlap(rect_of(player), rect_of(enemy)):
        return False
    player.hp -= 1
    player.invulnerable_until = now_ms + INVULNERABILITY_MS
    player.vx = (-1 if player.x < enemy.x else 1) * KNOCKBACK_FORCE_X
    player.vy = KNOCKBACK_FORCE_Y
    player.grounded = False
    return True


def spawn_loot(enemy: Enemy, rng: random.Random) -> List[YellowCoin]:
    """Yellow coins dropped by a dead enemy: 50 for the rat, 5 for a boss, 1 otherwise"""
    cx = enemy.x + enemy.w / 2
    if enemy.is_rat:
        return [
            YellowCoin(f"yc-rat-{k}", cx, enemy.y,
                       vx=rng.random() * 14 - 7, vy=-8 - rng.random() * 8,
                       lifetime=RAT_COIN_LIFETIME)
            for k in range(RAT_LOOT)
        ]
    if enemy.kind == "boss":
        return [
            YellowCoin(f"yc-boss-{k}", cx, enemy.y,
                       vx=rng.random() * 10 - 5, vy=-8 - rng.random() * 4,
                       lifetime=YELLOW_COIN_LIFETIME)
            for k in range(BOSS_LOOT)
        ]
    return [
        YellowCoin(f"yc-{enemy.id}-{k}", enemy.x, enemy.y,
                   vx=(rng.random() - 0.5) * 4, vy=-4.0,
                   lifetime=YELLOW_COIN_LIFETIME)
        for k in range(NORMAL_LOOT)
    ]
