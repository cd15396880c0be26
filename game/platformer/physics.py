"""
AABB physics: gravity integration, platform collision resolution and
moving-platform motion.

Integration is semi-implicit Euler with a fixed per-frame step.
"""

from __future__ import annotations

import math
from typing import Dict, List, Protocol, Tuple

from .constants import (
    GRAVITY, LANDING_TOLERANCE, MOVING_PLATFORM_RANGE, YELLOW_COIN_BOUNCE, YELLOW_COIN_GRAVITY,
)
from .entities import Platform
from .utils import rect_of, rects_overlap


class Body(Protocol):
    """Anything the physics step can move"""
    x: float
    y: float
    w: float
    h: float
    vx: float
    vy: float
    grounded: bool

    def leave_ground(self) -> None: ...

    def land(self, platform_id: str, was_falling: bool) -> None: ...


def apply_gravity_and_collision(body: Body, platforms: List[Platform], gravity: float = GRAVITY):
    """
    Integrate one frame and resolve overlaps platform-by-platform in list order.

    Landing is decided from the pre-step bottom edge against the platform top
    (within LANDING_TOLERANCE); hitting the underside uses the pre-step top
    against the platform bottom; everything else is a side hit.
    """
    was_falling = body.vy > 0

    body.vy += gravity
    body.x += body.vx
    body.y += body.vy
    body.grounded = False
    body.leave_ground()

    for plat in platforms:
        if not rects_overlap(rect_of(body), rect_of(plat)):
            continue
        prev_y = body.y - body.vy
        if prev_y + body.h <= plat.y + LANDING_TOLERANCE:
            body.y = plat.y - body.h
            body.vy = 0.0
            body.grounded = True
            body.land(plat.id, was_falling)
        elif prev_y >= plat.y + plat.h - LANDING_TOLERANCE:
            body.y = plat.y + plat.h
            body.vy = 0.0
        else:
            if body.vx > 0:
                body.x = plat.x - body.w
            elif body.vx < 0:
                body.x = plat.x + plat.w
            body.vx = 0.0


def move_platforms(platforms: List[Platform], now_ms: float) -> Dict[str, Tuple[float, float]]:
    """Place every moving platform on its sine path; returns per-id frame deltas"""
    deltas: Dict[str, Tuple[float, float]] = {}
    t = now_ms / 1000.0
    for plat in platforms:
        if not plat.moving:
            continue
        prev_x, prev_y = plat.x, plat.y
        offset = math.sin(t * plat.angular_speed + plat.phase) * MOVING_PLATFORM_RANGE
        if plat.move_axis == "horizontal":
            plat.x = plat.origin_x + offset
        else:
            plat.y = plat.origin_y + offset
        deltas[plat.id] = (plat.x - prev_x, plat.y - prev_y)
    return deltas


def step_loot(coin, platforms: List[Platform]):
    """Loot coins fall with their own gravity and bounce off platform tops"""
    coin.vy += YELLOW_COIN_GRAVITY
    coin.x += coin.vx
    coin.y += coin.vy

    for plat in platforms:
        if not rects_overlap(rect_of(coin), rect_of(plat)):
            continue
        if coin.vy > 0 and coin.y + coin.h - coin.vy <= plat.y + LANDING_TOLERANCE:
            coin.y = plat.y - coin.h
            coin.vy *= -YELLOW_COIN_BOUNCE
            coin.vx *= 0.8
