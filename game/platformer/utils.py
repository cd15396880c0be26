"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional

# (left, top, right, bottom) in screen coordinates, y grows downward
Rect = Tuple[float, float, float, float]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def rect_of(entity) -> Rect:
    """Bounding box of anything with x, y, w, h"""
    return (entity.x, entity.y, entity.x + entity.w, entity.y + entity.h)


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Strict AABB overlap; touching edges do not count"""
    return a[2] > b[0] and a[0] < b[2] and a[3] > b[1] and a[1] < b[3]


def center_of(entity) -> Tuple[float, float]:
    return entity.x + entity.w / 2, entity.y + entity.h / 2


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Gameplay RNG; unseeded instances draw entropy from the OS/wall clock"""
    return random.Random(seed)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """'#rrggbb' -> (r, g, b)"""
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
