"""
Game entity dataclasses
"""

from dataclasses import dataclass
from typing import Optional

from .constants import ENTITY_SIZE, LAND_ANIM_FRAMES, PLAYER_MAX_HP


@dataclass
class Player:
    """Player character"""
    x: float
    y: float
    w: float = float(ENTITY_SIZE["player"])
    h: float = float(ENTITY_SIZE["player"])
    vx: float = 0.0
    vy: float = 0.0
    grounded: bool = False
    jump_count: int = 0
    facing: int = 1  # +1 right, -1 left
    attack_timer: int = 0  # frames left in the active swing
    hp: int = PLAYER_MAX_HP
    max_hp: int = PLAYER_MAX_HP
    invulnerable_until: float = 0.0  # absolute ms
    land_timer: int = 0
    platform_id: Optional[str] = None
    id: str = "player"

    def leave_ground(self):
        self.platform_id = None

    def land(self, platform_id: str, was_falling: bool):
        self.jump_count = 0
        self.platform_id = platform_id
        if was_falling:
            self.land_timer = LAND_ANIM_FRAMES


@dataclass
class Platform:
    """Static floor/ledge, optionally oscillating around its origin"""
    id: str
    x: float
    y: float
    w: float
    h: float
    kind: str = "floating"  # 'floor' | 'floating'
    move_axis: Optional[str] = None  # None | 'horizontal' | 'vertical'
    origin_x: float = 0.0
    origin_y: float = 0.0
    phase: float = 0.0
    angular_speed: float = 1.0

    @property
    def moving(self) -> bool:
        return self.move_axis is not None


@dataclass
class Coin:
    """Mandatory red coin; (x, y) is its center"""
    id: str
    x: float
    y: float
    w: float = float(ENTITY_SIZE["coin"])
    h: float = float(ENTITY_SIZE["coin"])
    collected: bool = False


@dataclass
class YellowCoin:
    """Bouncing loot coin that expires"""
    id: str
    x: float
    y: float
    vx: float
    vy: float
    lifetime: int  # frames
    w: float = float(ENTITY_SIZE["yellow_coin"])
    h: float = float(ENTITY_SIZE["yellow_coin"])
    collected: bool = False


@dataclass
class Door:
    """Level exit"""
    x: float
    y: float
    w: float = float(ENTITY_SIZE["door_w"])
    h: float = float(ENTITY_SIZE["door_h"])
    locked: bool = True
    id: str = "door"


@dataclass
class Enemy:
    """Enemy; `kind` selects the AI ('vertical', 'patroller', 'chaser', 'boss')"""
    id: str
    kind: str
    x: float
    y: float
    w: float
    h: float
    color: str
    hp: int
    max_hp: int
    vx: float = 0.0
    vy: float = 0.0
    dead: bool = False
    grounded: bool = False
    # vertical
    start_y: float = 0.0
    offset: float = 0.0
    # patroller / chaser
    min_x: Optional[float] = None
    max_x: Optional[float] = None
    patrol_dir: int = 1
    # chaser / boss
    speed: float = 1.0
    land_timer: int = 0
    is_rat: bool = False

    def leave_ground(self):
        pass

    def land(self, platform_id: str, was_falling: bool):
        if self.kind == "boss" and was_falling:
            self.land_timer = LAND_ANIM_FRAMES


@dataclass
class Particle:
    """Cosmetic particle"""
    x: float
    y: float
    vx: float
    vy: float
    color: str
    size: float
    life: int
    max_life: int
