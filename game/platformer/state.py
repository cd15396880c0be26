"""
Persistent progress records, the status machine's states, per-frame input
and the read-only snapshots handed to the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .constants import HATS, SKINS, START_LIVES
from .entities import Coin, Door, Enemy, Particle, Platform, Player, YellowCoin


class Status(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    SHOP = "shop"
    PAUSED = "paused"
    GAMEOVER = "gameover"
    TRANSITION = "transition"
    VICTORY = "victory"  # reserved, never entered
    SECRET_BOSS = "secret_boss"


# Statuses in which physics/AI/combat advance
RUNNING = (Status.PLAYING, Status.SECRET_BOSS)

# Persisted key -> attribute
UPGRADE_KEYS = {
    "maxHp": "max_hp",
    "sharpSword": "sharp_sword",
    "tripleJump": "triple_jump",
    "downStrike": "down_strike",
}


@dataclass
class Upgrades:
    """Permanent purchases"""
    max_hp: bool = False
    sharp_sword: bool = False
    triple_jump: bool = False
    down_strike: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {key: getattr(self, attr) for key, attr in UPGRADE_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Upgrades":
        return cls(**{attr: bool(data[key]) for key, attr in UPGRADE_KEYS.items() if key in data})


def _owned(items, catalog, defaults: List[str]) -> List[str]:
    if not isinstance(items, list):
        return list(defaults)
    owned = [item for item in items if item in catalog]
    for item in reversed(defaults):
        if item not in owned:
            owned.insert(0, item)
    return owned


@dataclass
class Cosmetics:
    """Owned and equipped skins/hats"""
    owned_skins: List[str] = field(default_factory=lambda: ["default"])
    owned_hats: List[str] = field(default_factory=lambda: ["none"])
    current_skin: str = "default"
    current_hat: str = "none"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ownedSkins": list(self.owned_skins),
            "ownedHats": list(self.owned_hats),
            "currentSkin": self.current_skin,
            "currentHat": self.current_hat,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cosmetics":
        """Ids outside the catalog are dropped; an unowned current item falls back to the default"""
        base = cls()
        skins = _owned(data.get("ownedSkins"), SKINS, base.owned_skins)
        hats = _owned(data.get("ownedHats"), HATS, base.owned_hats)
        skin = data.get("currentSkin", base.current_skin)
        hat = data.get("currentHat", base.current_hat)
        return cls(
            owned_skins=skins,
            owned_hats=hats,
            current_skin=skin if skin in skins else base.current_skin,
            current_hat=hat if hat in hats else base.current_hat,
        )

    def copy(self) -> "Cosmetics":
        return replace(self, owned_skins=list(self.owned_skins), owned_hats=list(self.owned_hats))


@dataclass
class SaveData:
    """The flat persisted record"""
    gold: int = 0
    lives: int = START_LIVES
    upgrades: Upgrades = field(default_factory=Upgrades)
    cosmetics: Cosmetics = field(default_factory=Cosmetics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gold": self.gold,
            "lives": self.lives,
            "upgrades": self.upgrades.to_dict(),
            "cosmetics": self.cosmetics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SaveData":
        """Field-by-field merge against the defaults; unknown keys are ignored"""
        base = cls()
        upgrades = data.get("upgrades")
        cosmetics = data.get("cosmetics")
        return cls(
            gold=int(data.get("gold", base.gold)),
            lives=int(data.get("lives", base.lives)),
            upgrades=Upgrades.from_dict(upgrades) if isinstance(upgrades, dict) else base.upgrades,
            cosmetics=Cosmetics.from_dict(cosmetics) if isinstance(cosmetics, dict) else base.cosmetics,
        )


@dataclass
class InputState:
    """Held buttons, sampled once per frame"""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    attack: bool = False


@dataclass(frozen=True)
class GameState:
    """Externally observable status projection"""
    level: int
    coins_collected: int
    total_coins: int
    status: Status
    lives: int
    gold: int
    upgrades: Upgrades
    cosmetics: Cosmetics
    muted: bool
    secret_unlocked: bool


@dataclass(frozen=True)
class FrameView:
    """What the renderer may read between frames"""
    state: GameState
    player: Player
    platforms: Tuple[Platform, ...]
    coins: Tuple[Coin, ...]
    yellow_coins: Tuple[YellowCoin, ...]
    enemies: Tuple[Enemy, ...]
    particles: Tuple[Particle, ...]
    door: Optional[Door]
    camera_x: float
    shake: float
    background: str
    banner: Optional[str]
    victory_text: Optional[str]
    arena: bool
