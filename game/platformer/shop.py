"""
Shop transactions on the persistent progress record.

Purchase functions return True when they changed the record and False when
the purchase was refused (not enough gold, already owned, not offered).
"""

from typing import Optional

from .constants import HATS, PRICES, SKINS
from .state import UPGRADE_KEYS, SaveData


def upgrade_price(key: str) -> int:
    if key not in UPGRADE_KEYS:
        raise KeyError(f"Unknown upgrade: {key}")
    return PRICES[key]


def buy_upgrade(progress: SaveData, key: str) -> bool:
    cost = upgrade_price(key)
    attr = UPGRADE_KEYS[key]
    if progress.gold < cost or getattr(progress.upgrades, attr):
        return False
    progress.gold -= cost
    setattr(progress.upgrades, attr, True)
    return True


def buy_life(progress: SaveData) -> bool:
    if progress.gold < PRICES["extraLife"]:
        return False
    progress.gold -= PRICES["extraLife"]
    progress.lives += 1
    return True


def cosmetic_price(item_id: str) -> int:
    return PRICES["legendSkin"] if item_id == "legend" else PRICES["cosmetic"]


def cosmetic_action(progress: SaveData, kind: str, item_id: str, secret_unlocked: bool = False) -> bool:
    """Equip an owned skin/hat, or buy and equip it"""
    catalog, owned = _catalog(progress, kind)
    if item_id not in catalog:
        return False

    if item_id not in owned:
        if item_id == "legend" and not secret_unlocked:
            return False
        price = cosmetic_price(item_id)
        if progress.gold < price:
            return False
        progress.gold -= price
        owned.append(item_id)

    if kind == "skin":
        progress.cosmetics.current_skin = item_id
    else:
        progress.cosmetics.current_hat = item_id
    return True


def _catalog(progress: SaveData, kind: str):
    if kind == "skin":
        return SKINS, progress.cosmetics.owned_skins
    if kind == "hat":
        return HATS, progress.cosmetics.owned_hats
    raise ValueError(f"Unknown cosmetic kind: {kind}")


def cycle_owned(progress: SaveData, kind: str) -> str:
    """Equip the next owned skin/hat in catalog order; never spends gold"""
    catalog, owned = _catalog(progress, kind)
    choices = [item for item in catalog if item in owned] or [catalog[0]]
    current = progress.cosmetics.current_skin if kind == "skin" else progress.cosmetics.current_hat
    # Unknown ids restart the cycle at the first owned item
    idx = choices.index(current) + 1 if current in choices else 0
    item = choices[idx % len(choices)]
    if kind == "skin":
        progress.cosmetics.current_skin = item
    else:
        progress.cosmetics.current_hat = item
    return item


def next_for_sale(progress: SaveData, kind: str, secret_unlocked: bool = False) -> Optional[str]:
    """First catalog item not yet owned and currently offered"""
    catalog, owned = _catalog(progress, kind)
    for item in catalog:
        if item in owned:
            continue
        if item == "legend" and not secret_unlocked:
            continue
        return item
    return None
