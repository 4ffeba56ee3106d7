"""
Campaign Battle - Weapons
=========================
Weapon display helpers and equip eligibility.

- range_label(): human-readable attack range, including magic-scaled ranges
- Rank checks: a weapon is usable when the wielder's rank for its type is at
  least the weapon's required rank (E < D < C < B < A < S)
"""

import logging
import math
from typing import TYPE_CHECKING, Iterable, List, Optional

from .core.constants import (
    DEFAULT_RANGE_FALLBACK,
    DEFAULT_REQUIRED_RANK,
    LAGUZ_WEAPON_TYPE,
    MAGIC_RANGE_FORMULA,
    NO_RANK_MARKER,
    WEAPON_CATEGORY,
    WeaponRank,
)
from .core.items import Item

if TYPE_CHECKING:
    from .combatants import Combatant
    from .game_classes import GameClass

logger = logging.getLogger(__name__)


# =============================================================================
# RANGE
# =============================================================================

def range_label(item: Item, mag: Optional[float] = None,
                fallback: Optional[str] = DEFAULT_RANGE_FALLBACK) -> Optional[str]:
    """
    Get the display label for an item's attack range.

    Order of precedence:
        1. rangeFormula "floor(mag/2)" with mag known -> evaluated, e.g. "4"
        2. any other rangeFormula                     -> returned verbatim
        3. neither min nor max range                  -> fallback
        4. min only / max only / both                 -> "1", "2", "1" or "1-2"

    Args:
        item: The item to describe
        mag: Wielder's magic (intelligence), for magic-scaled ranges
        fallback: Label when the item has no range at all

    Returns:
        Range label
    """
    if item.range_formula:
        if mag is not None and item.range_formula.lower() == MAGIC_RANGE_FORMULA:
            return str(math.floor(mag / 2))
        return item.range_formula

    low = item.min_range
    high = item.max_range
    if low is None and high is None:
        return fallback

    if low is not None:
        if high is not None:
            return str(low) if low == high else f"{low}-{high}"
        return str(low)

    return str(high)


# =============================================================================
# WEAPON RANKS
# =============================================================================

def normalize_rank(rank: Optional[str]) -> Optional[WeaponRank]:
    """Parse a rank letter ("b", " A ") into WeaponRank; None if unrecognized."""
    if isinstance(rank, WeaponRank):
        return rank
    if not rank or not isinstance(rank, str):
        return None
    try:
        return WeaponRank(rank.strip().upper())
    except ValueError:
        logger.debug(f"normalize_rank: unrecognized rank {rank!r}")
        return None


def has_sufficient_rank(current_rank: Optional[str],
                        required_rank: Optional[str] = DEFAULT_REQUIRED_RANK.value) -> bool:
    """
    Check a wielder's rank against a weapon's requirement.

    A missing requirement means E. A missing or unrecognized current rank
    always fails.
    """
    current = normalize_rank(current_rank)
    required = normalize_rank(required_rank or DEFAULT_REQUIRED_RANK.value)
    if current is None or required is None:
        return False
    return current.order >= required.order


def can_equip_weapon(combatant: Optional['Combatant'], item: Item) -> bool:
    """
    Check whether a character can equip a weapon from their inventory.

    Rules:
        - The character must have a class
        - Laguz weapons with a class restriction only fit that class
        - The character's tracked rank for the weapon type must meet the
          weapon's required rank
    """
    if combatant is None or not combatant.class_name:
        return False

    weapon_type = (item.type or "").lower()
    if weapon_type == LAGUZ_WEAPON_TYPE:
        if item.class_restriction and item.class_restriction != combatant.class_name:
            return False

    return has_sufficient_rank(combatant.rank_for(weapon_type), item.weapon_rank)


def can_use_weapon_for_class(game_class: Optional['GameClass'], item: Item) -> bool:
    """
    Check whether a class can use a weapon at all.

    The class rank for the weapon type must exist, must not be "-", and must
    meet the weapon's required rank. Class restrictions apply to every type.
    """
    if game_class is None or not game_class.weapon_ranks:
        return False
    if item.class_restriction and item.class_restriction != game_class.name:
        return False

    class_rank = game_class.rank_for(item.type)
    if not class_rank or class_rank == NO_RANK_MARKER:
        return False
    return has_sufficient_rank(class_rank, item.weapon_rank)


def usable_weapons(items: Iterable[Item], game_class: Optional['GameClass']) -> List[Item]:
    """Weapons from a catalog that a class can use, in catalog order."""
    return [
        item for item in items
        if item.category == WEAPON_CATEGORY and can_use_weapon_for_class(game_class, item)
    ]


__all__ = [
    'range_label',
    'normalize_rank',
    'has_sufficient_rank',
    'can_equip_weapon',
    'can_use_weapon_for_class',
    'usable_weapons',
]
