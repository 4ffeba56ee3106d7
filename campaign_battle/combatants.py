"""
Campaign Battle - Combatants
============================
The character record consumed by the battle calculator.

Combatant.from_dict() reads the backend's character shape; the generic
builders make throwaway combatants for "what if" matchups that are not
backed by a stored character.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .core.constants import DEFAULT_STATS, STAT_HP
from .core.items import Item, coerce_item
from .core.stats import CharacterStats, StatMap, flatten_stats, get_stat, is_structured
from .game_classes import GameClass, class_stats_at_level, lookup_weapon_rank
from .skills import Skill

logger = logging.getLogger(__name__)

KIND_PLAYER = "PLAYER"
KIND_NPC = "NPC"


@dataclass
class Combatant:
    """A character entering a battle calculation."""
    id: str
    name: str
    stats: CharacterStats = None            # raw sheet, flat or structured
    current_hp: Optional[float] = None      # None = at full HP
    level: int = 1
    class_name: Optional[str] = None
    kind: str = KIND_PLAYER
    weapon: Optional[Item] = None
    skills: List[Skill] = field(default_factory=list)
    weapon_ranks: Dict[str, str] = field(default_factory=dict)

    @property
    def flat_stats(self) -> StatMap:
        return flatten_stats(self.stats)

    @property
    def max_hp(self) -> float:
        return get_stat(self.flat_stats, STAT_HP)

    def rank_for(self, weapon_type: Optional[str]) -> Optional[str]:
        """Tracked rank for a weapon type (case-insensitive), or None."""
        return lookup_weapon_rank(self.weapon_ranks, weapon_type)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Combatant':
        """
        Build from the backend character record.

        Recognized keys: id, name, stats, currentHp, level, className, kind,
        skills ([{skill: {...}}] or [{...}]), weaponSkills ([{weapon, rank}]),
        equippedWeapon, or equippedWeaponItemId + inventory ([{id, item}]).
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")

        stats = data.get('stats')
        return cls(
            id=str(data.get('id') or ""),
            name=str(data.get('name') or ""),
            stats=stats,
            current_hp=data.get('currentHp'),
            level=data.get('level') or 1,
            class_name=data.get('className'),
            kind=data.get('kind') or KIND_PLAYER,
            weapon=_equipped_weapon(data),
            skills=_dedupe_skills(Skill.from_dict(entry) for entry in data.get('skills') or []),
            weapon_ranks=_weapon_ranks(data.get('weaponSkills'), stats),
        )


def _equipped_weapon(data: Mapping[str, Any]) -> Optional[Item]:
    if data.get('equippedWeapon') is not None:
        return coerce_item(data['equippedWeapon'])

    item_id = data.get('equippedWeaponItemId')
    if not item_id:
        return None
    for entry in data.get('inventory') or []:
        if entry.get('id') == item_id and entry.get('item') is not None:
            return coerce_item(entry['item'])
    logger.debug(f"equipped weapon {item_id} not found in inventory")
    return None


def _dedupe_skills(skills) -> List[Skill]:
    """Drop repeated skill ids, keeping the first occurrence."""
    seen = set()
    result = []
    for skill in skills:
        if skill.id and skill.id in seen:
            continue
        seen.add(skill.id)
        result.append(skill)
    return result


def _weapon_ranks(weapon_skills: Any, stats: Any) -> Dict[str, str]:
    """Character weapon ranks from weaponSkills, else from a structured sheet."""
    ranks: Dict[str, str] = {}
    for entry in weapon_skills or []:
        weapon = entry.get('weapon')
        rank = entry.get('rank')
        if weapon and rank:
            ranks[weapon.lower()] = rank
    if ranks or not is_structured(stats):
        return ranks

    if isinstance(stats, Mapping):
        return dict(stats.get('weaponRanks') or {})
    return dict(stats.weapon_ranks)


# =============================================================================
# GENERIC COMBATANTS
# =============================================================================

def slugify(name: str) -> str:
    """'Generic left' -> 'generic-left'"""
    return re.sub(r"\s+", "-", name.lower())


def build_generic_combatant(name: str, stats: Mapping[str, float], level: int = 1) -> Combatant:
    """
    Make an unsaved NPC from a plain stat line, at full HP.

    Args:
        name: Display name (the id is its slug)
        stats: Flat stats; stored as {"baseStats": stats}
        level: Level to report

    Returns:
        Combatant with no weapon and no skills
    """
    stat_line = dict(stats)
    return Combatant(
        id=slugify(name),
        name=name,
        stats={'baseStats': stat_line},
        current_hp=get_stat(stat_line, STAT_HP),
        level=level,
        kind=KIND_NPC,
    )


def build_class_combatant(name: str, game_class: Optional[GameClass], level: int = 1,
                          fallback_base: Optional[Mapping[str, float]] = None) -> Combatant:
    """Generic combatant with a class's stats at the given level."""
    base = DEFAULT_STATS if fallback_base is None else fallback_base
    combatant = build_generic_combatant(name, class_stats_at_level(game_class, level, base), level)
    if game_class is not None:
        combatant.class_name = game_class.name
        combatant.weapon_ranks = dict(game_class.weapon_ranks)
    return combatant


__all__ = [
    'Combatant',
    'KIND_PLAYER',
    'KIND_NPC',
    'slugify',
    'build_generic_combatant',
    'build_class_combatant',
]
