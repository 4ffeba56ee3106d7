"""
Campaign Battle - Game Class System
===================================
Class definitions with base stats, growth rates, and weapon ranks.

A class turns a level into a stat line: base stats (over the generic
defaults) plus growth% per level beyond 1.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .core.stats import StatMap, stats_at_level


@dataclass(frozen=True)
class GameClass:
    """A playable class as defined in the campaign."""
    name: str
    base_stats: StatMap = field(default_factory=dict, hash=False)
    growths: Optional[StatMap] = field(default=None, hash=False)
    weapon_ranks: Dict[str, str] = field(default_factory=dict, hash=False)   # weapon type -> rank letter or "-"

    def rank_for(self, weapon_type: Optional[str]) -> Optional[str]:
        """Class rank for a weapon type (case-insensitive), or None."""
        return lookup_weapon_rank(self.weapon_ranks, weapon_type)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GameClass':
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        growths = data.get('growths')
        return cls(
            name=str(data.get('name') or ""),
            base_stats=dict(data.get('baseStats') or {}),
            growths=dict(growths) if isinstance(growths, Mapping) else None,
            weapon_ranks=dict(data.get('weaponRanks') or {}),
        )


def lookup_weapon_rank(ranks: Mapping[str, str], weapon_type: Optional[str]) -> Optional[str]:
    if not weapon_type:
        return None
    wanted = weapon_type.lower()
    for key, rank in ranks.items():
        if key.lower() == wanted:
            return rank
    return None


def class_stats_at_level(game_class: Optional[GameClass], level: int,
                         fallback_base: Mapping[str, float]) -> StatMap:
    """
    Get a class's stats at a level.

    Args:
        game_class: Class to level, or None for the fallback line unchanged
        level: Target level (1 = base)
        fallback_base: Stats used for any key the class does not define

    Returns:
        New stat map
    """
    if game_class is None:
        return dict(fallback_base)
    base = {**fallback_base, **game_class.base_stats}
    return stats_at_level(base, game_class.growths, level)


__all__ = [
    'GameClass',
    'class_stats_at_level',
    'lookup_weapon_rank',
]
