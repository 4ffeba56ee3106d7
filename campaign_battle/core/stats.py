"""
Campaign Battle - Stat Resolution
=================================
Normalizes character stat sheets into a flat stat map and applies
per-level growth rates.

Character sheets arrive from storage in one of two shapes:
- Flat: {"hp": 20, "strength": 7, ...}
- Structured: {"baseStats": {...}, "growths": {...}, "bonusStats": {...}, "weaponRanks": {...}}

Everything downstream works on the flat StatMap produced by flatten_stats().
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .constants import STAT_ABILITY, STAT_SKILL

logger = logging.getLogger(__name__)

StatMap = Dict[str, float]


# =============================================================================
# STRUCTURED STATS
# =============================================================================

@dataclass
class StructuredStats:
    """Stat sheet with base values kept apart from growths and bonuses."""
    base_stats: Optional[StatMap] = None
    growths: Optional[StatMap] = None       # percent chance per level
    bonus_stats: Optional[StatMap] = None
    weapon_ranks: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'StructuredStats':
        """Build from the camelCase sheet stored by the campaign backend."""
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        return cls(
            base_stats=_optional_map(data.get('baseStats')),
            growths=_optional_map(data.get('growths')),
            bonus_stats=_optional_map(data.get('bonusStats')),
            weapon_ranks=dict(data.get('weaponRanks') or {}),
        )


CharacterStats = Union[StatMap, StructuredStats, None]


def _optional_map(value: Any) -> Optional[StatMap]:
    return dict(value) if isinstance(value, Mapping) else None


def is_structured(raw: Any) -> bool:
    """True if raw is a structured sheet rather than a flat stat map."""
    if isinstance(raw, StructuredStats):
        return True
    return isinstance(raw, Mapping) and 'baseStats' in raw


# =============================================================================
# FLATTENING
# =============================================================================

def flatten_stats(raw: CharacterStats) -> StatMap:
    """
    Derive the canonical flat stat map from either sheet shape.

    Rules:
        - None / not a mapping      -> {}
        - baseStats is a mapping    -> copy of baseStats (growths and bonuses NOT merged)
        - baseStats present as None -> {}
        - anything else             -> shallow copy of raw

    Args:
        raw: Character stats as stored

    Returns:
        New flat stat map (never the caller's object)
    """
    if isinstance(raw, StructuredStats):
        return dict(raw.base_stats or {})

    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug(f"flatten_stats: unsupported stats type {type(raw).__name__}, using empty map")
        return {}

    if 'baseStats' in raw:
        base = raw['baseStats']
        if isinstance(base, Mapping):
            return dict(base)
        if base is None:
            return {}

    return dict(raw)


def get_stat(stats: Mapping[str, Any], key: str, default: float = 0) -> float:
    """Read a stat, treating missing or None values as default."""
    value = stats.get(key)
    return default if value is None else value


def get_skill_stat(stats: Mapping[str, Any]) -> float:
    """Ability stat, falling back to the legacy 'skill' key, then 0."""
    value = stats.get(STAT_ABILITY)
    if value is None:
        value = stats.get(STAT_SKILL)
    return 0 if value is None else value


# =============================================================================
# LEVEL GROWTHS
# =============================================================================

def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going towards +infinity.

    Python's round() uses banker's rounding; stat sheets are tuned against
    floor(x + 0.5), so 2.5 -> 3 and -2.5 -> -2.
    """
    return math.floor(value + 0.5)


def apply_growths(base: Mapping[str, float], growths: Optional[Mapping[str, float]],
                  level_delta: float) -> StatMap:
    """
    Apply percentage growth rates over a number of levels.

    Formula (per stat in base):
        stat = base + round_half_up(level_delta * growth% / 100)

    Only keys present in base are touched; growths for other keys are ignored.

    Args:
        base: Starting stats
        growths: Percent growth per level (e.g., {"hp": 70})
        level_delta: Levels gained (negative values remove levels)

    Returns:
        New stat map
    """
    if not growths or level_delta == 0:
        return dict(base)

    result = dict(base)
    for key, value in base.items():
        growth = get_stat(growths, key)
        result[key] = (value or 0) + round_half_up(level_delta * growth / 100)
    return result


def stats_at_level(base: Mapping[str, float], growths: Optional[Mapping[str, float]],
                   level: int) -> StatMap:
    """Stats at a given level; level 1 (or lower) is the unmodified base."""
    return apply_growths(base, growths, max(0, level - 1))


__all__ = [
    'StatMap',
    'StructuredStats',
    'CharacterStats',
    'is_structured',
    'flatten_stats',
    'get_stat',
    'get_skill_stat',
    'round_half_up',
    'apply_growths',
    'stats_at_level',
]
