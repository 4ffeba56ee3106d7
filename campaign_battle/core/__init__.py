"""
Campaign Battle - Core Math Module
=================================
Single source of truth for combat formulas, stat resolution, and game constants.

All other modules should import from here rather than implementing their own formulas.
"""

from .constants import (
    # Enums
    DamageType,
    WeaponRank,
    # Stats
    DEFAULT_STATS,
    # Combat
    UNARMED_HIT,
    DOUBLE_ATTACK_THRESHOLD,
    CRIT_DAMAGE_MULTIPLIER,
    WEAPON_TRIANGLE_ADVANTAGE,
    # Ranks
    WEAPON_RANK_ORDER,
)

from .stats import (
    StatMap,
    StructuredStats,
    CharacterStats,
    flatten_stats,
    get_stat,
    get_skill_stat,
    round_half_up,
    apply_growths,
    stats_at_level,
)

from .items import (
    Item,
    parse_damage_type,
    coerce_item,
)

from .battle import (
    # Dataclasses
    BattleModifiers,
    NO_MODIFIERS,
    TriangleBonus,
    BattleSide,
    BaseCombatProfile,
    BattleSummary,
    # Calculation
    weapon_triangle_bonus,
    get_effectiveness_multiplier,
    calculate_attack_speed,
    build_base_profile,
    build_battle_summary,
)

__all__ = [
    # Constants
    'DamageType',
    'WeaponRank',
    'DEFAULT_STATS',
    'UNARMED_HIT',
    'DOUBLE_ATTACK_THRESHOLD',
    'CRIT_DAMAGE_MULTIPLIER',
    'WEAPON_TRIANGLE_ADVANTAGE',
    'WEAPON_RANK_ORDER',
    # Stats
    'StatMap',
    'StructuredStats',
    'CharacterStats',
    'flatten_stats',
    'get_stat',
    'get_skill_stat',
    'round_half_up',
    'apply_growths',
    'stats_at_level',
    # Items
    'Item',
    'parse_damage_type',
    'coerce_item',
    # Battle calculation
    'BattleModifiers',
    'NO_MODIFIERS',
    'TriangleBonus',
    'BattleSide',
    'BaseCombatProfile',
    'BattleSummary',
    'weapon_triangle_bonus',
    'get_effectiveness_multiplier',
    'calculate_attack_speed',
    'build_base_profile',
    'build_battle_summary',
]
