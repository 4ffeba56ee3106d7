"""
Campaign Battle - Matchup
=========================
Runs a full two-sided battle calculation.

For each side:
    1. Flatten stats
    2. Evaluate its skills against the other side, with its own weapon
    3. Fold deterministic skill effects into BattleModifiers
Then build_battle_summary() runs once per direction, each side taking its
turn as the attacker.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .combatants import Combatant
from .core.battle import BattleModifiers, BattleSide, BattleSummary, build_battle_summary
from .core.items import Item
from .skills import BattleSkillSummary, get_battle_skill_summaries, get_deterministic_modifiers

# Default for weapon overrides: use the combatant's equipped weapon
_EQUIPPED: Any = object()


@dataclass(frozen=True)
class Matchup:
    """Both directions of a battle between left and right."""
    left_skills: List[BattleSkillSummary] = field(hash=False)
    right_skills: List[BattleSkillSummary] = field(hash=False)
    left_modifiers: BattleModifiers
    right_modifiers: BattleModifiers
    left_summary: BattleSummary     # left attacking right
    right_summary: BattleSummary    # right attacking left


def resolve_matchup(left: Combatant, right: Combatant,
                    left_weapon: Optional[Item] = _EQUIPPED,
                    right_weapon: Optional[Item] = _EQUIPPED) -> Matchup:
    """
    Calculate a matchup between two combatants.

    Args:
        left: First combatant
        right: Second combatant
        left_weapon: Weapon override for left (defaults to left.weapon; None fights unarmed)
        right_weapon: Weapon override for right (defaults to right.weapon; None fights unarmed)

    Returns:
        Matchup with skill summaries, modifiers, and both battle summaries
    """
    left_weapon = left.weapon if left_weapon is _EQUIPPED else left_weapon
    right_weapon = right.weapon if right_weapon is _EQUIPPED else right_weapon

    left_skills = get_battle_skill_summaries(left.skills, left, right, left_weapon)
    right_skills = get_battle_skill_summaries(right.skills, right, left, right_weapon)
    left_modifiers = get_deterministic_modifiers(left_skills)
    right_modifiers = get_deterministic_modifiers(right_skills)

    left_side = BattleSide(stats=left.flat_stats, weapon=left_weapon, modifiers=left_modifiers)
    right_side = BattleSide(stats=right.flat_stats, weapon=right_weapon, modifiers=right_modifiers)

    return Matchup(
        left_skills=left_skills,
        right_skills=right_skills,
        left_modifiers=left_modifiers,
        right_modifiers=right_modifiers,
        left_summary=build_battle_summary(left_side, right_side),
        right_summary=build_battle_summary(right_side, left_side),
    )


def clamp_percent(value: float) -> float:
    """Clamp a raw battle hit/crit into 0-100 for display."""
    return max(0, min(100, value))


__all__ = [
    'Matchup',
    'resolve_matchup',
    'clamp_percent',
]
