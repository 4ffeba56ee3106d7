"""
Campaign Battle - Battle Skills
===============================
Evaluates a character's skills against a battle context.

The catalog is small and closed: each known skill name maps to a SkillKind
with its own rule. Names that are not in the catalog are inert (rate None,
never active) rather than an error.

Catalog:
    Ira                              +50 crit while under 50% HP (deterministic)
    Luna                             floor(Skl/2)% proc, doubles Str, ignores Def
    Corona                           floor(Skl/2)% proc, ignores Res, -10 enemy Hit
    Prodigio de las armas marciales  +5 damage with sword/lance/axe (deterministic)

Proc skills only report their rate; this module never rolls dice.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

from .core.constants import (
    ALWAYS_RATE,
    IRA_CRIT_BONUS,
    IRA_HP_THRESHOLD,
    MARTIAL_DAMAGE_BONUS,
    MARTIAL_WEAPON_TYPES,
    NEVER_RATE,
    STAT_HP,
)
from .core.battle import BattleModifiers
from .core.items import Item
from .core.stats import StatMap, flatten_stats, get_skill_stat, get_stat

if TYPE_CHECKING:
    from .combatants import Combatant

logger = logging.getLogger(__name__)


# =============================================================================
# SKILL CATALOG
# =============================================================================

class SkillKind(Enum):
    """Known battle skills, keyed by normalized name."""
    IRA = "ira"
    LUNA = "luna"
    CORONA = "corona"
    MARTIAL_PRODIGY = "prodigio de las armas marciales"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: Optional[str]) -> 'SkillKind':
        """Resolve a skill name (trimmed, case-insensitive); unknown names -> UNKNOWN."""
        normalized = normalize_skill_name(name)
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == normalized:
                return kind
        return cls.UNKNOWN


SKILL_EFFECT_TEXT: Dict[SkillKind, str] = {
    SkillKind.IRA: "+50 crit under 50% HP",
    SkillKind.LUNA: "Proc: doubles Str, ignores Def",
    SkillKind.CORONA: "Proc: ignores Res, -10 enemy Hit",
    SkillKind.MARTIAL_PRODIGY: "+5 damage with sword/lance/axe",
}


def normalize_skill_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


# =============================================================================
# DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class Skill:
    """A skill definition as stored by the campaign backend."""
    id: str
    name: str
    description: Optional[str] = None
    bonus_stats: Dict[str, float] = field(default_factory=dict, hash=False)
    bonus_derived: Dict[str, float] = field(default_factory=dict, hash=False)

    @property
    def kind(self) -> SkillKind:
        return SkillKind.from_name(self.name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Skill':
        """
        Build from a skill record, or from a character-skill entry that wraps
        it as {"skill": {...}}.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        if isinstance(data.get('skill'), Mapping):
            data = data['skill']
        return cls(
            id=str(data.get('id') or ""),
            name=str(data.get('name') or ""),
            description=data.get('description'),
            bonus_stats=dict(data.get('bonusStats') or {}),
            bonus_derived=dict(data.get('bonusDerived') or {}),
        )


@dataclass(frozen=True)
class BattleSkillSummary:
    """How one skill behaves in the current battle context."""
    id: str
    name: str
    description: Optional[str]
    rate: Optional[int]                 # percent; None for skills outside the catalog
    is_chance_based: bool
    is_active: bool
    effect_text: Optional[str] = None
    modifiers: Optional[BattleModifiers] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'rate': self.rate,
            'isChanceBased': self.is_chance_based,
            'isActive': self.is_active,
        }
        if self.effect_text is not None:
            result['effectText'] = self.effect_text
        if self.modifiers is not None:
            result['modifiers'] = self.modifiers.to_dict()
        return result


@dataclass(frozen=True)
class SkillContext:
    """Everything a skill rule may look at."""
    attacker_stats: StatMap = field(hash=False)
    defender_stats: StatMap = field(hash=False)
    weapon: Optional[Item]
    current_hp: float
    max_hp: float


# =============================================================================
# EVALUATION
# =============================================================================

def build_skill_context(attacker: 'Combatant', defender: Optional['Combatant'],
                        weapon: Optional[Item]) -> SkillContext:
    """Flatten both sides' stats and resolve HP (current defaults to max)."""
    attacker_stats = flatten_stats(attacker.stats)
    defender_stats = flatten_stats(defender.stats) if defender is not None else {}
    max_hp = get_stat(attacker_stats, STAT_HP)
    current_hp = attacker.current_hp if attacker.current_hp is not None else max_hp
    return SkillContext(
        attacker_stats=attacker_stats,
        defender_stats=defender_stats,
        weapon=weapon,
        current_hp=current_hp,
        max_hp=max_hp,
    )


def evaluate_skill(skill: Skill, ctx: SkillContext) -> BattleSkillSummary:
    """Apply the catalog rule for one skill."""
    kind = skill.kind

    if kind is SkillKind.IRA:
        active = ctx.max_hp > 0 and ctx.current_hp / ctx.max_hp < IRA_HP_THRESHOLD
        return _summary(skill, kind,
                        rate=ALWAYS_RATE if active else NEVER_RATE,
                        is_chance_based=False,
                        is_active=active,
                        modifiers=BattleModifiers(crit=IRA_CRIT_BONUS) if active else None)

    if kind in (SkillKind.LUNA, SkillKind.CORONA):
        rate = math.floor(get_skill_stat(ctx.attacker_stats) / 2)
        return _summary(skill, kind,
                        rate=rate,
                        is_chance_based=True,
                        is_active=rate > 0)

    if kind is SkillKind.MARTIAL_PRODIGY:
        weapon_type = ((ctx.weapon.type if ctx.weapon else None) or "").lower()
        active = weapon_type in MARTIAL_WEAPON_TYPES
        return _summary(skill, kind,
                        rate=ALWAYS_RATE if active else NEVER_RATE,
                        is_chance_based=False,
                        is_active=active,
                        modifiers=BattleModifiers(damage=MARTIAL_DAMAGE_BONUS) if active else None)

    logger.debug(f"evaluate_skill: '{skill.name}' has no battle effect")
    return BattleSkillSummary(
        id=skill.id,
        name=skill.name,
        description=skill.description,
        rate=None,
        is_chance_based=False,
        is_active=False,
    )


def _summary(skill: Skill, kind: SkillKind, **values) -> BattleSkillSummary:
    return BattleSkillSummary(
        id=skill.id,
        name=skill.name,
        description=skill.description,
        effect_text=SKILL_EFFECT_TEXT[kind],
        **values,
    )


def get_battle_skill_summaries(skills: Iterable[Skill], attacker: 'Combatant',
                               defender: Optional['Combatant'],
                               weapon: Optional[Item]) -> List[BattleSkillSummary]:
    """
    Evaluate every skill of the attacker in input order.

    Args:
        skills: The attacker's skills
        attacker: Combatant owning the skills (stats and current HP)
        defender: Opposing combatant, or None
        weapon: The attacker's equipped weapon, or None

    Returns:
        One BattleSkillSummary per skill, same order as the input
    """
    ctx = build_skill_context(attacker, defender, weapon)
    return [evaluate_skill(skill, ctx) for skill in skills]


# =============================================================================
# AGGREGATION
# =============================================================================

def get_deterministic_modifiers(summaries: Iterable[BattleSkillSummary]) -> BattleModifiers:
    """
    Fold the guaranteed effects into one modifier bundle.

    Chance-based, inactive, and modifier-less summaries are skipped.
    """
    return sum(
        (entry.modifiers for entry in summaries
         if entry.modifiers is not None and entry.is_active and not entry.is_chance_based),
        BattleModifiers(),
    )


__all__ = [
    'SkillKind',
    'SKILL_EFFECT_TEXT',
    'normalize_skill_name',
    'Skill',
    'BattleSkillSummary',
    'SkillContext',
    'build_skill_context',
    'evaluate_skill',
    'get_battle_skill_summaries',
    'get_deterministic_modifiers',
]
