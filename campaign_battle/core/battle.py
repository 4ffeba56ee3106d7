"""
Campaign Battle - Core Battle Calculation
=========================================
Single source of truth for the combat formulas.

Given two sides (flat stats, equipped weapon, deterministic skill modifiers)
this module computes each side's combat profile and the pairwise outcome of
one side attacking the other. Every function is pure.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Mapping, Optional

from .constants import (
    CRIT_DAMAGE_MULTIPLIER,
    DEFAULT_EFFECTIVENESS,
    DOUBLE_ATTACK_THRESHOLD,
    STAT_AGILITY,
    STAT_CONSTITUTION,
    STAT_INTELLIGENCE,
    STAT_LUCK,
    STAT_STRENGTH,
    STAT_WISDOM,
    TRIANGLE_ADVANTAGE_BONUS,
    UNARMED_HIT,
    WEAPON_TRIANGLE_ADVANTAGE,
)
from .items import Item
from .stats import StatMap, get_skill_stat, get_stat, round_half_up


# =============================================================================
# DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class BattleModifiers:
    """
    Additive deltas applied on top of a side's combat profile.
    Supports + and sum() so skill results can be folded together.
    """
    hit: float = 0
    crit: float = 0
    damage: float = 0
    avoid: float = 0
    dodge: float = 0
    attack_speed: float = 0

    def __add__(self, other: 'BattleModifiers') -> 'BattleModifiers':
        if not isinstance(other, BattleModifiers):
            return NotImplemented
        return BattleModifiers(
            hit=self.hit + other.hit,
            crit=self.crit + other.crit,
            damage=self.damage + other.damage,
            avoid=self.avoid + other.avoid,
            dodge=self.dodge + other.dodge,
            attack_speed=self.attack_speed + other.attack_speed,
        )

    def __radd__(self, other):
        """Support sum() by handling 0 + BattleModifiers."""
        if other == 0:
            return self
        return self.__add__(other)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'BattleModifiers':
        """Accepts camelCase (attackSpeed) or snake_case keys; missing -> 0."""
        if not data:
            return cls()
        speed = data.get('attackSpeed', data.get('attack_speed'))
        return cls(
            hit=data.get('hit') or 0,
            crit=data.get('crit') or 0,
            damage=data.get('damage') or 0,
            avoid=data.get('avoid') or 0,
            dodge=data.get('dodge') or 0,
            attack_speed=speed or 0,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            'hit': self.hit,
            'crit': self.crit,
            'damage': self.damage,
            'avoid': self.avoid,
            'dodge': self.dodge,
            'attackSpeed': self.attack_speed,
        }


NO_MODIFIERS = BattleModifiers()


@dataclass(frozen=True)
class TriangleBonus:
    """Weapon triangle result for one attacker/defender pairing."""
    damage: int = 0
    hit: int = 0


@dataclass
class BattleSide:
    """One combatant as seen by a single battle calculation."""
    stats: StatMap
    weapon: Optional[Item] = None
    modifiers: Optional[BattleModifiers] = None


@dataclass(frozen=True)
class BaseCombatProfile:
    """A side's derived combat stats before looking at the opponent."""
    atk: float
    hit: float
    crit: float
    avoid: float
    dodge: float
    attack_speed: float


@dataclass(frozen=True)
class BattleSummary:
    """
    Outcome of one side attacking the other.

    atk/hit/crit/attack_speed are the attacker's own profile; avoid/dodge are
    the defender's, shown next to them. battle_hit and battle_crit are raw
    and may fall outside 0-100.
    """
    atk: float
    hit: float
    crit: float
    attack_speed: float
    avoid: float
    dodge: float
    battle_hit: float
    battle_crit: float
    damage: int
    crit_damage: int
    doubles: bool

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dict matching the front-end's summary shape."""
        return {
            'atk': self.atk,
            'hit': self.hit,
            'crit': self.crit,
            'attackSpeed': self.attack_speed,
            'avoid': self.avoid,
            'dodge': self.dodge,
            'battleHit': self.battle_hit,
            'battleCrit': self.battle_crit,
            'damage': self.damage,
            'critDamage': self.crit_damage,
            'doubles': self.doubles,
        }

    def breakdown(self) -> str:
        """Return formatted breakdown of the battle calculation."""
        strikes = "x2" if self.doubles else "x1"
        return f"""
Battle Calculation Breakdown
============================
Attack:             {self.atk}
Hit:                {self.hit}
Crit:               {self.crit}
Attack Speed:       {self.attack_speed}
- Enemy Avoid:      {self.avoid}
- Enemy Dodge:      {self.dodge}
----------------------------
Battle Hit:         {self.battle_hit}
Battle Crit:        {self.battle_crit}
Damage:             {self.damage} {strikes}
Crit Damage:        {self.crit_damage}
"""


# =============================================================================
# WEAPON TRIANGLE
# =============================================================================

def weapon_triangle_bonus(attacker_type: Optional[str], defender_type: Optional[str]) -> TriangleBonus:
    """
    Calculate weapon triangle damage/hit bonus.

    Cycle (attacker beats defender):
        sword > axe > lance > sword
        anima > light > dark > anima

    Args:
        attacker_type: Attacker's weapon type tag (case-insensitive)
        defender_type: Defender's weapon type tag (case-insensitive)

    Returns:
        +1 dmg / +10 hit with advantage, the negation with disadvantage,
        zeros otherwise (missing type, same type, or unrelated types)
    """
    attacker = (attacker_type or "").lower()
    defender = (defender_type or "").lower()
    if not attacker or not defender:
        return TriangleBonus()

    damage, hit = TRIANGLE_ADVANTAGE_BONUS
    if WEAPON_TRIANGLE_ADVANTAGE.get(attacker) == defender:
        return TriangleBonus(damage=damage, hit=hit)
    if WEAPON_TRIANGLE_ADVANTAGE.get(defender) == attacker:
        return TriangleBonus(damage=-damage, hit=-hit)
    return TriangleBonus()


# =============================================================================
# PROFILE HELPERS
# =============================================================================

def get_effectiveness_multiplier(weapon: Optional[Item]) -> float:
    """Weapon's effectiveness multiplier; 1 when absent or not a number."""
    if weapon is None or not isinstance(weapon.effectiveness, Mapping):
        return DEFAULT_EFFECTIVENESS
    value = weapon.effectiveness.get('multiplier')
    if isinstance(value, bool) or not isinstance(value, Real):
        return DEFAULT_EFFECTIVENESS
    return value


def calculate_attack_speed(stats: StatMap, weapon: Optional[Item],
                           modifiers: Optional[BattleModifiers] = None) -> float:
    """
    Calculate attack speed.

    Formula:
        AS = Agility - max(0, Weight - Strength) + mod.attack_speed
    """
    mods = modifiers or NO_MODIFIERS
    weight = _weapon_value(weapon, 'weight')
    speed_penalty = max(0, weight - get_stat(stats, STAT_STRENGTH))
    return get_stat(stats, STAT_AGILITY) - speed_penalty + mods.attack_speed


def build_base_profile(stats: StatMap, weapon: Optional[Item],
                       modifiers: Optional[BattleModifiers] = None) -> BaseCombatProfile:
    """
    Calculate one side's combat profile.

    Formulas:
        Atk   = Str + Mt   (Mag + Mt for magical weapons, raw Str unarmed)
        Hit   = WeaponHit + Skl*2 + Lck + mod.hit
        Crit  = WeaponCrit + floor(Skl/2) + mod.crit
        Avoid = AS*2 + Lck + mod.avoid
        Dodge = Lck + mod.dodge

    WeaponHit is 30 unarmed, and 0 for a weapon with no hit value.

    Args:
        stats: Flat stat map
        weapon: Equipped weapon, or None when unarmed
        modifiers: Deterministic skill modifiers

    Returns:
        BaseCombatProfile
    """
    mods = modifiers or NO_MODIFIERS
    strength = get_stat(stats, STAT_STRENGTH)
    magic = get_stat(stats, STAT_INTELLIGENCE)
    skill = get_skill_stat(stats)
    luck = get_stat(stats, STAT_LUCK)

    might = _weapon_value(weapon, 'might')
    if weapon is None:
        weapon_hit = UNARMED_HIT
    else:
        weapon_hit = _weapon_value(weapon, 'hit')
    weapon_crit = _weapon_value(weapon, 'crit')

    attack_speed = calculate_attack_speed(stats, weapon, mods)

    if weapon is None:
        atk = strength
    elif weapon.is_magical:
        atk = magic + might
    else:
        atk = strength + might

    return BaseCombatProfile(
        atk=atk,
        hit=weapon_hit + skill * 2 + luck + mods.hit,
        crit=weapon_crit + math.floor(skill / 2) + mods.crit,
        avoid=attack_speed * 2 + luck + mods.avoid,
        dodge=luck + mods.dodge,
        attack_speed=attack_speed,
    )


def _weapon_value(weapon: Optional[Item], attr: str) -> float:
    if weapon is None:
        return 0
    value = getattr(weapon, attr)
    return 0 if value is None else value


# =============================================================================
# MASTER BATTLE CALCULATION
# =============================================================================

def build_battle_summary(attacker: BattleSide, defender: BattleSide) -> BattleSummary:
    """
    Calculate the outcome of attacker striking defender.

    Master Formula:
        Damage     = max(0, round_half_up((Atk - Def + Tri.dmg + mod.damage) * Eff))
        Battle Hit = Hit - Enemy Avoid + Tri.hit
        Battle Crit= Crit - Enemy Dodge
        Crit Dmg   = Damage * 2
        Doubles    = AS - Enemy AS >= 3

    Where Def is the defender's wisdom against magical weapons, constitution
    otherwise, and Eff is the weapon's effectiveness multiplier.

    Args:
        attacker: Side dealing the damage
        defender: Side receiving it

    Returns:
        BattleSummary (hit and crit not clamped)
    """
    attack_base = build_base_profile(attacker.stats, attacker.weapon, attacker.modifiers)
    defend_base = build_base_profile(defender.stats, defender.weapon, defender.modifiers)
    triangle = weapon_triangle_bonus(
        attacker.weapon.type if attacker.weapon else None,
        defender.weapon.type if defender.weapon else None,
    )

    is_magic = attacker.weapon is not None and attacker.weapon.is_magical
    defense_stat = STAT_WISDOM if is_magic else STAT_CONSTITUTION
    target_defense = get_stat(defender.stats, defense_stat)

    damage_bonus = (attacker.modifiers or NO_MODIFIERS).damage
    raw_damage = attack_base.atk - target_defense + triangle.damage + damage_bonus
    effectiveness = get_effectiveness_multiplier(attacker.weapon)
    damage = max(0, round_half_up(raw_damage * effectiveness))

    return BattleSummary(
        atk=attack_base.atk,
        hit=attack_base.hit,
        crit=attack_base.crit,
        attack_speed=attack_base.attack_speed,
        avoid=defend_base.avoid,
        dodge=defend_base.dodge,
        battle_hit=attack_base.hit - defend_base.avoid + triangle.hit,
        battle_crit=attack_base.crit - defend_base.dodge,
        damage=damage,
        crit_damage=damage * CRIT_DAMAGE_MULTIPLIER,
        doubles=(attack_base.attack_speed - defend_base.attack_speed) >= DOUBLE_ATTACK_THRESHOLD,
    )
