"""
Campaign Battle - Core Constants
================================
Single source of truth for all combat constants, enums, and reference tables.

Values mirror the house rules used by the campaign manager's battle calculator.
"""

from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class DamageType(Enum):
    """Which defensive stat a weapon's damage is checked against."""
    PHYSICAL = "PHYSICAL"   # vs constitution
    MAGICAL = "MAGICAL"     # vs wisdom


class WeaponRank(Enum):
    """Weapon proficiency tiers from lowest to highest."""
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    S = "S"

    @property
    def order(self) -> int:
        """Position in the rank ladder (E=0 ... S=5)."""
        return WEAPON_RANK_ORDER.index(self)


# =============================================================================
# STAT KEYS
# =============================================================================

STAT_HP = "hp"
STAT_STRENGTH = "strength"
STAT_INTELLIGENCE = "intelligence"
STAT_AGILITY = "agility"
STAT_ABILITY = "ability"
STAT_SKILL = "skill"            # legacy alias of ability on older sheets
STAT_LUCK = "luck"
STAT_CONSTITUTION = "constitution"
STAT_WISDOM = "wisdom"
STAT_BUILD = "build"
STAT_MOVEMENT = "movement"

# Stat line for generic (non-persisted) combatants at level 1
DEFAULT_STATS: Dict[str, int] = {
    STAT_HP: 30,
    STAT_STRENGTH: 10,
    STAT_INTELLIGENCE: 0,
    STAT_AGILITY: 8,
    STAT_ABILITY: 8,
    STAT_LUCK: 5,
    STAT_CONSTITUTION: 5,
    STAT_WISDOM: 0,
    STAT_BUILD: 5,
    STAT_MOVEMENT: 5,
}


# =============================================================================
# COMBAT CONSTANTS
# =============================================================================

UNARMED_HIT = 30            # Weapon hit used when nothing is equipped
DOUBLE_ATTACK_THRESHOLD = 3  # Attack speed lead needed for a follow-up strike
CRIT_DAMAGE_MULTIPLIER = 2
DEFAULT_EFFECTIVENESS = 1


# =============================================================================
# WEAPON TRIANGLE
# =============================================================================

# attacker type -> the type it beats
WEAPON_TRIANGLE_ADVANTAGE: Dict[str, str] = {
    # Physical triangle
    "sword": "axe",
    "axe": "lance",
    "lance": "sword",
    # Magic trinity
    "anima": "light",
    "light": "dark",
    "dark": "anima",
}

TRIANGLE_ADVANTAGE_BONUS: Tuple[int, int] = (1, 10)  # (damage, hit)


# =============================================================================
# SKILLS
# =============================================================================

IRA_HP_THRESHOLD = 0.5
IRA_CRIT_BONUS = 50

MARTIAL_DAMAGE_BONUS = 5
MARTIAL_WEAPON_TYPES: List[str] = ["sword", "lance", "axe"]

ALWAYS_RATE = 100
NEVER_RATE = 0


# =============================================================================
# ITEMS & RANKS
# =============================================================================

WEAPON_RANK_ORDER: List[WeaponRank] = list(WeaponRank)
DEFAULT_REQUIRED_RANK = WeaponRank.E
NO_RANK_MARKER = "-"        # class table entry meaning "cannot use this type"

WEAPON_CATEGORY = "WEAPON"
LAGUZ_WEAPON_TYPE = "laguz"

MAGIC_RANGE_FORMULA = "floor(mag/2)"
DEFAULT_RANGE_FALLBACK = "-"
