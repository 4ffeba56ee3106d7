"""
Campaign Battle - Items
=======================
Item record as consumed by the combat math.

Items come from the campaign backend as camelCase JSON; Item.from_dict()
is the only place that shape is parsed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .constants import DamageType


@dataclass(frozen=True)
class Item:
    """
    An inventory item. Weapons carry the combat fields.

    Numeric fields are Optional on purpose: hit=None (not set) and hit=0
    are treated differently when building a combat profile.
    """
    id: str = ""
    name: str = ""
    category: Optional[str] = None
    type: Optional[str] = None              # weapon-type tag, e.g. "sword", "light"
    damage_type: Optional[DamageType] = None

    # Weapon stats
    might: Optional[float] = None
    hit: Optional[float] = None
    crit: Optional[float] = None
    weight: Optional[float] = None

    # Range
    min_range: Optional[int] = None
    max_range: Optional[int] = None
    range_formula: Optional[str] = None     # free text, e.g. "floor(mag/2)"

    # Extras
    effectiveness: Optional[Dict[str, Any]] = field(default=None, hash=False)   # e.g. {"multiplier": 2}
    class_restriction: Optional[str] = None
    weapon_rank: Optional[str] = None

    @property
    def is_magical(self) -> bool:
        return self.damage_type is DamageType.MAGICAL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Item':
        """Build an Item from the backend's camelCase record."""
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")

        effectiveness = data.get('effectiveness')
        return cls(
            id=str(data.get('id') or ""),
            name=str(data.get('name') or ""),
            category=data.get('category'),
            type=data.get('type'),
            damage_type=parse_damage_type(data.get('damageType')),
            might=data.get('might'),
            hit=data.get('hit'),
            crit=data.get('crit'),
            weight=data.get('weight'),
            min_range=data.get('minRange'),
            max_range=data.get('maxRange'),
            range_formula=data.get('rangeFormula'),
            effectiveness=dict(effectiveness) if isinstance(effectiveness, Mapping) else None,
            class_restriction=data.get('classRestriction'),
            weapon_rank=data.get('weaponRank'),
        )


def parse_damage_type(value: Any) -> Optional[DamageType]:
    """Map exactly "PHYSICAL"/"MAGICAL" to DamageType; anything else (including "magical") is None."""
    if isinstance(value, DamageType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return DamageType(value)
    except ValueError:
        return None


def coerce_item(value: Any) -> Optional[Item]:
    """Accept an Item, a backend mapping, or None."""
    if value is None or isinstance(value, Item):
        return value
    return Item.from_dict(value)
