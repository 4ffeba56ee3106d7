"""
Unit tests for weapons.py - Range labels and weapon rank eligibility.
"""
import pytest

from campaign_battle.combatants import Combatant
from campaign_battle.core import Item, WeaponRank
from campaign_battle.game_classes import GameClass
from campaign_battle.weapons import (
    can_equip_weapon,
    can_use_weapon_for_class,
    has_sufficient_rank,
    normalize_rank,
    range_label,
    usable_weapons,
)


class TestRangeLabel:
    """Tests for range_label()."""

    def test_single_range(self):
        assert range_label(Item(min_range=1, max_range=1)) == "1"

    def test_span(self):
        assert range_label(Item(min_range=1, max_range=3)) == "1-3"

    def test_no_range_fallback(self):
        assert range_label(Item()) == "-"
        assert range_label(Item(), fallback="n/a") == "n/a"
        assert range_label(Item(), fallback=None) is None

    def test_min_only_and_max_only(self):
        assert range_label(Item(min_range=2)) == "2"
        assert range_label(Item(max_range=5)) == "5"

    def test_magic_formula_with_mag(self):
        """floor(mag/2) is evaluated when mag is known."""
        assert range_label(Item(range_formula="floor(mag/2)"), mag=9) == "4"
        assert range_label(Item(range_formula="FLOOR(MAG/2)"), mag=10) == "5"

    def test_magic_formula_without_mag(self):
        assert range_label(Item(range_formula="floor(mag/2)")) == "floor(mag/2)"

    def test_other_formula_passthrough(self):
        """Free-text formulas are shown as written, even with ranges set."""
        item = Item(range_formula="1-Mag", min_range=1, max_range=2)
        assert range_label(item, mag=10) == "1-Mag"


class TestRanks:
    """Tests for normalize_rank() and has_sufficient_rank()."""

    def test_normalize(self):
        assert normalize_rank(" b ") is WeaponRank.B
        assert normalize_rank("S") is WeaponRank.S
        assert normalize_rank("Z") is None
        assert normalize_rank(None) is None
        assert normalize_rank("") is None

    def test_rank_order(self):
        assert WeaponRank.A.order > WeaponRank.C.order

    @pytest.mark.parametrize("current,required,expected", [
        ("B", "C", True),
        ("C", "C", True),
        ("D", "C", False),
        ("S", "A", True),
        ("E", None, True),
        ("X", "E", False),
        (None, "E", False),
        ("A", "?", False),
    ])
    def test_sufficient_rank(self, current, required, expected):
        assert has_sufficient_rank(current, required) is expected


class TestCanEquipWeapon:
    """Tests for can_equip_weapon()."""

    def build_character(self, **overrides) -> Combatant:
        values = dict(id="c1", name="Mia", class_name="Myrmidon", weapon_ranks={"sword": "C"})
        values.update(overrides)
        return Combatant(**values)

    def test_sufficient_rank(self):
        sword = Item(type="Sword", weapon_rank="D")
        assert can_equip_weapon(self.build_character(), sword)

    def test_insufficient_rank(self):
        sword = Item(type="sword", weapon_rank="B")
        assert not can_equip_weapon(self.build_character(), sword)

    def test_required_rank_defaults_to_e(self):
        assert can_equip_weapon(self.build_character(), Item(type="sword"))

    def test_untracked_weapon_type(self):
        assert not can_equip_weapon(self.build_character(), Item(type="axe"))

    def test_needs_class(self):
        assert not can_equip_weapon(self.build_character(class_name=None), Item(type="sword"))
        assert not can_equip_weapon(None, Item(type="sword"))

    def test_laguz_class_restriction(self):
        laguz = Item(type="laguz", class_restriction="Cat")
        cat = self.build_character(class_name="Cat", weapon_ranks={"laguz": "E"})
        hawk = self.build_character(class_name="Hawk", weapon_ranks={"laguz": "E"})
        assert can_equip_weapon(cat, laguz)
        assert not can_equip_weapon(hawk, laguz)


class TestClassWeapons:
    """Tests for can_use_weapon_for_class() and usable_weapons()."""

    MAGE = GameClass(name="Mage", weapon_ranks={"anima": "C", "sword": "-"})

    def test_usable(self):
        assert can_use_weapon_for_class(self.MAGE, Item(type="anima", weapon_rank="D"))

    def test_rank_too_low(self):
        assert not can_use_weapon_for_class(self.MAGE, Item(type="anima", weapon_rank="A"))

    def test_dash_means_unusable(self):
        assert not can_use_weapon_for_class(self.MAGE, Item(type="sword"))

    def test_class_restriction(self):
        assert not can_use_weapon_for_class(self.MAGE, Item(type="anima", class_restriction="Sage"))
        assert can_use_weapon_for_class(self.MAGE, Item(type="anima", class_restriction="Mage"))

    def test_no_class_or_ranks(self):
        assert not can_use_weapon_for_class(None, Item(type="anima"))
        assert not can_use_weapon_for_class(GameClass(name="Villager"), Item(type="anima"))

    def test_usable_weapons_filters_category(self):
        items = [
            Item(id="fire", category="WEAPON", type="anima"),
            Item(id="vulnerary", category="CONSUMABLE", type="anima"),
            Item(id="iron-sword", category="WEAPON", type="sword"),
        ]
        assert [item.id for item in usable_weapons(items, self.MAGE)] == ["fire"]
