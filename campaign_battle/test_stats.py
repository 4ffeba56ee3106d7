"""
Unit tests for core/stats.py - Stat sheet flattening and level growths.
"""
import pytest

from campaign_battle.core.stats import (
    StructuredStats,
    apply_growths,
    flatten_stats,
    get_skill_stat,
    get_stat,
    is_structured,
    round_half_up,
    stats_at_level,
)


class TestFlattenStats:
    """Tests for flatten_stats()."""

    def test_flat_map_returned_as_is(self):
        """A flat map comes back with the same values."""
        raw = {"hp": 20, "strength": 7}
        assert flatten_stats(raw) == {"hp": 20, "strength": 7}

    def test_flat_map_is_copied(self):
        """The caller's map is never returned or mutated."""
        raw = {"hp": 20}
        flat = flatten_stats(raw)
        flat["hp"] = 1
        assert raw["hp"] == 20

    def test_base_stats_used_verbatim(self):
        """Structured sheets use baseStats only; growths and bonuses are not merged."""
        raw = {
            "baseStats": {"hp": 20, "ability": 10},
            "growths": {"hp": 70},
            "bonusStats": {"hp": 5},
        }
        assert flatten_stats(raw) == {"hp": 20, "ability": 10}

    def test_null_base_stats(self):
        """baseStats present but None gives an empty map."""
        assert flatten_stats({"baseStats": None}) == {}

    def test_none_and_non_mapping(self):
        """None and non-mapping values give an empty map."""
        assert flatten_stats(None) == {}
        assert flatten_stats(42) == {}
        assert flatten_stats("hp") == {}

    def test_structured_dataclass(self):
        """StructuredStats instances flatten to their base stats."""
        sheet = StructuredStats(base_stats={"luck": 3}, growths={"luck": 40})
        assert flatten_stats(sheet) == {"luck": 3}
        assert flatten_stats(StructuredStats()) == {}


class TestStructuredStats:
    """Tests for StructuredStats parsing."""

    def test_from_dict(self):
        """camelCase keys map onto fields."""
        sheet = StructuredStats.from_dict({
            "baseStats": {"hp": 18},
            "growths": {"hp": 60},
            "weaponRanks": {"sword": "C"},
        })
        assert sheet.base_stats == {"hp": 18}
        assert sheet.growths == {"hp": 60}
        assert sheet.bonus_stats is None
        assert sheet.weapon_ranks == {"sword": "C"}

    def test_from_dict_rejects_non_mapping(self):
        """A list is not a stat sheet."""
        with pytest.raises(TypeError):
            StructuredStats.from_dict(["hp"])

    def test_is_structured(self):
        """Only sheets with baseStats count as structured."""
        assert is_structured({"baseStats": {}})
        assert is_structured(StructuredStats())
        assert not is_structured({"hp": 3})
        assert not is_structured(None)


class TestStatLookup:
    """Tests for get_stat() and get_skill_stat()."""

    def test_missing_is_zero(self):
        assert get_stat({}, "luck") == 0

    def test_none_is_default(self):
        assert get_stat({"luck": None}, "luck", default=4) == 4

    def test_skill_stat_prefers_ability(self):
        assert get_skill_stat({"ability": 6, "skill": 9}) == 6

    def test_skill_stat_falls_back_to_skill(self):
        assert get_skill_stat({"skill": 9}) == 9
        assert get_skill_stat({"ability": None, "skill": 9}) == 9

    def test_skill_stat_default(self):
        assert get_skill_stat({}) == 0


class TestRoundHalfUp:
    """Tests for round_half_up()."""

    def test_positive_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1

    def test_negative_half_rounds_towards_positive(self):
        """-2.5 -> -2, matching floor(x + 0.5)."""
        assert round_half_up(-2.5) == -2
        assert round_half_up(-0.5) == 0

    def test_regular_values(self):
        assert round_half_up(2.4) == 2
        assert round_half_up(-2.6) == -3


class TestApplyGrowths:
    """Tests for apply_growths()."""

    BASE = {"hp": 20, "strength": 5, "luck": 3}
    GROWTHS = {"hp": 70, "strength": 45}

    def test_zero_delta_unchanged(self):
        assert apply_growths(self.BASE, self.GROWTHS, 0) == self.BASE

    def test_missing_growths_unchanged(self):
        assert apply_growths(self.BASE, None, 10) == self.BASE

    def test_result_is_a_copy(self):
        result = apply_growths(self.BASE, None, 3)
        assert result is not self.BASE

    def test_growth_over_levels(self):
        """10 levels at 70% hp -> +7, at 45% str -> +4.5 -> +5, no luck growth."""
        result = apply_growths(self.BASE, self.GROWTHS, 10)
        assert result == {"hp": 27, "strength": 10, "luck": 3}

    def test_negative_delta(self):
        """-10 levels: hp -7, str -4.5 -> -4 (half rounds towards +inf)."""
        result = apply_growths(self.BASE, self.GROWTHS, -10)
        assert result == {"hp": 13, "strength": 1, "luck": 3}

    def test_growth_keys_outside_base_ignored(self):
        result = apply_growths({"hp": 10}, {"hp": 100, "wisdom": 100}, 2)
        assert result == {"hp": 12}

    def test_input_not_mutated(self):
        base = dict(self.BASE)
        apply_growths(base, self.GROWTHS, 5)
        assert base == self.BASE


class TestStatsAtLevel:
    """Tests for stats_at_level()."""

    def test_level_one_is_base(self):
        assert stats_at_level({"hp": 20}, {"hp": 90}, 1) == {"hp": 20}

    def test_levels_below_one_clamped(self):
        assert stats_at_level({"hp": 20}, {"hp": 90}, 0) == {"hp": 20}
        assert stats_at_level({"hp": 20}, {"hp": 90}, -4) == {"hp": 20}

    def test_level_five(self):
        """Level 5 applies four levels of growth: 4 * 50% = +2."""
        assert stats_at_level({"hp": 20}, {"hp": 50}, 5) == {"hp": 22}
