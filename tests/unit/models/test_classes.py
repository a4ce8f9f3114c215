"""Tests for class table schemas."""

from __future__ import annotations

import copy

import pytest
from pydantic import ValidationError

from sheetkeeper.lookups.class_data import BARBARIAN, FIGHTER, PUGILIST, WIZARD
from sheetkeeper.models.classes import (
    UNBOUNDED,
    ClassTable,
    Unbounded,
    has_remaining,
    is_unbounded,
    remaining,
)
from sheetkeeper.models.enums import ArmorFormula, ChoiceType, EffectType


class TestUnbounded:
    """Tests for the unbounded resource sentinel."""

    def test_singleton(self) -> None:
        """Test every construction yields the same marker."""
        assert Unbounded() is UNBOUNDED
        assert copy.deepcopy(UNBOUNDED) is UNBOUNDED
        assert repr(UNBOUNDED) == "UNBOUNDED"

    def test_is_unbounded(self) -> None:
        assert is_unbounded(UNBOUNDED)
        assert not is_unbounded(0)
        assert not is_unbounded(None)

    def test_has_remaining(self) -> None:
        """Test finite and unbounded cap checks."""
        assert has_remaining(1, 2)
        assert not has_remaining(2, 2)
        assert has_remaining(999, UNBOUNDED)

    def test_remaining(self) -> None:
        """Test remaining uses never go negative."""
        assert remaining(1, 3) == 2
        assert remaining(5, 3) == 0
        assert remaining(5, UNBOUNDED) is UNBOUNDED

    def test_no_arithmetic(self) -> None:
        """Test the sentinel cannot be mistaken for a number."""
        with pytest.raises(TypeError):
            UNBOUNDED + 1  # type: ignore[operator]


class TestClassTable:
    """Tests for ClassTable queries."""

    def test_barbarian_rages(self) -> None:
        """Test rage maximum scales and becomes unbounded at 20."""
        assert BARBARIAN.max_rages(1) == 2
        assert BARBARIAN.max_rages(3) == 3
        assert BARBARIAN.max_rages(19) == 6
        assert BARBARIAN.max_rages(20) is UNBOUNDED

    def test_rage_damage(self) -> None:
        assert BARBARIAN.rage_damage(1) == 2
        assert BARBARIAN.rage_damage(9) == 3
        assert BARBARIAN.rage_damage(16) == 4

    def test_missing_level_row(self) -> None:
        """Test a level the table lacks returns an empty row."""
        entry = BARBARIAN.level_entry(25)

        assert entry.features == ()
        assert entry.rages == 0

    def test_unarmed_die_fallback(self) -> None:
        """Test the level die wins over the class default."""
        assert PUGILIST.unarmed_die(1) == "1d6"
        assert PUGILIST.unarmed_die(5) == "1d8"
        assert PUGILIST.unarmed_die(20) == "1d12"
        assert BARBARIAN.unarmed_die(1) is None

    def test_spell_slots(self) -> None:
        """Test slot counts by character and spell level."""
        assert WIZARD.spell_slots_at(1, 1) == 2
        assert WIZARD.spell_slots_at(3, 2) == 2
        assert WIZARD.spell_slots_at(1, 2) == 0
        assert WIZARD.spell_slots_at(1, 0) == 0
        assert BARBARIAN.spell_slots_at(5, 1) == 0

    def test_fighter_resources(self) -> None:
        assert FIGHTER.second_wind_uses(1) == 2
        assert FIGHTER.second_wind_uses(4) == 3
        assert FIGHTER.action_surge_uses(1) == 0
        assert FIGHTER.action_surge_uses(2) == 1

    def test_subclass_by_id_or_name(self) -> None:
        """Test subclasses resolve by id or display name."""
        by_id = BARBARIAN.subclass("berserker")

        assert by_id is not None
        assert BARBARIAN.subclass(by_id.name) is by_id
        assert BARBARIAN.subclass("Berserker") is by_id
        assert BARBARIAN.subclass("unknown") is None
        assert BARBARIAN.subclass(None) is None

    def test_frozen(self) -> None:
        """Test class tables cannot be modified."""
        with pytest.raises(ValidationError):
            BARBARIAN.hit_die = 20  # type: ignore[misc]


class TestAdvancement:
    """Tests for per-level advancement."""

    def test_grants(self) -> None:
        advancement = BARBARIAN.advancement(2)

        assert advancement.target_level == 2
        assert advancement.grants == ("Danger Sense", "Reckless Attack")
        assert advancement.choices == ()

    def test_subclass_choice(self) -> None:
        assert BARBARIAN.advancement(3).grants_subclass
        assert not BARBARIAN.advancement(4).grants_subclass

    def test_asi_levels(self) -> None:
        """Test fighters get extra ASI levels."""
        assert BARBARIAN.advancement(4).grants_asi
        assert not BARBARIAN.advancement(6).grants_asi
        assert FIGHTER.advancement(6).grants_asi
        assert FIGHTER.advancement(14).grants_asi

    def test_epic_boon(self) -> None:
        """Test level 19 offers an epic boon instead of an ASI."""
        advancement = BARBARIAN.advancement(19)

        assert advancement.grants_epic_boon
        assert not advancement.grants_asi
        assert advancement.requires(ChoiceType.EPIC_BOON_OR_FEAT)

    def test_effects(self) -> None:
        """Test level effects are carried on the advancement."""
        (iron_chin,) = PUGILIST.advancement(1).effects
        (champion,) = BARBARIAN.advancement(20).effects

        assert iron_chin.formula is ArmorFormula.IRON_CHIN
        assert champion.type is EffectType.ABILITY_BONUS
        assert champion.cap == 25

    def test_from_rows(self) -> None:
        """Test building a table from plain dicts."""
        table = ClassTable.from_rows(
            {1: {"features": ("Spark",)}, 2: {"features": ("Flare",), "moxie_points": 1}},
            id="tinker",
            name="Tinker",
        )

        assert table.hit_die == 8
        assert table.advancement(2).grants == ("Flare",)
        assert table.moxie_points(2) == 1
