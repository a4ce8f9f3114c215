"""Tests for per-rest resources and rests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sheetkeeper.core.config import clear_settings_cache
from sheetkeeper.engine import resources
from sheetkeeper.engine.dice import DiceRoller
from sheetkeeper.engine.resources import (
    apply_damage,
    apply_healing,
    current_moxie,
    hit_dice_remaining,
    long_rest,
    max_action_surge,
    max_moxie,
    max_rages,
    max_second_wind,
    max_spell_slots,
    parse_amount,
    rages_remaining,
    recharge_action_surge,
    recharge_second_wind,
    restore_moxie,
    set_temp_hp,
    short_rest,
    spell_slots_remaining,
    spend_hit_dice,
    spend_moxie,
    take_rest,
    toggle_rage,
    toggle_spell_slot,
    use_action_surge,
    use_second_wind,
)
from sheetkeeper.models.character import CharacterSnapshot
from sheetkeeper.models.classes import UNBOUNDED
from sheetkeeper.models.enums import RestType


class TestParseAmount:
    """Tests for numeric input parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(5, 5), ("7", 7), (" 3 ", 3), (0, 0), (-2, None), ("seven", None), (None, None), (True, None)],
    )
    def test_parse(self, value: object, expected: int | None) -> None:
        assert parse_amount(value) == expected


class TestHitPoints:
    """Tests for damage, healing and temporary hit points."""

    def test_damage(self, barbarian: CharacterSnapshot) -> None:
        assert apply_damage(barbarian, 5).resources.hp_current == 9

    def test_temp_hp_absorbs_first(self, barbarian: CharacterSnapshot) -> None:
        """Test temporary hit points soak damage before current HP."""
        hurt = apply_damage(set_temp_hp(barbarian, 5), 8)

        assert hurt.resources.hp_temp == 0
        assert hurt.resources.hp_current == 11

    def test_damage_floors_at_zero(self, barbarian: CharacterSnapshot) -> None:
        assert apply_damage(barbarian, 100).resources.hp_current == 0

    @pytest.mark.parametrize("amount", ["abc", -3, 0, None])
    def test_invalid_damage_no_op(self, barbarian: CharacterSnapshot, amount: object) -> None:
        assert apply_damage(barbarian, amount) is barbarian

    def test_healing_capped(self, barbarian: CharacterSnapshot) -> None:
        healed = apply_healing(apply_damage(barbarian, 10), "50")
        assert healed.resources.hp_current == barbarian.resources.hp_max

    def test_temp_hp_replaces(self, barbarian: CharacterSnapshot) -> None:
        """Test temporary hit points never stack."""
        assert set_temp_hp(set_temp_hp(barbarian, 7), 3).resources.hp_temp == 3

    def test_input_not_mutated(self, barbarian: CharacterSnapshot) -> None:
        apply_damage(barbarian, 5)
        assert barbarian.resources.hp_current == 14


class TestRage:
    """Tests for rage tracking."""

    def test_toggle_scenario(self, barbarian: CharacterSnapshot) -> None:
        """Test start, end, exhaust and refuse with two rages."""
        assert max_rages(barbarian) == 2

        raging = toggle_rage(barbarian)
        assert raging.resources.is_raging
        assert raging.resources.rages_used == 1

        calm = toggle_rage(raging)
        assert not calm.resources.is_raging
        assert calm.resources.rages_used == 1

        spent = toggle_rage(toggle_rage(calm))
        assert spent.resources.rages_used == 2
        assert rages_remaining(spent) == 0

        assert toggle_rage(spent) is spent

    def test_unbounded_rages(self, make_snapshot: Callable[..., CharacterSnapshot]) -> None:
        """Test a level 20 barbarian rages without spending uses."""
        snapshot = make_snapshot(class_id="barbarian", level=20)

        raging = toggle_rage(snapshot)

        assert raging.resources.is_raging
        assert raging.resources.rages_used == 0
        assert rages_remaining(raging) is UNBOUNDED

    def test_no_rage_class(self, fighter: CharacterSnapshot) -> None:
        assert max_rages(fighter) == 0
        assert toggle_rage(fighter) is fighter

    def test_no_class(self, make_snapshot: Callable[..., CharacterSnapshot]) -> None:
        snapshot = make_snapshot()
        assert toggle_rage(snapshot) is snapshot


class TestMoxie:
    """Tests for the moxie pool."""

    def test_pool(self, make_snapshot: Callable[..., CharacterSnapshot]) -> None:
        """Test an unset pool reads as full."""
        snapshot = make_snapshot(class_id="pugilist", level=2)

        assert max_moxie(snapshot) == 2
        assert current_moxie(snapshot) == 2

    def test_spend_and_restore(self, make_snapshot: Callable[..., CharacterSnapshot]) -> None:
        snapshot = make_snapshot(class_id="pugilist", level=2)

        spent = spend_moxie(snapshot)
        assert spent.resources.moxie_current == 1
        assert current_moxie(spent) == 1

        assert spend_moxie(spent, 5) is spent
        assert restore_moxie(spent).resources.moxie_current is None
        assert restore_moxie(snapshot) is snapshot

    def test_level_one_has_none(self, pugilist: CharacterSnapshot) -> None:
        assert max_moxie(pugilist) == 0
        assert spend_moxie(pugilist) is pugilist


class TestHitDice:
    """Tests for hit dice spending."""

    def test_spend_heals(
        self,
        make_snapshot: Callable[..., CharacterSnapshot],
        fixed_roller: Callable[..., object],
    ) -> None:
        """Test each die adds Con and healing stops at hp_max."""
        snapshot = make_snapshot(
            class_id="barbarian",
            level=3,
            abilities={"con": 14},
            resources={"hp_max": 30, "hp_current": 10},
        )
        roller = fixed_roller(12, 12)

        updated, result = spend_hit_dice(snapshot, 2, roller=roller)

        assert roller.expressions == ["1d12", "1d12"]
        assert result.rolls == (14, 14)
        assert result.healed == 20
        assert result.dice_spent == 2
        assert updated.resources.hp_current == 30
        assert hit_dice_remaining(updated) == 1

    def test_die_floored_at_zero(
        self,
        make_snapshot: Callable[..., CharacterSnapshot],
        fixed_roller: Callable[..., object],
    ) -> None:
        """Test a low roll with a Con penalty heals 0, not less."""
        snapshot = make_snapshot(
            class_id="wizard",
            abilities={"con": 3},
            resources={"hp_max": 4, "hp_current": 2},
        )

        updated, result = spend_hit_dice(snapshot, 1, roller=fixed_roller(1))

        assert result.rolls == (0,)
        assert updated.resources.hp_current == 2
        assert hit_dice_remaining(updated) == 0

    @pytest.mark.parametrize("count", [0, 2, "two", -1])
    def test_invalid_count_no_op(self, barbarian: CharacterSnapshot, count: object) -> None:
        updated, result = spend_hit_dice(barbarian, count)

        assert updated is barbarian
        assert result.dice_spent == 0
        assert result.rolls == ()

    def test_real_roller(self, barbarian: CharacterSnapshot, dice_roller: object) -> None:
        hurt = apply_damage(barbarian, 13)
        updated, result = spend_hit_dice(hurt, 1, roller=dice_roller)

        assert 3 <= result.rolls[0] <= 14
        assert updated.resources.hp_current == min(14, 1 + result.rolls[0])

    def test_default_roller_uses_configured_seed(
        self,
        barbarian: CharacterSnapshot,
        isolated_env: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the roller built when none is passed is seeded from settings."""
        seeds: list[int | None] = []

        class RecordingRoller(DiceRoller):
            def __init__(self, *, seed: int | None = None) -> None:
                seeds.append(seed)
                super().__init__(seed=seed)

        monkeypatch.setenv("SHEETKEEPER_RULES_DICE_SEED", "7")
        monkeypatch.setattr(resources, "DiceRoller", RecordingRoller)
        clear_settings_cache()

        spend_hit_dice(apply_damage(barbarian, 5), 1)

        assert seeds == [7]


class TestSpellSlots:
    """Tests for spell slot toggling."""

    def test_toggle_wraps(self, wizard: CharacterSnapshot) -> None:
        """Test slots fill one at a time and wrap back to empty."""
        assert max_spell_slots(wizard, 1) == 2

        one = toggle_spell_slot(wizard, 1)
        two = toggle_spell_slot(one, 1)
        wrapped = toggle_spell_slot(two, 1)

        assert one.resources.spell_slots_used == {1: 1}
        assert spell_slots_remaining(two, 1) == 0
        assert wrapped.resources.spell_slots_used == {}

    def test_no_slots_at_level(self, wizard: CharacterSnapshot) -> None:
        assert toggle_spell_slot(wizard, 2) is wizard

    @pytest.mark.parametrize("spell_level", [0, 10])
    def test_invalid_spell_level(self, wizard: CharacterSnapshot, spell_level: int) -> None:
        assert toggle_spell_slot(wizard, spell_level) is wizard

    def test_non_caster(self, barbarian: CharacterSnapshot) -> None:
        assert max_spell_slots(barbarian, 1) == 0
        assert toggle_spell_slot(barbarian, 1) is barbarian


class TestSecondWindAndActionSurge:
    """Tests for fighter resources."""

    def test_second_wind(self, fighter: CharacterSnapshot) -> None:
        """Test uses count up to the maximum and recharge one at a time."""
        assert max_second_wind(fighter) == 2

        used = use_second_wind(use_second_wind(fighter))
        assert used.resources.second_wind_used == 2

        assert recharge_second_wind(used).resources.second_wind_used == 1
        assert recharge_second_wind(fighter) is fighter

    def test_action_surge_none_at_level_one(self, fighter: CharacterSnapshot) -> None:
        assert max_action_surge(fighter) == 0
        assert use_action_surge(fighter) is fighter

    def test_second_wind_wraps(self, fighter: CharacterSnapshot) -> None:
        """Test a use at the maximum cycles the counter back to 0."""
        counts = []
        snapshot = fighter
        for _ in range(3):
            snapshot = use_second_wind(snapshot)
            counts.append(snapshot.resources.second_wind_used)

        assert counts == [1, 2, 0]

    def test_action_surge(self, make_snapshot: Callable[..., CharacterSnapshot]) -> None:
        snapshot = make_snapshot(class_id="fighter", level=2)

        used = use_action_surge(snapshot)
        assert used.resources.action_surge_used == 1
        assert use_action_surge(used).resources.action_surge_used == 0
        assert recharge_action_surge(used).resources.action_surge_used == 0


class TestRests:
    """Tests for short and long rests."""

    def test_short_rest_refunds_one_rage(self, barbarian: CharacterSnapshot) -> None:
        spent = toggle_rage(toggle_rage(toggle_rage(barbarian)))
        assert spent.resources.rages_used == 2

        rested = short_rest(spent)
        assert rested.resources.rages_used == 1

    def test_short_rest_leaves_other_resources(self, fighter: CharacterSnapshot) -> None:
        """Test second wind only recharges through its own operation."""
        used = use_second_wind(fighter)
        assert short_rest(used).resources.second_wind_used == 1

    def test_short_rest_clears_rages_when_unbounded(
        self, make_snapshot: Callable[..., CharacterSnapshot]
    ) -> None:
        """Test uses carried over from level 19 all come back."""
        snapshot = make_snapshot(class_id="barbarian", level=20, resources={"rages_used": 3})

        assert short_rest(snapshot).resources.rages_used == 0

    def test_long_rest_restores_everything(
        self, make_snapshot: Callable[..., CharacterSnapshot]
    ) -> None:
        snapshot = make_snapshot(
            class_id="barbarian",
            level=4,
            resources={
                "hp_max": 40,
                "hp_current": 3,
                "hp_temp": 5,
                "hit_dice_remaining": 0,
                "rages_used": 3,
                "is_raging": True,
                "moxie_current": 0,
                "spell_slots_used": {1: 1},
                "second_wind_used": 1,
                "action_surge_used": 1,
            },
        )

        res = long_rest(snapshot).resources

        assert res.hp_current == 40
        assert res.hp_temp == 0
        assert res.hit_dice_remaining == 4
        assert res.rages_used == 0
        assert not res.is_raging
        assert res.moxie_current is None
        assert res.spell_slots_used == {}
        assert res.second_wind_used == 0
        assert res.action_surge_used == 0

    def test_take_rest(self, barbarian: CharacterSnapshot) -> None:
        hurt = apply_damage(barbarian, 10)

        assert take_rest(hurt, RestType.LONG).resources.hp_current == 14
        assert take_rest(hurt, "short").resources.hp_current == 4
        assert take_rest(hurt, "nap") is hurt
