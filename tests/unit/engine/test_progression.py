"""Tests for the progression engine."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from sheetkeeper.core.config import RulesSettings
from sheetkeeper.core.exceptions import MissingClassDataError
from sheetkeeper.engine.progression import (
    ProgressionEngine,
    apply_level_effects,
    compute_hp_gain,
)
from sheetkeeper.lookups.registry import Lookups
from sheetkeeper.models.character import CharacterSnapshot
from sheetkeeper.models.choices import FeatChoice, LevelUpChoices
from sheetkeeper.models.classes import LevelEffect
from sheetkeeper.models.enums import Ability, ArmorFormula, EffectType


@pytest.fixture
def barbarian_at(make_snapshot: Callable[..., CharacterSnapshot]) -> Callable[..., CharacterSnapshot]:
    """Factory for barbarians at a given level with Str 16, Con 14."""

    def _make(level: int, **fields: object) -> CharacterSnapshot:
        fields.setdefault("abilities", {"str": 16, "dex": 12, "con": 14})
        fields.setdefault("resources", {"hp_max": 10 * level, "hp_current": 10 * level})
        return make_snapshot(class_id="barbarian", level=level, **fields)

    return _make


@pytest.mark.parametrize(
    ("hit_die", "con_modifier", "expected"),
    [(12, 2, 9), (10, 0, 6), (8, 3, 8), (6, -1, 3), (6, -4, 1)],
)
def test_compute_hp_gain(hit_die: int, con_modifier: int, expected: int) -> None:
    """Test average-roll gain with a floor of 1."""
    assert compute_hp_gain(hit_die, con_modifier) == expected


class TestComputeAdvancement:
    """Tests for advancement lookup."""

    def test_by_class_id(self, progression: ProgressionEngine) -> None:
        advancement = progression.compute_advancement("barbarian", 3)

        assert advancement.grants == ("Barbarian Subclass", "Primal Knowledge")
        assert advancement.grants_subclass

    def test_defaults_to_next_level(
        self, progression: ProgressionEngine, barbarian: CharacterSnapshot
    ) -> None:
        assert progression.compute_advancement(barbarian).target_level == 2

    @pytest.mark.parametrize("level", [0, 21])
    def test_out_of_range_is_empty(self, progression: ProgressionEngine, level: int) -> None:
        advancement = progression.compute_advancement("barbarian", level)

        assert advancement.grants == ()
        assert advancement.choices == ()

    def test_includes_subclass_features(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test a chosen subclass adds its features at later levels."""
        snapshot = barbarian_at(5, subclass_id="berserker")

        assert "Mindless Rage" in progression.compute_advancement(snapshot).grants

    def test_missing_class(
        self,
        progression: ProgressionEngine,
        make_snapshot: Callable[..., CharacterSnapshot],
    ) -> None:
        with pytest.raises(MissingClassDataError):
            progression.compute_advancement(make_snapshot())


class TestApplyLevelUp:
    """Tests for level-up application."""

    def test_basic_level_up(self, progression: ProgressionEngine, barbarian: CharacterSnapshot) -> None:
        """Test a d12 class with Con +2 gains 9 HP and a hit die."""
        updated = progression.apply_level_up(barbarian)

        assert updated.level == 2
        assert updated.resources.hp_max == 23
        assert updated.resources.hp_current == 23
        assert updated.resources.hit_dice_remaining == 2
        assert updated.features[-2:] == ["Danger Sense", "Reckless Attack"]
        assert updated.id == barbarian.id

    def test_input_not_mutated(self, progression: ProgressionEngine, barbarian: CharacterSnapshot) -> None:
        before = barbarian.model_dump()
        progression.apply_level_up(barbarian)
        assert barbarian.model_dump() == before

    def test_proficiency_bonus_steps(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        updated = progression.apply_level_up(barbarian_at(4))

        assert updated.level == 5
        assert updated.proficiency_bonus == 3

    def test_damaged_character_gains_hp(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test the gain is added to current HP, not a full heal."""
        snapshot = barbarian_at(2, resources={"hp_max": 23, "hp_current": 5})

        updated = progression.apply_level_up(snapshot)

        assert updated.resources.hp_max == 32
        assert updated.resources.hp_current == 14

    def test_single_ability_increase(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        updated = progression.apply_level_up(
            barbarian_at(3), LevelUpChoices(ability_increase=["str"])
        )
        assert updated.abilities.strength == 18

    def test_two_ability_increase(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        updated = progression.apply_level_up(
            barbarian_at(3), LevelUpChoices(ability_increase=["str", "con"])
        )

        assert updated.abilities.strength == 17
        assert updated.abilities.constitution == 15

    def test_hp_gain_uses_con_before_increase(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test a Con increase this level does not change this level's gain."""
        snapshot = barbarian_at(3, abilities={"con": 15})

        updated = progression.apply_level_up(snapshot, LevelUpChoices(ability_increase=["con"]))

        assert updated.abilities.constitution == 17
        assert updated.resources.hp_max == 30 + 9

    def test_feat_instead_of_asi(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test Tough grants 2 HP per level when taken."""
        updated = progression.apply_level_up(
            barbarian_at(3), LevelUpChoices(feat=FeatChoice(name="Tough"))
        )

        assert updated.resources.hp_max == 30 + 9 + 8
        (record,) = updated.feats
        assert record.name == "Tough"
        assert record.source == "level_up"
        assert record.taken_at_level == 4

    def test_tough_not_regranted_by_default(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        snapshot = barbarian_at(4, feats=[{"name": "Tough", "taken_at_level": 4}])
        assert progression.apply_level_up(snapshot).resources.hp_max == 40 + 9

    def test_tough_regrant_variant(
        self,
        lookups: Lookups,
        rules: RulesSettings,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test the re-grant variant adds the per-level bonus again."""
        engine = ProgressionEngine(
            lookups, rules.model_copy(update={"tough_regrants_per_level": True})
        )
        snapshot = barbarian_at(4, feats=[{"name": "Tough", "taken_at_level": 4}])

        assert engine.apply_level_up(snapshot).resources.hp_max == 40 + 9 + 2

    def test_subclass_at_subclass_level(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        updated = progression.apply_level_up(barbarian_at(2), LevelUpChoices(subclass="berserker"))

        assert updated.subclass_id == "berserker"
        assert "Frenzy" in updated.features
        assert "Primal Knowledge" in updated.features

    def test_subclass_by_display_name(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        updated = progression.apply_level_up(
            barbarian_at(2), LevelUpChoices(subclass="Path of the Berserker")
        )
        assert updated.subclass_id == "berserker"

    def test_unknown_subclass_kept(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test an unrecognized subclass is stored without features."""
        updated = progression.apply_level_up(barbarian_at(2), LevelUpChoices(subclass="Path of Doom"))

        assert updated.subclass_id == "path of doom"
        assert "Frenzy" not in updated.features

    def test_subclass_ignored_off_level(
        self, progression: ProgressionEngine, barbarian: CharacterSnapshot
    ) -> None:
        updated = progression.apply_level_up(barbarian, LevelUpChoices(subclass="berserker"))
        assert updated.subclass_id is None

    def test_epic_boon(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        updated = progression.apply_level_up(
            barbarian_at(18), LevelUpChoices(epic_boon=FeatChoice(name="Lucky"))
        )

        assert updated.level == 19
        assert updated.feats[-1].name == "Lucky"
        assert updated.feats[-1].source == "epic_boon"

    def test_level_twenty_effects(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test Primal Champion raises Str and Con up to 25."""
        updated = progression.apply_level_up(barbarian_at(19, abilities={"str": 23, "con": 18}))

        assert updated.level == 20
        assert updated.abilities.strength == 25
        assert updated.abilities.constitution == 22
        assert "Primal Champion" in updated.features

    def test_level_cap_no_op(
        self,
        progression: ProgressionEngine,
        barbarian_at: Callable[..., CharacterSnapshot],
    ) -> None:
        snapshot = barbarian_at(20)
        assert progression.apply_level_up(snapshot) is snapshot

    def test_configured_level_cap(
        self,
        lookups: Lookups,
        barbarian_at: Callable[..., CharacterSnapshot],
        isolated_env: object,
    ) -> None:
        engine = ProgressionEngine(lookups, RulesSettings(max_level=5))
        snapshot = barbarian_at(5)

        assert engine.apply_level_up(snapshot) is snapshot

    @pytest.mark.parametrize("class_id", [None, "bard"])
    def test_missing_class_raises(
        self,
        progression: ProgressionEngine,
        make_snapshot: Callable[..., CharacterSnapshot],
        class_id: str | None,
    ) -> None:
        """Test a character without a class table cannot level up."""
        snapshot = make_snapshot(class_id=class_id)

        with pytest.raises(MissingClassDataError) as exc_info:
            progression.apply_level_up(snapshot)

        assert exc_info.value.details["class_id"] == class_id
        assert exc_info.value.details["character_id"] == snapshot.id


class TestApplyLevelEffects:
    """Tests for level effect application."""

    def test_ability_bonus_with_cap(self, make_snapshot: Callable[..., CharacterSnapshot]) -> None:
        snapshot = make_snapshot(abilities={"str": 22, "con": 10})
        effect = LevelEffect(
            type=EffectType.ABILITY_BONUS,
            abilities={Ability.STR: 4, Ability.CON: 4},
            cap=24,
        )

        apply_level_effects(snapshot, [effect])

        assert snapshot.abilities.strength == 24
        assert snapshot.abilities.constitution == 14

    def test_ac_formula(self, make_snapshot: Callable[..., CharacterSnapshot]) -> None:
        snapshot = make_snapshot()

        apply_level_effects(
            snapshot, [LevelEffect(type=EffectType.AC_FORMULA, formula=ArmorFormula.IRON_CHIN)]
        )

        assert snapshot.bonuses.ac_formula is ArmorFormula.IRON_CHIN
