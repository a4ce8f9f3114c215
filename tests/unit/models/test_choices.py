"""Tests for feat and level-up choice payloads."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sheetkeeper.models.choices import FeatChoice, FeatOptions, LevelUpChoices
from sheetkeeper.models.enums import Ability, Skill


class TestFeatOptions:
    """Tests for FeatOptions."""

    def test_single_ability(self) -> None:
        assert FeatOptions(ability_stat="con").chosen_abilities == [Ability.CON]

    def test_camel_case_aliases(self) -> None:
        """Test stored sheets using camelCase keys still parse."""
        options = FeatOptions.model_validate({"abilityStats": ["str", "DEX"]})
        assert options.chosen_abilities == [Ability.STR, Ability.DEX]

    def test_list_wins_over_single(self) -> None:
        options = FeatOptions(ability_stat="cha", ability_stats=["wis"])
        assert options.chosen_abilities == [Ability.WIS]

    def test_empty(self) -> None:
        assert FeatOptions(ability_stat="").chosen_abilities == []

    def test_unknown_ability_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FeatOptions(ability_stat="luck")

    def test_skills_coerced(self) -> None:
        assert FeatOptions(skills=["Sleight of Hand"]).skills == [Skill.SLEIGHT_OF_HAND]


class TestLevelUpChoices:
    """Tests for LevelUpChoices."""

    def test_single_ability_string(self) -> None:
        """Test a lone ability is accepted without a list."""
        assert LevelUpChoices(ability_increase="str").ability_increase == [Ability.STR]

    def test_two_abilities(self) -> None:
        choices = LevelUpChoices(ability_increase=["str", "con"])
        assert choices.ability_increase == [Ability.STR, Ability.CON]

    def test_three_abilities_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LevelUpChoices(ability_increase=["str", "dex", "con"])

    def test_asi_and_feat_exclusive(self) -> None:
        """Test an ASI and a feat cannot both be taken."""
        with pytest.raises(ValidationError):
            LevelUpChoices(ability_increase=["str"], feat=FeatChoice(name="Tough"))

    def test_feat_alone(self) -> None:
        choices = LevelUpChoices(feat={"name": "Tough"})

        assert choices.feat is not None
        assert choices.feat.name == "Tough"
        assert choices.feat.options.chosen_abilities == []
