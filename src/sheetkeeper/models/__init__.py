"""Pydantic models for characters, class tables and formula results."""

from __future__ import annotations

from sheetkeeper.models.breakdowns import (
    ArmorClassBreakdown,
    AttackBreakdown,
    BonusPart,
    EquippedBonuses,
    HitDiceResult,
)
from sheetkeeper.models.character import (
    AbilityScores,
    Bonuses,
    CharacterSnapshot,
    FeatRecord,
    InventoryEntry,
    Proficiencies,
    Resources,
    calculate_modifier,
    proficiency_bonus_for_level,
)
from sheetkeeper.models.choices import FeatChoice, FeatOptions, LevelUpChoices
from sheetkeeper.models.classes import (
    UNBOUNDED,
    ChoiceSpec,
    ClassLevelEntry,
    ClassTable,
    LevelAdvancement,
    LevelEffect,
    ResourceMax,
    SubclassTable,
    Unbounded,
    has_remaining,
    is_unbounded,
    remaining,
)
from sheetkeeper.models.enums import (
    Ability,
    ArmorCategory,
    ArmorFormula,
    ChoiceType,
    EffectType,
    RestType,
    Skill,
    UnarmoredDefense,
)


__all__ = [
    # Enums
    "Ability",
    "Skill",
    "ArmorCategory",
    "ArmorFormula",
    "UnarmoredDefense",
    "ChoiceType",
    "EffectType",
    "RestType",
    # Character
    "CharacterSnapshot",
    "AbilityScores",
    "Bonuses",
    "Proficiencies",
    "Resources",
    "InventoryEntry",
    "FeatRecord",
    "calculate_modifier",
    "proficiency_bonus_for_level",
    # Class tables
    "ClassTable",
    "ClassLevelEntry",
    "SubclassTable",
    "LevelAdvancement",
    "LevelEffect",
    "ChoiceSpec",
    "Unbounded",
    "UNBOUNDED",
    "ResourceMax",
    "is_unbounded",
    "has_remaining",
    "remaining",
    # Choices
    "FeatOptions",
    "FeatChoice",
    "LevelUpChoices",
    # Breakdowns
    "BonusPart",
    "ArmorClassBreakdown",
    "AttackBreakdown",
    "EquippedBonuses",
    "HitDiceResult",
]
