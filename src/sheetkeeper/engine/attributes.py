"""Attribute resolver: scores, modifiers, saves and skills.

These functions never raise. Ability and skill keys may be enum members or
loosely formatted strings ('str', 'Sleight of Hand'); keys that match
nothing contribute a modifier of 0.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sheetkeeper.core.constants import DEFAULT_ABILITY_SCORE
from sheetkeeper.models.character import (
    CharacterSnapshot,
    calculate_modifier,
    proficiency_bonus_for_level,
)
from sheetkeeper.models.enums import Ability, Skill


PASSIVE_BASE = 10


def ability_score(snapshot: CharacterSnapshot, ability: Ability | str) -> int:
    """Base score plus additive bonuses; unknown keys give the default score."""
    key = Ability.coerce(ability)
    if key is None:
        return DEFAULT_ABILITY_SCORE
    return snapshot.score(key)


def ability_modifier(snapshot: CharacterSnapshot, ability: Ability | str) -> int:
    """Modifier for an ability.

    Example:
        >>> snap = CharacterSnapshot(name="Ash", abilities={"str": 16})
        >>> ability_modifier(snap, "str")
        3
        >>> ability_modifier(snap, "luck")
        0
    """
    return calculate_modifier(ability_score(snapshot, ability))


def save_bonus(snapshot: CharacterSnapshot, ability: Ability | str) -> int:
    """Modifier plus proficiency when the save is proficient."""
    key = Ability.coerce(ability)
    if key is None:
        return 0
    bonus = ability_modifier(snapshot, key)
    if key in snapshot.proficiencies.saves:
        bonus += snapshot.proficiency_bonus
    return bonus


def skill_multiplier(snapshot: CharacterSnapshot, skill: Skill) -> int:
    """Proficiency multiplier: 2 for expertise, 1 proficient, 0 otherwise."""
    if skill in snapshot.proficiencies.expertise:
        return 2
    if skill in snapshot.proficiencies.skills:
        return 1
    return 0


def skill_bonus(snapshot: CharacterSnapshot, skill: Skill | str) -> int:
    """Governing ability modifier plus scaled proficiency."""
    key = Skill.coerce(skill)
    if key is None:
        return 0
    return (
        ability_modifier(snapshot, key.ability)
        + skill_multiplier(snapshot, key) * snapshot.proficiency_bonus
    )


def passive_score(snapshot: CharacterSnapshot, skill: Skill | str) -> int:
    """Passive check value, e.g. passive Perception."""
    return PASSIVE_BASE + skill_bonus(snapshot, skill)


def proficiency_bonus(level: int) -> int:
    return proficiency_bonus_for_level(level)


# =============================================================================
# Summary
# =============================================================================


class AbilityLine(BaseModel):
    """Score, modifier and save for one ability."""

    model_config = ConfigDict(frozen=True)

    ability: Ability
    score: int
    modifier: int
    save: int
    save_proficient: bool


class AttributeSummary(BaseModel):
    """Every ability and skill number for a sheet header."""

    model_config = ConfigDict(frozen=True)

    proficiency_bonus: int
    abilities: tuple[AbilityLine, ...]
    skills: dict[Skill, int]
    passive_perception: int

    @classmethod
    def from_snapshot(cls, snapshot: CharacterSnapshot) -> AttributeSummary:
        lines = tuple(
            AbilityLine(
                ability=ability,
                score=ability_score(snapshot, ability),
                modifier=ability_modifier(snapshot, ability),
                save=save_bonus(snapshot, ability),
                save_proficient=ability in snapshot.proficiencies.saves,
            )
            for ability in Ability
        )
        return cls(
            proficiency_bonus=snapshot.proficiency_bonus,
            abilities=lines,
            skills={skill: skill_bonus(snapshot, skill) for skill in Skill},
            passive_perception=passive_score(snapshot, Skill.PERCEPTION),
        )

    def line(self, ability: Ability) -> AbilityLine:
        return next(line for line in self.abilities if line.ability == ability)


__all__ = [
    "ability_score",
    "ability_modifier",
    "save_bonus",
    "skill_multiplier",
    "skill_bonus",
    "passive_score",
    "proficiency_bonus",
    "AbilityLine",
    "AttributeSummary",
]
