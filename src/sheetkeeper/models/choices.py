"""Player choice payloads for feats and level-ups."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from sheetkeeper.models.enums import Ability, Skill


def _coerce_abilities(value: Any) -> Any:
    """Map abbreviations to Ability members, leaving unknowns for pydantic to reject."""
    if isinstance(value, (list, tuple)):
        return [Ability.coerce(v) or v for v in value]
    return Ability.coerce(value) or value


class FeatOptions(BaseModel):
    """Choices attached to taking a feat.

    Both a single ``ability_stat`` and a multi-select ``ability_stats`` are
    accepted, as are their camelCase spellings from stored sheets. When both
    are given the list wins.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    ability_stat: Ability | None = Field(
        default=None,
        validation_alias=AliasChoices("ability_stat", "abilityStat"),
    )
    ability_stats: list[Ability] | None = Field(
        default=None,
        validation_alias=AliasChoices("ability_stats", "abilityStats"),
    )
    skills: list[Skill] = Field(default_factory=list)

    @field_validator("ability_stat", "ability_stats", mode="before")
    @classmethod
    def coerce_abilities(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return _coerce_abilities(value)

    @field_validator("skills", mode="before")
    @classmethod
    def coerce_skills(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return value
        return [Skill.coerce(v) or v for v in value]

    @property
    def chosen_abilities(self) -> list[Ability]:
        """Abilities to bump, one entry per +1."""
        if self.ability_stats is not None:
            return list(self.ability_stats)
        if self.ability_stat is not None:
            return [self.ability_stat]
        return []


class FeatChoice(BaseModel):
    """A feat picked at a level-up, with its options."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    options: FeatOptions = Field(default_factory=FeatOptions)


class LevelUpChoices(BaseModel):
    """Everything a player decides when gaining a level.

    Attributes:
        ability_increase: One ability (+2) or two abilities (+1 each).
        feat: Feat taken instead of an ability score improvement.
        epic_boon: Feat taken for an epic boon choice.
        subclass: Subclass id, honored only at the subclass level.
    """

    model_config = ConfigDict(frozen=True)

    ability_increase: list[Ability] | None = None
    feat: FeatChoice | None = None
    epic_boon: FeatChoice | None = None
    subclass: str | None = None

    @field_validator("ability_increase", mode="before")
    @classmethod
    def coerce_increase(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, Ability)):
            value = [value]
        return _coerce_abilities(value)

    @field_validator("ability_increase", mode="after")
    @classmethod
    def one_or_two(cls, value: list[Ability] | None) -> list[Ability] | None:
        if value is not None and len(value) not in (1, 2):
            raise ValueError("ability_increase takes one or two abilities")
        return value

    @model_validator(mode="after")
    def asi_or_feat(self) -> LevelUpChoices:
        if self.ability_increase and self.feat is not None:
            raise ValueError("choose either an ability score improvement or a feat, not both")
        return self


__all__ = [
    "FeatOptions",
    "FeatChoice",
    "LevelUpChoices",
]
