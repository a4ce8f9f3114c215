"""Race, background and spell catalogs.

These populate choice lists at character creation. The engine only needs
``by_name``; creation also reads racial ability bonuses and background skill
proficiencies from them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from sheetkeeper.models.enums import Ability, Skill


class CatalogRecord(BaseModel):
    """Base for named catalog entries."""

    model_config = ConfigDict(frozen=True)

    name: str


class RaceRecord(CatalogRecord):
    ability_bonuses: dict[Ability, int] = Field(default_factory=dict)
    speed: int = 30


class BackgroundRecord(CatalogRecord):
    skill_proficiencies: tuple[Skill, ...] = ()


class SpellRecord(CatalogRecord):
    level: int = Field(default=0, ge=0, le=9)
    school: str = ""


RecordT = TypeVar("RecordT", bound=CatalogRecord)


class NamedCatalog(Generic[RecordT]):
    """Case-insensitive name index over catalog records."""

    def __init__(self, records: Iterable[RecordT]) -> None:
        self._records = {r.name.strip().lower(): r for r in records}

    def by_name(self, name: str | None) -> RecordT | None:
        if not name:
            return None
        return self._records.get(name.strip().lower())

    def names(self) -> list[str]:
        return sorted(r.name for r in self._records.values())

    def __len__(self) -> int:
        return len(self._records)


RACES: tuple[RaceRecord, ...] = (
    RaceRecord(name="Human", ability_bonuses={a: 1 for a in Ability}),
    RaceRecord(name="Dwarf", ability_bonuses={Ability.CON: 2}, speed=25),
    RaceRecord(name="Elf", ability_bonuses={Ability.DEX: 2}),
    RaceRecord(name="Halfling", ability_bonuses={Ability.DEX: 2}, speed=25),
    RaceRecord(name="Half-Orc", ability_bonuses={Ability.STR: 2, Ability.CON: 1}),
    RaceRecord(name="Goliath", ability_bonuses={Ability.STR: 2, Ability.CON: 1}, speed=35),
    RaceRecord(name="Tiefling", ability_bonuses={Ability.CHA: 2, Ability.INT: 1}),
)

BACKGROUNDS: tuple[BackgroundRecord, ...] = (
    BackgroundRecord(name="Soldier", skill_proficiencies=(Skill.ATHLETICS, Skill.INTIMIDATION)),
    BackgroundRecord(name="Criminal", skill_proficiencies=(Skill.SLEIGHT_OF_HAND, Skill.STEALTH)),
    BackgroundRecord(name="Sage", skill_proficiencies=(Skill.ARCANA, Skill.HISTORY)),
    BackgroundRecord(name="Sailor", skill_proficiencies=(Skill.ACROBATICS, Skill.PERCEPTION)),
    BackgroundRecord(name="Entertainer", skill_proficiencies=(Skill.ACROBATICS, Skill.PERFORMANCE)),
)

SPELLS: tuple[SpellRecord, ...] = (
    SpellRecord(name="Fire Bolt", level=0, school="evocation"),
    SpellRecord(name="Mage Hand", level=0, school="conjuration"),
    SpellRecord(name="Shield", level=1, school="abjuration"),
    SpellRecord(name="Magic Missile", level=1, school="evocation"),
    SpellRecord(name="Misty Step", level=2, school="conjuration"),
    SpellRecord(name="Fireball", level=3, school="evocation"),
)


__all__ = [
    "CatalogRecord",
    "RaceRecord",
    "BackgroundRecord",
    "SpellRecord",
    "NamedCatalog",
    "RACES",
    "BACKGROUNDS",
    "SPELLS",
]
