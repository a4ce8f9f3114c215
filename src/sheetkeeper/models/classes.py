"""Class table schemas.

Class tables are immutable reference data. Everything the engine needs to
branch on (unarmored defense formula, whether a class rages, its unarmed
die) is a field on the table, resolved once per class, never a string
comparison on the class id.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sheetkeeper.core.constants import DEFAULT_HIT_DIE
from sheetkeeper.models.enums import (
    Ability,
    ArmorFormula,
    ChoiceType,
    EffectType,
    UnarmoredDefense,
)


# =============================================================================
# Unbounded Sentinel
# =============================================================================


class Unbounded:
    """Marker for a resource maximum with no cap.

    There is exactly one instance, ``UNBOUNDED``. It supports no arithmetic
    so that cap checks must ask ``is_unbounded`` explicitly.
    """

    _instance: Unbounded | None = None

    def __new__(cls) -> Unbounded:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUNDED"

    def __reduce__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED = Unbounded()

ResourceMax = int | Unbounded
"""A resource maximum: a finite count or ``UNBOUNDED``."""


def is_unbounded(value: object) -> bool:
    return value is UNBOUNDED


def has_remaining(used: int, maximum: ResourceMax) -> bool:
    """Whether another use fits under a maximum."""
    if is_unbounded(maximum):
        return True
    return used < maximum


def remaining(used: int, maximum: ResourceMax) -> ResourceMax:
    """Uses left under a maximum; ``UNBOUNDED`` stays unbounded."""
    if is_unbounded(maximum):
        return UNBOUNDED
    return max(0, maximum - used)


# =============================================================================
# Table Schemas
# =============================================================================


class TableModel(BaseModel):
    """Base for frozen reference-data models."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")


class LevelEffect(TableModel):
    """A mechanical effect applied when a level is reached.

    Attributes:
        type: Effect kind.
        abilities: Ability increases for ABILITY_BONUS effects.
        cap: Maximum score the increase may reach, if any.
        formula: AC formula flag for AC_FORMULA effects.
    """

    type: EffectType
    abilities: dict[Ability, int] = Field(default_factory=dict)
    cap: int | None = None
    formula: ArmorFormula | None = None


class ChoiceSpec(TableModel):
    """A player decision required at a level."""

    type: ChoiceType
    count: int = 1


class LevelAdvancement(TableModel):
    """What reaching a level grants and asks for."""

    target_level: int
    grants: tuple[str, ...] = ()
    choices: tuple[ChoiceSpec, ...] = ()
    effects: tuple[LevelEffect, ...] = ()

    def requires(self, choice_type: ChoiceType) -> bool:
        return any(c.type == choice_type for c in self.choices)

    @property
    def grants_asi(self) -> bool:
        return self.requires(ChoiceType.ASI_OR_FEAT)

    @property
    def grants_epic_boon(self) -> bool:
        return self.requires(ChoiceType.EPIC_BOON_OR_FEAT)

    @property
    def grants_subclass(self) -> bool:
        return self.requires(ChoiceType.SUBCLASS)


class ClassLevelEntry(TableModel):
    """Per-level row of a class table.

    Attributes:
        features: Feature names granted at this level.
        fisticuffs_die: Level-scaled unarmed damage die, if the class has one.
        moxie_points: Moxie pool maximum.
        rages: Rages per long rest (``UNBOUNDED`` allowed).
        rage_damage: Rage damage bonus.
        weapon_mastery: Number of weapon mastery choices.
        second_wind_uses: Second Wind maximum.
        action_surge_uses: Action Surge maximum.
        effects: Mechanical effects tied to this level.
    """

    features: tuple[str, ...] = ()
    fisticuffs_die: str | None = None
    moxie_points: int = 0
    rages: ResourceMax = 0
    rage_damage: int = 0
    weapon_mastery: int = 0
    second_wind_uses: int = 0
    action_surge_uses: int = 0
    effects: tuple[LevelEffect, ...] = ()


class SubclassTable(TableModel):
    """A subclass and its feature schedule."""

    id: str
    name: str
    features: dict[int, tuple[str, ...]] = Field(default_factory=dict)

    def features_at(self, level: int) -> tuple[str, ...]:
        return self.features.get(level, ())


_EMPTY_LEVEL = ClassLevelEntry()


class ClassTable(TableModel):
    """Immutable rules data for one class.

    Attributes:
        id: Lowercase class id.
        name: Display name.
        hit_die: Hit die face count.
        saves: Saving throw proficiencies.
        armor_proficiencies: Armor categories the class is trained in.
        weapon_proficiencies: Weapon groups the class is trained in.
        skill_choices: Skills the class may pick from at creation.
        levels: Level to per-level row.
        asi_levels: Levels that offer an ability score improvement or feat.
        epic_boon_levels: Levels that offer an epic boon or feat.
        subclass_level: Level at which the subclass is chosen.
        subclasses: Subclass id to subclass table.
        unarmored_defense: Class unarmored defense formula.
        has_rage: Whether rage damage applies while raging.
        default_unarmed_die: Unarmed die when no level row provides one.
        spell_slots: Level to slot counts, index 0 holding spell level 1.
    """

    id: str
    name: str
    hit_die: int = DEFAULT_HIT_DIE
    saves: tuple[Ability, ...] = ()
    armor_proficiencies: tuple[str, ...] = ()
    weapon_proficiencies: tuple[str, ...] = ()
    skill_choices: tuple[str, ...] = ()
    levels: dict[int, ClassLevelEntry] = Field(default_factory=dict)
    asi_levels: frozenset[int] = frozenset()
    epic_boon_levels: frozenset[int] = frozenset()
    subclass_level: int | None = None
    subclasses: dict[str, SubclassTable] = Field(default_factory=dict)
    unarmored_defense: UnarmoredDefense = UnarmoredDefense.NONE
    has_rage: bool = False
    default_unarmed_die: str | None = None
    spell_slots: dict[int, tuple[int, ...]] = Field(default_factory=dict)

    def level_entry(self, level: int) -> ClassLevelEntry:
        """Row for a level, or an empty row when the table has none."""
        return self.levels.get(level, _EMPTY_LEVEL)

    def max_rages(self, level: int) -> ResourceMax:
        return self.level_entry(level).rages

    def rage_damage(self, level: int) -> int:
        return self.level_entry(level).rage_damage

    def moxie_points(self, level: int) -> int:
        return self.level_entry(level).moxie_points

    def second_wind_uses(self, level: int) -> int:
        return self.level_entry(level).second_wind_uses

    def action_surge_uses(self, level: int) -> int:
        return self.level_entry(level).action_surge_uses

    def unarmed_die(self, level: int) -> str | None:
        """Level die, falling back to the class default."""
        return self.level_entry(level).fisticuffs_die or self.default_unarmed_die

    def spell_slots_at(self, level: int, spell_level: int) -> int:
        slots = self.spell_slots.get(level, ())
        if 1 <= spell_level <= len(slots):
            return slots[spell_level - 1]
        return 0

    def subclass(self, subclass_id: str | None) -> SubclassTable | None:
        if not subclass_id:
            return None
        key = subclass_id.strip().lower()
        if key in self.subclasses:
            return self.subclasses[key]
        for sub in self.subclasses.values():
            if sub.name.lower() == key:
                return sub
        return None

    def advancement(self, level: int) -> LevelAdvancement:
        """Grants, choices and effects for reaching a level."""
        entry = self.level_entry(level)
        choices: list[ChoiceSpec] = []
        if level in self.asi_levels:
            choices.append(ChoiceSpec(type=ChoiceType.ASI_OR_FEAT))
        if level in self.epic_boon_levels:
            choices.append(ChoiceSpec(type=ChoiceType.EPIC_BOON_OR_FEAT))
        if self.subclass_level is not None and level == self.subclass_level:
            choices.append(ChoiceSpec(type=ChoiceType.SUBCLASS))
        return LevelAdvancement(
            target_level=level,
            grants=entry.features,
            choices=tuple(choices),
            effects=entry.effects,
        )

    @classmethod
    def from_rows(cls, rows: dict[int, dict[str, Any]], **fields: Any) -> ClassTable:
        """Build a table from plain per-level dicts."""
        levels = {lvl: ClassLevelEntry(**row) for lvl, row in rows.items()}
        return cls(levels=levels, **fields)


__all__ = [
    "Unbounded",
    "UNBOUNDED",
    "ResourceMax",
    "is_unbounded",
    "has_remaining",
    "remaining",
    "LevelEffect",
    "ChoiceSpec",
    "LevelAdvancement",
    "ClassLevelEntry",
    "SubclassTable",
    "ClassTable",
]
