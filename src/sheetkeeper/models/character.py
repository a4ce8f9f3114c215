"""Character snapshot model.

The CharacterSnapshot is the single aggregate every engine operation reads
and returns. Defaults are filled in exactly once, by the ``normalize`` model
validator, so engine code never re-derives a missing value at a read site.

Engine operations never mutate a snapshot they are handed. They work on a
deep copy and finish with ``CharacterSnapshot.normalized()``, which runs the
validator again and restores every invariant (HP clamp, hit dice range,
proficiency bonus in step with level, deduplicated lists).
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sheetkeeper.core.constants import (
    DEFAULT_ABILITY_SCORE,
    MAX_CHARACTER_LEVEL,
    MIN_CHARACTER_LEVEL,
    PROFICIENCY_BONUS_STEPS,
)
from sheetkeeper.models.enums import Ability, ArmorFormula, Skill


# =============================================================================
# Rules Math
# =============================================================================


def calculate_modifier(score: int) -> int:
    """Calculate an ability modifier from a score.

    Floor division keeps negative scores correct: 9 gives -1, not 0.

    Args:
        score: The ability score.

    Returns:
        The ability modifier.

    Example:
        >>> calculate_modifier(8)
        -1
        >>> calculate_modifier(17)
        3
    """
    return (score - 10) // 2


def proficiency_bonus_for_level(level: int) -> int:
    """Get the proficiency bonus for a character level.

    Levels outside 1-20 are clamped into that range first.

    Example:
        >>> proficiency_bonus_for_level(5)
        3
    """
    level = max(MIN_CHARACTER_LEVEL, min(level, MAX_CHARACTER_LEVEL))
    for minimum_level, bonus in PROFICIENCY_BONUS_STEPS:
        if level >= minimum_level:
            return bonus
    return PROFICIENCY_BONUS_STEPS[-1][1]


def _dedupe(values: list[Any]) -> list[Any]:
    """Drop repeated entries while keeping first-seen order."""
    seen: set[Any] = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


# =============================================================================
# Snapshot Parts
# =============================================================================


class SheetModel(BaseModel):
    """Base model for snapshot parts."""

    model_config = ConfigDict(extra="ignore")


class AbilityScores(SheetModel):
    """Base ability scores, before any bonuses."""

    strength: int = DEFAULT_ABILITY_SCORE
    dexterity: int = DEFAULT_ABILITY_SCORE
    constitution: int = DEFAULT_ABILITY_SCORE
    intelligence: int = DEFAULT_ABILITY_SCORE
    wisdom: int = DEFAULT_ABILITY_SCORE
    charisma: int = DEFAULT_ABILITY_SCORE

    @model_validator(mode="before")
    @classmethod
    def accept_abbreviations(cls, data: Any) -> Any:
        """Map keys like 'str' or 'STR' onto full ability names."""
        if not isinstance(data, dict):
            return data
        mapped: dict[str, Any] = {}
        for key, value in data.items():
            ability = Ability.coerce(key)
            if ability is not None:
                mapped[ability.value] = value
        return mapped

    def get(self, ability: Ability) -> int:
        """Get the base score for an ability."""
        return getattr(self, ability.value)

    def set(self, ability: Ability, value: int) -> None:
        """Set the base score for an ability."""
        setattr(self, ability.value, value)


class Bonuses(SheetModel):
    """Additive bonuses layered over base scores.

    Attributes:
        abilities: Summed racial, feat and item bonuses per ability.
        ac_formula: Feature-granted fixed AC formula, if any.
    """

    abilities: dict[Ability, int] = Field(default_factory=dict)
    ac_formula: ArmorFormula | None = None

    @field_validator("abilities", mode="before")
    @classmethod
    def coerce_ability_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        coerced: dict[Ability, int] = {}
        for key, amount in value.items():
            ability = Ability.coerce(key)
            if ability is not None:
                coerced[ability] = coerced.get(ability, 0) + int(amount)
        return coerced

    def for_ability(self, ability: Ability) -> int:
        return self.abilities.get(ability, 0)


class Proficiencies(SheetModel):
    """Proficiency sets, stored as ordered lists without duplicates.

    Expertise implies proficiency; normalization adds every expertise skill
    to ``skills``.
    """

    saves: list[Ability] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    expertise: list[Skill] = Field(default_factory=list)
    weapons: list[str] = Field(default_factory=list)
    armor: list[str] = Field(default_factory=list)

    @field_validator("saves", mode="before")
    @classmethod
    def coerce_saves(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple, set)):
            return value
        return [a for a in (Ability.coerce(v) for v in value) if a is not None]

    @field_validator("skills", "expertise", mode="before")
    @classmethod
    def coerce_skills(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple, set)):
            return value
        return [s for s in (Skill.coerce(v) for v in value) if s is not None]

    @field_validator("weapons", "armor", mode="before")
    @classmethod
    def lowercase_names(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple, set)):
            return value
        return [str(v).strip().lower() for v in value if str(v).strip()]

    @model_validator(mode="after")
    def dedupe_sets(self) -> Proficiencies:
        self.skills = _dedupe([*self.skills, *self.expertise])
        self.expertise = _dedupe(self.expertise)
        self.saves = _dedupe(self.saves)
        self.weapons = _dedupe(self.weapons)
        self.armor = _dedupe(self.armor)
        return self


class Resources(SheetModel):
    """Per-rest resources and hit point state.

    Attributes:
        hp_max: Maximum hit points.
        hp_current: Current hit points, kept within [0, hp_max].
        hp_temp: Temporary hit points, never negative.
        hit_dice_remaining: Unspent hit dice. None means a full pool.
        moxie_current: Current moxie. None means the level maximum.
        rages_used: Rages spent since the last long rest.
        is_raging: Whether a rage is active.
        spell_slots_used: Spell level to slots spent.
        prepared_spells: Prepared spell ids.
        known_cantrips: Known cantrip ids.
        second_wind_used: Second Wind uses spent.
        action_surge_used: Action Surge uses spent.
    """

    hp_max: int = Field(default=0, ge=0)
    hp_current: int = 0
    hp_temp: int = 0
    hit_dice_remaining: int | None = None
    moxie_current: int | None = None
    rages_used: int = Field(default=0, ge=0)
    is_raging: bool = False
    spell_slots_used: dict[int, int] = Field(default_factory=dict)
    prepared_spells: list[str] = Field(default_factory=list)
    known_cantrips: list[str] = Field(default_factory=list)
    second_wind_used: int = Field(default=0, ge=0)
    action_surge_used: int = Field(default=0, ge=0)


class InventoryEntry(SheetModel):
    """One line of a character's inventory."""

    item_name: str
    quantity: int = Field(default=1, ge=0)
    equipped: bool = False
    attuned: bool = False
    charges: int | None = None


class FeatRecord(SheetModel):
    """A feat the character holds and when it was taken."""

    name: str
    source: str = "level_up"
    taken_at_level: int = Field(default=1, ge=1)


# =============================================================================
# Snapshot
# =============================================================================


class CharacterSnapshot(SheetModel):
    """Complete state of one character.

    Attributes:
        id: Unique character id (store key).
        name: Character name.
        race: Race name.
        background: Background name.
        class_id: Class table id, or None before a class is chosen.
        subclass_id: Chosen subclass id.
        level: Character level, 1-20.
        proficiency_bonus: Always equal to the level-derived bonus.
        abilities: Base ability scores.
        bonuses: Additive bonuses and AC formula flag.
        proficiencies: Save, skill, weapon and armor proficiencies.
        resources: HP and per-rest resources.
        features: Granted feature names in grant order.
        inventory: Inventory entries.
        feats: Feats taken.
        overrides: Stat key to manually fixed value.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = Field(..., min_length=1)
    race: str = ""
    background: str = ""
    class_id: str | None = None
    subclass_id: str | None = None
    level: int = Field(default=MIN_CHARACTER_LEVEL, ge=MIN_CHARACTER_LEVEL, le=MAX_CHARACTER_LEVEL)
    proficiency_bonus: int = 2

    abilities: AbilityScores = Field(default_factory=AbilityScores)
    bonuses: Bonuses = Field(default_factory=Bonuses)
    proficiencies: Proficiencies = Field(default_factory=Proficiencies)
    resources: Resources = Field(default_factory=Resources)
    features: list[str] = Field(default_factory=list)
    inventory: list[InventoryEntry] = Field(default_factory=list)
    feats: list[FeatRecord] = Field(default_factory=list)
    overrides: dict[str, int] = Field(default_factory=dict)

    @field_validator("class_id", "subclass_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    @field_validator("overrides", mode="before")
    @classmethod
    def normalize_override_keys(cls, value: Any) -> Any:
        """Lowercase override keys; the last value for a key wins."""
        if not isinstance(value, dict):
            return value
        return {str(k).strip().lower(): v for k, v in value.items() if v is not None}

    @model_validator(mode="after")
    def normalize(self) -> CharacterSnapshot:
        """Fill defaults and restore invariants."""
        res = self.resources
        res.hp_temp = max(0, res.hp_temp)
        res.hp_current = max(0, min(res.hp_current, res.hp_max))
        if res.hit_dice_remaining is None:
            res.hit_dice_remaining = self.level
        res.hit_dice_remaining = max(0, min(res.hit_dice_remaining, self.level))
        if res.moxie_current is not None:
            res.moxie_current = max(0, res.moxie_current)
        res.spell_slots_used = {
            int(lvl): count for lvl, count in res.spell_slots_used.items() if count > 0
        }
        res.prepared_spells = _dedupe(res.prepared_spells)
        res.known_cantrips = _dedupe(res.known_cantrips)

        self.proficiency_bonus = proficiency_bonus_for_level(self.level)
        self.features = _dedupe(self.features)
        return self

    def normalized(self) -> CharacterSnapshot:
        """Return a freshly validated copy with every invariant restored."""
        return type(self).model_validate(self.model_dump())

    def clone(self) -> CharacterSnapshot:
        """Return a deep copy safe to modify."""
        return self.model_copy(deep=True)

    def score(self, ability: Ability) -> int:
        """Base score plus every additive bonus for an ability."""
        return self.abilities.get(ability) + self.bonuses.for_ability(ability)

    def has_feat(self, feat_name: str) -> bool:
        key = feat_name.strip().lower()
        return any(f.name.strip().lower() == key for f in self.feats)


__all__ = [
    "calculate_modifier",
    "proficiency_bonus_for_level",
    "AbilityScores",
    "Bonuses",
    "Proficiencies",
    "Resources",
    "InventoryEntry",
    "FeatRecord",
    "CharacterSnapshot",
]
