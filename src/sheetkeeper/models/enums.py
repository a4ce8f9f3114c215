"""Enumeration types for sheetkeeper.

Abilities and skills are the keys of every derived number on a sheet. The
remaining enums are capability flags that class tables and snapshots carry so
the engine can branch on what a class *does* instead of what it is called.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six ability scores."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability (e.g. 'Strength')."""
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation (e.g. 'STR')."""
        return self.name

    @classmethod
    def coerce(cls, value: object) -> Ability | None:
        """Resolve an ability from a member, full name or abbreviation.

        Args:
            value: 'str', 'STR', 'strength' or an Ability.

        Returns:
            The matching Ability, or None when the key is unknown.

        Example:
            >>> Ability.coerce("con")
            <Ability.CON: 'constitution'>
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        return None


class Skill(StrEnum):
    """Skills and their governing abilities."""

    # Strength skills
    ATHLETICS = "athletics"

    # Dexterity skills
    ACROBATICS = "acrobatics"
    SLEIGHT_OF_HAND = "sleight_of_hand"
    STEALTH = "stealth"

    # Intelligence skills
    ARCANA = "arcana"
    HISTORY = "history"
    INVESTIGATION = "investigation"
    NATURE = "nature"
    RELIGION = "religion"

    # Wisdom skills
    ANIMAL_HANDLING = "animal_handling"
    INSIGHT = "insight"
    MEDICINE = "medicine"
    PERCEPTION = "perception"
    SURVIVAL = "survival"

    # Charisma skills
    DECEPTION = "deception"
    INTIMIDATION = "intimidation"
    PERFORMANCE = "performance"
    PERSUASION = "persuasion"

    @property
    def ability(self) -> Ability:
        """Get the governing ability for this skill."""
        return SKILL_ABILITIES[self]

    @classmethod
    def coerce(cls, value: object) -> Skill | None:
        """Resolve a skill from a member or a loosely formatted name.

        'Animal Handling', 'animal handling' and 'animal_handling' all map to
        ANIMAL_HANDLING. Unknown names return None.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            return None


SKILL_ABILITIES: dict[Skill, Ability] = {
    Skill.ATHLETICS: Ability.STR,
    Skill.ACROBATICS: Ability.DEX,
    Skill.SLEIGHT_OF_HAND: Ability.DEX,
    Skill.STEALTH: Ability.DEX,
    Skill.ARCANA: Ability.INT,
    Skill.HISTORY: Ability.INT,
    Skill.INVESTIGATION: Ability.INT,
    Skill.NATURE: Ability.INT,
    Skill.RELIGION: Ability.INT,
    Skill.ANIMAL_HANDLING: Ability.WIS,
    Skill.INSIGHT: Ability.WIS,
    Skill.MEDICINE: Ability.WIS,
    Skill.PERCEPTION: Ability.WIS,
    Skill.SURVIVAL: Ability.WIS,
    Skill.DECEPTION: Ability.CHA,
    Skill.INTIMIDATION: Ability.CHA,
    Skill.PERFORMANCE: Ability.CHA,
    Skill.PERSUASION: Ability.CHA,
}


class ArmorCategory(StrEnum):
    """Armor weight classes. Each one caps Dexterity differently."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    SHIELD = "shield"

    @property
    def label(self) -> str:
        """Formula label shown in an AC breakdown (e.g. 'Light Armor')."""
        if self is ArmorCategory.SHIELD:
            return "Shield"
        return f"{self.value.capitalize()} Armor"


class UnarmoredDefense(StrEnum):
    """Class-level unarmored defense formula: 10 + Dex + a second ability."""

    NONE = "none"
    CONSTITUTION = "constitution"
    WISDOM = "wisdom"

    @property
    def ability(self) -> Ability | None:
        """Secondary ability added on top of Dexterity, if any."""
        if self is UnarmoredDefense.NONE:
            return None
        return Ability(self.value)


class ArmorFormula(StrEnum):
    """Fixed AC formulas granted by a feature and flagged on the character."""

    IRON_CHIN = "iron_chin"


class ChoiceType(StrEnum):
    """Player choices a level can require."""

    ASI_OR_FEAT = "asi_or_feat"
    EPIC_BOON_OR_FEAT = "epic_boon_or_feat"
    SUBCLASS = "subclass"


class EffectType(StrEnum):
    """Mechanical effects tied to reaching a level."""

    ABILITY_BONUS = "ability_bonus"
    AC_FORMULA = "ac_formula"


class RestType(StrEnum):
    """Recovery tiers."""

    SHORT = "short"
    LONG = "long"


__all__ = [
    "Ability",
    "Skill",
    "SKILL_ABILITIES",
    "ArmorCategory",
    "UnarmoredDefense",
    "ArmorFormula",
    "ChoiceType",
    "EffectType",
    "RestType",
]
