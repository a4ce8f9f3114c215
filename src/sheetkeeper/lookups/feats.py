"""Feat effect table and lookup.

Only feats with mechanical effects have entries. A feat missing from the
table is flavor-only: applying it changes nothing.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from sheetkeeper.models.enums import Ability


ALL_ABILITIES = tuple(Ability)


class FeatEffect(BaseModel):
    """Mechanical effects of one feat.

    Attributes:
        name: Feat name.
        fixed_abilities: Ability increases applied unconditionally.
        ability_choices: Abilities the player may pick from for +1 each.
        armor_proficiencies: Armor categories granted.
        skill_choice_count: Number of skill proficiencies the player picks.
        hp_bonus_per_level: Hit points per character level.
        heavy_weapon_damage: Adds proficiency bonus to heavy weapon damage.
        concentration_advantage: Advantage on concentration saves.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    fixed_abilities: dict[Ability, int] = Field(default_factory=dict)
    ability_choices: tuple[Ability, ...] = ()
    armor_proficiencies: tuple[str, ...] = ()
    skill_choice_count: int = 0
    hp_bonus_per_level: int = 0
    heavy_weapon_damage: bool = False
    concentration_advantage: bool = False


FEAT_EFFECTS: dict[str, FeatEffect] = {
    effect.name: effect
    for effect in (
        FeatEffect(
            name="Ability Score Improvement",
            ability_choices=ALL_ABILITIES,
        ),
        FeatEffect(
            name="Great Weapon Master",
            fixed_abilities={Ability.STR: 1},
            heavy_weapon_damage=True,
        ),
        FeatEffect(
            name="Heavily Armored",
            ability_choices=(Ability.CON, Ability.STR),
            armor_proficiencies=("heavy",),
        ),
        FeatEffect(
            name="Lightly Armored",
            ability_choices=(Ability.DEX, Ability.STR),
            armor_proficiencies=("light",),
        ),
        FeatEffect(
            name="Moderately Armored",
            ability_choices=(Ability.DEX, Ability.STR),
            armor_proficiencies=("medium",),
        ),
        FeatEffect(name="Skilled", skill_choice_count=3),
        FeatEffect(name="Tavern Brawler", ability_choices=(Ability.STR, Ability.CON)),
        FeatEffect(name="Tough", hp_bonus_per_level=2),
        FeatEffect(name="War Caster", concentration_advantage=True),
    )
}


class FeatLookup:
    """Resolve feat names to their effects, case-insensitively."""

    def __init__(self, effects: Mapping[str, FeatEffect]) -> None:
        self._effects = {k.strip().lower(): v for k, v in effects.items()}

    def by_name(self, name: str | None) -> FeatEffect | None:
        if not name:
            return None
        return self._effects.get(name.strip().lower())

    def names(self) -> list[str]:
        return sorted(effect.name for effect in self._effects.values())

    @classmethod
    def builtin(cls) -> FeatLookup:
        return cls(FEAT_EFFECTS)


__all__ = [
    "FeatEffect",
    "FEAT_EFFECTS",
    "FeatLookup",
]
