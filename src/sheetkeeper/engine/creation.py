"""Character creation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sheetkeeper.core.constants import DEFAULT_HIT_DIE, MIN_CHARACTER_LEVEL
from sheetkeeper.core.logging import get_logger
from sheetkeeper.engine.attributes import ability_modifier
from sheetkeeper.engine.feats import take_feat
from sheetkeeper.engine.progression import apply_level_effects
from sheetkeeper.lookups.registry import Lookups, default_lookups
from sheetkeeper.models.character import (
    AbilityScores,
    Bonuses,
    CharacterSnapshot,
    Proficiencies,
    Resources,
)
from sheetkeeper.models.choices import FeatChoice
from sheetkeeper.models.enums import Ability, Skill


logger = get_logger(__name__)


def create_character(
    name: str,
    class_id: str | None,
    abilities: Mapping[Ability | str, int] | None = None,
    *,
    race: str = "",
    background: str = "",
    skills: Iterable[Skill | str] = (),
    origin_feat: FeatChoice | None = None,
    lookups: Lookups | None = None,
) -> CharacterSnapshot:
    """Build a level-1 character.

    Race, class and background are resolved once here. Racial ability
    bonuses land in ``bonuses``; background skills and class saves, armor
    and weapon training land in ``proficiencies``. Starting hit points are
    the full hit die plus the Constitution modifier, at least 1. Unknown
    race, background or class names are kept as given and contribute
    nothing.

    Args:
        name: Character name.
        class_id: Class table id.
        abilities: Base ability scores keyed by ability or abbreviation.
        race: Race name.
        background: Background name.
        skills: Class skill picks.
        origin_feat: Feat granted at creation, if any.
        lookups: Lookup services.

    Returns:
        A normalized level-1 snapshot.
    """
    lookups = lookups or default_lookups()
    table = lookups.classes.by_class_id(class_id)
    race_record = lookups.races.by_name(race)
    background_record = lookups.backgrounds.by_name(background)

    skill_list: list[Skill | str] = list(skills)
    if background_record is not None:
        skill_list.extend(background_record.skill_proficiencies)

    snapshot = CharacterSnapshot(
        name=name,
        race=race_record.name if race_record is not None else race,
        background=background_record.name if background_record is not None else background,
        class_id=table.id if table is not None else class_id,
        level=MIN_CHARACTER_LEVEL,
        abilities=AbilityScores.model_validate(dict(abilities or {})),
        bonuses=Bonuses(abilities=dict(race_record.ability_bonuses) if race_record else {}),
        proficiencies=Proficiencies(
            saves=list(table.saves) if table is not None else [],
            skills=skill_list,
            armor=list(table.armor_proficiencies) if table is not None else [],
            weapons=list(table.weapon_proficiencies) if table is not None else [],
        ),
    )

    hit_die = table.hit_die if table is not None else DEFAULT_HIT_DIE
    hp = max(1, hit_die + ability_modifier(snapshot, Ability.CON))
    snapshot.resources = Resources(hp_max=hp, hp_current=hp, hit_dice_remaining=1)

    if table is not None:
        advancement = table.advancement(MIN_CHARACTER_LEVEL)
        snapshot.features.extend(advancement.grants)
        apply_level_effects(snapshot, advancement.effects)
    else:
        logger.warning("Creating character without class data", class_id=class_id)

    snapshot = snapshot.normalized()
    if origin_feat is not None:
        snapshot = take_feat(snapshot, origin_feat, source="origin", lookups=lookups)

    logger.info(
        "Character created",
        character_id=snapshot.id,
        class_id=snapshot.class_id,
        hp_max=snapshot.resources.hp_max,
    )
    return snapshot


__all__ = ["create_character"]
