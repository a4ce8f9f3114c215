"""Feat effect applicator.

Feats change base ability scores, proficiency sets and hit points. Flags
such as ``heavy_weapon_damage`` stay on the feat table and are read by the
combat engine when it sees the feat on a character.
"""

from __future__ import annotations

from sheetkeeper.core.logging import get_logger
from sheetkeeper.lookups.feats import FeatEffect
from sheetkeeper.lookups.registry import Lookups, default_lookups
from sheetkeeper.models.character import CharacterSnapshot, FeatRecord
from sheetkeeper.models.choices import FeatChoice, FeatOptions


logger = get_logger(__name__)

SUMMARY_SEPARATOR = " · "
FLAVOR_SUMMARY = "Feature"


def apply_feat(
    snapshot: CharacterSnapshot,
    feat_name: str,
    options: FeatOptions | None = None,
    lookups: Lookups | None = None,
) -> CharacterSnapshot:
    """Apply a feat's mechanical effects.

    Flavor-only feats (no table entry) return the snapshot unchanged.

    Args:
        snapshot: Character taking the feat.
        feat_name: Feat table key, case-insensitive.
        options: Ability and skill picks for feats that offer a choice.
        lookups: Lookups holding the feat table.

    Returns:
        The updated snapshot. The feat record itself is not appended; see
        ``take_feat``.
    """
    effect = (lookups or default_lookups()).feats.by_name(feat_name)
    if effect is None:
        logger.debug("Feat has no mechanical effects", feat=feat_name)
        return snapshot
    options = options or FeatOptions()

    updated = snapshot.clone()

    for ability, amount in effect.fixed_abilities.items():
        updated.abilities.set(ability, updated.abilities.get(ability) + amount)

    if effect.ability_choices:
        for ability in options.chosen_abilities:
            updated.abilities.set(ability, updated.abilities.get(ability) + 1)

    if effect.armor_proficiencies:
        updated.proficiencies.armor.extend(effect.armor_proficiencies)

    if effect.skill_choice_count:
        updated.proficiencies.skills.extend(options.skills[: effect.skill_choice_count])

    if effect.hp_bonus_per_level:
        bonus = effect.hp_bonus_per_level * updated.level
        updated.resources.hp_max += bonus
        updated.resources.hp_current += bonus

    logger.info("Feat applied", character_id=snapshot.id, feat=effect.name)
    return updated.normalized()


def take_feat(
    snapshot: CharacterSnapshot,
    choice: FeatChoice,
    *,
    source: str = "level_up",
    lookups: Lookups | None = None,
) -> CharacterSnapshot:
    """Apply a feat and record it at the character's current level."""
    updated = apply_feat(snapshot, choice.name, choice.options, lookups).clone()
    updated.feats.append(
        FeatRecord(name=choice.name, source=source, taken_at_level=updated.level)
    )
    return updated.normalized()


def hp_bonus_per_level(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> int:
    """Summed per-level HP bonus of every feat the character holds."""
    feats = (lookups or default_lookups()).feats
    total = 0
    for record in snapshot.feats:
        effect = feats.by_name(record.name)
        if effect is not None:
            total += effect.hp_bonus_per_level
    return total


def format_feat_summary(effect: FeatEffect | None) -> str:
    """One-line description of a feat's effects.

    Example:
        >>> from sheetkeeper.lookups.feats import FEAT_EFFECTS
        >>> format_feat_summary(FEAT_EFFECTS["Heavily Armored"])
        '+1 to CON or STR · Armor proficiency'
    """
    if effect is None:
        return FLAVOR_SUMMARY
    parts: list[str] = []
    if effect.fixed_abilities:
        parts.append(
            ", ".join(f"+{amount} {ability.abbreviation}" for ability, amount in effect.fixed_abilities.items())
        )
    if effect.ability_choices:
        parts.append("+1 to " + " or ".join(a.abbreviation for a in effect.ability_choices))
    if effect.armor_proficiencies:
        parts.append("Armor proficiency")
    if effect.skill_choice_count:
        parts.append("Skill proficiencies")
    return SUMMARY_SEPARATOR.join(parts) if parts else FLAVOR_SUMMARY


__all__ = [
    "apply_feat",
    "take_feat",
    "hp_bonus_per_level",
    "format_feat_summary",
]
