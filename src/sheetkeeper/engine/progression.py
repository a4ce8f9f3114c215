"""Progression engine: advancement lookup and level-up application.

Levels run 1 through 20. ``apply_level_up`` is a pure transform; the only
hard failure in the whole engine lives here, raised when a character has no
class table to advance against.
"""

from __future__ import annotations

from collections.abc import Iterable

from sheetkeeper.core.config import RulesSettings, get_settings
from sheetkeeper.core.constants import MAX_CHARACTER_LEVEL, MIN_CHARACTER_LEVEL
from sheetkeeper.core.exceptions import MissingClassDataError
from sheetkeeper.core.logging import get_logger
from sheetkeeper.engine.attributes import ability_modifier
from sheetkeeper.engine.feats import hp_bonus_per_level, take_feat
from sheetkeeper.lookups.registry import Lookups, default_lookups
from sheetkeeper.models.character import CharacterSnapshot
from sheetkeeper.models.choices import LevelUpChoices
from sheetkeeper.models.classes import ClassTable, LevelAdvancement, LevelEffect
from sheetkeeper.models.enums import Ability, EffectType


logger = get_logger(__name__)


def compute_hp_gain(hit_die: int, con_modifier: int) -> int:
    """Average-roll hit point gain for one level, at least 1.

    Example:
        >>> compute_hp_gain(12, 2)
        9
        >>> compute_hp_gain(6, -4)
        1
    """
    return max(1, hit_die // 2 + 1 + con_modifier)


def apply_level_effects(snapshot: CharacterSnapshot, effects: Iterable[LevelEffect]) -> None:
    """Apply level effects to a snapshot in place.

    Ability bonuses raise base scores, stopping at the effect's cap when it
    has one. AC formula effects set the character's formula flag.
    """
    for effect in effects:
        if effect.type is EffectType.ABILITY_BONUS:
            for ability, amount in effect.abilities.items():
                raised = snapshot.abilities.get(ability) + amount
                if effect.cap is not None:
                    raised = min(raised, effect.cap)
                snapshot.abilities.set(ability, raised)
        elif effect.type is EffectType.AC_FORMULA and effect.formula is not None:
            snapshot.bonuses.ac_formula = effect.formula


class ProgressionEngine:
    """Compute and apply level advancement.

    Attributes:
        lookups: Lookups holding the class tables and feat effects.
        rules: Rules variants (level cap, per-level HP feat re-grants).

    Example:
        >>> engine = ProgressionEngine()
        >>> engine.compute_advancement("barbarian", 3).grants_subclass
        True
    """

    def __init__(
        self,
        lookups: Lookups | None = None,
        rules: RulesSettings | None = None,
    ) -> None:
        self.lookups = lookups or default_lookups()
        self.rules = rules or get_settings().rules

    def class_table(self, subject: CharacterSnapshot | str | None) -> ClassTable:
        """Resolve the class table for a snapshot or class id.

        Raises:
            MissingClassDataError: If no class is assigned or the class id is
                unknown.
        """
        if isinstance(subject, CharacterSnapshot):
            class_id, character_id = subject.class_id, subject.id
        else:
            class_id, character_id = subject, None
        table = self.lookups.classes.by_class_id(class_id)
        if table is None:
            logger.error("No class data for level-up", class_id=class_id, character_id=character_id)
            raise MissingClassDataError(
                "Cannot advance a character without class data",
                class_id=class_id,
                character_id=character_id,
            )
        return table

    def compute_advancement(
        self,
        subject: CharacterSnapshot | str,
        target_level: int | None = None,
    ) -> LevelAdvancement:
        """What reaching a level grants and asks for.

        Args:
            subject: A snapshot or a class id.
            target_level: Level being reached. Defaults to the snapshot's next
                level.

        Returns:
            The advancement. Subclass features are included when the
            snapshot already has a subclass. Levels outside 1-20 yield an
            empty advancement.

        Raises:
            MissingClassDataError: If the class table cannot be found.
        """
        table = self.class_table(subject)
        snapshot = subject if isinstance(subject, CharacterSnapshot) else None
        if target_level is None:
            target_level = (snapshot.level if snapshot is not None else 0) + 1
        if not MIN_CHARACTER_LEVEL <= target_level <= MAX_CHARACTER_LEVEL:
            return LevelAdvancement(target_level=target_level)

        advancement = table.advancement(target_level)
        subclass = table.subclass(snapshot.subclass_id) if snapshot is not None else None
        if subclass is None or not subclass.features_at(target_level):
            return advancement
        return advancement.model_copy(
            update={"grants": (*advancement.grants, *subclass.features_at(target_level))}
        )

    def hp_gain(self, snapshot: CharacterSnapshot) -> int:
        table = self.class_table(snapshot)
        return compute_hp_gain(table.hit_die, ability_modifier(snapshot, Ability.CON))

    def apply_level_up(
        self,
        snapshot: CharacterSnapshot,
        choices: LevelUpChoices | None = None,
    ) -> CharacterSnapshot:
        """Advance a character one level.

        The new snapshot has the level raised by one, hit points and hit
        dice increased, proficiency bonus recomputed, new features appended
        and the player's choices applied: an ability score improvement or a
        feat, an epic boon feat, and a subclass at the subclass level. Level
        effects run last.

        Args:
            snapshot: Character to advance. Not modified.
            choices: Player decisions for this level.

        Returns:
            The advanced snapshot, or the input unchanged at the level cap.

        Raises:
            MissingClassDataError: If the character has no class table.
        """
        table = self.class_table(snapshot)
        choices = choices or LevelUpChoices()

        cap = min(self.rules.max_level, MAX_CHARACTER_LEVEL)
        if snapshot.level >= cap:
            logger.warning("Level cap reached", character_id=snapshot.id, level=snapshot.level)
            return snapshot

        next_level = snapshot.level + 1
        advancement = self.compute_advancement(snapshot, next_level)
        gain = compute_hp_gain(table.hit_die, ability_modifier(snapshot, Ability.CON))
        if self.rules.tough_regrants_per_level:
            gain += hp_bonus_per_level(snapshot, self.lookups)

        updated = snapshot.clone()
        updated.level = next_level
        res = updated.resources
        res.hp_max += gain
        res.hp_current += gain
        res.hit_dice_remaining = (res.hit_dice_remaining or 0) + 1
        updated.features.extend(advancement.grants)

        if choices.ability_increase:
            per_pick = 2 if len(choices.ability_increase) == 1 else 1
            for ability in choices.ability_increase:
                updated.abilities.set(ability, updated.abilities.get(ability) + per_pick)

        if choices.subclass and advancement.grants_subclass:
            subclass = table.subclass(choices.subclass)
            if subclass is None:
                logger.warning("Unknown subclass", class_id=table.id, subclass=choices.subclass)
                updated.subclass_id = choices.subclass
            else:
                updated.subclass_id = subclass.id
                updated.features.extend(subclass.features_at(next_level))

        updated = updated.normalized()
        if choices.feat is not None:
            updated = take_feat(updated, choices.feat, source="level_up", lookups=self.lookups)
        if choices.epic_boon is not None:
            updated = take_feat(updated, choices.epic_boon, source="epic_boon", lookups=self.lookups)

        updated = updated.clone()
        apply_level_effects(updated, advancement.effects)

        logger.info(
            "Level up applied",
            character_id=snapshot.id,
            class_id=table.id,
            level=next_level,
            hp_gain=gain,
        )
        return updated.normalized()


__all__ = [
    "compute_hp_gain",
    "apply_level_effects",
    "ProgressionEngine",
]
