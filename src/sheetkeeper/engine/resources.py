"""Per-rest resources and rest recovery.

Each resource is an independent counter or flag on ``Resources``. Every
operation returns a new snapshot and never mutates its input. Requests that
cannot be honored (spending more than remains, non-numeric amounts, a rage
toggle on a class without rage) return the input snapshot unchanged; use the
``*_remaining`` queries to pre-check.
"""

from __future__ import annotations

from sheetkeeper.core.config import get_settings
from sheetkeeper.core.constants import DEFAULT_HIT_DIE
from sheetkeeper.core.logging import get_logger
from sheetkeeper.engine.attributes import ability_modifier
from sheetkeeper.engine.dice import DiceRoller, Roller
from sheetkeeper.lookups.registry import Lookups, default_lookups
from sheetkeeper.models.breakdowns import HitDiceResult
from sheetkeeper.models.character import CharacterSnapshot
from sheetkeeper.models.classes import (
    ClassTable,
    ResourceMax,
    has_remaining,
    is_unbounded,
    remaining,
)
from sheetkeeper.models.enums import Ability, RestType


logger = get_logger(__name__)

MIN_SPELL_LEVEL = 1
MAX_SPELL_LEVEL = 9


def parse_amount(value: object) -> int | None:
    """Read a non-negative whole number from free-text or numeric input.

    Example:
        >>> parse_amount(" 7 ")
        7
        >>> parse_amount("seven") is None
        True
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            return None
    return number if number >= 0 else None


def _class_table(snapshot: CharacterSnapshot, lookups: Lookups | None) -> ClassTable | None:
    return (lookups or default_lookups()).classes.by_class_id(snapshot.class_id)


# =============================================================================
# Hit Points
# =============================================================================


def apply_damage(snapshot: CharacterSnapshot, amount: object) -> CharacterSnapshot:
    """Temporary hit points absorb damage first; current HP floors at 0."""
    damage = parse_amount(amount)
    if not damage:
        return snapshot
    updated = snapshot.clone()
    res = updated.resources
    absorbed = min(res.hp_temp, damage)
    res.hp_temp -= absorbed
    res.hp_current = max(0, res.hp_current - (damage - absorbed))
    return updated.normalized()


def apply_healing(snapshot: CharacterSnapshot, amount: object) -> CharacterSnapshot:
    """Heal up to hp_max."""
    healing = parse_amount(amount)
    if not healing:
        return snapshot
    updated = snapshot.clone()
    res = updated.resources
    res.hp_current = min(res.hp_max, res.hp_current + healing)
    return updated.normalized()


def set_temp_hp(snapshot: CharacterSnapshot, amount: object) -> CharacterSnapshot:
    """Replace temporary hit points. They never stack."""
    temp = parse_amount(amount)
    if temp is None:
        return snapshot
    updated = snapshot.clone()
    updated.resources.hp_temp = temp
    return updated.normalized()


# =============================================================================
# Rage
# =============================================================================


def max_rages(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> ResourceMax:
    table = _class_table(snapshot, lookups)
    if table is None or not table.has_rage:
        return 0
    return table.max_rages(snapshot.level)


def rages_remaining(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> ResourceMax:
    return remaining(snapshot.resources.rages_used, max_rages(snapshot, lookups))


def toggle_rage(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> CharacterSnapshot:
    """Start or end a rage.

    Starting consumes one use unless the maximum is unbounded. Ending never
    refunds the use. With no uses left, starting is a no-op.
    """
    table = _class_table(snapshot, lookups)
    if table is None or not table.has_rage:
        logger.debug("Rage toggle ignored, class has no rage", class_id=snapshot.class_id)
        return snapshot

    res = snapshot.resources
    if res.is_raging:
        updated = snapshot.clone()
        updated.resources.is_raging = False
        return updated.normalized()

    maximum = table.max_rages(snapshot.level)
    if not has_remaining(res.rages_used, maximum):
        logger.debug("No rages remaining", character_id=snapshot.id, used=res.rages_used)
        return snapshot

    updated = snapshot.clone()
    updated.resources.is_raging = True
    if not is_unbounded(maximum):
        updated.resources.rages_used += 1
    return updated.normalized()


# =============================================================================
# Moxie
# =============================================================================


def max_moxie(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> int:
    table = _class_table(snapshot, lookups)
    return table.moxie_points(snapshot.level) if table is not None else 0


def current_moxie(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> int:
    """Current moxie; an unset pool is full."""
    maximum = max_moxie(snapshot, lookups)
    current = snapshot.resources.moxie_current
    if current is None:
        return maximum
    return min(current, maximum)


def spend_moxie(
    snapshot: CharacterSnapshot, amount: object = 1, lookups: Lookups | None = None
) -> CharacterSnapshot:
    points = parse_amount(amount)
    current = current_moxie(snapshot, lookups)
    if not points or points > current:
        return snapshot
    updated = snapshot.clone()
    updated.resources.moxie_current = current - points
    return updated.normalized()


def restore_moxie(snapshot: CharacterSnapshot) -> CharacterSnapshot:
    """Refill the moxie pool. Class features trigger this on a short rest."""
    if snapshot.resources.moxie_current is None:
        return snapshot
    updated = snapshot.clone()
    updated.resources.moxie_current = None
    return updated.normalized()


# =============================================================================
# Hit Dice
# =============================================================================


def hit_dice_remaining(snapshot: CharacterSnapshot) -> int:
    remaining_dice = snapshot.resources.hit_dice_remaining
    return snapshot.level if remaining_dice is None else remaining_dice


def spend_hit_dice(
    snapshot: CharacterSnapshot,
    count: object,
    roller: Roller | None = None,
    lookups: Lookups | None = None,
) -> tuple[CharacterSnapshot, HitDiceResult]:
    """Roll hit dice and heal by the total.

    Each die adds the Constitution modifier and is floored at 0. Healing
    stops at hp_max.

    Args:
        snapshot: Character to heal.
        count: Dice to spend, 1..remaining. Anything else is a no-op.
        roller: Dice roller. When omitted, a DiceRoller seeded from
            ``rules.dice_seed`` is built.
        lookups: Lookups for the class hit die.

    Returns:
        The updated snapshot and the roll result.
    """
    dice = parse_amount(count)
    if not dice or dice > hit_dice_remaining(snapshot):
        return snapshot, HitDiceResult()

    table = _class_table(snapshot, lookups)
    hit_die = table.hit_die if table is not None else DEFAULT_HIT_DIE
    con_mod = ability_modifier(snapshot, Ability.CON)
    roller = roller or DiceRoller(seed=get_settings().rules.dice_seed)

    rolls = tuple(max(0, roller.roll(f"1d{hit_die}").total + con_mod) for _ in range(dice))

    updated = snapshot.clone()
    res = updated.resources
    before = res.hp_current
    res.hp_current = min(res.hp_max, res.hp_current + sum(rolls))
    res.hit_dice_remaining = hit_dice_remaining(snapshot) - dice
    healed = res.hp_current - before

    logger.info(
        "Hit dice spent",
        character_id=snapshot.id,
        dice=dice,
        rolls=rolls,
        healed=healed,
    )
    return updated.normalized(), HitDiceResult(rolls=rolls, healed=healed, dice_spent=dice)


# =============================================================================
# Spell Slots
# =============================================================================


def max_spell_slots(
    snapshot: CharacterSnapshot, spell_level: int, lookups: Lookups | None = None
) -> int:
    table = _class_table(snapshot, lookups)
    return table.spell_slots_at(snapshot.level, spell_level) if table is not None else 0


def spell_slots_remaining(
    snapshot: CharacterSnapshot, spell_level: int, lookups: Lookups | None = None
) -> int:
    used = snapshot.resources.spell_slots_used.get(spell_level, 0)
    return max(0, max_spell_slots(snapshot, spell_level, lookups) - used)


def toggle_spell_slot(
    snapshot: CharacterSnapshot, spell_level: int, lookups: Lookups | None = None
) -> CharacterSnapshot:
    """Mark the next slot at a level as used, wrapping to 0 once all are used."""
    if not MIN_SPELL_LEVEL <= spell_level <= MAX_SPELL_LEVEL:
        return snapshot
    maximum = max_spell_slots(snapshot, spell_level, lookups)
    used = snapshot.resources.spell_slots_used.get(spell_level, 0)
    next_used = 0 if used >= maximum else used + 1
    if next_used == used:
        return snapshot
    updated = snapshot.clone()
    updated.resources.spell_slots_used[spell_level] = next_used
    return updated.normalized()


# =============================================================================
# Second Wind & Action Surge
# =============================================================================


def max_second_wind(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> int:
    table = _class_table(snapshot, lookups)
    return table.second_wind_uses(snapshot.level) if table is not None else 0


def max_action_surge(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> int:
    table = _class_table(snapshot, lookups)
    return table.action_surge_uses(snapshot.level) if table is not None else 0


def _cycle_counter(snapshot: CharacterSnapshot, field: str, maximum: int) -> CharacterSnapshot:
    """Advance a use counter, wrapping to 0 once it reaches the maximum."""
    used = getattr(snapshot.resources, field)
    next_used = 0 if used >= maximum else used + 1
    if next_used == used:
        return snapshot
    updated = snapshot.clone()
    setattr(updated.resources, field, next_used)
    return updated.normalized()


def use_second_wind(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> CharacterSnapshot:
    return _cycle_counter(snapshot, "second_wind_used", max_second_wind(snapshot, lookups))


def use_action_surge(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> CharacterSnapshot:
    return _cycle_counter(snapshot, "action_surge_used", max_action_surge(snapshot, lookups))


def recharge_second_wind(snapshot: CharacterSnapshot) -> CharacterSnapshot:
    """Regain one Second Wind use."""
    if snapshot.resources.second_wind_used == 0:
        return snapshot
    updated = snapshot.clone()
    updated.resources.second_wind_used -= 1
    return updated.normalized()


def recharge_action_surge(snapshot: CharacterSnapshot) -> CharacterSnapshot:
    """Regain one Action Surge use."""
    if snapshot.resources.action_surge_used == 0:
        return snapshot
    updated = snapshot.clone()
    updated.resources.action_surge_used -= 1
    return updated.normalized()


# =============================================================================
# Rests
# =============================================================================


def short_rest(snapshot: CharacterSnapshot, lookups: Lookups | None = None) -> CharacterSnapshot:
    """Refund one spent rage, or every spent rage when the maximum is unbounded.

    Other short-rest recoveries depend on class features and go through
    their explicit operations (``restore_moxie``, ``recharge_second_wind``,
    ``recharge_action_surge``, ``spend_hit_dice``).
    """
    updated = snapshot.clone()
    maximum = max_rages(snapshot, lookups)
    if is_unbounded(maximum):
        updated.resources.rages_used = 0
    elif updated.resources.rages_used > 0:
        updated.resources.rages_used -= 1
    logger.info("Short rest", character_id=snapshot.id)
    return updated.normalized()


def long_rest(snapshot: CharacterSnapshot) -> CharacterSnapshot:
    """Restore every per-rest resource and full hit points."""
    updated = snapshot.clone()
    res = updated.resources
    res.rages_used = 0
    res.is_raging = False
    res.hit_dice_remaining = updated.level
    res.spell_slots_used = {}
    res.moxie_current = None
    res.second_wind_used = 0
    res.action_surge_used = 0
    res.hp_temp = 0
    res.hp_current = res.hp_max
    logger.info("Long rest", character_id=snapshot.id)
    return updated.normalized()


def take_rest(
    snapshot: CharacterSnapshot, rest_type: RestType | str, lookups: Lookups | None = None
) -> CharacterSnapshot:
    """Apply a short or long rest; unknown rest types change nothing."""
    try:
        kind = RestType(rest_type)
    except ValueError:
        logger.debug("Unknown rest type", rest_type=rest_type)
        return snapshot
    if kind is RestType.LONG:
        return long_rest(snapshot)
    return short_rest(snapshot, lookups)


__all__ = [
    "parse_amount",
    "apply_damage",
    "apply_healing",
    "set_temp_hp",
    "max_rages",
    "rages_remaining",
    "toggle_rage",
    "max_moxie",
    "current_moxie",
    "spend_moxie",
    "restore_moxie",
    "hit_dice_remaining",
    "spend_hit_dice",
    "max_spell_slots",
    "spell_slots_remaining",
    "toggle_spell_slot",
    "max_second_wind",
    "max_action_surge",
    "use_second_wind",
    "use_action_surge",
    "recharge_second_wind",
    "recharge_action_surge",
    "short_rest",
    "long_rest",
    "take_rest",
]
