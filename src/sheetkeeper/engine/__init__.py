"""Derived-attribute and progression engine.

Exports:
    Attributes: ability_score, ability_modifier, save_bonus, skill_bonus,
        passive_score, AttributeSummary.
    Combat: CombatCalculator, set_override, clear_override.
    Resources: HP, rage, moxie, hit dice, spell slots, second wind, action
        surge and rest operations.
    Progression: ProgressionEngine, compute_hp_gain.
    Feats: apply_feat, take_feat, format_feat_summary.
    Inventory: add_item, remove_item, set_quantity, set_charges,
        toggle_equipped.
    Creation: create_character.
    Dice: DiceRoller, DiceExpression.
"""

from __future__ import annotations

from sheetkeeper.engine.attributes import (
    AttributeSummary,
    ability_modifier,
    ability_score,
    passive_score,
    save_bonus,
    skill_bonus,
)
from sheetkeeper.engine.combat import CombatCalculator, clear_override, set_override
from sheetkeeper.engine.creation import create_character
from sheetkeeper.engine.dice import DiceExpression, DiceRoller
from sheetkeeper.engine.feats import apply_feat, format_feat_summary, take_feat
from sheetkeeper.engine.inventory import (
    add_item,
    remove_item,
    set_charges,
    set_quantity,
    toggle_equipped,
)
from sheetkeeper.engine.progression import ProgressionEngine, compute_hp_gain
from sheetkeeper.engine.resources import (
    apply_damage,
    apply_healing,
    current_moxie,
    long_rest,
    max_rages,
    rages_remaining,
    recharge_action_surge,
    recharge_second_wind,
    restore_moxie,
    set_temp_hp,
    short_rest,
    spend_hit_dice,
    spend_moxie,
    take_rest,
    toggle_rage,
    toggle_spell_slot,
    use_action_surge,
    use_second_wind,
)


__all__ = [
    # Attributes
    "ability_score",
    "ability_modifier",
    "save_bonus",
    "skill_bonus",
    "passive_score",
    "AttributeSummary",
    # Combat
    "CombatCalculator",
    "set_override",
    "clear_override",
    # Resources
    "apply_damage",
    "apply_healing",
    "set_temp_hp",
    "max_rages",
    "rages_remaining",
    "toggle_rage",
    "current_moxie",
    "spend_moxie",
    "restore_moxie",
    "spend_hit_dice",
    "toggle_spell_slot",
    "use_second_wind",
    "use_action_surge",
    "recharge_second_wind",
    "recharge_action_surge",
    "short_rest",
    "long_rest",
    "take_rest",
    # Progression
    "ProgressionEngine",
    "compute_hp_gain",
    # Feats
    "apply_feat",
    "take_feat",
    "format_feat_summary",
    # Inventory
    "add_item",
    "remove_item",
    "set_quantity",
    "set_charges",
    "toggle_equipped",
    # Creation
    "create_character",
    # Dice
    "DiceRoller",
    "DiceExpression",
]
