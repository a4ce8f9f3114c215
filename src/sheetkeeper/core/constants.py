"""Rules constants shared by the sheetkeeper engine."""

from __future__ import annotations

# =============================================================================
# Levels
# =============================================================================

MIN_CHARACTER_LEVEL = 1
"""First character level."""

MAX_CHARACTER_LEVEL = 20
"""Terminal character level; no advancement past it."""

PROFICIENCY_BONUS_STEPS = ((17, 6), (13, 5), (9, 4), (5, 3), (1, 2))
"""(minimum level, bonus) pairs, highest first."""

DEFAULT_PROFICIENCY_BONUS = 2
"""Proficiency bonus used when no level information is available."""

# =============================================================================
# Ability Scores
# =============================================================================

DEFAULT_ABILITY_SCORE = 10
"""Score assumed for an ability that was never set."""

PC_ABILITY_SCORE_CAP = 20
"""Usual ceiling for player ability scores. Not enforced by level-up ASIs."""

# =============================================================================
# Armor Class
# =============================================================================

UNARMORED_BASE_AC = 10
"""Base AC with no armor and no special formula."""

IRON_CHIN_BASE_AC = 12
"""Base AC of the 12 + Con formula."""

MEDIUM_ARMOR_DEX_CAP = 2
"""Maximum Dexterity contribution while wearing medium armor."""

SHIELD_AC_BONUS = 2
"""AC added by an equipped shield."""

MANUAL_OVERRIDE_KEY = "ac"
"""Override key read by the armor class formula."""

# =============================================================================
# Attacks
# =============================================================================

DEFAULT_UNARMED_DIE = "1d4"
"""Unarmed damage die when the class table has nothing better."""

DEFAULT_WEAPON_DIE = "1d6"
"""Damage die for weapons missing from the weapon lookup."""

# =============================================================================
# Hit Points & Inventory
# =============================================================================

DEFAULT_HIT_DIE = 8
"""Hit die face count used when a class table omits one."""

MAX_ATTUNEMENT = 3
"""Maximum number of attuned magic items."""


__all__ = [
    "MIN_CHARACTER_LEVEL",
    "MAX_CHARACTER_LEVEL",
    "PROFICIENCY_BONUS_STEPS",
    "DEFAULT_PROFICIENCY_BONUS",
    "DEFAULT_ABILITY_SCORE",
    "PC_ABILITY_SCORE_CAP",
    "UNARMORED_BASE_AC",
    "IRON_CHIN_BASE_AC",
    "MEDIUM_ARMOR_DEX_CAP",
    "SHIELD_AC_BONUS",
    "MANUAL_OVERRIDE_KEY",
    "DEFAULT_UNARMED_DIE",
    "DEFAULT_WEAPON_DIE",
    "DEFAULT_HIT_DIE",
    "MAX_ATTUNEMENT",
]
