"""Built-in weapon, armor and magic item reference tables.

Keys are normalized base names (lowercase, no magic bonus).
"""

from __future__ import annotations

from sheetkeeper.models.enums import ArmorCategory


# =============================================================================
# Weapons
# =============================================================================

# name: (damage die, damage type, category, properties)
WEAPONS: dict[str, tuple[str, str, str, tuple[str, ...]]] = {
    # Simple melee
    "club": ("1d4", "bludgeoning", "simple", ("light",)),
    "dagger": ("1d4", "piercing", "simple", ("finesse", "light", "thrown")),
    "greatclub": ("1d8", "bludgeoning", "simple", ("two-handed",)),
    "handaxe": ("1d6", "slashing", "simple", ("light", "thrown")),
    "javelin": ("1d6", "piercing", "simple", ("thrown",)),
    "light hammer": ("1d4", "bludgeoning", "simple", ("light", "thrown")),
    "mace": ("1d6", "bludgeoning", "simple", ()),
    "quarterstaff": ("1d6", "bludgeoning", "simple", ("versatile",)),
    "sickle": ("1d4", "slashing", "simple", ("light",)),
    "spear": ("1d6", "piercing", "simple", ("thrown", "versatile")),
    # Simple ranged
    "light crossbow": ("1d8", "piercing", "simple", ("ammunition", "loading", "two-handed")),
    "dart": ("1d4", "piercing", "simple", ("finesse", "thrown")),
    "shortbow": ("1d6", "piercing", "simple", ("ammunition", "two-handed")),
    "sling": ("1d4", "bludgeoning", "simple", ("ammunition",)),
    # Martial melee
    "battleaxe": ("1d8", "slashing", "martial", ("versatile",)),
    "flail": ("1d8", "bludgeoning", "martial", ()),
    "glaive": ("1d10", "slashing", "martial", ("heavy", "reach", "two-handed")),
    "greataxe": ("1d12", "slashing", "martial", ("heavy", "two-handed")),
    "greatsword": ("2d6", "slashing", "martial", ("heavy", "two-handed")),
    "halberd": ("1d10", "slashing", "martial", ("heavy", "reach", "two-handed")),
    "lance": ("1d10", "piercing", "martial", ("heavy", "reach", "two-handed")),
    "longsword": ("1d8", "slashing", "martial", ("versatile",)),
    "maul": ("2d6", "bludgeoning", "martial", ("heavy", "two-handed")),
    "morningstar": ("1d8", "piercing", "martial", ()),
    "pike": ("1d10", "piercing", "martial", ("heavy", "reach", "two-handed")),
    "rapier": ("1d8", "piercing", "martial", ("finesse",)),
    "scimitar": ("1d6", "slashing", "martial", ("finesse", "light")),
    "shortsword": ("1d6", "piercing", "martial", ("finesse", "light")),
    "trident": ("1d8", "piercing", "martial", ("thrown", "versatile")),
    "war pick": ("1d8", "piercing", "martial", ("versatile",)),
    "warhammer": ("1d8", "bludgeoning", "martial", ("versatile",)),
    "whip": ("1d4", "slashing", "martial", ("finesse", "reach")),
    # Martial ranged
    "blowgun": ("1", "piercing", "martial", ("ammunition", "loading")),
    "hand crossbow": ("1d6", "piercing", "martial", ("ammunition", "light", "loading")),
    "heavy crossbow": ("1d10", "piercing", "martial", ("ammunition", "heavy", "loading", "two-handed")),
    "longbow": ("1d8", "piercing", "martial", ("ammunition", "heavy", "two-handed")),
    "derringer": ("1d4", "piercing", "martial", ("ammunition", "light", "loading")),
}


# =============================================================================
# Armor
# =============================================================================

ARMOR: dict[str, tuple[int, ArmorCategory]] = {
    "padded": (11, ArmorCategory.LIGHT),
    "leather": (11, ArmorCategory.LIGHT),
    "studded leather": (12, ArmorCategory.LIGHT),
    "hide": (12, ArmorCategory.MEDIUM),
    "chain shirt": (13, ArmorCategory.MEDIUM),
    "scale mail": (14, ArmorCategory.MEDIUM),
    "breastplate": (14, ArmorCategory.MEDIUM),
    "half plate": (15, ArmorCategory.MEDIUM),
    "ring mail": (14, ArmorCategory.HEAVY),
    "chain mail": (16, ArmorCategory.HEAVY),
    "splint": (17, ArmorCategory.HEAVY),
    "plate": (18, ArmorCategory.HEAVY),
    "shield": (2, ArmorCategory.SHIELD),
}


# =============================================================================
# Magic Items
# =============================================================================

# Wondrous items whose bonus is not spelled out in their name.
# name: (ac bonus, weapon bonus, requires attunement, charges, base item)
MAGIC_ITEMS: dict[str, tuple[int, int, bool, int | None, str | None]] = {
    "ring of protection": (1, 0, True, None, None),
    "cloak of protection": (1, 0, True, None, None),
    "bracers of defense": (2, 0, True, None, None),
    "ioun stone of protection": (1, 0, True, None, None),
    "belt of giant strength": (0, 0, True, None, None),
    "gauntlets of ogre power": (0, 0, True, None, None),
    "wand of magic missiles": (0, 0, False, 7, None),
    "staff of striking": (0, 3, True, 10, "quarterstaff"),
    "bag of holding": (0, 0, False, None, None),
}


__all__ = [
    "WEAPONS",
    "ARMOR",
    "MAGIC_ITEMS",
]
