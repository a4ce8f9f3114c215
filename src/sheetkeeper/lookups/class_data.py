"""Built-in class tables.

Barbarian, Pugilist, Fighter and Wizard. Each table is assembled from
per-level columns so the numbers read like the printed class tables.
"""

from __future__ import annotations

from sheetkeeper.models.classes import (
    UNBOUNDED,
    ClassTable,
    LevelEffect,
    ResourceMax,
    SubclassTable,
)
from sheetkeeper.models.enums import Ability, ArmorFormula, EffectType, UnarmoredDefense


LEVELS = range(1, 21)

STANDARD_ASI_LEVELS = frozenset({4, 8, 12, 16, 19})
FIGHTER_ASI_LEVELS = frozenset({4, 6, 8, 12, 14, 16, 19})

# Full casters
FULL_CASTER_SLOTS: dict[int, tuple[int, ...]] = {
    1: (2,),
    2: (3,),
    3: (4, 2),
    4: (4, 3),
    5: (4, 3, 2),
    6: (4, 3, 3),
    7: (4, 3, 3, 1),
    8: (4, 3, 3, 2),
    9: (4, 3, 3, 3, 1),
    10: (4, 3, 3, 3, 2),
    11: (4, 3, 3, 3, 2, 1),
    12: (4, 3, 3, 3, 2, 1),
    13: (4, 3, 3, 3, 2, 1, 1),
    14: (4, 3, 3, 3, 2, 1, 1),
    15: (4, 3, 3, 3, 2, 1, 1, 1),
    16: (4, 3, 3, 3, 2, 1, 1, 1),
    17: (4, 3, 3, 3, 2, 1, 1, 1, 1),
    18: (4, 3, 3, 3, 3, 1, 1, 1, 1),
    19: (4, 3, 3, 3, 3, 2, 1, 1, 1),
    20: (4, 3, 3, 3, 3, 2, 2, 1, 1),
}


def _subclass(subclass_id: str, name: str, features: dict[int, tuple[str, ...]]) -> SubclassTable:
    return SubclassTable(id=subclass_id, name=name, features=features)


# =============================================================================
# Barbarian
# =============================================================================

_BARBARIAN_FEATURES: dict[int, tuple[str, ...]] = {
    1: ("Rage", "Unarmored Defense", "Weapon Mastery"),
    2: ("Danger Sense", "Reckless Attack"),
    3: ("Barbarian Subclass", "Primal Knowledge"),
    4: ("Ability Score Improvement",),
    5: ("Extra Attack", "Fast Movement"),
    6: ("Subclass Feature",),
    7: ("Feral Instinct", "Instinctive Pounce"),
    8: ("Ability Score Improvement",),
    9: ("Brutal Strike",),
    10: ("Subclass Feature",),
    11: ("Relentless Rage",),
    12: ("Ability Score Improvement",),
    13: ("Improved Brutal Strike",),
    14: ("Subclass Feature",),
    15: ("Persistent Rage",),
    16: ("Ability Score Improvement",),
    17: ("Improved Brutal Strike",),
    18: ("Indomitable Might",),
    19: ("Epic Boon",),
    20: ("Primal Champion",),
}

_RAGES: tuple[ResourceMax, ...] = (
    2, 2, 3, 3, 3, 4, 4, 4, 4, 4,
    4, 5, 5, 5, 5, 5, 6, 6, 6, UNBOUNDED,
)
_RAGE_DAMAGE = (2,) * 8 + (3,) * 8 + (4,) * 4
_BARBARIAN_MASTERY = (2,) * 3 + (3,) * 6 + (4,) * 11

BARBARIAN = ClassTable.from_rows(
    {
        level: {
            "features": _BARBARIAN_FEATURES[level],
            "rages": _RAGES[level - 1],
            "rage_damage": _RAGE_DAMAGE[level - 1],
            "weapon_mastery": _BARBARIAN_MASTERY[level - 1],
            "effects": (
                (
                    LevelEffect(
                        type=EffectType.ABILITY_BONUS,
                        abilities={Ability.STR: 4, Ability.CON: 4},
                        cap=25,
                    ),
                )
                if level == 20
                else ()
            ),
        }
        for level in LEVELS
    },
    id="barbarian",
    name="Barbarian",
    hit_die=12,
    saves=(Ability.STR, Ability.CON),
    armor_proficiencies=("light", "medium", "shield"),
    weapon_proficiencies=("simple", "martial"),
    skill_choices=("animal_handling", "athletics", "intimidation", "nature", "perception", "survival"),
    asi_levels=STANDARD_ASI_LEVELS - {19},
    epic_boon_levels=frozenset({19}),
    subclass_level=3,
    unarmored_defense=UnarmoredDefense.CONSTITUTION,
    has_rage=True,
    subclasses={
        "berserker": _subclass(
            "berserker",
            "Path of the Berserker",
            {3: ("Frenzy",), 6: ("Mindless Rage",), 10: ("Retaliation",), 14: ("Intimidating Presence",)},
        ),
        "path_of_the_giant": _subclass(
            "path_of_the_giant",
            "Path of the Giant",
            {
                3: ("Giant's Power", "Giant's Havoc"),
                6: ("Elemental Cleaver",),
                10: ("Mighty Impel",),
                14: ("Demiurgic Colossus",),
            },
        ),
        "wild_heart": _subclass(
            "wild_heart",
            "Path of the Wild Heart",
            {
                3: ("Animal Speaker", "Rage of the Wilds"),
                6: ("Aspect of the Wilds",),
                10: ("Nature Speaker",),
                14: ("Power of the Wilds",),
            },
        ),
        "world_tree": _subclass(
            "world_tree",
            "Path of the World Tree",
            {
                3: ("Vitality of the Tree",),
                6: ("Branches of the Tree",),
                10: ("Battering Roots",),
                14: ("Travel Along the Tree",),
            },
        ),
        "zealot": _subclass(
            "zealot",
            "Path of the Zealot",
            {
                3: ("Divine Fury", "Warrior of the Gods"),
                6: ("Fanatical Focus",),
                10: ("Zealous Presence",),
                14: ("Rage of the Gods",),
            },
        ),
    },
)


# =============================================================================
# Pugilist
# =============================================================================

_PUGILIST_FEATURES: dict[int, tuple[str, ...]] = {
    1: ("Fisticuffs", "Iron Chin"),
    2: ("Moxie", "Street Smart"),
    3: ("Bloodied But Unbowed", "Fight Club"),
    4: ("Ability Score Improvement", "Dig Deep"),
    5: ("Extra Attack", "Haymaker"),
    6: ("Fight Club Feature", "Moxie-Fueled Fists"),
    7: ("Fancy Footwork", "Shake It Off"),
    8: ("Ability Score Improvement",),
    9: ("Down But Not Out",),
    10: ("School of Hard Knocks",),
    11: ("Fight Club Feature",),
    12: ("Ability Score Improvement",),
    13: ("Rabble Rouser",),
    14: ("Unbreakable",),
    15: ("Herculean",),
    16: ("Ability Score Improvement",),
    17: ("Fight Club Feature",),
    18: ("Fighting Spirit",),
    19: ("Ability Score Improvement",),
    20: ("Peak Physical Condition",),
}

_FISTICUFFS = ("1d6",) * 4 + ("1d8",) * 6 + ("1d10",) * 6 + ("1d12",) * 4
_MOXIE = (0, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9, 10, 10, 12)

_PUGILIST_EFFECTS: dict[int, tuple[LevelEffect, ...]] = {
    1: (LevelEffect(type=EffectType.AC_FORMULA, formula=ArmorFormula.IRON_CHIN),),
    20: (
        LevelEffect(
            type=EffectType.ABILITY_BONUS,
            abilities={Ability.STR: 2, Ability.CON: 2},
            cap=23,
        ),
    ),
}

PUGILIST = ClassTable.from_rows(
    {
        level: {
            "features": _PUGILIST_FEATURES[level],
            "fisticuffs_die": _FISTICUFFS[level - 1],
            "moxie_points": _MOXIE[level - 1],
            "effects": _PUGILIST_EFFECTS.get(level, ()),
        }
        for level in LEVELS
    },
    id="pugilist",
    name="Pugilist",
    hit_die=8,
    saves=(Ability.STR, Ability.CON),
    armor_proficiencies=("light",),
    weapon_proficiencies=("simple", "improvised", "whip", "derringer"),
    skill_choices=("acrobatics", "athletics", "deception", "intimidation", "perception", "sleight_of_hand"),
    asi_levels=STANDARD_ASI_LEVELS,
    subclass_level=3,
    default_unarmed_die="1d6",
    subclasses={
        "sweet_science": _subclass(
            "sweet_science",
            "The Sweet Science",
            {
                3: ("Cross Counter",),
                6: ("One, Two, Three, Floor",),
                11: ("Float Like a Butterfly, Sting Like a Bee",),
                17: ("Knock Out",),
            },
        ),
        "squared_circle": _subclass(
            "squared_circle",
            "The Squared Circle",
            {
                3: ("Compression Lock", "Quick Pin", "To the Mat"),
                6: ("Meat Shield",),
                11: ("Heavyweight",),
                17: ("Clean Finish",),
            },
        ),
        "street_saint": _subclass(
            "street_saint",
            "Street Saint",
            {
                3: ("Channel Divinity", "Lay On Hands"),
                6: ("Ravaged But Resolute",),
                11: ("Aura of Resilience",),
                17: ("Hallowed Hands",),
            },
        ),
        "piss_and_vinegar": _subclass(
            "piss_and_vinegar",
            "Piss & Vinegar",
            {
                3: ("Bonus Proficiency", "Salty Salute"),
                6: ("Dirty Tricks",),
                11: ("Mean Old Cuss",),
                17: ("The Uncouth Art",),
            },
        ),
    },
)


# =============================================================================
# Fighter
# =============================================================================

_FIGHTER_FEATURES: dict[int, tuple[str, ...]] = {
    1: ("Fighting Style", "Second Wind"),
    2: ("Action Surge",),
    3: ("Martial Archetype",),
    4: ("Ability Score Improvement",),
    5: ("Extra Attack",),
    6: ("Ability Score Improvement",),
    7: ("Archetype Feature",),
    8: ("Ability Score Improvement",),
    9: ("Indomitable",),
    10: ("Fighting Style Improvement",),
    11: ("Extra Attack (2)",),
    12: ("Ability Score Improvement",),
    13: ("Indomitable Improvement",),
    14: ("Ability Score Improvement",),
    15: ("Archetype Feature",),
    16: ("Ability Score Improvement",),
    17: ("Action Surge Improvement",),
    18: ("Indomitable (3 uses)",),
    19: ("Ability Score Improvement",),
    20: ("Extra Attack (3)",),
}

_SECOND_WIND = (2,) * 3 + (3,) * 6 + (4,) * 11
_ACTION_SURGE = (0,) + (1,) * 15 + (2,) * 4
_FIGHTER_MASTERY = (3,) * 3 + (4,) * 6 + (5,) * 6 + (6,) * 5

FIGHTER = ClassTable.from_rows(
    {
        level: {
            "features": _FIGHTER_FEATURES[level],
            "second_wind_uses": _SECOND_WIND[level - 1],
            "action_surge_uses": _ACTION_SURGE[level - 1],
            "weapon_mastery": _FIGHTER_MASTERY[level - 1],
        }
        for level in LEVELS
    },
    id="fighter",
    name="Fighter",
    hit_die=10,
    saves=(Ability.STR, Ability.CON),
    armor_proficiencies=("light", "medium", "heavy", "shield"),
    weapon_proficiencies=("simple", "martial"),
    skill_choices=(
        "acrobatics", "animal_handling", "athletics", "history",
        "insight", "intimidation", "perception", "survival",
    ),
    asi_levels=FIGHTER_ASI_LEVELS,
    subclass_level=3,
    subclasses={
        "champion": _subclass(
            "champion",
            "Champion",
            {
                3: ("Improved Critical", "Remarkable Athlete"),
                7: ("Additional Fighting Style",),
                10: ("Heroic Warrior",),
                15: ("Superior Critical",),
                18: ("Survivor",),
            },
        ),
        "battle_master": _subclass(
            "battle_master",
            "Battle Master",
            {
                3: ("Combat Superiority", "Student of War"),
                7: ("Know Your Enemy",),
                10: ("Improved Combat Superiority",),
                15: ("Relentless",),
                18: ("Ultimate Combat Superiority",),
            },
        ),
        "eldritch_knight": _subclass(
            "eldritch_knight",
            "Eldritch Knight",
            {
                3: ("Spellcasting", "War Bond"),
                7: ("War Magic",),
                10: ("Eldritch Strike",),
                15: ("Arcane Charge",),
                18: ("Improved War Magic",),
            },
        ),
    },
)


# =============================================================================
# Wizard
# =============================================================================

_WIZARD_FEATURES: dict[int, tuple[str, ...]] = {
    1: ("Spellcasting", "Ritual Adept", "Arcane Recovery"),
    2: ("Scholar",),
    3: ("Wizard Subclass",),
    4: ("Ability Score Improvement",),
    5: ("Memorize Spell",),
    6: ("Subclass Feature",),
    8: ("Ability Score Improvement",),
    10: ("Subclass Feature",),
    12: ("Ability Score Improvement",),
    14: ("Subclass Feature",),
    16: ("Ability Score Improvement",),
    18: ("Spell Mastery",),
    19: ("Epic Boon",),
    20: ("Signature Spells",),
}

WIZARD = ClassTable.from_rows(
    {level: {"features": _WIZARD_FEATURES.get(level, ())} for level in LEVELS},
    id="wizard",
    name="Wizard",
    hit_die=6,
    saves=(Ability.INT, Ability.WIS),
    weapon_proficiencies=("simple",),
    skill_choices=("arcana", "history", "insight", "investigation", "medicine", "nature", "religion"),
    asi_levels=STANDARD_ASI_LEVELS - {19},
    epic_boon_levels=frozenset({19}),
    subclass_level=3,
    spell_slots=FULL_CASTER_SLOTS,
    subclasses={
        "abjurer": _subclass(
            "abjurer",
            "Abjurer",
            {
                3: ("Abjuration Savant", "Arcane Ward"),
                6: ("Projected Ward",),
                10: ("Spell Breaker",),
                14: ("Spell Resistance",),
            },
        ),
        "diviner": _subclass(
            "diviner",
            "Diviner",
            {
                3: ("Portent", "Divination Savant"),
                6: ("Expert Divination",),
                10: ("The Third Eye",),
                14: ("Greater Portent",),
            },
        ),
        "evoker": _subclass(
            "evoker",
            "Evoker",
            {
                3: ("Evocation Savant", "Potent Cantrip"),
                6: ("Sculpt Spells",),
                10: ("Empowered Evocation",),
                14: ("Overchannel",),
            },
        ),
        "illusionist": _subclass(
            "illusionist",
            "Illusionist",
            {
                3: ("Illusion Savant", "Improved Illusions"),
                6: ("Phantasmal Creatures",),
                10: ("Illusory Self",),
                14: ("Illusory Reality",),
            },
        ),
    },
)


BUILTIN_CLASSES: dict[str, ClassTable] = {
    table.id: table for table in (BARBARIAN, PUGILIST, FIGHTER, WIZARD)
}


__all__ = [
    "STANDARD_ASI_LEVELS",
    "FIGHTER_ASI_LEVELS",
    "FULL_CASTER_SLOTS",
    "BARBARIAN",
    "PUGILIST",
    "FIGHTER",
    "WIZARD",
    "BUILTIN_CLASSES",
]
