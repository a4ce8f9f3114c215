"""Read-only lookup services over the bundled reference tables.

Exports:
    Lookups, default_lookups: Service bundle consumed by the engine.
    ItemLookup, WeaponLookup, ArmorLookup: Equipment resolvers.
    ClassLookup: Class table resolver.
    FeatLookup, FeatEffect: Feat effect table.
    NamedCatalog: Race, background and spell catalogs.
"""

from __future__ import annotations

from sheetkeeper.lookups.catalogs import (
    BackgroundRecord,
    NamedCatalog,
    RaceRecord,
    SpellRecord,
)
from sheetkeeper.lookups.classes import ClassLookup
from sheetkeeper.lookups.feats import FEAT_EFFECTS, FeatEffect, FeatLookup
from sheetkeeper.lookups.items import (
    ArmorLookup,
    ArmorRecord,
    ItemLookup,
    ItemRecord,
    WeaponLookup,
    WeaponRecord,
    normalize_item_name,
    parse_magic_bonus,
)
from sheetkeeper.lookups.registry import Lookups, default_lookups


__all__ = [
    "Lookups",
    "default_lookups",
    "ItemLookup",
    "ItemRecord",
    "WeaponLookup",
    "WeaponRecord",
    "ArmorLookup",
    "ArmorRecord",
    "normalize_item_name",
    "parse_magic_bonus",
    "ClassLookup",
    "FeatLookup",
    "FeatEffect",
    "FEAT_EFFECTS",
    "NamedCatalog",
    "RaceRecord",
    "BackgroundRecord",
    "SpellRecord",
]
