"""Bundle of lookup services handed to the engine.

Engine components take a ``Lookups`` instance at construction instead of
reaching for module-level tables, so tests can swap in their own data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from sheetkeeper.lookups.catalogs import (
    BACKGROUNDS,
    RACES,
    SPELLS,
    BackgroundRecord,
    NamedCatalog,
    RaceRecord,
    SpellRecord,
)
from sheetkeeper.lookups.classes import ClassLookup
from sheetkeeper.lookups.feats import FeatLookup
from sheetkeeper.lookups.items import ArmorLookup, ItemLookup, WeaponLookup


@dataclass(frozen=True)
class Lookups:
    """Every read-only lookup the engine consumes.

    Attributes:
        items: Magic item records.
        weapons: Weapon damage records.
        armor: Armor and shield records.
        classes: Class tables.
        feats: Feat effect table.
        races: Race catalog.
        backgrounds: Background catalog.
        spells: Spell catalog.
    """

    items: ItemLookup = field(default_factory=ItemLookup.builtin)
    weapons: WeaponLookup = field(default_factory=WeaponLookup.builtin)
    armor: ArmorLookup = field(default_factory=ArmorLookup.builtin)
    classes: ClassLookup = field(default_factory=ClassLookup.builtin)
    feats: FeatLookup = field(default_factory=FeatLookup.builtin)
    races: NamedCatalog[RaceRecord] = field(default_factory=lambda: NamedCatalog(RACES))
    backgrounds: NamedCatalog[BackgroundRecord] = field(
        default_factory=lambda: NamedCatalog(BACKGROUNDS)
    )
    spells: NamedCatalog[SpellRecord] = field(default_factory=lambda: NamedCatalog(SPELLS))


@lru_cache(maxsize=1)
def default_lookups() -> Lookups:
    """Get the shared built-in lookups.

    Returns:
        Lookups populated from the bundled reference tables.
    """
    return Lookups()


__all__ = [
    "Lookups",
    "default_lookups",
]
