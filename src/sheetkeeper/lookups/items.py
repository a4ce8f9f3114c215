"""Item, weapon and armor lookup services.

Inventory entries carry display names such as "+1 Leather Armor" or
"Greataxe +2". Every lookup normalizes the name to its base key before an
exact-match lookup, so decorated names resolve to the same record as the
plain item.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from sheetkeeper.lookups.equipment_data import ARMOR, MAGIC_ITEMS, WEAPONS
from sheetkeeper.models.enums import ArmorCategory


_PREFIX_BONUS = re.compile(r"^\+(\d+)\s+")
_SUFFIX_BONUS = re.compile(r"\s+\+(\d+)$")
_MATERIAL_PREFIX = re.compile(r"^(mithral|adamantine)\s+")
_ARMOR_SUFFIX = re.compile(r"\s+armor$")


def normalize_item_name(name: str | None) -> str:
    """Reduce a decorated item name to its lookup key.

    Example:
        >>> normalize_item_name("+1 Chain Mail")
        'chain mail'
        >>> normalize_item_name("Greataxe +2")
        'greataxe'
    """
    if not name:
        return ""
    key = " ".join(str(name).strip().lower().split())
    key = _PREFIX_BONUS.sub("", key)
    key = _SUFFIX_BONUS.sub("", key)
    key = _MATERIAL_PREFIX.sub("", key)
    return key


def parse_magic_bonus(name: str | None) -> int:
    """Read the +N enhancement from a decorated name, 0 when absent."""
    if not name:
        return 0
    key = str(name).strip().lower()
    match = _PREFIX_BONUS.search(key) or _SUFFIX_BONUS.search(key)
    return int(match.group(1)) if match else 0


# =============================================================================
# Records
# =============================================================================


class WeaponRecord(BaseModel):
    """Static weapon data."""

    model_config = ConfigDict(frozen=True)

    name: str
    damage_die: str
    damage_type: str | None = None
    category: str = "simple"
    properties: tuple[str, ...] = ()

    @property
    def is_heavy(self) -> bool:
        return "heavy" in self.properties


class ArmorRecord(BaseModel):
    """Static armor data. Shields use ``ac`` as their bonus."""

    model_config = ConfigDict(frozen=True)

    name: str
    ac: int
    category: ArmorCategory

    @property
    def is_shield(self) -> bool:
        return self.category is ArmorCategory.SHIELD


class ItemRecord(BaseModel):
    """Static magic item data.

    Attributes:
        name: Item name.
        base_item: Weapon or armor the item is built on, if any.
        ac_bonus: AC bonus while equipped.
        weapon_bonus: Attack and damage bonus while equipped.
        requires_attunement: Whether equipping needs an attunement slot.
        charges: Starting charges, if the item has any.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    base_item: str | None = None
    ac_bonus: int = 0
    weapon_bonus: int = 0
    requires_attunement: bool = False
    charges: int | None = None


# =============================================================================
# Lookups
# =============================================================================


class WeaponLookup:
    """Resolve weapon names to WeaponRecords."""

    def __init__(self, records: Mapping[str, WeaponRecord]) -> None:
        self._records = {normalize_item_name(k): v for k, v in records.items()}

    def by_name(self, name: str | None) -> WeaponRecord | None:
        return self._records.get(normalize_item_name(name))

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def builtin(cls) -> WeaponLookup:
        return cls(
            {
                key: WeaponRecord(
                    name=key.title(),
                    damage_die=die,
                    damage_type=damage_type,
                    category=category,
                    properties=properties,
                )
                for key, (die, damage_type, category, properties) in WEAPONS.items()
            }
        )


class ArmorLookup:
    """Resolve armor names to ArmorRecords.

    "Leather Armor" and "Leather" both resolve: a trailing " armor" is
    dropped when the full name has no entry.
    """

    def __init__(self, records: Mapping[str, ArmorRecord]) -> None:
        self._records = {normalize_item_name(k): v for k, v in records.items()}

    def by_name(self, name: str | None) -> ArmorRecord | None:
        key = normalize_item_name(name)
        record = self._records.get(key)
        if record is None:
            record = self._records.get(_ARMOR_SUFFIX.sub("", key))
        return record

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def builtin(cls) -> ArmorLookup:
        return cls(
            {
                key: ArmorRecord(name=key.title(), ac=ac, category=category)
                for key, (ac, category) in ARMOR.items()
            }
        )


class ItemLookup:
    """Resolve magic item names to ItemRecords.

    Named items ("Ring of Protection") are matched case-insensitively on the
    full name. Anything not in the table is not a magic item as far as this
    lookup is concerned; enhancement bonuses written into the name are read
    separately with ``parse_magic_bonus``.
    """

    def __init__(self, records: Mapping[str, ItemRecord]) -> None:
        self._records = {" ".join(k.lower().split()): v for k, v in records.items()}

    def by_name(self, name: str | None) -> ItemRecord | None:
        if not name:
            return None
        key = " ".join(str(name).strip().lower().split())
        record = self._records.get(key)
        if record is None:
            record = self._records.get(normalize_item_name(name))
        return record

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def builtin(cls) -> ItemLookup:
        return cls(
            {
                key: ItemRecord(
                    name=key.title(),
                    ac_bonus=ac_bonus,
                    weapon_bonus=weapon_bonus,
                    requires_attunement=attunement,
                    charges=charges,
                    base_item=base_item,
                )
                for key, (ac_bonus, weapon_bonus, attunement, charges, base_item) in MAGIC_ITEMS.items()
            }
        )


__all__ = [
    "normalize_item_name",
    "parse_magic_bonus",
    "WeaponRecord",
    "ArmorRecord",
    "ItemRecord",
    "WeaponLookup",
    "ArmorLookup",
    "ItemLookup",
]
