"""Inventory operations.

Entries are addressed by item name, case-insensitively. Like the resource
operations, invalid input leaves the snapshot unchanged.
"""

from __future__ import annotations

from sheetkeeper.core.config import get_settings
from sheetkeeper.core.logging import get_logger
from sheetkeeper.engine.resources import parse_amount
from sheetkeeper.lookups.registry import Lookups, default_lookups
from sheetkeeper.models.character import CharacterSnapshot, InventoryEntry


logger = get_logger(__name__)


def _find(snapshot: CharacterSnapshot, item_name: str) -> int | None:
    key = item_name.strip().lower()
    for index, entry in enumerate(snapshot.inventory):
        if entry.item_name.strip().lower() == key:
            return index
    return None


def attuned_count(snapshot: CharacterSnapshot) -> int:
    return sum(1 for e in snapshot.inventory if e.equipped and e.attuned)


def add_item(
    snapshot: CharacterSnapshot,
    item_name: str,
    quantity: object = 1,
    lookups: Lookups | None = None,
) -> CharacterSnapshot:
    """Add an item, or raise the quantity of an existing entry.

    New entries start unequipped with the item's listed charges.
    """
    count = parse_amount(quantity)
    name = item_name.strip()
    if not count or not name:
        return snapshot

    updated = snapshot.clone()
    index = _find(updated, name)
    if index is not None:
        updated.inventory[index].quantity += count
    else:
        record = (lookups or default_lookups()).items.by_name(name)
        updated.inventory.append(
            InventoryEntry(
                item_name=name,
                quantity=count,
                charges=record.charges if record is not None else None,
            )
        )
    return updated.normalized()


def remove_item(snapshot: CharacterSnapshot, item_name: str) -> CharacterSnapshot:
    index = _find(snapshot, item_name)
    if index is None:
        return snapshot
    updated = snapshot.clone()
    del updated.inventory[index]
    return updated.normalized()


def set_quantity(snapshot: CharacterSnapshot, item_name: str, quantity: object) -> CharacterSnapshot:
    """Set an entry's quantity. Zero removes the entry."""
    count = parse_amount(quantity)
    index = _find(snapshot, item_name)
    if count is None or index is None:
        return snapshot
    if count == 0:
        return remove_item(snapshot, item_name)
    updated = snapshot.clone()
    updated.inventory[index].quantity = count
    return updated.normalized()


def set_charges(snapshot: CharacterSnapshot, item_name: str, charges: object) -> CharacterSnapshot:
    count = parse_amount(charges)
    index = _find(snapshot, item_name)
    if count is None or index is None:
        return snapshot
    updated = snapshot.clone()
    updated.inventory[index].charges = count
    return updated.normalized()


def toggle_equipped(
    snapshot: CharacterSnapshot,
    item_name: str,
    lookups: Lookups | None = None,
    max_attunement: int | None = None,
) -> CharacterSnapshot:
    """Equip or unequip an entry.

    Equipping an item that requires attunement also attunes it, and is
    refused once the attunement limit is reached. Unequipping always ends
    attunement.

    Args:
        snapshot: Character whose inventory changes.
        item_name: Entry to toggle.
        lookups: Lookups used to read the attunement requirement.
        max_attunement: Attunement limit; the configured limit when omitted.
    """
    index = _find(snapshot, item_name)
    if index is None:
        return snapshot
    entry = snapshot.inventory[index]
    record = (lookups or default_lookups()).items.by_name(entry.item_name)
    needs_attunement = record is not None and record.requires_attunement

    if not entry.equipped and needs_attunement:
        limit = max_attunement if max_attunement is not None else get_settings().rules.max_attunement
        if attuned_count(snapshot) >= limit:
            logger.warning(
                "Attunement limit reached",
                character_id=snapshot.id,
                item=entry.item_name,
                limit=limit,
            )
            return snapshot

    updated = snapshot.clone()
    target = updated.inventory[index]
    target.equipped = not entry.equipped
    target.attuned = target.equipped and needs_attunement
    return updated.normalized()


__all__ = [
    "attuned_count",
    "add_item",
    "remove_item",
    "set_quantity",
    "set_charges",
    "toggle_equipped",
]
