"""Combat formula engine: armor class and attack breakdowns.

Every result is a breakdown model listing its addends so a sheet can explain
the number. Nothing here raises; unknown items and missing class data fall
back to documented defaults.
"""

from __future__ import annotations

from dataclasses import dataclass

from sheetkeeper.core.constants import (
    DEFAULT_UNARMED_DIE,
    DEFAULT_WEAPON_DIE,
    IRON_CHIN_BASE_AC,
    MANUAL_OVERRIDE_KEY,
    MEDIUM_ARMOR_DEX_CAP,
    SHIELD_AC_BONUS,
    UNARMORED_BASE_AC,
)
from sheetkeeper.core.logging import get_logger
from sheetkeeper.engine.attributes import ability_modifier
from sheetkeeper.lookups.items import ArmorRecord, ItemRecord, WeaponRecord, parse_magic_bonus
from sheetkeeper.lookups.registry import Lookups, default_lookups
from sheetkeeper.models.breakdowns import (
    ArmorClassBreakdown,
    AttackBreakdown,
    BonusPart,
    EquippedBonuses,
)
from sheetkeeper.models.character import CharacterSnapshot, InventoryEntry
from sheetkeeper.models.classes import ClassTable
from sheetkeeper.models.enums import Ability, ArmorCategory, ArmorFormula, UnarmoredDefense


logger = get_logger(__name__)

MANUAL_OVERRIDE_LABEL = "Manual Override"
UNARMORED_LABEL = "Unarmored"
UNARMORED_DEFENSE_LABEL = "Unarmored Defense"
IRON_CHIN_LABEL = "Iron Chin"
UNARMED_STRIKE = "Unarmed Strike"


@dataclass(frozen=True)
class ResolvedEntry:
    """An inventory entry matched against the equipment lookups."""

    entry: InventoryEntry
    item: ItemRecord | None
    weapon: WeaponRecord | None
    armor: ArmorRecord | None

    @property
    def is_weapon(self) -> bool:
        return self.weapon is not None or (self.item is not None and self.item.weapon_bonus > 0)

    @property
    def ac_bonus(self) -> int:
        if self.item is not None and self.item.ac_bonus:
            return self.item.ac_bonus
        if self.armor is not None:
            return parse_magic_bonus(self.entry.item_name)
        return 0

    @property
    def weapon_bonus(self) -> int:
        if self.item is not None and self.item.weapon_bonus:
            return self.item.weapon_bonus
        if self.is_weapon:
            return parse_magic_bonus(self.entry.item_name)
        return 0


class CombatCalculator:
    """Armor class and attack formulas over injected lookups.

    Example:
        >>> calc = CombatCalculator()
        >>> snap = CharacterSnapshot(name="Ash", abilities={"dex": 14})
        >>> calc.armor_class(snap).total
        12
    """

    def __init__(self, lookups: Lookups | None = None) -> None:
        self.lookups = lookups or default_lookups()

    # -------------------------------------------------------------------------
    # Equipment
    # -------------------------------------------------------------------------

    def resolve(self, entry: InventoryEntry) -> ResolvedEntry:
        """Match an entry by its own name, then by its item's base item."""
        item = self.lookups.items.by_name(entry.item_name)
        weapon = self.lookups.weapons.by_name(entry.item_name)
        armor = self.lookups.armor.by_name(entry.item_name)
        if item is not None and item.base_item:
            weapon = weapon or self.lookups.weapons.by_name(item.base_item)
            armor = armor or self.lookups.armor.by_name(item.base_item)
        return ResolvedEntry(entry=entry, item=item, weapon=weapon, armor=armor)

    def equipped(self, snapshot: CharacterSnapshot) -> list[ResolvedEntry]:
        return [self.resolve(e) for e in snapshot.inventory if e.equipped and e.quantity > 0]

    def equipped_bonuses(self, snapshot: CharacterSnapshot) -> EquippedBonuses:
        """Sum magic AC and weapon bonuses over equipped items."""
        resolved = self.equipped(snapshot)
        return EquippedBonuses(
            ac_bonus=sum(r.ac_bonus for r in resolved),
            weapon_bonus=sum(r.weapon_bonus for r in resolved),
            attuned_count=sum(1 for r in resolved if r.entry.attuned),
        )

    def class_table(self, snapshot: CharacterSnapshot) -> ClassTable | None:
        return self.lookups.classes.by_class_id(snapshot.class_id)

    # -------------------------------------------------------------------------
    # Armor Class
    # -------------------------------------------------------------------------

    def armor_class(self, snapshot: CharacterSnapshot) -> ArmorClassBreakdown:
        """Compute armor class with its breakdown.

        Precedence: manual override, worn armor, class unarmored defense,
        feature AC formula, then 10 + Dex. Shield and magic bonuses are
        added to every formula except the override.
        """
        override = snapshot.overrides.get(MANUAL_OVERRIDE_KEY)
        if override is not None:
            return ArmorClassBreakdown(
                label=MANUAL_OVERRIDE_LABEL,
                is_override=True,
                override_value=override,
            )

        resolved = self.equipped(snapshot)
        body_armor = next(
            (r.armor for r in resolved if r.armor is not None and not r.armor.is_shield),
            None,
        )
        has_shield = any(r.armor is not None and r.armor.is_shield for r in resolved)
        magic_bonus = sum(r.ac_bonus for r in resolved)
        dex_mod = ability_modifier(snapshot, Ability.DEX)

        ability_bonus = 0
        if body_armor is not None:
            label = body_armor.category.label
            base = body_armor.ac
            if body_armor.category is ArmorCategory.HEAVY:
                dex_bonus = 0
            elif body_armor.category is ArmorCategory.MEDIUM:
                dex_bonus = min(dex_mod, MEDIUM_ARMOR_DEX_CAP)
            else:
                dex_bonus = dex_mod
        else:
            table = self.class_table(snapshot)
            defense = table.unarmored_defense if table is not None else UnarmoredDefense.NONE
            if defense.ability is not None:
                label = UNARMORED_DEFENSE_LABEL
                base = UNARMORED_BASE_AC
                dex_bonus = dex_mod
                ability_bonus = ability_modifier(snapshot, defense.ability)
            elif snapshot.bonuses.ac_formula is ArmorFormula.IRON_CHIN:
                label = IRON_CHIN_LABEL
                base = IRON_CHIN_BASE_AC
                dex_bonus = 0
                ability_bonus = ability_modifier(snapshot, Ability.CON)
            else:
                label = UNARMORED_LABEL
                base = UNARMORED_BASE_AC
                dex_bonus = dex_mod

        return ArmorClassBreakdown(
            label=label,
            base=base,
            dex_bonus=dex_bonus,
            ability_bonus=ability_bonus,
            shield_bonus=SHIELD_AC_BONUS if has_shield else 0,
            magic_bonus=magic_bonus,
        )

    # -------------------------------------------------------------------------
    # Attacks
    # -------------------------------------------------------------------------

    def _rage_part(self, snapshot: CharacterSnapshot, table: ClassTable | None) -> list[BonusPart]:
        if table is None or not table.has_rage or not snapshot.resources.is_raging:
            return []
        return [BonusPart(label="Rage", value=table.rage_damage(snapshot.level))]

    def unarmed_attack(self, snapshot: CharacterSnapshot) -> AttackBreakdown:
        """Unarmed strike: level die, Str to hit and damage, rage while raging."""
        table = self.class_table(snapshot)
        die = (table.unarmed_die(snapshot.level) if table is not None else None) or DEFAULT_UNARMED_DIE
        str_mod = ability_modifier(snapshot, Ability.STR)
        return AttackBreakdown(
            name=UNARMED_STRIKE,
            damage_die=die,
            damage_type="bludgeoning",
            attack_parts=(
                BonusPart(label="Strength", value=str_mod),
                BonusPart(label="Proficiency", value=snapshot.proficiency_bonus),
            ),
            damage_parts=(
                BonusPart(label="Strength", value=str_mod),
                *self._rage_part(snapshot, table),
            ),
        )

    def is_proficient(self, snapshot: CharacterSnapshot, weapon: WeaponRecord | None) -> bool:
        """Proficiency by weapon category ('martial') or by weapon name."""
        if weapon is None:
            return False
        trained = snapshot.proficiencies.weapons
        return weapon.category in trained or weapon.name.lower() in trained

    def _feat_damage_parts(
        self, snapshot: CharacterSnapshot, weapon: WeaponRecord | None
    ) -> list[BonusPart]:
        if weapon is None or not weapon.is_heavy:
            return []
        parts = []
        for feat in snapshot.feats:
            effect = self.lookups.feats.by_name(feat.name)
            if effect is not None and effect.heavy_weapon_damage:
                parts.append(BonusPart(label=effect.name, value=snapshot.proficiency_bonus))
        return parts

    def weapon_attack(self, snapshot: CharacterSnapshot, resolved: ResolvedEntry) -> AttackBreakdown:
        """Attack breakdown for one resolved weapon entry."""
        table = self.class_table(snapshot)
        weapon = resolved.weapon
        if weapon is None:
            logger.debug("Weapon not in lookup, using default die", item=resolved.entry.item_name)
        str_mod = ability_modifier(snapshot, Ability.STR)
        magic = resolved.weapon_bonus
        proficiency = snapshot.proficiency_bonus if self.is_proficient(snapshot, weapon) else 0

        attack_parts = [BonusPart(label="Strength", value=str_mod)]
        if proficiency:
            attack_parts.append(BonusPart(label="Proficiency", value=proficiency))
        damage_parts = [BonusPart(label="Strength", value=str_mod)]
        if magic:
            attack_parts.append(BonusPart(label="Magic", value=magic))
            damage_parts.append(BonusPart(label="Magic", value=magic))
        damage_parts.extend(self._rage_part(snapshot, table))
        damage_parts.extend(self._feat_damage_parts(snapshot, weapon))

        return AttackBreakdown(
            name=resolved.entry.item_name,
            damage_die=weapon.damage_die if weapon is not None else DEFAULT_WEAPON_DIE,
            damage_type=weapon.damage_type if weapon is not None else None,
            attack_parts=tuple(attack_parts),
            damage_parts=tuple(damage_parts),
        )

    def weapon_attacks(self, snapshot: CharacterSnapshot) -> list[AttackBreakdown]:
        """One breakdown per equipped weapon, in inventory order."""
        return [
            self.weapon_attack(snapshot, resolved)
            for resolved in self.equipped(snapshot)
            if resolved.is_weapon
        ]

    def attacks(self, snapshot: CharacterSnapshot) -> list[AttackBreakdown]:
        """Unarmed strike followed by every equipped weapon."""
        return [self.unarmed_attack(snapshot), *self.weapon_attacks(snapshot)]


# =============================================================================
# Overrides
# =============================================================================


def set_override(snapshot: CharacterSnapshot, key: str, value: object) -> CharacterSnapshot:
    """Fix a stat to a manual value; non-integer values are ignored."""
    if isinstance(value, bool):
        return snapshot
    try:
        number = int(str(value).strip())
    except ValueError:
        return snapshot
    updated = snapshot.clone()
    updated.overrides[key.strip().lower()] = number
    return updated.normalized()


def clear_override(snapshot: CharacterSnapshot, key: str) -> CharacterSnapshot:
    """Drop a manual value so the formula applies again."""
    normalized_key = key.strip().lower()
    if normalized_key not in snapshot.overrides:
        return snapshot
    updated = snapshot.clone()
    del updated.overrides[normalized_key]
    return updated.normalized()


__all__ = [
    "ResolvedEntry",
    "CombatCalculator",
    "set_override",
    "clear_override",
]
