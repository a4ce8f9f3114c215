"""Result records returned by the combat formulas.

A breakdown lists every additive part that went into a number so a sheet can
explain it. Totals are computed from the parts, never stored separately.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field


class BonusPart(BaseModel):
    """One labelled addend of a total."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: int


class ArmorClassBreakdown(BaseModel):
    """How armor class was derived.

    Attributes:
        label: Formula name (e.g. 'Light Armor', 'Unarmored Defense').
        base: Armor rating or formula base.
        dex_bonus: Dexterity contribution after armor caps.
        ability_bonus: Secondary ability contribution (e.g. Con).
        shield_bonus: Shield contribution.
        magic_bonus: Summed magic AC bonus of equipped items.
        is_override: True when a manual override was returned verbatim.
        override_value: The override, when present.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    base: int = 0
    dex_bonus: int = 0
    ability_bonus: int = 0
    shield_bonus: int = 0
    magic_bonus: int = 0
    is_override: bool = False
    override_value: int | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        if self.is_override and self.override_value is not None:
            return self.override_value
        return (
            self.base
            + self.dex_bonus
            + self.ability_bonus
            + self.shield_bonus
            + self.magic_bonus
        )

    @property
    def parts(self) -> list[BonusPart]:
        """Non-zero addends in display order."""
        if self.is_override:
            return [BonusPart(label=self.label, value=self.total)]
        candidates = [
            BonusPart(label="Base", value=self.base),
            BonusPart(label="Dexterity", value=self.dex_bonus),
            BonusPart(label="Ability", value=self.ability_bonus),
            BonusPart(label="Shield", value=self.shield_bonus),
            BonusPart(label="Magic", value=self.magic_bonus),
        ]
        return [p for i, p in enumerate(candidates) if i == 0 or p.value]


class AttackBreakdown(BaseModel):
    """Attack and damage bonuses for one attack option.

    Attributes:
        name: Attack name ('Unarmed Strike' or the inventory item name).
        damage_die: Damage dice expression.
        damage_type: Damage type, or None when unknown.
        attack_parts: Addends of the attack bonus.
        damage_parts: Addends of the damage bonus.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    damage_die: str
    damage_type: str | None = None
    attack_parts: tuple[BonusPart, ...] = ()
    damage_parts: tuple[BonusPart, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def attack_bonus(self) -> int:
        return sum(p.value for p in self.attack_parts)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def damage_bonus(self) -> int:
        return sum(p.value for p in self.damage_parts)

    def part(self, label: str, *, damage: bool = False) -> int:
        """Value of a labelled part, 0 when absent."""
        parts = self.damage_parts if damage else self.attack_parts
        return sum(p.value for p in parts if p.label == label)

    @property
    def damage_expression(self) -> str:
        """Die plus flat bonus, e.g. '1d12+5'."""
        bonus = self.damage_bonus
        if bonus == 0:
            return self.damage_die
        sign = "+" if bonus > 0 else "-"
        return f"{self.damage_die}{sign}{abs(bonus)}"


class EquippedBonuses(BaseModel):
    """Magic bonuses summed over equipped items."""

    model_config = ConfigDict(frozen=True)

    ac_bonus: int = 0
    weapon_bonus: int = 0
    attuned_count: int = 0


class HitDiceResult(BaseModel):
    """Outcome of spending hit dice."""

    model_config = ConfigDict(frozen=True)

    rolls: tuple[int, ...] = ()
    healed: int = 0
    dice_spent: int = 0


__all__ = [
    "BonusPart",
    "ArmorClassBreakdown",
    "AttackBreakdown",
    "EquippedBonuses",
    "HitDiceResult",
]
