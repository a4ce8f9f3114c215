"""Dice rolling backed by the d20 library.

The engine is deterministic everywhere except hit-dice spending. That one
operation takes a ``DiceRoller`` (or anything with the same ``roll`` method)
so callers and tests control the randomness.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Protocol

import d20

from sheetkeeper.core.exceptions import DiceRollError
from sheetkeeper.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The dice expression string as given.
        total: The total result of the roll.
        dice: Die faces, in roll order.
        modifier: Static modifier applied.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int


class Roller(Protocol):
    """Anything that can roll a dice expression."""

    def roll(self, expression: str) -> DiceExpression:
        ...


class DiceRoller:
    """Dice roller for hit dice and other plain expressions.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> result = roller.roll("1d12+2")
        >>> 3 <= result.total <= 14
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d12', '2d6+3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        logger.debug("Dice rolled", expression=expression, total=result.total)

        return DiceExpression(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
        )

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Collect kept die faces from a d20 expression tree."""
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


__all__ = [
    "DiceExpression",
    "Roller",
    "DiceRoller",
]
