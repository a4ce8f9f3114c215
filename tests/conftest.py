"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the sheetkeeper test suite.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import pytest

from sheetkeeper.core.config import RulesSettings
from sheetkeeper.engine.combat import CombatCalculator
from sheetkeeper.engine.creation import create_character
from sheetkeeper.engine.dice import DiceExpression, DiceRoller
from sheetkeeper.engine.progression import ProgressionEngine
from sheetkeeper.lookups.registry import Lookups, default_lookups
from sheetkeeper.models.character import CharacterSnapshot
from sheetkeeper.storage.database import SQLiteCharacterStore


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from sheetkeeper.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no SHEETKEEPER_ variables set.

    Returns:
        The temporary working directory.
    """
    for key in list(os.environ):
        if key.startswith("SHEETKEEPER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def rules(isolated_env: Path) -> RulesSettings:
    """Default rules variants."""
    return RulesSettings()


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def lookups() -> Lookups:
    return default_lookups()


@pytest.fixture
def combat(lookups: Lookups) -> CombatCalculator:
    return CombatCalculator(lookups)


@pytest.fixture
def progression(lookups: Lookups, rules: RulesSettings) -> ProgressionEngine:
    return ProgressionEngine(lookups, rules)


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Provide a seeded dice roller for reproducible tests."""
    return DiceRoller(seed=42)


class FixedRoller:
    """Roller test double returning preset totals in order.

    Attributes:
        expressions: Every expression it was asked to roll.
    """

    def __init__(self, totals: Iterable[int]) -> None:
        self._totals = list(totals)
        self.expressions: list[str] = []

    def roll(self, expression: str) -> DiceExpression:
        self.expressions.append(expression)
        total = self._totals.pop(0)
        return DiceExpression(
            expression=expression,
            total=total,
            dice=[total],
            modifier=0,
        )


@pytest.fixture
def fixed_roller() -> Callable[..., FixedRoller]:
    """Factory for rollers that return the given totals.

    Example:
        >>> roller = fixed_roller(12, 3)
    """

    def _make(*totals: int) -> FixedRoller:
        return FixedRoller(totals)

    return _make


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def barbarian() -> CharacterSnapshot:
    """Level 1 barbarian: Str 16, Dex 12, Con 14."""
    return create_character(
        "Thrak",
        "barbarian",
        {"str": 16, "dex": 12, "con": 14, "int": 8, "wis": 10, "cha": 10},
    )


@pytest.fixture
def pugilist() -> CharacterSnapshot:
    """Level 1 pugilist: Str 15, Dex 14, Con 16."""
    return create_character(
        "Mick",
        "pugilist",
        {"str": 15, "dex": 14, "con": 16, "int": 10, "wis": 10, "cha": 12},
    )


@pytest.fixture
def fighter() -> CharacterSnapshot:
    """Level 1 fighter: Str 14, Dex 18, Con 12."""
    return create_character(
        "Vera",
        "fighter",
        {"str": 14, "dex": 18, "con": 12, "int": 10, "wis": 12, "cha": 8},
    )


@pytest.fixture
def wizard() -> CharacterSnapshot:
    """Level 1 wizard: Dex 14, Con 12, Int 17."""
    return create_character(
        "Orrin",
        "wizard",
        {"str": 8, "dex": 14, "con": 12, "int": 17, "wis": 12, "cha": 10},
    )


@pytest.fixture
def make_snapshot() -> Callable[..., CharacterSnapshot]:
    """Factory for snapshots built directly from field values.

    Example:
        >>> snap = make_snapshot(class_id="barbarian", level=5)
    """

    def _make(**fields: object) -> CharacterSnapshot:
        fields.setdefault("name", "Test Character")
        return CharacterSnapshot.model_validate(fields)

    return _make


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SQLiteCharacterStore:
    """SQLite store backed by a file in the test's temp directory."""
    return SQLiteCharacterStore(tmp_path / "characters.db")
