"""sheetkeeper - derived-attribute and progression engine for 5E character sheets.

Raw character data goes in (ability scores, class, level, equipment,
resource counters); armor class, attack breakdowns, resource pools and
level-up results come out. Every engine operation is a pure function from
one CharacterSnapshot to the next; the caller persists each result through
a CharacterStore.

Example:
    >>> from sheetkeeper import CombatCalculator, ProgressionEngine, create_character
    >>>
    >>> hero = create_character(
    ...     "Thrak", "barbarian", {"str": 16, "dex": 12, "con": 14}
    ... )
    >>> CombatCalculator().armor_class(hero).total
    13
    >>> hero = ProgressionEngine().apply_level_up(hero)
    >>> hero.level
    2

Modules:
    core: Configuration, logging, exceptions and rules constants.
    models: Pydantic schemas for snapshots, class tables and breakdowns.
    lookups: Injectable read-only reference data services.
    engine: Attribute, combat, resource, progression and feat logic.
    storage: Character store protocol with SQLite and in-memory backends.
"""

from __future__ import annotations

# Core
from sheetkeeper.core.config import Settings, get_settings
from sheetkeeper.core.exceptions import MissingClassDataError, SheetkeeperError
from sheetkeeper.core.logging import configure_logging, get_logger

# Engine
from sheetkeeper.engine import (
    CombatCalculator,
    DiceRoller,
    ProgressionEngine,
    apply_feat,
    create_character,
    long_rest,
    short_rest,
)

# Lookups
from sheetkeeper.lookups import Lookups, default_lookups

# Models
from sheetkeeper.models import (
    Ability,
    CharacterSnapshot,
    ClassTable,
    LevelUpChoices,
    Skill,
)

# Storage
from sheetkeeper.storage import CharacterStore, get_character_store


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "SheetkeeperError",
    "MissingClassDataError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "Skill",
    "CharacterSnapshot",
    "ClassTable",
    "LevelUpChoices",
    # Lookups
    "Lookups",
    "default_lookups",
    # Engine
    "CombatCalculator",
    "ProgressionEngine",
    "DiceRoller",
    "apply_feat",
    "create_character",
    "short_rest",
    "long_rest",
    # Storage
    "CharacterStore",
    "get_character_store",
]
