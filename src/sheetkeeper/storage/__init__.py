"""Character persistence.

Provides the CharacterStore protocol with SQLite and in-memory
implementations.
"""

from sheetkeeper.storage.database import SQLiteCharacterStore
from sheetkeeper.storage.store import (
    CharacterStore,
    InMemoryCharacterStore,
    get_character_store,
    require,
)

__all__ = [
    "CharacterStore",
    "SQLiteCharacterStore",
    "InMemoryCharacterStore",
    "get_character_store",
    "require",
]
