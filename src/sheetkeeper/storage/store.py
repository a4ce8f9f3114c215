"""Character store protocol, in-memory store and factory."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sheetkeeper.core.config import Settings, get_settings
from sheetkeeper.core.exceptions import CharacterNotFoundError
from sheetkeeper.core.logging import get_logger
from sheetkeeper.models.character import CharacterSnapshot
from sheetkeeper.storage.database import SQLiteCharacterStore


logger = get_logger(__name__)


@runtime_checkable
class CharacterStore(Protocol):
    """Key-value persistence of snapshots by character id."""

    def load(self, character_id: str) -> CharacterSnapshot | None: ...

    def save(self, snapshot: CharacterSnapshot) -> None: ...

    def delete(self, character_id: str) -> bool: ...

    def list_all(self) -> list[CharacterSnapshot]: ...


class InMemoryCharacterStore:
    """CharacterStore held in a dict. Stores JSON so loads return fresh copies."""

    def __init__(self) -> None:
        self._records: dict[str, str] = {}

    def load(self, character_id: str) -> CharacterSnapshot | None:
        payload = self._records.get(character_id)
        if payload is None:
            return None
        return CharacterSnapshot.model_validate_json(payload)

    def save(self, snapshot: CharacterSnapshot) -> None:
        # Re-inserting moves the id to the end, so dict order is save order.
        self._records.pop(snapshot.id, None)
        self._records[snapshot.id] = snapshot.model_dump_json()

    def delete(self, character_id: str) -> bool:
        return self._records.pop(character_id, None) is not None

    def list_all(self) -> list[CharacterSnapshot]:
        return [CharacterSnapshot.model_validate_json(p) for p in reversed(self._records.values())]


def require(store: CharacterStore, character_id: str) -> CharacterSnapshot:
    """Load a character that must exist.

    Raises:
        CharacterNotFoundError: If the id is unknown.
    """
    snapshot = store.load(character_id)
    if snapshot is None:
        raise CharacterNotFoundError("Character not found", character_id=character_id)
    return snapshot


def get_character_store(settings: Settings | None = None) -> CharacterStore:
    """Build the configured character store.

    Args:
        settings: Settings to read; the cached settings when omitted.
    """
    settings = settings or get_settings()
    backend = settings.storage.backend
    logger.debug("Building character store", backend=backend)
    if backend == "memory":
        return InMemoryCharacterStore()
    return SQLiteCharacterStore(settings.storage.database_path)


__all__ = [
    "CharacterStore",
    "InMemoryCharacterStore",
    "require",
    "get_character_store",
]
