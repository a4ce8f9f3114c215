"""SQLite character store.

Each character is one row keyed by id. The snapshot itself is stored as the
JSON produced by ``model_dump_json`` and read back with
``model_validate_json``, so every field round-trips.

Storage location: ~/.sheetkeeper/characters.db (see StorageSettings)
"""

from __future__ import annotations

import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from sheetkeeper.core.exceptions import CorruptRecordError, StorageError
from sheetkeeper.core.logging import get_logger
from sheetkeeper.models.character import CharacterSnapshot


logger = get_logger(__name__)


class SQLiteCharacterStore:
    """SQLite-backed CharacterStore.

    A connection is opened per operation and committed or rolled back when
    the operation finishes. Concurrent saves of one id are last-write-wins.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the store, creating the file and schema if needed.

        Args:
            db_path: Path to the database file, or ':memory:'.

        Raises:
            StorageError: If the database cannot be opened.
        """
        self.db_path = Path(db_path).expanduser() if str(db_path) != ":memory:" else None
        self._memory_conn: sqlite3.Connection | None = None
        if self.db_path is None:
            self._memory_conn = sqlite3.connect(":memory:")
        else:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_schema()
        logger.info("Character store initialized", db_path=str(self.db_path or ":memory:"))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with commit, rollback and cleanup."""
        try:
            conn = self._memory_conn or sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(
                f"Cannot open character database: {exc}",
                details={"db_path": str(self.db_path)},
            ) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(f"Character database error: {exc}") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            if conn is not self._memory_conn:
                conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    class_id TEXT,
                    level INTEGER NOT NULL,
                    snapshot_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_updated
                ON characters(updated_at DESC)
            """)
            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    @staticmethod
    def _parse(character_id: str, payload: str) -> CharacterSnapshot:
        try:
            return CharacterSnapshot.model_validate_json(payload)
        except ValidationError as exc:
            raise CorruptRecordError(
                f"Stored character no longer parses: {exc.error_count()} errors",
                character_id=character_id,
            ) from exc

    # =========================================================================
    # CharacterStore Operations
    # =========================================================================

    def load(self, character_id: str) -> CharacterSnapshot | None:
        """Load a character by id.

        Returns:
            The snapshot, or None when the id is unknown.

        Raises:
            CorruptRecordError: If the stored JSON does not validate.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT snapshot_json FROM characters WHERE id = ?",
                (character_id,),
            ).fetchone()
        if row is None:
            return None
        return self._parse(character_id, row["snapshot_json"])

    def save(self, snapshot: CharacterSnapshot) -> None:
        """Insert or replace a character, keeping its original created_at."""
        now = datetime.now().isoformat()
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO characters (id, name, class_id, level, snapshot_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    class_id = excluded.class_id,
                    level = excluded.level,
                    snapshot_json = excluded.snapshot_json,
                    updated_at = excluded.updated_at
                """,
                (
                    snapshot.id,
                    snapshot.name,
                    snapshot.class_id,
                    snapshot.level,
                    snapshot.model_dump_json(),
                    now,
                    now,
                ),
            )
        logger.debug("Character saved", character_id=snapshot.id, level=snapshot.level)

    def delete(self, character_id: str) -> bool:
        """Delete a character.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            deleted = conn.execute(
                "DELETE FROM characters WHERE id = ?", (character_id,)
            ).rowcount > 0
        if deleted:
            logger.info("Character deleted", character_id=character_id)
        return deleted

    def list_all(self) -> list[CharacterSnapshot]:
        """All characters, most recently saved first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT id, snapshot_json FROM characters ORDER BY updated_at DESC, rowid DESC"
            ).fetchall()
        return [self._parse(row["id"], row["snapshot_json"]) for row in rows]

    def count(self) -> int:
        with self._get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM characters").fetchone()[0]


__all__ = ["SQLiteCharacterStore"]
