"""Class table lookup."""

from __future__ import annotations

from collections.abc import Iterable

from sheetkeeper.lookups.class_data import BUILTIN_CLASSES
from sheetkeeper.models.classes import ClassTable


class ClassLookup:
    """Resolve class ids to ClassTables.

    Ids are matched case-insensitively; the class display name is accepted
    too, so "Barbarian" and "barbarian" both resolve.
    """

    def __init__(self, tables: Iterable[ClassTable]) -> None:
        self._tables = {t.id.lower(): t for t in tables}

    def by_class_id(self, class_id: str | None) -> ClassTable | None:
        if not class_id:
            return None
        key = class_id.strip().lower()
        table = self._tables.get(key)
        if table is None:
            table = next((t for t in self._tables.values() if t.name.lower() == key), None)
        return table

    def class_ids(self) -> list[str]:
        return sorted(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    @classmethod
    def builtin(cls) -> ClassLookup:
        return cls(BUILTIN_CLASSES.values())


__all__ = ["ClassLookup"]
