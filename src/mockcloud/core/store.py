# src/mockcloud/core/store.py
"""In-memory record store for one database scope."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from mockcloud.contracts.enums import DatabaseScope
from mockcloud.contracts.records import Record, RecordID

if TYPE_CHECKING:
    from mockcloud.contracts.operations import DatabaseOperation


class RecordStore:
    """Map of RecordID -> Record owned by exactly one database scope.

    Pure CRUD: the store fires no callbacks and knows nothing about faults.
    Iteration follows insertion order (an upsert of an existing ID keeps its
    original position), but callers should not depend on any order.

    ``last_executed`` is set by the engine to the most recent operation run
    against this store, so tests can inspect what was submitted.
    """

    def __init__(self, scope: DatabaseScope = DatabaseScope.PRIVATE) -> None:
        self.scope = scope
        self._records: dict[RecordID, Record] = {}
        self.last_executed: DatabaseOperation | None = None

    def add(self, records: Iterable[Record]) -> None:
        """Upsert by RecordID; a later record with the same ID wins."""
        for record in records:
            self._records[record.record_id] = record

    def get(self) -> list[Record]:
        return list(self._records.values())

    def get_matching_ids(self, record_ids: Iterable[RecordID]) -> list[Record]:
        """Stored records whose ID is in ``record_ids``; unknown IDs are omitted."""
        wanted = set(record_ids)
        return [record for rid, record in self._records.items() if rid in wanted]

    def get_matching(self, predicate: Callable[[Record], bool]) -> list[Record]:
        return [record for record in self._records.values() if predicate(record)]

    def lookup(self, record_id: RecordID) -> Record | None:
        return self._records.get(record_id)

    def remove(self, record_ids: Iterable[RecordID]) -> None:
        """Delete by ID; unknown IDs are a no-op."""
        for record_id in record_ids:
            self._records.pop(record_id, None)

    def reset(self) -> None:
        """Drop every record and forget the last executed operation."""
        self._records.clear()
        self.last_executed = None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __repr__(self) -> str:
        return f"RecordStore(scope={self.scope.value!r}, records={len(self._records)})"
