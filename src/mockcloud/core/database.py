# src/mockcloud/core/database.py
"""One database scope of a mock container.

A MockDatabase pairs a RecordStore with the container's ExecutionEngine.
Operations go through add(); the store's CRUD methods are exposed directly
so tests can seed and inspect data without building operations.

The real service's per-call convenience methods (save, delete, fetch, ...)
are not modelled. They deliver OperationNotImplementedError to their
handler, naming the operation-based API to use instead.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from mockcloud.contracts.enums import DatabaseScope
from mockcloud.contracts.errors import OperationNotImplementedError
from mockcloud.contracts.operations import DatabaseOperation, Predicate, Query
from mockcloud.contracts.records import Record, RecordID
from mockcloud.core.store import RecordStore
from mockcloud.engine.executor import ExecutionEngine
from mockcloud.engine.predicates import as_callable

type CompletionHandler = Callable[[Any, BaseException | None], None]

_USE_MODIFY = "Use ModifyRecordsOperation via MockDatabase.add()."
_USE_FETCH = "Use FetchRecordsOperation via MockDatabase.add()."
_USE_QUERY = "Use QueryOperation via MockDatabase.add()."


class MockDatabase:
    """A database scope backed by an in-memory store."""

    def __init__(
        self,
        scope: DatabaseScope,
        engine: ExecutionEngine,
        store: RecordStore | None = None,
    ) -> None:
        self.scope = scope
        self.engine = engine
        self.store = store if store is not None else RecordStore(scope)

    def add(self, operation: DatabaseOperation) -> None:
        """Submit and synchronously execute ``operation``.

        Raises:
            UnsupportedOperationError: If ``operation`` is not a known kind
            OperationAlreadySubmittedError: If ``operation`` already ran
        """
        self.engine.execute(operation, self.store)

    @property
    def last_executed(self) -> DatabaseOperation | None:
        return self.store.last_executed

    # Direct store access

    def add_records(self, records: Iterable[Record]) -> None:
        self.store.add(records)

    def get_records(
        self,
        matching: Iterable[RecordID] | Predicate | None = None,
    ) -> list[Record]:
        """All records, records with the given IDs, or records matching a predicate.

        ``matching`` may be an iterable of RecordIDs, a predicate expression
        string, or a callable taking a Record.
        """
        if matching is None:
            return self.store.get()
        if isinstance(matching, str) or callable(matching):
            return self.store.get_matching(as_callable(matching))
        return self.store.get_matching_ids(matching)

    def remove_records(self, record_ids: Iterable[RecordID]) -> None:
        self.store.remove(record_ids)

    def reset_store(self) -> None:
        self.store.reset()

    # Convenience APIs the mock does not model

    def save(self, record: Record, handler: CompletionHandler) -> None:
        handler(None, OperationNotImplementedError("save", _USE_MODIFY))

    def delete(self, record_id: RecordID, handler: CompletionHandler) -> None:
        handler(None, OperationNotImplementedError("delete", _USE_MODIFY))

    def fetch(self, record_id: RecordID, handler: CompletionHandler) -> None:
        handler(None, OperationNotImplementedError("fetch", _USE_FETCH))

    def fetch_many(
        self,
        record_ids: Iterable[RecordID],
        handler: CompletionHandler,
        desired_keys: list[str] | None = None,
    ) -> None:
        handler(None, OperationNotImplementedError("fetch_many", _USE_FETCH))

    def perform_query(self, query: Query, handler: CompletionHandler, zone_name: str | None = None) -> None:
        handler(None, OperationNotImplementedError("perform_query", _USE_QUERY))

    def fetch_query(
        self,
        query: Query,
        handler: CompletionHandler,
        *,
        zone_name: str | None = None,
        desired_keys: list[str] | None = None,
        results_limit: int = 0,
    ) -> None:
        handler(None, OperationNotImplementedError("fetch_query", _USE_QUERY))

    def __repr__(self) -> str:
        return f"MockDatabase(scope={self.scope.value!r}, records={len(self.store)})"
