"""Operation descriptors submitted to a database.

Operations are a closed set: ModifyRecordsOperation, FetchRecordsOperation
and QueryOperation. Each one carries its own inputs and callback slots;
unset slots are simply skipped. ``completion`` always fires last.

Callback signatures follow the remote service:

    ModifyRecordsOperation
        per_record_progress(record, fraction)
        per_record_save(record_id, Result[Record])
        per_record_delete(record_id, Result[None])
        modify_records_result(Result[None])
    FetchRecordsOperation
        per_record_progress(record_id, fraction)
        per_record_result(record_id, Result[Record])
        fetch_records_result(Result[None])
    QueryOperation
        record_matched(record_id, Result[Record])
        query_result(Result[QueryCursor | None])
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from mockcloud.contracts.enums import SavePolicy
from mockcloud.contracts.errors import OperationAlreadySubmittedError
from mockcloud.contracts.records import Record, RecordID
from mockcloud.contracts.results import QueryCursor, Result

type Predicate = str | Callable[[Record], bool]

# Query predicate that matches every record
MATCH_ALL = "True"


@dataclass(kw_only=True)
class BaseOperation:
    """Fields shared by every operation kind."""

    name: str | None = None
    completion: Callable[[], None] | None = None
    _submitted: bool = field(default=False, init=False, repr=False)

    @property
    def is_submitted(self) -> bool:
        return self._submitted

    def mark_submitted(self) -> None:
        """Flag the operation as handed to an engine.

        Raises:
            OperationAlreadySubmittedError: If it was already submitted
        """
        if self._submitted:
            label = self.name or type(self).__name__
            raise OperationAlreadySubmittedError(f"Operation {label!r} has already been submitted")
        self._submitted = True


@dataclass
class ModifyRecordsOperation(BaseOperation):
    """Save and delete records in one operation."""

    records_to_save: list[Record] = field(default_factory=list)
    record_ids_to_delete: list[RecordID] = field(default_factory=list)
    save_policy: SavePolicy = SavePolicy.IF_SERVER_RECORD_UNCHANGED

    per_record_progress: Callable[[Record, float], None] | None = None
    per_record_save: Callable[[RecordID, Result[Record]], None] | None = None
    per_record_delete: Callable[[RecordID, Result[None]], None] | None = None
    modify_records_result: Callable[[Result[None]], None] | None = None


@dataclass
class FetchRecordsOperation(BaseOperation):
    """Fetch records by ID, optionally limited to some fields."""

    record_ids: list[RecordID] = field(default_factory=list)
    desired_keys: list[str] | None = None

    per_record_progress: Callable[[RecordID, float], None] | None = None
    per_record_result: Callable[[RecordID, Result[Record]], None] | None = None
    fetch_records_result: Callable[[Result[None]], None] | None = None


@dataclass(frozen=True)
class Query:
    """A record type plus a predicate over records.

    The predicate is either an expression string (see engine.predicates) or
    any callable taking a Record and returning a bool. The record type is
    carried for the caller's benefit; matching is decided by the predicate
    alone, so filter on ``record_type`` inside it when needed.
    """

    record_type: str
    predicate: Predicate = MATCH_ALL


@dataclass
class QueryOperation(BaseOperation):
    """Run a query; ``results_limit`` of 0 means the engine's maximum."""

    query: Query | None = None
    desired_keys: list[str] | None = None
    results_limit: int = 0
    cursor: QueryCursor | None = None

    record_matched: Callable[[RecordID, Result[Record]], None] | None = None
    query_result: Callable[[Result[QueryCursor | None]], None] | None = None


type DatabaseOperation = ModifyRecordsOperation | FetchRecordsOperation | QueryOperation
