# src/mockcloud/engine/executor.py
"""Execution engine: runs operations against a record store.

The engine reproduces the remote service's callback sequencing. For each
operation kind it fires per-item callbacks in submission (or store) order,
then the terminal result callback, then ``completion``.

Faults come from the FaultConfiguration the engine was built with, read once
at the start of every operation:

- failing_record_ids non-empty: modify/fetch end in a partial failure, with
  a freshly synthesized random fault for every failing record touched
- whole_operation_error set (and no failing records): terminal failure
- queries only consult whole_operation_error

Execution is synchronous. Outcomes are only ever reported through callbacks;
execute() raises solely for programming errors (unknown operation kind,
resubmitted operation, invalid predicate).
"""

from __future__ import annotations

import random as random_module
from collections.abc import Callable

from mockcloud.contracts.errors import PredicateEvaluationError, ServiceError, UnsupportedOperationError
from mockcloud.contracts.operations import (
    DatabaseOperation,
    FetchRecordsOperation,
    ModifyRecordsOperation,
    QueryOperation,
)
from mockcloud.contracts.records import Record, RecordID
from mockcloud.contracts.results import QueryCursor, Result
from mockcloud.core.config import DEFAULT_MAX_RESULTS_LIMIT
from mockcloud.core.logging import get_logger
from mockcloud.core.store import RecordStore
from mockcloud.engine.predicates import PredicateParser
from mockcloud.faults.registry import FaultConfiguration, shared_faults
from mockcloud.faults.taxonomy import make_error, make_partial_failure, random_fault_code

logger = get_logger(__name__)


class ExecutionEngine:
    """Dispatches operations to per-kind handlers.

    Usage:
        engine = ExecutionEngine(faults, rng=random.Random(42))
        engine.execute(operation, store)
    """

    def __init__(
        self,
        faults: FaultConfiguration | None = None,
        *,
        rng: random_module.Random | None = None,
        max_results_limit: int = DEFAULT_MAX_RESULTS_LIMIT,
    ) -> None:
        """Initialize the engine.

        Args:
            faults: Fault configuration to consult (default: shared_faults())
            rng: Random instance for fault codes and progress fractions.
                 Inject a seeded random.Random() for deterministic testing.
            max_results_limit: Cap on query results; a limit of 0 means this cap
        """
        if max_results_limit < 1:
            raise ValueError(f"max_results_limit must be positive, got {max_results_limit}")
        self.faults = faults if faults is not None else shared_faults()
        self._rng = rng if rng is not None else random_module.Random()
        self.max_results_limit = max_results_limit

    def execute(self, operation: DatabaseOperation, store: RecordStore) -> None:
        """Run ``operation`` against ``store``, firing its callbacks.

        Raises:
            UnsupportedOperationError: If ``operation`` is not a known kind
            OperationAlreadySubmittedError: If ``operation`` already ran
            PredicateSyntaxError: If a query's expression does not parse
            PredicateSecurityError: If a query's expression uses forbidden constructs
        """
        match operation:
            case ModifyRecordsOperation():
                self._submit(operation, store)
                self._execute_modify(operation, store)
            case FetchRecordsOperation():
                self._submit(operation, store)
                self._execute_fetch(operation, store)
            case QueryOperation():
                matches = self._query_matches(operation, store)
                self._submit(operation, store)
                self._execute_query(operation, store, matches)
            case _:
                raise UnsupportedOperationError(f"Cannot execute {type(operation).__name__}: not a database operation")

        if operation.completion is not None:
            operation.completion()

    def effective_limit(self, results_limit: int) -> int:
        """0 or anything above the cap becomes the cap."""
        if results_limit <= 0 or results_limit > self.max_results_limit:
            return self.max_results_limit
        return results_limit

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _execute_modify(self, operation: ModifyRecordsOperation, store: RecordStore) -> None:
        failing = self.faults.failing_record_ids or frozenset()
        whole_error = self.faults.whole_operation_error
        partial: dict[str, ServiceError] = {}

        store.add(operation.records_to_save)

        for record in operation.records_to_save:
            if record.record_id in failing:
                error = self._synthesize_fault(record.record_id, operation)
                partial[record.record_name] = error
                if operation.per_record_progress is not None:
                    operation.per_record_progress(record, self._incomplete_fraction())
                if operation.per_record_save is not None:
                    operation.per_record_save(record.record_id, Result.failure(error))
            else:
                if operation.per_record_progress is not None:
                    operation.per_record_progress(record, 1.0)
                if operation.per_record_save is not None:
                    operation.per_record_save(record.record_id, Result.success(record))

        deleted = 0
        for record_id in operation.record_ids_to_delete:
            if record_id not in store:
                continue
            deleted += 1
            if record_id in failing:
                error = self._synthesize_fault(record_id, operation)
                partial[record_id.record_name] = error
                if operation.per_record_delete is not None:
                    operation.per_record_delete(record_id, Result.failure(error))
            elif operation.per_record_delete is not None:
                operation.per_record_delete(record_id, Result.success())

        store.remove(operation.record_ids_to_delete)

        result = self._terminal_result(failing, whole_error, partial)
        logger.debug(
            "operation_executed",
            kind="modify",
            name=operation.name,
            scope=store.scope.value,
            saved=len(operation.records_to_save),
            deleted=deleted,
            failed=len(partial),
            outcome=result.status,
        )
        if operation.modify_records_result is not None:
            operation.modify_records_result(result)

    def _execute_fetch(self, operation: FetchRecordsOperation, store: RecordStore) -> None:
        records = store.get_matching_ids(operation.record_ids)
        failing = self.faults.failing_record_ids or frozenset()
        whole_error = self.faults.whole_operation_error
        partial: dict[str, ServiceError] = {}

        for stored in records:
            record = _reported(stored, operation.desired_keys)
            if record.record_id in failing:
                error = self._synthesize_fault(record.record_id, operation)
                partial[record.record_name] = error
                if operation.per_record_progress is not None:
                    operation.per_record_progress(record.record_id, self._incomplete_fraction())
                if operation.per_record_result is not None:
                    operation.per_record_result(record.record_id, Result.failure(error))
            else:
                if operation.per_record_progress is not None:
                    operation.per_record_progress(record.record_id, 1.0)
                if operation.per_record_result is not None:
                    operation.per_record_result(record.record_id, Result.success(record))

        result = self._terminal_result(failing, whole_error, partial)
        logger.debug(
            "operation_executed",
            kind="fetch",
            name=operation.name,
            scope=store.scope.value,
            requested=len(operation.record_ids),
            matched=len(records),
            failed=len(partial),
            outcome=result.status,
        )
        if operation.fetch_records_result is not None:
            operation.fetch_records_result(result)

    def _execute_query(
        self,
        operation: QueryOperation,
        store: RecordStore,
        matches: list[Record],
    ) -> None:
        limit = self.effective_limit(operation.results_limit)
        truncated = len(matches) > limit
        matches = matches[:limit]

        # No continuation cursor is produced, even when results were truncated.
        whole_error = self.faults.whole_operation_error
        if whole_error is not None:
            for record in matches:
                if operation.record_matched is not None:
                    operation.record_matched(record.record_id, Result.failure(whole_error))
            result: Result[QueryCursor | None] = Result.failure(whole_error)
        else:
            for record in matches:
                if operation.record_matched is not None:
                    operation.record_matched(record.record_id, Result.success(record))
            result = Result.success(None)

        logger.debug(
            "operation_executed",
            kind="query",
            name=operation.name,
            scope=store.scope.value,
            matched=len(matches),
            limit=limit,
            truncated=truncated,
            outcome=result.status,
        )
        if operation.query_result is not None:
            operation.query_result(result)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _submit(self, operation: DatabaseOperation, store: RecordStore) -> None:
        operation.mark_submitted()
        store.last_executed = operation

    def _query_predicate(self, operation: QueryOperation) -> Callable[[Record], bool] | None:
        """Resolve the query's predicate; a missing query matches nothing."""
        if operation.query is None:
            return None
        predicate = operation.query.predicate
        if isinstance(predicate, str):
            return PredicateParser(predicate)
        return predicate

    def _query_matches(self, operation: QueryOperation, store: RecordStore) -> list[Record]:
        """Records the query selects, as reported copies, in store order.

        Runs before submission. A record whose fields the predicate cannot
        evaluate (missing, None, or of the wrong type) does not match.
        """
        predicate = self._query_predicate(operation)
        if predicate is None:
            return []
        matches: list[Record] = []
        for stored in store.get():
            try:
                matched = predicate(stored)
            except (PredicateEvaluationError, KeyError, TypeError) as e:
                logger.debug("query_record_skipped", record_name=stored.record_name, reason=str(e))
                continue
            if matched:
                matches.append(_reported(stored, operation.desired_keys))
        return matches

    def _synthesize_fault(self, record_id: RecordID, operation: DatabaseOperation) -> ServiceError:
        code = random_fault_code(self._rng)
        logger.debug(
            "record_fault_injected",
            record_name=record_id.record_name,
            code=int(code),
            fault=code.name,
            operation=type(operation).__name__,
        )
        return make_error(code)

    def _incomplete_fraction(self) -> float:
        """Progress reported for a failing record, in [0.0, 1.0)."""
        return self._rng.random()

    @staticmethod
    def _terminal_result(
        failing: frozenset[RecordID],
        whole_error: ServiceError | None,
        partial: dict[str, ServiceError],
    ) -> Result[None]:
        """Partial failure when any record is configured to fail, else whole-operation outcome."""
        if failing:
            return Result.failure(make_partial_failure(partial))
        if whole_error is not None:
            return Result.failure(whole_error)
        return Result.success()


def _reported(stored: Record, desired_keys: list[str] | None) -> Record:
    """Copy handed to callbacks; mutating it never reaches the store."""
    if desired_keys is not None:
        return stored.project(desired_keys)
    return stored.copy()
