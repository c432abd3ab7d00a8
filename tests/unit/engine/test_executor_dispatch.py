# tests/unit/engine/test_executor_dispatch.py
"""Tests for ExecutionEngine dispatch, submission and shared configuration."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from mockcloud.contracts import (
    BaseOperation,
    FetchRecordsOperation,
    ModifyRecordsOperation,
    OperationAlreadySubmittedError,
    Query,
    QueryOperation,
    Record,
    UnsupportedOperationError,
)
from mockcloud.core.store import RecordStore
from mockcloud.engine import ExecutionEngine
from mockcloud.faults import FaultConfiguration, shared_faults


@dataclass
class _RenameZoneOperation(BaseOperation):
    """An operation kind the engine does not know."""

    new_name: str = "z"


class TestDispatch:
    def test_unknown_kind_raises_before_side_effects(self) -> None:
        completions: list[str] = []
        store = RecordStore()
        op = _RenameZoneOperation(completion=lambda: completions.append("done"))

        with pytest.raises(UnsupportedOperationError, match="_RenameZoneOperation"):
            ExecutionEngine(FaultConfiguration()).execute(op, store)  # type: ignore[arg-type]

        assert completions == []
        assert store.last_executed is None
        assert not op.is_submitted

    def test_unsupported_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            ExecutionEngine(FaultConfiguration()).execute(None, RecordStore())  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "operation",
        [
            ModifyRecordsOperation([Record.named("a", "Item")]),
            FetchRecordsOperation(),
            QueryOperation(Query("Item")),
        ],
        ids=["modify", "fetch", "query"],
    )
    def test_each_kind_runs_completion_once(self, operation: ModifyRecordsOperation | FetchRecordsOperation | QueryOperation) -> None:
        calls: list[int] = []
        operation.completion = lambda: calls.append(1)
        store = RecordStore()

        ExecutionEngine(FaultConfiguration()).execute(operation, store)

        assert calls == [1]
        assert store.last_executed is operation

    def test_resubmission_raises_without_running(self) -> None:
        engine = ExecutionEngine(FaultConfiguration())
        store = RecordStore()
        calls: list[int] = []
        op = ModifyRecordsOperation([Record.named("a", "Item")], completion=lambda: calls.append(1))
        engine.execute(op, store)
        store.reset()

        with pytest.raises(OperationAlreadySubmittedError):
            engine.execute(op, store)
        assert calls == [1]
        assert len(store) == 0


class TestFaultSource:
    def test_defaults_to_shared_faults(self) -> None:
        assert ExecutionEngine().faults is shared_faults()

    def test_faults_read_at_call_time(self) -> None:
        """Changing the configuration between operations affects the next one."""
        faults = FaultConfiguration()
        engine = ExecutionEngine(faults)
        store = RecordStore()
        outcomes: list[bool] = []

        engine.execute(FetchRecordsOperation(fetch_records_result=lambda r: outcomes.append(r.is_success)), store)
        faults.fail_operation(4)
        engine.execute(FetchRecordsOperation(fetch_records_result=lambda r: outcomes.append(r.is_success)), store)
        faults.reset()
        engine.execute(FetchRecordsOperation(fetch_records_result=lambda r: outcomes.append(r.is_success)), store)

        assert outcomes == [True, False, True]


class TestQuerySubmissionOrder:
    def test_unexpected_predicate_error_leaves_operation_unsubmitted(self) -> None:
        """Matching runs before submission, so a crash in a callable leaves nothing half-executed."""

        def explode(record: Record) -> bool:
            raise ValueError("bad predicate")

        store = RecordStore()
        store.add([Record.named("a", "Item")])
        calls: list[int] = []
        op = QueryOperation(Query("Item", explode), completion=lambda: calls.append(1))

        with pytest.raises(ValueError, match="bad predicate"):
            ExecutionEngine(FaultConfiguration()).execute(op, store)

        assert not op.is_submitted
        assert store.last_executed is None
        assert calls == []

    def test_engine_keeps_no_per_expression_state(self) -> None:
        engine = ExecutionEngine(FaultConfiguration())
        store = RecordStore()
        store.add([Record.named("a", "Item", n=1)])
        before = dict(vars(engine))

        for i in range(20):
            engine.execute(QueryOperation(Query("Item", f"record['n'] == {i}")), store)

        assert vars(engine) == before
