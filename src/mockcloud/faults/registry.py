# src/mockcloud/faults/registry.py
"""Fault configuration shared by a container, its databases and its engine.

The configuration is read by the engine at the start of every operation and
never modified by execution. A test sets faults, runs operations, inspects
callbacks, and calls reset() (or builds a fresh container) when done.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from mockcloud.contracts.enums import FaultCode
from mockcloud.contracts.errors import ServiceError
from mockcloud.contracts.records import RecordID
from mockcloud.core.logging import get_logger
from mockcloud.faults.taxonomy import make_error

if TYPE_CHECKING:
    from mockcloud.core.config import MockCloudSettings

logger = get_logger(__name__)


class FaultConfiguration:
    """Whole-operation error plus the set of records that fail individually.

    A non-empty ``failing_record_ids`` makes modify and fetch operations end
    in a partial failure, even when ``whole_operation_error`` is also set.
    Queries only consult ``whole_operation_error``.

    Usage:
        faults = FaultConfiguration()
        faults.fail_operation(FaultCode.NETWORK_FAILURE)
        faults.fail_records(RecordID("r1"))
    """

    def __init__(
        self,
        whole_operation_error: ServiceError | None = None,
        failing_record_ids: Iterable[RecordID] | None = None,
    ) -> None:
        self.whole_operation_error = whole_operation_error
        self._failing_record_ids: frozenset[RecordID] | None = None
        self.failing_record_ids = failing_record_ids

    @property
    def failing_record_ids(self) -> frozenset[RecordID] | None:
        return self._failing_record_ids

    @failing_record_ids.setter
    def failing_record_ids(self, value: Iterable[RecordID] | None) -> None:
        self._failing_record_ids = None if value is None else frozenset(value)

    @property
    def is_clean(self) -> bool:
        """True when no fault of either kind is configured."""
        return self.whole_operation_error is None and not self._failing_record_ids

    def fail_operation(self, code: int | ServiceError) -> ServiceError:
        """Make every subsequent operation fail as a whole.

        Args:
            code: A fault code (wrapped via make_error) or a ready ServiceError

        Returns:
            The error that will be delivered
        """
        error = code if isinstance(code, ServiceError) else make_error(code)
        self.whole_operation_error = error
        logger.debug("whole_operation_fault_set", code=error.code, domain=error.domain)
        return error

    def fail_records(self, *record_ids: RecordID) -> None:
        """Add records to the failing set."""
        current = self._failing_record_ids or frozenset()
        self._failing_record_ids = current | frozenset(record_ids)
        logger.debug("record_faults_set", record_names=sorted(r.record_name for r in self._failing_record_ids))

    def is_failing(self, record_id: RecordID) -> bool:
        return self._failing_record_ids is not None and record_id in self._failing_record_ids

    def reset(self) -> None:
        """Clear both fault slots."""
        self.whole_operation_error = None
        self._failing_record_ids = None

    def apply_settings(self, settings: MockCloudSettings) -> None:
        """Replace the current faults with the ones described by ``settings``."""
        self.reset()
        fault_settings = settings.faults
        if fault_settings.whole_operation_error is not None:
            self.whole_operation_error = make_error(FaultCode(fault_settings.whole_operation_error))
        if fault_settings.failing_record_names:
            self.failing_record_ids = [RecordID(name) for name in fault_settings.failing_record_names]

    @classmethod
    def from_settings(cls, settings: MockCloudSettings) -> FaultConfiguration:
        faults = cls()
        faults.apply_settings(settings)
        return faults

    def __repr__(self) -> str:
        failing = None if self._failing_record_ids is None else sorted(r.record_name for r in self._failing_record_ids)
        return f"FaultConfiguration(whole_operation_error={self.whole_operation_error!r}, failing_record_ids={failing!r})"


_shared = FaultConfiguration()


def shared_faults() -> FaultConfiguration:
    """The process-wide configuration used by containers built without one."""
    return _shared
