# src/mockcloud/__init__.py
"""mockcloud: in-memory stand-in for a remote record-storage service.

Tests build a MockContainer, seed its databases, configure faults, and
submit operations whose callbacks fire synchronously, exactly in the order
the real service would fire them.
"""

from mockcloud.contracts import (
    AccountStatus,
    DatabaseScope,
    FaultCategory,
    FaultCode,
    FetchRecordsOperation,
    ModifyRecordsOperation,
    Query,
    QueryCursor,
    QueryOperation,
    Record,
    RecordID,
    Result,
    SavePolicy,
    ServiceError,
)
from mockcloud.core.config import MockCloudSettings, load_settings
from mockcloud.core.container import MockContainer
from mockcloud.core.database import MockDatabase
from mockcloud.core.store import RecordStore
from mockcloud.engine import ExecutionEngine, PredicateParser
from mockcloud.faults import FaultConfiguration, shared_faults

__version__ = "0.1.0"

__all__ = [
    "AccountStatus",
    "DatabaseScope",
    "ExecutionEngine",
    "FaultCategory",
    "FaultCode",
    "FaultConfiguration",
    "FetchRecordsOperation",
    "MockCloudSettings",
    "MockContainer",
    "MockDatabase",
    "ModifyRecordsOperation",
    "PredicateParser",
    "Query",
    "QueryCursor",
    "QueryOperation",
    "Record",
    "RecordID",
    "RecordStore",
    "Result",
    "SavePolicy",
    "ServiceError",
    "__version__",
    "load_settings",
]
