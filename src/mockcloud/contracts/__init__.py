"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine/
faults at import time.

Import patterns:
    from mockcloud.contracts import Record, RecordID, FetchRecordsOperation
"""

from mockcloud.contracts.enums import (
    AccountStatus,
    DatabaseScope,
    FaultCategory,
    FaultCode,
    SavePolicy,
)
from mockcloud.contracts.errors import (
    ACCOUNT_STATUS_DOMAIN,
    MOCK_ERROR_DOMAIN,
    PARTIAL_ERRORS_BY_ITEM_ID_KEY,
    SERVICE_ERROR_DOMAIN,
    MockCloudError,
    OperationAlreadySubmittedError,
    OperationNotImplementedError,
    PredicateEvaluationError,
    PredicateSecurityError,
    PredicateSyntaxError,
    ServiceError,
    UnsupportedOperationError,
)
from mockcloud.contracts.operations import (
    MATCH_ALL,
    BaseOperation,
    DatabaseOperation,
    FetchRecordsOperation,
    ModifyRecordsOperation,
    Predicate,
    Query,
    QueryOperation,
)
from mockcloud.contracts.records import DEFAULT_ZONE_NAME, Record, RecordID
from mockcloud.contracts.results import QueryCursor, Result

__all__ = [
    "ACCOUNT_STATUS_DOMAIN",
    "DEFAULT_ZONE_NAME",
    "MATCH_ALL",
    "MOCK_ERROR_DOMAIN",
    "PARTIAL_ERRORS_BY_ITEM_ID_KEY",
    "SERVICE_ERROR_DOMAIN",
    "AccountStatus",
    "BaseOperation",
    "DatabaseOperation",
    "DatabaseScope",
    "FaultCategory",
    "FaultCode",
    "FetchRecordsOperation",
    "MockCloudError",
    "ModifyRecordsOperation",
    "OperationAlreadySubmittedError",
    "OperationNotImplementedError",
    "Predicate",
    "PredicateEvaluationError",
    "PredicateSecurityError",
    "PredicateSyntaxError",
    "Query",
    "QueryCursor",
    "QueryOperation",
    "Record",
    "RecordID",
    "Result",
    "SavePolicy",
    "ServiceError",
    "UnsupportedOperationError",
]
