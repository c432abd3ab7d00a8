"""Fault injection: the shared fault configuration and the error taxonomy."""

from mockcloud.faults.registry import FaultConfiguration, shared_faults
from mockcloud.faults.taxonomy import (
    CATEGORY_MESSAGES,
    FAULT_CATEGORIES,
    SIMULATED_FAULT_CODES,
    as_service_error,
    category_for,
    make_account_status_error,
    make_error,
    make_partial_failure,
    message_for,
    partial_errors,
    random_fault_code,
    unwrap_error,
)

__all__ = [
    "CATEGORY_MESSAGES",
    "FAULT_CATEGORIES",
    "SIMULATED_FAULT_CODES",
    "FaultConfiguration",
    "as_service_error",
    "category_for",
    "make_account_status_error",
    "make_error",
    "make_partial_failure",
    "message_for",
    "partial_errors",
    "random_fault_code",
    "shared_faults",
    "unwrap_error",
]
