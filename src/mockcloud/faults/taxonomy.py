# src/mockcloud/faults/taxonomy.py
"""Fault code taxonomy: categories, canned messages and error wrapping.

Every fault the mock can deliver is a ServiceError. This module decides which
category a code belongs to, what message the user sees for it, and how
arbitrary exceptions get re-domained into the service's error shape.
"""

import random as random_module
from collections.abc import Mapping
from typing import Any

from mockcloud.contracts.enums import AccountStatus, FaultCategory, FaultCode
from mockcloud.contracts.errors import (
    ACCOUNT_STATUS_DOMAIN,
    MOCK_ERROR_DOMAIN,
    PARTIAL_ERRORS_BY_ITEM_ID_KEY,
    SERVICE_ERROR_DOMAIN,
    ServiceError,
)

# Fault code -> category.
# Exported for external consumers (e.g., test assertions).
FAULT_CATEGORIES: dict[FaultCode, FaultCategory] = {
    FaultCode.INTERNAL_ERROR: FaultCategory.FATAL,
    FaultCode.BAD_CONTAINER: FaultCategory.FATAL,
    FaultCode.BAD_DATABASE: FaultCategory.FATAL,
    FaultCode.INVALID_ARGUMENTS: FaultCategory.FATAL,
    FaultCode.OPERATION_CANCELLED: FaultCategory.FATAL,
    FaultCode.NETWORK_FAILURE: FaultCategory.NETWORK,
    FaultCode.NETWORK_UNAVAILABLE: FaultCategory.NETWORK,
    FaultCode.SERVER_RESPONSE_LOST: FaultCategory.NETWORK,
    FaultCode.SERVICE_UNAVAILABLE: FaultCategory.NETWORK,
    FaultCode.NOT_AUTHENTICATED: FaultCategory.ACCOUNT,
    FaultCode.ACCOUNT_TEMPORARILY_UNAVAILABLE: FaultCategory.ACCOUNT,
    FaultCode.PERMISSION_FAILURE: FaultCategory.ACCOUNT,
    FaultCode.REQUEST_RATE_LIMITED: FaultCategory.RATE,
    FaultCode.QUOTA_EXCEEDED: FaultCategory.QUOTA,
    FaultCode.ZONE_BUSY: FaultCategory.ZONE,
    FaultCode.ZONE_NOT_FOUND: FaultCategory.ZONE,
    FaultCode.USER_DELETED_ZONE: FaultCategory.ZONE,
    FaultCode.PARTIAL_FAILURE: FaultCategory.PARTIAL,
}

CATEGORY_MESSAGES: dict[FaultCategory, str] = {
    FaultCategory.FATAL: "An unrecoverable error occurred with the cloud transaction.",
    FaultCategory.NETWORK: (
        "There was a problem communicating with the cloud service; "
        "please check your network connection and try again."
    ),
    FaultCategory.ACCOUNT: "There was a problem with your account; please check that you're logged in.",
    FaultCategory.RATE: "You've hit the rate limit; please wait a moment then try again.",
    FaultCategory.QUOTA: "You've exceeded your quota; please clear up some space then try again.",
    FaultCategory.ZONE: "There was an issue accessing the specified zone.",
    FaultCategory.PARTIAL: "Some records in the operation failed.",
}

UNKNOWN_FAULT_MESSAGE = "An unknown error occurred with the cloud transaction."

# Codes drawn from when a per-record fault is synthesized.
# PARTIAL_FAILURE and OPERATION_CANCELLED are never drawn.
SIMULATED_FAULT_CODES: tuple[FaultCode, ...] = (
    FaultCode.INTERNAL_ERROR,
    FaultCode.NETWORK_UNAVAILABLE,
    FaultCode.NETWORK_FAILURE,
    FaultCode.BAD_CONTAINER,
    FaultCode.SERVICE_UNAVAILABLE,
    FaultCode.REQUEST_RATE_LIMITED,
    FaultCode.NOT_AUTHENTICATED,
    FaultCode.PERMISSION_FAILURE,
    FaultCode.INVALID_ARGUMENTS,
    FaultCode.ZONE_BUSY,
    FaultCode.BAD_DATABASE,
    FaultCode.QUOTA_EXCEEDED,
    FaultCode.ZONE_NOT_FOUND,
    FaultCode.USER_DELETED_ZONE,
    FaultCode.SERVER_RESPONSE_LOST,
    FaultCode.ACCOUNT_TEMPORARILY_UNAVAILABLE,
)


def _known(code: int) -> FaultCode | None:
    try:
        return FaultCode(code)
    except ValueError:
        return None


def category_for(code: int) -> FaultCategory | None:
    """Category of ``code``, or None when the code is not one the mock knows."""
    known = _known(code)
    if known is None:
        return None
    return FAULT_CATEGORIES[known]


def message_for(code: int) -> str:
    """User-facing message for ``code``; unknown codes get a generic message."""
    category = category_for(code)
    if category is None:
        return UNKNOWN_FAULT_MESSAGE
    return CATEGORY_MESSAGES[category]


def random_fault_code(rng: random_module.Random) -> FaultCode:
    """Pick one of the simulated codes uniformly."""
    return rng.choice(SIMULATED_FAULT_CODES)


def make_error(code: int, metadata: Mapping[str, Any] | None = None) -> ServiceError:
    """Wrap ``code`` as a service-domain error with its canned message."""
    return ServiceError(SERVICE_ERROR_DOMAIN, code, metadata, message_for(code))


def unwrap_error(error: ServiceError) -> tuple[int, dict[str, Any]]:
    """Inverse of make_error(): the code and metadata of ``error``."""
    return error.code, dict(error.metadata)


def partial_errors(error: BaseException | None) -> dict[str, ServiceError] | None:
    """Per-record errors carried by a partial failure, keyed by record name.

    Returns None for anything that is not a ServiceError carrying the
    partial-errors payload.
    """
    if not isinstance(error, ServiceError):
        return None
    return error.partial_errors


def make_partial_failure(errors_by_name: Mapping[str, ServiceError]) -> ServiceError:
    """Aggregate per-record errors into the terminal partial-failure error.

    An empty mapping still yields a partial failure. Keys are bare record
    names, so failing records that share a name across zones collapse into
    one entry holding the last error reported for that name.
    """
    return ServiceError(
        MOCK_ERROR_DOMAIN,
        FaultCode.PARTIAL_FAILURE,
        {PARTIAL_ERRORS_BY_ITEM_ID_KEY: dict(errors_by_name)},
        CATEGORY_MESSAGES[FaultCategory.PARTIAL],
    )


def as_service_error(
    error: BaseException,
    code: int | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ServiceError:
    """Re-domain any exception into the service error domain.

    Args:
        error: Source exception; a ServiceError donates its code and metadata
        code: Code to use; codes below 1 (and a missing code on a non-service
            source) become INTERNAL_ERROR
        metadata: Metadata to use; empty falls back to the source's metadata

    Returns:
        A ServiceError in SERVICE_ERROR_DOMAIN
    """
    source_code: int | None = None
    source_metadata: dict[str, Any] = {}
    if isinstance(error, ServiceError):
        source_code, source_metadata = unwrap_error(error)

    resolved = code if code is not None else source_code
    if resolved is None or resolved < 1:
        resolved = FaultCode.INTERNAL_ERROR

    resolved_metadata = dict(metadata) if metadata else source_metadata
    return make_error(resolved, resolved_metadata)


def make_account_status_error(status: AccountStatus) -> ServiceError:
    """Error delivered alongside a non-available account status."""
    return ServiceError(
        ACCOUNT_STATUS_DOMAIN,
        status,
        message=f"Account status is {status.name.lower()}",
    )
