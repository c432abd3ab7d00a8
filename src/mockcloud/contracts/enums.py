"""Codes, scopes and statuses shared across the mock's subsystem boundaries.

Numeric values of FaultCode and AccountStatus mirror the remote service's
own codes so that application code switching on them behaves identically
against the mock.
"""

from enum import IntEnum, StrEnum


class DatabaseScope(StrEnum):
    """Which of a container's three databases a store belongs to."""

    PUBLIC = "public"
    PRIVATE = "private"
    SHARED = "shared"


class SavePolicy(StrEnum):
    """Conflict policy requested by a modify operation.

    Recorded on the operation but not enforced: the mock always upserts.
    """

    IF_SERVER_RECORD_UNCHANGED = "if_server_record_unchanged"
    CHANGED_KEYS = "changed_keys"
    ALL_KEYS = "all_keys"


class AccountStatus(IntEnum):
    """Status of the signed-in user's account."""

    COULD_NOT_DETERMINE = 0
    AVAILABLE = 1
    RESTRICTED = 2
    NO_ACCOUNT = 3
    TEMPORARILY_UNAVAILABLE = 4


class FaultCode(IntEnum):
    """Error codes the remote service reports.

    Only the codes the mock can produce are listed; PARTIAL_FAILURE is never
    synthesized at random, it is reserved for aggregated per-record failures.
    """

    INTERNAL_ERROR = 1
    PARTIAL_FAILURE = 2
    NETWORK_UNAVAILABLE = 3
    NETWORK_FAILURE = 4
    BAD_CONTAINER = 5
    SERVICE_UNAVAILABLE = 6
    REQUEST_RATE_LIMITED = 7
    NOT_AUTHENTICATED = 9
    PERMISSION_FAILURE = 10
    INVALID_ARGUMENTS = 12
    OPERATION_CANCELLED = 20
    ZONE_BUSY = 23
    BAD_DATABASE = 24
    QUOTA_EXCEEDED = 25
    ZONE_NOT_FOUND = 26
    USER_DELETED_ZONE = 28
    SERVER_RESPONSE_LOST = 34
    ACCOUNT_TEMPORARILY_UNAVAILABLE = 36


class FaultCategory(StrEnum):
    """User-facing grouping of fault codes.

    Each category carries one canned message (see faults.taxonomy).
    """

    FATAL = "fatal"
    NETWORK = "network"
    ACCOUNT = "account"
    RATE = "rate"
    QUOTA = "quota"
    ZONE = "zone"
    PARTIAL = "partial"
