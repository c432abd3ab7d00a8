"""Error types raised or delivered by the mock.

Two families live here:

- ServiceError and OperationNotImplementedError are *delivered* to callbacks,
  exactly as the remote service would deliver its own errors. They are never
  raised out of ExecutionEngine.execute().
- UnsupportedOperationError, OperationAlreadySubmittedError and the predicate
  errors are programming errors and are *raised* to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mockcloud.contracts.enums import FaultCategory

# Error domains
SERVICE_ERROR_DOMAIN = "CloudErrorDomain"
MOCK_ERROR_DOMAIN = "MockCloudErrorDomain"
ACCOUNT_STATUS_DOMAIN = "AccountStatus"

# Metadata key carrying the per-record errors of a partial failure
PARTIAL_ERRORS_BY_ITEM_ID_KEY = "PartialErrorsByItemIDKey"


class MockCloudError(Exception):
    """Base class for every error the package defines."""


# =============================================================================
# Delivered errors
# =============================================================================


class ServiceError(MockCloudError):
    """An error in the remote service's (domain, code, metadata) shape.

    Attributes:
        domain: Error domain, SERVICE_ERROR_DOMAIN for regular faults
        code: Integer fault code (see FaultCode for the known ones)
        metadata: Free-form payload; partial failures put their per-record
            errors under PARTIAL_ERRORS_BY_ITEM_ID_KEY
        message: Human-readable description
    """

    def __init__(
        self,
        domain: str,
        code: int,
        metadata: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        self.domain = domain
        self.code = int(code)
        self.metadata: dict[str, Any] = dict(metadata or {})
        self.message = message or f"{domain} error {self.code}"
        super().__init__(self.message)

    @property
    def category(self) -> FaultCategory | None:
        """Fault category for service-domain codes, None for unknown codes."""
        from mockcloud.faults.taxonomy import category_for

        return category_for(self.code)

    @property
    def partial_errors(self) -> dict[str, ServiceError] | None:
        """Per-record errors keyed by record name, if this is a partial failure."""
        errors = self.metadata.get(PARTIAL_ERRORS_BY_ITEM_ID_KEY)
        if errors is None:
            return None
        return dict(errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServiceError):
            return NotImplemented
        return (self.domain, self.code, self.metadata) == (other.domain, other.code, other.metadata)

    def __hash__(self) -> int:
        return hash((self.domain, self.code))

    def __repr__(self) -> str:
        return f"ServiceError(domain={self.domain!r}, code={self.code}, message={self.message!r})"


class OperationNotImplementedError(MockCloudError):
    """A convenience API of the real service that the mock does not model.

    Delivered to the completion handler of the stubbed call. The recovery
    message names the operation-based API to use instead.
    """

    def __init__(self, operation_name: str, recovery_message: str) -> None:
        self.operation_name = operation_name
        self.recovery_message = recovery_message
        super().__init__(f"{operation_name} is not implemented by the mock. {recovery_message}")


# =============================================================================
# Raised programming errors
# =============================================================================


class UnsupportedOperationError(MockCloudError, TypeError):
    """Raised when execute() receives something that is not a known operation kind."""


class OperationAlreadySubmittedError(MockCloudError, RuntimeError):
    """Raised when an operation instance is submitted a second time."""


class PredicateSecurityError(MockCloudError):
    """Raised when a predicate expression contains forbidden constructs."""


class PredicateSyntaxError(MockCloudError):
    """Raised when a predicate expression is not valid Python syntax."""


class PredicateEvaluationError(MockCloudError):
    """Raised when a valid predicate fails while evaluating a record.

    Wraps operational errors (KeyError, ZeroDivisionError, TypeError); the
    original exception is chained via __cause__.
    """
