"""Operation outcomes delivered to callbacks.

Result.status uses Literal["success", "failure"], NOT an enum, the same way
callers pattern-match on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from mockcloud.contracts.errors import ServiceError


@dataclass(frozen=True)
class Result[T]:
    """Success value or failure error, never both.

    Use the factory methods rather than the constructor:
        Result.success(record)
        Result.failure(error)
    """

    status: Literal["success", "failure"]
    value: T | None = None
    error: ServiceError | None = None

    def __post_init__(self) -> None:
        if self.status == "failure" and self.error is None:
            raise ValueError("failure Result requires an error")
        if self.status == "success" and self.error is not None:
            raise ValueError("success Result cannot carry an error")

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(status="success", value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> Result[T]:
        return cls(status="failure", error=error)

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    def unwrap(self) -> T | None:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value


@dataclass(frozen=True, slots=True)
class QueryCursor:
    """Continuation marker for a truncated query.

    The mock never produces one; the type exists so query_result handlers
    can be typed the way they are against the real service.
    """

    token: str
