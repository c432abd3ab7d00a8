# tests/unit/contracts/test_results.py
"""Tests for Result and ServiceError contracts."""

import pytest

from mockcloud.contracts import (
    PARTIAL_ERRORS_BY_ITEM_ID_KEY,
    SERVICE_ERROR_DOMAIN,
    FaultCategory,
    FaultCode,
    OperationNotImplementedError,
    Result,
    ServiceError,
)


class TestResult:
    """Result factories and invariants."""

    def test_success_carries_value(self) -> None:
        result = Result.success(3)
        assert result.status == "success"
        assert result.is_success
        assert result.value == 3
        assert result.error is None

    def test_success_without_value(self) -> None:
        result: Result[None] = Result.success()
        assert result.is_success
        assert result.value is None

    def test_failure_carries_error(self) -> None:
        error = ServiceError(SERVICE_ERROR_DOMAIN, FaultCode.ZONE_BUSY)
        result: Result[int] = Result.failure(error)
        assert result.status == "failure"
        assert not result.is_success
        assert result.error is error

    def test_failure_requires_error(self) -> None:
        with pytest.raises(ValueError, match="requires an error"):
            Result(status="failure")

    def test_success_rejects_error(self) -> None:
        error = ServiceError(SERVICE_ERROR_DOMAIN, 1)
        with pytest.raises(ValueError, match="cannot carry an error"):
            Result(status="success", error=error)

    def test_unwrap_raises_error(self) -> None:
        error = ServiceError(SERVICE_ERROR_DOMAIN, FaultCode.QUOTA_EXCEEDED)
        with pytest.raises(ServiceError) as exc_info:
            Result.failure(error).unwrap()
        assert exc_info.value is error

    def test_unwrap_returns_value(self) -> None:
        assert Result.success("x").unwrap() == "x"


class TestServiceError:
    """ServiceError shape."""

    def test_fields(self) -> None:
        error = ServiceError(SERVICE_ERROR_DOMAIN, 4, {"k": "v"}, "boom")
        assert error.domain == SERVICE_ERROR_DOMAIN
        assert error.code == 4
        assert error.metadata == {"k": "v"}
        assert str(error) == "boom"

    def test_default_message_names_domain_and_code(self) -> None:
        assert str(ServiceError("D", 9)) == "D error 9"

    def test_category_for_known_code(self) -> None:
        assert ServiceError(SERVICE_ERROR_DOMAIN, FaultCode.NETWORK_FAILURE).category is FaultCategory.NETWORK

    def test_category_for_unknown_code(self) -> None:
        assert ServiceError(SERVICE_ERROR_DOMAIN, 999).category is None

    def test_partial_errors_absent(self) -> None:
        assert ServiceError(SERVICE_ERROR_DOMAIN, 1).partial_errors is None

    def test_partial_errors_present(self) -> None:
        inner = ServiceError(SERVICE_ERROR_DOMAIN, 7)
        error = ServiceError("X", 2, {PARTIAL_ERRORS_BY_ITEM_ID_KEY: {"r1": inner}})
        assert error.partial_errors == {"r1": inner}

    def test_equality_by_domain_code_metadata(self) -> None:
        assert ServiceError("D", 1, {"a": 1}) == ServiceError("D", 1, {"a": 1}, "other message")
        assert ServiceError("D", 1) != ServiceError("D", 2)


class TestOperationNotImplementedError:
    def test_message_includes_recovery(self) -> None:
        error = OperationNotImplementedError("save", "Use ModifyRecordsOperation.")
        assert error.operation_name == "save"
        assert error.recovery_message == "Use ModifyRecordsOperation."
        assert "Use ModifyRecordsOperation." in str(error)
