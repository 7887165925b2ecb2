"""Structured errors raised by the Bloom filter service."""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for the service."""

    INVALID_FILTER_PARAMS = "invalid_filter_params"
    UNEXPECTED_SCRIPT_RESULT = "unexpected_script_result"
    SCRIPT_EXECUTION_FAILED = "script_execution_failed"
    BIT_MISSING = "bit_missing"


class AppError(Exception):
    """
    Structured service error.

    Attributes:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert error to a serializable mapping.

        Returns:
            Dictionary with code, message and, when present, details
        """
        payload: dict[str, Any] = {
            "code": self.code.value,
            "title": self.code.value.replace("_", " ").title(),
            "detail": self.message,
        }
        if self.details:
            payload["errors"] = self.details
        return payload


class InvalidFilterParamsError(AppError, ValueError):
    """Error for filter parameters that cannot describe a valid bit array."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FILTER_PARAMS,
            message=f"Invalid filter parameter {name}={value!r}: {reason}",
            details={name: value},
        )


class UnexpectedScriptResultError(AppError):
    """Error when a bitmap script replies with something other than its sentinel."""

    def __init__(self, operation: str, key: str, result: Any) -> None:
        super().__init__(
            code=ErrorCode.UNEXPECTED_SCRIPT_RESULT,
            message=f"Unexpected {operation} script result for key '{key}': {result!r}",
            details={"operation": operation, "key": key, "result": repr(result)},
        )
        self.result = result


class ScriptExecutionError(AppError):
    """Redis raised while running a bitmap script."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.SCRIPT_EXECUTION_FAILED,
            message=f"Script error during {operation} for key '{key}': {reason}",
            details={"operation": operation, "key": key},
        )


class BitMissingError(AppError):
    """A queried bit produced no reply, which is not the same as a zero bit."""

    def __init__(self, key: str) -> None:
        super().__init__(
            code=ErrorCode.BIT_MISSING,
            message=f"Bitmap under key '{key}' returned no reply for a queried bit",
            details={"key": key},
        )
