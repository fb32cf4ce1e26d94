"""Domain exceptions and error classification utilities."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class TaskNotFoundError(KeyError):
    """Raised when a task id is not present in the collection."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class WeatherError(Exception):
    """Base class for weather lookup failures."""


class InvalidCityError(WeatherError):
    """The weather service does not know the requested city."""

    def __init__(self, city: str) -> None:
        super().__init__(f"City not found: {city}")
        self.city = city


class WeatherServiceError(WeatherError):
    """The weather service could not answer (network, credentials, upstream failure)."""


class StorageError(RuntimeError):
    """Raised when the local storage backend fails."""


class ErrorCategory(Enum):
    """Categories of errors surfaced by the task list."""

    TASK_NOT_FOUND = "task_not_found"
    INVALID_INPUT = "invalid_input"
    INVALID_CITY = "invalid_city"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    AUTHENTICATION_FAILED = "authentication_failed"
    NETWORK_ERROR = "network_error"
    STORAGE_ERROR = "storage_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Task errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"

    # Weather errors
    ERR_INVALID_CITY = "ERR_INVALID_CITY"
    ERR_RATE_LIMIT_EXCEEDED = "ERR_RATE_LIMIT_EXCEEDED"
    ERR_AUTHENTICATION_FAILED = "ERR_AUTHENTICATION_FAILED"
    ERR_NETWORK_ERROR = "ERR_NETWORK_ERROR"

    # Storage errors
    ERR_STORAGE = "ERR_STORAGE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_ERROR_PATTERNS: dict[
    Literal["rate_limit", "auth", "network"],
    dict[str, list[str] | set[str]],
] = {
    "rate_limit": {
        "phrases": [
            "rate limit",
            "too many requests",
            "429",
        ],
        "exception_types": set(),
    },
    "auth": {
        "phrases": [
            "invalid api key",
            "unauthorized",
            "credential not configured",
            "api key",
            "401",
        ],
        "exception_types": {"PermissionError"},
    },
    "network": {
        "phrases": [
            "connection",
            "timeout",
            "timed out",
            "network",
            "503",
            "502",
            "504",
            "unreachable",
        ],
        "exception_types": {"ConnectionError", "TimeoutError", "ConnectError", "ReadTimeout"},
    },
}


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["rate_limit", "auth", "network"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_weather_error(exception: Exception) -> tuple[ErrorCategory, str]:
    """Classify a weather lookup failure and return a sanitized message.

    The message never contains the upstream error text.

    Args:
        exception: The exception raised while fetching weather

    Returns:
        Tuple of (ErrorCategory, user_friendly_message)
    """
    if isinstance(exception, InvalidCityError):
        return ErrorCategory.INVALID_CITY, "City not found."

    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="rate_limit"):
        return ErrorCategory.RATE_LIMIT_EXCEEDED, "Weather service is busy. Please try again later."

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="auth"):
        return ErrorCategory.AUTHENTICATION_FAILED, "Weather service is not configured."

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="network"):
        return ErrorCategory.NETWORK_ERROR, "Weather service is unreachable."

    return ErrorCategory.UNKNOWN, "Weather is unavailable right now."


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, TaskNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_TASK_NOT_FOUND,
            message="I couldn't find that task.",
            suggestion="Reload the task list and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, ValueError | IndexError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_INPUT,
            message=str(exception) or "Invalid input.",
            suggestion="Check the request and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, InvalidCityError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_CITY,
            message="Invalid city name!",
            suggestion="Update your city in your profile.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, StorageError):
        return ErrorResponse(
            code=ErrorCode.ERR_STORAGE,
            message="Local storage is unavailable.",
            suggestion="Your tasks are kept in memory until storage recovers.",
            severity=ErrorSeverity.HIGH,
        )

    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="rate_limit"):
        return ErrorResponse(
            code=ErrorCode.ERR_RATE_LIMIT_EXCEEDED,
            message="Too many requests.",
            suggestion="Please wait a moment and try again.",
            severity=ErrorSeverity.MEDIUM,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="auth"):
        return ErrorResponse(
            code=ErrorCode.ERR_AUTHENTICATION_FAILED,
            message="Service authentication failed.",
            suggestion="Please contact support.",
            severity=ErrorSeverity.CRITICAL,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="network"):
        return ErrorResponse(
            code=ErrorCode.ERR_NETWORK_ERROR,
            message="Network error occurred.",
            suggestion="Please check your connection and try again.",
            severity=ErrorSeverity.MEDIUM,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
