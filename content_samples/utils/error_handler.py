"""
Custom error handling.

This module defines the application's exception hierarchy and a few helpers
for consistent error reporting.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Standardized error codes for the application.
    """

    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Content API errors
    CONTENT_API_ERROR = "CONTENT_API_ERROR"
    CONTENT_CONNECTION_FAILED = "CONTENT_CONNECTION_FAILED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


class ErrorSeverity(Enum):
    """
    Severity levels for errors.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Base exception for every custom exception of the application.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Standardized error code
            details: Additional error information
            status_code: Associated HTTP status code
            severity: Error severity
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.timestamp = datetime.now(timezone.utc)
        self.traceback_str = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Returns:
            Dict: Exception representation
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Exception for data and precondition validation errors.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            invalid_value: Value that caused the error
            expected_format: Expected format
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class ConfigurationException(AppException):
    """
    Exception for missing or invalid sample configuration.
    """

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.config_key = config_key
        self.details.update({"config_key": config_key})


class ContentAPIException(AppException):
    """
    Exception for Content API errors.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        reasons: Optional[List[str]] = None,
        rate_limited: bool = False,
        **kwargs,
    ):
        """
        Initialize the Content API exception.

        Args:
            message: Error message
            api_response_code: HTTP status returned by the API (None for network errors)
            endpoint: Endpoint that failed
            reasons: Error reasons reported by the API
            rate_limited: Whether the request was rejected by rate limiting
            **kwargs: Extra arguments for AppException
        """
        error_code = ErrorCode.CONTENT_API_ERROR
        severity = ErrorSeverity.MEDIUM

        if rate_limited:
            error_code = ErrorCode.RATE_LIMIT_EXCEEDED
            severity = ErrorSeverity.LOW
        elif api_response_code in (401, 403):
            error_code = ErrorCode.INVALID_CREDENTIALS
            severity = ErrorSeverity.HIGH
        elif api_response_code is None:
            error_code = ErrorCode.CONTENT_CONNECTION_FAILED
            severity = ErrorSeverity.HIGH
        elif api_response_code >= 500:
            severity = ErrorSeverity.HIGH

        super().__init__(
            message=message,
            error_code=error_code,
            status_code=api_response_code or 503,
            severity=severity,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.endpoint = endpoint
        self.reasons = reasons or []
        self.rate_limited = rate_limited

        self.details.update(
            {
                "api_response_code": api_response_code,
                "endpoint": endpoint,
                "reasons": self.reasons,
                "rate_limited": rate_limited,
            }
        )


def log_error(exception: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log an exception with its structured details.

    Args:
        exception: Exception to log
        context: Extra context for the log entry
    """
    context = context or {}
    if isinstance(exception, AppException):
        level = {
            ErrorSeverity.LOW: logging.WARNING,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }.get(exception.severity, logging.ERROR)
        logger.log(level, f"{exception} | details={exception.details} | context={context}")
    else:
        logger.error(f"Unhandled error: {exception} | context={context}", exc_info=exception)
