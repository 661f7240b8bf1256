"""
Core exceptions for the vet-records package.

This module defines the exception hierarchy raised by the clinical record
services. Every failure a caller can observe is one of these typed outcomes,
so the transport layer can map them to protocol status codes without
inspecting messages.
"""

import logging
import time
import traceback
from typing import Any, Dict, Optional, Type
from urllib.parse import urlparse, urlunparse


class VetRecordsException(Exception):
    """
    Base exception class for all vet-records package exceptions.

    Provides a consistent interface for error handling across the package.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": time.time(),
        }

    def get_debug_info(self) -> Dict[str, Any]:
        """
        Get detailed debug information for the exception.

        Returns:
            Dictionary with debug information including traceback
        """
        debug_info = self.to_dict()
        formatted = traceback.format_exc()
        debug_info.update(
            {
                "traceback": (
                    formatted if formatted.strip() != "NoneType: None" else None
                ),
                "module": self.__class__.__module__,
                "class_name": self.__class__.__name__,
            }
        )
        return debug_info

    def log_error(
        self, logger: Optional[logging.Logger] = None, level: int = logging.ERROR
    ) -> None:
        """
        Log the exception with appropriate level and context.

        Args:
            logger: Logger instance to use (creates default if None)
            level: Logging level to use
        """
        if logger is None:
            logger = logging.getLogger(__name__)

        log_data = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

        logger.log(
            level,
            f"Exception occurred: {self.message}",
            extra={"exception_data": log_data},
        )

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class NotFoundException(VetRecordsException):
    """Exception raised when a targeted or referenced record does not exist."""

    def __init__(
        self,
        entity_kind: str,
        entity_id: Any,
        message: Optional[str] = None,
    ):
        """
        Initialize not-found exception.

        Args:
            entity_kind: Kind of record that was looked up (e.g. "Consultation")
            entity_id: Identifier that did not resolve
            message: Optional override for the default message
        """
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        super().__init__(
            message=message or f"{entity_kind} not found with id: {entity_id}",
            error_code="NOT_FOUND",
            details={"entity_kind": entity_kind, "entity_id": str(entity_id)},
        )


class ReferenceNotFoundException(NotFoundException):
    """
    Exception raised when a supplied foreign id does not resolve.

    Behaves like NotFoundException for callers that only care about absence,
    and additionally reports which input field carried the bad reference.
    """

    def __init__(
        self,
        entity_kind: str,
        entity_id: Any,
        field: Optional[str] = None,
    ):
        """
        Initialize reference-not-found exception.

        Args:
            entity_kind: Kind of record the reference points to
            entity_id: Identifier that did not resolve
            field: Name of the input field holding the reference
        """
        message = f"Referenced {entity_kind} not found with id: {entity_id}"
        if field:
            message = f"{message} (field '{field}')"
        super().__init__(entity_kind, entity_id, message=message)
        self.field = field
        self.error_code = "REFERENCE_NOT_FOUND"
        if field:
            self.details["field"] = field


class DataConflictException(VetRecordsException):
    """Exception raised when the store rejects a write on a constraint."""

    def __init__(
        self,
        message: str = "Data conflict",
        entity_kind: Optional[str] = None,
        constraint: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize data conflict exception.

        Args:
            message: Error message
            entity_kind: Kind of record whose write was rejected
            constraint: Constraint or rule that was violated
            original_error: Original driver/ORM exception
        """
        details: Dict[str, Any] = {}
        if entity_kind:
            details["entity_kind"] = entity_kind
        if constraint:
            details["constraint"] = constraint
        if original_error is not None:
            details["original_error"] = str(original_error)

        super().__init__(
            message=message,
            error_code="DATA_CONFLICT",
            details=details,
        )
        self.original_error = original_error


class DatabaseException(VetRecordsException):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize database exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
            original_error: Original exception that caused this error
        """
        super().__init__(message, error_code, details)
        self.original_error = original_error

        if original_error and "original_error" not in self.details:
            self.details["original_error"] = str(original_error)


class StorageFailureException(DatabaseException):
    """
    Exception raised when the Entity Store or File Storage fails unexpectedly.

    Fatal for the current operation; the surrounding transaction is rolled back.
    """

    def __init__(
        self,
        message: str = "Storage failure",
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize storage failure exception.

        Args:
            message: Error message
            operation: Description of the failed operation
            original_error: Original exception
        """
        details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            error_code="STORAGE_FAILURE",
            details=details,
            original_error=original_error,
        )


class ConnectionException(DatabaseException):
    """Exception raised when database connection fails."""

    def __init__(
        self,
        message: str = "Database connection failed",
        database_url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize connection exception.

        Args:
            message: Error message
            database_url: Database URL (will be sanitized)
            original_error: Original exception
        """
        details = {}
        if database_url:
            details["database_url"] = self._sanitize_url(database_url)

        super().__init__(
            message=message,
            error_code="DATABASE_CONNECTION_ERROR",
            details=details,
            original_error=original_error,
        )

    @staticmethod
    def _sanitize_url(url: str) -> str:
        """Remove credentials from database URL for logging."""
        try:
            parsed = urlparse(url)
            netloc = parsed.hostname or ""
            if parsed.port:
                netloc = f"{netloc}:{parsed.port}"
            return urlunparse(parsed._replace(netloc=netloc))
        except (ValueError, AttributeError) as e:
            return f"[URL_PARSE_ERROR: {e}]"


class TransactionException(DatabaseException):
    """Exception raised when a unit of work cannot be committed."""

    def __init__(
        self,
        message: str = "Database transaction failed",
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize transaction exception.

        Args:
            message: Error message
            operation: Description of the failed operation
            original_error: Original exception
        """
        details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            error_code="DATABASE_TRANSACTION_ERROR",
            details=details,
            original_error=original_error,
        )


class ValidationException(VetRecordsException):
    """Base exception for data validation errors."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        validation_errors: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            value: Value that failed validation
            validation_errors: Detailed validation errors
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class InvalidArgumentException(ValidationException):
    """Exception raised for precondition violations caught before the store."""

    def __init__(
        self,
        message: str = "Invalid argument",
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        super().__init__(message=message, field=field, value=value)
        self.error_code = "INVALID_ARGUMENT"


class ConfigurationException(VetRecordsException):
    """Exception raised for invalid package configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
    ):
        """
        Initialize configuration exception.

        Args:
            message: Error message
            config_key: Configuration key that caused the error
            config_value: Configuration value (will be sanitized)
        """
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value:
            details["config_value"] = self._sanitize_config_value(
                config_key, config_value
            )

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )

    @staticmethod
    def _sanitize_config_value(key: Optional[str], value: str) -> str:
        """Sanitize configuration values to avoid exposing secrets."""
        if not key:
            return "[REDACTED]"

        sensitive_keys = ["password", "secret", "key", "token", "credential", "url"]
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            return "[REDACTED]"

        return value


# Status codes the transport layer uses for each error kind. Most specific
# classes first; lookup walks the MRO.
ERROR_STATUS_CODES: Dict[Type[VetRecordsException], int] = {
    ReferenceNotFoundException: 404,
    NotFoundException: 404,
    DataConflictException: 409,
    InvalidArgumentException: 400,
    ValidationException: 400,
    StorageFailureException: 500,
    DatabaseException: 500,
    ConfigurationException: 500,
    VetRecordsException: 500,
}


def get_status_code(exception: VetRecordsException) -> int:
    """
    Resolve the protocol status code for an exception.

    Args:
        exception: The exception to classify

    Returns:
        Status code registered for the closest class in the exception's MRO
    """
    for klass in type(exception).__mro__:
        if klass in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[klass]
    return 500


def create_error_response(
    exception: VetRecordsException,
    include_debug: bool = False,
) -> Dict[str, Any]:
    """
    Create a standardized error response from an exception.

    Args:
        exception: The exception to format
        include_debug: Whether to include debug information

    Returns:
        Standardized error response dictionary
    """
    response: Dict[str, Any] = {
        "success": False,
        "status": get_status_code(exception),
        "error": {
            "type": exception.__class__.__name__,
            "code": exception.error_code,
            "message": exception.message,
        },
    }

    if exception.details:
        response["error"]["details"] = exception.details

    if include_debug:
        debug_info = exception.get_debug_info()
        response["debug"] = {
            "timestamp": debug_info["timestamp"],
            "module": debug_info["module"],
            "class_name": debug_info["class_name"],
        }
        if debug_info.get("traceback"):
            response["debug"]["traceback"] = debug_info["traceback"]

    return response


def log_exception_context(
    exception: Exception,
    context: Dict[str, Any],
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log a failure together with the operation it interrupted.

    Package exceptions carry their own code and details; anything else is
    logged by class name.
    """
    logger = logger or logging.getLogger(__name__)

    if isinstance(exception, VetRecordsException):
        payload = {**exception.to_dict(), "context": context}
        logger.log(
            level,
            f"{exception.error_code}: {exception.message}",
            extra={"error": payload},
        )
    else:
        name = type(exception).__name__
        payload = {"error_code": name, "message": str(exception), "context": context}
        logger.log(level, f"{name}: {exception}", extra={"error": payload})
