"""
Custom exceptions for the vet-records package.

This module defines the exception hierarchy and custom exceptions
used by the clinical record services.
"""

from .core_exceptions import (  # Utility functions
    ERROR_STATUS_CODES,
    ConfigurationException,
    ConnectionException,
    DatabaseException,
    DataConflictException,
    InvalidArgumentException,
    NotFoundException,
    ReferenceNotFoundException,
    StorageFailureException,
    TransactionException,
    ValidationException,
    VetRecordsException,
    create_error_response,
    get_status_code,
    log_exception_context,
)

__all__ = [
    # Exception classes
    "VetRecordsException",
    "NotFoundException",
    "ReferenceNotFoundException",
    "DataConflictException",
    "DatabaseException",
    "StorageFailureException",
    "ConnectionException",
    "TransactionException",
    "ValidationException",
    "InvalidArgumentException",
    "ConfigurationException",
    # Utility functions
    "ERROR_STATUS_CODES",
    "get_status_code",
    "create_error_response",
    "log_exception_context",
]
