"""Errors and Results

Outcome types shared by every shapecast pipeline.

- Result[T, E]: ``Ok(value)`` or ``Err(error)``, returned by cast rules and validation
- AppError / ErrorCode: coded errors (E2xxx data, E8xxx usage, E9xxx internal)
- Builders: one constructor per error situation, each returning ``Err``
- Usage exceptions: raised for programming mistakes, never aggregated

Usage:
    from shapecast.errors import Ok, Err

    match schema.validate_sync(payload):
        case Ok(value):
            store(value)
        case Err(error):
            log.warning("rejected", errors=error.messages)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Constructors
    from_exception,
    try_result,
)

from .builders import (
    # Validation (E2xxx)
    validation_error,
    invalid_format,
    invalid_type,
    invalid_json,
    # Usage (E8xxx)
    usage_error,
    invalid_schema,
    invalid_argument,
    sync_mode_violation,
)

from .exceptions import (
    AppErrorException,
    SchemaUsageError,
    SyncValidationError,
    raise_result,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    # Constructors
    "from_exception",
    "try_result",
    # Validation (E2xxx)
    "validation_error",
    "invalid_format",
    "invalid_type",
    "invalid_json",
    # Usage (E8xxx)
    "usage_error",
    "invalid_schema",
    "invalid_argument",
    "sync_mode_violation",
    # Exceptions
    "AppErrorException",
    "SchemaUsageError",
    "SyncValidationError",
    "raise_result",
]
