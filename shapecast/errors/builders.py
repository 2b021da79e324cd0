"""Domain-Specific Error Builders

Ergonomic constructors for typed errors. Each builder creates an AppError
with the appropriate code and context, wrapped in Err.
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    field: str | None = None,
    value: Any = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    meta = {"field": field, "value": value, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def invalid_format(
    value: Any, target: str, reason: str = "", origin: str = ""
) -> Err[AppError]:
    msg = f"Cannot coerce {value!r} to {target}"
    if reason:
        msg += f": {reason}"
    return validation_error(
        msg,
        code=ErrorCode.E2002_INVALID_FORMAT,
        origin=origin,
        value=value,
        target=target,
    )


def invalid_type(value: Any, target: str, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Cannot coerce {type(value).__name__} to {target}",
        code=ErrorCode.E2004_INVALID_TYPE,
        origin=origin,
        target=target,
    )


def invalid_json(reason: str, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Invalid JSON: {reason}",
        code=ErrorCode.E2021_INVALID_JSON,
        origin=origin,
    )


# =============================================================================
# Usage Errors (E8xxx)
# =============================================================================

def usage_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E8000_USAGE_GENERIC,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create schema usage error (a programming mistake, not a data problem)."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata=metadata,
    ))


def invalid_schema(argument: str, received: str, origin: str = "") -> Err[AppError]:
    return usage_error(
        f"{argument} must be a valid schema, or None to remove the current one, not: {received}",
        code=ErrorCode.E8001_INVALID_SCHEMA,
        origin=origin,
        received=received,
    )


def invalid_argument(message: str, origin: str = "", **metadata) -> Err[AppError]:
    return usage_error(
        message,
        code=ErrorCode.E8002_INVALID_ARGUMENT,
        origin=origin,
        **metadata,
    )


def sync_mode_violation(test_name: str, path: str, origin: str = "") -> Err[AppError]:
    return usage_error(
        f'Validation test of type "{test_name}" returned an awaitable during a synchronous '
        "validation. Use the asynchronous validate() for asynchronous tests",
        code=ErrorCode.E8003_SYNC_MODE_VIOLATION,
        origin=origin,
        test=test_name,
        path=path,
    )
