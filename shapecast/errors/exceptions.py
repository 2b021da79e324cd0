"""Raised Error Wrappers

Usage errors are programming mistakes: they are raised at call time and
never travel through the validation result channel. Each exception wraps
an AppError so it can be reported with the rest of the taxonomy.
"""
from __future__ import annotations

from typing import TypeVar

from .types import AppError, Err, Ok, Result

T = TypeVar("T")


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when an AppError has to leave code that does not use the
    Result monad.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(error.message)


class SchemaUsageError(AppErrorException, TypeError):
    """Invalid argument given to a schema builder."""


class SyncValidationError(AppErrorException, RuntimeError):
    """A test needed to suspend while validating synchronously."""


def raise_result(result: Result[T, AppError]) -> T:
    """Unwrap Result or raise exception."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            raise AppErrorException(error)
