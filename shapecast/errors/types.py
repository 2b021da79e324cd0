"""Result and Error Types

Cast and validation pipelines report their outcome as a value rather than by
raising: ``Ok`` carries the accepted value, ``Err`` carries what went wrong.
Validation puts a ``ValidationError`` in ``Err``; coercion rules and usage
checks put an ``AppError``, which ties the failure to an ``ErrorCode``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class ErrorCode(Enum):
    """Numeric error taxonomy.

    E2xxx: the data failed validation or coercion
    E8xxx: the schema was misused (raised at definition or call time)
    E9xxx: anything unexpected
    """
    E2000_VALIDATION_GENERIC = 2000
    E2001_REQUIRED_FIELD_MISSING = 2001
    E2002_INVALID_FORMAT = 2002
    E2003_OUT_OF_RANGE = 2003
    E2004_INVALID_TYPE = 2004
    E2005_CONSTRAINT_VIOLATION = 2005
    E2021_INVALID_JSON = 2021

    E8000_USAGE_GENERIC = 8000
    E8001_INVALID_SCHEMA = 8001
    E8002_INVALID_ARGUMENT = 8002
    E8003_SYNC_MODE_VIOLATION = 8003

    E9000_INTERNAL_GENERIC = 9000
    E9001_UNEXPECTED_ERROR = 9001

    @property
    def category(self) -> str:
        match self.value // 1000:
            case 2:
                return "validation"
            case 8:
                return "usage"
            case _:
                return "internal"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Where and when an error was produced."""
    correlation_id: str = field(default_factory=lambda: uuid4().hex[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""


@dataclass(frozen=True, slots=True)
class AppError:
    """A coded error with metadata, optionally caused by an exception."""
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def with_metadata(self, **extra: Any) -> AppError:
        return AppError(self.code, self.message, self.context, {**self.metadata, **extra}, self.cause)

    def chain(self, cause: Exception) -> AppError:
        return AppError(self.code, self.message, self.context, self.metadata, cause)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "category": self.code.category,
                "message": self.message,
                "origin": self.context.origin,
                "correlation_id": self.context.correlation_id,
                "timestamp": self.context.timestamp.isoformat(),
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome holding the accepted value."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return f(self.value)

    def match(self, ok: Callable[[T], U], err: Callable[[Any], U]) -> U:
        return ok(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome holding the error."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the error itself when it is an exception (e.g. ValidationError)."""
        if isinstance(self.error, Exception):
            raise self.error
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        return Err(f(self.error))

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def match(self, ok: Callable[[Any], U], err: Callable[[E], U]) -> U:
        return err(self.error)


Result = Union[Ok[T], Err[E]]


def from_exception(
    exc: Exception,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    message: str | None = None,
    origin: str = "",
    **metadata: Any,
) -> Err[AppError]:
    """Wrap an exception as a coded error."""
    return Err(AppError(
        code=code,
        message=message or str(exc),
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=exc,
    ))


def try_result(
    f: Callable[[], T],
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    origin: str = "",
) -> Result[T, AppError]:
    """Call ``f``; an exception becomes ``Err`` instead of propagating."""
    try:
        return Ok(f())
    except Exception as e:
        return from_exception(e, code=code, origin=origin)
