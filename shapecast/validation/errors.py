"""Validation Error

Structured failure carrying the path, message, offending value and the
params used to render the message. Aggregates flatten: an error built from
other errors lists their leaves, so a failure tree always reads as one
ordered list.

Serialized format:
{
    "error": {
        "type": "validation_error",
        "message": "2 errors occurred",
        "error_count": 2,
        "errors": [
            {"path": "[1]", "type": "min", "message": "[1] must be greater than or equal to 0"},
            {"path": "[2]", "type": "min", "message": "[2] must be greater than or equal to 0"}
        ]
    }
}
"""
from __future__ import annotations

from string import Template
from typing import Any, Iterable

from shapecast.errors import AppError, ErrorCode, validation_error

from .locale import Message
from .util import UNDEFINED, print_value

_CODES_BY_TYPE: dict[str, ErrorCode] = {
    "required": ErrorCode.E2001_REQUIRED_FIELD_MISSING,
    "defined": ErrorCode.E2001_REQUIRED_FIELD_MISSING,
    "typeError": ErrorCode.E2004_INVALID_TYPE,
    "min": ErrorCode.E2003_OUT_OF_RANGE,
    "max": ErrorCode.E2003_OUT_OF_RANGE,
    "length": ErrorCode.E2003_OUT_OF_RANGE,
    "less_than": ErrorCode.E2003_OUT_OF_RANGE,
    "more_than": ErrorCode.E2003_OUT_OF_RANGE,
    "matches": ErrorCode.E2002_INVALID_FORMAT,
}


class ValidationError(Exception):
    """A validation failure, or an aggregate of several."""

    def __init__(
        self,
        message: str,
        value: Any = UNDEFINED,
        path: str = "",
        type: str | None = None,
        params: dict[str, Any] | None = None,
        errors: Iterable[ValidationError] = (),
    ):
        super().__init__(message)
        self.message = message
        self.value = value
        self.path = path
        self.type = type
        self.params = params or {}
        self._inner: list[ValidationError] = []
        for error in errors:
            self._inner.extend(error.errors)

    @property
    def errors(self) -> list[ValidationError]:
        """Leaf failures in discovery order; a leaf lists only itself."""
        return list(self._inner) if self._inner else [self]

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]

    @property
    def paths(self) -> list[str]:
        return [e.path for e in self.errors]

    @property
    def is_aggregate(self) -> bool:
        return bool(self._inner)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ValidationError(path={self.path!r}, message={self.message!r})"

    @staticmethod
    def is_error(obj: Any) -> bool:
        """Type guard separating structured failures from arbitrary exceptions."""
        return isinstance(obj, ValidationError)

    @classmethod
    def aggregate(
        cls, errors: Iterable[ValidationError], value: Any = UNDEFINED, path: str = ""
    ) -> ValidationError:
        """Combine failures into one error whose ``errors`` are their flattened leaves."""
        errors = list(errors)
        leaves = [leaf for error in errors for leaf in error.errors]
        if not leaves:
            raise ValueError("Cannot aggregate an empty error list")
        message = leaves[0].message if len(leaves) == 1 else f"{len(leaves)} errors occurred"
        return cls(message, value=value, path=path, type="aggregate", errors=errors)

    @staticmethod
    def format_message(message: Message, params: dict[str, Any]) -> str:
        """Render a message template; ``path`` falls back to the label, then to "this"."""
        params = {**params, "path": params.get("label") or params.get("path") or "this"}
        if callable(message):
            return message(params)
        rendered = {key: print_value(value) for key, value in params.items()}
        return Template(message).safe_substitute(rendered)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for reporting."""
        return {"error": {
            "type": "validation_error",
            "message": self.message,
            "error_count": len(self.errors),
            "errors": [
                {"path": e.path, "type": e.type, "message": e.message}
                for e in self.errors
            ],
        }}

    def to_app_error(self) -> AppError:
        """Convert to AppError for the error taxonomy."""
        if not self.is_aggregate:
            code = _CODES_BY_TYPE.get(self.type or "", ErrorCode.E2005_CONSTRAINT_VIOLATION)
            return validation_error(
                self.message,
                code=code,
                field=self.path or None,
                constraint=self.type,
            ).error
        return validation_error(
            self.message,
            field=self.path or None,
            error_count=len(self.errors),
            errors=self.to_dict()["error"]["errors"],
        ).error
