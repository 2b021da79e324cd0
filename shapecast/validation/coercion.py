"""Coercion Rules

Cast transforms delegate the actual parsing to coercion rules. A rule never
raises on bad input: it returns Err, and the calling transform decides how
to degrade (an uncastable array becomes None, an uncastable number NaN).
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from shapecast.errors import AppError, Ok, Result, invalid_format, invalid_json, invalid_type

T = TypeVar("T")
S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[S, T]):
    """Base class for coercion rules.

    Each rule defines:
    - Source type(s) it can coerce from
    - Target type it coerces to
    - Validation of coercion feasibility
    - The actual coercion logic
    """

    @property
    @abstractmethod
    def source_types(self) -> tuple[type, ...]:
        """Types this rule can coerce from."""

    @property
    @abstractmethod
    def target_type(self) -> type:
        """Type this rule coerces to."""

    @abstractmethod
    def coerce(self, value: Any) -> Result[T, AppError]:
        """Coerce value to target type. Returns Result."""

    def can_coerce(self, value: Any) -> bool:
        """Check if value can be coerced to target type."""
        return isinstance(value, self.source_types) and self.coerce(value).is_ok()

    def __call__(self, value: Any) -> Result[T, AppError]:
        return self.coerce(value)


@dataclass(frozen=True, slots=True)
class StringToInt(CoercionRule[str, int]):
    """Coerce string to integer."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> Result[int, AppError]:
        if not isinstance(value, str):
            return invalid_type(value, "int", origin="coercion")
        try:
            return Ok(int(value.strip()))
        except ValueError as e:
            return invalid_format(value, "int", str(e), origin="coercion")


@dataclass(frozen=True, slots=True)
class StringToFloat(CoercionRule[str, float]):
    """Coerce string to float."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[float]:
        return float

    def coerce(self, value: Any) -> Result[float, AppError]:
        if not isinstance(value, str):
            return invalid_type(value, "float", origin="coercion")
        try:
            return Ok(float(value.strip()))
        except ValueError as e:
            return invalid_format(value, "float", str(e), origin="coercion")


@dataclass(frozen=True, slots=True)
class StringToNumber(CoercionRule[str, float]):
    """Coerce numeric text to int when integral, float otherwise.

    Whitespace anywhere in the text is ignored ("1 000" -> 1000).
    """

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[float]:
        return float

    def coerce(self, value: Any) -> Result[float, AppError]:
        if not isinstance(value, str):
            return invalid_type(value, "number", origin="coercion")
        compact = "".join(value.split())
        if not compact:
            return invalid_format(value, "number", "empty string", origin="coercion")
        as_int = StringToInt().coerce(compact)
        if as_int.is_ok():
            return as_int
        return StringToFloat().coerce(compact)


@dataclass(frozen=True, slots=True)
class JSONText(CoercionRule[str, Any]):
    """Parse JSON text into Python values."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, bytes, bytearray)

    @property
    def target_type(self) -> type:
        return object

    def coerce(self, value: Any) -> Result[Any, AppError]:
        if not isinstance(value, self.source_types):
            return invalid_type(value, "json", origin="coercion")
        try:
            return Ok(json.loads(value))
        except ValueError as e:
            return invalid_json(str(e), origin="coercion")


JSON_TEXT = JSONText()
STRING_TO_NUMBER = StringToNumber()
