"""Value helpers shared by schemas, tests and messages."""
from __future__ import annotations

import inspect
import json
import math
from typing import Any, Mapping


class _Undefined:
    """Marker for an absent value, distinct from ``None`` (null)."""

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict) -> _Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


def is_absent(value: Any) -> bool:
    """True for null (``None``) and absent (``UNDEFINED``) values."""
    return value is None or value is UNDEFINED


def sparse_list(length: int, items: Mapping[int, Any] | None = None) -> list[Any]:
    """Build a list of ``length`` empty slots, filling only the given indices.

    >>> sparse_list(3, {0: 1, 2: 3})
    [1, UNDEFINED, 3]
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    values = [UNDEFINED] * length
    for index, item in (items or {}).items():
        if not 0 <= index < length:
            raise IndexError(f"index {index} out of range for sparse list of length {length}")
        values[index] = item
    return values


def join_path(base: str | None, index: int) -> str:
    """Path of the element at ``index`` below ``base``."""
    return f"{base or ''}[{index}]"


def is_awaitable(value: Any) -> bool:
    return inspect.isawaitable(value)


def print_value(value: Any, quote_strings: bool = False) -> str:
    """Render a value for a user-facing message."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value) if quote_strings else value
    if callable(value):
        return f"[function {getattr(value, '__name__', 'anonymous')}]"
    try:
        return json.dumps(value, default=_render_nested)
    except (TypeError, ValueError):
        return repr(value)


def _render_nested(value: Any) -> Any:
    if value is UNDEFINED:
        return None
    return print_value(value)
