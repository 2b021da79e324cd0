"""Deferred references.

A Reference stands in for a value that is only known while validating:
a sibling field of the parent, a key of the caller's context mapping, or
a part of the value under test. Builders that accept bounds resolve them
at test time through ``TestContext.resolve``.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Mapping

from .util import UNDEFINED

CONTEXT_PREFIX = "$"
VALUE_PREFIX = "."

_SEGMENT = re.compile(r"[^.\[\]]+|\[(\d+)\]")


def get_in(obj: Any, path: str) -> Any:
    """Read a dotted/indexed path (``a.b[0].c``); missing segments give UNDEFINED."""
    current = obj
    for match in _SEGMENT.finditer(path):
        if current is None or current is UNDEFINED:
            return UNDEFINED
        index = match.group(1)
        try:
            if index is not None:
                current = current[int(index)]
            elif isinstance(current, Mapping):
                current = current[match.group(0)]
            else:
                current = getattr(current, match.group(0))
        except (KeyError, IndexError, TypeError, AttributeError):
            return UNDEFINED
    return current


class Reference:
    """A value resolved against the live validation state."""

    __slots__ = ("key", "path", "is_context", "is_value", "is_sibling", "map")

    def __init__(self, key: str, map: Callable[[Any], Any] | None = None):
        if not isinstance(key, str):
            raise TypeError(f"ref must be a string, got: {key!r}")
        key = key.strip()
        if not key:
            raise ValueError("ref must be a non-empty string")
        self.key = key
        self.is_context = key.startswith(CONTEXT_PREFIX)
        self.is_value = key.startswith(VALUE_PREFIX)
        self.is_sibling = not (self.is_context or self.is_value)
        prefix = CONTEXT_PREFIX if self.is_context else VALUE_PREFIX if self.is_value else ""
        self.path = key[len(prefix):]
        self.map = map

    def get_value(self, value: Any, parent: Any = None, context: Mapping[str, Any] | None = None) -> Any:
        if self.is_context:
            source = context or {}
        elif self.is_value:
            source = value
        else:
            source = parent
        result = get_in(source, self.path) if self.path else source
        if self.map is not None:
            result = self.map(result)
        return result

    def describe(self) -> dict[str, str]:
        return {"type": "ref", "key": self.key}

    def __repr__(self) -> str:
        return f"Ref({self.key})"

    @staticmethod
    def is_ref(obj: Any) -> bool:
        return isinstance(obj, Reference)


def ref(key: str, map: Callable[[Any], Any] | None = None) -> Reference:
    """Create a Reference; ``$key`` reads the context, ``.key`` the value under test."""
    return Reference(key, map=map)
