"""Per-call options and per-schema behavioural flags."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from shapecast.config import get_settings

from .util import UNDEFINED


class Presence(str, Enum):
    OPTIONAL = "optional"
    REQUIRED = "required"
    DEFINED = "defined"


@dataclass(frozen=True, slots=True)
class SchemaSpec:
    """Behavioural flags of a schema; replaced, never mutated."""
    abort_early: bool = True
    recursive: bool = True
    nullable: bool = False
    strict: bool = False
    presence: Presence = Presence.OPTIONAL
    default: Any = UNDEFINED
    label: str | None = None
    meta: Mapping[str, Any] | None = None

    @classmethod
    def from_settings(cls) -> SchemaSpec:
        settings = get_settings()
        return cls(abort_early=settings.ABORT_EARLY, recursive=settings.RECURSIVE)

    def evolve(self, **changes: Any) -> SchemaSpec:
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class ValidationOptions:
    """State of one cast/validate call.

    ``None`` flags fall back to the validated schema's own spec, so a nested
    schema keeps its configuration unless the caller overrides it.
    """
    path: str = ""
    strict: bool | None = None
    abort_early: bool | None = None
    recursive: bool | None = None
    sync: bool = False
    original_value: Any = UNDEFINED
    parent: Any = None
    index: int | None = None
    context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def evolve(self, **changes: Any) -> ValidationOptions:
        return replace(self, **changes)

    def resolve_abort_early(self, spec: SchemaSpec) -> bool:
        return spec.abort_early if self.abort_early is None else self.abort_early

    def resolve_recursive(self, spec: SchemaSpec) -> bool:
        return spec.recursive if self.recursive is None else self.recursive

    def resolve_strict(self, spec: SchemaSpec) -> bool:
        return spec.strict if self.strict is None else self.strict
