"""Structural descriptions of schemas, for introspection and tooling."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TestDescription(BaseModel):
    """A registered test as seen from outside."""
    __test__ = False

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    params: dict[str, Any] | None = None


class SchemaDescription(BaseModel):
    """Description of a schema; ``inner_type`` is set for bound array schemas."""
    model_config = ConfigDict(frozen=True)

    type: str
    label: str | None = None
    meta: dict[str, Any] | None = None
    optional: bool = True
    nullable: bool = False
    tests: list[TestDescription] = Field(default_factory=list)
    inner_type: SchemaDescription | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
