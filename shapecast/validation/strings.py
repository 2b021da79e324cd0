"""String schema."""
from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from .check import TestContext
from .locale import STRING, Message
from .reference import Reference
from .schema import Schema
from .util import is_absent

Length = int | Reference


def _stringify(value: Any, original: Any, schema: Schema) -> Any:
    if schema.is_type(value) or value is None:
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return value


class StringSchema(Schema):
    type_name = "string"

    def __init__(self) -> None:
        super().__init__()
        with self.mutation_batch():
            self.transform(_stringify)

    def _type_check(self, value: Any) -> bool:
        return isinstance(value, str)

    def _is_present(self, value: Any) -> bool:
        return super()._is_present(value) and len(value) > 0

    def length(self, size: Length, message: Message | None = None) -> StringSchema:
        def check(value: Any, ctx: TestContext) -> bool:
            return is_absent(value) or len(value) == ctx.resolve(size)

        return self.test(
            check, name="length", message=message or STRING["length"],
            params={"length": size}, exclusive=True,
        )

    def min_length(self, limit: Length, message: Message | None = None) -> StringSchema:
        def check(value: Any, ctx: TestContext) -> bool:
            return is_absent(value) or len(value) >= ctx.resolve(limit)

        return self.test(
            check, name="min", message=message or STRING["min"],
            params={"min": limit}, exclusive=True,
        )

    def max_length(self, limit: Length, message: Message | None = None) -> StringSchema:
        def check(value: Any, ctx: TestContext) -> bool:
            return is_absent(value) or len(value) <= ctx.resolve(limit)

        return self.test(
            check, name="max", message=message or STRING["max"],
            params={"max": limit}, exclusive=True,
        )

    def matches(
        self,
        pattern: str | re.Pattern,
        message: Message | None = None,
        *,
        exclude_empty: bool = False,
    ) -> StringSchema:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern

        def check(value: Any, ctx: TestContext) -> bool:
            if is_absent(value) or (value == "" and exclude_empty):
                return True
            return regex.search(value) is not None

        return self.test(
            check, name="matches", message=message or STRING["matches"],
            params={"regex": regex.pattern},
        )

    def trim(self, message: Message | None = None) -> StringSchema:
        """Strip surrounding whitespace when casting; reject it in strict mode."""

        def strip(value: Any, original: Any, schema: Schema) -> Any:
            return value.strip() if isinstance(value, str) else value

        def check(value: Any, ctx: TestContext) -> bool:
            return is_absent(value) or value == value.strip()

        return self.transform(strip).test(
            check, name="trim", message=message or STRING["trim"],
        )


def string() -> StringSchema:
    return StringSchema()
