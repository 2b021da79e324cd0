"""Number schema: ints and floats, never bools or NaN."""
from __future__ import annotations

import math
import operator
from numbers import Real
from typing import Any, Callable

from shapecast.errors import Err, Ok

from .check import TestContext
from .coercion import STRING_TO_NUMBER
from .locale import NUMBER, Message
from .reference import Reference
from .schema import Schema
from .util import is_absent

Bound = float | int | Reference


def _parse_number(value: Any, original: Any, schema: Schema) -> Any:
    if schema.is_type(value) or value is None:
        return value
    if isinstance(value, str):
        match STRING_TO_NUMBER.coerce(value):
            case Ok(number):
                return number
            case Err(_):
                return math.nan
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    return math.nan


class NumberSchema(Schema):
    type_name = "number"

    def __init__(self) -> None:
        super().__init__()
        with self.mutation_batch():
            self.transform(_parse_number)

    def _type_check(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not (isinstance(value, float) and math.isnan(value))

    def _bound(
        self,
        name: str,
        param: str,
        limit: Bound,
        message: Message,
        compare: Callable[[Any, Any], bool],
    ) -> NumberSchema:
        # min/more_than share the "min" slot (and max/less_than "max"): the last one wins
        def check(value: Any, ctx: TestContext) -> bool:
            return is_absent(value) or compare(value, ctx.resolve(limit))

        return self.test(check, name=name, message=message, params={param: limit}, exclusive=True)

    def min(self, limit: Bound, message: Message | None = None) -> NumberSchema:
        return self._bound("min", "min", limit, message or NUMBER["min"], operator.ge)

    def max(self, limit: Bound, message: Message | None = None) -> NumberSchema:
        return self._bound("max", "max", limit, message or NUMBER["max"], operator.le)

    def more_than(self, limit: Bound, message: Message | None = None) -> NumberSchema:
        return self._bound("min", "more", limit, message or NUMBER["more_than"], operator.gt)

    def less_than(self, limit: Bound, message: Message | None = None) -> NumberSchema:
        return self._bound("max", "less", limit, message or NUMBER["less_than"], operator.lt)

    def positive(self, message: Message | None = None) -> NumberSchema:
        return self.more_than(0, message or NUMBER["positive"])

    def negative(self, message: Message | None = None) -> NumberSchema:
        return self.less_than(0, message or NUMBER["negative"])

    def integer(self, message: Message | None = None) -> NumberSchema:
        def check(value: Any, ctx: TestContext) -> bool:
            return is_absent(value) or isinstance(value, int) or float(value).is_integer()

        return self.test(check, name="integer", message=message or NUMBER["integer"])


def number() -> NumberSchema:
    return NumberSchema()
