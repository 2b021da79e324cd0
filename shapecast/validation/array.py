"""Array Schema

Lists of elements that all follow one inner schema.

Casting parses JSON text, then casts every element through the inner
schema. When no element changes, the original list object is returned, so
callers comparing by identity see no change.

Validation runs the base tests on the list itself (type, presence, length
bounds), then validates each slot against the inner schema as one task per
index. Iteration is bounded by ``len(value)``: empty slots of a sparse list
(``UNDEFINED``) are validated like any other element.
"""
from __future__ import annotations

from functools import partial
from typing import Any, Callable

from shapecast.errors import Err, Ok, Result, SchemaUsageError, invalid_schema
from shapecast.logging import schema_logger

from .check import TestContext
from .coercion import JSON_TEXT
from .errors import ValidationError
from .locale import ARRAY, Message
from .options import ValidationOptions
from .reference import Reference
from .runner import Outcome, RunPlan, run_tests
from .schema import Schema, is_schema
from .util import UNDEFINED, is_absent, join_path, print_value

log = schema_logger()

Rejector = Callable[[Any], bool]


def _parse_list(value: Any, original: Any, schema: Schema) -> Any:
    """Text is parsed as JSON; anything that is not then a list is uncastable (None)."""
    if isinstance(value, (str, bytes, bytearray)):
        match JSON_TEXT.coerce(value):
            case Ok(parsed):
                value = parsed
            case Err(error):
                log.debug("json_cast_failed", reason=error.message)
                value = None
    elif isinstance(value, tuple):
        value = list(value)
    return value if schema.is_type(value) else None


class ArraySchema(Schema):
    """Schema for lists; ``inner_type`` validates each element."""

    type_name = "array"

    def __init__(self, inner_type: Schema | None = None):
        super().__init__()
        if inner_type is not None and not is_schema(inner_type):
            raise SchemaUsageError(
                invalid_schema("array()", print_value(inner_type, True), origin="array").error
            )
        # Shared with whoever built it; replaced by of(), never mutated
        self.inner_type = inner_type
        with self.mutation_batch():
            self.transform(_parse_list)

    def _type_check(self, value: Any) -> bool:
        return isinstance(value, list)

    def _is_present(self, value: Any) -> bool:
        return super()._is_present(value) and len(value) > 0

    def _cast(self, raw: Any, options: ValidationOptions) -> Any:
        value = super()._cast(raw, options)
        if not self._type_check(value) or self.inner_type is None:
            return value

        changed = False
        cast_values = []
        for index, item in enumerate(value):
            cast_item = self.inner_type._cast(item, options.evolve(path=join_path(options.path, index)))
            changed = changed or cast_item is not item
            cast_values.append(cast_item)
        return cast_values if changed else value

    def _validate_inner(
        self, result: Result[Any, ValidationError], value: Any, options: ValidationOptions
    ) -> Outcome:
        abort_early = options.resolve_abort_early(self.spec)
        errors: list[ValidationError] = []
        if isinstance(result, Err):
            if abort_early:
                return result
            errors.append(result.error)

        inner_type = self.inner_type
        if not options.resolve_recursive(self.spec) or inner_type is None or not self._type_check(value):
            return Err(errors[0]) if errors else Ok(value)

        tracked = options.original_value
        originals = tracked if isinstance(tracked, list) else value

        tasks = []
        for index in range(len(value)):
            item_options = options.evolve(
                path=join_path(options.path, index),
                # Elements were already cast with the list; validate them as they are
                strict=True,
                parent=value,
                index=index,
                original_value=originals[index] if index < len(originals) else value[index],
            )
            tasks.append(partial(inner_type._validate, value[index], item_options))

        return run_tests(RunPlan(
            tasks=tasks,
            value=value,
            path=options.path,
            abort_early=abort_early,
            sync=options.sync,
            prior_errors=tuple(errors),
        ))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def of(self, schema: Schema | None) -> ArraySchema:
        """New schema validating elements against ``schema``; None turns descent off."""
        if schema is not None and not is_schema(schema):
            raise SchemaUsageError(
                invalid_schema("array.of()", print_value(schema, True), origin="array.of").error
            )
        next_schema = self._copy()
        next_schema.inner_type = schema
        return next_schema

    def min_length(self, limit: int | Reference, message: Message | None = None) -> ArraySchema:
        def check(value: Any, ctx: TestContext) -> bool:
            if is_absent(value):
                return True
            bound = ctx.resolve(limit)
            return not is_absent(bound) and len(value) >= bound

        return self.test(
            check,
            name="min",
            message=message or ARRAY["min"],
            params={"min": limit},
            exclusive=True,
        )

    def max_length(self, limit: int | Reference, message: Message | None = None) -> ArraySchema:
        def check(value: Any, ctx: TestContext) -> bool:
            if is_absent(value):
                return True
            bound = ctx.resolve(limit)
            return not is_absent(bound) and len(value) <= bound

        return self.test(
            check,
            name="max",
            message=message or ARRAY["max"],
            params={"max": limit},
            exclusive=True,
        )

    def ensure(self) -> ArraySchema:
        """Always produce a list: absent or null becomes ``[]``, a scalar ``[scalar]``.

        Applies even to nullable schemas.
        """

        def wrap(value: Any, original: Any, schema: Schema) -> Any:
            if schema._type_check(value):
                return value
            if is_absent(original):
                return []
            return list(original) if isinstance(original, list) else [original]

        next_schema = self.clone()
        with next_schema.mutation_batch():
            if next_schema.spec.default is UNDEFINED:
                next_schema.default(list)
            next_schema.transform(wrap)
        return next_schema

    def compact(self, rejector: Rejector | None = None) -> ArraySchema:
        """Drop falsy elements, or the elements for which ``rejector`` returns True."""

        def drop(values: Any, original: Any, schema: Schema) -> Any:
            if not schema._type_check(values):
                return values
            if rejector is None:
                return [v for v in values if v]
            return [v for v in values if not rejector(v)]

        return self.transform(drop)

    def describe(self):
        description = super().describe()
        if self.inner_type is None:
            return description
        return description.model_copy(update={"inner_type": self.inner_type.describe()})


def array(inner_type: Schema | None = None) -> ArraySchema:
    return ArraySchema(inner_type)
