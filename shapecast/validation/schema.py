"""Base Schema

The generic pipeline every schema type builds on:

- cast: transforms in registration order, then the default for absent input
- validate: cast (unless strict), type check, registered tests, then the
  type-specific inner phase (``_validate_inner``)
- builders: every call returns a clone, except inside a mutation batch
  where calls mutate the one instance in place

Validation returns a Result: ``Ok(value)`` or ``Err(ValidationError)``.
``validate_sync`` runs entirely on the caller's stack; ``validate`` is a
coroutine that lets tests suspend.
"""
from __future__ import annotations

import copy
from contextlib import contextmanager
from functools import partial
from typing import Any, Callable, Iterator, Mapping, Self

from shapecast.errors import Result, SchemaUsageError, invalid_argument

from .check import Predicate, SchemaTest, TestContext, type_error_test
from .description import SchemaDescription, TestDescription
from .errors import ValidationError
from .locale import MIXED, Message
from .options import Presence, SchemaSpec, ValidationOptions
from .runner import Outcome, RunPlan, run_tests, then
from .util import UNDEFINED, is_absent

Transform = Callable[[Any, Any, "Schema"], Any]


class Schema:
    """Schema accepting any value; base class of every schema type."""

    type_name = "mixed"

    def __init__(self) -> None:
        self.spec = SchemaSpec.from_settings()
        self.tests: list[SchemaTest] = []
        self.transforms: list[Transform] = []
        self._type_error = type_error_test(MIXED["not_type"])
        self._mutate = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type_name!r}, tests={[t.name for t in self.tests]})"

    # ------------------------------------------------------------------
    # Type and presence
    # ------------------------------------------------------------------

    def _type_check(self, value: Any) -> bool:
        return True

    def is_type(self, value: Any) -> bool:
        if self.spec.nullable and value is None:
            return True
        return self._type_check(value)

    def _is_present(self, value: Any) -> bool:
        return not is_absent(value)

    # ------------------------------------------------------------------
    # Cloning and mutation batches
    # ------------------------------------------------------------------

    def _copy(self) -> Self:
        """Always a new, independent instance."""
        next_schema = copy.copy(self)
        next_schema.tests = list(self.tests)
        next_schema.transforms = list(self.transforms)
        next_schema._mutate = False
        return next_schema

    def clone(self, **spec_changes: Any) -> Self:
        """Copy with spec changes; inside a mutation batch, this instance itself."""
        next_schema = self if self._mutate else self._copy()
        if spec_changes:
            next_schema.spec = next_schema.spec.evolve(**spec_changes)
        return next_schema

    @contextmanager
    def mutation_batch(self) -> Iterator[Self]:
        """Scope in which builder calls mutate this instance instead of cloning."""
        before = self._mutate
        self._mutate = True
        try:
            yield self
        finally:
            self._mutate = before

    def with_mutation(self, fn: Callable[[Self], Any]) -> Any:
        with self.mutation_batch():
            return fn(self)

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def test(
        self,
        predicate: Predicate | None = None,
        *,
        name: str | None = None,
        message: Message | None = None,
        params: Mapping[str, Any] | None = None,
        exclusive: bool = False,
    ) -> Self:
        """Register a test; an exclusive test replaces earlier tests of the same name."""
        if not callable(predicate):
            raise SchemaUsageError(invalid_argument(
                f"test predicate must be callable, not: {predicate!r}", origin="schema.test",
            ).error)
        if exclusive and not name:
            raise SchemaUsageError(invalid_argument(
                "Exclusive tests must provide a unique `name` identifying the test",
                origin="schema.test",
            ).error)

        new_test = SchemaTest(
            predicate=predicate,
            name=name,
            message=message or MIXED["default"],
            params=dict(params or {}),
            exclusive=exclusive,
        )
        is_exclusive = exclusive or (
            name is not None and any(t.name == name and t.exclusive for t in self.tests)
        )

        next_schema = self.clone()
        next_schema.tests = [
            t for t in next_schema.tests
            if not (name and t.name == name and (is_exclusive or t.predicate is predicate))
        ]
        next_schema.tests.append(new_test)
        return next_schema

    def transform(self, fn: Transform) -> Self:
        """Append a cast transform ``fn(value, original_value, schema)``."""
        next_schema = self.clone()
        next_schema.transforms.append(fn)
        return next_schema

    def default(self, value: Any) -> Self:
        """Value (or zero-argument factory) used when the input is absent."""
        return self.clone(default=value)

    def get_default(self) -> Any:
        default = self.spec.default
        if default is UNDEFINED:
            return UNDEFINED
        if callable(default):
            return default()
        return copy.deepcopy(default)

    def required(self, message: Message | None = None) -> Self:
        next_schema = self.clone(presence=Presence.REQUIRED)
        with next_schema.mutation_batch():
            next_schema.test(
                _present,
                name="required",
                message=message or MIXED["required"],
                exclusive=True,
            )
        return next_schema

    def defined(self, message: Message | None = None) -> Self:
        next_schema = self.clone(presence=Presence.DEFINED)
        with next_schema.mutation_batch():
            next_schema.test(
                _defined,
                name="defined",
                message=message or MIXED["defined"],
                exclusive=True,
            )
        return next_schema

    def not_required(self) -> Self:
        next_schema = self.clone(presence=Presence.OPTIONAL)
        next_schema.tests = [t for t in next_schema.tests if t.name not in ("required", "defined")]
        return next_schema

    def nullable(self, is_nullable: bool = True) -> Self:
        return self.clone(nullable=is_nullable)

    def strict(self, is_strict: bool = True) -> Self:
        return self.clone(strict=is_strict)

    def abort_early(self, enabled: bool = True) -> Self:
        return self.clone(abort_early=enabled)

    def recursive(self, enabled: bool = True) -> Self:
        return self.clone(recursive=enabled)

    def label(self, text: str) -> Self:
        return self.clone(label=text)

    def meta(self, **data: Any) -> Self:
        return self.clone(meta={**(self.spec.meta or {}), **data})

    def type_error(self, message: Message) -> Self:
        next_schema = self.clone()
        next_schema._type_error = type_error_test(message)
        return next_schema

    # ------------------------------------------------------------------
    # Casting
    # ------------------------------------------------------------------

    def cast(self, value: Any, **options: Any) -> Any:
        """Coerce ``value`` toward this schema's type. Never raises on bad input."""
        return self._cast(value, ValidationOptions(**options))

    def _cast(self, raw: Any, options: ValidationOptions) -> Any:
        value = raw
        if raw is not UNDEFINED:
            for fn in self.transforms:
                value = fn(value, raw, self)
        if value is UNDEFINED:
            value = self.get_default()
        return value

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_sync(self, value: Any, **options: Any) -> Result[Any, ValidationError]:
        """Validate on the caller's stack; asynchronous tests raise SyncValidationError."""
        return self._validate(value, ValidationOptions(**{**options, "sync": True}))

    async def validate(self, value: Any, **options: Any) -> Result[Any, ValidationError]:
        """Validate, letting tests suspend."""
        return await self._validate(value, ValidationOptions(**{**options, "sync": False}))

    def is_valid_sync(self, value: Any, **options: Any) -> bool:
        return self.validate_sync(value, **options).is_ok()

    async def is_valid(self, value: Any, **options: Any) -> bool:
        return (await self.validate(value, **options)).is_ok()

    def _validate(self, raw: Any, options: ValidationOptions) -> Outcome:
        if options.original_value is UNDEFINED:
            options = options.evolve(original_value=raw)
        value = raw if options.resolve_strict(self.spec) else self._cast(raw, options)
        return then(
            self._run_base_tests(value, options),
            lambda result: self._validate_inner(result, value, options),
            options.sync,
        )

    def _run_base_tests(self, value: Any, options: ValidationOptions) -> Outcome:
        """Type check first; registered tests only run on a well-typed value."""
        abort_early = options.resolve_abort_early(self.spec)

        def plan(tests: list[SchemaTest]) -> RunPlan:
            return RunPlan(
                tasks=[partial(t.run, value, options, self) for t in tests],
                value=value,
                path=options.path,
                abort_early=abort_early,
                sync=options.sync,
            )

        return then(
            run_tests(plan([self._type_error])),
            lambda result: result if result.is_err() else run_tests(plan(self.tests)),
            options.sync,
        )

    def _validate_inner(
        self, result: Result[Any, ValidationError], value: Any, options: ValidationOptions
    ) -> Outcome:
        """Type-specific phase after the base tests; composite schemas descend here."""
        return result

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def describe(self) -> SchemaDescription:
        seen: set[str | None] = set()
        tests = []
        for t in self.tests:
            if t.name in seen:
                continue
            seen.add(t.name)
            tests.append(TestDescription(**t.describe()))
        return SchemaDescription(
            type=self.type_name,
            label=self.spec.label,
            meta=dict(self.spec.meta) if self.spec.meta else None,
            optional=self.spec.presence is Presence.OPTIONAL,
            nullable=self.spec.nullable,
            tests=tests,
        )


def _present(value: Any, ctx: TestContext) -> bool:
    return ctx.schema._is_present(value)


def _defined(value: Any, ctx: TestContext) -> bool:
    return value is not UNDEFINED


def is_schema(obj: Any) -> bool:
    """True for any schema instance."""
    return isinstance(obj, Schema)


def mixed() -> Schema:
    return Schema()


__all__ = ["Schema", "Transform", "is_schema", "mixed"]
