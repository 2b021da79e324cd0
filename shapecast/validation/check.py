"""Named validation tests.

A test wraps a predicate ``(value, ctx) -> bool | ValidationError`` with a
name, a message template and params. Predicates may return an awaitable
only when validation runs asynchronously; in synchronous mode that is a
usage error.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Union

from shapecast.errors import Err, Ok, Result, SyncValidationError, sync_mode_violation
from shapecast.logging import validation_logger

from .errors import ValidationError
from .locale import MIXED, Message
from .options import ValidationOptions
from .reference import Reference
from .util import UNDEFINED, is_awaitable

if TYPE_CHECKING:
    from .schema import Schema

log = validation_logger()

PredicateResult = Union[bool, ValidationError]
Predicate = Callable[[Any, "TestContext"], Union[PredicateResult, Awaitable[PredicateResult]]]


@dataclass(frozen=True, slots=True)
class SchemaTest:
    """A registered validation test."""
    __test__ = False

    predicate: Predicate
    name: str | None = None
    message: Message = MIXED["default"]
    params: Mapping[str, Any] = field(default_factory=dict)
    exclusive: bool = False

    def run(
        self, value: Any, options: ValidationOptions, schema: Schema
    ) -> Result[Any, ValidationError] | Awaitable[Result[Any, ValidationError]]:
        ctx = TestContext(self, value, options, schema)
        if options.sync:
            return self._run_sync(ctx)
        return self._run_async(ctx)

    def _run_sync(self, ctx: TestContext) -> Result[Any, ValidationError]:
        try:
            outcome = self.predicate(ctx.value, ctx)
        except ValidationError as error:
            return Err(error)
        if is_awaitable(outcome):
            if hasattr(outcome, "close"):
                outcome.close()
            log.warning("sync_mode_violation", test=self.name, path=ctx.path)
            raise SyncValidationError(sync_mode_violation(self.name or "anonymous", ctx.path).error)
        return ctx.settle(outcome)

    async def _run_async(self, ctx: TestContext) -> Result[Any, ValidationError]:
        try:
            outcome = self.predicate(ctx.value, ctx)
            if is_awaitable(outcome):
                outcome = await outcome
        except ValidationError as error:
            return Err(error)
        return ctx.settle(outcome)

    def describe(self) -> dict[str, Any]:
        params = {
            key: item.describe() if isinstance(item, Reference) else item
            for key, item in self.params.items()
        }
        return {"name": self.name, "params": params or None}


class TestContext:
    """What a predicate sees of the validation in progress."""
    __test__ = False

    __slots__ = ("test", "value", "options", "schema")

    def __init__(self, test: SchemaTest, value: Any, options: ValidationOptions, schema: Schema):
        self.test, self.value, self.options, self.schema = test, value, options, schema

    @property
    def path(self) -> str:
        return self.options.path

    @property
    def parent(self) -> Any:
        return self.options.parent

    @property
    def index(self) -> int | None:
        return self.options.index

    @property
    def original_value(self) -> Any:
        return self.options.original_value

    @property
    def context(self) -> Mapping[str, Any]:
        return self.options.context

    def resolve(self, item: Any) -> Any:
        """Resolve a Reference against the live state; other values pass through."""
        if isinstance(item, Reference):
            return item.get_value(self.value, self.parent, self.context)
        return item

    def create_error(
        self,
        *,
        path: str | None = None,
        message: Message | None = None,
        params: Mapping[str, Any] | None = None,
        type: str | None = None,
    ) -> ValidationError:
        raw = {
            "value": self.value,
            "original_value": self.original_value,
            "label": self.schema.spec.label,
            "path": path or self.path,
            **self.test.params,
            **(params or {}),
        }
        resolved = {key: self.resolve(item) for key, item in raw.items()}
        return ValidationError(
            ValidationError.format_message(message or self.test.message, resolved),
            value=self.value,
            path=resolved["path"],
            type=type or self.test.name,
            params=resolved,
        )

    def settle(self, outcome: PredicateResult) -> Result[Any, ValidationError]:
        if isinstance(outcome, ValidationError):
            return Err(outcome)
        if not outcome:
            return Err(self.create_error())
        return Ok(self.value)


def type_error_test(message: Message) -> SchemaTest:
    """Type check run before every other test; absent values pass."""

    def check(value: Any, ctx: TestContext) -> bool | ValidationError:
        if value is not UNDEFINED and not ctx.schema.is_type(value):
            return ctx.create_error(params={"type": ctx.schema.type_name})
        return True

    return SchemaTest(predicate=check, name="typeError", message=message)
