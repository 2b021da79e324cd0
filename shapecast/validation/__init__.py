"""Declarative Validation System

Schemas describe an expected shape. ``cast`` coerces loosely typed input
toward it without ever raising; ``validate_sync`` / ``validate`` check the
coerced value and return a Result carrying either the accepted value or one
ValidationError enumerating every violation found.

Key Features:
- Clone-per-call builders, with mutation batches for in-place assembly
- Array schemas with per-element casting and validation, sparse-safe
- Fail-fast (abort_early) or collect-all error aggregation
- Synchronous and asyncio execution sharing one aggregation algorithm
- Deferred references resolved at test time
- Structural descriptions (pydantic models) for tooling

Usage:
    from shapecast.validation import array, number

    scores = array(number().min(0)).min_length(1)

    match scores.validate_sync("[3, -1, 7]", abort_early=False):
        case Ok(values):
            ...
        case Err(error):
            print(error.messages)   # ['[1] must be greater than or equal to 0']
"""
from .array import ArraySchema, array
from .check import SchemaTest, TestContext
from .coercion import (
    CoercionRule,
    JSONText,
    StringToFloat,
    StringToInt,
    StringToNumber,
)
from .description import SchemaDescription, TestDescription
from .errors import ValidationError
from .locale import Message
from .number import NumberSchema, number
from .options import Presence, SchemaSpec, ValidationOptions
from .reference import Reference, ref
from .runner import RunPlan, run_tests
from .schema import Schema, is_schema, mixed
from .strings import StringSchema, string
from .util import UNDEFINED, is_absent, print_value, sparse_list

__all__ = [
    # Schemas
    "Schema",
    "ArraySchema",
    "NumberSchema",
    "StringSchema",
    "mixed",
    "array",
    "number",
    "string",
    "is_schema",
    # Tests
    "SchemaTest",
    "TestContext",
    "Message",
    # Options
    "Presence",
    "SchemaSpec",
    "ValidationOptions",
    # Errors
    "ValidationError",
    # Runner
    "RunPlan",
    "run_tests",
    # References
    "Reference",
    "ref",
    # Coercion
    "CoercionRule",
    "JSONText",
    "StringToFloat",
    "StringToInt",
    "StringToNumber",
    # Descriptions
    "SchemaDescription",
    "TestDescription",
    # Values
    "UNDEFINED",
    "is_absent",
    "print_value",
    "sparse_list",
]
