"""shapecast - composable value coercion and validation."""
from shapecast.errors import (
    Err,
    Ok,
    Result,
    SchemaUsageError,
    SyncValidationError,
)
from shapecast.validation import (
    UNDEFINED,
    ArraySchema,
    NumberSchema,
    Reference,
    Schema,
    StringSchema,
    ValidationError,
    array,
    is_absent,
    is_schema,
    mixed,
    number,
    ref,
    sparse_list,
    string,
)

__version__ = "0.1.0"

__all__ = [
    "Err",
    "Ok",
    "Result",
    "SchemaUsageError",
    "SyncValidationError",
    "UNDEFINED",
    "ArraySchema",
    "NumberSchema",
    "Reference",
    "Schema",
    "StringSchema",
    "ValidationError",
    "array",
    "is_absent",
    "is_schema",
    "mixed",
    "number",
    "ref",
    "sparse_list",
    "string",
]
