"""Default validation messages.

Templates use ``${param}`` placeholders; a callable template receives the
resolved params dict and returns the message.
"""
from __future__ import annotations

from typing import Any, Callable, Union

from .util import UNDEFINED, print_value

Message = Union[str, Callable[[dict[str, Any]], str]]


def _not_type(params: dict[str, Any]) -> str:
    path, type_name = params["path"], params["type"]
    value, original = params.get("value"), params.get("original_value", UNDEFINED)
    is_cast = original is not UNDEFINED and original is not value and original != value
    message = (
        f"{path} must be a `{type_name}` type, but the final value was: "
        f"`{print_value(value, True)}`"
    )
    if is_cast:
        message += f" (cast from the value `{print_value(original, True)}`)."
    if value is None:
        message += (
            '\n If "null" is intended as an empty value be sure to mark '
            "the schema as `.nullable()`"
        )
    return message


MIXED: dict[str, Message] = {
    "default": "${path} is invalid",
    "required": "${path} is a required field",
    "defined": "${path} must be defined",
    "not_type": _not_type,
}

ARRAY: dict[str, Message] = {
    "min": "${path} field must have at least ${min} items",
    "max": "${path} field must have less than or equal to ${max} items",
}

NUMBER: dict[str, Message] = {
    "min": "${path} must be greater than or equal to ${min}",
    "max": "${path} must be less than or equal to ${max}",
    "less_than": "${path} must be less than ${less}",
    "more_than": "${path} must be greater than ${more}",
    "positive": "${path} must be a positive number",
    "negative": "${path} must be a negative number",
    "integer": "${path} must be an integer",
}

STRING: dict[str, Message] = {
    "length": "${path} must be exactly ${length} characters",
    "min": "${path} must be at least ${min} characters",
    "max": "${path} must be at most ${max} characters",
    "matches": '${path} must match the following: "${regex}"',
    "trim": "${path} must be a trimmed string",
}
