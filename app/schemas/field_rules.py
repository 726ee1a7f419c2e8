"""
Reusable per-field request rules.

Each rule is an ``Annotated`` type whose ``BeforeValidator`` receives the raw
JSON value (``None`` when the field is absent) and raises a
``PydanticCustomError`` carrying the client-facing message. Fields using these
rules must be declared with ``Field(default=None, validate_default=True)`` so a
missing field is reported with the rule's own message rather than pydantic's
generic "Field required".
"""

import re
from decimal import Decimal
from functools import partial
from typing import Annotated, Any, List, Optional

from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError

NUMERIC_PATTERN = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
BOOLEAN_STRINGS = {"true": True, "false": False, "1": True, "0": False}


def coerce_to_string(value: Any) -> Optional[str]:
    """Render a scalar JSON value as the string the rules inspect.

    Returns None for arrays and objects, which no scalar rule accepts.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        return _positional(value)
    if isinstance(value, str):
        return value
    return None


def _positional(value) -> str:
    # Plain digits, never exponent notation: 1e-05 -> "0.00001", 100.0 -> "100"
    number = Decimal(repr(value)) if isinstance(value, float) else value
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _check_not_empty(value: Any, *, message: str) -> str:
    text = coerce_to_string(value)
    if not text:
        raise PydanticCustomError("not_empty", message)
    return text


def _check_numeric(value: Any, *, message: str) -> Decimal:
    text = coerce_to_string(value)
    if not text or not NUMERIC_PATTERN.match(text):
        raise PydanticCustomError("not_numeric", message)
    return Decimal(text)


def _check_boolean(value: Any, *, message: str) -> bool:
    text = coerce_to_string(value)
    if text not in BOOLEAN_STRINGS:
        raise PydanticCustomError("not_boolean", message)
    return BOOLEAN_STRINGS[text]


def _check_min_items(value: Any, *, minimum: int, message: str) -> list:
    if not isinstance(value, list) or len(value) < minimum:
        raise PydanticCustomError("too_few_items", message)
    return value


def non_empty(message: str):
    return Annotated[str, BeforeValidator(partial(_check_not_empty, message=message))]


def numeric(message: str):
    return Annotated[Decimal, BeforeValidator(partial(_check_numeric, message=message))]


def boolean(message: str):
    return Annotated[bool, BeforeValidator(partial(_check_boolean, message=message))]


def min_items(minimum: int, message: str):
    return Annotated[
        List[Any],
        BeforeValidator(partial(_check_min_items, minimum=minimum, message=message)),
    ]
