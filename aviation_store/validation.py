"""
Caller-side input validation.

Screens collect every field as text. These helpers turn that text into
record values and report problems as ``MalformedInput`` naming the field.
The store itself does not validate beyond SQLite's type handling.
"""

import re
from datetime import datetime
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import MalformedInput

ModelT = TypeVar("ModelT", bound=BaseModel)

DATE_FORMAT = "%Y-%m-%d"
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def require_text(value: Any, field: str) -> str:
    """Return stripped text, rejecting missing or blank values."""
    if value is None or not str(value).strip():
        raise MalformedInput(field, "is required")
    return str(value).strip()


def parse_int(value: Any, field: str) -> int:
    """Parse integer text such as a capacity or an id."""
    if isinstance(value, bool):
        raise MalformedInput(field, "must be a whole number")
    if isinstance(value, int):
        return value
    raw = require_text(value, field)
    if not INTEGER_PATTERN.fullmatch(raw):
        raise MalformedInput(field, f"must be a whole number, got {raw!r}")
    return int(raw)


def parse_date(value: Any, field: str) -> str:
    """Check ``YYYY-MM-DD`` date text and return it normalized."""
    raw = require_text(value, field)
    try:
        return datetime.strptime(raw, DATE_FORMAT).strftime(DATE_FORMAT)
    except ValueError:
        raise MalformedInput(field, f"must be a date in YYYY-MM-DD format, got {raw!r}")


def build_record(model: Type[ModelT], **fields: Any) -> ModelT:
    """
    Build a record from raw field values.

    Args:
        model: Record model class
        **fields: Field values by attribute name

    Raises:
        MalformedInput: For the first field pydantic rejects
    """
    try:
        return model(**fields)
    except ValidationError as e:
        error = e.errors()[0]
        field = _field_name(model, error["loc"][0]) if error["loc"] else model.__name__
        raise MalformedInput(field, error["msg"]) from e


def _field_name(model: Type[BaseModel], loc_part: Any) -> str:
    """Map a pydantic error location back to the attribute name callers pass."""
    for name, info in model.model_fields.items():
        if loc_part in (name, info.alias):
            return name
    return str(loc_part)
