"""
DataUI Kernel — Record Values

Records are duck-typed mappings, but every value falls into one closed
variant. Each variant has explicit rules for:

  to_text     — stringification used for search / filter matching and the wire
  display     — what a table cell shows (see renderer.format_cell)
  sort_key    — position in the total order used by apply_sort

Variants and their rank in the total order:

  NUMBER  int / float (bool excluded)       0
  DATE    datetime.date / datetime.datetime 1
  STRING  str, bool, enum.Enum, anything else 2
  MISSING None (or field absent)            3

Within a rank, numbers compare numerically, dates chronologically, strings
by code point. Comparisons never cross ranks, so mixed columns never raise.
"""

from __future__ import annotations

import enum
import math
from datetime import UTC, date, datetime
from typing import Any

NUMBER = "number"
DATE = "date"
STRING = "string"
MISSING = "missing"

_RANKS: dict[str, int] = {NUMBER: 0, DATE: 1, STRING: 2, MISSING: 3}


def classify(value: Any) -> str:
    """Return the variant name for a raw record value."""
    if value is None:
        return MISSING
    if isinstance(value, bool):
        return STRING
    if isinstance(value, int | float):
        if isinstance(value, float) and math.isnan(value):
            return MISSING
        return NUMBER
    if isinstance(value, date):
        return DATE
    return STRING


def to_text(value: Any) -> str:
    """
    Stringify a value the way it is matched and sent over the wire.

    None → "" (so it never matches a non-empty filter), bools → "true"/"false",
    integral floats drop the trailing ".0", dates use ISO format,
    enums use their value.
    """
    kind = classify(value)
    if kind == MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if kind == NUMBER:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    if kind == DATE:
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return to_text(value.value)
    return str(value)


def matches(value: Any, needle: str) -> bool:
    """Case-insensitive substring containment on the stringified value."""
    return needle.lower() in to_text(value).lower()


def _normalize_date(value: date) -> datetime:
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def sort_key(value: Any) -> tuple[int, Any]:
    """Key implementing the total order described in the module docstring."""
    kind = classify(value)
    rank = _RANKS[kind]
    if kind == MISSING:
        return (rank, 0)
    if kind == NUMBER:
        return (rank, value)
    if kind == DATE:
        return (rank, _normalize_date(value))
    return (rank, to_text(value))


def get_field(record: Any, key: str) -> Any:
    """Field lookup that treats absent fields (and non-mapping records) as missing."""
    if isinstance(record, dict):
        return record.get(key)
    getter = getattr(record, "get", None)
    if callable(getter):
        return getter(key)
    return None


def record_values(record: Any) -> list[Any]:
    if isinstance(record, dict):
        return list(record.values())
    values = getattr(record, "values", None)
    if callable(values):
        return list(values())
    return []


def coerce(value: Any, value_kind: str) -> Any:
    """
    Read a string as the column's declared kind, for sorting.

    Records loaded from JSON carry numbers and dates as strings. In a
    "number" column a numeric string becomes a number; in a "date" column
    an ISO string becomes a datetime. Anything that does not parse, and
    every value in other kinds of column, is returned unchanged.
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    if value_kind == "number":
        try:
            number = float(text)
        except ValueError:
            return value
        return int(number) if number.is_integer() else number
    if value_kind == "date":
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return value
    return value
