"""Document Payloads: pure helpers that shape client payloads before they reach storage.

Invariants:
    - Pure functions, no IO, input dicts never mutated
    - A field counts as absent when missing, None, or the empty string
    - Protected keys (identity, createdAt) are dropped, never rejected
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

CREATED_AT = "createdAt"

# Range of a signed 64-bit INTEGER column
INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_absent(value: Any) -> bool:
    return value is None or value == ""


def missing_fields(fields: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    """Return the required field names that are absent from the payload, in order."""
    return [name for name in required if is_absent(fields.get(name))]


def strip_protected(fields: Mapping[str, Any], protected: Iterable[str]) -> dict[str, Any]:
    """Copy of ``fields`` without the protected keys."""
    blocked = set(protected)
    return {k: v for k, v in fields.items() if k not in blocked}


def split_fields(
    fields: Mapping[str, Any], columns: Mapping[str, str],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a payload into (column values keyed by attribute, extra attributes).

    ``columns`` maps document keys to ORM attribute names, e.g.
    ``{"isActive": "is_active"}``.
    """
    column_values: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in fields.items():
        if key in columns:
            column_values[columns[key]] = value
        else:
            extra[key] = value
    return column_values, extra


def format_missing(names: list[str]) -> str:
    """Human-readable message for missing required fields.

    >>> format_missing(["name", "email"])
    'name and email are required'
    """
    if len(names) == 1:
        return f"{names[0]} is required"
    return f"{', '.join(names[:-1])} and {names[-1]} are required"


def clamp_integer(value: int) -> int:
    """Clamp ``value`` into the storable INTEGER range.

    Comparisons against a clamped bound select the same rows as against the
    original value, since no stored integer lies outside the range.
    """
    return max(INTEGER_MIN, min(value, INTEGER_MAX))
