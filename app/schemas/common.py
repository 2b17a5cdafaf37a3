"""Helpers shared by the request schemas."""

from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store every timestamp as naive UTC so both backends compare them the same way."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def reject_null(value):
    """Partial updates may omit a required column but never blank it."""
    if value is None:
        raise ValueError("field may not be null")
    return value
