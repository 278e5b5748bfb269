"""Derived work metrics — turnaround time, man-hours, parts cost.

All functions are pure. Naive datetimes are read as UTC because some
drivers (SQLite) drop the offset on the way back from the database.
"""

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable

from app.utils.exceptions import InvalidInputError

SECONDS_PER_HOUR: int = 3600


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def turnaround_hours(created_at: datetime, closed_at: datetime) -> int:
    """Whole hours between request creation and closure, rounded half up.

    Args:
        created_at: Request creation moment
        closed_at: Request closure moment

    Returns:
        int: Rounded elapsed hours

    Raises:
        ValueError: When closed_at precedes created_at
    """
    created: datetime = as_utc(created_at)
    closed: datetime = as_utc(closed_at)
    if closed < created:
        raise ValueError(f"closed_at {closed.isoformat()} precedes created_at {created.isoformat()}")
    hours: float = (closed - created).total_seconds() / SECONDS_PER_HOUR
    return math.floor(hours + 0.5)


def man_hours(start: datetime, end: datetime) -> float:
    """Elapsed hours between work start and end.

    Raises:
        InvalidInputError: When end is not after start
    """
    start_utc: datetime = as_utc(start)
    end_utc: datetime = as_utc(end)
    if end_utc <= start_utc:
        raise InvalidInputError("Work end time must be after work start time")
    return (end_utc - start_utc).total_seconds() / SECONDS_PER_HOUR


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def total_parts_cost(parts: Iterable[Any]) -> Decimal:
    """Sum of ``quantity * cost`` over a parts list.

    Each part exposes ``quantity`` and ``cost`` attributes (request schema
    or ORM line item). An empty list costs zero.

    Raises:
        InvalidInputError: When any quantity or cost is negative
    """
    total: Decimal = Decimal("0")
    for part in parts:
        quantity: Decimal = _to_decimal(part.quantity)
        cost: Decimal = _to_decimal(part.cost)
        if quantity < 0 or cost < 0:
            raise InvalidInputError("Part quantity and cost cannot be negative")
        total += quantity * cost
    return total
