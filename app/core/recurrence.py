"""Preventive maintenance recurrence.

A completed schedule is due again one fixed interval after the completion
moment, not after the previous due date. Late completions push the cadence
later and early ones pull it forward; that drift is accepted.
"""

from datetime import datetime, timedelta
from typing import Any

from app.core.metrics import as_utc
from app.models.maintenance import PMSchedule
from app.utils.exceptions import InvalidInputError, InvalidTransitionError

FREQUENCY_INTERVAL_DAYS: dict[str, int] = {
    "daily": 1,
    "weekly": 7,
    "monthly": 30,
    "quarterly": 90,
    "semi_annual": 180,
    "annual": 365,
}


def interval_for(frequency: str) -> timedelta:
    """Return the fixed interval for a frequency.

    Raises:
        InvalidInputError: When the frequency is unknown
    """
    days: int | None = FREQUENCY_INTERVAL_DAYS.get(frequency)
    if days is None:
        raise InvalidInputError(f"Unknown maintenance frequency '{frequency}'")
    return timedelta(days=days)


def plan_completion(schedule: PMSchedule, completion_time: datetime) -> dict[str, Any]:
    """Compute the field changes for completing a PM schedule.

    ``next_due_date`` becomes ``completion_time + interval``. The one
    exception is the same completion moment recorded twice: the second
    record pushes the current due date one more interval so the schedule
    still advances.

    Args:
        schedule: Schedule being completed
        completion_time: Completion moment

    Returns:
        dict[str, Any]: last_completed_date and next_due_date

    Raises:
        InvalidTransitionError: When the schedule is inactive
    """
    if not schedule.is_active:
        raise InvalidTransitionError(
            f"Maintenance schedule {schedule.schedule_id} is inactive and cannot be completed"
        )

    interval: timedelta = interval_for(schedule.frequency)
    completed: datetime = as_utc(completion_time)
    next_due: datetime = completed + interval

    last_completed: datetime | None = (
        as_utc(schedule.last_completed_date) if schedule.last_completed_date else None
    )
    if last_completed == completed and schedule.next_due_date is not None:
        current_due: datetime = as_utc(schedule.next_due_date)
        if next_due <= current_due:
            next_due = current_due + interval

    return {
        "last_completed_date": completed,
        "next_due_date": next_due,
    }
