"""Work request lifecycle — the TSWR state machine.

Each ``plan_*`` function validates one transition against the current
request and the acting user, and returns the field changes it would make.
Nothing is mutated here; the work request service applies the returned
changes through a conditional update so a concurrent writer cannot slip
in between the check and the write.

Guard order for every transition:
    1. closed request -> InvariantViolationError
    2. role not allowed -> NotAuthorizedError
    3. status guard fails -> InvalidTransitionError
    4. required input missing -> InvalidInputError

Status Flow:
    pending -> scheduled | denied
    scheduled -> ongoing
    ongoing -> resolved | cannot_resolve
    resolved -> closed (after requester confirmation)
"""

from datetime import date, datetime, timezone
from typing import Any, NamedTuple

from app.core.metrics import turnaround_hours
from app.core.role_guard import ensure_allowed
from app.models.asset import Asset
from app.models.user import ROLE_MANAGER, ROLE_TECHNICIAN, User
from app.models.work_request import URGENCIES, WorkRequest
from app.utils.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    InvariantViolationError,
    NotAuthorizedError,
)


class Transition(NamedTuple):
    """One edge set of the state machine."""

    action: str  # role guard action key
    sources: tuple[str, ...]  # statuses the transition may start from
    target: str | None  # resulting status, None when the status is unchanged


TRANSITIONS: dict[str, Transition] = {
    "approve": Transition("approve_request", ("pending",), "scheduled"),
    "deny": Transition("deny_request", ("pending",), "denied"),
    "start": Transition("start_work", ("scheduled",), "ongoing"),
    "resolve": Transition("resolve_work", ("ongoing",), "resolved"),
    "cannot_resolve": Transition("mark_cannot_resolve", ("ongoing",), "cannot_resolve"),
    "confirm": Transition("confirm_completion", ("resolved",), None),
    "close": Transition("close_request", ("resolved",), "closed"),
}

TERMINAL_STATUSES: tuple[str, ...] = ("denied", "cannot_resolve", "closed")


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def ensure_mutable(request: WorkRequest) -> None:
    """Raise InvariantViolationError when the request is closed."""
    if request.status == "closed":
        raise InvariantViolationError(
            f"Work request {request.request_id} is closed and can no longer change"
        )


def _ensure_status(request: WorkRequest, name: str) -> None:
    transition: Transition = TRANSITIONS[name]
    if request.status not in transition.sources:
        raise InvalidTransitionError(
            f"Cannot {name.replace('_', ' ')} work request {request.request_id} "
            f"in '{request.status}' status (requires {' or '.join(transition.sources)})"
        )


def check_transition(request: WorkRequest, actor: User, name: str) -> Transition:
    """Run guards 1-3 for a named transition and return its definition."""
    transition: Transition = TRANSITIONS[name]
    ensure_mutable(request)
    ensure_allowed(actor.role, transition.action)
    _ensure_status(request, name)
    return transition


def _required_text(value: str | None, field: str) -> str:
    text: str = (value or "").strip()
    if not text:
        raise InvalidInputError(f"{field} is required")
    return text


def plan_submission(
    actor: User,
    asset: Asset,
    request_id: str,
    tswr_no: str,
    work_description: str,
    urgency: str,
    disrupts_operation: bool,
    attachment_url: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the field set of a newly submitted request.

    Args:
        actor: Submitting user (any role)
        asset: Resolved target asset
        request_id: Next sequential request number
        tswr_no: Next TSWR form number
        work_description: Requested work
        urgency: One of URGENCIES
        disrupts_operation: Whether operations are disrupted
        attachment_url: Optional attachment reference
        now: Creation moment (defaults to current UTC time)

    Returns:
        dict[str, Any]: Column values for the new WorkRequest
    """
    ensure_allowed(actor.role, "submit_request")
    if urgency not in URGENCIES:
        raise InvalidInputError(f"Unknown urgency '{urgency}'")
    created_at: datetime = _now(now)
    return {
        "request_id": request_id,
        "tswr_no": tswr_no,
        "asset_id": asset.id,
        "asset_code": asset.asset_code,
        "asset_name": asset.name,
        "location": asset.location,
        "work_description": _required_text(work_description, "Work description"),
        "urgency": urgency,
        "disrupts_operation": disrupts_operation,
        "attachment_url": attachment_url,
        "status": "pending",
        "submitted_by": actor.id,
        "submitted_by_name": actor.full_name,
        "version": 1,
        "created_at": created_at,
        "updated_at": created_at,
    }


def plan_approve(
    request: WorkRequest,
    actor: User,
    technician: User,
    scheduled_date: date,
    urgency: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """pending -> scheduled. Records approver, assignment and schedule date."""
    transition: Transition = check_transition(request, actor, "approve")
    if technician.role != ROLE_TECHNICIAN or not technician.is_active:
        raise InvalidInputError(f"User '{technician.username}' is not an active technician")
    if urgency is not None and urgency not in URGENCIES:
        raise InvalidInputError(f"Unknown urgency '{urgency}'")

    changes: dict[str, Any] = {
        "status": transition.target,
        "approved_by": actor.id,
        "approved_by_name": actor.full_name,
        "approved_at": _now(now),
        "assigned_to": technician.id,
        "assigned_to_name": technician.full_name,
        "scheduled_date": scheduled_date,
    }
    if urgency is not None:
        changes["urgency"] = urgency
    return changes


def plan_deny(
    request: WorkRequest,
    actor: User,
    reason: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """pending -> denied. Records approver and denial reason."""
    transition: Transition = check_transition(request, actor, "deny")
    return {
        "status": transition.target,
        "approved_by": actor.id,
        "approved_by_name": actor.full_name,
        "approved_at": _now(now),
        "denial_reason": _required_text(reason, "Denial reason"),
    }


def plan_start(request: WorkRequest, actor: User, now: datetime | None = None) -> dict[str, Any]:
    """scheduled -> ongoing."""
    transition: Transition = check_transition(request, actor, "start")
    return {"status": transition.target, "started_at": _now(now)}


def plan_resolve(request: WorkRequest, actor: User, now: datetime | None = None) -> dict[str, Any]:
    """ongoing -> resolved. Records resolution time."""
    transition: Transition = check_transition(request, actor, "resolve")
    return {"status": transition.target, "resolved_at": _now(now)}


def plan_cannot_resolve(request: WorkRequest, actor: User, reason: str) -> dict[str, Any]:
    """ongoing -> cannot_resolve. Records the reason."""
    transition: Transition = check_transition(request, actor, "cannot_resolve")
    return {
        "status": transition.target,
        "cannot_resolve_reason": _required_text(reason, "Reason"),
    }


def plan_confirm(
    request: WorkRequest,
    actor: User,
    feedback: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Requester confirmation of a resolved request. Status is unchanged.

    Only the original submitter or a manager may confirm, and only once.
    """
    ensure_mutable(request)
    ensure_allowed(actor.role, TRANSITIONS["confirm"].action)
    if actor.id != request.submitted_by and actor.role != ROLE_MANAGER:
        raise NotAuthorizedError("Only the original requester or a manager can confirm completion")
    _ensure_status(request, "confirm")
    if request.requester_confirmed_at is not None:
        raise InvalidTransitionError(f"Work request {request.request_id} is already confirmed")
    return {
        "requester_feedback": _required_text(feedback, "Feedback"),
        "requester_confirmed_at": _now(now),
    }


def plan_close(request: WorkRequest, actor: User, now: datetime | None = None) -> dict[str, Any]:
    """resolved (+ confirmed) -> closed. Records closer and turnaround time."""
    transition: Transition = check_transition(request, actor, "close")
    if request.requester_confirmed_at is None:
        raise InvalidTransitionError(
            f"Work request {request.request_id} must be confirmed by the requester before closing"
        )
    closed_at: datetime = _now(now)
    return {
        "status": transition.target,
        "closed_at": closed_at,
        "closed_by": actor.id,
        "closed_by_name": actor.full_name,
        "turnaround_time": turnaround_hours(request.created_at, closed_at),
    }
