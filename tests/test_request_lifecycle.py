"""Work request state machine tests.

The planning functions are exercised on transient ORM instances; nothing
here touches the database.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any

import pytest

from app.core import request_lifecycle as lifecycle
from app.models.asset import Asset
from app.models.user import User
from app.models.work_request import STATUSES, WorkRequest
from app.utils.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    InvariantViolationError,
    NotAuthorizedError,
)

UTC = timezone.utc
CREATED = datetime(2024, 1, 1, 0, 0, tzinfo=UTC)


def make_user(role: str, name: str = "User", active: bool = True) -> User:
    return User(id=uuid.uuid4(), username=name.lower(), full_name=name, role=role, is_active=active)


EMPLOYEE = make_user("employee", "Erin")
OTHER = make_user("employee", "Oscar")
TECH = make_user("technician", "Tara")
MANAGER = make_user("manager", "Max")


def make_request(status: str = "pending", **fields: Any) -> WorkRequest:
    values: dict[str, Any] = {
        "id": uuid.uuid4(),
        "request_id": "REQ-1001",
        "tswr_no": "TSWR-24-001",
        "asset_code": "EQP-001",
        "asset_name": "Air Compressor",
        "location": "Plant 1",
        "work_description": "Leaking valve",
        "urgency": "immediately",
        "status": status,
        "submitted_by": EMPLOYEE.id,
        "submitted_by_name": EMPLOYEE.full_name,
        "requester_confirmed_at": None,
        "version": 1,
        "created_at": CREATED,
    }
    values.update(fields)
    return WorkRequest(**values)


def run(name: str, request: WorkRequest, actor: User) -> dict[str, Any]:
    """Invoke a transition with valid inputs."""
    if name == "approve":
        return lifecycle.plan_approve(request, actor, TECH, date(2024, 1, 5))
    if name == "deny":
        return lifecycle.plan_deny(request, actor, "Not needed")
    if name == "start":
        return lifecycle.plan_start(request, actor)
    if name == "resolve":
        return lifecycle.plan_resolve(request, actor)
    if name == "cannot_resolve":
        return lifecycle.plan_cannot_resolve(request, actor, "Part discontinued")
    if name == "confirm":
        return lifecycle.plan_confirm(request, actor, "Works now")
    if name == "close":
        return lifecycle.plan_close(request, actor)
    raise AssertionError(name)


class TestSubmission:

    def test_new_request_is_pending_with_asset_snapshot(self):
        asset = Asset(id=uuid.uuid4(), asset_code="EQP-001", name="Air Compressor", location="Plant 1")
        values = lifecycle.plan_submission(
            EMPLOYEE, asset, "REQ-1001", "TSWR-24-001", "Leaking valve", "standstill", True, now=CREATED,
        )
        assert values["status"] == "pending"
        assert values["asset_name"] == "Air Compressor"
        assert values["location"] == "Plant 1"
        assert values["submitted_by"] == EMPLOYEE.id
        assert values["created_at"] == CREATED

    def test_blank_description_rejected(self):
        asset = Asset(id=uuid.uuid4(), asset_code="EQP-001", name="A", location="L")
        with pytest.raises(InvalidInputError):
            lifecycle.plan_submission(EMPLOYEE, asset, "REQ-1001", "TSWR-24-001", "   ", "standstill", False)

    def test_unknown_urgency_rejected(self):
        asset = Asset(id=uuid.uuid4(), asset_code="EQP-001", name="A", location="L")
        with pytest.raises(InvalidInputError):
            lifecycle.plan_submission(EMPLOYEE, asset, "REQ-1001", "TSWR-24-001", "Fix", "whenever", False)


class TestApprove:

    def test_pending_becomes_scheduled(self):
        changes = lifecycle.plan_approve(make_request(), MANAGER, TECH, date(2024, 1, 5), urgency="on_occasion")
        assert changes["status"] == "scheduled"
        assert changes["assigned_to"] == TECH.id
        assert changes["assigned_to_name"] == "Tara"
        assert changes["approved_by"] == MANAGER.id
        assert changes["scheduled_date"] == date(2024, 1, 5)
        assert changes["urgency"] == "on_occasion"

    def test_urgency_untouched_without_override(self):
        changes = lifecycle.plan_approve(make_request(), MANAGER, TECH, date(2024, 1, 5))
        assert "urgency" not in changes

    def test_approve_twice_is_invalid_transition(self):
        with pytest.raises(InvalidTransitionError):
            lifecycle.plan_approve(make_request("scheduled"), MANAGER, TECH, date(2024, 1, 5))

    def test_employee_cannot_approve(self):
        with pytest.raises(NotAuthorizedError):
            lifecycle.plan_approve(make_request(), EMPLOYEE, TECH, date(2024, 1, 5))

    def test_assignee_must_be_technician(self):
        with pytest.raises(InvalidInputError):
            lifecycle.plan_approve(make_request(), MANAGER, OTHER, date(2024, 1, 5))

    def test_assignee_must_be_active(self):
        retired = make_user("technician", "Ret", active=False)
        with pytest.raises(InvalidInputError):
            lifecycle.plan_approve(make_request(), MANAGER, retired, date(2024, 1, 5))

    def test_request_is_not_mutated(self):
        request = make_request()
        lifecycle.plan_approve(request, MANAGER, TECH, date(2024, 1, 5))
        assert request.status == "pending"
        assert request.assigned_to is None


class TestDenyAndCannotResolve:

    def test_deny_records_reason(self):
        changes = lifecycle.plan_deny(make_request(), MANAGER, "Duplicate of REQ-1000")
        assert changes["status"] == "denied"
        assert changes["denial_reason"] == "Duplicate of REQ-1000"

    def test_deny_requires_reason(self):
        with pytest.raises(InvalidInputError):
            lifecycle.plan_deny(make_request(), MANAGER, "  ")

    def test_cannot_resolve_requires_reason(self):
        with pytest.raises(InvalidInputError):
            lifecycle.plan_cannot_resolve(make_request("ongoing"), TECH, "")

    def test_cannot_resolve_from_ongoing(self):
        changes = lifecycle.plan_cannot_resolve(make_request("ongoing"), TECH, "Needs vendor")
        assert changes == {"status": "cannot_resolve", "cannot_resolve_reason": "Needs vendor"}

    def test_status_guard_precedes_input_check(self):
        with pytest.raises(InvalidTransitionError):
            lifecycle.plan_deny(make_request("scheduled"), MANAGER, "")


class TestWork:

    def test_start_sets_started_at(self):
        now = datetime(2024, 1, 5, 8, tzinfo=UTC)
        changes = lifecycle.plan_start(make_request("scheduled"), TECH, now=now)
        assert changes == {"status": "ongoing", "started_at": now}

    def test_resolve_sets_resolved_at(self):
        now = datetime(2024, 1, 5, 10, tzinfo=UTC)
        changes = lifecycle.plan_resolve(make_request("ongoing"), TECH, now=now)
        assert changes == {"status": "resolved", "resolved_at": now}

    def test_employee_cannot_start(self):
        with pytest.raises(NotAuthorizedError):
            lifecycle.plan_start(make_request("scheduled"), EMPLOYEE)


class TestConfirmAndClose:

    def test_submitter_confirms(self):
        changes = lifecycle.plan_confirm(make_request("resolved"), EMPLOYEE, "Thanks")
        assert changes["requester_feedback"] == "Thanks"
        assert "status" not in changes

    def test_manager_confirms(self):
        assert lifecycle.plan_confirm(make_request("resolved"), MANAGER, "Checked")["requester_feedback"] == "Checked"

    def test_third_party_cannot_confirm(self):
        with pytest.raises(NotAuthorizedError):
            lifecycle.plan_confirm(make_request("resolved"), OTHER, "Looks fine")

    def test_assigned_technician_cannot_confirm(self):
        with pytest.raises(NotAuthorizedError):
            lifecycle.plan_confirm(make_request("resolved", assigned_to=TECH.id), TECH, "Done")

    def test_second_confirmation_rejected(self):
        request = make_request("resolved", requester_confirmed_at=datetime(2024, 1, 3, tzinfo=UTC))
        with pytest.raises(InvalidTransitionError):
            lifecycle.plan_confirm(request, EMPLOYEE, "Again")

    def test_confirm_requires_feedback(self):
        with pytest.raises(InvalidInputError):
            lifecycle.plan_confirm(make_request("resolved"), EMPLOYEE, " ")

    def test_close_requires_confirmation(self):
        with pytest.raises(InvalidTransitionError):
            lifecycle.plan_close(make_request("resolved"), MANAGER)

    def test_close_computes_turnaround(self):
        request = make_request("resolved", requester_confirmed_at=datetime(2024, 1, 3, tzinfo=UTC))
        closed_at = datetime(2024, 1, 3, 12, 0, tzinfo=UTC)
        changes = lifecycle.plan_close(request, MANAGER, now=closed_at)
        assert changes["status"] == "closed"
        assert changes["turnaround_time"] == 60
        assert changes["closed_by"] == MANAGER.id
        assert changes["closed_at"] == closed_at


class TestClosedIsFinal:

    @pytest.mark.parametrize("name", list(lifecycle.TRANSITIONS))
    @pytest.mark.parametrize("actor", [MANAGER, EMPLOYEE], ids=["manager", "employee"])
    def test_every_transition_locked(self, name, actor):
        request = make_request("closed", requester_confirmed_at=datetime(2024, 1, 3, tzinfo=UTC))
        with pytest.raises(InvariantViolationError) as exc:
            run(name, request, actor)
        assert exc.value.status_code == 423


def _unlisted_pairs() -> list[tuple[str, str]]:
    return [
        (name, status)
        for name, transition in lifecycle.TRANSITIONS.items()
        for status in STATUSES
        if status not in transition.sources and status != "closed"
    ]


@pytest.mark.parametrize("name, status", _unlisted_pairs())
def test_transitions_outside_the_graph_rejected(name, status):
    request = make_request(status, requester_confirmed_at=datetime(2024, 1, 3, tzinfo=UTC))
    with pytest.raises(InvalidTransitionError):
        run(name, request, MANAGER)
