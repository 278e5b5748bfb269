"""Role guard tests — action permission table."""

import pytest

from app.core.role_guard import ACTION_ROLES, ensure_allowed, is_allowed
from app.utils.exceptions import NotAuthorizedError


@pytest.mark.parametrize("role", ["employee", "technician", "manager"])
def test_everyone_can_submit(role):
    assert is_allowed(role, "submit_request")


@pytest.mark.parametrize("action", ["approve_request", "deny_request", "close_request"])
def test_decisions_are_manager_only(action):
    assert is_allowed("manager", action)
    assert not is_allowed("technician", action)
    assert not is_allowed("employee", action)


@pytest.mark.parametrize("action", [
    "start_work", "resolve_work", "mark_cannot_resolve",
    "create_service_report", "complete_pm_schedule",
])
def test_field_work_is_technician_or_manager(action):
    assert is_allowed("technician", action)
    assert is_allowed("manager", action)
    assert not is_allowed("employee", action)


def test_unknown_action_denied():
    assert not is_allowed("manager", "delete_everything")


def test_unknown_role_denied_everywhere():
    assert not any(is_allowed("contractor", action) for action in ACTION_ROLES)


def test_ensure_allowed_raises_forbidden():
    with pytest.raises(NotAuthorizedError) as exc:
        ensure_allowed("employee", "approve_request")
    assert exc.value.status_code == 403


def test_ensure_allowed_passes_silently():
    ensure_allowed("manager", "view_dashboard")
