"""Role guard — which roles may perform which actions.

Usage:
    from app.core.role_guard import ensure_allowed
    ensure_allowed(actor.role, "approve_request")
"""

from app.models.user import ROLE_EMPLOYEE, ROLE_MANAGER, ROLE_TECHNICIAN
from app.utils.exceptions import NotAuthorizedError

_ALL_ROLES: frozenset[str] = frozenset({ROLE_EMPLOYEE, ROLE_TECHNICIAN, ROLE_MANAGER})
_FIELD_ROLES: frozenset[str] = frozenset({ROLE_TECHNICIAN, ROLE_MANAGER})
_MANAGER_ONLY: frozenset[str] = frozenset({ROLE_MANAGER})

ACTION_ROLES: dict[str, frozenset[str]] = {
    # Work request lifecycle
    "submit_request": _ALL_ROLES,
    "approve_request": _MANAGER_ONLY,
    "deny_request": _MANAGER_ONLY,
    "start_work": _FIELD_ROLES,
    "resolve_work": _FIELD_ROLES,
    "mark_cannot_resolve": _FIELD_ROLES,
    # Ownership (submitter or manager) is checked by the lifecycle
    "confirm_completion": _ALL_ROLES,
    "close_request": _MANAGER_ONLY,
    # Field work
    "create_service_report": _FIELD_ROLES,
    "complete_pm_schedule": _FIELD_ROLES,
    # Management
    "create_asset": _MANAGER_ONLY,
    "update_asset": _MANAGER_ONLY,
    "create_pm_schedule": _MANAGER_ONLY,
    "deactivate_pm_schedule": _MANAGER_ONLY,
    "view_dashboard": _MANAGER_ONLY,
    "manage_users": _MANAGER_ONLY,
    "list_technicians": _MANAGER_ONLY,
}


def is_allowed(role: str | None, action: str) -> bool:
    """Return whether ``role`` may perform ``action``. Unknown actions are denied."""
    allowed: frozenset[str] | None = ACTION_ROLES.get(action)
    return allowed is not None and role in allowed


def ensure_allowed(role: str | None, action: str) -> None:
    """Raise NotAuthorizedError unless ``role`` may perform ``action``.

    Args:
        role: Actor role ("employee", "technician", "manager")
        action: Action key from ACTION_ROLES

    Raises:
        NotAuthorizedError: When the role is not allowed
    """
    if not is_allowed(role, action):
        raise NotAuthorizedError(f"Role '{role}' is not allowed to {action.replace('_', ' ')}")
