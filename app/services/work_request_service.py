"""Work Request Service — Business logic for the TSWR lifecycle.

Every transition follows the same path: load the request, let the
lifecycle plan the field changes (which runs all guards), write them with
a conditional update, and append an audit event. Nothing is committed
here; the router commits once the whole call has succeeded.
"""

from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import request_lifecycle
from app.core.role_guard import ensure_allowed
from app.models.asset import Asset
from app.models.user import ROLE_EMPLOYEE, User
from app.models.work_request import RequestEvent, WorkRequest
from app.repositories.asset_repository import asset_repository
from app.repositories.user_repository import user_repository
from app.repositories.work_request_repository import work_request_repository
from app.schemas.common import PaginatedResponse
from app.schemas.work_request import (
    ApproveRequest,
    CannotResolveRequest,
    ConfirmRequest,
    DenyRequest,
    RequestEventResponse,
    WorkRequestCreate,
    WorkRequestResponse,
)
from app.utils.exceptions import DuplicateError, NotFoundError, NotAuthorizedError


class WorkRequestService:
    """Service handling work request submission, transitions and queries."""

    def _to_response(self, request: WorkRequest) -> WorkRequestResponse:
        return WorkRequestResponse.model_validate(request)

    async def _load(self, db: AsyncSession, request_id: str) -> WorkRequest:
        """Fetch a request by its request number.

        Raises:
            NotFoundError: Unknown request number
        """
        request: WorkRequest | None = await work_request_repository.get_by_request_id(db, request_id)
        if request is None:
            raise NotFoundError(f"Work request {request_id} not found")
        return request

    async def _apply(
        self,
        db: AsyncSession,
        request: WorkRequest,
        actor: User,
        action: str,
        changes: dict[str, Any],
        note: str | None = None,
    ) -> WorkRequest:
        """Write planned changes and record the audit event.

        Args:
            db: Async database session
            request: Request as loaded before planning
            actor: Acting user
            action: Transition name recorded on the event
            changes: Field changes returned by the lifecycle
            note: Reason or feedback carried by the transition

        Returns:
            WorkRequest: Refreshed request

        Raises:
            InvalidTransitionError: Another writer changed the request first
        """
        from_status: str = request.status
        await work_request_repository.apply_changes(db, request, changes)
        await work_request_repository.create_event(db, {
            "work_request_id": request.id,
            "action": action,
            "from_status": from_status,
            "to_status": request.status,
            "actor_id": actor.id,
            "actor_name": actor.full_name,
            "note": note,
        })
        return request

    async def submit(
        self,
        db: AsyncSession,
        actor: User,
        data: WorkRequestCreate,
        now: datetime | None = None,
    ) -> WorkRequestResponse:
        """File a new work request against an asset.

        Args:
            db: Async database session
            actor: Submitting user (any role)
            data: Submission payload
            now: Submission moment (defaults to current UTC time)

        Returns:
            WorkRequestResponse: The new request in "pending" status

        Raises:
            NotAuthorizedError: Role may not submit
            NotFoundError: Unknown asset code
            InvalidInputError: Blank description or unknown urgency
            DuplicateError: Request or TSWR number already taken
        """
        ensure_allowed(actor.role, "submit_request")
        asset: Asset | None = await asset_repository.get_by_code(db, data.asset_code)
        if asset is None:
            raise NotFoundError(f"Asset {data.asset_code} not found")

        created_at: datetime = now or datetime.now(timezone.utc)
        request_id, tswr_no = await work_request_repository.next_numbers(db, created_at)
        values: dict[str, Any] = request_lifecycle.plan_submission(
            actor=actor,
            asset=asset,
            request_id=request_id,
            tswr_no=tswr_no,
            work_description=data.work_description,
            urgency=data.urgency,
            disrupts_operation=data.disrupts_operation,
            attachment_url=data.attachment_url,
            now=created_at,
        )
        try:
            request: WorkRequest = await work_request_repository.create(db, values)
        except IntegrityError:
            # Numbers are derived from row counts; a concurrent submit can take the same one
            raise DuplicateError(f"Request number {request_id} was taken by another submission, please retry")
        await work_request_repository.create_event(db, {
            "work_request_id": request.id,
            "action": "submit",
            "from_status": None,
            "to_status": request.status,
            "actor_id": actor.id,
            "actor_name": actor.full_name,
        })
        return self._to_response(request)

    async def approve(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
        data: ApproveRequest,
        now: datetime | None = None,
    ) -> WorkRequestResponse:
        """Approve a pending request, assigning a technician and a date.

        Raises:
            NotFoundError: Unknown request or technician
            InvariantViolationError: Request is closed
            NotAuthorizedError: Actor is not a manager
            InvalidTransitionError: Request is not pending
            InvalidInputError: Chosen user is not an active technician
        """
        request: WorkRequest = await self._load(db, request_id)
        request_lifecycle.check_transition(request, actor, "approve")
        technician: User | None = await user_repository.get_by_id(db, data.technician_id)
        if technician is None:
            raise NotFoundError(f"Technician {data.technician_id} not found")

        changes: dict[str, Any] = request_lifecycle.plan_approve(
            request, actor, technician, data.scheduled_date, urgency=data.urgency, now=now
        )
        await self._apply(db, request, actor, "approve", changes)
        return self._to_response(request)

    async def deny(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
        data: DenyRequest,
        now: datetime | None = None,
    ) -> WorkRequestResponse:
        """Deny a pending request with a reason."""
        request: WorkRequest = await self._load(db, request_id)
        changes: dict[str, Any] = request_lifecycle.plan_deny(request, actor, data.reason, now=now)
        await self._apply(db, request, actor, "deny", changes, note=changes["denial_reason"])
        return self._to_response(request)

    async def start(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
        now: datetime | None = None,
    ) -> WorkRequestResponse:
        """Move a scheduled request to ongoing."""
        request: WorkRequest = await self._load(db, request_id)
        changes: dict[str, Any] = request_lifecycle.plan_start(request, actor, now=now)
        await self._apply(db, request, actor, "start", changes)
        return self._to_response(request)

    async def resolve(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
        now: datetime | None = None,
    ) -> WorkRequestResponse:
        """Mark ongoing work as resolved."""
        request: WorkRequest = await self._load(db, request_id)
        changes: dict[str, Any] = request_lifecycle.plan_resolve(request, actor, now=now)
        await self._apply(db, request, actor, "resolve", changes)
        return self._to_response(request)

    async def cannot_resolve(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
        data: CannotResolveRequest,
    ) -> WorkRequestResponse:
        """Mark ongoing work as impossible to resolve, with a reason."""
        request: WorkRequest = await self._load(db, request_id)
        changes: dict[str, Any] = request_lifecycle.plan_cannot_resolve(request, actor, data.reason)
        await self._apply(
            db, request, actor, "cannot_resolve", changes, note=changes["cannot_resolve_reason"]
        )
        return self._to_response(request)

    async def confirm(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
        data: ConfirmRequest,
        now: datetime | None = None,
    ) -> WorkRequestResponse:
        """Record the requester's confirmation and feedback on a resolved request."""
        request: WorkRequest = await self._load(db, request_id)
        changes: dict[str, Any] = request_lifecycle.plan_confirm(request, actor, data.feedback, now=now)
        await self._apply(db, request, actor, "confirm", changes, note=changes["requester_feedback"])
        return self._to_response(request)

    async def close(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
        now: datetime | None = None,
    ) -> WorkRequestResponse:
        """Close a confirmed, resolved request and record its turnaround time."""
        request: WorkRequest = await self._load(db, request_id)
        changes: dict[str, Any] = request_lifecycle.plan_close(request, actor, now=now)
        await self._apply(db, request, actor, "close", changes)
        return self._to_response(request)

    def _ensure_visible(self, request: WorkRequest, actor: User) -> None:
        if actor.role == ROLE_EMPLOYEE and request.submitted_by != actor.id:
            raise NotAuthorizedError("Employees can only view their own work requests")

    async def get_request(self, db: AsyncSession, actor: User, request_id: str) -> WorkRequestResponse:
        """Retrieve one request. Employees may only read their own."""
        request: WorkRequest = await self._load(db, request_id)
        self._ensure_visible(request, actor)
        return self._to_response(request)

    async def list_requests(
        self,
        db: AsyncSession,
        actor: User,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> PaginatedResponse:
        """List requests visible to the actor, newest first.

        Employees see their own submissions, technicians their assignments,
        managers everything.
        """
        requests, total = await work_request_repository.list_visible(
            db, actor.role, actor.id, status=status, page=page, per_page=per_page
        )
        return PaginatedResponse(
            items=[self._to_response(r) for r in requests],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def list_events(
        self,
        db: AsyncSession,
        actor: User,
        request_id: str,
    ) -> list[RequestEventResponse]:
        """Return the transition audit trail of a request."""
        request: WorkRequest = await self._load(db, request_id)
        self._ensure_visible(request, actor)
        events: Sequence[RequestEvent] = await work_request_repository.get_events(db, request.id)
        return [RequestEventResponse.model_validate(e) for e in events]


work_request_service: WorkRequestService = WorkRequestService()
