"""Work Request Repository — Handles work_requests and their audit trail.

Extends BaseRepository with number generation, role-scoped listing,
guarded status writes, and dashboard aggregates.
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import ROLE_EMPLOYEE, ROLE_TECHNICIAN
from app.models.work_request import RequestEvent, WorkRequest
from app.repositories.base import BaseRepository
from app.utils.exceptions import InvalidTransitionError


class WorkRequestRepository(BaseRepository[WorkRequest]):
    """Work request repository.

    Extends:
        BaseRepository[WorkRequest]
    """

    def __init__(self) -> None:
        super().__init__(WorkRequest)

    async def get_by_request_id(self, db: AsyncSession, request_id: str) -> WorkRequest | None:
        """Retrieve a work request by its request number (e.g. "REQ-1001")."""
        return await self.get_by_field(db, "request_id", request_id)

    async def next_numbers(self, db: AsyncSession, now: datetime) -> tuple[str, str]:
        """Generate the next request number and TSWR form number.

        Request numbers are global and sequential from REQUEST_NUMBER_START;
        TSWR numbers restart every year ("TSWR-24-001").

        Args:
            db: Async database session
            now: Submission moment (selects the TSWR year)

        Returns:
            tuple[str, str]: (request_id, tswr_no)
        """
        total: int = await self.count(db)
        year_prefix: str = f"TSWR-{now:%y}-"
        year_total: int = (
            await db.execute(
                select(func.count())
                .select_from(WorkRequest)
                .where(WorkRequest.tswr_no.like(f"{year_prefix}%"))
            )
        ).scalar() or 0
        request_id: str = f"REQ-{settings.REQUEST_NUMBER_START + total}"
        tswr_no: str = f"{year_prefix}{year_total + 1:03d}"
        return request_id, tswr_no

    async def list_visible(
        self,
        db: AsyncSession,
        role: str,
        user_id: UUID,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[WorkRequest], int]:
        """List requests visible to a user, newest first.

        Employees see what they submitted, technicians what is assigned to
        them, managers everything.
        """
        query: Select = select(WorkRequest).order_by(WorkRequest.created_at.desc())
        if role == ROLE_EMPLOYEE:
            query = query.where(WorkRequest.submitted_by == user_id)
        elif role == ROLE_TECHNICIAN:
            query = query.where(WorkRequest.assigned_to == user_id)
        if status:
            query = query.where(WorkRequest.status == status)
        return await self.get_paginated(db, query, page, per_page)

    async def apply_changes(
        self,
        db: AsyncSession,
        request: WorkRequest,
        changes: dict[str, Any],
    ) -> WorkRequest:
        """Write planned changes guarded on the status and version that were read.

        Args:
            db: Async database session
            request: Request as loaded by the caller
            changes: Field changes from the lifecycle

        Returns:
            WorkRequest: Refreshed request

        Raises:
            InvalidTransitionError: When another writer changed the request first
        """
        applied: bool = await self.conditional_update(
            db, request, changes, expected={"status": request.status}
        )
        if not applied:
            raise InvalidTransitionError(
                f"Work request {request.request_id} was changed by another user; reload and retry"
            )
        return request

    async def create_event(self, db: AsyncSession, event_data: dict[str, Any]) -> RequestEvent:
        """Append one transition to the audit trail."""
        event: RequestEvent = RequestEvent(**event_data)
        db.add(event)
        await db.flush()
        return event

    async def get_events(self, db: AsyncSession, work_request_id: UUID) -> Sequence[RequestEvent]:
        """Return the audit trail of a request in chronological order."""
        result = await db.execute(
            select(RequestEvent)
            .where(RequestEvent.work_request_id == work_request_id)
            .order_by(RequestEvent.created_at, RequestEvent.id)
        )
        return result.scalars().all()

    async def count_by_status(self, db: AsyncSession) -> dict[str, int]:
        """Return {status: count} over all requests."""
        result = await db.execute(
            select(WorkRequest.status, func.count()).group_by(WorkRequest.status)
        )
        return {status: count for status, count in result.all()}

    async def average_turnaround(self, db: AsyncSession) -> float | None:
        """Average turnaround hours over closed requests, None when none are closed."""
        result = await db.execute(
            select(func.avg(WorkRequest.turnaround_time)).where(WorkRequest.status == "closed")
        )
        value = result.scalar()
        return float(value) if value is not None else None


work_request_repository: WorkRequestRepository = WorkRequestRepository()
