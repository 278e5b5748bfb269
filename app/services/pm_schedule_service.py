"""PM Schedule Service — Business logic for preventive maintenance.

Handles schedule creation, completion (recurrence rollover) and
deactivation. Each write to a schedule is a versioned conditional update,
and the owning asset's ``next_scheduled_maintenance`` is kept equal to the
earliest due date among its active schedules.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.recurrence import plan_completion
from app.core.role_guard import ensure_allowed
from app.models.asset import Asset
from app.models.maintenance import PMSchedule
from app.models.user import ROLE_TECHNICIAN, User
from app.repositories.asset_repository import asset_repository
from app.repositories.pm_schedule_repository import pm_schedule_repository
from app.repositories.user_repository import user_repository
from app.schemas.common import PaginatedResponse
from app.schemas.pm_schedule import PMScheduleCreate, PMScheduleResponse
from app.utils.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
)


class PMScheduleService:
    """Service handling preventive maintenance schedules."""

    async def _load(self, db: AsyncSession, schedule_id: str) -> PMSchedule:
        schedule: PMSchedule | None = await pm_schedule_repository.get_by_schedule_id(db, schedule_id)
        if schedule is None:
            raise NotFoundError(f"Maintenance schedule {schedule_id} not found")
        return schedule

    async def _refresh_asset_due(self, db: AsyncSession, asset_id: UUID) -> None:
        """Point the asset's next scheduled maintenance at its earliest active due date."""
        asset: Asset | None = await asset_repository.get_by_id(db, asset_id)
        if asset is None:
            return
        earliest: datetime | None = await pm_schedule_repository.earliest_active_due(db, asset_id)
        await asset_repository.update_fields(db, asset, {"next_scheduled_maintenance": earliest})

    async def create_schedule(
        self,
        db: AsyncSession,
        actor: User,
        data: PMScheduleCreate,
    ) -> PMScheduleResponse:
        """Create a PM schedule for an asset. Manager only.

        Args:
            db: Async database session
            actor: Acting user
            data: Schedule definition

        Returns:
            PMScheduleResponse: Created schedule

        Raises:
            NotAuthorizedError: Actor is not a manager
            NotFoundError: Unknown asset or technician
            InvalidInputError: Assigned user is not an active technician
        """
        ensure_allowed(actor.role, "create_pm_schedule")
        asset: Asset | None = await asset_repository.get_by_code(db, data.asset_code)
        if asset is None:
            raise NotFoundError(f"Asset {data.asset_code} not found")

        technician: User | None = None
        if data.technician_id is not None:
            technician = await user_repository.get_by_id(db, data.technician_id)
            if technician is None:
                raise NotFoundError(f"Technician {data.technician_id} not found")
            if technician.role != ROLE_TECHNICIAN or not technician.is_active:
                raise InvalidInputError(f"User '{technician.username}' is not an active technician")

        values: dict[str, Any] = {
            "schedule_id": await pm_schedule_repository.next_schedule_id(db),
            "asset_id": asset.id,
            "asset_code": asset.asset_code,
            "asset_name": asset.name,
            "description": data.description,
            "frequency": data.frequency,
            "next_due_date": data.next_due_date,
            "assigned_to": technician.id if technician else None,
            "assigned_to_name": technician.full_name if technician else None,
            "tasks": list(data.tasks),
            "estimated_duration": data.estimated_duration or settings.DEFAULT_PM_DURATION_MINUTES,
            "is_active": True,
            "version": 1,
            "created_by": actor.id,
            "created_by_name": actor.full_name,
        }
        schedule: PMSchedule = await pm_schedule_repository.create(db, values)
        await self._refresh_asset_due(db, asset.id)
        return PMScheduleResponse.model_validate(schedule)

    async def list_schedules(
        self,
        db: AsyncSession,
        asset_code: str | None = None,
        is_active: bool | None = None,
        due_before: datetime | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> PaginatedResponse:
        """List schedules ordered by next due date."""
        asset_id: UUID | None = None
        if asset_code:
            asset: Asset | None = await asset_repository.get_by_code(db, asset_code)
            if asset is None:
                raise NotFoundError(f"Asset {asset_code} not found")
            asset_id = asset.id
        schedules, total = await pm_schedule_repository.get_filtered(
            db, asset_id=asset_id, is_active=is_active, due_before=due_before, page=page, per_page=per_page
        )
        return PaginatedResponse(
            items=[PMScheduleResponse.model_validate(s) for s in schedules],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def get_schedule(self, db: AsyncSession, schedule_id: str) -> PMScheduleResponse:
        return PMScheduleResponse.model_validate(await self._load(db, schedule_id))

    async def complete_schedule(
        self,
        db: AsyncSession,
        actor: User,
        schedule_id: str,
        completion_time: datetime | None = None,
    ) -> PMScheduleResponse:
        """Record a completion and roll the schedule forward.

        Args:
            db: Async database session
            actor: Acting technician or manager
            schedule_id: Schedule number (e.g. "PM-0001")
            completion_time: Completion moment (defaults to current UTC time)

        Returns:
            PMScheduleResponse: Schedule with its new due date

        Raises:
            NotFoundError: Unknown schedule
            NotAuthorizedError: Role may not complete schedules
            InvalidTransitionError: Schedule inactive, or changed concurrently
        """
        schedule: PMSchedule = await self._load(db, schedule_id)
        ensure_allowed(actor.role, "complete_pm_schedule")
        changes: dict[str, Any] = plan_completion(
            schedule, completion_time or datetime.now(timezone.utc)
        )
        applied: bool = await pm_schedule_repository.conditional_update(
            db, schedule, changes, expected={"is_active": True}
        )
        if not applied:
            raise InvalidTransitionError(
                f"Maintenance schedule {schedule_id} was changed by another user; reload and retry"
            )
        await self._refresh_asset_due(db, schedule.asset_id)
        return PMScheduleResponse.model_validate(schedule)

    async def deactivate_schedule(
        self,
        db: AsyncSession,
        actor: User,
        schedule_id: str,
    ) -> PMScheduleResponse:
        """Deactivate a schedule. Manager only; schedules are never deleted."""
        schedule: PMSchedule = await self._load(db, schedule_id)
        ensure_allowed(actor.role, "deactivate_pm_schedule")
        if not schedule.is_active:
            raise InvalidTransitionError(f"Maintenance schedule {schedule_id} is already inactive")
        applied: bool = await pm_schedule_repository.conditional_update(
            db, schedule, {"is_active": False}, expected={"is_active": True}
        )
        if not applied:
            raise InvalidTransitionError(
                f"Maintenance schedule {schedule_id} was changed by another user; reload and retry"
            )
        await self._refresh_asset_due(db, schedule.asset_id)
        return PMScheduleResponse.model_validate(schedule)


pm_schedule_service: PMScheduleService = PMScheduleService()
