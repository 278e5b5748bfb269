"""PM Schedule Repository — Handles pm_schedules queries."""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.maintenance import PMSchedule
from app.repositories.base import BaseRepository


class PMScheduleRepository(BaseRepository[PMSchedule]):

    def __init__(self) -> None:
        super().__init__(PMSchedule)

    async def get_by_schedule_id(self, db: AsyncSession, schedule_id: str) -> PMSchedule | None:
        return await self.get_by_field(db, "schedule_id", schedule_id)

    async def next_schedule_id(self, db: AsyncSession) -> str:
        total: int = await self.count(db)
        return f"PM-{total + 1:04d}"

    async def get_filtered(
        self,
        db: AsyncSession,
        asset_id: UUID | None = None,
        is_active: bool | None = None,
        due_before: datetime | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[PMSchedule], int]:
        query: Select = select(PMSchedule).order_by(PMSchedule.next_due_date)
        if asset_id is not None:
            query = query.where(PMSchedule.asset_id == asset_id)
        if is_active is not None:
            query = query.where(PMSchedule.is_active == is_active)
        if due_before is not None:
            query = query.where(PMSchedule.next_due_date <= due_before)
        return await self.get_paginated(db, query, page, per_page)

    async def earliest_active_due(self, db: AsyncSession, asset_id: UUID) -> datetime | None:
        """Earliest next_due_date among the asset's active schedules."""
        result = await db.execute(
            select(func.min(PMSchedule.next_due_date)).where(
                PMSchedule.asset_id == asset_id,
                PMSchedule.is_active.is_(True),
            )
        )
        return result.scalar()


pm_schedule_repository: PMScheduleRepository = PMScheduleRepository()
