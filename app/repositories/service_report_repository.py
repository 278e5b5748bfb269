"""Service Report Repository — Handles service_reports and their parts."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service_report import ServiceReport
from app.repositories.base import BaseRepository


class ServiceReportRepository(BaseRepository[ServiceReport]):

    def __init__(self) -> None:
        super().__init__(ServiceReport)

    async def get_by_report_id(self, db: AsyncSession, report_id: str) -> ServiceReport | None:
        return await self.get_by_field(db, "report_id", report_id)

    async def next_report_id(self, db: AsyncSession) -> str:
        total: int = await self.count(db)
        return f"SR-{total + 1:04d}"

    async def get_filtered(
        self,
        db: AsyncSession,
        asset_id: UUID | None = None,
        prepared_by: UUID | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ServiceReport], int]:
        query: Select = select(ServiceReport).order_by(ServiceReport.created_at.desc())
        if asset_id is not None:
            query = query.where(ServiceReport.asset_id == asset_id)
        if prepared_by is not None:
            query = query.where(ServiceReport.prepared_by == prepared_by)
        return await self.get_paginated(db, query, page, per_page)

    async def add(self, db: AsyncSession, report: ServiceReport) -> ServiceReport:
        """Insert a report together with its attached parts."""
        db.add(report)
        await db.flush()
        await db.refresh(report, attribute_names=["parts"])
        return report


service_report_repository: ServiceReportRepository = ServiceReportRepository()
