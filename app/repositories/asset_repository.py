"""Asset Repository — Handles assets and maintenance_records queries.

The maintenance trail is insert-only: this repository exposes no way to
edit or remove a MaintenanceRecord.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.asset import Asset, MaintenanceRecord
from app.repositories.base import BaseRepository


class AssetRepository(BaseRepository[Asset]):
    """Asset repository.

    Extends:
        BaseRepository[Asset]
    """

    def __init__(self) -> None:
        super().__init__(Asset)

    async def get_by_code(self, db: AsyncSession, asset_code: str) -> Asset | None:
        """Retrieve an asset by its unique asset code."""
        return await self.get_by_field(db, "asset_code", asset_code)

    async def get_filtered(
        self,
        db: AsyncSession,
        category: str | None = None,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Asset], int]:
        """List assets ordered by asset code, optionally filtered."""
        query: Select = select(Asset).order_by(Asset.asset_code)
        if category:
            query = query.where(Asset.category == category)
        if status:
            query = query.where(Asset.status == status)
        return await self.get_paginated(db, query, page, per_page)

    async def update_fields(self, db: AsyncSession, asset: Asset, update_data: dict[str, Any]) -> Asset:
        """Set fields on a loaded asset and flush."""
        for field, value in update_data.items():
            if hasattr(asset, field):
                setattr(asset, field, value)
        await db.flush()
        await db.refresh(asset)
        return asset

    async def next_history_sequence(self, db: AsyncSession, asset_id: UUID) -> int:
        """Return the sequence number for the asset's next maintenance record."""
        result = await db.execute(
            select(func.max(MaintenanceRecord.sequence)).where(MaintenanceRecord.asset_id == asset_id)
        )
        return (result.scalar() or 0) + 1

    async def append_record(self, db: AsyncSession, record_data: dict[str, Any]) -> MaintenanceRecord:
        """Insert one maintenance history entry."""
        record: MaintenanceRecord = MaintenanceRecord(**record_data)
        db.add(record)
        await db.flush()
        return record

    async def get_history(self, db: AsyncSession, asset_id: UUID) -> Sequence[MaintenanceRecord]:
        """Return the asset's maintenance history in insertion order."""
        result = await db.execute(
            select(MaintenanceRecord)
            .where(MaintenanceRecord.asset_id == asset_id)
            .order_by(MaintenanceRecord.sequence)
        )
        return result.scalars().all()

    async def count_by_status(self, db: AsyncSession) -> dict[str, int]:
        """Return {status: count} over all assets."""
        result = await db.execute(select(Asset.status, func.count()).group_by(Asset.status))
        return {status: count for status, count in result.all()}


asset_repository: AssetRepository = AssetRepository()
