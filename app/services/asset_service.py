"""Asset Service — Business logic for asset registration and history.

Health score, status and value are set by managers here; the maintenance
workflow only appends history and moves the maintenance dates.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.role_guard import ensure_allowed
from app.models.asset import Asset, MaintenanceRecord
from app.models.user import User
from app.repositories.asset_repository import asset_repository
from app.schemas.asset import AssetCreate, AssetResponse, AssetUpdate, MaintenanceRecordResponse
from app.schemas.common import PaginatedResponse
from app.utils.exceptions import DuplicateError, NotFoundError


class AssetService:
    """Service handling asset CRUD and maintenance history reads."""

    async def _load(self, db: AsyncSession, asset_code: str) -> Asset:
        asset: Asset | None = await asset_repository.get_by_code(db, asset_code)
        if asset is None:
            raise NotFoundError(f"Asset {asset_code} not found")
        return asset

    async def create_asset(self, db: AsyncSession, actor: User, data: AssetCreate) -> AssetResponse:
        """Register a new asset. Manager only.

        Args:
            db: Async database session
            actor: Acting user
            data: Asset registration data

        Returns:
            AssetResponse: Created asset

        Raises:
            NotAuthorizedError: Actor is not a manager
            DuplicateError: Asset code already in use
        """
        ensure_allowed(actor.role, "create_asset")
        if await asset_repository.exists(db, {"asset_code": data.asset_code}):
            raise DuplicateError(f"Asset code {data.asset_code} is already registered")

        values: dict[str, Any] = data.model_dump()
        # A new asset is worth its purchase cost unless told otherwise
        if values["current_value"] is None:
            values["current_value"] = data.purchase_cost
        asset: Asset = await asset_repository.create(db, values)
        return AssetResponse.model_validate(asset)

    async def list_assets(
        self,
        db: AsyncSession,
        category: str | None = None,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> PaginatedResponse:
        assets, total = await asset_repository.get_filtered(
            db, category=category, status=status, page=page, per_page=per_page
        )
        return PaginatedResponse(
            items=[AssetResponse.model_validate(a) for a in assets],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def get_asset(self, db: AsyncSession, asset_code: str) -> AssetResponse:
        return AssetResponse.model_validate(await self._load(db, asset_code))

    async def update_asset(
        self,
        db: AsyncSession,
        actor: User,
        asset_code: str,
        data: AssetUpdate,
    ) -> AssetResponse:
        """Apply manager adjustments (name, location, health score, status, value).

        Raises:
            NotFoundError: Unknown asset code
            NotAuthorizedError: Actor is not a manager
        """
        asset: Asset = await self._load(db, asset_code)
        ensure_allowed(actor.role, "update_asset")
        asset = await asset_repository.update_fields(db, asset, data.model_dump(exclude_unset=True))
        return AssetResponse.model_validate(asset)

    async def get_history(self, db: AsyncSession, asset_code: str) -> list[MaintenanceRecordResponse]:
        """Return the asset's maintenance history, oldest first."""
        asset: Asset = await self._load(db, asset_code)
        records: Sequence[MaintenanceRecord] = await asset_repository.get_history(db, asset.id)
        return [MaintenanceRecordResponse.model_validate(r) for r in records]


asset_service: AssetService = AssetService()
