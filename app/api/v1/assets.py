"""Asset Router — Asset registry and maintenance history.

Permission Matrix:
    - Register / adjust assets: manager
    - List / view assets and history: any authenticated user
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.asset import (
    AssetCategory,
    AssetCreate,
    AssetResponse,
    AssetStatus,
    AssetUpdate,
    MaintenanceRecordResponse,
)
from app.schemas.common import PaginatedResponse
from app.services.asset_service import asset_service

router: APIRouter = APIRouter()


@router.post("", response_model=AssetResponse, status_code=201)
async def create_asset(
    data: AssetCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> AssetResponse:
    """Register a new asset. Manager only."""
    result: AssetResponse = await asset_service.create_asset(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=PaginatedResponse)
async def list_assets(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    category: Annotated[AssetCategory | None, Query()] = None,
    status: Annotated[AssetStatus | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """List assets ordered by asset code."""
    return await asset_service.list_assets(db, category=category, status=status, page=page, per_page=per_page)


@router.get("/{asset_code}", response_model=AssetResponse)
async def get_asset(
    asset_code: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> AssetResponse:
    return await asset_service.get_asset(db, asset_code)


@router.patch("/{asset_code}", response_model=AssetResponse)
async def update_asset(
    asset_code: str,
    data: AssetUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> AssetResponse:
    """Adjust health score, status, value or descriptive fields. Manager only."""
    result: AssetResponse = await asset_service.update_asset(db, current_user, asset_code, data)
    await db.commit()
    return result


@router.get("/{asset_code}/history", response_model=list[MaintenanceRecordResponse])
async def get_asset_history(
    asset_code: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[MaintenanceRecordResponse]:
    """Maintenance history of an asset, oldest first."""
    return await asset_service.get_history(db, asset_code)
