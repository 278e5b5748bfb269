"""PM Schedule Router — Preventive maintenance schedules.

Permission Matrix:
    - create / deactivate: manager
    - complete: technician, manager
    - list / view: any authenticated user
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import PaginatedResponse
from app.schemas.pm_schedule import PMScheduleCreate, PMScheduleResponse
from app.services.pm_schedule_service import pm_schedule_service

router: APIRouter = APIRouter()


@router.post("", response_model=PMScheduleResponse, status_code=201)
async def create_schedule(
    data: PMScheduleCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PMScheduleResponse:
    """Create a preventive maintenance schedule. Manager only."""
    result: PMScheduleResponse = await pm_schedule_service.create_schedule(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=PaginatedResponse)
async def list_schedules(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    asset_code: Annotated[str | None, Query()] = None,
    is_active: Annotated[bool | None, Query()] = None,
    due_before: Annotated[datetime | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """List schedules ordered by next due date."""
    return await pm_schedule_service.list_schedules(
        db, asset_code=asset_code, is_active=is_active, due_before=due_before, page=page, per_page=per_page
    )


@router.get("/{schedule_id}", response_model=PMScheduleResponse)
async def get_schedule(
    schedule_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PMScheduleResponse:
    return await pm_schedule_service.get_schedule(db, schedule_id)


@router.post("/{schedule_id}/complete", response_model=PMScheduleResponse)
async def complete_schedule(
    schedule_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PMScheduleResponse:
    """Record a completion now and roll the due date forward."""
    result: PMScheduleResponse = await pm_schedule_service.complete_schedule(db, current_user, schedule_id)
    await db.commit()
    return result


@router.post("/{schedule_id}/deactivate", response_model=PMScheduleResponse)
async def deactivate_schedule(
    schedule_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PMScheduleResponse:
    """Deactivate a schedule. Manager only."""
    result: PMScheduleResponse = await pm_schedule_service.deactivate_schedule(db, current_user, schedule_id)
    await db.commit()
    return result
