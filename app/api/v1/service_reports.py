"""Service Report Router — Filing and reading service reports."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import PaginatedResponse
from app.schemas.service_report import ServiceReportCreate, ServiceReportResponse
from app.services.service_report_service import service_report_service

router: APIRouter = APIRouter()


@router.post("", response_model=ServiceReportResponse, status_code=201)
async def create_report(
    data: ServiceReportCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ServiceReportResponse:
    """File a service report against a work request. Technician or manager.

    The work request reference and the asset's maintenance history are
    written in the same transaction.
    """
    result: ServiceReportResponse = await service_report_service.create_report(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=PaginatedResponse)
async def list_reports(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    asset_code: Annotated[str | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    return await service_report_service.list_reports(
        db, current_user, asset_code=asset_code, page=page, per_page=per_page
    )


@router.get("/{report_id}", response_model=ServiceReportResponse)
async def get_report(
    report_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ServiceReportResponse:
    return await service_report_service.get_report(db, report_id)
