"""Work Request Router — TSWR submission and lifecycle transitions.

Each transition endpoint returns the updated request. Role and status
checks happen in the service; the router only commits after success.

Permission Matrix:
    - submit: any role
    - approve / deny / close: manager
    - start / resolve / cannot-resolve: technician, manager
    - confirm: original submitter, manager
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import PaginatedResponse
from app.schemas.work_request import (
    ApproveRequest,
    CannotResolveRequest,
    ConfirmRequest,
    DenyRequest,
    RequestEventResponse,
    RequestStatus,
    WorkRequestCreate,
    WorkRequestResponse,
)
from app.services.work_request_service import work_request_service

router: APIRouter = APIRouter()


@router.post("", response_model=WorkRequestResponse, status_code=201)
async def submit_request(
    data: WorkRequestCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    """Submit a new work request against an asset."""
    result: WorkRequestResponse = await work_request_service.submit(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=PaginatedResponse)
async def list_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    status: Annotated[RequestStatus | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse:
    """List work requests visible to the current user."""
    return await work_request_service.list_requests(
        db, current_user, status=status, page=page, per_page=per_page
    )


@router.get("/{request_id}", response_model=WorkRequestResponse)
async def get_request(
    request_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    return await work_request_service.get_request(db, current_user, request_id)


@router.get("/{request_id}/events", response_model=list[RequestEventResponse])
async def list_request_events(
    request_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[RequestEventResponse]:
    """Audit trail of a request's transitions."""
    return await work_request_service.list_events(db, current_user, request_id)


@router.post("/{request_id}/approve", response_model=WorkRequestResponse)
async def approve_request(
    request_id: str,
    data: ApproveRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    """Approve a pending request and assign a technician. Manager only."""
    result: WorkRequestResponse = await work_request_service.approve(db, current_user, request_id, data)
    await db.commit()
    return result


@router.post("/{request_id}/deny", response_model=WorkRequestResponse)
async def deny_request(
    request_id: str,
    data: DenyRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    """Deny a pending request. Manager only."""
    result: WorkRequestResponse = await work_request_service.deny(db, current_user, request_id, data)
    await db.commit()
    return result


@router.post("/{request_id}/start", response_model=WorkRequestResponse)
async def start_work(
    request_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    result: WorkRequestResponse = await work_request_service.start(db, current_user, request_id)
    await db.commit()
    return result


@router.post("/{request_id}/resolve", response_model=WorkRequestResponse)
async def resolve_work(
    request_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    result: WorkRequestResponse = await work_request_service.resolve(db, current_user, request_id)
    await db.commit()
    return result


@router.post("/{request_id}/cannot-resolve", response_model=WorkRequestResponse)
async def mark_cannot_resolve(
    request_id: str,
    data: CannotResolveRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    result: WorkRequestResponse = await work_request_service.cannot_resolve(db, current_user, request_id, data)
    await db.commit()
    return result


@router.post("/{request_id}/confirm", response_model=WorkRequestResponse)
async def confirm_completion(
    request_id: str,
    data: ConfirmRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    """Confirm a resolved request. Original submitter or manager only."""
    result: WorkRequestResponse = await work_request_service.confirm(db, current_user, request_id, data)
    await db.commit()
    return result


@router.post("/{request_id}/close", response_model=WorkRequestResponse)
async def close_request(
    request_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> WorkRequestResponse:
    """Close a confirmed request. Manager only."""
    result: WorkRequestResponse = await work_request_service.close(db, current_user, request_id)
    await db.commit()
    return result
