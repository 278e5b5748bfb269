"""User Router — Account creation and technician listing (manager only)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserResponse
from app.services.user_service import user_service

router: APIRouter = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Create a user account. Manager only."""
    result: UserResponse = await user_service.create_user(db, current_user, data)
    await db.commit()
    return result


@router.get("/technicians", response_model=list[UserResponse])
async def list_technicians(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[UserResponse]:
    """List active technicians. Manager only."""
    return await user_service.list_technicians(db, current_user)
