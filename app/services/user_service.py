"""User Service — Business logic for user accounts.

Managers create accounts and list technicians for assignment.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.role_guard import ensure_allowed
from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.user import UserCreate, UserResponse
from app.utils.exceptions import DuplicateError
from app.utils.password import hash_password


class UserService:
    """Service handling user account management."""

    async def create_user(self, db: AsyncSession, actor: User, data: UserCreate) -> UserResponse:
        """Create a new user account. Manager only.

        Args:
            db: Async database session
            actor: Acting manager
            data: Account data; the password is hashed with bcrypt

        Returns:
            UserResponse: Created user

        Raises:
            NotAuthorizedError: Actor is not a manager
            DuplicateError: Username already taken
        """
        ensure_allowed(actor.role, "manage_users")
        username: str = data.username.strip().lower()
        if await user_repository.get_by_username(db, username) is not None:
            raise DuplicateError(f"Username '{username}' is already taken")

        user: User = await user_repository.create(db, {
            "username": username,
            "password_hash": hash_password(data.password),
            "full_name": data.full_name,
            "email": data.email,
            "role": data.role,
        })
        return UserResponse.model_validate(user)

    async def list_technicians(self, db: AsyncSession, actor: User) -> list[UserResponse]:
        """Active technicians, for approval and PM assignment."""
        ensure_allowed(actor.role, "list_technicians")
        technicians: Sequence[User] = await user_repository.get_technicians(db)
        return [UserResponse.model_validate(t) for t in technicians]


user_service: UserService = UserService()
