"""User Repository — Handles users queries."""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import ROLE_TECHNICIAN, User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(self, db: AsyncSession, username: str) -> User | None:
        """Retrieve a user by login username (case-insensitive, stored lowercase)."""
        return await self.get_by_field(db, "username", username.strip().lower())

    async def get_technicians(self, db: AsyncSession) -> Sequence[User]:
        """Active technicians ordered by name."""
        result = await db.execute(
            select(User)
            .where(User.role == ROLE_TECHNICIAN, User.is_active.is_(True))
            .order_by(User.full_name)
        )
        return result.scalars().all()


user_repository: UserRepository = UserRepository()
