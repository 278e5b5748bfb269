"""Auth Service — Business logic for login.

Verifies bcrypt credentials and issues a JWT access token carrying the
user id and role.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, TokenResponse
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import create_access_token
from app.utils.password import verify_password


class AuthService:
    """Service handling authentication business logic."""

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        return {"sub": str(user.id), "role": user.role}

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        """Process login and issue an access token.

        Args:
            db: Async database session
            data: Login request data

        Returns:
            TokenResponse: Access token response

        Raises:
            UnauthorizedError: Invalid credentials or deactivated account
        """
        user: User | None = await user_repository.get_by_username(db, data.username)
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid username or password")

        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")

        return TokenResponse(access_token=create_access_token(self._build_jwt_payload(user)))


auth_service: AuthService = AuthService()
