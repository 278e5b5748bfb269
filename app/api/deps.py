"""FastAPI dependency injection module — Authentication.

Extracts the current user from the bearer JWT. Role checks are not done
here; every service operation asks the role guard for its own action.

Authentication Flow:
    1. Client sends Authorization: Bearer <token> header
    2. HTTPBearer extracts the token
    3. decode_token() verifies the JWT and returns its payload
    4. User is fetched from DB using the payload "sub" field
    5. User active status is verified
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.repositories.user_repository import user_repository
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import decode_token

# Extracts JWT token from Authorization: Bearer <token> header
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Decode JWT from the Authorization header and return the authenticated user.

    Args:
        credentials: Bearer token credentials from header
        db: Async database session

    Returns:
        User: Authenticated user ORM instance

    Raises:
        UnauthorizedError: Missing, invalid or expired token, or unknown/inactive user
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")
    try:
        payload: dict = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type")
        user_id: UUID = UUID(payload["sub"])
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError, KeyError, ValueError):
        raise UnauthorizedError("Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    return user

