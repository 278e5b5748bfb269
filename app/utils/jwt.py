"""JWT token creation and verification utility module.

Provides functions for creating access tokens and decoding them.

JWT Payload Structure:
    {
        "sub": "user_uuid",    # User identifier
        "role": "manager",     # employee / technician / manager
        "exp": 1234567890,     # Expiration UNIX timestamp
        "type": "access"       # Token type discriminator
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from app.config import settings


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Generate a JWT access token with the given payload data.

    Token expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES unless expires_delta is given.

    Args:
        data: JWT payload data, typically {"sub": user_id, "role": role}
        expires_delta: Custom lifetime

    Returns:
        str: Encoded JWT token string

    Example:
        token = create_access_token({"sub": str(user.id), "role": user.role})
    """
    to_encode: dict[str, Any] = data.copy()
    lifetime: timedelta = expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    expire: datetime = datetime.now(timezone.utc) + lifetime
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT token string.

    Args:
        token: Encoded JWT token string

    Returns:
        dict[str, Any]: Decoded payload dictionary

    Raises:
        jwt.ExpiredSignatureError: When token has expired
        jwt.InvalidTokenError: When token is invalid
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
