"""Authentication-related Pydantic request/response schema definitions."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Login request schema.

    Attributes:
        username: User login identifier
        password: Plain text password, verified against the bcrypt hash
    """

    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT token issuance response schema.

    Attributes:
        access_token: JWT access token
        token_type: Always "bearer" for the Authorization header
    """

    access_token: str
    token_type: str = "bearer"
