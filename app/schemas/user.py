"""User Pydantic request/response schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

Role = Literal["employee", "technician", "manager"]


class UserCreate(BaseModel):
    """User account creation (manager only).

    Attributes:
        username: Login username, stored lowercase
        password: Plain text, hashed with bcrypt on the server
        full_name: Display name
        email: Optional email address
        role: employee / technician / manager
    """

    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1, max_length=255)
    email: str | None = None
    role: Role = "employee"


class UserResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    username: str
    full_name: str
    email: str | None
    role: str
    is_active: bool
    created_at: datetime
