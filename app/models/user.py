"""User SQLAlchemy ORM model definition.

Every actor in the maintenance workflow is a User with exactly one of three
roles. The role decides which lifecycle actions the user may perform.

Tables:
    - users: User accounts (employees, technicians, managers)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Roles recognised by the role guard
ROLE_EMPLOYEE: str = "employee"
ROLE_TECHNICIAN: str = "technician"
ROLE_MANAGER: str = "manager"
ROLES: tuple[str, ...] = (ROLE_EMPLOYEE, ROLE_TECHNICIAN, ROLE_MANAGER)


class User(Base):
    """User model — System user account information.

    Attributes:
        id: Unique identifier
        username: Login username (globally unique, lowercase)
        email: Email address (optional)
        full_name: Display name, denormalized onto requests and reports
        password_hash: bcrypt-hashed password
        role: "employee", "technician" or "manager"
        is_active: Archived users keep their history but cannot log in
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Login username: unique, stored lowercase
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # bcrypt hashed password (never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # Role: employee / technician / manager
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_EMPLOYEE)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
