"""Preventive maintenance SQLAlchemy ORM model definition.

Tables:
    - pm_schedules: Recurring preventive maintenance obligations, one asset each
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import JSON, String, Boolean, DateTime, Integer, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class PMSchedule(Base):
    """Preventive maintenance schedule model.

    Completing a schedule moves ``next_due_date`` forward by the frequency's
    interval. Schedules can be deactivated but never removed.

    Attributes:
        id: Unique identifier
        schedule_id: Human-facing schedule number (e.g. "PM-0001")
        asset_id / asset_code / asset_name: Target asset
        description: What the maintenance covers
        frequency: daily / weekly / monthly / quarterly / semi_annual / annual
        next_due_date: When the next completion is due
        last_completed_date: Last completion moment
        assigned_to / assigned_to_name: Optional technician
        tasks: Ordered checklist of task strings
        estimated_duration: Estimated minutes per completion
        is_active: Inactive schedules cannot be completed
        version: Optimistic concurrency counter
        created_by / created_by_name: Manager who created it
    """

    __tablename__ = "pm_schedules"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    schedule_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    asset_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("assets.id", ondelete="RESTRICT"), nullable=False)
    asset_code: Mapped[str] = mapped_column(String(50), nullable=False)
    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    next_due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_completed_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    assigned_to_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tasks: Mapped[list] = mapped_column(JSON, default=list)
    estimated_duration: Mapped[int] = mapped_column(Integer, default=60)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    created_by_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_pm_schedules_asset_active", "asset_id", "is_active"),
    )
