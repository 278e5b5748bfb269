"""Preventive maintenance schedule Pydantic schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

Frequency = Literal["daily", "weekly", "monthly", "quarterly", "semi_annual", "annual"]


class PMScheduleCreate(BaseModel):
    """PM schedule creation schema.

    Attributes:
        asset_code: Target asset code
        description: What the maintenance covers
        frequency: Recurrence cadence
        next_due_date: First due date
        technician_id: Optional technician to assign
        tasks: Ordered checklist of tasks
        estimated_duration: Minutes per completion (defaults from settings)
    """

    asset_code: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1)
    frequency: Frequency
    next_due_date: datetime
    technician_id: UUID | None = None
    tasks: list[str] = Field(default_factory=list)
    estimated_duration: int | None = Field(default=None, gt=0)


class PMScheduleResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    schedule_id: str
    asset_code: str
    asset_name: str
    description: str
    frequency: str
    next_due_date: datetime
    last_completed_date: datetime | None
    assigned_to: UUID | None
    assigned_to_name: str | None
    tasks: list[str]
    estimated_duration: int
    is_active: bool
    created_by_name: str
    created_at: datetime
