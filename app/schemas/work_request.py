"""Work request Pydantic request/response schemas.

One request body per lifecycle transition; every transition returns the
full WorkRequestResponse.
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

Urgency = Literal["standstill", "immediately", "on_occasion", "during_maintenance"]
RequestStatus = Literal[
    "pending", "denied", "scheduled", "ongoing", "cannot_resolve", "resolved", "closed",
]


class WorkRequestCreate(BaseModel):
    """Work request submission schema.

    Attributes:
        asset_code: Code of an existing asset (e.g. "EQP-001")
        work_description: Requested work
        urgency: How urgent the work is
        disrupts_operation: Whether the issue disrupts operations
        attachment_url: Optional attachment reference
    """

    asset_code: str = Field(min_length=1, max_length=50)
    work_description: str = Field(min_length=1)
    urgency: Urgency = "standstill"
    disrupts_operation: bool = False
    attachment_url: str | None = Field(default=None, max_length=1000)


class ApproveRequest(BaseModel):
    """Manager approval: technician assignment and scheduled date."""

    technician_id: UUID
    scheduled_date: date
    urgency: Urgency | None = None  # Optional urgency override


class DenyRequest(BaseModel):
    reason: str


class CannotResolveRequest(BaseModel):
    reason: str


class ConfirmRequest(BaseModel):
    feedback: str


class WorkRequestResponse(BaseModel):
    """Work request response schema (all lifecycle fields)."""

    model_config = {"from_attributes": True}

    id: UUID
    request_id: str
    tswr_no: str
    asset_code: str
    asset_name: str
    location: str
    work_description: str
    urgency: str
    disrupts_operation: bool
    attachment_url: str | None
    status: RequestStatus
    submitted_by: UUID
    submitted_by_name: str
    approved_by: UUID | None
    approved_by_name: str | None
    approved_at: datetime | None
    denial_reason: str | None
    scheduled_date: date | None
    assigned_to: UUID | None
    assigned_to_name: str | None
    started_at: datetime | None
    resolved_at: datetime | None
    cannot_resolve_reason: str | None
    requester_feedback: str | None
    requester_confirmed_at: datetime | None
    closed_at: datetime | None
    closed_by: UUID | None
    closed_by_name: str | None
    turnaround_time: int | None
    service_report_id: UUID | None
    version: int
    created_at: datetime
    updated_at: datetime


class RequestEventResponse(BaseModel):
    """Audit trail entry."""

    model_config = {"from_attributes": True}

    action: str
    from_status: str | None
    to_status: str
    actor_id: UUID | None
    actor_name: str
    note: str | None
    created_at: datetime
