"""Service report Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

ServiceType = Literal["planned", "unplanned"]


class PartInput(BaseModel):
    """One parts/materials line.

    Attributes:
        part_name: Part or material name
        part_no: Optional part number
        quantity: Units used (non-negative)
        cost: Unit cost (non-negative)
    """

    part_name: str = Field(min_length=1, max_length=255)
    part_no: str | None = Field(default=None, max_length=100)
    quantity: int
    cost: Decimal = Decimal("0")


class ServiceReportCreate(BaseModel):
    """Service report filed by a technician against a work request.

    Man-hours and total parts cost are computed by the server.
    """

    request_id: str = Field(min_length=1)
    work_description: str = Field(min_length=1)
    remarks: str | None = None
    work_start_time: datetime
    work_end_time: datetime
    labor_cost: Decimal = Field(default=Decimal("0"), ge=0)
    parts: list[PartInput] = Field(default_factory=list)
    service_type: ServiceType
    hours_down: float = Field(default=0, ge=0)
    report_findings: str = Field(min_length=1)
    service_date: datetime


class PartResponse(BaseModel):
    model_config = {"from_attributes": True}

    line_no: int
    part_name: str
    part_no: str | None
    quantity: int
    cost: Decimal


class ServiceReportResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    report_id: str
    tswr_no: str
    work_request_id: UUID
    asset_code: str
    asset_name: str
    location: str
    work_description: str
    remarks: str | None
    urgency: str
    work_start_time: datetime
    work_end_time: datetime
    man_hours: float
    labor_cost: Decimal
    parts: list[PartResponse]
    total_parts_cost: Decimal
    service_type: str
    hours_down: float
    report_findings: str
    service_date: datetime
    prepared_by: UUID
    prepared_by_name: str
    created_at: datetime
