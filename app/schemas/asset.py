"""Asset Pydantic request/response schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

AssetCategory = Literal["equipment", "machine", "furniture"]
AssetStatus = Literal["operational", "under_maintenance", "out_of_service"]


class AssetCreate(BaseModel):
    """Asset registration schema.

    Attributes:
        asset_code: Unique asset code (e.g. "EQP-001")
        name: Display name
        category: equipment / machine / furniture
        location: Physical location
        purchase_date: Date of purchase
        purchase_cost: Purchase cost
        depreciation_rate: Percent per year (default 10)
        current_value: Current value (defaults to purchase cost)
        health_score: Initial health score 0-100 (default 100)
    """

    asset_code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    category: AssetCategory
    location: str = Field(min_length=1, max_length=255)
    purchase_date: date
    purchase_cost: Decimal = Field(ge=0)
    depreciation_rate: Decimal = Field(default=Decimal("10"), ge=0, le=100)
    current_value: Decimal | None = Field(default=None, ge=0)
    health_score: int = Field(default=100, ge=0, le=100)


class AssetUpdate(BaseModel):
    """Manager adjustments. The maintenance engine never computes these."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    health_score: int | None = Field(default=None, ge=0, le=100)
    status: AssetStatus | None = None
    current_value: Decimal | None = Field(default=None, ge=0)
    depreciation_rate: Decimal | None = Field(default=None, ge=0, le=100)


class AssetResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    asset_code: str
    name: str
    category: str
    location: str
    purchase_date: date
    purchase_cost: Decimal
    depreciation_rate: Decimal
    current_value: Decimal
    health_score: int
    status: str
    last_maintenance_date: datetime | None
    next_scheduled_maintenance: datetime | None
    created_at: datetime


class MaintenanceRecordResponse(BaseModel):
    model_config = {"from_attributes": True}

    sequence: int
    date: datetime
    type: str
    description: str
    technician_name: str
    cost: Decimal
    parts_replaced: list[str]
    service_report_id: UUID | None
