"""Asset-related SQLAlchemy ORM model definitions.

Registered equipment, machines and furniture, together with their
append-only maintenance trail.

Tables:
    - assets: Registered assets (unique asset code per asset)
    - maintenance_records: Maintenance history entries, one per service report
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from sqlalchemy import (
    JSON, String, Date, DateTime, Integer, Numeric, Text, ForeignKey, UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Asset(Base):
    """Asset model — A registered piece of equipment, machine or furniture.

    The health score is adjusted by managers only; the maintenance engine
    reads it but never computes it. ``maintenance_history`` is append-only.

    Attributes:
        id: Unique identifier
        asset_code: Human-facing asset code (e.g. "EQP-001"), unique
        name: Display name
        category: "equipment", "machine" or "furniture"
        location: Physical location
        purchase_date: Date of purchase
        purchase_cost: Purchase cost
        depreciation_rate: Depreciation in percent per year
        current_value: Current book value
        health_score: Condition indicator 0-100
        status: "operational", "under_maintenance" or "out_of_service"
        last_maintenance_date: Latest recorded service date
        next_scheduled_maintenance: Earliest due date among active PM schedules
        created_at: Creation timestamp
        updated_at: Last update timestamp

    Relationships:
        maintenance_history: Maintenance records ordered by sequence
    """

    __tablename__ = "assets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    asset_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Category: equipment / machine / furniture
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False)
    purchase_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    depreciation_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("10"))
    current_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    health_score: Mapped[int] = mapped_column(Integer, default=100)
    # Operational status: operational / under_maintenance / out_of_service
    status: Mapped[str] = mapped_column(String(30), default="operational")
    last_maintenance_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    next_scheduled_maintenance: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    maintenance_history = relationship(
        "MaintenanceRecord",
        back_populates="asset",
        order_by="MaintenanceRecord.sequence",
    )


class MaintenanceRecord(Base):
    """Maintenance record model — One entry in an asset's maintenance trail.

    Rows are only ever inserted; there is no update or delete path.

    Attributes:
        id: Unique identifier
        asset_id: Owning asset
        sequence: 1-based position in the asset's history
        date: Service date
        type: "preventive", "corrective" or "emergency"
        description: Work performed
        technician_name: Technician who prepared the report
        cost: Parts cost plus labor cost
        parts_replaced: Names of parts used
        service_report_id: Report that produced this entry
        created_at: Insertion timestamp
    """

    __tablename__ = "maintenance_records"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    asset_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("assets.id", ondelete="RESTRICT"), nullable=False)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    technician_name: Mapped[str] = mapped_column(String(255), nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    parts_replaced: Mapped[list] = mapped_column(JSON, default=list)
    service_report_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("service_reports.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("asset_id", "sequence", name="uq_maintenance_record_asset_seq"),
    )

    asset = relationship("Asset", back_populates="maintenance_history")
