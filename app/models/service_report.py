"""Service report SQLAlchemy ORM model definitions.

A technician's record of the work performed against one work request.
Reports are immutable once created.

Tables:
    - service_reports: Service reports (one per work request)
    - service_report_parts: Parts and materials used, ordered by line number
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import String, DateTime, Float, Integer, Numeric, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ServiceReport(Base):
    """Service report model.

    Attributes:
        id: Unique identifier
        report_id: Human-facing report number (e.g. "SR-0001")
        tswr_no: Form number of the originating request
        work_request_id: Originating request (unique: one report per request)
        asset_id / asset_code / asset_name / location: Serviced asset
        work_description: Work performed
        remarks: Optional remarks
        urgency: Request urgency at the time of work
        work_start_time / work_end_time: Work window
        man_hours: (end - start) in hours
        labor_cost: Labor cost
        total_parts_cost: Sum of quantity * cost over parts
        service_type: "planned" or "unplanned"
        hours_down: Downtime hours reported by the technician
        report_findings: Findings narrative
        service_date: Date the service was performed
        prepared_by / prepared_by_name: Technician or manager who filed it
        created_at: Creation timestamp
    """

    __tablename__ = "service_reports"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    report_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    tswr_no: Mapped[str] = mapped_column(String(30), nullable=False)
    work_request_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_requests.id", ondelete="RESTRICT"), unique=True, nullable=False)
    asset_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("assets.id", ondelete="RESTRICT"), nullable=False)
    asset_code: Mapped[str] = mapped_column(String(50), nullable=False)
    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    work_description: Mapped[str] = mapped_column(Text, nullable=False)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    urgency: Mapped[str] = mapped_column(String(30), nullable=False)
    work_start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    work_end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    man_hours: Mapped[float] = mapped_column(Float, nullable=False)
    labor_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    total_parts_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    service_type: Mapped[str] = mapped_column(String(20), nullable=False)
    hours_down: Mapped[float] = mapped_column(Float, default=0)
    report_findings: Mapped[str] = mapped_column(Text, nullable=False)
    service_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    prepared_by: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    prepared_by_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    parts = relationship(
        "ServiceReportPart",
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="ServiceReportPart.line_no",
        lazy="selectin",
    )


class ServiceReportPart(Base):
    """Parts/materials line item of a service report.

    Attributes:
        id: Unique identifier
        service_report_id: Parent report
        line_no: Position in the parts list
        part_name: Part or material name
        part_no: Optional part number
        quantity: Units used (>= 1)
        cost: Unit cost
    """

    __tablename__ = "service_report_parts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_report_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("service_reports.id", ondelete="CASCADE"), nullable=False)
    line_no: Mapped[int] = mapped_column(Integer, nullable=False)
    part_name: Mapped[str] = mapped_column(String(255), nullable=False)
    part_no: Mapped[str | None] = mapped_column(String(100), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))

    report = relationship("ServiceReport", back_populates="parts")
