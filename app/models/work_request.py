"""Work request SQLAlchemy ORM model definitions.

A work request (TSWR form) is filed by an employee against an asset and
moves through the lifecycle below. Every write bumps ``version`` so the
repository can apply transitions as compare-and-swap updates.

Status Flow:
    pending → scheduled → ongoing → resolved → closed
    pending → denied
    ongoing → cannot_resolve

Tables:
    - work_requests: Technical service work requests
    - work_request_events: Transition audit trail
"""

import uuid
from datetime import date, datetime, timezone
from sqlalchemy import String, Boolean, Date, DateTime, Integer, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

STATUSES: tuple[str, ...] = (
    "pending", "denied", "scheduled", "ongoing", "cannot_resolve", "resolved", "closed",
)
URGENCIES: tuple[str, ...] = ("standstill", "immediately", "on_occasion", "during_maintenance")


class WorkRequest(Base):
    """Work request model — One submitted service need.

    Lifecycle fields are written exactly once, by the transition that
    produces them. A closed request never changes again, and
    ``turnaround_time`` is set only by the close transition.

    Attributes:
        id: Unique identifier
        request_id: Sequential request number (e.g. "REQ-1001")
        tswr_no: Human-facing form number (e.g. "TSWR-24-001")
        asset_id: Target asset
        asset_code: Asset code at creation time
        asset_name: Asset name at creation time
        location: Asset location at creation time
        work_description: Requested work
        urgency: standstill / immediately / on_occasion / during_maintenance
        disrupts_operation: Whether the issue disrupts operations
        attachment_url: Optional attachment reference
        status: Current lifecycle status
        denial_reason: Reason given on deny
        scheduled_date: Date the work is scheduled for
        submitted_by / submitted_by_name: Requester
        approved_by / approved_by_name / approved_at: Manager decision on approve or deny
        assigned_to / assigned_to_name: Assigned technician
        started_at: Moment work started
        resolved_at: Moment work was resolved
        cannot_resolve_reason: Reason given when the work could not be resolved
        requester_feedback / requester_confirmed_at: Requester confirmation
        closed_at / closed_by / closed_by_name: Closure
        turnaround_time: Whole hours between creation and closure
        service_report_id: Report filed against this request
        version: Optimistic concurrency counter
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "work_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    request_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    tswr_no: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)

    # Target asset, denormalized at creation time
    asset_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("assets.id", ondelete="RESTRICT"), nullable=False)
    asset_code: Mapped[str] = mapped_column(String(50), nullable=False)
    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)

    work_description: Mapped[str] = mapped_column(Text, nullable=False)
    urgency: Mapped[str] = mapped_column(String(30), default="standstill")
    disrupts_operation: Mapped[bool] = mapped_column(Boolean, default=False)
    attachment_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="pending")

    submitted_by: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    submitted_by_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Manager decision (approve or deny)
    approved_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    approved_by_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    denial_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    scheduled_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    assigned_to_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Execution
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cannot_resolve_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Requester confirmation and closure
    requester_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    requester_confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    closed_by_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    turnaround_time: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Reverse pointer to the filed report; the report side carries the foreign key
    service_report_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_work_requests_status", "status"),
        Index("ix_work_requests_submitted_by", "submitted_by"),
        Index("ix_work_requests_assigned_to", "assigned_to"),
    )


class RequestEvent(Base):
    """Work request audit trail model — One row per applied transition.

    Attributes:
        id: Unique identifier
        work_request_id: Target request
        action: Transition name ("submit", "approve", "deny", ...)
        from_status: Status before the transition (None for submit)
        to_status: Status after the transition
        actor_id / actor_name: Who performed it
        note: Reason or feedback text, when the transition carries one
        created_at: When it happened
    """

    __tablename__ = "work_request_events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    work_request_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_requests.id", ondelete="CASCADE"), nullable=False)
    action: Mapped[str] = mapped_column(String(30), nullable=False)
    from_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    to_status: Mapped[str] = mapped_column(String(20), nullable=False)
    actor_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    actor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_work_request_events_request", "work_request_id"),
    )
