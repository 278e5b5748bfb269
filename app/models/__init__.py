"""SQLAlchemy ORM models package — Central import point for all domain models.

Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: Users and roles
    asset: Assets and their maintenance history
    work_request: Work requests (TSWR) and the transition audit trail
    maintenance: Preventive maintenance schedules
    service_report: Service reports and parts line items
"""

from app.models.user import User
from app.models.asset import Asset, MaintenanceRecord
from app.models.work_request import WorkRequest, RequestEvent
from app.models.maintenance import PMSchedule
from app.models.service_report import ServiceReport, ServiceReportPart

__all__ = [
    "User",
    "Asset", "MaintenanceRecord",
    "WorkRequest", "RequestEvent",
    "PMSchedule",
    "ServiceReport", "ServiceReportPart",
]
