"""Service Report Service — Business logic for filing service reports.

Filing a report touches three records in one transaction: the report
itself, the work request (which gains the report reference) and the asset
(which gains one maintenance history entry and possibly a newer
last-maintenance date). All checks run before the first write.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.asset_ledger import build_maintenance_entry, next_last_maintenance_date
from app.core.metrics import man_hours, total_parts_cost
from app.core.request_lifecycle import ensure_mutable
from app.core.role_guard import ensure_allowed
from app.models.asset import Asset
from app.models.service_report import ServiceReport, ServiceReportPart
from app.models.user import ROLE_TECHNICIAN, User
from app.models.work_request import WorkRequest
from app.repositories.asset_repository import asset_repository
from app.repositories.service_report_repository import service_report_repository
from app.repositories.work_request_repository import work_request_repository
from app.schemas.common import PaginatedResponse
from app.schemas.service_report import ServiceReportCreate, ServiceReportResponse
from app.utils.exceptions import InvalidTransitionError, NotFoundError

# Request statuses in which work has been carried out
REPORTABLE_STATUSES: tuple[str, ...] = ("ongoing", "resolved", "cannot_resolve")


class ServiceReportService:
    """Service handling service report creation and queries."""

    async def create_report(
        self,
        db: AsyncSession,
        actor: User,
        data: ServiceReportCreate,
    ) -> ServiceReportResponse:
        """File a service report against a work request.

        Args:
            db: Async database session
            actor: Technician or manager filing the report
            data: Report contents

        Returns:
            ServiceReportResponse: Created report with computed man-hours and parts cost

        Raises:
            NotFoundError: Unknown work request
            InvariantViolationError: Work request is closed
            NotAuthorizedError: Role may not file reports
            InvalidTransitionError: Request not in a reportable status, or already reported
            InvalidInputError: Work end time not after start time, or negative part values
        """
        request: WorkRequest | None = await work_request_repository.get_by_request_id(db, data.request_id)
        if request is None:
            raise NotFoundError(f"Work request {data.request_id} not found")
        ensure_mutable(request)
        ensure_allowed(actor.role, "create_service_report")
        if request.status not in REPORTABLE_STATUSES:
            raise InvalidTransitionError(
                f"Cannot file a service report for work request {request.request_id} "
                f"in '{request.status}' status"
            )
        if request.service_report_id is not None:
            raise InvalidTransitionError(
                f"Work request {request.request_id} already has a service report"
            )

        hours: float = man_hours(data.work_start_time, data.work_end_time)
        parts_cost: Decimal = total_parts_cost(data.parts)
        asset: Asset | None = await asset_repository.get_by_id(db, request.asset_id)
        if asset is None:
            raise NotFoundError(f"Asset {request.asset_code} not found")

        report: ServiceReport = ServiceReport(
            report_id=await service_report_repository.next_report_id(db),
            tswr_no=request.tswr_no,
            work_request_id=request.id,
            asset_id=asset.id,
            asset_code=asset.asset_code,
            asset_name=asset.name,
            location=request.location,
            work_description=data.work_description,
            remarks=data.remarks,
            urgency=request.urgency,
            work_start_time=data.work_start_time,
            work_end_time=data.work_end_time,
            man_hours=hours,
            labor_cost=data.labor_cost,
            total_parts_cost=parts_cost,
            service_type=data.service_type,
            hours_down=data.hours_down,
            report_findings=data.report_findings,
            service_date=data.service_date,
            prepared_by=actor.id,
            prepared_by_name=actor.full_name,
            parts=[
                ServiceReportPart(
                    line_no=index,
                    part_name=part.part_name,
                    part_no=part.part_no,
                    quantity=part.quantity,
                    cost=part.cost,
                )
                for index, part in enumerate(data.parts, start=1)
            ],
        )
        report = await service_report_repository.add(db, report)

        from_status: str = request.status
        await work_request_repository.apply_changes(db, request, {"service_report_id": report.id})
        await work_request_repository.create_event(db, {
            "work_request_id": request.id,
            "action": "file_report",
            "from_status": from_status,
            "to_status": request.status,
            "actor_id": actor.id,
            "actor_name": actor.full_name,
            "note": report.report_id,
        })

        sequence: int = await asset_repository.next_history_sequence(db, asset.id)
        await asset_repository.append_record(db, build_maintenance_entry(report, sequence))
        await asset_repository.update_fields(db, asset, {
            "last_maintenance_date": next_last_maintenance_date(
                asset.last_maintenance_date, report.service_date
            ),
        })
        return ServiceReportResponse.model_validate(report)

    async def list_reports(
        self,
        db: AsyncSession,
        actor: User,
        asset_code: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> PaginatedResponse:
        """List reports, newest first. Technicians see the reports they prepared."""
        asset_id: UUID | None = None
        if asset_code:
            asset: Asset | None = await asset_repository.get_by_code(db, asset_code)
            if asset is None:
                raise NotFoundError(f"Asset {asset_code} not found")
            asset_id = asset.id
        prepared_by: UUID | None = actor.id if actor.role == ROLE_TECHNICIAN else None
        reports, total = await service_report_repository.get_filtered(
            db, asset_id=asset_id, prepared_by=prepared_by, page=page, per_page=per_page
        )
        return PaginatedResponse(
            items=[ServiceReportResponse.model_validate(r) for r in reports],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def get_report(self, db: AsyncSession, report_id: str) -> ServiceReportResponse:
        report: ServiceReport | None = await service_report_repository.get_by_report_id(db, report_id)
        if report is None:
            raise NotFoundError(f"Service report {report_id} not found")
        return ServiceReportResponse.model_validate(report)


service_report_service: ServiceReportService = ServiceReportService()
