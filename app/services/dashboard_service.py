"""Dashboard Service — Aggregated statistics for managers."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.role_guard import ensure_allowed
from app.models.user import ROLE_TECHNICIAN, User
from app.models.work_request import STATUSES
from app.repositories.asset_repository import asset_repository
from app.repositories.user_repository import user_repository
from app.repositories.work_request_repository import work_request_repository
from app.schemas.dashboard import DashboardStats

ASSET_STATUSES: tuple[str, ...] = ("operational", "under_maintenance", "out_of_service")


class DashboardService:

    async def get_stats(self, db: AsyncSession, actor: User) -> DashboardStats:
        """Build the manager dashboard summary.

        Raises:
            NotAuthorizedError: Actor is not a manager
        """
        ensure_allowed(actor.role, "view_dashboard")

        request_counts: dict[str, int] = await work_request_repository.count_by_status(db)
        asset_counts: dict[str, int] = await asset_repository.count_by_status(db)
        technicians: int = await user_repository.count(
            db, {"role": ROLE_TECHNICIAN, "is_active": True}
        )
        average: float | None = await work_request_repository.average_turnaround(db)

        return DashboardStats(
            total_requests=sum(request_counts.values()),
            requests_by_status={s: request_counts.get(s, 0) for s in STATUSES},
            total_assets=sum(asset_counts.values()),
            assets_by_status={s: asset_counts.get(s, 0) for s in ASSET_STATUSES},
            active_technicians=technicians,
            average_turnaround_hours=round(average, 1) if average is not None else None,
        )


dashboard_service: DashboardService = DashboardService()
