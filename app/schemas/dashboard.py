"""Dashboard Pydantic response schemas."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Manager dashboard summary.

    Attributes:
        total_requests: All work requests
        requests_by_status: Count per lifecycle status (every status present, zero-filled)
        assets_by_status: Count per asset status (zero-filled)
        total_assets: All registered assets
        active_technicians: Technicians available for assignment
        average_turnaround_hours: Mean turnaround over closed requests, None if none closed
    """

    total_requests: int
    requests_by_status: dict[str, int]
    total_assets: int
    assets_by_status: dict[str, int]
    active_technicians: int
    average_turnaround_hours: float | None
