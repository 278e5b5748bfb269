"""Asset maintenance ledger.

Turns a filed service report into one append-only maintenance history
entry. The health score is never touched here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from app.core.metrics import as_utc
from app.models.service_report import ServiceReport


def maintenance_type(service_type: str) -> str:
    """Planned work is preventive; anything else is corrective."""
    return "preventive" if service_type == "planned" else "corrective"


def build_maintenance_entry(report: ServiceReport, sequence: int) -> dict[str, Any]:
    """Build the maintenance record for a service report.

    Args:
        report: The new service report (parts already attached)
        sequence: 1-based position in the asset's history

    Returns:
        dict[str, Any]: Column values for a MaintenanceRecord
    """
    labor_cost: Decimal = report.labor_cost or Decimal("0")
    parts_cost: Decimal = report.total_parts_cost or Decimal("0")
    return {
        "asset_id": report.asset_id,
        "sequence": sequence,
        "date": report.service_date,
        "type": maintenance_type(report.service_type),
        "description": report.work_description,
        "technician_name": report.prepared_by_name,
        "cost": parts_cost + labor_cost,
        "parts_replaced": [part.part_name for part in report.parts],
        "service_report_id": report.id,
    }


def next_last_maintenance_date(current: datetime | None, service_date: datetime) -> datetime:
    """Latest of the current last-maintenance date and the new service date.

    Reports recorded out of order never move the date backwards.
    """
    if current is None or as_utc(service_date) > as_utc(current):
        return service_date
    return current
