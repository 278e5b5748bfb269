"""Preventive maintenance schedule tests — creation, completion rollover, deactivation."""

from datetime import datetime, timezone

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.metrics import as_utc
from app.services.pm_schedule_service import pm_schedule_service
from tests.conftest import auth_header

URL = "/api/v1/pm-schedules"
UTC = timezone.utc


async def create_schedule(client: AsyncClient, manager, **overrides) -> dict:
    payload = {
        "asset_code": "EQP-001",
        "description": "Weekly compressor inspection",
        "frequency": "weekly",
        "next_due_date": "2024-06-01T00:00:00Z",
        "tasks": ["Check oil level", "Drain condensate", "Inspect belts"],
    }
    payload.update(overrides)
    res = await client.post(URL, json=payload, headers=auth_header(manager))
    assert res.status_code == 201, res.text
    return res.json()


class TestCreateSchedule:

    async def test_create(self, client: AsyncClient, manager, technician, asset):
        data = await create_schedule(client, manager, technician_id=str(technician.id))
        assert data["schedule_id"] == "PM-0001"
        assert data["asset_name"] == "Air Compressor"
        assert data["is_active"] is True
        assert data["estimated_duration"] == 60
        assert data["assigned_to_name"] == "Tara Technician"
        assert data["tasks"] == ["Check oil level", "Drain condensate", "Inspect belts"]
        assert data["last_completed_date"] is None
        assert data["created_by_name"] == "Max Manager"

    async def test_asset_tracks_next_due(self, client: AsyncClient, manager, asset):
        await create_schedule(client, manager, next_due_date="2024-07-01T00:00:00Z")
        await create_schedule(client, manager, next_due_date="2024-06-15T00:00:00Z", frequency="monthly")
        res = await client.get("/api/v1/assets/EQP-001", headers=auth_header(manager))
        assert res.json()["next_scheduled_maintenance"].startswith("2024-06-15")

    async def test_technician_cannot_create(self, client: AsyncClient, technician, asset):
        res = await client.post(URL, json={
            "asset_code": "EQP-001",
            "description": "x",
            "frequency": "daily",
            "next_due_date": "2024-06-01T00:00:00Z",
        }, headers=auth_header(technician))
        assert res.status_code == 403

    async def test_unknown_asset(self, client: AsyncClient, manager):
        res = await client.post(URL, json={
            "asset_code": "NOPE-1",
            "description": "x",
            "frequency": "daily",
            "next_due_date": "2024-06-01T00:00:00Z",
        }, headers=auth_header(manager))
        assert res.status_code == 404

    async def test_assignee_must_be_technician(self, client: AsyncClient, manager, employee, asset):
        res = await client.post(URL, json={
            "asset_code": "EQP-001",
            "description": "x",
            "frequency": "daily",
            "next_due_date": "2024-06-01T00:00:00Z",
            "technician_id": str(employee.id),
        }, headers=auth_header(manager))
        assert res.status_code == 400

    async def test_unknown_frequency(self, client: AsyncClient, manager, asset):
        res = await client.post(URL, json={
            "asset_code": "EQP-001",
            "description": "x",
            "frequency": "hourly",
            "next_due_date": "2024-06-01T00:00:00Z",
        }, headers=auth_header(manager))
        assert res.status_code == 422


class TestCompleteSchedule:

    async def test_weekly_rollover(self, client: AsyncClient, db: AsyncSession, manager, technician, asset):
        await create_schedule(client, manager)
        completed = datetime(2024, 6, 1, 0, 0, tzinfo=UTC)
        result = await pm_schedule_service.complete_schedule(db, technician, "PM-0001", completion_time=completed)
        assert as_utc(result.next_due_date) == datetime(2024, 6, 8, tzinfo=UTC)
        assert as_utc(result.last_completed_date) == completed

    async def test_repeat_completion_keeps_advancing(self, client: AsyncClient, db: AsyncSession,
                                                     manager, technician, asset):
        await create_schedule(client, manager)
        completed = datetime(2024, 6, 1, 0, 0, tzinfo=UTC)
        await pm_schedule_service.complete_schedule(db, technician, "PM-0001", completion_time=completed)
        result = await pm_schedule_service.complete_schedule(db, technician, "PM-0001", completion_time=completed)
        assert as_utc(result.next_due_date) == datetime(2024, 6, 15, tzinfo=UTC)

    async def test_completion_moves_asset_due_date(self, client: AsyncClient, db: AsyncSession,
                                                   manager, technician, asset):
        await create_schedule(client, manager)
        await pm_schedule_service.complete_schedule(
            db, technician, "PM-0001", completion_time=datetime(2024, 6, 2, tzinfo=UTC)
        )
        await db.commit()
        res = await client.get("/api/v1/assets/EQP-001", headers=auth_header(manager))
        assert res.json()["next_scheduled_maintenance"].startswith("2024-06-09")

    async def test_complete_via_api(self, client: AsyncClient, manager, technician, asset):
        await create_schedule(client, manager)
        res = await client.post(f"{URL}/PM-0001/complete", headers=auth_header(technician))
        assert res.status_code == 200
        assert res.json()["last_completed_date"] is not None

    async def test_employee_cannot_complete(self, client: AsyncClient, manager, employee, asset):
        await create_schedule(client, manager)
        res = await client.post(f"{URL}/PM-0001/complete", headers=auth_header(employee))
        assert res.status_code == 403

    async def test_unknown_schedule(self, client: AsyncClient, technician):
        res = await client.post(f"{URL}/PM-9999/complete", headers=auth_header(technician))
        assert res.status_code == 404


class TestDeactivateSchedule:

    async def test_deactivate(self, client: AsyncClient, manager, technician, asset):
        await create_schedule(client, manager)
        res = await client.post(f"{URL}/PM-0001/deactivate", headers=auth_header(manager))
        assert res.status_code == 200
        assert res.json()["is_active"] is False

        res = await client.post(f"{URL}/PM-0001/deactivate", headers=auth_header(manager))
        assert res.status_code == 409

        res = await client.post(f"{URL}/PM-0001/complete", headers=auth_header(technician))
        assert res.status_code == 409

    async def test_deactivation_clears_asset_due(self, client: AsyncClient, manager, asset):
        await create_schedule(client, manager)
        await client.post(f"{URL}/PM-0001/deactivate", headers=auth_header(manager))
        res = await client.get("/api/v1/assets/EQP-001", headers=auth_header(manager))
        assert res.json()["next_scheduled_maintenance"] is None

    async def test_technician_cannot_deactivate(self, client: AsyncClient, manager, technician, asset):
        await create_schedule(client, manager)
        res = await client.post(f"{URL}/PM-0001/deactivate", headers=auth_header(technician))
        assert res.status_code == 403


class TestListSchedules:

    async def test_filters(self, client: AsyncClient, manager, employee, asset):
        await create_schedule(client, manager, next_due_date="2024-06-01T00:00:00Z")
        await create_schedule(client, manager, next_due_date="2024-09-01T00:00:00Z", frequency="quarterly")
        await client.post(f"{URL}/PM-0002/deactivate", headers=auth_header(manager))

        res = await client.get(URL, headers=auth_header(employee))
        data = res.json()
        assert data["total"] == 2
        assert [s["schedule_id"] for s in data["items"]] == ["PM-0001", "PM-0002"]

        res = await client.get(URL, params={"is_active": True}, headers=auth_header(employee))
        assert res.json()["total"] == 1

        res = await client.get(URL, params={"due_before": "2024-07-01T00:00:00"}, headers=auth_header(employee))
        assert [s["schedule_id"] for s in res.json()["items"]] == ["PM-0001"]

        res = await client.get(URL, params={"asset_code": "EQP-001"}, headers=auth_header(employee))
        assert res.json()["total"] == 2

    async def test_get_one(self, client: AsyncClient, manager, asset):
        await create_schedule(client, manager)
        res = await client.get(f"{URL}/PM-0001", headers=auth_header(manager))
        assert res.status_code == 200
        assert res.json()["frequency"] == "weekly"
