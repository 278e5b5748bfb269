"""Manager dashboard statistics tests."""

from httpx import AsyncClient

from tests.conftest import auth_header
from tests.test_work_requests import approve, submit, to_resolved

URL = "/api/v1/dashboard/stats"


class TestDashboard:

    async def test_empty_system(self, client: AsyncClient, manager):
        res = await client.get(URL, headers=auth_header(manager))
        assert res.status_code == 200
        data = res.json()
        assert data["total_requests"] == 0
        assert data["requests_by_status"]["pending"] == 0
        assert data["requests_by_status"]["closed"] == 0
        assert data["total_assets"] == 0
        assert data["active_technicians"] == 0
        assert data["average_turnaround_hours"] is None

    async def test_counts(self, client: AsyncClient, employee, manager, technician, asset):
        first = await to_resolved(client, employee, manager, technician)
        await client.post(f"/api/v1/work-requests/{first}/confirm", json={"feedback": "Ok"},
                          headers=auth_header(employee))
        await client.post(f"/api/v1/work-requests/{first}/close", headers=auth_header(manager))
        second = (await submit(client, employee))["request_id"]
        await approve(client, manager, technician, second)
        await submit(client, employee)

        data = (await client.get(URL, headers=auth_header(manager))).json()
        assert data["total_requests"] == 3
        assert data["requests_by_status"]["closed"] == 1
        assert data["requests_by_status"]["scheduled"] == 1
        assert data["requests_by_status"]["pending"] == 1
        assert data["total_assets"] == 1
        assert data["assets_by_status"]["operational"] == 1
        assert data["active_technicians"] == 1
        assert data["average_turnaround_hours"] == 0

    async def test_manager_only(self, client: AsyncClient, technician):
        res = await client.get(URL, headers=auth_header(technician))
        assert res.status_code == 403
