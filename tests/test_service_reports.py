"""Service report API tests — filing, side effects on the request and asset."""

from decimal import Decimal

from httpx import AsyncClient

from tests.conftest import auth_header
from tests.test_work_requests import approve, submit, to_resolved

URL = "/api/v1/service-reports"
REQUESTS = "/api/v1/work-requests"


def report_payload(request_id: str, **overrides) -> dict:
    payload = {
        "request_id": request_id,
        "work_description": "Replaced valve seal and gasket",
        "remarks": "Monitor for a week",
        "work_start_time": "2024-06-10T09:00:00Z",
        "work_end_time": "2024-06-10T11:30:00Z",
        "labor_cost": "80.00",
        "parts": [
            {"part_name": "Valve seal", "part_no": "VS-10", "quantity": 2, "cost": "50.00"},
            {"part_name": "Gasket", "quantity": 1, "cost": "20.00"},
        ],
        "service_type": "unplanned",
        "hours_down": 3,
        "report_findings": "Worn seal caused the leak",
        "service_date": "2024-06-10T12:00:00Z",
    }
    payload.update(overrides)
    return payload


async def to_ongoing(client, employee, manager, technician) -> str:
    request_id = (await submit(client, employee))["request_id"]
    await approve(client, manager, technician, request_id)
    await client.post(f"{REQUESTS}/{request_id}/start", headers=auth_header(technician))
    return request_id


class TestCreateReport:

    async def test_create_computes_totals(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        res = await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))
        assert res.status_code == 201, res.text
        data = res.json()
        assert data["report_id"] == "SR-0001"
        assert data["man_hours"] == 2.5
        assert Decimal(data["total_parts_cost"]) == Decimal("120")
        assert data["asset_code"] == "EQP-001"
        assert data["location"] == "Plant 1"
        assert data["urgency"] == "immediately"
        assert data["prepared_by_name"] == "Tara Technician"
        assert [p["line_no"] for p in data["parts"]] == [1, 2]
        assert data["parts"][0]["part_no"] == "VS-10"

    async def test_request_gains_report_reference(self, client: AsyncClient, employee, manager,
                                                  technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        report = (await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))).json()

        res = await client.get(f"{REQUESTS}/{request_id}", headers=auth_header(manager))
        assert res.json()["service_report_id"] == report["id"]
        assert res.json()["status"] == "ongoing"

        events = (await client.get(f"{REQUESTS}/{request_id}/events", headers=auth_header(manager))).json()
        assert events[-1]["action"] == "file_report"
        assert events[-1]["note"] == "SR-0001"

    async def test_asset_history_appended(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        report = (await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))).json()

        history = (await client.get("/api/v1/assets/EQP-001/history", headers=auth_header(manager))).json()
        assert len(history) == 1
        entry = history[0]
        assert entry["sequence"] == 1
        assert entry["type"] == "corrective"
        assert Decimal(entry["cost"]) == Decimal("200")
        assert entry["parts_replaced"] == ["Valve seal", "Gasket"]
        assert entry["technician_name"] == "Tara Technician"
        assert entry["service_report_id"] == report["id"]

        data = (await client.get("/api/v1/assets/EQP-001", headers=auth_header(manager))).json()
        assert data["last_maintenance_date"].startswith("2024-06-10")
        assert data["health_score"] == 85

    async def test_planned_work_is_preventive(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        await client.post(URL, json=report_payload(request_id, service_type="planned", parts=[]),
                          headers=auth_header(technician))
        history = (await client.get("/api/v1/assets/EQP-001/history", headers=auth_header(manager))).json()
        assert history[0]["type"] == "preventive"
        assert history[0]["parts_replaced"] == []
        assert Decimal(history[0]["cost"]) == Decimal("80")

    async def test_report_on_resolved_request(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_resolved(client, employee, manager, technician)
        res = await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))
        assert res.status_code == 201


class TestReportGuards:

    async def test_one_report_per_request(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))
        res = await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))
        assert res.status_code == 409

        history = (await client.get("/api/v1/assets/EQP-001/history", headers=auth_header(manager))).json()
        assert len(history) == 1

    async def test_pending_request_not_reportable(self, client: AsyncClient, employee, technician, asset):
        request_id = (await submit(client, employee))["request_id"]
        res = await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))
        assert res.status_code == 409

    async def test_closed_request_locked(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_resolved(client, employee, manager, technician)
        await client.post(f"{REQUESTS}/{request_id}/confirm", json={"feedback": "Ok"},
                          headers=auth_header(employee))
        await client.post(f"{REQUESTS}/{request_id}/close", headers=auth_header(manager))
        res = await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))
        assert res.status_code == 423

    async def test_employee_cannot_file(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        res = await client.post(URL, json=report_payload(request_id), headers=auth_header(employee))
        assert res.status_code == 403

    async def test_end_before_start(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        res = await client.post(URL, json=report_payload(
            request_id,
            work_start_time="2024-06-10T11:00:00Z",
            work_end_time="2024-06-10T11:00:00Z",
        ), headers=auth_header(technician))
        assert res.status_code == 400

        res = await client.get(f"{REQUESTS}/{request_id}", headers=auth_header(manager))
        assert res.json()["service_report_id"] is None

    async def test_unknown_request(self, client: AsyncClient, technician):
        res = await client.post(URL, json=report_payload("REQ-9999"), headers=auth_header(technician))
        assert res.status_code == 404

    async def test_negative_part_values_rejected(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        res = await client.post(URL, json=report_payload(
            request_id, parts=[{"part_name": "Bolt", "quantity": -1, "cost": "1.00"}],
        ), headers=auth_header(technician))
        assert res.status_code == 400

        res = await client.post(URL, json=report_payload(
            request_id, parts=[{"part_name": "Bolt", "quantity": 2, "cost": "-5.00"}],
        ), headers=auth_header(technician))
        assert res.status_code == 400

        res = await client.get(f"{REQUESTS}/{request_id}", headers=auth_header(manager))
        assert res.json()["service_report_id"] is None
        history = (await client.get("/api/v1/assets/EQP-001/history", headers=auth_header(manager))).json()
        assert history == []


class TestReadReports:

    async def test_get_by_report_id(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        await client.post(URL, json=report_payload(request_id), headers=auth_header(technician))

        res = await client.get(f"{URL}/SR-0001", headers=auth_header(manager))
        assert res.status_code == 200
        assert len(res.json()["parts"]) == 2

        res = await client.get(f"{URL}/SR-9999", headers=auth_header(manager))
        assert res.status_code == 404

    async def test_list_filters(self, client: AsyncClient, employee, manager, technician, asset):
        request_id = await to_ongoing(client, employee, manager, technician)
        await client.post(URL, json=report_payload(request_id), headers=auth_header(manager))

        res = await client.get(URL, headers=auth_header(manager))
        assert res.json()["total"] == 1

        res = await client.get(URL, params={"asset_code": "EQP-001"}, headers=auth_header(manager))
        assert res.json()["total"] == 1

        # Technicians only see the reports they prepared
        res = await client.get(URL, headers=auth_header(technician))
        assert res.json()["total"] == 0
