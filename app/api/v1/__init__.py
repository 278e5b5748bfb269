"""API v1 Router package — Aggregates all endpoints into a single router.

Included routers:
    - auth: Login and current user
    - users: Account creation and technician listing
    - assets: Asset registry and maintenance history
    - work_requests: TSWR lifecycle
    - service_reports: Service reports
    - pm_schedules: Preventive maintenance
    - dashboard: Manager statistics
"""

from fastapi import APIRouter

from app.api.v1.auth import router as auth_router
from app.api.v1.users import router as users_router
from app.api.v1.assets import router as assets_router
from app.api.v1.work_requests import router as work_requests_router
from app.api.v1.service_reports import router as service_reports_router
from app.api.v1.pm_schedules import router as pm_schedules_router
from app.api.v1.dashboard import router as dashboard_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(assets_router, prefix="/assets", tags=["Assets"])
api_router.include_router(work_requests_router, prefix="/work-requests", tags=["Work Requests"])
api_router.include_router(service_reports_router, prefix="/service-reports", tags=["Service Reports"])
api_router.include_router(pm_schedules_router, prefix="/pm-schedules", tags=["Preventive Maintenance"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
