"""FastAPI application entry point — Middleware and router registration.

Configures Axiom logging, CORS, the health check, and mounts the v1 API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    description="Work requests (TSWR), service reports, preventive maintenance and asset history",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom request/response logging, registered before CORS to capture all requests
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for load balancers and monitoring."""
    return {"status": "ok"}


from app.api.v1 import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")
