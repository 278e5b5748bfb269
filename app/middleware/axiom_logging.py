"""Axiom API logging middleware.

Sends one structured event per API call to Axiom: method, path, route
params, masked request body, status code, duration, acting user and error
detail. Fields whose names look like credentials are masked before
shipping. Without AXIOM_API_TOKEN and AXIOM_DATASET the middleware is a
pass-through.
"""

import json
import re
import time
from typing import Any

import jwt
from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.utils.jwt import decode_token

# Fields to mask in request bodies and query strings
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# Lifecycle endpoints end with the transition name: /work-requests/REQ-1001/approve
_TRANSITION_PATH = re.compile(r"^/api/v1/(work-requests|pm-schedules)/([^/]+)/([a-z-]+)$")

_MAX_DEPTH = 5
_MAX_LIST_ITEMS = 20
_MAX_TEXT = 2000
_MAX_ERROR = 500


def _mask(data: Any, depth: int = 0) -> Any:
    """Recursively mask sensitive fields and cap nesting and list length."""
    if depth > _MAX_DEPTH:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:_MAX_LIST_ITEMS]]
    if isinstance(data, str) and len(data) > _MAX_TEXT:
        return data[:_MAX_TEXT] + "...(truncated)"
    return data


def _actor(request: Request) -> dict[str, str] | None:
    """Best-effort user id and role from the bearer token, for log context only."""
    header: str = request.headers.get("authorization", "")
    if not header.lower().startswith("bearer "):
        return None
    try:
        payload: dict[str, Any] = decode_token(header[7:])
    except jwt.InvalidTokenError:
        return None
    return {"user_id": str(payload.get("sub")), "role": str(payload.get("role"))}


async def _read_body(response: Response) -> bytes:
    body = b""
    async for chunk in response.body_iterator:
        body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
    return body


def _error_detail(body: bytes) -> str:
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        text = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    return text if len(text) <= _MAX_ERROR else text[:_MAX_ERROR] + "..."


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every API request and its outcome to Axiom."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._client or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        event: dict[str, Any] = {"method": method, "path": path}

        if request.query_params:
            event["query_params"] = _mask(dict(request.query_params))
        match = _TRANSITION_PATH.match(path)
        if match:
            event["resource"] = match.group(1)
            event["resource_id"] = match.group(2)
            event["action"] = match.group(3)
        actor = _actor(request)
        if actor:
            event["actor"] = actor

        if method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    event["request_body"] = _mask(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    event["request_body"] = "(non-json body)"

        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # Error bodies are consumed for the log and re-wrapped for the client
            if status_code >= 400:
                body = await _read_body(response)
                event["error"] = _error_detail(body)
                response = Response(
                    content=body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["status_code"] = status_code
            event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            try:
                self._client.ingest_events(self._dataset, [event])
            except Exception:
                pass  # Never break a request on log failure

        return response
