"""Telemetry middleware for request instrumentation."""

from __future__ import annotations

import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.telemetry import observe_request

PROCESS_TIME_HEADER = "X-Process-Time-Ms"


class TelemetryMiddleware(BaseHTTPMiddleware):
    """Record Prometheus request metrics and expose the handling time."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:  # pragma: no cover - defensive
            observe_request(
                request.method,
                self._resolve_route(request),
                500,
                time.perf_counter() - start_time,
            )
            raise

        duration_seconds = time.perf_counter() - start_time
        # The matched route is only known once routing has run.
        observe_request(
            request.method,
            self._resolve_route(request),
            response.status_code,
            duration_seconds,
        )
        response.headers[PROCESS_TIME_HEADER] = f"{duration_seconds * 1000:.2f}"
        return response

    @staticmethod
    def _resolve_route(request: Request) -> str:
        """Return the route template (``/api/notes/{note_id}``) or the raw path."""

        scope_route: Any = request.scope.get("route")
        path = getattr(scope_route, "path", None)
        return path or request.url.path
