"""
Notes API - Request Logging Middleware
=======================================

What:  One access-log line per HTTP request.
How:   Times the downstream call, then logs the outcome at a level chosen
       from the status class. Note routes are logged by their route
       template (/api/{version}/note/{id}) so note ids stay out of the
       access log; the concrete path goes into `extra` for debugging.

Logged:      method, route, status, duration, request id, client IP
Not logged:  request bodies (note contents), Authorization headers, /health
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

_SKIPPED_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    # Populated by the router once a route matched; unmatched paths log as-is
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        client = request.client.host if request.client else "-"
        route = _route_template(request)
        version = request.path_params.get("version")

        logger.log(
            _level_for(response.status_code),
            "%s %s -> %d in %.1fms [%s]",
            request.method,
            route,
            response.status_code,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "path": request.url.path,
                "api_version": version,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client,
            },
        )
        return response
