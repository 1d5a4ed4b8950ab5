"""
Campus CMS - HTTP Middleware
Request correlation, per-actor access logging and response headers
"""

import time
from typing import Any, Callable, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import settings
from app.core.logging_config import (
    logger,
    set_request_id,
    set_user_id,
    generate_request_id,
)


API_PREFIX = f"/api/{settings.API_VERSION}"

# Probes and docs are polled constantly; keep them out of the access log
QUIET_PATHS = frozenset({
    "/",
    "/health",
    f"{API_PREFIX}/health/live",
    f"{API_PREFIX}/health/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
})

SLOW_REQUEST_MS = 1000

ANONYMOUS: Dict[str, Any] = {"user_id": None, "role": "anonymous", "department": None}


def request_actor(request: Request) -> Dict[str, Any]:
    """Who made the request, as recorded by the auth dependency"""
    return getattr(request.state, "actor", None) or ANONYMOUS


def access_log_level(status_code: int) -> str:
    if status_code >= 500:
        return "error"
    # Refused logins and failed gates are the interesting part of an audit trail
    if status_code in (401, 403):
        return "warning"
    return "info"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One access-log line per request, tagged with the acting identity.

    The request id comes from ``X-Request-ID`` when the caller sends one and
    is echoed back together with ``X-Response-Time``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        started = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                actor = request_actor(request)
                logger.error(
                    f"{method} {path} raised {type(exc).__name__}",
                    exc_info=True,
                    extra={
                        "event_type": "http_request_error",
                        "http_method": method,
                        "http_path": path,
                        "actor_id": actor["user_id"],
                        "actor_role": actor["role"],
                        "error_type": type(exc).__name__,
                    },
                )
                raise

            elapsed = (time.perf_counter() - started) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed:.2f}ms"

            if path not in QUIET_PATHS:
                self.log_access(request, response.status_code, elapsed)
            return response
        finally:
            set_request_id("")
            set_user_id("")

    @staticmethod
    def log_access(request: Request, status_code: int, elapsed: float) -> None:
        actor = request_actor(request)
        method, path = request.method, request.url.path
        getattr(logger, access_log_level(status_code))(
            f"{method} {path} {status_code} as {actor['role']} ({elapsed:.2f}ms)",
            extra={
                "event_type": "http_request_complete",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": round(elapsed, 2),
                "actor_id": actor["user_id"],
                "actor_role": actor["role"],
                "actor_department": actor["department"],
            },
        )
        if elapsed > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow request: {method} {path} took {elapsed:.2f}ms",
                extra={"event_type": "slow_request", "http_path": path, "duration_ms": round(elapsed, 2)},
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Hardening headers; API payloads carry student records so they are never cached"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.path.startswith(API_PREFIX):
            response.headers["Cache-Control"] = "no-store"
        return response


__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "QUIET_PATHS",
    "request_actor",
    "access_log_level",
]
