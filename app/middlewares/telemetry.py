from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import get_logger, set_request_id
from app.deps import SESSION_USER_KEY


def _session_username(request: Request) -> str | None:
    # a sessão só existe quando o SessionMiddleware envolve este middleware
    session = request.scope.get("session") or {}
    return (session.get(SESSION_USER_KEY) or {}).get("username")


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = set_request_id(request.headers.get("X-Request-ID"))

        log = get_logger().bind(
            path=request.url.path,
            method=request.method,
            username=_session_username(request),
        )
        log.info("request.start")

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.exception("request.error")
            raise
        finally:
            duration_ms = (time.perf_counter() - started) * 1000.0

        response.headers["X-Request-ID"] = rid

        # login/logout alteram o usuário no meio do request
        end_log = log.bind(
            username=_session_username(request),
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        if response.status_code >= 500:
            end_log.error("request.end")
        else:
            end_log.info("request.end")
        return response
