from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.metrics import request_metrics
from app.core.request_context import clear_log_context, set_log_context

logger = logging.getLogger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_log_context(request_id=request_id)

        status_code = 500
        endpoint = request.url.path
        method = request.method
        response = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            company_id = _extract_company_id(request)
            user_id = _extract_user_id(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 2)

            set_log_context(company_id=company_id, user_id=user_id)
            request_metrics.observe(
                endpoint=_route_template(request) or endpoint,
                method=method,
                status_code=status_code,
                duration_ms=duration_ms,
                company_id=company_id,
            )

            logger.info(
                "request completed",
                extra={
                    "request_id": request_id,
                    "company_id": company_id,
                    "user_id": user_id,
                    "endpoint": endpoint,
                    "method": method,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )

            if response is not None:
                response.headers["X-Request-ID"] = request_id

            clear_log_context()


def _route_template(request: Request) -> str | None:
    route = request.scope.get("route")
    return getattr(route, "path", None)


def _extract_company_id(request: Request) -> str | None:
    context = getattr(request.state, "request_context", None)
    if context is not None and context.effective_company_id:
        return str(context.effective_company_id)
    company = request.path_params.get("company_id") or request.query_params.get("companyId")
    if company:
        return str(company)
    return None


def _extract_user_id(request: Request) -> str | None:
    user = getattr(request.state, "user", None)
    if user is None:
        return None
    user_id = getattr(user, "id", None)
    return str(user_id) if user_id is not None else None
