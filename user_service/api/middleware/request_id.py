"""
Request ID and access logging middleware.

Tags every request with an X-Request-ID (client supplied or generated) and
logs slow or refused requests. Bearer tokens and cookies never reach the log.
"""

import time
import uuid
from typing import Callable, Dict, Mapping

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from user_service.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Login pays for a bcrypt verify, so keep the bar above a normal hash
SLOW_REQUEST_MS = 1000

CREDENTIAL_HEADERS = frozenset({"authorization", "cookie", "proxy-authorization"})


def loggable_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Request headers minus anything that carries a credential."""
    return {
        name: value
        for name, value in headers.items()
        if name.lower() not in CREDENTIAL_HEADERS
    }


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlate logs per request and report slow or refused calls."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            start = time.perf_counter()
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000

            response.headers[REQUEST_ID_HEADER] = request_id

            context = {
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 1),
            }
            if duration_ms > SLOW_REQUEST_MS:
                logger.warning(
                    "Slow request",
                    extra={**context, "headers": loggable_headers(request.headers)},
                )
            if response.status_code == status.HTTP_403_FORBIDDEN:
                # Token problems are the common cause; say whether one was sent
                logger.info(
                    "Request refused",
                    extra={**context, "had_authorization": "authorization" in request.headers},
                )

            return response
        finally:
            request_id_var.reset(token)
