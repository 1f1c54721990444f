from __future__ import annotations

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from catalog_api.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id (inbound X-Request-Id or a fresh uuid4) and echo it back."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        logger.info("request start %s %s", request.method, request.url.path, extra={"requestId": request_id})

        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "request end %s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={"requestId": request_id},
        )
        return response
