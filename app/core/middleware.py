"""Request correlation and access logging.

Every response carries an ``X-Request-ID``. A caller-supplied ID is reused
when it is a short token of safe characters; anything else is replaced so
log lines and error envelopes never echo arbitrary header content. Access
log lines also carry the acting user, which storefront clients pass as the
``id`` query parameter on checkout, review and admin calls.
"""

import re
import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import get_logger, request_id_ctx

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(header_value: str | None) -> str:
    """Return the caller's request ID when it is safe, else a new UUID."""
    if header_value and REQUEST_ID_PATTERN.match(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for the request's lifetime and log the exchange."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_ctx.set(request_id)
        started = time.perf_counter()
        path = request.url.path
        user_id = request.query_params.get("id")

        try:
            logger.info(
                "http.request_started",
                method=request.method,
                path=path,
                user_id=user_id,
            )

            response = await call_next(request)

            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "http.request_completed",
                method=request.method,
                path=path,
                user_id=user_id,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_ctx.reset(token)
