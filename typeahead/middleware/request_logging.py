import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("typeahead.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log enriched with what the engine did for the request.

    Route handlers leave ``prefix`` and ``cache_status`` (suggestions) or
    ``recorded`` (searches) on ``request.state``; they are logged here and the
    cache outcome is echoed in an ``X-Cache`` header. Requests slower than
    ``slow_request_ms`` are logged at WARNING.
    """

    def __init__(self, app, slow_request_ms: float = 250.0):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        request.state.request_id = request_id

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        fields = [
            f"request_id={request_id}",
            f"method={request.method}",
            f"path={request.url.path}",
            f"status={response.status_code}",
            f"duration_ms={duration_ms:.1f}",
        ]
        cache_status = getattr(request.state, "cache_status", None)
        if cache_status is not None:
            fields.append(f"prefix={getattr(request.state, 'prefix', '')!r}")
            fields.append(f"cache={cache_status}")
            response.headers["X-Cache"] = cache_status.upper()
        recorded = getattr(request.state, "recorded", None)
        if recorded is not None:
            fields.append(f"recorded={recorded!r}")

        level = logging.WARNING if duration_ms > self.slow_request_ms else logging.INFO
        logger.log(level, " ".join(fields))

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.1f}"
        return response
