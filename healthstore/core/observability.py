# healthstore/core/observability.py
import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from prometheus_client import Counter
from healthstore.core.logging import get_logger

log = get_logger("obs")

# Served on /metrics by the instrumentator (default registry)
RECOMMENDATIONS_TOTAL = Counter(
    "healthstore_recommendations_total",
    "Recommendation results produced",
    ["source", "follow_up"],
)


def record_recommendation(source: str, follow_up: bool) -> None:
    RECOMMENDATIONS_TOTAL.labels(source=source, follow_up=str(follow_up).lower()).inc()


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.perf_counter()

        # Make request id accessible downstream
        request.state.request_id = req_id

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "-"

        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers["x-request-id"] = req_id
            return response
        except Exception:
            # No body logging (symptoms are health data), only safe metadata
            log.exception("unhandled_error req_id=%s %s %s client=%s", req_id, method, path, client_ip)
            raise
        finally:
            dur_ms = round((time.perf_counter() - start) * 1000, 2)
            log.info("http_request req_id=%s %s %s status=%s duration_ms=%s", req_id, method, path, status, dur_ms)
