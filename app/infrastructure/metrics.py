import time

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"],
)

REQUEST_ERRORS = Counter(
    "http_request_errors_total",
    "HTTP requests that raised before producing a response",
    ["method", "path"],
)


def _path_label(request: Request) -> str:
    # Route template, not the raw URL, to keep label cardinality bounded
    route = request.scope.get("route")
    return getattr(route, "path", None) or "<unmatched>"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Counts requests and records their latency per route"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            REQUEST_ERRORS.labels(request.method, _path_label(request)).inc()
            raise

        path = _path_label(request)
        REQUEST_LATENCY.labels(request.method, path).observe(time.perf_counter() - start_time)
        REQUEST_COUNT.labels(request.method, path, str(response.status_code)).inc()
        return response


async def metrics_endpoint() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
