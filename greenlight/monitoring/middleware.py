"""Prometheus instrumentation for the HTTP API.

Requests are counted and timed per method, route template and status.
The exposition endpoint is mounted at /metrics.
"""

from collections.abc import Iterable

from fastapi import FastAPI
from prometheus_client import Counter, Gauge, Histogram, make_asgi_app
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match
from starlette.types import ASGIApp

METRICS_PATH = "/metrics"

# =============================================================================
# HTTP METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "greenlight_http_requests_total",
    "HTTP requests by method, route template and status",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION = Histogram(
    "greenlight_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 3.0, 5.0],
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "greenlight_http_requests_in_progress",
    "HTTP requests currently being served",
    ["method"],
)


# =============================================================================
# MIDDLEWARE
# =============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records request count, latency and concurrency.

    Paths are labelled with the matching route template
    (``/v1/movies/{movie_id}``) so ids do not multiply label values.
    Requests matching no route share the ``unmatched`` label.

    Args:
        app: Downstream ASGI application.
        excluded_paths: Path prefixes that are not recorded.
    """

    def __init__(self, app: ASGIApp, excluded_paths: Iterable[str] = (METRICS_PATH,)) -> None:
        super().__init__(app)
        self._excluded = tuple(excluded_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(self._excluded):
            return await call_next(request)

        method = request.method
        path = _route_template(request)
        status = "500"

        with HTTP_REQUESTS_IN_PROGRESS.labels(method=method).track_inprogress():
            with HTTP_REQUEST_DURATION.labels(method=method, path=path).time():
                try:
                    response = await call_next(request)
                    status = str(response.status_code)
                finally:
                    HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=status).inc()

        return response


def _route_template(request: Request) -> str:
    # A partial match is a known path hit with an unsupported method.
    partial = None
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", "unmatched")
        if match == Match.PARTIAL and partial is None:
            partial = getattr(route, "path", None)
    return partial or "unmatched"


def mount_metrics(app: FastAPI) -> None:
    """Mount the Prometheus exposition app at /metrics.

    Args:
        app: FastAPI application instance.
    """
    app.mount(METRICS_PATH, make_asgi_app())
