import json
import logging
import threading
import time
import uuid
from collections import defaultdict
from typing import DefaultDict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


logger = logging.getLogger("app.observability")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


class MetricsRegistry:
    """Request counters rendered in Prometheus text format."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.http_requests_total = 0
        self.http_request_errors_5xx_total = 0
        self.requests_by_route_method_status: DefaultDict[tuple[str, str, int], int] = defaultdict(int)
        self.duration_ms_by_route_method: DefaultDict[tuple[str, str], list[float]] = defaultdict(lambda: [0.0, 0])

    def observe(self, method: str, path: str, status_code: int, duration_ms: float, include_global: bool = True) -> None:
        with self._lock:
            if include_global:
                self.http_requests_total += 1
                if status_code >= 500:
                    self.http_request_errors_5xx_total += 1
            self.requests_by_route_method_status[(path, method, status_code)] += 1
            bucket = self.duration_ms_by_route_method[(path, method)]
            bucket[0] += duration_ms
            bucket[1] += 1

    def render_prometheus(self) -> str:
        lines: list[str] = []

        def header(name: str, help_text: str) -> None:
            lines.append(f"# HELP {name} {help_text}")
            lines.append(f"# TYPE {name} counter")

        with self._lock:
            header("http_requests_total", "Total number of HTTP requests processed.")
            lines.append(f"http_requests_total {self.http_requests_total}")
            header("http_request_errors_5xx_total", "Total number of HTTP 5xx responses.")
            lines.append(f"http_request_errors_5xx_total {self.http_request_errors_5xx_total}")

            header("http_requests_by_route_method_status", "HTTP requests split by route, method and status code.")
            for (path, method, status_code), count in sorted(self.requests_by_route_method_status.items()):
                lines.append(
                    f'http_requests_by_route_method_status{{path="{_escape_label(path)}",method="{method}",status="{status_code}"}} {count}'
                )

            durations = sorted(self.duration_ms_by_route_method.items())
            header("http_request_duration_ms_sum", "Sum of request durations per route/method in milliseconds.")
            for (path, method), (total, _) in durations:
                lines.append(f'http_request_duration_ms_sum{{path="{_escape_label(path)}",method="{method}"}} {total:.3f}')
            header("http_request_duration_ms_count", "Number of duration samples per route/method.")
            for (path, method), (_, count) in durations:
                lines.append(f'http_request_duration_ms_count{{path="{_escape_label(path)}",method="{method}"}} {count}')

        return "\n".join(lines) + "\n"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Tags every request with an X-Request-ID and logs one JSON line for it."""

    def __init__(self, app, registry: MetricsRegistry, exclude_paths: set[str] | None = None) -> None:
        super().__init__(app)
        self.registry = registry
        self.exclude_paths = exclude_paths or set()

    def _record(self, request: Request, status_code: int, started: float) -> dict:
        duration_ms = (time.perf_counter() - started) * 1000.0
        path = request.url.path
        self.registry.observe(
            method=request.method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
            include_global=(path not in self.exclude_paths),
        )
        return {
            "event": "http_request",
            "request_id": request.state.request_id,
            "method": request.method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 3),
            "client_ip": request.client.host if request.client else None,
        }

    async def dispatch(self, request: Request, call_next):
        request.state.request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(json.dumps(self._record(request, 500, started), ensure_ascii=False))
            raise

        response.headers["X-Request-ID"] = request.state.request_id
        logger.info(json.dumps(self._record(request, response.status_code, started), ensure_ascii=False))
        return response
