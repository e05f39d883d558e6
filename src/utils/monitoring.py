"""In-memory request monitoring for the admin endpoint."""

import threading
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime

from utils.logging import get_logger

logger = get_logger(__name__)

# Endpoint label for requests that matched no route (404s)
UNMATCHED_ENDPOINT = "unmatched"


@dataclass
class RequestRecord:
    """A single handled request."""

    endpoint: str
    method: str
    status_code: int
    duration_ms: float
    success: bool
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class ErrorRecord:
    """A failed request with its error detail."""

    endpoint: str
    method: str
    error: str
    ip: str = "unknown"
    user_agent: str = "unknown"
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class RequestMonitor:
    """Tracks request counts, durations, and recent errors per endpoint."""

    def __init__(self, max_recent: int = 100):
        self.max_recent = max_recent
        self._lock = threading.Lock()
        self._started_at = datetime.now().isoformat()
        self._requests: deque[RequestRecord] = deque(maxlen=max_recent)
        self._errors: deque[ErrorRecord] = deque(maxlen=max_recent)
        self._totals: dict[str, dict[str, float]] = {}

    def record_request(
        self,
        endpoint: str,
        method: str,
        status_code: int,
        duration_ms: float,
    ) -> RequestRecord:
        """Record a handled request and log its performance."""
        success = status_code < 400
        record = RequestRecord(
            endpoint=endpoint,
            method=method,
            status_code=status_code,
            duration_ms=round(duration_ms, 1),
            success=success,
        )

        with self._lock:
            self._requests.append(record)
            totals = self._totals.setdefault(
                endpoint, {"count": 0, "failures": 0, "total_duration_ms": 0.0}
            )
            totals["count"] += 1
            totals["total_duration_ms"] += duration_ms
            if not success:
                totals["failures"] += 1

        logger.info(
            "request_completed",
            endpoint=endpoint,
            method=method,
            status_code=status_code,
            duration_ms=record.duration_ms,
            success=success,
        )
        return record

    def record_error(
        self,
        endpoint: str,
        method: str,
        error: str,
        ip: str = "unknown",
        user_agent: str = "unknown",
    ) -> None:
        """Record an error raised while handling a request."""
        with self._lock:
            self._errors.append(
                ErrorRecord(
                    endpoint=endpoint,
                    method=method,
                    error=error,
                    ip=ip,
                    user_agent=user_agent,
                )
            )
        logger.error("request_failed", endpoint=endpoint, method=method, error=error)

    def get_metrics(self) -> dict:
        """Return aggregated metrics suitable for JSON serialization."""
        with self._lock:
            endpoints = {}
            total_requests = 0
            total_failures = 0
            for endpoint, totals in self._totals.items():
                count = int(totals["count"])
                failures = int(totals["failures"])
                total_requests += count
                total_failures += failures
                endpoints[endpoint] = {
                    "requests": count,
                    "failures": failures,
                    "average_duration_ms": round(totals["total_duration_ms"] / count, 1)
                    if count
                    else 0.0,
                }

            return {
                "started_at": self._started_at,
                "total_requests": total_requests,
                "total_failures": total_failures,
                "error_rate": round(total_failures / total_requests, 4)
                if total_requests
                else 0.0,
                "endpoints": endpoints,
                "recent_requests": [asdict(r) for r in self._requests],
                "recent_errors": [asdict(e) for e in self._errors],
            }

    def clear(self) -> None:
        """Drop all recorded requests and errors."""
        with self._lock:
            self._requests.clear()
            self._errors.clear()
            self._totals.clear()
        logger.info("monitoring_cleared")
