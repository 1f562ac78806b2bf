from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest

# counters
operation_requests_total = Counter(
    "vtr_operation_requests_total",
    "total number of dispatched operations",
    ["operation", "status"],
)

operation_errors_total = Counter(
    "vtr_operation_errors_total",
    "total number of failed operations",
    ["error_code"],
)

# histograms
recognition_duration_seconds = Histogram(
    "vtr_recognition_duration_seconds",
    "recognition processing duration in seconds",
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

image_size_bytes = Histogram(
    "vtr_image_size_bytes",
    "processed image size in bytes",
    buckets=[1024, 10240, 102400, 1048576, 5242880, 10485760],
)

# gauges
active_recognitions = Gauge(
    "vtr_active_recognitions", "number of currently active recognition requests"
)


def metrics_endpoint() -> Response:
    """prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_request(operation: str, status: str) -> None:
    """record dispatched operation"""
    operation_requests_total.labels(operation=operation, status=status).inc()


def record_error(error_code: str) -> None:
    """record operation error"""
    operation_errors_total.labels(error_code=error_code).inc()


def record_duration(duration: float) -> None:
    """record recognition duration"""
    recognition_duration_seconds.observe(duration)


def record_image_size(size: int) -> None:
    """record image size"""
    image_size_bytes.observe(size)
