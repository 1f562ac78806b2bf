"""observability layer: metrics and tracing"""

from .metrics import (
    active_recognitions,
    metrics_endpoint,
    record_duration,
    record_error,
    record_image_size,
    record_request,
)
from .telemetry import configure_telemetry, get_tracer, instrument_app

__all__ = [
    "active_recognitions",
    "metrics_endpoint",
    "record_duration",
    "record_error",
    "record_image_size",
    "record_request",
    "configure_telemetry",
    "get_tracer",
    "instrument_app",
]
