from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from vision_text_recognition.config import get_settings
from vision_text_recognition.core.logging import get_logger

logger = get_logger(__name__)


def configure_telemetry() -> None:
    """configure opentelemetry tracing with the otlp exporter"""
    settings = get_settings()
    if not settings.ENABLE_TELEMETRY:
        logger.info("telemetry disabled")
        return

    resource = Resource.create(
        {
            "service.name": settings.APP_NAME,
            "service.version": settings.APP_VERSION,
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_exporter = OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True)
    trace_provider.add_span_processor(BatchSpanProcessor(trace_exporter))
    trace.set_tracer_provider(trace_provider)

    logger.info("telemetry configured", otlp_endpoint=settings.OTLP_ENDPOINT)


def instrument_app(app) -> None:
    """instrument fastapi app with opentelemetry"""
    if not get_settings().ENABLE_TELEMETRY:
        return

    FastAPIInstrumentor.instrument_app(app)
    logger.info("fastapi instrumented with opentelemetry")


def get_tracer(name: str):
    """get tracer instance, a no-op tracer until telemetry is configured"""
    return trace.get_tracer(name)
