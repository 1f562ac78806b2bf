"""
Health check handlers
"""
from fastapi import APIRouter, Depends, HTTPException

from vision_text_recognition.api.dependencies import get_dispatcher
from vision_text_recognition.config import get_settings
from vision_text_recognition.core.enums import Operation
from vision_text_recognition.models.responses import HealthResponse
from vision_text_recognition.observability import metrics_endpoint
from vision_text_recognition.services.dispatcher import MethodDispatcher

router = APIRouter(tags=["Health"])


async def _engine_available(dispatcher: MethodDispatcher) -> bool:
    response = await dispatcher.handle(Operation.IS_AVAILABLE.value)
    return response.is_success and bool(response.result)


@router.get("/health", response_model=HealthResponse)
async def health_check(
    dispatcher: MethodDispatcher = Depends(get_dispatcher)
) -> HealthResponse:
    """
    Basic health check
    The service is up; reports whether the engine is usable
    """
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION,
        ocr_engine=settings.OCR_ENGINE,
        ocr_engine_available=await _engine_available(dispatcher)
    )


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    dispatcher: MethodDispatcher = Depends(get_dispatcher)
) -> HealthResponse:
    """
    Readiness check for Kubernetes
    Ready once the engine can accept requests
    """
    settings = get_settings()
    is_ready = await _engine_available(dispatcher)

    return HealthResponse(
        status="ready" if is_ready else "not_ready",
        version=settings.APP_VERSION,
        ocr_engine=settings.OCR_ENGINE,
        ocr_engine_available=is_ready
    )


@router.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint"""
    if not get_settings().ENABLE_METRICS:
        raise HTTPException(status_code=404, detail="metrics disabled")
    return metrics_endpoint()
