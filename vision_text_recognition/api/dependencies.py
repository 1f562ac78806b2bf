"""
FastAPI dependencies for dependency injection
"""
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Optional

from vision_text_recognition.config import get_settings
from vision_text_recognition.core.enums import OCREngine
from vision_text_recognition.core.exceptions import OCRException, UnsupportedPlatformError
from vision_text_recognition.core.logging import get_logger
from vision_text_recognition.infrastructure.ocr_engines.base_engine import BaseOCREngine
from vision_text_recognition.services.dispatcher import MethodDispatcher
from vision_text_recognition.services.recognition_service import TextRecognitionService

logger = get_logger(__name__)


def _create_engine(engine_name: OCREngine) -> BaseOCREngine:
    settings = get_settings()

    # engine modules import their OCR library, so only load the one in use
    if engine_name == OCREngine.EASYOCR:
        from vision_text_recognition.infrastructure.ocr_engines.easyocr_engine import EasyOCREngine

        return EasyOCREngine(
            languages=settings.easyocr_languages_list,
            gpu=settings.EASYOCR_USE_GPU,
            max_cached_readers=settings.OCR_MAX_CACHED_MODELS
        )

    if engine_name == OCREngine.PADDLEOCR:
        from vision_text_recognition.infrastructure.ocr_engines.paddleocr_engine import PaddleOCREngine

        return PaddleOCREngine(
            lang=settings.PADDLEOCR_LANG,
            device=settings.PADDLEOCR_DEVICE,
            max_cached_pipelines=settings.OCR_MAX_CACHED_MODELS
        )

    raise UnsupportedPlatformError(
        f"Unknown OCR engine: {engine_name}",
        details={"supported_engines": [e.value for e in OCREngine]}
    )


_engine: Optional[BaseOCREngine] = None
_engine_lock = threading.Lock()


def get_ocr_engine() -> BaseOCREngine:
    """
    Get the configured OCR engine (singleton)
    Initialized once and reused; safe to call from worker threads

    Raises:
        UnsupportedPlatformError: Engine unknown or its library is missing
        ConfigurationError: Engine failed to initialize
    """
    global _engine

    with _engine_lock:
        if _engine is not None:
            return _engine

        engine_name = OCREngine(get_settings().OCR_ENGINE)

        try:
            engine = _create_engine(engine_name)
        except ImportError as e:
            logger.error("OCR engine library missing", engine=engine_name.value, error=str(e))
            raise UnsupportedPlatformError(
                f"OCR engine '{engine_name.value}' is not installed",
                details={"engine": engine_name.value, "error": str(e)}
            )

        engine.initialize()
        _engine = engine
        return _engine


def warm_up_engine() -> bool:
    """
    Load the engine ahead of the first request

    Returns:
        True if the engine is ready; failures are logged and retried lazily
    """
    try:
        get_ocr_engine()
    except OCRException as e:
        logger.warning("OCR engine not loaded at startup", code=e.code.value, error=e.message)
        return False
    return True


@lru_cache()
def get_executor() -> ThreadPoolExecutor:
    """Thread pool the engine runs on (singleton)"""
    workers = get_settings().WORKERS
    logger.info("Creating recognition thread pool", workers=workers)
    return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ocr")


def get_recognition_service(engine: BaseOCREngine = None) -> TextRecognitionService:
    """
    Get a recognition service instance

    Args:
        engine: OCR engine (the configured singleton if None)
    """
    settings = get_settings()

    if engine is None:
        engine = get_ocr_engine()

    return TextRecognitionService(
        engine=engine,
        max_image_size_mb=settings.MAX_IMAGE_SIZE_MB,
        allowed_formats=settings.allowed_image_formats_list,
        executor=get_executor(),
        timeout_seconds=settings.PROCESSING_TIMEOUT_SECONDS,
        clamp_coordinates=settings.CLAMP_COORDINATES
    )


def get_dispatcher() -> MethodDispatcher:
    """Get the operation dispatcher"""
    return MethodDispatcher(service_factory=get_recognition_service)


def shutdown_resources() -> None:
    """Release the engine and the thread pool if they were created"""
    global _engine

    with _engine_lock:
        if _engine is not None:
            _engine.cleanup()
            _engine = None

    if get_executor.cache_info().currsize:
        logger.info("Shutting down recognition thread pool")
        get_executor().shutdown(wait=True)
        get_executor.cache_clear()
