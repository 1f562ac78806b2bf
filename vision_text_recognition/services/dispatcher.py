"""
Dispatch of named operations onto the recognition service

Every call is stateless. Failures never escape as exceptions: they are
turned into an error envelope here.
"""
import asyncio
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Dict, List

from vision_text_recognition.core.enums import ErrorCode, Operation, ResponseStatus
from vision_text_recognition.core.exceptions import (
    InvalidArgumentError,
    OCRException,
    OCRProcessingError
)
from vision_text_recognition.core.logging import get_logger, operation_context
from vision_text_recognition.models.domain import PlatformInfo, RecognitionResult
from vision_text_recognition.models.responses import ErrorEnvelope, MethodResponse
from vision_text_recognition.observability import record_error, record_request
from vision_text_recognition.services.config_normalizer import normalize_config
from vision_text_recognition.services.recognition_service import TextRecognitionService
from vision_text_recognition.utils.image_utils import decode_base64_image

logger = get_logger(__name__)

Handler = Callable[[Mapping], Awaitable[Any]]

# metrics label for names outside the operation table
UNKNOWN_OPERATION = "unknown"


def extract_image_bytes(args: Mapping) -> bytes:
    """
    Read the imageBytes argument

    Raw bytes are used as is, strings are treated as base64.

    Raises:
        InvalidArgumentError: Argument missing or of the wrong type
        ImageValidationError: String is not valid base64
    """
    value = args.get("imageBytes")
    if value is None:
        raise InvalidArgumentError("Image bytes not provided")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return decode_base64_image(value)
    raise InvalidArgumentError(
        "Image bytes must be bytes or a base64 string",
        details={"type": type(value).__name__}
    )


class MethodDispatcher:
    """
    Routes an operation name plus arguments to its handler

    Args:
        service_factory: Returns the recognition service; may raise
            UnsupportedPlatformError when the engine cannot be loaded
    """

    def __init__(self, service_factory: Callable[[], TextRecognitionService]):
        self._service_factory = service_factory
        self._handlers: Dict[str, Handler] = {
            Operation.RECOGNIZE_TEXT.value: self._recognize_text,
            Operation.RECOGNIZE_TEXT_WITH_CONFIG.value: self._recognize_text_with_config,
            Operation.GET_PLATFORM_INFO.value: self._get_platform_info,
            Operation.IS_AVAILABLE.value: self._is_available,
            Operation.GET_SUPPORTED_LANGUAGES.value: self._get_supported_languages,
        }

    @property
    def operations(self) -> List[str]:
        return list(self._handlers)

    async def handle(self, operation: str, args: Any = None) -> MethodResponse:
        """
        Run one operation

        Args:
            operation: Operation name
            args: Operation arguments; anything but a mapping counts as none

        Returns:
            MethodResponse with a result, an error envelope or not_implemented
        """
        handler = self._handlers.get(operation)
        if handler is None:
            logger.warning("Operation not implemented", operation=operation)
            record_request(UNKNOWN_OPERATION, ResponseStatus.NOT_IMPLEMENTED.value)
            return MethodResponse.not_implemented()

        if not isinstance(args, Mapping):
            args = {}

        try:
            with operation_context(operation):
                result = await handler(args)

        except OCRException as e:
            logger.warning(
                "Operation failed",
                operation=operation,
                code=e.code.value,
                error=e.message
            )
            record_request(operation, ResponseStatus.ERROR.value)
            record_error(e.code.value)
            return MethodResponse.failure(ErrorEnvelope.from_exception(e))

        except Exception as e:
            logger.error("Unexpected error", operation=operation, error=str(e), exc_info=True)
            record_request(operation, ResponseStatus.ERROR.value)
            record_error(ErrorCode.PROCESSING_ERROR.value)
            return MethodResponse.failure(
                ErrorEnvelope.from_exception(
                    OCRProcessingError(
                        "An unexpected error occurred",
                        details={"error_type": type(e).__name__}
                    )
                )
            )

        record_request(operation, ResponseStatus.SUCCESS.value)
        return MethodResponse.success(result)

    async def _service(self) -> TextRecognitionService:
        # the first call may load models, keep that off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._service_factory)

    async def _recognize_text(self, args: Mapping) -> RecognitionResult:
        image_bytes = extract_image_bytes(args)
        service = await self._service()
        return await service.recognize(image_bytes, normalize_config(None))

    async def _recognize_text_with_config(self, args: Mapping) -> RecognitionResult:
        image_bytes = extract_image_bytes(args)
        raw_config = args.get("config")
        if not isinstance(raw_config, Mapping):
            raise InvalidArgumentError(
                "Config not provided",
                details={"type": type(raw_config).__name__}
            )
        service = await self._service()
        return await service.recognize(image_bytes, normalize_config(raw_config))

    async def _get_platform_info(self, args: Mapping) -> PlatformInfo:
        return (await self._service()).platform_info()

    async def _is_available(self, args: Mapping) -> bool:
        try:
            return (await self._service()).is_ready()
        except OCRException as e:
            logger.info("Engine unavailable", code=e.code.value, error=e.message)
            return False

    async def _get_supported_languages(self, args: Mapping) -> List[str]:
        return (await self._service()).supported_languages()
