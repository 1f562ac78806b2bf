"""
OCR handlers - REST endpoints on top of the dispatcher
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from vision_text_recognition.api.dependencies import get_dispatcher
from vision_text_recognition.core.enums import ErrorCode, Operation
from vision_text_recognition.core.logging import get_logger
from vision_text_recognition.models.requests import RecognizeRequest
from vision_text_recognition.models.responses import MethodResponse
from vision_text_recognition.services.dispatcher import MethodDispatcher

logger = get_logger(__name__)
router = APIRouter(prefix="/ocr", tags=["OCR"])

ERROR_STATUS = {
    ErrorCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_IMAGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NO_RESULTS: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.BACKEND_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.UNSUPPORTED_PLATFORM: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.PROCESSING_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(response: MethodResponse) -> Any:
    """
    Return the wire form of a successful result

    Raises:
        HTTPException: With the error envelope as detail
    """
    wire = response.to_wire()
    if response.is_success:
        return wire["result"]

    error = response.error
    raise HTTPException(
        status_code=ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=wire["error"]
    )


@router.post("/recognize", status_code=status.HTTP_200_OK)
async def recognize_text(
    request: RecognizeRequest,
    dispatcher: MethodDispatcher = Depends(get_dispatcher)
) -> Dict[str, Any]:
    """
    Recognize text on an image

    Accepts a base64 image and an optional configuration map, returns
    the recognition result.

    Raises:
        HTTPException 400: Invalid argument or image
        HTTPException 422: Engine produced no results
        HTTPException 502: Engine failure
        HTTPException 503: Engine unavailable
        HTTPException 500: Internal server error
    """
    logger.info("Received recognition request", has_config=request.config is not None)

    if request.config is None:
        response = await dispatcher.handle(
            Operation.RECOGNIZE_TEXT.value,
            {"imageBytes": request.image}
        )
    else:
        response = await dispatcher.handle(
            Operation.RECOGNIZE_TEXT_WITH_CONFIG.value,
            {"imageBytes": request.image, "config": request.config}
        )
    return unwrap(response)


@router.get("/platform")
async def get_platform_info(
    dispatcher: MethodDispatcher = Depends(get_dispatcher)
) -> Dict[str, Any]:
    """Describe the configured recognition engine"""
    return unwrap(await dispatcher.handle(Operation.GET_PLATFORM_INFO.value))


@router.get("/languages")
async def get_supported_languages(
    dispatcher: MethodDispatcher = Depends(get_dispatcher)
) -> List[str]:
    """Language codes the engine can read"""
    return unwrap(await dispatcher.handle(Operation.GET_SUPPORTED_LANGUAGES.value))


@router.get("/available")
async def is_available(
    dispatcher: MethodDispatcher = Depends(get_dispatcher)
) -> bool:
    """Whether the engine can serve requests"""
    return unwrap(await dispatcher.handle(Operation.IS_AVAILABLE.value))
