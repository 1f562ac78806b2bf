"""
Method channel handler - one endpoint for every operation
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from vision_text_recognition.api.dependencies import get_dispatcher
from vision_text_recognition.core.logging import get_logger
from vision_text_recognition.models.requests import MethodCallRequest
from vision_text_recognition.services.dispatcher import MethodDispatcher

logger = get_logger(__name__)
router = APIRouter(prefix="/channel", tags=["Channel"])


@router.post("")
async def invoke_method(
    request: MethodCallRequest,
    dispatcher: MethodDispatcher = Depends(get_dispatcher)
) -> Dict[str, Any]:
    """
    Invoke an operation by name

    Always answers 200; the envelope's status field says whether the
    call succeeded, failed or is not implemented.
    """
    logger.info("Received method call", method=request.method)
    response = await dispatcher.handle(request.method, request.arguments)
    return response.to_wire()
