"""
Pydantic models for API responses
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from vision_text_recognition.core.enums import ErrorCode, OCREngine, ResponseStatus
from vision_text_recognition.core.exceptions import OCRException


class ErrorEnvelope(BaseModel):
    """Structured error returned instead of raising"""
    code: ErrorCode = Field(..., description="Error code")
    message: str = Field(..., description="Human readable message")
    details: Optional[Dict[str, Any]] = Field(None, description="Extra context")

    @classmethod
    def from_exception(cls, exc: OCRException) -> "ErrorEnvelope":
        return cls(code=exc.code, message=exc.message, details=exc.details or None)


class MethodResponse(BaseModel):
    """Outcome of one dispatched operation"""
    status: ResponseStatus = Field(..., description="success, error or not_implemented")
    result: Any = Field(None, description="Operation result on success")
    error: Optional[ErrorEnvelope] = Field(None, description="Error envelope on failure")

    @classmethod
    def success(cls, result: Any) -> "MethodResponse":
        return cls(status=ResponseStatus.SUCCESS, result=result)

    @classmethod
    def failure(cls, error: ErrorEnvelope) -> "MethodResponse":
        return cls(status=ResponseStatus.ERROR, error=error)

    @classmethod
    def not_implemented(cls) -> "MethodResponse":
        return cls(status=ResponseStatus.NOT_IMPLEMENTED)

    @property
    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase domain fields"""
        return self.model_dump(mode="json", by_alias=True)


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    ocr_engine: OCREngine = Field(..., description="Configured recognition engine")
    ocr_engine_available: bool = Field(..., description="Whether the engine is ready")
