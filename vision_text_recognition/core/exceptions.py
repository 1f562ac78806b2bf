"""
Custom exceptions for the text recognition service

Every exception carries the error-envelope code it is reported with.
"""
from typing import Any, Dict, Optional

from vision_text_recognition.core.enums import ErrorCode


class OCRException(Exception):
    """Base exception for the text recognition service"""
    code: ErrorCode = ErrorCode.PROCESSING_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentError(OCRException):
    """Missing or wrong-typed request argument"""
    code = ErrorCode.INVALID_ARGUMENT


class ImageValidationError(OCRException):
    """Bytes do not represent a usable image"""
    code = ErrorCode.INVALID_IMAGE


class BackendError(OCRException):
    """The recognition backend failed"""
    code = ErrorCode.BACKEND_ERROR


class ConfigurationError(BackendError):
    """The recognition backend could not be initialized"""
    pass


class NoResultsError(OCRException):
    """The backend returned no result payload at all"""
    code = ErrorCode.NO_RESULTS


class UnsupportedPlatformError(OCRException):
    """The configured backend is unknown or not installed"""
    code = ErrorCode.UNSUPPORTED_PLATFORM


class OCRProcessingError(OCRException):
    """Unexpected failure while processing a request"""
    code = ErrorCode.PROCESSING_ERROR
