"""
Enums for type safety
"""
from enum import Enum


class OCREngine(str, Enum):
    """Recognition backends"""
    EASYOCR = "easyocr"
    PADDLEOCR = "paddleocr"


class QualityTier(str, Enum):
    """Speed/accuracy trade-off selector"""
    FAST = "fast"
    ACCURATE = "accurate"


class OriginConvention(str, Enum):
    """Where a backend puts the origin of its bounding boxes"""
    TOP_LEFT = "top_left"
    BOTTOM_LEFT = "bottom_left"  # y grows upwards


class CoordinateUnits(str, Enum):
    """Units of backend-native bounding boxes"""
    PIXELS = "pixels"
    NORMALIZED = "normalized"  # fractions of image width/height


class ImageFormat(str, Enum):
    """Image formats"""
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    BMP = "bmp"
    TIFF = "tiff"


class ErrorCode(str, Enum):
    """Codes carried by the error envelope"""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_IMAGE = "INVALID_IMAGE"
    BACKEND_ERROR = "BACKEND_ERROR"
    NO_RESULTS = "NO_RESULTS"
    UNSUPPORTED_PLATFORM = "UNSUPPORTED_PLATFORM"
    PROCESSING_ERROR = "PROCESSING_ERROR"


class Operation(str, Enum):
    """Operations understood by the dispatcher"""
    RECOGNIZE_TEXT = "recognizeText"
    RECOGNIZE_TEXT_WITH_CONFIG = "recognizeTextWithConfig"
    GET_PLATFORM_INFO = "getPlatformInfo"
    IS_AVAILABLE = "isAvailable"
    GET_SUPPORTED_LANGUAGES = "getSupportedLanguages"


class ResponseStatus(str, Enum):
    """Outcome of a dispatched call"""
    SUCCESS = "success"
    ERROR = "error"
    NOT_IMPLEMENTED = "not_implemented"
