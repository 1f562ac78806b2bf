"""
Image helpers: base64 decoding, validation and rasterization
"""
import base64
import binascii
import io
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from vision_text_recognition.core.exceptions import ImageValidationError
from vision_text_recognition.core.enums import ImageFormat


@dataclass
class DecodedImage:
    """Decoded RGB raster scoped to a single request"""
    array: np.ndarray
    width: int
    height: int
    format: ImageFormat


def decode_base64_image(base64_string: str) -> bytes:
    """
    Decode a base64 string into bytes

    Args:
        base64_string: Image as base64, a data URL prefix is allowed

    Returns:
        Decoded image bytes

    Raises:
        ImageValidationError: If decoding fails or yields nothing
    """
    # Drop the data:image prefix if present
    if "base64," in base64_string:
        base64_string = base64_string.split("base64,", 1)[1]

    try:
        image_bytes = base64.b64decode(base64_string, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageValidationError(
            f"Failed to decode base64 image: {str(e)}",
            details={"error": str(e)}
        )

    if not image_bytes:
        raise ImageValidationError("Decoded image is empty")

    return image_bytes


def validate_image_format(
    image_bytes: bytes,
    allowed_formats: Optional[Iterable[str]] = None
) -> ImageFormat:
    """
    Check the image format

    Args:
        image_bytes: Image bytes
        allowed_formats: Format names accepted, all known formats if None

    Returns:
        Image format

    Raises:
        ImageValidationError: If the format is not supported
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            format_lower = img.format.lower() if img.format else "unknown"
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, EOFError) as e:
        raise ImageValidationError(
            f"Could not decode image: {str(e)}",
            details={"error": str(e)}
        )

    allowed = set(allowed_formats) if allowed_formats is not None else {f.value for f in ImageFormat}

    try:
        image_format = ImageFormat(format_lower)
    except ValueError:
        image_format = None

    if image_format is None or image_format.value not in allowed:
        raise ImageValidationError(
            f"Unsupported image format: {format_lower}",
            details={
                "format": format_lower,
                "supported_formats": sorted(allowed)
            }
        )
    return image_format


def validate_image_size(image_bytes: bytes, max_size_mb: int = 10) -> None:
    """
    Check the image size

    Args:
        image_bytes: Image bytes
        max_size_mb: Maximum size in megabytes

    Raises:
        ImageValidationError: If the image is empty or too large
    """
    if not image_bytes:
        raise ImageValidationError("Image is empty")

    size_mb = len(image_bytes) / (1024 * 1024)

    if size_mb > max_size_mb:
        raise ImageValidationError(
            f"Image size {size_mb:.2f}MB exceeds maximum {max_size_mb}MB",
            details={
                "size_mb": round(size_mb, 2),
                "max_size_mb": max_size_mb
            }
        )


def bytes_to_numpy(image_bytes: bytes) -> np.ndarray:
    """
    Convert bytes into an RGB numpy array for OCR

    Args:
        image_bytes: Image bytes

    Returns:
        Numpy array of shape (height, width, 3)

    Raises:
        ImageValidationError: If the image cannot be decoded
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            return np.array(img)

    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        EOFError,
        SyntaxError,
        ValueError
    ) as e:
        raise ImageValidationError(
            f"Failed to convert image to numpy array: {str(e)}",
            details={"error": str(e)}
        )


def decode_image(
    image_bytes: bytes,
    max_size_mb: int = 10,
    allowed_formats: Optional[Iterable[str]] = None
) -> DecodedImage:
    """
    Validate and decode image bytes into a raster

    Raises:
        ImageValidationError: Empty, oversized, unsupported or corrupt image
    """
    validate_image_size(image_bytes, max_size_mb)
    image_format = validate_image_format(image_bytes, allowed_formats)
    array = bytes_to_numpy(image_bytes)
    height, width = array.shape[:2]

    if width == 0 or height == 0:
        raise ImageValidationError(
            "Image has no pixels",
            details={"width": width, "height": height}
        )

    return DecodedImage(array=array, width=width, height=height, format=image_format)
