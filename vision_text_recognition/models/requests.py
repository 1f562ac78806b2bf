"""
Pydantic models for incoming requests
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MethodCallRequest(BaseModel):
    """A named operation plus its arguments"""
    method: str = Field(..., description="Operation name, e.g. recognizeText")
    arguments: Optional[Dict[str, Any]] = Field(
        default_factory=dict,
        description="Operation arguments; imageBytes is base64 encoded"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "method": "recognizeTextWithConfig",
                "arguments": {
                    "imageBytes": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg==",
                    "config": {
                        "qualityTier": "fast",
                        "preferredLanguages": ["en"]
                    }
                }
            }
        }
    )


class RecognizeRequest(BaseModel):
    """Request to recognize text on an image"""
    image: str = Field(..., description="Image encoded as base64")
    config: Optional[Dict[str, Any]] = Field(
        None,
        description="Recognition configuration, defaults apply when absent"
    )

    @field_validator('image')
    @classmethod
    def validate_image_not_empty(cls, v: str) -> str:
        """Check that the image is not blank"""
        if not v or not v.strip():
            raise ValueError("Image cannot be empty")
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "image": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg==",
                "config": {
                    "qualityTier": "accurate",
                    "minimumTextHeight": 0.02
                }
            }
        }
    )
