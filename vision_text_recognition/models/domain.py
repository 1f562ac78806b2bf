"""
Domain models - recognition entities

Attributes are snake_case, the wire form is camelCase.
"""
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vision_text_recognition.core.enums import QualityTier


class DomainModel(BaseModel):
    """Immutable model serialized with camelCase keys"""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class RecognitionConfig(DomainModel):
    """Backend-agnostic recognition settings"""
    quality_tier: QualityTier = Field(QualityTier.ACCURATE, description="Speed/accuracy trade-off")
    use_language_correction: bool = Field(True, description="Let the backend apply language correction")
    preferred_languages: Optional[Tuple[str, ...]] = Field(
        None,
        description="Language codes in order of preference"
    )
    minimum_text_height: Optional[float] = Field(
        None,
        ge=0.0,
        le=1.0,
        description="Smallest text to report, as a fraction of image height"
    )
    auto_detect_language: bool = Field(True, description="Let the backend detect the language")
    backend_revision: Optional[int] = Field(None, ge=0, description="Backend model revision")
    max_candidates: Optional[int] = Field(None, ge=1, description="Recognition candidates to consider")


class BoundingBox(DomainModel):
    """Box in fractions of image size, top-left origin, y pointing down"""
    x: float = Field(..., description="Left edge")
    y: float = Field(..., description="Top edge")
    width: float = Field(..., description="Width")
    height: float = Field(..., description="Height")


class TextBlock(DomainModel):
    """One recognized text element"""
    text: str = Field(..., description="Recognized text")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Recognition confidence")
    bounding_box: BoundingBox = Field(..., description="Normalized position")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Per-block extras")


class RecognitionResult(DomainModel):
    """Canonical recognition response"""
    full_text: str = Field(..., description="Block texts joined in emission order")
    text_blocks: List[TextBlock] = Field(default_factory=list, description="Recognized blocks")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Mean block confidence")
    processing_time_ms: int = Field(..., ge=0, description="Processing time in milliseconds")
    detected_language: Optional[str] = Field(None, description="First language detected")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="totalBlocks, platform and backend extras")


class PlatformInfo(DomainModel):
    """Static description of a recognition backend"""
    platform: str = Field(..., description="Host platform")
    platform_version: str = Field(..., description="Host platform version")
    engine: str = Field(..., description="Recognition engine")
    engine_version: str = Field(..., description="Recognition engine version")
    capabilities: List[str] = Field(default_factory=list, description="Capability flags")
    supports_language_correction: bool = False
    supports_confidence_scores: bool = True
    supports_bounding_boxes: bool = True
    supports_language_detection: bool = False
    supported_recognition_levels: List[QualityTier] = Field(
        default_factory=list,
        description="Quality tiers honoured by the engine"
    )
