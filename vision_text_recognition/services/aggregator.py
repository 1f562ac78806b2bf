"""
Aggregation of normalized observations into a RecognitionResult
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from vision_text_recognition.models.domain import (
    BoundingBox,
    RecognitionResult,
    TextBlock
)


@dataclass(frozen=True)
class Observation:
    """One recognized fragment with a normalized box"""
    text: str
    confidence: float
    box: BoundingBox
    language_hint: Optional[str] = None


def _unit(value: float) -> float:
    value = float(value)
    # NaN scores count as no confidence
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def aggregate(
    observations: Sequence[Observation],
    processing_time_ms: int,
    platform: str,
    extras: Optional[Dict[str, Any]] = None
) -> RecognitionResult:
    """
    Merge observations into the canonical result

    Args:
        observations: Fragments in backend emission order
        processing_time_ms: Time spent on the request
        platform: Label of the backend that produced the fragments
        extras: Backend specific metadata

    Returns:
        RecognitionResult with full text, mean confidence and metadata
    """
    text_blocks: List[TextBlock] = []
    languages: List[str] = []
    confidence_sum = 0.0

    for observation in observations:
        confidence = _unit(observation.confidence)
        block_metadata: Dict[str, Any] = {}

        if observation.language_hint:
            block_metadata["detectedLanguage"] = observation.language_hint
            if observation.language_hint not in languages:
                languages.append(observation.language_hint)

        text_blocks.append(
            TextBlock(
                text=observation.text,
                confidence=confidence,
                bounding_box=observation.box,
                metadata=block_metadata
            )
        )
        confidence_sum += confidence

    average_confidence = confidence_sum / len(text_blocks) if text_blocks else 0.0

    metadata: Dict[str, Any] = dict(extras or {})
    metadata.update(
        totalBlocks=len(text_blocks),
        platform=platform,
        detectedLanguages=languages
    )

    return RecognitionResult(
        full_text=" ".join(block.text for block in text_blocks).strip(),
        text_blocks=text_blocks,
        confidence=_unit(average_confidence),
        processing_time_ms=max(int(processing_time_ms), 0),
        detected_language=languages[0] if languages else None,
        metadata=metadata
    )
