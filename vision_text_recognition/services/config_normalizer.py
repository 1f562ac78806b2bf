"""
Mapping of loosely typed configuration maps onto RecognitionConfig

Callers send whatever their client library produces, so every field is
read on its own and falls back to its default when missing or mistyped.
A bad field never fails the whole request.
"""
from collections.abc import Mapping
from typing import Any, Callable, Optional, Tuple

from vision_text_recognition.core.enums import QualityTier
from vision_text_recognition.core.logging import get_logger
from vision_text_recognition.models.domain import RecognitionConfig

logger = get_logger(__name__)

_MISSING = object()

# Field -> accepted keys, canonical first. The remaining keys are the ones
# older mobile clients send.
FIELD_KEYS = {
    "quality_tier": ("qualityTier", "quality_tier", "recognitionLevel"),
    "use_language_correction": (
        "useLanguageCorrection", "use_language_correction", "usesLanguageCorrection"
    ),
    "preferred_languages": ("preferredLanguages", "preferred_languages"),
    "minimum_text_height": ("minimumTextHeight", "minimum_text_height"),
    "auto_detect_language": (
        "autoDetectLanguage", "auto_detect_language", "automaticallyDetectsLanguage"
    ),
    "backend_revision": ("backendRevision", "backend_revision", "revision"),
    "max_candidates": ("maxCandidates", "max_candidates"),
}


def _lookup(raw: Mapping, field: str) -> Any:
    for key in FIELD_KEYS[field]:
        if key in raw:
            return raw[key]
    return _MISSING


def _as_quality_tier(value: Any) -> Optional[QualityTier]:
    if isinstance(value, QualityTier):
        return value
    if not isinstance(value, str):
        return None
    try:
        return QualityTier(value.strip().lower())
    except ValueError:
        return None


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _as_languages(value: Any) -> Optional[Tuple[str, ...]]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(lang, str) for lang in value):
        return None
    languages = tuple(lang.strip() for lang in value if lang.strip())
    return languages or None


def _as_fraction(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not 0.0 <= value <= 1.0:
        return None
    return value


def _as_int(minimum: int) -> Callable[[Any], Optional[int]]:
    def convert(value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, int) or value < minimum:
            return None
        return value
    return convert


CONVERTERS = {
    "quality_tier": _as_quality_tier,
    "use_language_correction": _as_bool,
    "preferred_languages": _as_languages,
    "minimum_text_height": _as_fraction,
    "auto_detect_language": _as_bool,
    "backend_revision": _as_int(0),
    "max_candidates": _as_int(1),
}


def normalize_config(raw: Optional[Mapping[str, Any]] = None) -> RecognitionConfig:
    """
    Build a RecognitionConfig from a generic configuration map

    Args:
        raw: Configuration map; None or a non-mapping means defaults

    Returns:
        Immutable RecognitionConfig, never raises for bad input
    """
    if raw is None or not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug("Ignoring non-mapping config", config_type=type(raw).__name__)
        return RecognitionConfig()

    values = {}
    for field, convert in CONVERTERS.items():
        value = _lookup(raw, field)
        if value is _MISSING or value is None:
            continue

        converted = convert(value)
        if converted is None:
            logger.debug(
                "Config field falls back to default",
                field=field,
                value=repr(value)
            )
            continue
        values[field] = converted

    return RecognitionConfig(**values)
