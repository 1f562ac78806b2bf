"""
Wrapper for EasyOCR
"""
import threading
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import easyocr

from vision_text_recognition.infrastructure.ocr_engines.base_engine import (
    BaseOCREngine,
    EngineOutput,
    ModelCache,
    RawObservation
)
from vision_text_recognition.core.enums import CoordinateUnits, OriginConvention, QualityTier
from vision_text_recognition.core.exceptions import BackendError, ConfigurationError
from vision_text_recognition.core.logging import get_logger
from vision_text_recognition.models.domain import PlatformInfo, RecognitionConfig
from vision_text_recognition.services.coordinates import polygon_to_box

logger = get_logger(__name__)

# EasyOCR language codes that differ from ISO 639-1
LANGUAGE_ALIASES = {
    "zh": "ch_sim",
    "zh-hans": "ch_sim",
    "zh-hant": "ch_tra",
}

SUPPORTED_LANGUAGES = [
    "en", "es", "fr", "de", "it", "pt", "nl", "pl", "cs", "sk", "hu", "ro",
    "hr", "sl", "ru", "uk", "tr", "vi", "ja", "ko", "ch_sim", "ch_tra", "ar", "hi"
]

DEFAULT_MIN_SIZE = 20
DEFAULT_BEAM_WIDTH = 5
DEFAULT_MAX_CACHED_READERS = 3


def to_engine_language(code: str) -> Optional[str]:
    """Map a language code such as 'en-US' or 'zh' to an EasyOCR code"""
    lowered = code.strip().lower()
    if lowered in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[lowered]
    if lowered in SUPPORTED_LANGUAGES:
        return lowered
    base = lowered.split("-")[0].split("_")[0]
    if base in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[base]
    return base if base in SUPPORTED_LANGUAGES else None


class EasyOCREngine(BaseOCREngine):
    """
    EasyOCR wrapper

    One reader is built per language set and the least recently used
    extra readers are dropped past the cache size. Calls into a reader
    are serialized because EasyOCR readers are not thread-safe.
    """

    name = "easyocr"

    def __init__(
            self,
            languages: List[str] = None,
            gpu: bool = False,
            max_cached_readers: int = DEFAULT_MAX_CACHED_READERS
    ):
        """
        Configure the EasyOCR engine

        Args:
            languages: Default recognition languages
            gpu: Use the GPU if available
            max_cached_readers: Extra language-set readers kept in memory
        """
        self.languages = tuple(languages or ['en'])
        self.gpu = gpu
        self.reader: Optional[Any] = None
        self._readers = ModelCache(max_cached_readers)
        self._lock = threading.Lock()

        logger.info(
            "EasyOCR engine configured",
            languages=list(self.languages),
            gpu=self.gpu
        )

    def _create_reader(self, languages: Tuple[str, ...]) -> Any:
        try:
            return easyocr.Reader(
                lang_list=list(languages),
                gpu=self.gpu,
                verbose=False
            )
        except Exception as e:
            logger.error("Failed to create EasyOCR reader", languages=list(languages), error=str(e))
            raise ConfigurationError(
                f"Failed to initialize EasyOCR: {str(e)}",
                details={"error": str(e), "languages": list(languages)}
            )

    def initialize(self) -> None:
        """Build the default reader"""
        logger.info("Initializing EasyOCR...")
        self.reader = self._create_reader(self.languages)
        logger.info("EasyOCR initialized successfully")

    def _reader_for(self, languages: Tuple[str, ...]) -> Any:
        # reader choice does not depend on language order
        key = tuple(sorted(languages))
        if key == tuple(sorted(self.languages)):
            return self.reader
        return self._readers.get_or_create(key, lambda: self._build_reader(key))

    def _build_reader(self, languages: Tuple[str, ...]) -> Any:
        logger.info("Creating EasyOCR reader", languages=list(languages))
        return self._create_reader(languages)

    def build_request_params(
        self,
        config: RecognitionConfig,
        image_height: int
    ) -> Dict[str, Any]:
        languages = self.languages
        if config.preferred_languages:
            mapped = []
            for code in config.preferred_languages:
                engine_code = to_engine_language(code)
                if engine_code and engine_code not in mapped:
                    mapped.append(engine_code)
            if mapped:
                languages = tuple(mapped)

        params: Dict[str, Any] = {
            "languages": languages,
            "min_size": DEFAULT_MIN_SIZE,
        }

        if config.quality_tier == QualityTier.FAST:
            params["decoder"] = "greedy"
        else:
            params["decoder"] = "beamsearch"
            params["beamWidth"] = config.max_candidates or DEFAULT_BEAM_WIDTH

        if config.minimum_text_height is not None:
            params["min_size"] = max(1, int(round(config.minimum_text_height * image_height)))

        return params

    def recognize(
        self,
        image: np.ndarray,
        config: RecognitionConfig
    ) -> Optional[EngineOutput]:
        """
        Detect text through EasyOCR

        Raises:
            BackendError: If the engine is not ready or EasyOCR fails
        """
        if self.reader is None:
            raise BackendError(
                "EasyOCR not initialized. Call initialize() first."
            )

        params = self.build_request_params(config, image_height=image.shape[0])
        languages = params.pop("languages")

        reader = self._reader_for(languages)

        with self._lock:
            try:
                # readtext returns: [([bbox], text, confidence), ...]
                logger.debug("Starting EasyOCR text extraction", **params)
                results = reader.readtext(image, detail=1, **params)
            except Exception as e:
                logger.error("EasyOCR extraction failed", error=str(e))
                raise BackendError(
                    f"Failed to extract text with EasyOCR: {str(e)}",
                    details={"error": str(e)}
                )

        if results is None:
            return None

        observations = []
        for bbox, text, confidence in results:
            box = polygon_to_box(bbox)
            if box is None or not str(text).strip():
                continue
            observations.append(
                RawObservation(text=str(text), confidence=float(confidence), box=box)
            )

        logger.info("EasyOCR extraction completed", blocks_count=len(observations))

        return EngineOutput(
            observations=observations,
            origin=OriginConvention.TOP_LEFT,
            units=CoordinateUnits.PIXELS,
            extras={"engine": self.name, "languages": list(languages), "decoder": params["decoder"]}
        )

    def is_available(self) -> bool:
        """
        Check EasyOCR readiness

        Returns:
            True if the default reader has been built
        """
        return self.reader is not None

    def platform_info(self) -> PlatformInfo:
        system, release = self.host_platform()
        return PlatformInfo(
            platform=system,
            platform_version=release,
            engine="EasyOCR",
            engine_version=getattr(easyocr, "__version__", "unknown"),
            capabilities=["text_recognition", "confidence_scores", "bounding_boxes"],
            supports_language_correction=False,
            supports_confidence_scores=True,
            supports_bounding_boxes=True,
            supports_language_detection=False,
            supported_recognition_levels=[QualityTier.FAST, QualityTier.ACCURATE]
        )

    def supported_languages(self) -> List[str]:
        return list(SUPPORTED_LANGUAGES)

    def cleanup(self) -> None:
        """Release readers"""
        if self.reader is not None:
            logger.info("Cleaning up EasyOCR resources")
            self.reader = None
        self._readers.clear()
