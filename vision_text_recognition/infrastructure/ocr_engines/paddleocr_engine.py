"""
Wrapper for PaddleOCR
"""
import threading
from typing import Any, Dict, List, Optional

import numpy as np
import paddleocr
from paddleocr import PaddleOCR

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

# ISO 639-1 -> PaddleOCR pipeline language
LANGUAGE_CODES = {
    "en": "en",
    "zh": "ch",
    "ja": "japan",
    "ko": "korean",
    "ru": "ru",
    "uk": "uk",
    "de": "german",
    "fr": "fr",
    "es": "es",
    "it": "it",
    "pt": "pt",
    "ar": "ar",
    "hi": "hi",
}

DETECTION_SIDE_LEN = {
    QualityTier.FAST: 736,
    QualityTier.ACCURATE: 960,
}

DEFAULT_MAX_CACHED_PIPELINES = 3


def to_engine_language(code: str) -> Optional[str]:
    """Map a language code such as 'de-DE' to a PaddleOCR language"""
    lowered = code.strip().lower()
    if lowered in LANGUAGE_CODES.values():
        return lowered
    return LANGUAGE_CODES.get(lowered.split("-")[0].split("_")[0])


def _as_list(value: Any) -> List[Any]:
    # numpy arrays split into per-item rows, polygon_to_box handles those
    return [] if value is None else list(value)


class PaddleOCREngine(BaseOCREngine):
    """
    PaddleOCR wrapper

    One pipeline is kept per language, up to the cache size; predict
    calls are serialized.
    """

    name = "paddleocr"

    def __init__(
        self,
        lang: str = 'en',
        device: str = 'cpu',
        max_cached_pipelines: int = DEFAULT_MAX_CACHED_PIPELINES
    ):
        """
        Configure the PaddleOCR engine

        Args:
            lang: Default pipeline language ('en', 'ch', 'ru' etc.)
            device: Inference device ('cpu', 'gpu')
            max_cached_pipelines: Extra language pipelines kept in memory
        """
        self.lang = lang
        self.device = device
        self.ocr: Optional[Any] = None
        self._pipelines = ModelCache(max_cached_pipelines)
        self._lock = threading.Lock()

        logger.info(
            "PaddleOCR engine configured",
            lang=lang,
            device=device
        )

    def _create_pipeline(self, lang: str) -> Any:
        try:
            return PaddleOCR(
                lang=lang,
                device=self.device,
                use_doc_orientation_classify=False,
                use_doc_unwarping=False,
                use_textline_orientation=True
            )
        except Exception as e:
            logger.error("Failed to initialize PaddleOCR", lang=lang, error=str(e))
            raise ConfigurationError(
                f"Failed to initialize PaddleOCR: {str(e)}",
                details={"error": str(e), "lang": lang}
            )

    def initialize(self) -> None:
        """Build the default pipeline"""
        logger.info("Initializing PaddleOCR...")
        self.ocr = self._create_pipeline(self.lang)
        logger.info("PaddleOCR initialized successfully")

    def _pipeline_for(self, lang: str) -> Any:
        if lang == self.lang:
            return self.ocr
        return self._pipelines.get_or_create(lang, lambda: self._create_pipeline(lang))

    def build_request_params(
        self,
        config: RecognitionConfig,
        image_height: int
    ) -> Dict[str, Any]:
        lang = self.lang
        for code in config.preferred_languages or ():
            engine_lang = to_engine_language(code)
            if engine_lang:
                lang = engine_lang
                break

        return {
            "lang": lang,
            "use_textline_orientation": config.quality_tier == QualityTier.ACCURATE,
            "text_det_limit_side_len": DETECTION_SIDE_LEN[config.quality_tier],
            "text_rec_score_thresh": 0.0,
        }

    def recognize(
        self,
        image: np.ndarray,
        config: RecognitionConfig
    ) -> Optional[EngineOutput]:
        """
        Detect text through PaddleOCR

        Raises:
            BackendError: If the engine is not ready or PaddleOCR fails
        """
        if self.ocr is None:
            raise BackendError(
                "PaddleOCR not initialized. Call initialize() first."
            )

        params = self.build_request_params(config, image_height=image.shape[0])
        lang = params.pop("lang")

        pipeline = self._pipeline_for(lang)

        with self._lock:
            try:
                logger.debug("Starting PaddleOCR text extraction", lang=lang, **params)
                pages = pipeline.predict(image, **params)
            except Exception as e:
                logger.error("PaddleOCR extraction failed", error=str(e))
                raise BackendError(
                    f"Failed to extract text with PaddleOCR: {str(e)}",
                    details={"error": str(e)}
                )

        if pages is None:
            return None

        observations = []
        for page in pages:
            texts = _as_list(page.get("rec_texts"))
            scores = _as_list(page.get("rec_scores"))
            polys = _as_list(page.get("rec_polys"))
            if len(polys) != len(texts):
                polys = _as_list(page.get("rec_boxes"))

            for index, text in enumerate(texts):
                box = polygon_to_box(polys[index]) if index < len(polys) else None
                if box is None or not str(text).strip():
                    continue
                score = float(scores[index]) if index < len(scores) else 0.0
                observations.append(RawObservation(text=str(text), confidence=score, box=box))

        logger.info("PaddleOCR extraction completed", blocks_count=len(observations))

        return EngineOutput(
            observations=observations,
            origin=OriginConvention.TOP_LEFT,
            units=CoordinateUnits.PIXELS,
            extras={"engine": self.name, "lang": lang}
        )

    def is_available(self) -> bool:
        """
        Check PaddleOCR readiness

        Returns:
            True if the default pipeline has been built
        """
        return self.ocr is not None

    def platform_info(self) -> PlatformInfo:
        system, release = self.host_platform()
        return PlatformInfo(
            platform=system,
            platform_version=release,
            engine="PaddleOCR",
            engine_version=getattr(paddleocr, "__version__", "unknown"),
            capabilities=["text_recognition", "confidence_scores", "bounding_boxes"],
            supports_language_correction=False,
            supports_confidence_scores=True,
            supports_bounding_boxes=True,
            supports_language_detection=False,
            supported_recognition_levels=[QualityTier.FAST, QualityTier.ACCURATE]
        )

    def supported_languages(self) -> List[str]:
        return list(LANGUAGE_CODES)

    def cleanup(self) -> None:
        """Release pipelines"""
        if self.ocr is not None:
            logger.info("Cleaning up PaddleOCR resources")
            self.ocr = None
        self._pipelines.clear()
