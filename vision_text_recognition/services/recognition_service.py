"""
Recognition service - orchestrates one recognition request
"""
import asyncio
import time
from concurrent.futures import Executor
from typing import Iterable, List, Optional

from vision_text_recognition.core.exceptions import (
    BackendError,
    NoResultsError,
    OCRException
)
from vision_text_recognition.core.logging import get_logger
from vision_text_recognition.infrastructure.ocr_engines.base_engine import (
    BaseOCREngine,
    EngineOutput
)
from vision_text_recognition.models.domain import (
    PlatformInfo,
    RecognitionConfig,
    RecognitionResult
)
from vision_text_recognition.observability import (
    active_recognitions,
    get_tracer,
    record_duration,
    record_image_size
)
from vision_text_recognition.services.aggregator import Observation, aggregate
from vision_text_recognition.services.coordinates import normalize_box
from vision_text_recognition.services.language import LanguageClassifier, detect_language
from vision_text_recognition.utils.image_utils import DecodedImage, decode_image

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class TextRecognitionService:
    """
    Runs a single request end to end:
    decode → configure → recognize → normalize → aggregate
    """

    def __init__(
        self,
        engine: BaseOCREngine,
        max_image_size_mb: int = 10,
        allowed_formats: Optional[Iterable[str]] = None,
        executor: Optional[Executor] = None,
        timeout_seconds: Optional[float] = None,
        clamp_coordinates: bool = True,
        language_classifier: LanguageClassifier = detect_language
    ):
        """
        Initialize the recognition service

        Args:
            engine: Recognition backend
            max_image_size_mb: Maximum image size in MB
            allowed_formats: Accepted image formats, all known if None
            executor: Pool the engine runs on, the loop default if None
            timeout_seconds: Stop waiting for the engine after this long
            clamp_coordinates: Clamp boxes into [0, 1]
            language_classifier: Guesses a language for each fragment
        """
        self.engine = engine
        self.max_image_size_mb = max_image_size_mb
        self.allowed_formats = list(allowed_formats) if allowed_formats is not None else None
        self.executor = executor
        self.timeout_seconds = timeout_seconds
        self.clamp_coordinates = clamp_coordinates
        self.language_classifier = language_classifier

        logger.info(
            "Recognition service initialized",
            engine=engine.name,
            max_image_size_mb=max_image_size_mb,
            timeout_seconds=timeout_seconds
        )

    async def recognize(
        self,
        image_bytes: bytes,
        config: RecognitionConfig
    ) -> RecognitionResult:
        """
        Recognize text on encoded image bytes

        Args:
            image_bytes: Encoded image
            config: Normalized recognition config

        Returns:
            RecognitionResult

        Raises:
            ImageValidationError: Image is empty, too large or corrupt
            BackendError: The engine failed or timed out
            NoResultsError: The engine produced no result payload
        """
        start_time = time.time()
        decoded: Optional[DecodedImage] = None
        active_recognitions.inc()

        try:
            record_image_size(len(image_bytes))
            decoded = decode_image(
                image_bytes,
                max_size_mb=self.max_image_size_mb,
                allowed_formats=self.allowed_formats
            )

            with tracer.start_as_current_span("recognition_service.recognize") as span:
                span.set_attribute("image.width", decoded.width)
                span.set_attribute("image.height", decoded.height)
                span.set_attribute("ocr.engine", self.engine.name)
                span.set_attribute("ocr.quality_tier", config.quality_tier.value)

                output = await self._run_engine(decoded, config)

            if output is None:
                raise NoResultsError(
                    "No text recognition results",
                    details={"engine": self.engine.name}
                )

            observations = self._to_observations(output, decoded, config)
            processing_time_ms = int((time.time() - start_time) * 1000)

            extras = dict(output.extras)
            extras.update(imageWidth=decoded.width, imageHeight=decoded.height)
            result = aggregate(
                observations,
                processing_time_ms=processing_time_ms,
                platform=self.engine.name,
                extras=extras
            )

            record_duration(processing_time_ms / 1000)
            logger.info(
                "Recognition completed",
                blocks_count=len(result.text_blocks),
                confidence=round(result.confidence, 3),
                detected_language=result.detected_language,
                processing_time_ms=processing_time_ms
            )
            return result

        except Exception as e:
            logger.error(
                "Recognition failed",
                error=str(e),
                error_type=type(e).__name__,
                processing_time_ms=int((time.time() - start_time) * 1000)
            )
            raise

        finally:
            # the raster never outlives the request
            del decoded
            active_recognitions.dec()

    async def _run_engine(
        self,
        decoded: DecodedImage,
        config: RecognitionConfig
    ) -> Optional[EngineOutput]:
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            self.executor, self.engine.recognize, decoded.array, config
        )

        try:
            if self.timeout_seconds:
                return await asyncio.wait_for(future, timeout=self.timeout_seconds)
            return await future
        except asyncio.TimeoutError:
            raise BackendError(
                "Text recognition timed out",
                details={"timeout_seconds": self.timeout_seconds}
            ) from None
        except OCRException:
            raise
        except Exception as e:
            raise BackendError(
                f"Text recognition failed: {str(e)}",
                details={"error": str(e)}
            ) from e

    def _to_observations(
        self,
        output: EngineOutput,
        decoded: DecodedImage,
        config: RecognitionConfig
    ) -> List[Observation]:
        observations = []
        for raw in output.observations:
            text = raw.text.strip()
            if not text:
                continue

            box = normalize_box(
                raw.box,
                origin=output.origin,
                units=output.units,
                reference_dims=(decoded.width, decoded.height),
                clamp=self.clamp_coordinates
            )
            hint = self.language_classifier(text) if config.auto_detect_language else None
            observations.append(
                Observation(text=text, confidence=raw.confidence, box=box, language_hint=hint)
            )
        return observations

    def platform_info(self) -> PlatformInfo:
        return self.engine.platform_info()

    def supported_languages(self) -> List[str]:
        return self.engine.supported_languages()

    def is_ready(self) -> bool:
        """
        Check readiness

        Returns:
            True if the engine can serve requests
        """
        return self.engine.is_available()
