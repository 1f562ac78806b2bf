import io
import time
from typing import Optional

import numpy as np
from PIL import Image

from vision_text_recognition.core.enums import QualityTier
from vision_text_recognition.infrastructure.ocr_engines.base_engine import BaseOCREngine, EngineOutput
from vision_text_recognition.models.domain import PlatformInfo, RecognitionConfig

IMAGE_WIDTH = 200
IMAGE_HEIGHT = 100


class FakeEngine(BaseOCREngine):
    """Engine stub returning canned output."""

    name = "fake"

    def __init__(
        self,
        output: Optional[EngineOutput] = None,
        error: Optional[Exception] = None,
        available: bool = True,
        delay: float = 0.0,
    ) -> None:
        self.output = output
        self.error = error
        self.available = available
        self.delay = delay
        self.calls: list[tuple[tuple[int, ...], RecognitionConfig]] = []

    def initialize(self) -> None:
        pass

    def build_request_params(self, config: RecognitionConfig, image_height: int) -> dict:
        return {"quality_tier": config.quality_tier.value}

    def recognize(self, image: np.ndarray, config: RecognitionConfig) -> Optional[EngineOutput]:
        self.calls.append((image.shape, config))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.output

    def is_available(self) -> bool:
        return self.available

    def platform_info(self) -> PlatformInfo:
        return PlatformInfo(
            platform="test",
            platform_version="1.0",
            engine="Fake",
            engine_version="0.1",
            capabilities=["text_recognition", "bounding_boxes"],
            supported_recognition_levels=[QualityTier.FAST, QualityTier.ACCURATE],
        )

    def supported_languages(self) -> list[str]:
        return ["en", "ru"]


def make_png(width: int = IMAGE_WIDTH, height: int = IMAGE_HEIGHT) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), "white").save(buffer, format="PNG")
    return buffer.getvalue()
