import base64

import pytest

from tests.fakes import FakeEngine, make_png
from vision_text_recognition.core.enums import CoordinateUnits, OriginConvention
from vision_text_recognition.infrastructure.ocr_engines.base_engine import EngineOutput, RawObservation
from vision_text_recognition.services.dispatcher import MethodDispatcher
from vision_text_recognition.services.recognition_service import TextRecognitionService


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def png_base64(png_bytes: bytes) -> str:
    return base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def pixel_output() -> EngineOutput:
    return EngineOutput(
        observations=[
            RawObservation(text="Hello", confidence=0.9, box=(20, 10, 60, 20)),
            RawObservation(text="   ", confidence=0.1, box=(0, 0, 5, 5)),
            RawObservation(text="мир", confidence=0.7, box=(100, 50, 40, 30)),
        ],
        origin=OriginConvention.TOP_LEFT,
        units=CoordinateUnits.PIXELS,
        extras={"engine": "fake"},
    )


@pytest.fixture
def fake_engine(pixel_output: EngineOutput) -> FakeEngine:
    return FakeEngine(output=pixel_output)


@pytest.fixture
def service(fake_engine: FakeEngine) -> TextRecognitionService:
    return TextRecognitionService(engine=fake_engine)


@pytest.fixture
def dispatcher(service: TextRecognitionService) -> MethodDispatcher:
    return MethodDispatcher(service_factory=lambda: service)
