import numpy as np
import pytest

pytest.importorskip("easyocr")

from vision_text_recognition.core.enums import CoordinateUnits, OriginConvention, QualityTier
from vision_text_recognition.core.exceptions import BackendError
from vision_text_recognition.infrastructure.ocr_engines.easyocr_engine import (
    EasyOCREngine,
    to_engine_language,
)
from vision_text_recognition.models.domain import RecognitionConfig


class StubReader:
    """Stands in for easyocr.Reader without loading models."""

    def __init__(self, results: list) -> None:
        self.results = results
        self.calls: list[dict] = []

    def readtext(self, image: np.ndarray, **kwargs: object) -> list:
        self.calls.append(kwargs)
        return self.results


@pytest.fixture
def engine() -> EasyOCREngine:
    return EasyOCREngine(languages=["en"])


def test_accurate_tier_uses_beam_search(engine: EasyOCREngine) -> None:
    params = engine.build_request_params(RecognitionConfig(), image_height=100)

    assert params == {"languages": ("en",), "min_size": 20, "decoder": "beamsearch", "beamWidth": 5}


def test_fast_tier_and_minimum_text_height(engine: EasyOCREngine) -> None:
    config = RecognitionConfig(quality_tier=QualityTier.FAST, minimum_text_height=0.1)

    params = engine.build_request_params(config, image_height=300)

    assert params["decoder"] == "greedy"
    assert "beamWidth" not in params
    assert params["min_size"] == 30


def test_max_candidates_sets_beam_width(engine: EasyOCREngine) -> None:
    params = engine.build_request_params(RecognitionConfig(max_candidates=3), image_height=100)

    assert params["beamWidth"] == 3


def test_preferred_languages_are_mapped(engine: EasyOCREngine) -> None:
    config = RecognitionConfig(preferred_languages=("zh", "en-US", "xx", "en"))

    params = engine.build_request_params(config, image_height=100)

    assert params["languages"] == ("ch_sim", "en")


def test_unsupported_preferred_languages_keep_default(engine: EasyOCREngine) -> None:
    params = engine.build_request_params(RecognitionConfig(preferred_languages=("xx",)), 100)

    assert params["languages"] == ("en",)


@pytest.mark.parametrize(
    ("code", "expected"),
    [("en", "en"), ("EN-gb", "en"), ("zh-Hant", "ch_tra"), ("ja", "ja"), ("klingon", None)],
)
def test_to_engine_language(code: str, expected: str | None) -> None:
    assert to_engine_language(code) == expected


def test_recognize_converts_readtext_output(engine: EasyOCREngine) -> None:
    engine.reader = StubReader(
        [
            ([[10, 20], [50, 20], [50, 40], [10, 40]], "Total", 0.93),
            ([[0, 0], [5, 0], [5, 5], [0, 5]], "  ", 0.2),
        ]
    )

    output = engine.recognize(np.zeros((100, 200, 3), dtype=np.uint8), RecognitionConfig())

    assert output.origin == OriginConvention.TOP_LEFT
    assert output.units == CoordinateUnits.PIXELS
    assert len(output.observations) == 1
    observation = output.observations[0]
    assert observation.text == "Total"
    assert observation.confidence == pytest.approx(0.93)
    assert observation.box == (10.0, 20.0, 40.0, 20.0)
    assert engine.reader.calls[0]["decoder"] == "beamsearch"
    assert engine.reader.calls[0]["detail"] == 1


def test_recognize_requires_initialization(engine: EasyOCREngine) -> None:
    with pytest.raises(BackendError):
        engine.recognize(np.zeros((10, 10, 3), dtype=np.uint8), RecognitionConfig())


def test_reader_failures_become_backend_errors(engine: EasyOCREngine) -> None:
    class FailingReader:
        def readtext(self, image: np.ndarray, **kwargs: object) -> list:
            raise RuntimeError("CUDA out of memory")

    engine.reader = FailingReader()

    with pytest.raises(BackendError):
        engine.recognize(np.zeros((10, 10, 3), dtype=np.uint8), RecognitionConfig())


def test_platform_info(engine: EasyOCREngine) -> None:
    info = engine.platform_info()

    assert info.engine == "EasyOCR"
    assert info.supported_recognition_levels == [QualityTier.FAST, QualityTier.ACCURATE]
    assert engine.is_available() is False
    assert "en" in engine.supported_languages()


def test_extra_readers_are_shared_across_language_order(
    engine: EasyOCREngine, monkeypatch: pytest.MonkeyPatch
) -> None:
    built: list[tuple] = []

    def create_reader(languages: tuple) -> StubReader:
        built.append(languages)
        return StubReader([])

    monkeypatch.setattr(engine, "_create_reader", create_reader)
    engine.reader = StubReader([])
    image = np.zeros((10, 10, 3), dtype=np.uint8)

    engine.recognize(image, RecognitionConfig(preferred_languages=("fr", "de")))
    engine.recognize(image, RecognitionConfig(preferred_languages=("de", "fr")))

    assert built == [("de", "fr")]


def test_extra_readers_are_bounded(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = EasyOCREngine(languages=["en"], max_cached_readers=2)
    monkeypatch.setattr(engine, "_create_reader", lambda languages: StubReader([]))
    engine.reader = StubReader([])
    image = np.zeros((10, 10, 3), dtype=np.uint8)

    for languages in [("fr",), ("de",), ("es",), ("it",)]:
        engine.recognize(image, RecognitionConfig(preferred_languages=languages))

    assert len(engine._readers) == 2
