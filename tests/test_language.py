import pytest

from vision_text_recognition.services.language import detect_language


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello world", "en"),
        ("Привет", "ru"),
        ("Straße", "de"),
        ("Müller", "de"),
        ("garçon", "fr"),
        ("mañana", "es"),
        ("こんにちは", "ja"),
        ("カタカナ", "ja"),
        ("中文", "zh"),
        ("한국어", "ko"),
        ("مرحبا", "ar"),
        ("नमस्ते", "hi"),
    ],
)
def test_detects_script(text: str, expected: str) -> None:
    assert detect_language(text) == expected


@pytest.mark.parametrize("text", ["", "12345", "!?", "   "])
def test_returns_none_without_letters(text: str) -> None:
    assert detect_language(text) is None


def test_cyrillic_takes_precedence_over_latin() -> None:
    assert detect_language("OOO Продукты") == "ru"
