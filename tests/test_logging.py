import structlog

from vision_text_recognition.core.logging import (
    add_severity_level,
    operation_context,
    service_context,
)


def test_severity_level_is_added() -> None:
    assert add_severity_level(None, "info", {})["severity"] == "INFO"
    assert add_severity_level(None, "warn", {})["severity"] == "WARNING"


def test_service_context_keeps_explicit_values() -> None:
    processor = service_context("vtr", "1.2.3")

    assert processor(None, "info", {}) == {"service": "vtr", "version": "1.2.3"}
    assert processor(None, "info", {"service": "other"})["service"] == "other"


def test_service_context_without_version() -> None:
    assert service_context("vtr")(None, "info", {}) == {"service": "vtr"}


def test_operation_context_binds_and_unbinds() -> None:
    with operation_context("recognizeText"):
        assert structlog.contextvars.get_contextvars()["operation"] == "recognizeText"

    assert "operation" not in structlog.contextvars.get_contextvars()
