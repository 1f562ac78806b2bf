import pytest
from pydantic import ValidationError

from vision_text_recognition.core.enums import QualityTier
from vision_text_recognition.models.domain import RecognitionConfig
from vision_text_recognition.services.config_normalizer import normalize_config


def test_missing_config_uses_defaults() -> None:
    config = normalize_config(None)

    assert config == RecognitionConfig()
    assert config.quality_tier == QualityTier.ACCURATE
    assert config.use_language_correction is True
    assert config.auto_detect_language is True
    assert config.preferred_languages is None
    assert config.minimum_text_height is None
    assert config.backend_revision is None
    assert config.max_candidates is None


def test_reads_canonical_keys() -> None:
    config = normalize_config(
        {
            "qualityTier": "fast",
            "useLanguageCorrection": False,
            "preferredLanguages": ["en-US", "de"],
            "minimumTextHeight": 0.05,
            "autoDetectLanguage": False,
            "backendRevision": 3,
            "maxCandidates": 4,
        }
    )

    assert config.quality_tier == QualityTier.FAST
    assert config.use_language_correction is False
    assert config.preferred_languages == ("en-US", "de")
    assert config.minimum_text_height == pytest.approx(0.05)
    assert config.auto_detect_language is False
    assert config.backend_revision == 3
    assert config.max_candidates == 4


def test_reads_mobile_plugin_keys() -> None:
    config = normalize_config(
        {
            "recognitionLevel": "fast",
            "usesLanguageCorrection": False,
            "automaticallyDetectsLanguage": False,
            "revision": 2,
        }
    )

    assert config.quality_tier == QualityTier.FAST
    assert config.use_language_correction is False
    assert config.auto_detect_language is False
    assert config.backend_revision == 2


def test_canonical_key_wins_over_legacy_key() -> None:
    config = normalize_config({"qualityTier": "accurate", "recognitionLevel": "fast"})

    assert config.quality_tier == QualityTier.ACCURATE


def test_unknown_keys_are_ignored() -> None:
    assert normalize_config({"somethingNew": 1, "qualityTier": "fast"}).quality_tier == QualityTier.FAST


@pytest.mark.parametrize("value", ["balanced", "", 3, None, ["fast"]])
def test_unrecognized_quality_tier_falls_back_to_accurate(value: object) -> None:
    assert normalize_config({"qualityTier": value}).quality_tier == QualityTier.ACCURATE


def test_quality_tier_is_case_insensitive() -> None:
    assert normalize_config({"qualityTier": " FAST "}).quality_tier == QualityTier.FAST


@pytest.mark.parametrize(
    "raw",
    [
        {"useLanguageCorrection": "no"},
        {"useLanguageCorrection": 0},
        {"preferredLanguages": "en"},
        {"preferredLanguages": ["en", 7]},
        {"minimumTextHeight": "0.1"},
        {"minimumTextHeight": True},
        {"minimumTextHeight": 1.5},
        {"minimumTextHeight": -0.1},
        {"autoDetectLanguage": "yes"},
        {"backendRevision": "2"},
        {"backendRevision": -1},
        {"backendRevision": True},
        {"maxCandidates": 0},
        {"maxCandidates": 2.5},
    ],
)
def test_mistyped_fields_fall_back_to_defaults(raw: dict) -> None:
    assert normalize_config(raw) == RecognitionConfig()


def test_mistyped_field_does_not_affect_other_fields() -> None:
    config = normalize_config({"qualityTier": "fast", "minimumTextHeight": "tiny"})

    assert config.quality_tier == QualityTier.FAST
    assert config.minimum_text_height is None


def test_empty_language_list_is_unset() -> None:
    assert normalize_config({"preferredLanguages": []}).preferred_languages is None
    assert normalize_config({"preferredLanguages": ["  "]}).preferred_languages is None


def test_integral_float_is_accepted_for_integer_fields() -> None:
    assert normalize_config({"maxCandidates": 3.0}).max_candidates == 3


def test_non_mapping_config_uses_defaults() -> None:
    assert normalize_config(["qualityTier", "fast"]) == RecognitionConfig()
    assert normalize_config("fast") == RecognitionConfig()


def test_config_is_immutable() -> None:
    config = normalize_config({"qualityTier": "fast"})

    with pytest.raises(ValidationError):
        config.quality_tier = QualityTier.ACCURATE
