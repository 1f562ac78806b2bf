"""
Application configuration via Pydantic Settings
"""
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vision_text_recognition.core.enums import OCREngine


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Application Settings
    APP_NAME: str = "vision-text-recognition"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=8000, ge=1, le=65535)
    WORKERS: int = Field(default=2, ge=1, description="recognition thread pool size")

    # CORS Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Backend selection
    OCR_ENGINE: OCREngine = OCREngine.EASYOCR
    OCR_MAX_CACHED_MODELS: int = Field(
        default=3, ge=1, description="extra language models each engine keeps loaded"
    )

    # EasyOCR Settings
    EASYOCR_LANGUAGES: str = "en"
    EASYOCR_USE_GPU: bool = False

    # PaddleOCR Settings
    PADDLEOCR_LANG: str = "en"
    PADDLEOCR_DEVICE: str = "cpu"

    # Image Settings
    MAX_IMAGE_SIZE_MB: int = 10
    ALLOWED_IMAGE_FORMATS: str = "jpg,jpeg,png,webp,bmp,tiff"

    # Processing
    PROCESSING_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None, gt=0, description="give up waiting for the backend after this long"
    )
    CLAMP_COORDINATES: bool = True

    # Observability
    ENABLE_METRICS: bool = True
    ENABLE_TELEMETRY: bool = False
    OTLP_ENDPOINT: str = "http://localhost:4317"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def easyocr_languages_list(self) -> List[str]:
        """Parse EasyOCR languages from a comma separated string"""
        return [lang.strip() for lang in self.EASYOCR_LANGUAGES.split(",") if lang.strip()]

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from a comma separated string"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def allowed_image_formats_list(self) -> List[str]:
        """Parse allowed image formats from a comma separated string"""
        return [fmt.strip().lower() for fmt in self.ALLOWED_IMAGE_FORMATS.split(",")]


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
