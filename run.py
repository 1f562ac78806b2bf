"""
Script that starts the text recognition service
"""
import uvicorn

from vision_text_recognition.config import get_settings
from vision_text_recognition.core.logging import setup_logging


if __name__ == "__main__":
    settings = get_settings()

    setup_logging(
        log_level=settings.LOG_LEVEL,
        is_debug=settings.DEBUG,
        service=settings.APP_NAME,
        version=settings.APP_VERSION
    )

    print(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"🔧 Engine: {settings.OCR_ENGINE.value}")
    print(f"📡 Server: http://{settings.HOST}:{settings.PORT}")
    print(f"📚 Docs: http://{settings.HOST}:{settings.PORT}/docs")
    print(f"🐞 Debug mode: {settings.DEBUG}")
    print()

    uvicorn.run(
        "vision_text_recognition.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
