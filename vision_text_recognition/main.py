"""
FastAPI application - entry point of the text recognition service
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from vision_text_recognition.config import get_settings
from vision_text_recognition.core.logging import setup_logging, get_logger
from vision_text_recognition.api.dependencies import shutdown_resources, warm_up_engine
from vision_text_recognition.api.v1.router import api_router
from vision_text_recognition.observability import configure_telemetry, instrument_app

# Logging is configured on import
settings = get_settings()
setup_logging(
    log_level=settings.LOG_LEVEL,
    is_debug=settings.DEBUG,
    service=settings.APP_NAME,
    version=settings.APP_VERSION
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle events for FastAPI
    Runs on application startup and shutdown
    """
    logger.info(
        "Starting text recognition service",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        engine=settings.OCR_ENGINE.value,
        debug=settings.DEBUG
    )
    configure_telemetry()
    warm_up_engine()

    logger.info("Service ready")

    yield

    logger.info("Shutting down text recognition service")
    shutdown_resources()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Uniform text recognition facade over EasyOCR and PaddleOCR",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

instrument_app(app)

app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root():
    """Redirect from root to the docs"""
    return RedirectResponse(url="/docs")


@app.get("/ping", include_in_schema=False)
async def ping():
    """Simple ping endpoint"""
    return {"status": "pong"}


if __name__ == "__main__":
    import uvicorn

    logger.info(
        "Starting server",
        host=settings.HOST,
        port=settings.PORT
    )

    uvicorn.run(
        "vision_text_recognition.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
