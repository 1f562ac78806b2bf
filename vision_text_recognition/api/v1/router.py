"""
Main API v1 router
Combines all handlers
"""
from fastapi import APIRouter

from vision_text_recognition.api.v1.handlers import channel_handler, health_handler, ocr_handler

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(channel_handler.router)
api_router.include_router(ocr_handler.router)
api_router.include_router(health_handler.router)
