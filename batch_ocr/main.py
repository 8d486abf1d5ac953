"""
Batch OCR Service - FastAPI Application.

Classifies uploaded images and PDFs by content and extracts their text with
Tesseract (images) or the embedded text layer (PDFs).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .services.engine import engine_manager
from .api.v1.routers import ocr as ocr_router
from .api.v1.routers import system as system_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("batch_ocr.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - make sure the OCR engine is shut down."""
    logger.info("Starting Batch OCR Service")
    yield
    logger.info("Shutting down Batch OCR Service")
    await engine_manager.release()


app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    debug=settings.debug,
    openapi_url="/api/v1/openapi.json",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_credentials,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)

app.include_router(system_router.router, prefix="/api/v1")
app.include_router(ocr_router.router, prefix="/api/v1")
