"""
Batch OCR Service Configuration.

Environment-driven settings for the batch OCR / text-extraction service.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # =========================================================================
    # API SETTINGS
    # =========================================================================
    api_title: str = "Batch OCR Service"
    api_version: str = "1.0.0"
    debug: bool = Field(default=False, description="Enable verbose logging")

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed origins for CORS",
    )
    cors_credentials: bool = True
    cors_methods: List[str] = ["*"]
    cors_headers: List[str] = ["*"]

    # =========================================================================
    # INPUT LIMITS
    # =========================================================================
    max_file_size: int = Field(
        default=52428800,  # 50MB
        description="Largest decoded file accepted per batch entry (bytes)",
    )
    default_filename: str = Field(
        default="document",
        description="Label used for results when the caller gives no filename",
    )

    # =========================================================================
    # OCR
    # =========================================================================
    tesseract_cmd: Optional[str] = Field(
        default=None,
        description="Path to the tesseract binary when it is not on PATH",
    )
    ocr_pdf_fallback: bool = Field(
        default=False,
        description="OCR rendered pages when a PDF has no embedded text layer",
    )
    pdf_render_scale: float = Field(
        default=2.0,
        description="Render scale for PDF pages sent to OCR",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
