import asyncio
import logging
from typing import Optional, Tuple

from ..config import settings
from .documents import extract_pdf_text, render_pdf_pages
from .engine import RecognitionEngineManager
from .errors import UnsupportedTypeError
from .preprocess import normalize_image
from .sniffer import FileKind, classify, mime_type_for

logger = logging.getLogger("batch_ocr.extraction")

__all__ = [
    "SUPPORTED_MEDIA_TYPES",
    "extract_text",
    "ocr_image",
    "extract_pdf",
]

SUPPORTED_MEDIA_TYPES = ("application/pdf", "image/jpeg", "image/png")


def _tuple(text: str, method: str, media_type: str) -> Tuple[str, str, str]:
    return (text or "", method, media_type)


async def ocr_image(data: bytes, manager: RecognitionEngineManager) -> str:
    image = await asyncio.to_thread(normalize_image, data)
    engine = await manager.acquire()
    return await engine.recognize(image)


async def extract_pdf(data: bytes, manager: RecognitionEngineManager) -> Tuple[str, str]:
    """Return (text, method) for a PDF, OCR-ing rendered pages only when enabled."""
    text = await asyncio.to_thread(extract_pdf_text, data)
    if text or not settings.ocr_pdf_fallback:
        return text, "pdf_text"

    pages = await asyncio.to_thread(render_pdf_pages, data, settings.pdf_render_scale)
    engine = await manager.acquire()
    texts = []
    for page in pages:
        page_text = (await engine.recognize(page)).strip()
        if page_text:
            texts.append(page_text)
    return "\n\n".join(texts), "pdf_ocr"


async def extract_text(
    data: bytes,
    filename: str,
    content_type: Optional[str],
    manager: RecognitionEngineManager,
) -> Tuple[str, str, str]:
    """
    Route one file to image recognition or PDF text extraction.

    The content type hint is consulted first, but the file signature decides
    whenever the hint does not name an image or a PDF.

    Always returns: (text, method, media_type)
    method in {"ocr", "pdf_text", "pdf_ocr"}
    """
    kind = classify(data)
    media_type = mime_type_for(kind)
    hint = (content_type or "").lower()

    if "image" in hint or kind.is_image:
        logger.info("Processing image file with OCR: %s", filename)
        text = await ocr_image(data, manager)
        return _tuple(text, "ocr", media_type)

    if "pdf" in hint or kind is FileKind.PDF:
        logger.info("Processing PDF file: %s", filename)
        text, method = await extract_pdf(data, manager)
        return _tuple(text, method, media_type)

    raise UnsupportedTypeError(content_type or media_type)
