import io
import logging
from typing import List

from PIL import Image

from .errors import DocumentExtractionError

logger = logging.getLogger("batch_ocr.documents")

# Form feeds pdfminer emits after every page, plus the newlines around them.
_PAGE_BREAK_CHARS = "\r\n\x0c"


def _require_pdfminer():
    try:
        from pdfminer.high_level import extract_text  # type: ignore
    except ModuleNotFoundError as e:
        raise DocumentExtractionError("pdfminer.six is required for PDF text extraction but is not installed") from e
    return extract_text


def _require_pdfium():
    try:
        import pypdfium2 as pdfium  # type: ignore
    except ModuleNotFoundError as e:
        raise DocumentExtractionError("pypdfium2 is required for PDF OCR but is not installed") from e
    return pdfium


def extract_pdf_text(data: bytes) -> str:
    """
    Return the embedded text layer of a PDF held in memory.

    Page-break form feeds and surrounding newlines are trimmed; spaces and
    tabs belonging to the text layer are kept. A PDF without a text layer
    (scanned pages) yields "" rather than an error.
    """
    pdf_extract_text = _require_pdfminer()
    try:
        text = pdf_extract_text(io.BytesIO(data)) or ""
    except Exception as e:
        # pdfminer raises a wide range of parser errors on damaged input.
        raise DocumentExtractionError(f"Could not read PDF text: {e}") from e
    out = text.strip(_PAGE_BREAK_CHARS)
    logger.info("extract_pdf_text: chars=%s", len(out))
    return out


def render_pdf_pages(data: bytes, scale: float = 2.0) -> List[Image.Image]:
    """Render every page of an in-memory PDF to a PIL image."""
    pdfium = _require_pdfium()
    try:
        pdf = pdfium.PdfDocument(data)
    except pdfium.PdfiumError as e:
        raise DocumentExtractionError(f"Could not open PDF for rendering: {e}") from e
    try:
        pages = [pdf[i].render(scale=scale).to_pil() for i in range(len(pdf))]
    finally:
        pdf.close()
    logger.info("render_pdf_pages: pages=%s scale=%s", len(pages), scale)
    return pages
