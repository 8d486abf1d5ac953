"""
Batch Orchestrator.

Runs text extraction for every file of a batch concurrently and folds the
per-file outcomes into a single BatchResponse. A failure in one file never
affects another file's result or the batch as a whole.
"""

import asyncio
import logging
import time
from typing import Any, Optional, Sequence

from ..config import settings
from ..models import BatchResponse, FileInput, FileResult
from .engine import RecognitionEngineManager, engine_manager
from .errors import BatchProcessingError, ExtractionError
from .extraction_service import extract_text
from .sniffer import determine_mime_type

logger = logging.getLogger("batch_ocr.batch")

NO_FILES_MESSAGE = "No files have been passed to processing."
DONE_MESSAGE = "Text extraction completed"
FAILED_MESSAGE = "Error processing files"


async def process_file(entry: Any, manager: RecognitionEngineManager) -> FileResult:
    """
    Extract text from one file.

    `entry` is a FileInput or the raw mapping it is validated from. Never
    raises: every failure is returned as a FileResult with success=False.
    """
    filename = FileInput.label_for(entry) or settings.default_filename
    start_time = time.time()
    media_type: Optional[str] = None

    try:
        file_input = FileInput.from_entry(entry)
        data = await asyncio.to_thread(file_input.read_bytes, settings.max_file_size)
        media_type = determine_mime_type(data)
        text, method, media_type = await extract_text(data, filename, file_input.content_type, manager)
    except ExtractionError as e:
        logger.warning("FILE_ERROR: filename=%s, error=%s", filename, e)
        return FileResult.failed(filename, str(e), media_type)
    except Exception as e:
        logger.error("FILE_ERROR: filename=%s, unexpected error: %s", filename, e, exc_info=True)
        return FileResult.failed(filename, str(e) or e.__class__.__name__, media_type)

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.info(
        "FILE_OK: filename=%s, chars=%d, method=%s, elapsed=%dms",
        filename,
        len(text),
        method,
        elapsed_ms,
    )
    return FileResult.ok(filename, text, method, media_type)


async def _release(manager: RecognitionEngineManager) -> None:
    try:
        await manager.release()
    except Exception as e:
        logger.warning("Error releasing recognition engine: %s", e)


async def process_batch(
    files: Optional[Sequence[Any]],
    manager: Optional[RecognitionEngineManager] = None,
) -> BatchResponse:
    """
    Process a batch of files and return one result per file, in input order.

    Entries may be FileInput models or raw mappings; a malformed entry fails
    only its own result.

    Returns statusCode 200 when the batch ran (individual files may still have
    failed) or was empty, and 500 only when something outside the per-file
    boundary failed. The recognition engine is released once the batch ends.
    """
    if not files:
        return BatchResponse(status_code=200, message=NO_FILES_MESSAGE, results=[])

    manager = manager or engine_manager
    start_time = time.time()
    logger.info("BATCH_START: files=%d", len(files))

    try:
        results = await asyncio.gather(*(process_file(f, manager) for f in files))
        if len(results) != len(files):
            raise BatchProcessingError(f"Expected {len(files)} results, got {len(results)}")
    except Exception as e:
        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.error("BATCH_ERROR: error=%s, elapsed=%dms", e, elapsed_ms, exc_info=True)
        await _release(manager)
        return BatchResponse(status_code=500, message=FAILED_MESSAGE, results=[], error=str(e))

    # Teardown errors are logged only; computed results are kept.
    await _release(manager)

    elapsed_ms = int((time.time() - start_time) * 1000)
    failed = sum(1 for r in results if not r.success)
    logger.info(
        "BATCH_DONE: files=%d, failed=%d, elapsed=%dms",
        len(results),
        failed,
        elapsed_ms,
    )
    return BatchResponse(status_code=200, message=DONE_MESSAGE, results=list(results))
