"""
Batch OCR API router.

Accepts a batch of base64 encoded files and returns per-file extraction
results. Individual file failures are reported inside the 200 response.
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse

from ....models import BatchRequest
from ....services.batch import process_batch

router = APIRouter(prefix="/ocr", tags=["ocr"])
logger = logging.getLogger("batch_ocr.api")


@router.post("/batch")
async def extract_batch(
    request: BatchRequest,
    x_request_id: Optional[str] = Header(None, alias="X-Request-ID"),
):
    """
    Extract text from every file in the request.

    Supported formats: PDF (embedded text layer), JPEG and PNG (OCR).

    Headers:
    - X-Request-ID: Optional correlation ID for request tracing
    """
    start_time = time.time()
    request_id = x_request_id or "no-id"

    logger.info("[%s] BATCH_REQUEST: files=%d", request_id, len(request.files))

    response = await process_batch(request.files)

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.info(
        "[%s] BATCH_RESPONSE: status=%d, results=%d, elapsed=%dms",
        request_id,
        response.status_code,
        len(response.results),
        elapsed_ms,
    )

    return JSONResponse(
        status_code=response.status_code,
        content=response.body(),
        headers={"X-Request-ID": request_id},
    )
