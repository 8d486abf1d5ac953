"""
Event handler entry point.

Adapts an invocation event of the form {"files": [...]} to the batch
orchestrator and returns {"statusCode", "headers", "body"} with a JSON body.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from .models import JSON_HEADERS
from .services.batch import FAILED_MESSAGE, process_batch
from .services.engine import RecognitionEngineManager

logger = logging.getLogger("batch_ocr.handler")


def _response(status_code: int, headers: Dict[str, str], body: Dict[str, Any]) -> Dict[str, Any]:
    return {"statusCode": status_code, "headers": headers, "body": json.dumps(body)}


async def handler(
    event: Optional[Dict[str, Any]],
    manager: Optional[RecognitionEngineManager] = None,
) -> Dict[str, Any]:
    raw_files = (event or {}).get("files") or []
    if not isinstance(raw_files, list):
        logger.warning("Invalid event payload: files is %s, not a list", type(raw_files).__name__)
        return _response(
            500,
            dict(JSON_HEADERS),
            {"message": FAILED_MESSAGE, "results": [], "error": "files must be a list"},
        )

    # Entries are validated per file inside the batch.
    response = await process_batch(raw_files, manager)
    return _response(response.status_code, response.headers, response.body())


def lambda_handler(event: Optional[Dict[str, Any]], context: Any = None) -> Dict[str, Any]:
    """Synchronous wrapper for runtimes that call a plain function."""
    return asyncio.run(handler(event))
