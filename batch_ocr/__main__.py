"""
Command line entry point.

Usage:
    python -m batch_ocr scan.png invoice.pdf
    python -m batch_ocr --content-type image/png photo.bin
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import settings
from .models import FileInput
from .services.batch import process_batch


def build_inputs(paths: List[str], content_type: Optional[str] = None) -> List[FileInput]:
    return [
        FileInput(file_path=p, filename=Path(p).name, content_type=content_type)
        for p in paths
    ]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="batch_ocr",
        description="Extract text from images (OCR) and PDFs (embedded text).",
    )
    parser.add_argument("files", nargs="+", help="Files to process")
    parser.add_argument("--content-type", default=None, help="Content type hint applied to every file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or settings.debug) else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    response = asyncio.run(process_batch(build_inputs(args.files, args.content_type)))
    print(json.dumps(response.body(), indent=2, ensure_ascii=False))
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
