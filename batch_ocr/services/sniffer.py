"""
Content sniffing by file signature.

Callers' content types are advisory; these helpers look at the leading bytes
of a buffer to decide what it really is.
"""

from enum import Enum
from typing import Optional

PDF_SIGNATURE = b"%PDF"
JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class FileKind(str, Enum):
    PDF = "pdf"
    JPEG = "jpeg"
    PNG = "png"
    UNKNOWN = "unknown"

    @property
    def is_image(self) -> bool:
        return self in (FileKind.JPEG, FileKind.PNG)


MIME_TYPES = {
    FileKind.PDF: "application/pdf",
    FileKind.JPEG: "image/jpeg",
    FileKind.PNG: "image/png",
    FileKind.UNKNOWN: "application/octet-stream",
}


def classify(data: Optional[bytes]) -> FileKind:
    """Classify a buffer from its signature. Never raises on short input."""
    if not data:
        return FileKind.UNKNOWN
    head = bytes(data[:8])
    if head.startswith(PDF_SIGNATURE):
        return FileKind.PDF
    if head.startswith(JPEG_SIGNATURE):
        return FileKind.JPEG
    if head.startswith(PNG_SIGNATURE):
        return FileKind.PNG
    return FileKind.UNKNOWN


def is_image(data: Optional[bytes]) -> bool:
    return classify(data).is_image


def mime_type_for(kind: FileKind) -> str:
    return MIME_TYPES[kind]


def determine_mime_type(data: Optional[bytes]) -> str:
    return mime_type_for(classify(data))
