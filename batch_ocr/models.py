"""
Batch OCR Pydantic Models.

Request and response models for the batch extraction API. Field names on the
wire are camelCase; Python code uses the snake_case attributes.
"""

import base64
import binascii
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .services.errors import FileTooLargeError, MissingInputError

JSON_HEADERS = {"Content-Type": "application/json"}


class FileInput(BaseModel):
    """One file to process."""

    model_config = ConfigDict(populate_by_name=True)

    file_buffer: Optional[str] = Field(
        default=None,
        alias="fileBuffer",
        description="Base64 encoded file content",
    )
    file_path: Optional[str] = Field(
        default=None,
        alias="filePath",
        description="Local file path, used instead of fileBuffer for local runs",
    )
    filename: Optional[str] = Field(default=None, description="Display name of the file")
    content_type: Optional[str] = Field(
        default=None,
        alias="contentType",
        description="Caller-supplied MIME type hint",
    )

    @classmethod
    def from_entry(cls, entry: Any) -> "FileInput":
        """Validate one raw batch entry; a malformed entry is a missing input."""
        if isinstance(entry, cls):
            return entry
        try:
            return cls.model_validate(entry)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'entry'}: {err['msg']}" for err in e.errors()
            )
            raise MissingInputError(f"Invalid file entry: {problems}") from e

    @staticmethod
    def label_for(entry: Any) -> Optional[str]:
        """Best-effort display name for an entry that may not validate."""
        if isinstance(entry, FileInput):
            return entry.filename
        if isinstance(entry, dict) and isinstance(entry.get("filename"), str):
            return entry["filename"]
        return None

    def read_bytes(self, max_size: Optional[int] = None) -> bytes:
        """
        Decode the file content.

        Raises:
            MissingInputError: no content, undecodable base64, or unreadable path
            FileTooLargeError: decoded content exceeds max_size
        """
        if self.file_buffer:
            try:
                # line-wrapped (RFC 2045) base64 is valid input
                data = base64.b64decode("".join(self.file_buffer.split()), validate=True)
            except (binascii.Error, ValueError) as e:
                raise MissingInputError(f"fileBuffer is not valid base64: {e}") from e
        elif self.file_path:
            try:
                data = Path(self.file_path).read_bytes()
            except OSError as e:
                raise MissingInputError(f"Could not read filePath: {e}") from e
        else:
            raise MissingInputError("Missing required field: fileBuffer or filePath")

        if not data:
            raise MissingInputError("File content is empty")
        if max_size is not None and len(data) > max_size:
            raise FileTooLargeError(len(data), max_size)
        return data


class FileResult(BaseModel):
    """Outcome for one FileInput."""

    model_config = ConfigDict(populate_by_name=True)

    filename: str
    success: bool
    extracted_text: Optional[str] = Field(default=None, alias="extractedText")
    error: Optional[str] = None
    media_type: Optional[str] = Field(default=None, alias="mediaType")
    method: Optional[str] = None

    @classmethod
    def ok(cls, filename: str, text: str, method: str, media_type: str) -> "FileResult":
        return cls(
            filename=filename,
            success=True,
            extracted_text=text,
            method=method,
            media_type=media_type,
        )

    @classmethod
    def failed(cls, filename: str, error: str, media_type: Optional[str] = None) -> "FileResult":
        return cls(filename=filename, success=False, extracted_text=None, error=error, media_type=media_type)

    def to_wire(self) -> Dict:
        # extractedText is always present on the wire, null for failures
        out = self.model_dump(by_alias=True, exclude_none=True)
        out.setdefault("extractedText", None)
        return out


class BatchRequest(BaseModel):
    # Entries are validated one by one inside the batch so a bad entry only fails itself
    files: List[Any] = Field(default_factory=list)


class BatchResponse(BaseModel):
    """Aggregated outcome of a batch."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(default=200, alias="statusCode")
    headers: Dict[str, str] = Field(default_factory=lambda: dict(JSON_HEADERS))
    message: str
    results: List[FileResult] = Field(default_factory=list)
    error: Optional[str] = None

    def body(self) -> Dict:
        """JSON body as returned by the event handler: message, results, error."""
        out = {"message": self.message, "results": [r.to_wire() for r in self.results]}
        if self.error is not None:
            out["error"] = self.error
        return out


class SupportedFormats(BaseModel):
    media_types: List[str]


class HealthResponse(BaseModel):
    status: str = Field(default="ok", description="Service status")
    service: str = Field(default="batch-ocr")
    engine_state: str = Field(..., description="Recognition engine lifecycle state")
