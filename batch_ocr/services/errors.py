"""
Extraction error taxonomy.

Every per-file failure raised while processing a batch derives from
ExtractionError. The batch orchestrator converts these into failed
FileResult entries; only BatchProcessingError describes a batch-level fault.
"""


class ExtractionError(Exception):
    """Base class for failures scoped to a single file."""


class MissingInputError(ExtractionError):
    """The file entry has no decodable byte content."""


class FileTooLargeError(MissingInputError):
    """The decoded file exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"File is too large: {size} bytes (limit {limit} bytes)")
        self.size = size
        self.limit = limit


class UnsupportedTypeError(ExtractionError):
    """Neither the content type hint nor the file signature is supported."""

    def __init__(self, content_type: str):
        super().__init__(f"Unsupported file type: {content_type}")
        self.content_type = content_type


class PreprocessingError(ExtractionError):
    """The image could not be decoded or normalized."""


class RecognitionError(ExtractionError):
    """The recognition engine failed on a buffer."""


class EngineInitializationError(RecognitionError):
    """The shared recognition engine could not be brought up."""


class DocumentExtractionError(ExtractionError):
    """The embedded text layer of a document could not be read."""


class BatchProcessingError(Exception):
    """Raised when a failure escapes per-file isolation."""
