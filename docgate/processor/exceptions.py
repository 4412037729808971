from docgate.quality.models import QualityReport


class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the database."""


class InvalidFilePathError(ProcessorError):
    """Raised when a document's storage path escapes the files root."""


class InvalidDocumentFileError(ProcessorError):
    """Raised when a file fails size or type validation before extraction."""


class DocumentRejectedError(ProcessorError):
    """Raised when a document's content is refused for ingestion.

    Retrying cannot change the outcome, so jobs failing with this error are
    rejected rather than retried.
    """

    def __init__(self, message: str, report: QualityReport | None = None) -> None:
        super().__init__(message)
        self.report = report


class FileReadError(ProcessorError):
    """Raised when a document file exists but cannot be read."""
