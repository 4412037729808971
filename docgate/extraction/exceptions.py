class TextExtractionError(Exception):
    """Raised when text cannot be extracted from a document."""


class UnsupportedDocumentTypeError(TextExtractionError):
    """Raised when no extractor handles the document's MIME type."""
