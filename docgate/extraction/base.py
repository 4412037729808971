from abc import ABC, abstractmethod
from typing import ClassVar


class BaseTextExtractor(ABC):
    """Contract for all document text extraction adapters."""

    method: ClassVar[str] = "unknown"

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from document bytes.

        Args:
            data: Raw file content.

        Returns:
            Extracted text, stripped. Empty string when the document has no
            text layer.

        Raises:
            TextExtractionError: if extraction fails for any reason.
        """
