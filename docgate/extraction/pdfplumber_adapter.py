import io
from typing import ClassVar

import pdfplumber

from docgate.extraction.base import BaseTextExtractor
from docgate.extraction.exceptions import TextExtractionError


class PdfPlumberAdapter(BaseTextExtractor):
    """Extracts PDF text page by page using pdfplumber."""

    method: ClassVar[str] = "pdfplumber (PDF)"

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise TextExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return "\n".join(pages).strip()
