from typing import ClassVar

import pymupdf

from docgate.extraction.base import BaseTextExtractor
from docgate.extraction.exceptions import TextExtractionError


class PyMuPdfAdapter(BaseTextExtractor):
    """Extracts PDF text page by page using PyMuPDF."""

    method: ClassVar[str] = "pymupdf (PDF)"

    def extract(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise TextExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return "\n".join(pages).strip()
