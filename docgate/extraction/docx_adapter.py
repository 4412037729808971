import io
from typing import ClassVar

from docx import Document

from docgate.extraction.base import BaseTextExtractor
from docgate.extraction.exceptions import TextExtractionError


class DocxAdapter(BaseTextExtractor):
    """Extracts raw text from Word documents using python-docx.

    Paragraphs are separated by blank lines, followed by table rows with
    cells joined by tabs.
    """

    method: ClassVar[str] = "python-docx (DOCX)"

    def extract(self, data: bytes) -> str:
        try:
            document = Document(io.BytesIO(data))
            blocks = [p.text for p in document.paragraphs if p.text.strip()]
            for table in document.tables:
                for row in table.rows:
                    cells = [cell.text.strip() for cell in row.cells]
                    if any(cells):
                        blocks.append("\t".join(cells))
        except Exception as exc:
            raise TextExtractionError(f"docx extraction failed: {exc}") from exc
        return "\n\n".join(blocks).strip()
