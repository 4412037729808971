from typing import ClassVar

from docgate.config.settings import Settings
from docgate.extraction.base import BaseTextExtractor
from docgate.extraction.docx_adapter import DocxAdapter
from docgate.extraction.exceptions import UnsupportedDocumentTypeError
from docgate.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docgate.extraction.plain_text_adapter import MarkdownAdapter, PlainTextAdapter
from docgate.extraction.pymupdf_adapter import PyMuPdfAdapter

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PLAIN_TEXT_MIME_TYPE = "text/plain"
MARKDOWN_MIME_TYPE = "text/markdown"

# Formats whose extracted text can contain literal angle brackets.
TEXT_MIME_TYPES = frozenset({PLAIN_TEXT_MIME_TYPE, MARKDOWN_MIME_TYPE})
SUPPORTED_MIME_TYPES = frozenset(
    {PDF_MIME_TYPE, DOCX_MIME_TYPE, PLAIN_TEXT_MIME_TYPE, MARKDOWN_MIME_TYPE}
)


class ExtractorFactory:
    """Creates the text extractor for a document's MIME type."""

    PDF_ADAPTERS: ClassVar[dict[str, type[BaseTextExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }
    ADAPTERS: ClassVar[dict[str, type[BaseTextExtractor]]] = {
        DOCX_MIME_TYPE: DocxAdapter,
        PLAIN_TEXT_MIME_TYPE: PlainTextAdapter,
        MARKDOWN_MIME_TYPE: MarkdownAdapter,
    }

    @classmethod
    def create(cls, settings: Settings, mime_type: str) -> BaseTextExtractor:
        """Return an extractor instance.

        Raises:
            ValueError: if the configured PDF engine is unknown.
            UnsupportedDocumentTypeError: if no adapter handles *mime_type*.
        """
        normalized = mime_type.split(";", 1)[0].strip().lower()
        if normalized == PDF_MIME_TYPE:
            return cls._create_pdf_extractor(settings)
        adapter_cls = cls.ADAPTERS.get(normalized)
        if adapter_cls is None:
            raise UnsupportedDocumentTypeError(f"Unsupported file type: {mime_type}")
        return adapter_cls()

    @classmethod
    def _create_pdf_extractor(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()
