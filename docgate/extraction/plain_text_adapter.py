from typing import ClassVar

from docgate.extraction.base import BaseTextExtractor


class PlainTextAdapter(BaseTextExtractor):
    """Decodes UTF-8 text files; undecodable bytes become U+FFFD."""

    method: ClassVar[str] = "plain text"

    def extract(self, data: bytes) -> str:
        return data.decode("utf-8-sig", errors="replace").strip()


class MarkdownAdapter(PlainTextAdapter):
    method: ClassVar[str] = "markdown"
