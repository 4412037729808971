from dataclasses import dataclass


@dataclass(frozen=True)
class TextChunk:
    """One window of a sanitized text, trimmed for embedding."""

    index: int
    content: str
    approximate_size: int
    start: int  # source window in the untrimmed text
    end: int
