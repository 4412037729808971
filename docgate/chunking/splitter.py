"""Fixed-window text splitter with overlap and break-point snapping."""

from docgate.chunking.models import TextChunk

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_OVERLAP = 200

# Priority order: sentence end, paragraph, line, word.
_BREAK_MARKERS: tuple[str, ...] = (".", "\n\n", "\n", " ")
_MIN_WINDOW_FILL = 0.7


def split_into_windows(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[TextChunk]:
    """Split *text* into overlapping windows of at most *chunk_size* characters.

    Each window after the first starts at ``max(start + 1, end - overlap)``,
    so the splitter advances even when ``overlap >= chunk_size``. Windows
    that trim to nothing are dropped; the window that reaches the end of the
    text is the last one.

    Raises:
        TypeError: if *text* is not a string.
        ValueError: if *chunk_size* is not positive or *overlap* is negative.
    """
    _check_arguments(text, chunk_size, overlap)
    if not text.strip():
        return []

    chunks: list[TextChunk] = []
    length = len(text)
    start = 0
    while start < length:
        end = start + chunk_size
        if end < length:
            end = _snap_to_break(text, start, chunk_size)
        end = min(end, length)

        content = text[start:end].strip()
        if content:
            chunks.append(
                TextChunk(
                    index=len(chunks),
                    content=content,
                    approximate_size=len(content),
                    start=start,
                    end=end,
                )
            )
        if end >= length:
            break
        start = max(start + 1, end - overlap)
    return chunks


def split_into_chunks(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[str]:
    """Same as :func:`split_into_windows`, returning only the chunk texts."""
    return [chunk.content for chunk in split_into_windows(text, chunk_size, overlap)]


def _snap_to_break(text: str, start: int, chunk_size: int) -> int:
    """Return the window end, pulled back to a natural break when one is close.

    Candidates lie inside ``[start, start + chunk_size)``; one is accepted
    only if it sits at or past 70% of the window.
    """
    naive_end = start + chunk_size
    threshold = start + chunk_size * _MIN_WINDOW_FILL
    for marker in _BREAK_MARKERS:
        position = text.rfind(marker, start, naive_end)
        if position != -1 and position >= threshold:
            return position + 1
    return naive_end


def _check_arguments(text: str, chunk_size: int, overlap: int) -> None:
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0:
        raise ValueError(f"overlap must not be negative, got {overlap}")
