from docgate.chunking.models import TextChunk
from docgate.chunking.splitter import split_into_chunks, split_into_windows

__all__ = ["TextChunk", "split_into_chunks", "split_into_windows"]
