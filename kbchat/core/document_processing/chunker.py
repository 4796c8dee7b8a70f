"""
Boundary-aware text chunker.

Splits text into overlapping windows of at most ``chunk_size``
characters, preferring to cut after a sentence terminator and then at
whitespace, provided the cut stays in the trailing half of the window.

Dependencies: None
System role: Second stage of the ingestion pipeline
"""

from dataclasses import dataclass

SENTENCE_TERMINATORS = ".!?"


@dataclass(frozen=True)
class ChunkSpan:
    """A chunk and the half-open range of the source text it was cut from."""

    index: int
    text: str
    start: int
    end: int


def _validate(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if overlap < 0:
        raise ValueError("overlap must not be negative")
    if overlap >= chunk_size:
        raise ValueError("overlap must be smaller than chunk_size")


def _find_cut(text: str, start: int, end: int, chunk_size: int) -> int:
    floor = start + chunk_size // 2
    sentence_end = max(text.rfind(mark, floor, end) for mark in SENTENCE_TERMINATORS)
    if sentence_end != -1:
        return sentence_end + 1
    for position in range(end - 1, floor - 1, -1):
        if text[position].isspace():
            return position
    return end


def iter_chunk_spans(text: str, chunk_size: int = 1000, overlap: int = 200):
    """
    Yield ChunkSpans in document order.

    Args:
        text: Source text
        chunk_size: Maximum characters per chunk
        overlap: Characters the next window re-reads from the previous one

    Yields:
        ChunkSpan with stripped text and offsets of the stripped segment

    Raises:
        ValueError: On invalid size/overlap
    """
    _validate(chunk_size, overlap)
    length = len(text)
    start = 0
    index = 0
    while start < length:
        end = min(start + chunk_size, length)
        if end < length:
            end = _find_cut(text, start, end, chunk_size)

        raw = text[start:end]
        stripped = raw.strip()
        if stripped:
            lead = len(raw) - len(raw.lstrip())
            seg_start = start + lead
            yield ChunkSpan(index=index, text=stripped, start=seg_start, end=seg_start + len(stripped))
            index += 1

        if end >= length:
            break
        start = max(end - overlap, start + 1)


def chunk_text(text: str, chunk_size: int = 1000, overlap: int = 200) -> list[str]:
    """
    Split text into chunks.

    Deterministic: the same input and parameters always give the same
    chunks. Empty or whitespace-only input gives an empty list.

    Args:
        text: Source text
        chunk_size: Maximum characters per chunk
        overlap: Characters shared by consecutive windows

    Returns:
        list[str]: Non-empty chunks in document order
    """
    return [span.text for span in iter_chunk_spans(text, chunk_size, overlap)]


class TextChunker:
    """Chunker bound to configured sizes."""

    def __init__(self, chunk_size: int = 1000, overlap: int = 200) -> None:
        _validate(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[str]:
        return chunk_text(text, self.chunk_size, self.overlap)

    def chunk_with_offsets(self, text: str) -> list[ChunkSpan]:
        return list(iter_chunk_spans(text, self.chunk_size, self.overlap))
