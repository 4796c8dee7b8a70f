"""
Document processing: text extraction and chunking.

Dependencies: pdfminer.six, python-docx
System role: Pure transformation stages of the ingestion pipeline
"""

from kbchat.core.document_processing.chunker import ChunkSpan, TextChunker, chunk_text
from kbchat.core.document_processing.extractor import TextExtractor, resolve_media_type

__all__ = [
    "ChunkSpan",
    "TextChunker",
    "TextExtractor",
    "chunk_text",
    "resolve_media_type",
]
