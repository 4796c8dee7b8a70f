"""
Text extraction for uploaded documents.

Maps a declared media type to an extractor and returns the plain text.
Unsupported types are rejected before any parsing work.

Dependencies: pdfminer.six, python-docx, antiword (CLI, legacy .doc only)
System role: First stage of the ingestion pipeline
"""

import io
import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Callable

from docx import Document as DocxDocument
from pdfminer.high_level import extract_text as pdf_extract_text

from kbchat.configs.ingestion import LEGACY_WORD, PDF, PLAIN_TEXT, WORD
from kbchat.core.exceptions import ExtractionError, UnsupportedType

logger = logging.getLogger(__name__)

TEXT_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")

# File extension fallbacks
EXTENSION_MEDIA_TYPES = {
    ".txt": PLAIN_TEXT,
    ".md": PLAIN_TEXT,
    ".pdf": PDF,
    ".doc": LEGACY_WORD,
    ".docx": WORD,
}

_GENERIC_TYPES = {"", "application/octet-stream", "binary/octet-stream"}


def resolve_media_type(filename: str, declared: str | None) -> str:
    """
    Pick the media type used for extraction.

    The declared type wins unless it is missing or generic, in which case
    the filename extension decides. Parameters such as ``; charset=utf-8``
    are dropped.

    Args:
        filename: Upload filename
        declared: Content type sent by the client

    Returns:
        str: Normalised media type (may still be unsupported)
    """
    media_type = (declared or "").split(";", 1)[0].strip().lower()
    if media_type in _GENERIC_TYPES:
        return EXTENSION_MEDIA_TYPES.get(Path(filename or "").suffix.lower(), media_type)
    return media_type


def extract_plain_text(data: bytes) -> str:
    """Decode a plain text upload, trying common encodings in order."""
    for encoding in TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ExtractionError("Could not decode text file", media_type=PLAIN_TEXT)


def extract_pdf(data: bytes) -> str:
    """Extract text from a PDF using pdfminer.six."""
    try:
        return pdf_extract_text(io.BytesIO(data))
    except Exception as e:
        raise ExtractionError(
            "Could not read PDF",
            media_type=PDF,
            details={"error_type": type(e).__name__},
        ) from e


def extract_docx(data: bytes) -> str:
    """Extract paragraph and table text from a .docx file using python-docx."""
    try:
        document = DocxDocument(io.BytesIO(data))
    except Exception as e:
        raise ExtractionError(
            "Could not read Word document",
            media_type=WORD,
            details={"error_type": type(e).__name__},
        ) from e

    parts = [p.text for p in document.paragraphs if p.text]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def extract_legacy_doc(data: bytes) -> str:
    """
    Extract text from a legacy binary .doc file with the antiword CLI.

    The upload is written to a private temporary directory which is
    removed on every exit path.
    """
    with tempfile.TemporaryDirectory(prefix="kbchat-doc-") as workdir:
        source = os.path.join(workdir, "upload.doc")
        with open(source, "wb") as handle:
            handle.write(data)
        try:
            completed = subprocess.run(
                ["antiword", source],
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=60,
            )
        except FileNotFoundError as e:
            raise ExtractionError(
                "Legacy Word documents are not supported on this server",
                media_type=LEGACY_WORD,
            ) from e
        except subprocess.CalledProcessError as e:
            raise ExtractionError(
                "Could not read Word document",
                media_type=LEGACY_WORD,
                details={"stderr": e.stderr.decode(errors="ignore")[:200]},
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ExtractionError("Word document conversion timed out", media_type=LEGACY_WORD) from e
    return completed.stdout.decode("utf-8", errors="replace")


EXTRACTORS: dict[str, Callable[[bytes], str]] = {
    PLAIN_TEXT: extract_plain_text,
    PDF: extract_pdf,
    WORD: extract_docx,
    LEGACY_WORD: extract_legacy_doc,
}


class TextExtractor:
    """
    Media-type dispatching text extractor.

    Attributes:
        allowed_media_types: Types accepted by this deployment
    """

    def __init__(self, allowed_media_types: list[str] | None = None) -> None:
        self.allowed_media_types = set(allowed_media_types or EXTRACTORS)

    def supports(self, media_type: str) -> bool:
        return media_type in self.allowed_media_types and media_type in EXTRACTORS

    def extract(self, data: bytes, media_type: str) -> str:
        """
        Extract plain text.

        Plain text is returned verbatim. Binary formats that produce no
        text at all are treated as extraction failures.

        Args:
            data: Raw upload bytes
            media_type: Resolved media type

        Returns:
            str: Extracted text

        Raises:
            UnsupportedType: If the media type is not accepted
            ExtractionError: If the file cannot be parsed
        """
        if not self.supports(media_type):
            raise UnsupportedType(media_type)

        text = EXTRACTORS[media_type](data)
        if media_type != PLAIN_TEXT and not text.strip():
            raise ExtractionError("No text could be extracted", media_type=media_type)

        logger.info(
            f"{__name__}:extract - Extracted {len(text)} characters",
            extra={"media_type": media_type, "size_bytes": len(data)},
        )
        return text
