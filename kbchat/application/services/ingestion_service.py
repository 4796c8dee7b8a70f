"""
Document ingestion pipeline.

Runs one uploaded file through extract, chunk, embed and index. The
document becomes searchable only when every chunk has been embedded and
written in a single store transaction; any earlier failure leaves the
record ``failed`` with no chunks.

State machine:
    received -> extracting -> chunking -> embedding -> indexing -> completed
    any non-terminal state -> failed

Dependencies: kbchat.core.document_processing, kbchat.boundary.providers, kbchat.boundary.vdb
System role: Ingestion orchestration layer
"""

import asyncio
import enum
import logging
from dataclasses import dataclass, field

from kbchat.boundary.providers.base import LLMProvider
from kbchat.boundary.vdb.base import VectorStore
from kbchat.boundary.vdb.vector_schemas import ChunkInput, DocumentRecord
from kbchat.core.document_processing.chunker import TextChunker
from kbchat.core.document_processing.extractor import TextExtractor, resolve_media_type
from kbchat.core.exceptions import (
    EmbeddingFailed,
    EmptyContent,
    ExtractionError,
    ExtractionFailed,
    IngestionError,
    PayloadTooLarge,
    PersistenceFailed,
    ProviderError,
    UnsupportedType,
    ValidationError,
    VectorStoreError,
)
from kbchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class IngestionState(str, enum.Enum):
    """Pipeline states for one upload attempt."""

    RECEIVED = "received"
    EXTRACTING = "extracting"
    CHUNKING = "chunking"
    EMBEDDING = "embedding"
    INDEXING = "indexing"
    COMPLETED = "completed"
    FAILED = "failed"


_NEXT_STATE = {
    IngestionState.RECEIVED: IngestionState.EXTRACTING,
    IngestionState.EXTRACTING: IngestionState.CHUNKING,
    IngestionState.CHUNKING: IngestionState.EMBEDDING,
    IngestionState.EMBEDDING: IngestionState.INDEXING,
    IngestionState.INDEXING: IngestionState.COMPLETED,
}


@dataclass
class IngestionRun:
    """Tracks the state of one ingestion attempt."""

    tenant_id: str
    filename: str
    document_id: str | None = None
    state: IngestionState = IngestionState.RECEIVED
    history: list[IngestionState] = field(default_factory=lambda: [IngestionState.RECEIVED])

    def advance(self, target: IngestionState) -> None:
        """
        Move to the next state.

        Raises:
            RuntimeError: If target is not the successor of the current state
        """
        if _NEXT_STATE.get(self.state) != target:
            raise RuntimeError(f"Illegal ingestion transition {self.state.value} -> {target.value}")
        self._enter(target)

    def fail(self) -> None:
        if self.state in (IngestionState.COMPLETED, IngestionState.FAILED):
            raise RuntimeError(f"Cannot fail a terminal ingestion ({self.state.value})")
        self._enter(IngestionState.FAILED)

    def _enter(self, target: IngestionState) -> None:
        self.state = target
        self.history.append(target)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:ingest - state={target.value}",
            tenant_id=self.tenant_id,
            document_id=self.document_id,
            filename=self.filename,
        )


@dataclass
class IngestionResult:
    """Completed ingestion outcome."""

    document: DocumentRecord
    run: IngestionRun


class IngestionPipeline:
    """
    Extract, chunk, embed and index one document.

    Collaborators are injected; the pipeline keeps no per-document state
    between calls, so concurrent ingestions only share the vector store.
    """

    def __init__(
        self,
        provider: LLMProvider,
        vector_store: VectorStore,
        extractor: TextExtractor,
        chunker: TextChunker,
        max_file_size_bytes: int,
        embedding_batch_size: int = 10,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            provider: Embedding client
            vector_store: Document and chunk index
            extractor: Media-type text extractor (also defines the allowed types)
            chunker: Configured chunker
            max_file_size_bytes: Upload ceiling
            embedding_batch_size: Chunks per embedding request
        """
        if embedding_batch_size <= 0:
            raise ValueError("embedding_batch_size must be positive")
        self.provider = provider
        self.vector_store = vector_store
        self.extractor = extractor
        self.chunker = chunker
        self.max_file_size_bytes = max_file_size_bytes
        self.embedding_batch_size = embedding_batch_size

    def validate(self, filename: str, size_bytes: int, media_type: str) -> None:
        """
        Policy checks done before any processing or network call.

        Raises:
            ValidationError: Missing filename
            UnsupportedType: Media type not accepted
            PayloadTooLarge: File above the size ceiling
        """
        if not filename or not filename.strip():
            raise ValidationError("Filename is required", field="filename")
        if not self.extractor.supports(media_type):
            raise UnsupportedType(media_type)
        if size_bytes > self.max_file_size_bytes:
            raise PayloadTooLarge(size_bytes, self.max_file_size_bytes)

    async def ingest(
        self,
        tenant_id: str,
        filename: str,
        data: bytes,
        media_type: str | None,
    ) -> IngestionResult:
        """
        Run the full pipeline for one upload.

        Args:
            tenant_id: Owning tenant
            filename: Original filename
            data: File bytes
            media_type: Declared media type (extension used when generic)

        Returns:
            IngestionResult with the completed DocumentRecord

        Raises:
            ValidationError, UnsupportedType, PayloadTooLarge: Before a record is created
            ExtractionFailed, EmptyContent, EmbeddingFailed, PersistenceFailed:
                After the record is created; the record is marked failed
        """
        resolved_type = resolve_media_type(filename, media_type)
        self.validate(filename, len(data), resolved_type)

        run = IngestionRun(tenant_id=tenant_id, filename=filename)
        try:
            document = await self.vector_store.create_document(
                tenant_id, filename, resolved_type, len(data)
            )
        except VectorStoreError as e:
            run.fail()
            raise PersistenceFailed("Could not save the document, please try again later") from e
        run.document_id = document.id

        try:
            run.advance(IngestionState.EXTRACTING)
            text = await self._extract(data, resolved_type)
            if not text.strip():
                raise EmptyContent("The document contains no text")

            run.advance(IngestionState.CHUNKING)
            chunks = self.chunker.chunk(text)
            if not chunks:
                raise EmptyContent("The document contains no text")

            run.advance(IngestionState.EMBEDDING)
            vectors = await self._embed_all(chunks)

            run.advance(IngestionState.INDEXING)
            chunk_inputs = [
                ChunkInput(chunk_index=index, content=content, embedding=vector)
                for index, (content, vector) in enumerate(zip(chunks, vectors))
            ]
            try:
                completed = await self.vector_store.upsert_chunks(
                    tenant_id, document.id, text, chunk_inputs
                )
            except VectorStoreError as e:
                raise PersistenceFailed("Could not save the document, please try again later") from e

            run.advance(IngestionState.COMPLETED)
        except IngestionError as e:
            e.document_id = document.id
            await self._mark_failed(run, e)
            raise
        except asyncio.CancelledError:
            await self._mark_failed(run, PersistenceFailed("Ingestion was cancelled"))
            raise
        except Exception as e:
            failure = IngestionError("Processing failed, please try again later", document_id=document.id)
            await self._mark_failed(run, failure)
            raise failure from e

        logger.info(
            f"{__name__}:ingest - Completed with {completed.chunk_count} chunks",
            extra={"tenant_id": tenant_id, "document_id": document.id},
        )
        return IngestionResult(document=completed, run=run)

    async def _extract(self, data: bytes, media_type: str) -> str:
        try:
            # Parsing is CPU bound, keep it off the event loop
            return await asyncio.to_thread(self.extractor.extract, data, media_type)
        except ExtractionError as e:
            raise ExtractionFailed("The file could not be read") from e

    async def _embed_all(self, chunks: list[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for offset in range(0, len(chunks), self.embedding_batch_size):
            batch = chunks[offset:offset + self.embedding_batch_size]
            try:
                vectors.extend(await self.provider.embed_batch(batch))
            except ProviderError as e:
                raise EmbeddingFailed(
                    "Processing failed while analysing the document, please try again later",
                    details={"batch_offset": offset, "error_type": type(e).__name__},
                ) from e
        if len(vectors) != len(chunks):
            raise EmbeddingFailed("Processing failed while analysing the document")
        return vectors

    async def _mark_failed(self, run: IngestionRun, error: IngestionError) -> None:
        run.fail()
        log_exception_with_context(
            logger,
            f"{__name__}:ingest - Failed ({error.kind})",
            error,
            tenant_id=run.tenant_id,
            document_id=run.document_id,
        )
        try:
            await self.vector_store.mark_failed(run.tenant_id, run.document_id, error.message)
        except VectorStoreError as e:
            logger.error(
                f"{__name__}:ingest - Could not record failure on document",
                extra={"document_id": run.document_id, "error_type": type(e).__name__},
            )
