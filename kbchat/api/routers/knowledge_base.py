"""
Knowledge-base API endpoints.

Routes: POST /knowledge-base/documents, GET /knowledge-base/documents,
    GET /knowledge-base/documents/{id}, DELETE /knowledge-base/documents/{id},
    GET /knowledge-base/stats, POST /knowledge-base/search

Dependencies: kbchat.application.services, kbchat.models.document
System role: Document ingestion and management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from kbchat.api.deps import (
    get_document_service,
    get_ingestion_pipeline,
    get_settings_dependency,
    get_tenant_id,
)
from kbchat.api.routers.router_utils import clean_filename, error_response
from kbchat.application.services.document_service import DocumentService
from kbchat.application.services.ingestion_service import IngestionPipeline
from kbchat.boundary.vdb.vector_schemas import DocumentRecord
from kbchat.configs import Settings
from kbchat.core.exceptions import DocumentNotFound, IngestionError, ValidationError, VectorStoreError
from kbchat.models.document import (
    DocumentDetail,
    DocumentListResponse,
    DocumentSummary,
    IngestionErrorResponse,
    IngestionResponse,
    KnowledgeBaseStatsResponse,
    SearchHit,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge-base", tags=["knowledge-base"])


def _ingestion_error(message: str, status_code: int) -> JSONResponse:
    body = IngestionErrorResponse(error=message, http_status_hint=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _to_detail(document: DocumentRecord) -> DocumentDetail:
    return DocumentDetail(
        id=document.id,
        filename=document.filename,
        chunk_count=document.chunk_count,
        status=document.status.value,
        media_type=document.media_type,
        size_bytes=document.size_bytes,
        error_message=document.error_message,
        created_at=document.created_at,
    )


@router.post("/documents", response_model=IngestionResponse)
async def upload_document(
    file: UploadFile = File(...),
    tenant_id: str = Depends(get_tenant_id),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
    settings: Settings = Depends(get_settings_dependency),
):
    """
    Upload a document and index it for the tenant's widgets.

    Processing is synchronous; the response reports the final status.
    Failures return ``{success: false, error, httpStatusHint}`` with the
    hinted status code.

    Args:
        file: Multipart upload
        tenant_id: Tenant from the identity header

    Returns:
        IngestionResponse or IngestionErrorResponse
    """
    filename = clean_filename(file.filename)
    # Read one byte past the limit so oversize uploads are detected without buffering them
    data = await file.read(settings.ingestion.max_file_size_bytes + 1)

    try:
        result = await pipeline.ingest(
            tenant_id=tenant_id,
            filename=filename,
            data=data,
            media_type=file.content_type,
        )
    except ValidationError as e:
        return _ingestion_error(e.message, 400)
    except IngestionError as e:
        logger.warning(
            f"{__name__}:upload_document - Rejected ({e.kind})",
            extra={"tenant_id": tenant_id, "upload_filename": filename, "document_id": e.document_id},
        )
        return _ingestion_error(e.message, e.http_status_hint)
    finally:
        await file.close()

    document = result.document
    return IngestionResponse(
        document=DocumentSummary(
            id=document.id,
            filename=document.filename,
            chunk_count=document.chunk_count,
            status=document.status.value,
        )
    )


@router.get("/documents", response_model=DocumentListResponse)
async def list_documents(
    tenant_id: str = Depends(get_tenant_id),
    service: DocumentService = Depends(get_document_service),
):
    """List the tenant's documents, newest first."""
    try:
        documents = await service.list_documents(tenant_id)
    except VectorStoreError:
        return error_response(500, "Could not load documents")
    return DocumentListResponse(documents=[_to_detail(d) for d in documents], total=len(documents))


@router.get("/documents/{document_id}", response_model=DocumentDetail)
async def get_document(
    document_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: DocumentService = Depends(get_document_service),
):
    try:
        document = await service.get_document(tenant_id, document_id)
    except DocumentNotFound:
        return error_response(404, "Document not found")
    return _to_detail(document)


@router.delete("/documents/{document_id}")
async def delete_document(
    document_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: DocumentService = Depends(get_document_service),
):
    """
    Delete a document and all of its chunks.

    Returns:
        dict: {"success": true}
    """
    try:
        await service.delete_document(tenant_id, document_id)
    except DocumentNotFound:
        return error_response(404, "Document not found")
    except VectorStoreError:
        return error_response(500, "Could not delete the document")
    return {"success": True}


@router.get("/stats", response_model=KnowledgeBaseStatsResponse)
async def get_stats(
    tenant_id: str = Depends(get_tenant_id),
    service: DocumentService = Depends(get_document_service),
):
    try:
        stats = await service.get_stats(tenant_id)
    except VectorStoreError:
        return error_response(500, "Could not load statistics")
    return KnowledgeBaseStatsResponse(**stats.model_dump())


@router.post("/search", response_model=SearchResponse)
async def search_knowledge_base(
    request: SearchRequest,
    tenant_id: str = Depends(get_tenant_id),
    service: DocumentService = Depends(get_document_service),
):
    """
    Preview the passages the chat would retrieve for a query.

    Retrieval is best effort, so provider or index failures yield an
    empty result list.
    """
    results = await service.search(tenant_id, request.query, k=request.k, min_similarity=request.min_similarity)
    return SearchResponse(
        results=[
            SearchHit(
                document_id=r.document_id,
                filename=r.filename,
                content=r.content,
                similarity_score=r.similarity_score,
            )
            for r in results
        ]
    )
