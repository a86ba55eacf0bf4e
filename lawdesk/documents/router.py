from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.audit.service import AuditService
from lawdesk.auth.dependencies import require_admin
from lawdesk.auth.schemas import TokenPayload
from lawdesk.database import get_db
from lawdesk.documents.models import DocumentCategory
from lawdesk.documents.schemas import DocumentResponse, DocumentUpdate
from lawdesk.documents.service import DocumentService
from lawdesk.documents.storage import DocumentStore, get_document_store

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> DocumentService:
    return DocumentService(db, store)


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    request: Request,
    file: UploadFile = File(...),
    client_id: Optional[UUID] = Form(None, alias="clientId"),
    case_id: Optional[UUID] = Form(None, alias="caseId"),
    category: DocumentCategory = Form(DocumentCategory.OTHER),
    description: Optional[str] = Form(None),
    identity: TokenPayload = Depends(require_admin),
    service: DocumentService = Depends(get_document_service),
):
    document = await service.upload(
        file,
        category=category,
        uploaded_by=identity.sub,
        client_id=client_id,
        case_id=case_id,
        description=description,
    )
    await AuditService(service.db).record(
        request, identity.sub, "document_uploaded", "document", document.id,
        {"original_name": document.original_name, "size": document.size, "mime_type": document.mime_type},
    )
    return document


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    client_id: Optional[UUID] = Query(None, alias="clientId"),
    case_id: Optional[UUID] = Query(None, alias="caseId"),
    category: Optional[DocumentCategory] = None,
    q: Optional[str] = None,
    identity: TokenPayload = Depends(require_admin),
    service: DocumentService = Depends(get_document_service),
):
    return await service.list_documents(client_id=client_id, case_id=case_id, category=category, q=q)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: UUID,
    identity: TokenPayload = Depends(require_admin),
    service: DocumentService = Depends(get_document_service),
):
    return await service.get_document(document_id)


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: UUID,
    document_in: DocumentUpdate,
    request: Request,
    identity: TokenPayload = Depends(require_admin),
    service: DocumentService = Depends(get_document_service),
):
    document = await service.update_document(document_id, document_in)
    await AuditService(service.db).record(
        request, identity.sub, "update", "document", document_id,
        document_in.model_dump(mode="json", exclude_unset=True),
    )
    return document


@router.get("/{document_id}/download")
async def download_document(
    document_id: UUID,
    request: Request,
    identity: TokenPayload = Depends(require_admin),
    service: DocumentService = Depends(get_document_service),
):
    document, path = await service.resolve_file(document_id)
    await AuditService(service.db).record(
        request, identity.sub, "document_downloaded", "document", document_id,
        {"original_name": document.original_name},
    )
    return FileResponse(
        path,
        media_type=document.mime_type,
        filename=document.original_name,
        headers={"X-Content-Type-Options": "nosniff"},
    )


@router.get("/{document_id}/content")
async def document_content(
    document_id: UUID,
    identity: TokenPayload = Depends(require_admin),
    service: DocumentService = Depends(get_document_service),
):
    """Inline rendering for previews."""
    document, path = await service.resolve_file(document_id)
    return FileResponse(
        path,
        media_type=document.mime_type,
        filename=document.original_name,
        content_disposition_type="inline",
        headers={"X-Content-Type-Options": "nosniff"},
    )


@router.delete("/{document_id}")
async def delete_document(
    document_id: UUID,
    request: Request,
    identity: TokenPayload = Depends(require_admin),
    service: DocumentService = Depends(get_document_service),
):
    document = await service.delete_document(document_id)
    await AuditService(service.db).record(
        request, identity.sub, "document_deleted", "document", document_id,
        {"original_name": document.original_name},
    )
    return {"message": "Document deleted"}
