import logging
import uuid
from pathlib import Path
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, UploadFile
from sqlalchemy import select, desc, or_
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.cases.service import CaseService
from lawdesk.clients.service import ClientService
from lawdesk.documents.models import Document, DocumentCategory, PendingFileDeletion
from lawdesk.documents.schemas import DocumentUpdate
from lawdesk.documents.storage import DocumentStore

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(self, db: AsyncSession, store: DocumentStore):
        self.db = db
        self.store = store

    async def _read_limited(self, file: UploadFile) -> bytes:
        limit = self.store.max_bytes
        if file.size is not None and file.size > limit:
            raise HTTPException(status_code=400, detail=f"File size exceeds {limit // (1024 * 1024)}MB limit")
        content = await file.read(limit + 1)
        if len(content) > limit:
            raise HTTPException(status_code=400, detail=f"File size exceeds {limit // (1024 * 1024)}MB limit")
        return content

    async def upload(
        self,
        file: UploadFile,
        category: DocumentCategory,
        uploaded_by: Optional[UUID],
        client_id: Optional[UUID] = None,
        case_id: Optional[UUID] = None,
        description: Optional[str] = None,
    ) -> Document:
        """Validate, write the blob, then record metadata.

        If the metadata insert fails the blob is removed again before the
        error propagates.
        """
        if not file.filename:
            raise HTTPException(status_code=400, detail="No file provided")
        mime_type = file.content_type or ""
        extension = self.store.extension_for(mime_type)
        if extension is None:
            raise HTTPException(status_code=400, detail=f"File type {mime_type} is not allowed")

        content = await self._read_limited(file)

        if client_id is not None:
            await ClientService(self.db).get_client(client_id)
        if case_id is not None:
            await CaseService(self.db).get_case(case_id)

        document_id = uuid.uuid4()
        filename = f"{document_id}{extension}"
        path = await self.store.write(filename, content, client_id=client_id, case_id=case_id)

        try:
            document = Document(
                id=document_id,
                filename=filename,
                original_name=Path(file.filename).name,
                size=len(content),
                mime_type=mime_type,
                client_id=client_id,
                case_id=case_id,
                category=category.value,
                description=description,
                uploaded_by=uploaded_by,
            )
            self.db.add(document)
            await self.db.commit()
            await self.db.refresh(document)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Document metadata insert failed for {document_id}: {e}")
            try:
                await self.store.remove(path)
            except OSError as cleanup_error:
                logger.error(f"Could not remove orphaned upload {path}: {cleanup_error}")
            raise HTTPException(status_code=500, detail="Failed to save document")

        logger.info(f"Stored document {document_id} ({len(content)} bytes) at {path}")
        return document

    async def list_documents(
        self,
        client_id: Optional[UUID] = None,
        case_id: Optional[UUID] = None,
        category: Optional[DocumentCategory] = None,
        q: Optional[str] = None,
    ) -> List[Document]:
        query = select(Document)
        if client_id is not None:
            query = query.where(Document.client_id == client_id)
        if case_id is not None:
            query = query.where(Document.case_id == case_id)
        if category is not None:
            query = query.where(Document.category == category.value)
        if q:
            pattern = f"%{q}%"
            query = query.where(or_(
                Document.original_name.ilike(pattern),
                Document.description.ilike(pattern),
            ))
        result = await self.db.execute(query.order_by(desc(Document.created_at)))
        return list(result.scalars().all())

    async def get_document(self, document_id: UUID) -> Document:
        document = await self.db.get(Document, document_id)
        if not document:
            raise HTTPException(status_code=404, detail="Document not found")
        return document

    def path_of(self, document: Document) -> Path:
        return self.store.path_for(document.filename, document.client_id, document.case_id)

    async def resolve_file(self, document_id: UUID) -> tuple[Document, Path]:
        """Metadata plus the on-disk path; 404 when either is missing."""
        document = await self.get_document(document_id)
        path = self.path_of(document)
        if not await self.store.exists(path):
            logger.error(f"Document {document_id} has metadata but no file at {path}")
            raise HTTPException(status_code=404, detail="File not found on disk")
        return document, path

    async def update_document(self, document_id: UUID, document_in: DocumentUpdate) -> Document:
        document = await self.get_document(document_id)
        update_data = document_in.model_dump(exclude_unset=True)
        if update_data.get("category") is not None:
            update_data["category"] = update_data["category"].value
        for field, value in update_data.items():
            setattr(document, field, value)
        await self.db.commit()
        await self.db.refresh(document)
        return document

    async def delete_document(self, document_id: UUID) -> Document:
        """Delete the row, then the blob.

        The row deletion is final. A blob that is already missing is only
        logged; any other unlink failure is queued for the maintenance task.
        """
        document = await self.get_document(document_id)
        path = self.path_of(document)

        await self.db.delete(document)
        await self.db.commit()

        try:
            await self.store.remove(path)
        except FileNotFoundError:
            logger.warning(f"File for deleted document {document_id} was already missing: {path}")
        except OSError as e:
            logger.error(f"Could not remove file for deleted document {document_id}: {e}")
            self.db.add(PendingFileDeletion(path=str(path), document_id=document_id, reason=str(e)))
            await self.db.commit()
        return document

    async def retry_pending_deletions(self) -> int:
        """Retry queued unlinks. Returns how many were cleared."""
        result = await self.db.execute(select(PendingFileDeletion))
        cleared = 0
        for pending in result.scalars().all():
            try:
                await self.store.remove(Path(pending.path))
            except FileNotFoundError:
                pass
            except OSError as e:
                pending.attempts += 1
                pending.reason = str(e)
                continue
            await self.db.delete(pending)
            cleared += 1
        await self.db.commit()
        return cleared
