from enum import Enum
from sqlalchemy import Column, String, Text, Integer, ForeignKey, Uuid
from lawdesk.database import Base
from lawdesk.shared.models import EntityMixin, RecordMixin


class DocumentCategory(str, Enum):
    CONTRACT = "contract"
    EVIDENCE = "evidence"
    CORRESPONDENCE = "correspondence"
    COURT_FILING = "court-filing"
    IDENTIFICATION = "identification"
    FINANCIAL = "financial"
    OTHER = "other"


class Document(Base, EntityMixin):
    """Metadata row for one stored file. The id is generated before the file is written."""
    __tablename__ = "documents"

    filename = Column(String, nullable=False)  # <id><ext>, name on disk
    original_name = Column(String, nullable=False)
    size = Column(Integer, nullable=False)
    mime_type = Column(String, nullable=False)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id"), nullable=True, index=True)
    case_id = Column(Uuid(as_uuid=True), ForeignKey("cases.id"), nullable=True, index=True)
    category = Column(String, nullable=False, default=DocumentCategory.OTHER.value)
    description = Column(Text, nullable=True)
    uploaded_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)


class PendingFileDeletion(Base, RecordMixin):
    """A blob whose metadata row is gone but which could not be unlinked yet."""
    __tablename__ = "pending_file_deletions"

    path = Column(String, nullable=False)
    document_id = Column(Uuid(as_uuid=True), nullable=True)
    reason = Column(Text, nullable=True)
    attempts = Column(Integer, nullable=False, default=1)
