import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UUIDMixin:
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

class CreatedMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)

class TimestampMixin(CreatedMixin):
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class EntityMixin(UUIDMixin, TimestampMixin):
    """Combines UUID and timestamps for standard entities."""
    pass

class RecordMixin(UUIDMixin, CreatedMixin):
    """UUID plus creation time for append-only rows."""
    pass
