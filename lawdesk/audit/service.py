import logging
from typing import Any, List, Optional, Tuple
from uuid import UUID

from fastapi import Request
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.audit.models import AuditLog

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS = (
    "password", "token", "authorization", "cookie", "ssn", "creditCard",
    "cvv", "secret", "apiKey", "authToken", "accessToken", "refreshToken",
)
_SENSITIVE_LOWER = tuple(f.lower() for f in SENSITIVE_FIELDS)


def _is_sensitive(key: str) -> bool:
    lowered = str(key).lower()
    return any(field in lowered for field in _SENSITIVE_LOWER)


def sanitize_details(details: Any) -> Any:
    """Return a copy of ``details`` with sensitive values replaced.

    Walks nested dicts and lists. A key is sensitive when its lowercase
    form contains any entry of SENSITIVE_FIELDS. The input is left as is.
    """
    if isinstance(details, dict):
        return {
            key: REDACTED if _is_sensitive(key) else sanitize_details(value)
            for key, value in details.items()
        }
    if isinstance(details, (list, tuple)):
        return [sanitize_details(item) for item in details]
    return details


def request_meta(request: Optional[Request]) -> Tuple[Optional[str], Optional[str]]:
    """(ip, user agent) of the caller."""
    if request is None:
        return None, None
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
    else:
        ip = request.client.host if request.client else None
    return ip, request.headers.get("user-agent")


class AuditService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def log_action(
        self,
        user_id: Optional[UUID],
        action: str,
        resource_type: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict] = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        entry = AuditLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            status="success",
            ip=ip,
            user_agent=user_agent,
            details=sanitize_details(details) if details else {},
        )
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def record(
        self,
        request: Optional[Request],
        user_id: Optional[UUID],
        action: str,
        resource_type: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict] = None,
    ) -> Optional[AuditLog]:
        """Side-effect variant used by route handlers.

        A failed write is logged and swallowed so the primary response is
        unaffected. Handlers call it last; a broken session is left for get_db
        to discard.
        """
        ip, user_agent = request_meta(request)
        try:
            return await self.log_action(
                user_id, action, resource_type, resource_id, details, ip=ip, user_agent=user_agent
            )
        except Exception as e:
            logger.error(f"Audit log write failed for {action} {resource_type}/{resource_id}: {e}")
            return None

    async def recent(self, limit: int = 50) -> List[AuditLog]:
        result = await self.db.execute(
            select(AuditLog).order_by(desc(AuditLog.created_at)).limit(limit)
        )
        return list(result.scalars().all())

    async def by_user(self, user_id: UUID, limit: int = 50) -> List[AuditLog]:
        result = await self.db.execute(
            select(AuditLog)
            .where(AuditLog.user_id == user_id)
            .order_by(desc(AuditLog.created_at))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def by_resource(self, resource_type: str, resource_id: Any, limit: int = 50) -> List[AuditLog]:
        result = await self.db.execute(
            select(AuditLog)
            .where(
                AuditLog.resource_type == resource_type,
                AuditLog.resource_id == str(resource_id),
            )
            .order_by(desc(AuditLog.created_at))
            .limit(limit)
        )
        return list(result.scalars().all())
