import asyncio
import logging
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.documents.service import DocumentService
from lawdesk.documents.storage import DocumentStore, get_document_store
from lawdesk.portal.service import PortalService

logger = logging.getLogger(__name__)


class TokenSweeper:
    """Periodic maintenance owned by the application lifespan.

    Each run removes expired client tokens and retries queued file
    deletions. A failing run is logged and the loop carries on.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        interval_seconds: float,
        store: Optional[DocumentStore] = None,
    ):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self.store = store or get_document_store()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        async with self.session_factory() as db:
            deleted = await PortalService(db).sweep_expired()
            cleared = await DocumentService(db, self.store).retry_pending_deletions()
        logger.info(f"Maintenance sweep: {deleted} expired tokens, {cleared} pending file deletions cleared")
        return deleted

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"Maintenance sweep failed: {e}")

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info(f"Token sweeper started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Token sweeper stopped")
