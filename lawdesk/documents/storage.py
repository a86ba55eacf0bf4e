import logging
import re
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from lawdesk.config import settings

logger = logging.getLogger(__name__)

# MIME type -> extension used for the stored file
ALLOWED_MIME_TYPES = {
    "application/pdf": ".pdf",
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "text/plain": ".txt",
    "text/csv": ".csv",
}

UNCATEGORIZED_CLIENT = "_uncategorized"
GENERAL_CASE = "_general"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def sanitize_segment(value: Optional[object], default: str) -> str:
    """Turn an id into a single safe directory name.

    Anything outside [a-zA-Z0-9_-] becomes an underscore, so separators and
    dots can never climb out of the upload root.
    """
    if value is None or str(value) == "":
        return default
    return _UNSAFE_CHARS.sub("_", str(value))


class DocumentStore:
    """Filesystem blobs laid out as <root>/<client>/<case>/<document id><ext>."""

    def __init__(self, root: str, max_bytes: int):
        self.root = Path(root)
        self.max_bytes = max_bytes

    @staticmethod
    def extension_for(mime_type: str) -> Optional[str]:
        return ALLOWED_MIME_TYPES.get(mime_type)

    def directory_for(self, client_id=None, case_id=None) -> Path:
        return (
            self.root
            / sanitize_segment(client_id, UNCATEGORIZED_CLIENT)
            / sanitize_segment(case_id, GENERAL_CASE)
        )

    def path_for(self, filename: str, client_id=None, case_id=None) -> Path:
        return self.directory_for(client_id, case_id) / Path(filename).name

    async def write(self, filename: str, content: bytes, client_id=None, case_id=None) -> Path:
        directory = self.directory_for(client_id, case_id)
        await aiofiles.os.makedirs(directory, exist_ok=True)
        path = directory / Path(filename).name
        async with aiofiles.open(path, "wb") as out_file:
            await out_file.write(content)
        return path

    async def exists(self, path: Path) -> bool:
        return await aiofiles.os.path.isfile(path)

    async def remove(self, path: Path) -> None:
        """Raises FileNotFoundError when the blob is already gone, OSError otherwise."""
        await aiofiles.os.remove(path)


_store: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    global _store
    if _store is None:
        _store = DocumentStore(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
    return _store
