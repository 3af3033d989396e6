"""Filesystem store for evidence photos.

Files are laid out as ``<base>/<order number>/<Reception|Trabajo>/<description>_<timestamp><ext>``
and referenced from the database by their path relative to ``<base>``.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol, Union

from werkzeug.utils import secure_filename

from workshop.core.errors import NotFoundError, ValidationError
from workshop.models.orders import EvidenceCategory

logger = logging.getLogger(__name__)

CATEGORY_FOLDERS = {
    EvidenceCategory.RECEPTION: "Reception",
    EvidenceCategory.WORK: "Trabajo",
}

MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
}
DEFAULT_MEDIA_TYPE = "application/octet-stream"
DEFAULT_EXTENSION = ".jpg"
MAX_DESCRIPTION_LENGTH = 50


def sanitize_description(description: str) -> str:
    """Turn a free-text description into a safe file name stem."""
    stem = secure_filename(description or "")[:MAX_DESCRIPTION_LENGTH]
    return stem or "evidence"


def media_type(path: str) -> str:
    return MEDIA_TYPES.get(Path(path).suffix.lower(), DEFAULT_MEDIA_TYPE)


class EvidenceStorage(Protocol):
    def store(
        self,
        data: bytes,
        order_number: str,
        category: EvidenceCategory,
        description: str,
        extension: str = DEFAULT_EXTENSION,
    ) -> str: ...

    def retrieve(self, path: str) -> bytes: ...

    def delete(self, path: str) -> bool: ...


class LocalEvidenceStorage:
    """Evidence store rooted at a local directory."""

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir).resolve()

    def store(
        self,
        data: bytes,
        order_number: str,
        category: EvidenceCategory,
        description: str,
        extension: str = DEFAULT_EXTENSION,
    ) -> str:
        extension = (extension or DEFAULT_EXTENSION).lower()
        if not extension.startswith("."):
            extension = f".{extension}"

        folder = self.base_dir / sanitize_description(order_number) / CATEGORY_FOLDERS[category]
        folder.mkdir(parents=True, exist_ok=True)

        stamp = datetime.now().strftime("%Y%m%d_%H%M%S%f")
        target = folder / f"{sanitize_description(description)}_{stamp}{extension}"
        target.write_bytes(data)
        logger.debug("Stored %d bytes at %s", len(data), target)
        return target.relative_to(self.base_dir).as_posix()

    def retrieve(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            logger.warning("Evidence file missing on disk: %s", path)
            raise NotFoundError("Evidence file not found")
        return target.read_bytes()

    def delete(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.is_file():
            return False
        target.unlink()
        return True

    def _resolve(self, path: str) -> Path:
        target = (self.base_dir / path).resolve()
        if self.base_dir not in target.parents:
            raise ValidationError("Invalid evidence path")
        return target
