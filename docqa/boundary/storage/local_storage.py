"""
Local filesystem document storage for development.

Dependencies: pathlib
System role: Development blob storage
"""

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

from docqa.boundary.storage.base import DocumentStorage
from docqa.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalDocumentStorage(DocumentStorage):
    """Writes uploads below a root directory; locators are file:// URIs."""

    def __init__(self, root_dir: str) -> None:
        self._root = Path(root_dir).resolve()

    def put(self, key: str, data: bytes, content_type: str | None = None) -> str:
        path = (self._root / key).resolve()
        if self._root not in path.parents:
            raise StorageError(f"Key escapes storage root: {key}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to write document: {e}", {"key": key}) from e
        logger.info(f"{__name__}:put - Stored {path} ({len(data)} bytes)")
        return path.as_uri()

    def fetch(self, locator: str) -> bytes:
        parsed = urlparse(locator)
        if parsed.scheme != "file":
            raise StorageError(f"Not a file locator: {locator}")
        try:
            return Path(unquote(parsed.path)).read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read document: {e}", {"locator": locator}) from e

    def delete(self, locator: str) -> None:
        parsed = urlparse(locator)
        if parsed.scheme != "file":
            raise StorageError(f"Not a file locator: {locator}")
        try:
            Path(unquote(parsed.path)).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete document: {e}", {"locator": locator}) from e
        logger.info(f"{__name__}:delete - Removed {locator}")
