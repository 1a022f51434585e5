"""
Raw document storage contract.

Dependencies: None
System role: Blob storage seam for uploaded files
"""

import time
from abc import ABC, abstractmethod
from pathlib import PurePosixPath


class DocumentStorage(ABC):
    """Stores raw upload bytes and hands back a fetchable locator."""

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str | None = None) -> str:
        """Store bytes under key and return the source locator."""

    @abstractmethod
    def fetch(self, locator: str) -> bytes:
        """Read back the bytes behind a locator returned by put()."""

    @abstractmethod
    def delete(self, locator: str) -> None:
        """Remove the object behind a locator. Missing objects are ignored."""


def build_object_key(prefix: str, file_name: str, timestamp_ms: int | None = None) -> str:
    """
    Build a collision-resistant object key: <prefix>/<epoch-ms>-<basename>.

    Args:
        prefix: Key prefix (e.g. "pdfs")
        file_name: Client-supplied file name; directory parts are dropped
        timestamp_ms: Override for the timestamp component

    Returns:
        str: Object key
    """
    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    base = PurePosixPath(file_name.replace("\\", "/")).name or "upload"
    return f"{prefix.strip('/')}/{stamp}-{base}"
