"""In-memory blob store."""

from typing import Optional

from smartspend.storage.base import BlobStore


class InMemoryBlobStore(BlobStore):
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self, blobs: Optional[dict[str, bytes]] = None):
        self.blobs: dict[str, bytes] = dict(blobs or {})

    def load(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    def save(self, key: str, data: bytes) -> None:
        self.blobs[key] = bytes(data)
