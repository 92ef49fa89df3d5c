"""Abstract blob store interface."""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStore(ABC):
    """Durable key-value store holding whole snapshot blobs.

    The only guarantee is whole-blob replace: ``save`` overwrites the value
    under ``key`` in one step.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[bytes]:
        """Return the blob stored under key, or None if there is none."""
        pass

    @abstractmethod
    def save(self, key: str, data: bytes) -> None:
        """Replace the blob stored under key."""
        pass

    def close(self) -> None:
        """Release any resources held by the store."""
        pass
