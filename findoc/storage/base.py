from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for key-addressed blob storage."""

    @abstractmethod
    def fetch(self, ref: str) -> bytes:
        """Return the bytes stored under ref.

        Raises:
            BlobNotFoundError: if nothing is stored under ref.
            BlobStoreError: on any other storage failure.
        """

    @abstractmethod
    def put(self, ref: str, content: bytes) -> str:
        """Store content under ref and return the ref."""
