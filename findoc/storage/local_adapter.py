from pathlib import Path

from findoc.storage.base import BaseBlobStore
from findoc.storage.exceptions import BlobNotFoundError, BlobStoreError


class LocalBlobStore(BaseBlobStore):
    """Stores blobs as files under a root directory: {root}/{ref}."""

    ROOT = Path("/app/files")

    def __init__(self, root: Path | None = None) -> None:
        self._root = (root if root is not None else self.ROOT).resolve()

    def fetch(self, ref: str) -> bytes:
        path = self._resolve_path(ref)
        if not path.is_file():
            raise BlobNotFoundError(f"Blob not found: {ref}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise BlobStoreError(f"Failed to read blob {ref}: {exc}") from exc

    def put(self, ref: str, content: bytes) -> str:
        path = self._resolve_path(ref)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise BlobStoreError(f"Failed to write blob {ref}: {exc}") from exc
        return ref

    def _resolve_path(self, ref: str) -> Path:
        path = (self._root / ref.lstrip("/")).resolve()
        if not path.is_relative_to(self._root):
            raise BlobStoreError(f"Blob ref escapes storage root: {ref}")
        return path
