from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..core.exceptions import PersistenceError, ValidationError


class BlobStore(Protocol):
    def put(self, key: str, data: bytes) -> str:
        """Store bytes under key and return a URL for them."""

        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Blob store on the local filesystem, served by the app under base_url."""

    def __init__(self, root: str | Path, *, base_url: str):
        self._root = Path(root).resolve()
        self._base_url = base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if self._root not in path.parents:
            raise ValidationError("Invalid blob key")
        return path

    def put(self, key: str, data: bytes) -> str:
        path = self.resolve(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise PersistenceError("Could not store file") from e
        return f"{self._base_url}/{key}"
