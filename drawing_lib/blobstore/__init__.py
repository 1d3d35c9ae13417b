"""Blob backends consumed by the drawing store."""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from .base import BlobInfo, BlobStore, Commit
from .file_backend import LocalBlobStore
from .memory_backend import MemoryBlobStore

BACKENDS = ("file", "memory")


def create_blob_store(kind: str = "file", location: Optional[str | Path] = None) -> BlobStore:
    """Build an unopened blob store of the given kind.

    `location` is required for the file backend and ignored for memory.
    Callers must still call `create_repository()` before use.
    """
    if kind == "memory":
        return MemoryBlobStore()
    if kind == "file":
        if location is None:
            raise ValueError("the file backend requires a location")
        return LocalBlobStore(location)
    raise ValueError(f"unknown blob backend {kind!r}; expected one of {', '.join(BACKENDS)}")


__all__ = ["BlobInfo", "BlobStore", "Commit", "LocalBlobStore", "MemoryBlobStore", "create_blob_store", "BACKENDS"]
