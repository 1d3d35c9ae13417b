"""Memory-backed blob store.

Keeps blob contents in a dict keyed by storage key and records every
mutation in an in-memory change log. Nothing survives the process.
"""
import hashlib
import logging
from threading import RLock
from typing import Dict, List

from drawing_lib.blobstore.base import BlobInfo, BlobStore, Commit, utc_timestamp
from drawing_lib.errors import BlobNotFoundError

logger = logging.getLogger(__name__)


class MemoryBlobStore(BlobStore):
    def __init__(self) -> None:
        self._lock = RLock()
        self._blobs: Dict[str, bytes] = {}
        self._log: List[Commit] = []

    def create_repository(self) -> None:
        return

    def _record(self, action: str, key: str, actor: str, content: bytes | None = None, source_key: str | None = None) -> None:
        digest = hashlib.sha256(content).hexdigest() if content is not None else None
        self._log.append(Commit(
            sequence=len(self._log) + 1,
            action=action,
            key=key,
            actor=actor,
            timestamp=utc_timestamp(),
            digest=digest,
            source_key=source_key,
        ))

    def add_blob(self, blob: BlobInfo) -> None:
        content = bytes(blob.content)
        with self._lock:
            self._blobs[blob.key] = content
            self._record("add", blob.key, blob.modified_by, content)
        logger.debug("MemoryBlobStore stored %s (%d bytes)", blob.key, len(content))

    def get_blob(self, key: str) -> bytes:
        with self._lock:
            try:
                return self._blobs[key]
            except KeyError:
                raise BlobNotFoundError("blob not found", operation="get", subject=key) from None

    def delete_blob(self, key: str, modified_by: str) -> None:
        with self._lock:
            if key not in self._blobs:
                raise BlobNotFoundError("blob not found", operation="delete", subject=key)
            del self._blobs[key]
            self._record("delete", key, modified_by)

    def copy_blob(self, source_key: str, destination_key: str, modified_by: str) -> None:
        with self._lock:
            if source_key not in self._blobs:
                raise BlobNotFoundError("source blob not found", operation="copy", subject=source_key)
            content = self._blobs[source_key]
            self._blobs[destination_key] = content
            self._record("copy", destination_key, modified_by, content, source_key=source_key)

    def list_blob_keys(self) -> List[str]:
        with self._lock:
            return list(self._blobs.keys())

    def commits(self) -> List[Commit]:
        with self._lock:
            return list(self._log)
