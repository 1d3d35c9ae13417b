"""Local on-disk blob repository.

Layout under the repository location:

    objects/<aa>/<rest of sha256>   content-addressed blob bodies
    index.json                      {"sequence": n, "keys": {key: sha256}}
    log.jsonl                       one attributed commit record per line

Writes go to a uniquely named temporary file that is fsynced and renamed
into place, so a reader never sees a half-written object or index. Every
handle on the same location within a process shares one lock; the
repository is not meant to be shared by several processes at once.
"""
from __future__ import annotations
import hashlib
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from threading import Lock, RLock
from typing import Any, Dict, Iterator, List, Optional

from drawing_lib.blobstore.base import BlobInfo, BlobStore, Commit, utc_timestamp
from drawing_lib.errors import BackendError, BlobNotFoundError, RepositoryInitError
from drawing_lib.serializer import JSONSerializer, Serializer

logger = logging.getLogger(__name__)

OBJECTS_DIR = "objects"
INDEX_FILE = "index.json"
LOG_FILE = "log.jsonl"

_location_locks: Dict[Path, RLock] = {}
_location_locks_guard = Lock()


def lock_for(location: Path) -> RLock:
    """Return the process-wide lock for a repository location."""
    key = location.resolve()
    with _location_locks_guard:
        lock = _location_locks.get(key)
        if lock is None:
            lock = _location_locks[key] = RLock()
        return lock


@contextmanager
def _io_errors(operation: str, key: Optional[str] = None) -> Iterator[None]:
    try:
        yield
    except OSError as e:
        raise BackendError(f"I/O failure: {e}", operation=operation, subject=key) from e


class LocalBlobStore(BlobStore):
    def __init__(self, location: str | Path) -> None:
        self.location = Path(location)
        self._lock = lock_for(self.location)
        self._json: Serializer = JSONSerializer(sort_keys=True)

    @property
    def _objects(self) -> Path:
        return self.location / OBJECTS_DIR

    @property
    def _index_path(self) -> Path:
        return self.location / INDEX_FILE

    @property
    def _log_path(self) -> Path:
        return self.location / LOG_FILE

    def _object_path(self, digest: str) -> Path:
        return self._objects / digest[:2] / digest[2:]

    @staticmethod
    def _atomic_write(path: Path, data: bytes) -> None:
        with tempfile.NamedTemporaryFile(dir=path.parent, prefix=path.name + ".", suffix=".tmp", delete=False) as f:
            tmp = Path(f.name)
            try:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            except OSError:
                f.close()
                tmp.unlink(missing_ok=True)
                raise
        try:
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def create_repository(self) -> None:
        with self._lock:
            try:
                self._objects.mkdir(parents=True, exist_ok=True)
                if not self._index_path.exists():
                    self._write_index({"sequence": 0, "keys": {}})
                    logger.info("Initialised blob repository at %s", self.location)
                else:
                    self._read_index()
            except OSError as e:
                raise RepositoryInitError(f"cannot initialise repository: {e}", operation="init", subject=str(self.location)) from e
            except BackendError as e:
                raise RepositoryInitError(str(e), operation="init", subject=str(self.location)) from e

    def _read_index(self) -> Dict[str, Any]:
        try:
            raw = self._index_path.read_bytes()
        except FileNotFoundError:
            raise BackendError("repository is not initialised", subject=str(self.location)) from None
        try:
            index = self._json.load(raw)
        except ValueError as e:
            raise BackendError(f"corrupt index: {e}", subject=str(self._index_path)) from e
        if not isinstance(index, dict) or not isinstance(index.get("keys"), dict):
            raise BackendError("corrupt index: unexpected structure", subject=str(self._index_path))
        return index

    def _write_index(self, index: Dict[str, Any]) -> None:
        self._atomic_write(self._index_path, self._json.dump(index))

    def _store_object(self, content: bytes) -> str:
        digest = hashlib.sha256(content).hexdigest()
        path = self._object_path(digest)
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            self._atomic_write(path, content)
        return digest

    def _commit(self, index: Dict[str, Any], action: str, key: str, actor: str,
                digest: Optional[str] = None, source_key: Optional[str] = None) -> Commit:
        index["sequence"] = int(index.get("sequence", 0)) + 1
        commit = Commit(
            sequence=index["sequence"],
            action=action,
            key=key,
            actor=actor,
            timestamp=utc_timestamp(),
            digest=digest,
            source_key=source_key,
        )
        # the log entry lands first so an applied change is never unattributed
        with open(self._log_path, "ab") as f:
            f.write(self._json.dump(commit.to_dict()) + b"\n")
            f.flush()
            os.fsync(f.fileno())
        self._write_index(index)
        logger.debug("Commit %d: %s %s by %s", commit.sequence, action, key, actor)
        return commit

    def add_blob(self, blob: BlobInfo) -> None:
        with self._lock, _io_errors("add", blob.key):
            index = self._read_index()
            digest = self._store_object(bytes(blob.content))
            index["keys"][blob.key] = digest
            self._commit(index, "add", blob.key, blob.modified_by, digest=digest)

    def get_blob(self, key: str) -> bytes:
        with self._lock, _io_errors("get", key):
            digest = self._read_index()["keys"].get(key)
            if digest is None:
                raise BlobNotFoundError("blob not found", operation="get", subject=key)
            try:
                return self._object_path(digest).read_bytes()
            except FileNotFoundError:
                raise BackendError(f"object {digest} missing from repository", operation="get", subject=key) from None

    def delete_blob(self, key: str, modified_by: str) -> None:
        with self._lock, _io_errors("delete", key):
            index = self._read_index()
            if key not in index["keys"]:
                raise BlobNotFoundError("blob not found", operation="delete", subject=key)
            del index["keys"][key]
            self._commit(index, "delete", key, modified_by)

    def copy_blob(self, source_key: str, destination_key: str, modified_by: str) -> None:
        with self._lock, _io_errors("copy", source_key):
            index = self._read_index()
            digest = index["keys"].get(source_key)
            if digest is None:
                raise BlobNotFoundError("source blob not found", operation="copy", subject=source_key)
            index["keys"][destination_key] = digest
            self._commit(index, "copy", destination_key, modified_by, digest=digest, source_key=source_key)

    def list_blob_keys(self) -> List[str]:
        with self._lock, _io_errors("list"):
            return list(self._read_index()["keys"].keys())

    def commits(self) -> List[Commit]:
        with self._lock, _io_errors("log"):
            if not self._log_path.exists():
                return []
            with open(self._log_path, "rb") as f:
                return [Commit.from_dict(self._json.load(line)) for line in f if line.strip()]
